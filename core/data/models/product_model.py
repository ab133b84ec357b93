"""SQLAlchemy ORM models for the product catalog."""

from sqlalchemy import (
    Boolean, Column, DateTime, ForeignKey, Integer, LargeBinary, Numeric, String
)
from sqlalchemy.orm import relationship

from .base import Base, utcnow


class ProductCategoryModel(Base):
    """Top-level catalog category."""

    __tablename__ = "product_categories"

    product_category_id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(50), nullable=False)
    modified_date = Column(DateTime(timezone=True), nullable=False, default=utcnow)


class ProductSubcategoryModel(Base):
    """Catalog subcategory, child of a category."""

    __tablename__ = "product_subcategories"

    product_subcategory_id = Column(Integer, primary_key=True, autoincrement=True)
    product_category_id = Column(
        Integer, ForeignKey("product_categories.product_category_id"), nullable=False, index=True
    )
    name = Column(String(50), nullable=False)
    modified_date = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    category = relationship("ProductCategoryModel", lazy="raise")


class ProductPhotoModel(Base):
    """Photo blobs."""

    __tablename__ = "product_photos"

    product_photo_id = Column(Integer, primary_key=True, autoincrement=True)
    thumbnail_photo = Column(LargeBinary, nullable=True)
    large_photo = Column(LargeBinary, nullable=True)
    large_photo_file_name = Column(String(50), nullable=True)
    modified_date = Column(DateTime(timezone=True), nullable=False, default=utcnow)


class ProductProductPhotoModel(Base):
    """Join row between Product and ProductPhoto."""

    __tablename__ = "product_product_photos"

    product_id = Column(Integer, ForeignKey("products.product_id"), primary_key=True)
    product_photo_id = Column(
        Integer, ForeignKey("product_photos.product_photo_id"), primary_key=True
    )
    primary = Column(Boolean, nullable=False, default=False)

    photo = relationship("ProductPhotoModel", lazy="raise")


class ProductDescriptionModel(Base):
    """Localized marketing description of a product."""

    __tablename__ = "product_descriptions"

    product_description_id = Column(Integer, primary_key=True, autoincrement=True)
    product_id = Column(Integer, ForeignKey("products.product_id"), nullable=False, index=True)
    culture_id = Column(String(6), nullable=False, default="en")
    description = Column(String(400), nullable=False)


class ProductModel(Base):
    """Sellable product."""

    __tablename__ = "products"

    product_id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(50), nullable=False, index=True)
    product_number = Column(String(25), nullable=True)
    color = Column(String(15), nullable=True)
    standard_cost = Column(Numeric(19, 4), nullable=False, default=0)
    list_price = Column(Numeric(19, 4), nullable=False, default=0)
    size = Column(String(5), nullable=True)
    # H = High, M = Medium, L = Low
    product_class = Column("class", String(2), nullable=True)
    # W = Womens, M = Mens, U = Universal
    style = Column(String(2), nullable=True)
    product_subcategory_id = Column(
        Integer, ForeignKey("product_subcategories.product_subcategory_id"), nullable=True, index=True
    )
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    modified_date = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    subcategory = relationship("ProductSubcategoryModel", lazy="raise")
    photos = relationship("ProductProductPhotoModel", lazy="raise")
    descriptions = relationship("ProductDescriptionModel", lazy="raise")

    def __repr__(self):
        return f"<ProductModel(id={self.product_id}, name={self.name})>"
