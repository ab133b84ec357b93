"""SQLAlchemy ORM model for shopping cart lines."""

from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Integer, UniqueConstraint
from sqlalchemy.orm import relationship

from .base import Base, utcnow


class ShoppingCartItemModel(Base):
    """
    One cart line per (business entity, product).

    A row never holds quantity 0: reaching 0 deletes the row.
    """

    __tablename__ = "shopping_cart_items"

    transaction_id = Column(Integer, primary_key=True, autoincrement=True)
    business_entity_id = Column(
        Integer, ForeignKey("business_entities.business_entity_id"), nullable=False, index=True
    )
    product_id = Column(Integer, ForeignKey("products.product_id"), nullable=False)
    quantity = Column(Integer, nullable=False, default=1)
    date_created = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    modified_date = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    product = relationship("ProductModel", lazy="raise")

    __table_args__ = (
        UniqueConstraint(
            "business_entity_id", "product_id", name="uq_shopping_cart_items_owner_product"
        ),
        CheckConstraint("quantity > 0", name="ck_shopping_cart_items_quantity_positive"),
    )

    def __repr__(self):
        return (
            f"<ShoppingCartItemModel(id={self.transaction_id}, owner={self.business_entity_id}, "
            f"product={self.product_id}, quantity={self.quantity})>"
        )
