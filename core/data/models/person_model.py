"""SQLAlchemy ORM models for the user aggregate (BusinessEntity root)."""

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String

from .base import Base, new_rowguid, utcnow


class BusinessEntityModel(Base):
    """Root identity row every person/address/credential row points to."""

    __tablename__ = "business_entities"

    business_entity_id = Column(Integer, primary_key=True, autoincrement=True)
    rowguid = Column(String(36), nullable=False, default=new_rowguid, unique=True)
    modified_date = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    def __repr__(self):
        return f"<BusinessEntityModel(id={self.business_entity_id})>"


class PersonModel(Base):
    """Profile fields, one-to-one with BusinessEntity."""

    __tablename__ = "persons"

    business_entity_id = Column(
        Integer, ForeignKey("business_entities.business_entity_id"), primary_key=True
    )
    person_type = Column(String(2), nullable=False, default="IN")
    name_style = Column(Boolean, nullable=False, default=False)
    title = Column(String(8), nullable=True)
    first_name = Column(String(50), nullable=False)
    middle_name = Column(String(50), nullable=True)
    last_name = Column(String(50), nullable=False)
    email_promotion = Column(Integer, nullable=False, default=0)
    rowguid = Column(String(36), nullable=False, default=new_rowguid)
    modified_date = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    def __repr__(self):
        return f"<PersonModel(id={self.business_entity_id}, name={self.first_name} {self.last_name})>"


class EmailAddressModel(Base):
    """Login email of a user."""

    __tablename__ = "email_addresses"

    email_address_id = Column(Integer, primary_key=True, autoincrement=True)
    business_entity_id = Column(
        Integer, ForeignKey("business_entities.business_entity_id"), nullable=False, index=True
    )
    email_address = Column(String(50), nullable=True, index=True)
    rowguid = Column(String(36), nullable=False, default=new_rowguid)
    modified_date = Column(DateTime(timezone=True), nullable=False, default=utcnow)


class PasswordModel(Base):
    """Credential row: opaque hash and salt produced by the hash function."""

    __tablename__ = "passwords"

    business_entity_id = Column(
        Integer, ForeignKey("business_entities.business_entity_id"), primary_key=True
    )
    password_hash = Column(String(128), nullable=False)
    password_salt = Column(String(10), nullable=False)
    rowguid = Column(String(36), nullable=False, default=new_rowguid)
    modified_date = Column(DateTime(timezone=True), nullable=False, default=utcnow)


class StateProvinceModel(Base):
    """Reference table for address dropdowns."""

    __tablename__ = "state_provinces"

    state_province_id = Column(Integer, primary_key=True, autoincrement=True)
    state_province_code = Column(String(3), nullable=False)
    name = Column(String(50), nullable=False)
    modified_date = Column(DateTime(timezone=True), nullable=False, default=utcnow)


class AddressTypeModel(Base):
    """Reference table (Home, Billing, Shipping, ...)."""

    __tablename__ = "address_types"

    address_type_id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(50), nullable=False)
    modified_date = Column(DateTime(timezone=True), nullable=False, default=utcnow)


class AddressModel(Base):
    """Postal address, independently keyed."""

    __tablename__ = "addresses"

    address_id = Column(Integer, primary_key=True, autoincrement=True)
    address_line1 = Column(String(60), nullable=False)
    address_line2 = Column(String(60), nullable=True)
    city = Column(String(30), nullable=False)
    state_province_id = Column(
        Integer, ForeignKey("state_provinces.state_province_id"), nullable=False
    )
    postal_code = Column(String(15), nullable=False)
    rowguid = Column(String(36), nullable=False, default=new_rowguid)
    modified_date = Column(DateTime(timezone=True), nullable=False, default=utcnow)


class BusinessEntityAddressModel(Base):
    """Join row between BusinessEntity and Address."""

    __tablename__ = "business_entity_addresses"

    business_entity_id = Column(
        Integer, ForeignKey("business_entities.business_entity_id"), primary_key=True
    )
    address_id = Column(Integer, ForeignKey("addresses.address_id"), primary_key=True)
    address_type_id = Column(
        Integer, ForeignKey("address_types.address_type_id"), nullable=False
    )
    rowguid = Column(String(36), nullable=False, default=new_rowguid)
    modified_date = Column(DateTime(timezone=True), nullable=False, default=utcnow)
