"""Test doubles and seed data shared by the test suite."""

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import Dict

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import async_sessionmaker

from core.application.interfaces import IClock, IHashFunction
from core.data.models import (
    AddressTypeModel,
    BusinessEntityModel,
    ProductCategoryModel,
    ProductDescriptionModel,
    ProductModel,
    ProductPhotoModel,
    ProductProductPhotoModel,
    ProductSubcategoryModel,
    StateProvinceModel,
)


# Use in-memory SQLite for testing
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

FIXED_NOW = datetime(2024, 7, 1, 12, 0, tzinfo=timezone.utc)


class FakeHashFunction(IHashFunction):
    """Deterministic, fast stand-in for PBKDF2."""

    def __init__(self):
        self._counter = 0

    def salt(self) -> str:
        self._counter += 1
        return f"salt{self._counter}"

    def hash(self, plaintext: str, salt: str) -> str:
        return f"{salt}${plaintext[::-1]}"


class FakeClock(IClock):
    def __init__(self, now: datetime = FIXED_NOW):
        self._now = now

    def now(self) -> datetime:
        return self._now

    def advance(self, **kwargs) -> None:
        self._now += timedelta(**kwargs)


@dataclass
class Catalog:
    """IDs of the seeded catalog rows, keyed by short name."""

    categories: Dict[str, int] = field(default_factory=dict)
    subcategories: Dict[str, int] = field(default_factory=dict)
    products: Dict[str, int] = field(default_factory=dict)
    state_province_id: int = 0
    address_type_id: int = 0


# key: (name, color, standard_cost, list_price, subcategory key, created_at)
PRODUCT_ROWS = {
    "mountain_black": ("Mountain-100 Black", "Black", "100", "200", "mountain", datetime(2024, 1, 1)),
    "mountain_red": ("Mountain-200 Red", "Red", "80", "150", "mountain", datetime(2024, 2, 1)),
    "road_red": ("Road-150 Red", "Red", "120", "250", "road", datetime(2024, 3, 1)),
    "jersey": ("Long-Sleeve Jersey", "Multi", "8", "10", "jersey", datetime(2024, 4, 1)),
    "road_silver": ("Road-250 Silver", "Silver", "90", "180", "road", datetime(2024, 5, 1)),
    "socks": ("Racing Socks", None, "3", "5", "jersey", datetime(2024, 6, 1)),
    # Never listed: no cost, no subcategory
    "free_bike": ("Mountain-000 Free", "Black", "0", "0", "mountain", datetime(2023, 1, 1)),
    "loose_part": ("Loose Part", "Silver", "5", "10", None, datetime(2023, 1, 1)),
}

# Products every default listing returns
LISTED_PRODUCTS = {"mountain_black", "mountain_red", "road_red", "jersey", "road_silver", "socks"}

PHOTO_BYTES = b"\x89PNG\r\n\x1a\nmountain-black"


async def seed_catalog(session_factory: async_sessionmaker) -> Catalog:
    """Insert categories, subcategories, products and reference data."""
    catalog = Catalog()

    async with session_factory() as session:
        async with session.begin():
            bikes = ProductCategoryModel(name="Bikes")
            clothing = ProductCategoryModel(name="Clothing")
            session.add_all([bikes, clothing])
            await session.flush()
            catalog.categories = {
                "bikes": bikes.product_category_id,
                "clothing": clothing.product_category_id,
            }

            subcategories = {
                "mountain": ProductSubcategoryModel(
                    name="Mountain Bikes", product_category_id=bikes.product_category_id
                ),
                "road": ProductSubcategoryModel(
                    name="Road Bikes", product_category_id=bikes.product_category_id
                ),
                "jersey": ProductSubcategoryModel(
                    name="Jerseys", product_category_id=clothing.product_category_id
                ),
            }
            session.add_all(subcategories.values())
            await session.flush()
            catalog.subcategories = {
                key: sub.product_subcategory_id for key, sub in subcategories.items()
            }

            products = {}
            for key, (name, color, cost, price, sub_key, created_at) in PRODUCT_ROWS.items():
                products[key] = ProductModel(
                    name=name,
                    color=color,
                    standard_cost=Decimal(cost),
                    list_price=Decimal(price),
                    product_subcategory_id=catalog.subcategories[sub_key] if sub_key else None,
                    product_class="H",
                    style="U",
                    size="M",
                    created_at=created_at,
                )
            session.add_all(products.values())
            await session.flush()
            catalog.products = {key: product.product_id for key, product in products.items()}

            photo = ProductPhotoModel(large_photo=PHOTO_BYTES, large_photo_file_name="mb.png")
            session.add(photo)
            await session.flush()
            session.add(
                ProductProductPhotoModel(
                    product_id=catalog.products["mountain_black"],
                    product_photo_id=photo.product_photo_id,
                    primary=True,
                )
            )
            session.add(
                ProductDescriptionModel(
                    product_id=catalog.products["mountain_black"],
                    description="Sturdy hardtail for any trail.",
                )
            )

            state = StateProvinceModel(state_province_code="WA", name="Washington")
            home = AddressTypeModel(name="Home")
            session.add_all([state, home, AddressTypeModel(name="Shipping")])
            await session.flush()
            catalog.state_province_id = state.state_province_id
            catalog.address_type_id = home.address_type_id

    return catalog


async def seed_business_entity(session_factory: async_sessionmaker) -> int:
    """Insert a bare BusinessEntity row (cart owner)."""
    async with session_factory() as session:
        async with session.begin():
            entity = BusinessEntityModel()
            session.add(entity)
            await session.flush()
            return entity.business_entity_id


async def count_rows(session_factory: async_sessionmaker, model) -> int:
    async with session_factory() as session:
        return await session.scalar(select(func.count()).select_from(model))


