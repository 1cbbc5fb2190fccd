"""
Product Catalog Backend: Product SQLAlchemy Model
=================================================

What:  ORM model representing the `products` table.
Who:   Used by SqlProductStore for every statement and by init_models() to
       create the table.

Table Design:
    - Integer autoincrement primary key, assigned by SQLite on insert
    - Every other column is nullable free-form text, except price (REAL)
    - No indexes beyond the primary key, no foreign keys
"""

from typing import Optional

from sqlalchemy import Float, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base

# Columns overwritten by create and update, in table order
PRODUCT_FIELDS = (
    "name",
    "season",
    "image_url",
    "eng_description",
    "thai_description",
    "short_description",
    "price",
    "caution",
    "source",
)


class Product(Base):
    """
    A catalog item.

    Lifecycle:
        1. Created by POST /products (id assigned by the database)
        2. Overwritten in full by PUT /products/{id}; omitted fields become NULL
        3. Removed by DELETE /products/{id}; there is no soft delete
    """

    __tablename__ = "products"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    name: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    season: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # Relative path under the upload prefix, or an absolute URL
    image_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    eng_description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    thai_description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    short_description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    price: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    caution: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    source: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    def __repr__(self) -> str:
        return f"<Product(id={self.id}, name='{self.name}')>"
