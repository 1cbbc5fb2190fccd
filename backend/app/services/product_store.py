"""
Product Catalog Backend: Record Store
=====================================

What:  Read/write access to the `products` table.
How:   `ProductStore` is the abstract contract the routes depend on;
       `SqlProductStore` implements it with one SQLAlchemy statement per
       operation against an injected AsyncSession.
Who:   Injected into product route handlers through `get_product_store`.

Error Contract:
    - get_product() raises NotFoundError when no row matches
    - Every SQLAlchemy failure is logged and re-raised as DatabaseError,
      carrying the driver's message
    - update_product() and delete_product() report a zero-row match as 0;
      they never raise NotFoundError

Alternative implementations (an in-memory double for tests, another
database) subclass ProductStore and are swapped in with
`app.dependency_overrides[get_product_store]`.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List

from fastapi import Depends
from sqlalchemy import delete, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db_session
from app.exceptions import DatabaseError, NotFoundError
from app.models.product import PRODUCT_FIELDS, Product

logger = logging.getLogger(__name__)


def _driver_message(exc: SQLAlchemyError) -> str:
    """The underlying DBAPI message when there is one, else SQLAlchemy's."""
    orig = getattr(exc, "orig", None)
    return str(orig) if orig is not None else str(exc)


class ProductStore(ABC):
    """
    Abstract interface over the products table.

    Contract:
        - Each operation is a single atomic statement
        - `fields` mappings hold the writable columns (see PRODUCT_FIELDS);
          unknown keys are dropped, missing keys are written as NULL
    """

    @abstractmethod
    async def list_products(self) -> List[Product]:
        """Every product in storage order."""

    @abstractmethod
    async def get_product(self, product_id: int) -> Product:
        """The product with `product_id`; NotFoundError if absent."""

    @abstractmethod
    async def create_product(self, fields: Dict[str, Any]) -> Product:
        """Insert a product and return it with its assigned id."""

    @abstractmethod
    async def update_product(self, product_id: int, fields: Dict[str, Any]) -> int:
        """Overwrite every writable column; returns affected-row count."""

    @abstractmethod
    async def delete_product(self, product_id: int) -> int:
        """Remove the product; returns affected-row count."""


def writable_fields(fields: Dict[str, Any]) -> Dict[str, Any]:
    """Full column mapping for an insert or overwrite."""
    return {name: fields.get(name) for name in PRODUCT_FIELDS}


class SqlProductStore(ProductStore):
    """
    ProductStore backed by an async SQLAlchemy session.

    Writes are committed immediately, so a product created in one request
    is visible to the next one regardless of when the session is closed.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_products(self) -> List[Product]:
        try:
            result = await self.db.execute(select(Product).order_by(Product.id))
            return list(result.scalars().all())
        except SQLAlchemyError as e:
            logger.error("Database error listing products: %s", e)
            raise DatabaseError(
                message=_driver_message(e),
                context={"operation": "list"},
            ) from e

    async def get_product(self, product_id: int) -> Product:
        try:
            result = await self.db.execute(
                select(Product).where(Product.id == product_id)
            )
            product = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Database error fetching product %s: %s", product_id, e)
            raise DatabaseError(
                message=_driver_message(e),
                context={"operation": "get", "product_id": product_id},
            ) from e

        if product is None:
            raise NotFoundError(resource="product", resource_id=str(product_id))
        return product

    async def create_product(self, fields: Dict[str, Any]) -> Product:
        product = Product(**writable_fields(fields))
        try:
            self.db.add(product)
            await self.db.flush()  # assigns the autoincrement id
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error("Database error creating product: %s", e)
            raise DatabaseError(
                message=_driver_message(e),
                context={"operation": "create"},
            ) from e

        logger.info("Product created: id=%s name=%r", product.id, product.name)
        return product

    async def update_product(self, product_id: int, fields: Dict[str, Any]) -> int:
        try:
            result = await self.db.execute(
                update(Product)
                .where(Product.id == product_id)
                .values(**writable_fields(fields))
            )
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error("Database error updating product %s: %s", product_id, e)
            raise DatabaseError(
                message=_driver_message(e),
                context={"operation": "update", "product_id": product_id},
            ) from e

        changes = result.rowcount
        logger.info("Product %s updated: %d row(s) changed", product_id, changes)
        return changes

    async def delete_product(self, product_id: int) -> int:
        try:
            result = await self.db.execute(
                delete(Product).where(Product.id == product_id)
            )
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error("Database error deleting product %s: %s", product_id, e)
            raise DatabaseError(
                message=_driver_message(e),
                context={"operation": "delete", "product_id": product_id},
            ) from e

        changes = result.rowcount
        logger.info("Product %s deleted: %d row(s) removed", product_id, changes)
        return changes


# ── Dependency ────────────────────────────────────────────────────────────
async def get_product_store(
    db: AsyncSession = Depends(get_db_session),
) -> ProductStore:
    """FastAPI dependency: a SqlProductStore bound to the request's session."""
    return SqlProductStore(db)
