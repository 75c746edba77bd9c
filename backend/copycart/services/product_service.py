"""
CopyCart Backend — Product Service
====================================

What:  Create and list operations over the `products` table.
How:   Builds Product ORM objects (whose validators enforce required fields),
       flushes them through the request's AsyncSession, and maps rows to
       ProductResponse schemas.
Who:   Called by the /products route handlers.

Error Handling:
    ValidationError raised by the model propagates unchanged. Any other
    failure is logged and wrapped in StoreError with a generic message; the
    driver error text goes to `details`.
"""

import logging
from typing import List, Optional

from sqlalchemy import desc, select
from sqlalchemy.ext.asyncio import AsyncSession

from copycart.exceptions import StoreError, ValidationError
from copycart.models.product import Product
from copycart.schemas.product import ProductResponse

logger = logging.getLogger(__name__)


def to_response(product: Product) -> ProductResponse:
    return ProductResponse(
        id=product.id,
        name=product.name,
        title=product.title,
        description=product.description,
        image_url=product.image_url,
        rating=product.rating,
        created_at=product.created_at,
    )


class ProductService:
    """
    Stateless business logic for products.

    The session is passed per call so each request keeps its own
    transaction; commit happens in `get_db_session`.
    """

    async def list_products(self, db: AsyncSession) -> List[ProductResponse]:
        """
        Return every product, newest first.

        Query plan:
            SELECT * FROM products ORDER BY created_at DESC

        Raises:
            StoreError: the query failed
        """
        try:
            result = await db.execute(select(Product).order_by(desc(Product.created_at)))
            products = list(result.scalars().all())
        except Exception as e:
            logger.error("Database error listing products: %s", str(e), exc_info=True)
            raise StoreError(
                message="Error fetching products",
                details=str(e),
                context={"error_type": type(e).__name__},
            )

        return [to_response(product) for product in products]

    async def create_product(
        self,
        db: AsyncSession,
        name: Optional[str],
        title: Optional[str],
        description: Optional[str],
        image_url: Optional[str] = None,
    ) -> ProductResponse:
        """
        Persist a new product and return it with its generated fields.

        Args:
            db: Async database session
            name: Product name, trimmed by the model
            title: Listing title
            description: Listing description
            image_url: Optional image URI

        Returns:
            ProductResponse including id, rating and created_at

        Raises:
            ValidationError: name, title or description missing or empty
            StoreError: the insert failed
        """
        try:
            product = Product(
                name=name,
                title=title,
                description=description,
                image_url=image_url,
            )
            db.add(product)
            # Flush runs the column defaults and surfaces constraint errors here
            await db.flush()
        except ValidationError as e:
            logger.warning("Rejected product: %s", e.details)
            raise
        except Exception as e:
            logger.error("Database error adding product: %s", str(e), exc_info=True)
            raise StoreError(
                message="Error adding product",
                details=str(e),
                context={"error_type": type(e).__name__},
            )

        logger.info("Product created: %s (rating=%.1f)", product.id, product.rating)
        return to_response(product)


product_service = ProductService()
