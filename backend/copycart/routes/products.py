"""
CopyCart Backend — Product Route Handlers
===========================================

What:  GET /products (list all) and POST /products (create).
How:   Thin handlers: pull the body, delegate to ProductService, return
       schemas. Errors propagate to the global handlers in main.py.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from copycart.database import get_db_session
from copycart.schemas.product import ErrorResponse, ProductCreate, ProductResponse
from copycart.services.product_service import product_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Products"])


@router.get(
    "/products",
    response_model=List[ProductResponse],
    responses={
        500: {"description": "Store failure", "model": ErrorResponse},
    },
    summary="List all products, newest first",
)
async def list_products(
    db: AsyncSession = Depends(get_db_session),
) -> List[ProductResponse]:
    return await product_service.list_products(db)


@router.post(
    "/products",
    status_code=201,
    response_model=ProductResponse,
    responses={
        201: {"description": "Product created", "model": ProductResponse},
        500: {"description": "Missing required field or store failure", "model": ErrorResponse},
    },
    summary="Create a product",
    description=(
        "Stores a product. `rating` and `createdAt` are filled in by the store. "
        "A missing name, title or description is reported as a 500 error."
    ),
)
async def create_product(
    body: ProductCreate,
    db: AsyncSession = Depends(get_db_session),
) -> ProductResponse:
    return await product_service.create_product(
        db=db,
        name=body.name,
        title=body.title,
        description=body.description,
        image_url=body.image_url,
    )
