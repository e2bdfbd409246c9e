"""API routes for product management.

Static paths (``/low-stock``, ``/bulk-update-stock``) are declared before
``/{id}`` so they are not captured as product IDs.
"""

from decimal import Decimal

from fastapi import APIRouter, Body, Depends, Path, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import get_settings
from app.core.database import get_db
from app.features.products.schemas import (
    BulkStockUpdate,
    ProductCreate,
    ProductResponse,
    ProductSortField,
    ProductUpdate,
    SortOrder,
)
from app.features.products.service import ProductService
from app.shared.schemas import ApiResponse, PaginatedResponse, PaginationParams


router = APIRouter(prefix="/products", tags=["products"])
store_products_router = APIRouter(prefix="/stores", tags=["products"])


# =============================================================================
# Collection Endpoints
# =============================================================================


@router.post(
    "",
    response_model=ApiResponse[ProductResponse],
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
    summary="Create a product",
    description="""
Create a product in an existing store.

**Required**: storeId, name, category, price (max 2 decimal places), sku.
**Optional**: description, quantityInStock (default 0, never negative).

Returns 404 if `storeId` does not reference an existing store.
""",
)
async def create_product(
    payload: ProductCreate,
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[ProductResponse]:
    """Create a product."""
    service = ProductService(db)
    product = await service.create_product(payload)
    return ApiResponse(data=product, message="Product created successfully")


@router.get(
    "",
    response_model=PaginatedResponse[ProductResponse],
    summary="List products",
    description="""
List products across all stores.

**Filtering Options**:
- `storeId`: Products of one store
- `category`: Case-insensitive partial match
- `minPrice` / `maxPrice`: Inclusive price range
- `minStock` / `maxStock`: Inclusive stock range
- `search`: Partial match on name, description or SKU

**Sorting**: `sortBy` one of name, price, quantityInStock, createdAt
(default createdAt) and `sortOrder` asc or desc (default desc).
""",
)
async def list_products(
    db: AsyncSession = Depends(get_db),
    page: int = Query(1, ge=1, description="Page number (1-indexed)"),
    limit: int = Query(10, ge=1, le=100, description="Products per page (max 100)"),
    store_id: int | None = Query(None, alias="storeId", gt=0, description="Filter by store"),
    category: str | None = Query(None, description="Filter by category (partial match)"),
    min_price: Decimal | None = Query(None, alias="minPrice", ge=0),
    max_price: Decimal | None = Query(None, alias="maxPrice", ge=0),
    min_stock: int | None = Query(None, alias="minStock", ge=0),
    max_stock: int | None = Query(None, alias="maxStock", ge=0),
    search: str | None = Query(None, description="Search in name, description and SKU"),
    sort_by: ProductSortField = Query(ProductSortField.CREATED_AT, alias="sortBy"),
    sort_order: SortOrder = Query(SortOrder.DESC, alias="sortOrder"),
) -> PaginatedResponse[ProductResponse]:
    """List products with filtering, sorting and pagination."""
    service = ProductService(db)
    return await service.list_products(
        PaginationParams(page=page, limit=limit),
        store_id=store_id,
        category=category,
        min_price=min_price,
        max_price=max_price,
        min_stock=min_stock,
        max_stock=max_stock,
        search=search,
        sort_by=sort_by,
        sort_order=sort_order,
    )


@router.get(
    "/low-stock",
    response_model=ApiResponse[list[ProductResponse]],
    response_model_exclude_none=True,
    summary="List low-stock products",
    description="""
Products whose `quantityInStock` is at or below `threshold` (default 10),
lowest stock first. `meta` carries the threshold and the result count.
""",
)
async def get_low_stock_products(
    db: AsyncSession = Depends(get_db),
    threshold: int | None = Query(None, ge=0, description="Stock threshold (inclusive)"),
) -> ApiResponse[list[ProductResponse]]:
    """List products at or below the stock threshold."""
    if threshold is None:
        threshold = get_settings().low_stock_threshold
    service = ProductService(db)
    products = await service.get_low_stock(threshold)
    return ApiResponse(data=products, meta={"threshold": threshold, "count": len(products)})


@router.patch(
    "/bulk-update-stock",
    response_model=ApiResponse[list[ProductResponse]],
    response_model_exclude_none=True,
    summary="Bulk update stock levels",
    description="""
Set `quantityInStock` for several products in a single transaction.

Body: `{"products": [{"id": 1, "quantityInStock": 0}, ...]}` (a bare list is
also accepted). Unknown IDs are skipped. If any write fails, none are applied.
""",
)
async def bulk_update_stock(
    payload: BulkStockUpdate = Body(...),
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[list[ProductResponse]]:
    """Apply several stock updates atomically."""
    service = ProductService(db)
    products = await service.bulk_update_stock(payload.products)
    return ApiResponse(
        data=products,
        message=f"{len(products)} products updated successfully",
    )


# =============================================================================
# Item Endpoints
# =============================================================================


@router.get(
    "/{id}",
    response_model=ApiResponse[ProductResponse],
    response_model_exclude_none=True,
    summary="Get product by ID",
    description="Returns 404 if the product does not exist.",
)
async def get_product(
    product_id: int = Path(..., alias="id", gt=0, description="Product ID"),
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[ProductResponse]:
    """Get product details by ID."""
    service = ProductService(db)
    product = await service.get_product(product_id)
    return ApiResponse(data=product)


@router.put(
    "/{id}",
    response_model=ApiResponse[ProductResponse],
    response_model_exclude_none=True,
    summary="Update a product",
    description="""
Partially update a product. The owning store cannot be changed.

Returns 404 if the product does not exist.
""",
)
async def update_product(
    payload: ProductUpdate,
    product_id: int = Path(..., alias="id", gt=0, description="Product ID"),
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[ProductResponse]:
    """Update product fields."""
    service = ProductService(db)
    product = await service.update_product(product_id, payload)
    return ApiResponse(data=product, message="Product updated successfully")


@router.delete(
    "/{id}",
    response_model=ApiResponse[None],
    response_model_exclude_none=True,
    summary="Delete a product",
    description="Delete a product and its sales records. Returns 404 if it does not exist.",
)
async def delete_product(
    product_id: int = Path(..., alias="id", gt=0, description="Product ID"),
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[None]:
    """Delete a product."""
    service = ProductService(db)
    await service.delete_product(product_id)
    return ApiResponse(message="Product deleted successfully")


# =============================================================================
# Store-scoped Endpoints
# =============================================================================


@store_products_router.get(
    "/{storeId}/products",
    response_model=PaginatedResponse[ProductResponse],
    summary="List products of a store",
    description="""
Products owned by one store, with the same filters and sorting as
`GET /products`. Returns 404 if the store does not exist.
""",
)
async def list_store_products(
    store_id: int = Path(..., alias="storeId", gt=0, description="Store ID"),
    db: AsyncSession = Depends(get_db),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    category: str | None = Query(None),
    min_price: Decimal | None = Query(None, alias="minPrice", ge=0),
    max_price: Decimal | None = Query(None, alias="maxPrice", ge=0),
    min_stock: int | None = Query(None, alias="minStock", ge=0),
    max_stock: int | None = Query(None, alias="maxStock", ge=0),
    search: str | None = Query(None),
    sort_by: ProductSortField = Query(ProductSortField.CREATED_AT, alias="sortBy"),
    sort_order: SortOrder = Query(SortOrder.DESC, alias="sortOrder"),
) -> PaginatedResponse[ProductResponse]:
    """List one store's products."""
    service = ProductService(db)
    return await service.list_store_products(
        store_id,
        PaginationParams(page=page, limit=limit),
        category=category,
        min_price=min_price,
        max_price=max_price,
        min_stock=min_stock,
        max_stock=max_stock,
        search=search,
        sort_by=sort_by,
        sort_order=sort_order,
    )
