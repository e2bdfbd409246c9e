"""API routes for store management."""

from fastapi import APIRouter, Depends, Path, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.features.stores.schemas import StoreCreate, StoreResponse, StoreUpdate
from app.features.stores.service import StoreService
from app.shared.schemas import ApiResponse, PaginatedResponse, PaginationParams


router = APIRouter(prefix="/stores", tags=["stores"])


@router.post(
    "",
    response_model=ApiResponse[StoreResponse],
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
    summary="Create a store",
    description="""
Create a new store location.

**Required**: name, address, city, state, zipCode.
**Optional**: phoneNumber (max 20 chars), email (must look like an address).

Returns 400 with per-field details when validation fails.
""",
)
async def create_store(
    payload: StoreCreate,
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[StoreResponse]:
    """Create a store.

    Args:
        payload: Store fields.
        db: Database session.

    Returns:
        The created store.
    """
    service = StoreService(db)
    store = await service.create_store(payload)
    return ApiResponse(data=store, message="Store created successfully")


@router.get(
    "",
    response_model=PaginatedResponse[StoreResponse],
    summary="List stores",
    description="""
List stores with pagination and filtering.

**Filtering Options**:
- `city`: Case-insensitive partial match on city
- `state`: Case-insensitive partial match on state
- `search`: Case-insensitive partial match on name or address

**Pagination**: `page` (1-indexed, default 1) and `limit` (default 10, max 100).
Pagination details are returned in `meta`.
""",
)
async def list_stores(
    db: AsyncSession = Depends(get_db),
    page: int = Query(1, ge=1, description="Page number (1-indexed)"),
    limit: int = Query(10, ge=1, le=100, description="Stores per page (max 100)"),
    city: str | None = Query(None, description="Filter by city (partial match)"),
    state: str | None = Query(None, description="Filter by state (partial match)"),
    search: str | None = Query(None, description="Search in name and address"),
) -> PaginatedResponse[StoreResponse]:
    """List stores with pagination and filtering."""
    service = StoreService(db)
    return await service.list_stores(
        PaginationParams(page=page, limit=limit),
        city=city,
        state=state,
        search=search,
    )


@router.get(
    "/{id}",
    response_model=ApiResponse[StoreResponse],
    response_model_exclude_none=True,
    summary="Get store by ID",
    description="Returns 404 if the store does not exist.",
)
async def get_store(
    store_id: int = Path(..., alias="id", gt=0, description="Store ID"),
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[StoreResponse]:
    """Get store details by ID."""
    service = StoreService(db)
    store = await service.get_store(store_id)
    return ApiResponse(data=store)


@router.put(
    "/{id}",
    response_model=ApiResponse[StoreResponse],
    response_model_exclude_none=True,
    summary="Update a store",
    description="""
Partially update a store. Fields omitted from the body keep their values.

Returns 404 if the store does not exist.
""",
)
async def update_store(
    payload: StoreUpdate,
    store_id: int = Path(..., alias="id", gt=0, description="Store ID"),
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[StoreResponse]:
    """Update store fields."""
    service = StoreService(db)
    store = await service.update_store(store_id, payload)
    return ApiResponse(data=store, message="Store updated successfully")


@router.delete(
    "/{id}",
    response_model=ApiResponse[None],
    response_model_exclude_none=True,
    summary="Delete a store",
    description="""
Delete a store. Its products and their sales records are deleted with it.

Returns 404 if the store does not exist.
""",
)
async def delete_store(
    store_id: int = Path(..., alias="id", gt=0, description="Store ID"),
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[None]:
    """Delete a store and everything it owns."""
    service = StoreService(db)
    await service.delete_store(store_id)
    return ApiResponse(message="Store deleted successfully")
