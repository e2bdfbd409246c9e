"""Service layer for store CRUD operations."""

from sqlalchemy import delete, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import NotFoundError
from app.core.logging import get_logger
from app.features.data_platform.models import Store
from app.features.stores.schemas import StoreCreate, StoreResponse, StoreUpdate
from app.shared.schemas import PaginatedResponse, PaginationParams
from app.shared.utils import paginate_response

logger = get_logger(__name__)


class StoreService:
    """Service for creating, listing, updating and deleting stores.

    The session is injected per request; commit/rollback is owned by the
    session dependency.
    """

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def _get_or_404(self, store_id: int) -> Store:
        store = await self.db.get(Store, store_id)
        if store is None:
            raise NotFoundError("Store not found", details={"store_id": store_id})
        return store

    async def create_store(self, data: StoreCreate) -> StoreResponse:
        """Insert a new store.

        Args:
            data: Validated store fields.

        Returns:
            The created store.
        """
        store = Store(**data.model_dump())
        self.db.add(store)
        await self.db.flush()
        await self.db.refresh(store)

        logger.info("stores.created", store_id=store.id, name=store.name)
        return StoreResponse.model_validate(store)

    async def list_stores(
        self,
        pagination: PaginationParams,
        city: str | None = None,
        state: str | None = None,
        search: str | None = None,
    ) -> PaginatedResponse[StoreResponse]:
        """List stores with pagination and filtering.

        Args:
            pagination: Page and limit.
            city: Case-insensitive substring match on city.
            state: Case-insensitive substring match on state.
            search: Case-insensitive substring match on name or address.

        Returns:
            One page of stores with pagination metadata.
        """
        stmt = select(Store)

        if city:
            stmt = stmt.where(Store.city.ilike(f"%{city}%"))
        if state:
            stmt = stmt.where(Store.state.ilike(f"%{state}%"))
        if search:
            pattern = f"%{search}%"
            stmt = stmt.where(or_(Store.name.ilike(pattern), Store.address.ilike(pattern)))

        count_stmt = select(func.count()).select_from(stmt.subquery())
        total = (await self.db.execute(count_stmt)).scalar_one()

        stmt = stmt.order_by(Store.id).offset(pagination.offset).limit(pagination.limit)
        stores = (await self.db.execute(stmt)).scalars().all()

        logger.info(
            "stores.listed",
            total=total,
            page=pagination.page,
            limit=pagination.limit,
            filters={"city": city, "state": state, "search": search},
        )

        return paginate_response(
            [StoreResponse.model_validate(store) for store in stores],
            total,
            pagination,
        )

    async def get_store(self, store_id: int) -> StoreResponse:
        """Get a single store by ID.

        Raises:
            NotFoundError: If the store does not exist.
        """
        store = await self._get_or_404(store_id)
        return StoreResponse.model_validate(store)

    async def update_store(self, store_id: int, data: StoreUpdate) -> StoreResponse:
        """Apply a partial update to a store.

        Raises:
            NotFoundError: If the store does not exist.
        """
        store = await self._get_or_404(store_id)
        changes = data.model_dump(exclude_unset=True)
        for field, value in changes.items():
            setattr(store, field, value)
        store.updated_at = func.now()

        await self.db.flush()
        await self.db.refresh(store)

        logger.info("stores.updated", store_id=store_id, fields=sorted(changes))
        return StoreResponse.model_validate(store)

    async def delete_store(self, store_id: int) -> None:
        """Delete a store together with its products and their sales.

        Raises:
            NotFoundError: If the store does not exist.
        """
        stmt = delete(Store).where(Store.id == store_id).returning(Store.id)
        deleted = (await self.db.execute(stmt)).scalar_one_or_none()
        if deleted is None:
            raise NotFoundError("Store not found", details={"store_id": store_id})

        logger.info("stores.deleted", store_id=store_id)
