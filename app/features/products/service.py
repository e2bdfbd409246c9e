"""Service layer for product CRUD, stock queries and bulk stock updates."""

from decimal import Decimal

from sqlalchemy import Select, delete, func, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import joinedload

from app.core.exceptions import NotFoundError
from app.core.logging import get_logger
from app.features.data_platform.models import Product, Store
from app.features.products.schemas import (
    ProductCreate,
    ProductResponse,
    ProductSortField,
    ProductUpdate,
    SortOrder,
    StockUpdateItem,
)
from app.shared.schemas import PaginatedResponse, PaginationParams
from app.shared.utils import paginate_response

logger = get_logger(__name__)

SORT_COLUMNS = {
    ProductSortField.NAME: Product.name,
    ProductSortField.PRICE: Product.price,
    ProductSortField.QUANTITY_IN_STOCK: Product.quantity_in_stock,
    ProductSortField.CREATED_AT: Product.created_at,
}


class ProductService:
    """Service for product management within stores.

    All reads load the owning store so responses carry the store summary.
    """

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    def _base_query(self) -> Select[tuple[Product]]:
        return select(Product).options(joinedload(Product.store))

    async def _get_or_404(self, product_id: int) -> Product:
        stmt = (
            self._base_query()
            .where(Product.id == product_id)
            .execution_options(populate_existing=True)
        )
        product = (await self.db.execute(stmt)).scalar_one_or_none()
        if product is None:
            raise NotFoundError("Product not found", details={"product_id": product_id})
        return product

    async def _ensure_store(self, store_id: int) -> None:
        exists = await self.db.scalar(select(Store.id).where(Store.id == store_id))
        if exists is None:
            raise NotFoundError("Store not found", details={"store_id": store_id})

    async def create_product(self, data: ProductCreate) -> ProductResponse:
        """Create a product in an existing store.

        Raises:
            NotFoundError: If the referenced store does not exist.
        """
        await self._ensure_store(data.store_id)

        product = Product(**data.model_dump())
        self.db.add(product)
        await self.db.flush()

        created = await self._get_or_404(product.id)
        logger.info(
            "products.created",
            product_id=created.id,
            store_id=created.store_id,
            sku=created.sku,
        )
        return ProductResponse.model_validate(created)

    async def list_products(
        self,
        pagination: PaginationParams,
        store_id: int | None = None,
        category: str | None = None,
        min_price: Decimal | None = None,
        max_price: Decimal | None = None,
        min_stock: int | None = None,
        max_stock: int | None = None,
        search: str | None = None,
        sort_by: ProductSortField = ProductSortField.CREATED_AT,
        sort_order: SortOrder = SortOrder.DESC,
    ) -> PaginatedResponse[ProductResponse]:
        """List products with filtering, sorting and pagination.

        Args:
            pagination: Page and limit.
            store_id: Restrict to one store.
            category: Case-insensitive substring match on category.
            min_price: Inclusive lower price bound.
            max_price: Inclusive upper price bound.
            min_stock: Inclusive lower stock bound.
            max_stock: Inclusive upper stock bound.
            search: Case-insensitive substring match on name, description or SKU.
            sort_by: Column to sort by.
            sort_order: Sort direction.

        Returns:
            One page of products with pagination metadata.
        """
        filters = []
        if store_id is not None:
            filters.append(Product.store_id == store_id)
        if category:
            filters.append(Product.category.ilike(f"%{category}%"))
        if min_price is not None:
            filters.append(Product.price >= min_price)
        if max_price is not None:
            filters.append(Product.price <= max_price)
        if min_stock is not None:
            filters.append(Product.quantity_in_stock >= min_stock)
        if max_stock is not None:
            filters.append(Product.quantity_in_stock <= max_stock)
        if search:
            pattern = f"%{search}%"
            filters.append(
                or_(
                    Product.name.ilike(pattern),
                    Product.description.ilike(pattern),
                    Product.sku.ilike(pattern),
                )
            )

        count_stmt = select(func.count(Product.id)).where(*filters)
        total = (await self.db.execute(count_stmt)).scalar_one()

        column = SORT_COLUMNS[sort_by]
        ordering = column.asc() if sort_order == SortOrder.ASC else column.desc()
        stmt = (
            self._base_query()
            .where(*filters)
            .order_by(ordering, Product.id)
            .offset(pagination.offset)
            .limit(pagination.limit)
        )
        products = (await self.db.execute(stmt)).scalars().all()

        logger.info(
            "products.listed",
            total=total,
            page=pagination.page,
            limit=pagination.limit,
            store_id=store_id,
            sort_by=sort_by.value,
            sort_order=sort_order.value,
        )

        return paginate_response(
            [ProductResponse.model_validate(product) for product in products],
            total,
            pagination,
        )

    async def list_store_products(
        self,
        store_id: int,
        pagination: PaginationParams,
        **filters,
    ) -> PaginatedResponse[ProductResponse]:
        """List products of one store.

        Raises:
            NotFoundError: If the store does not exist.
        """
        await self._ensure_store(store_id)
        return await self.list_products(pagination, store_id=store_id, **filters)

    async def get_product(self, product_id: int) -> ProductResponse:
        """Get a single product by ID.

        Raises:
            NotFoundError: If the product does not exist.
        """
        product = await self._get_or_404(product_id)
        return ProductResponse.model_validate(product)

    async def update_product(self, product_id: int, data: ProductUpdate) -> ProductResponse:
        """Apply a partial update to a product.

        Raises:
            NotFoundError: If the product does not exist.
        """
        product = await self._get_or_404(product_id)
        changes = data.model_dump(exclude_unset=True)
        for field, value in changes.items():
            setattr(product, field, value)
        product.updated_at = func.now()

        await self.db.flush()
        product = await self._get_or_404(product_id)

        logger.info("products.updated", product_id=product_id, fields=sorted(changes))
        return ProductResponse.model_validate(product)

    async def delete_product(self, product_id: int) -> None:
        """Delete a product and its sales.

        Raises:
            NotFoundError: If the product does not exist.
        """
        stmt = delete(Product).where(Product.id == product_id).returning(Product.id)
        deleted = (await self.db.execute(stmt)).scalar_one_or_none()
        if deleted is None:
            raise NotFoundError("Product not found", details={"product_id": product_id})

        logger.info("products.deleted", product_id=product_id)

    async def get_low_stock(self, threshold: int = 10) -> list[ProductResponse]:
        """Products whose stock is at or below ``threshold``, lowest stock first."""
        stmt = (
            self._base_query()
            .where(Product.quantity_in_stock <= threshold)
            .order_by(Product.quantity_in_stock.asc(), Product.id)
        )
        products = (await self.db.execute(stmt)).scalars().all()

        logger.info("products.low_stock_listed", threshold=threshold, count=len(products))
        return [ProductResponse.model_validate(product) for product in products]

    async def bulk_update_stock(self, items: list[StockUpdateItem]) -> list[ProductResponse]:
        """Set stock levels for several products in one transaction.

        Unknown product IDs are skipped; the result lists only the products
        that were updated. Any database error rolls back the whole batch.

        Args:
            items: Product IDs with their new stock levels.

        Returns:
            Updated products in request order.
        """
        updated_ids: list[int] = []
        for item in items:
            stmt = (
                update(Product)
                .where(Product.id == item.id)
                .values(quantity_in_stock=item.quantity_in_stock, updated_at=func.now())
                .returning(Product.id)
            )
            product_id = (await self.db.execute(stmt)).scalar_one_or_none()
            if product_id is not None:
                updated_ids.append(product_id)

        if not updated_ids:
            logger.info("products.stock_bulk_updated", requested=len(items), updated=0)
            return []

        stmt = (
            self._base_query()
            .where(Product.id.in_(updated_ids))
            .execution_options(populate_existing=True)
        )
        by_id = {product.id: product for product in (await self.db.execute(stmt)).scalars()}

        logger.info(
            "products.stock_bulk_updated",
            requested=len(items),
            updated=len(updated_ids),
        )
        # Duplicate IDs in the request collapse to one entry
        ordered = list(dict.fromkeys(updated_ids))
        return [ProductResponse.model_validate(by_id[pid]) for pid in ordered]
