"""Analytics module for sales series, rankings and the dashboard.

Raw sums come from SQL (``aggregations``); rounding, scores and ranks are
applied in Python (``scoring``) so the business rules are testable without a
database.
"""

from app.features.analytics.routes import router
from app.features.analytics.schemas import (
    AnalyticsResponse,
    DashboardSummary,
    ProductPerformanceItem,
    SalesAnalyticsItem,
    StorePerformanceItem,
    TimeGranularity,
)
from app.features.analytics.service import AnalyticsService

__all__ = [
    "AnalyticsResponse",
    "AnalyticsService",
    "DashboardSummary",
    "ProductPerformanceItem",
    "SalesAnalyticsItem",
    "StorePerformanceItem",
    "TimeGranularity",
    "router",
]
