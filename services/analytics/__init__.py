from services.analytics.contracts import Report, ReportDataset, ReportResult
from services.analytics.engine import InventoryAnalyticsEngine
from services.analytics.reports import (
    BestsellersReport,
    ExpiryReport,
    ManagementAnalysisReport,
    OverallStatusReport,
    SalesReport,
    UrgentStockReport,
)

__all__ = [
    "InventoryAnalyticsEngine",
    "Report",
    "ReportDataset",
    "ReportResult",
    "UrgentStockReport",
    "ExpiryReport",
    "BestsellersReport",
    "SalesReport",
    "ManagementAnalysisReport",
    "OverallStatusReport",
]
