"""Track Amazon review purchases from order to refund."""

from .config import (
    DatabaseConfig,
    LoggingConfig,
    ReceiptConfig,
    ReportConfig,
    TrackerConfig,
    load_config,
)
from .edits import (
    MarkVoid,
    SetItem,
    SetOrderDate,
    SetPaid,
    SetReceived,
    SetStage,
    SetUrl,
    apply_edit,
    apply_edits,
)
from .filters import DeltaFilter, StatusFilter, apply_filters
from .finance import compute_delta, remaining_exposure
from .models import Product, Stage, new_product
from .sorting import dashboard_view, sort_products
from .status import ProductStatus, classify, is_complete
from .summary import DashboardStats, SummaryTotals, summarize, summary_totals
from .tracker import ImportResult, ProductTracker

__all__ = [
    "Product",
    "Stage",
    "new_product",
    "SetItem",
    "SetUrl",
    "SetOrderDate",
    "SetPaid",
    "SetReceived",
    "SetStage",
    "MarkVoid",
    "apply_edit",
    "apply_edits",
    "compute_delta",
    "remaining_exposure",
    "ProductStatus",
    "classify",
    "is_complete",
    "StatusFilter",
    "DeltaFilter",
    "apply_filters",
    "sort_products",
    "dashboard_view",
    "DashboardStats",
    "SummaryTotals",
    "summarize",
    "summary_totals",
    "ProductTracker",
    "ImportResult",
    "TrackerConfig",
    "DatabaseConfig",
    "ReceiptConfig",
    "ReportConfig",
    "LoggingConfig",
    "load_config",
]
