"""
mtgprices services.

Report file handling and stored price maintenance.
"""

from mtgprices.services.price_cleaner import CleanupPlan, plan_cleanup
from mtgprices.services.report_loader import (
    DEFAULT_ENCODING,
    PriceReport,
    format_timestamp,
    read_report,
    report_timestamp,
)

__all__ = [
    "CleanupPlan",
    "DEFAULT_ENCODING",
    "PriceReport",
    "format_timestamp",
    "plan_cleanup",
    "read_report",
    "report_timestamp",
]
