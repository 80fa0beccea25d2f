"""Dashboard aggregation package."""

from money_manager.dashboard.periods import HISTORY_LENGTH, period_bounds
from money_manager.dashboard.service import DashboardService

__all__ = ["HISTORY_LENGTH", "DashboardService", "period_bounds"]
