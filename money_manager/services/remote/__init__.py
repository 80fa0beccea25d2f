"""Client for a remote Money Manager REST backend."""

from money_manager.services.remote.client import MoneyManagerApiClient, RemoteApiError
from money_manager.services.remote.mapping import RemoteDashboardSummary, RemotePeriodData

__all__ = [
    "MoneyManagerApiClient",
    "RemoteApiError",
    "RemoteDashboardSummary",
    "RemotePeriodData",
]
