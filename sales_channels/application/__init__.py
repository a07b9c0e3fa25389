# Application layer: services that orchestrate domain and infrastructure.

from sales_channels.application.event_bus import EventBusService
from sales_channels.application.query import DEFAULT_LIST_CONFIG, FindConfig, FindQuery, build_query
from sales_channels.application.repository import EventPublisher, Repository
from sales_channels.application.sales_channel_service import SalesChannelService
from sales_channels.application.transaction import TransactionBaseService

__all__ = [
    "DEFAULT_LIST_CONFIG",
    "EventBusService",
    "EventPublisher",
    "FindConfig",
    "FindQuery",
    "Repository",
    "SalesChannelService",
    "TransactionBaseService",
    "build_query",
]
