"""
Request logs resource: ``/api/logs/requests``.
"""

from __future__ import annotations
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, List, Optional

from .builders import LOGS_STYLE, ListRequestBuilder, RequestBuilder, ViewRequestBuilder
from .decoding import classify
from .models import LogListItem, LogStatDataPoint

if TYPE_CHECKING:
    from .client import BaseClient

LOGS_PATH = "/api/logs/requests"


@dataclass(frozen=True)
class LogStatisticsRequestBuilder(RequestBuilder):
    """Hourly request counts, optionally filtered."""

    filter_expr: Optional[str] = None

    def filter(self, expression: str) -> LogStatisticsRequestBuilder:
        return replace(self, filter_expr=expression)

    def execute(self) -> List[LogStatDataPoint]:
        url = self.url
        params = [("filter", self.filter_expr)] if self.filter_expr is not None else []
        response = self.client.send("GET", url, params=params)
        return classify(response, List[LogStatDataPoint], url)


class LogsManager:
    """Builder factory for the request log."""

    def __init__(self, client: BaseClient):
        self.client = client

    def list(self) -> ListRequestBuilder[LogListItem]:
        return ListRequestBuilder(self.client, LOGS_PATH, item_type=LogListItem, style=LOGS_STYLE)

    def view(self, identifier: str) -> ViewRequestBuilder[LogListItem]:
        return ViewRequestBuilder(self.client, f"{LOGS_PATH}/{identifier}", response_type=LogListItem)

    def statistics(self) -> LogStatisticsRequestBuilder:
        return LogStatisticsRequestBuilder(self.client, f"{LOGS_PATH}/stats")
