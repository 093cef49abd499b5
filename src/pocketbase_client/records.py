"""
Records resource: ``/api/collections/{name}/records``.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Any, Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict

from .builders import (
    CreateRequestBuilder,
    DestroyRequestBuilder,
    ListRequestBuilder,
    RECORDS_STYLE,
    RequestBuilder,
    UpdateRequestBuilder,
    ViewRequestBuilder,
)

if TYPE_CHECKING:
    from .client import BaseClient

logger = logging.getLogger(__name__)

T = TypeVar("T")


class RecordId(BaseModel):
    """Only the id of a record; other fields are ignored."""

    model_config = ConfigDict(extra="ignore")

    id: str


@dataclass(frozen=True)
class DeleteAllRequestBuilder(RequestBuilder):
    """
    Delete every record of a collection matching an optional filter.

    Matching ids are gathered with auto-pagination first, then deleted one
    at a time. The first failed delete stops the run.
    """

    collection: str = ""
    filter_expr: Optional[str] = None

    def filter(self, expression: str) -> DeleteAllRequestBuilder:
        return replace(self, filter_expr=expression)

    def execute(self) -> int:
        """
        Run the deletion.

        Returns:
            Number of records deleted

        Raises:
            HttpStatusError: A listing request failed, or a delete did not
                return 204
            PaginationError: Listing could not converge
        """
        listing = ListRequestBuilder(self.client, self.path, item_type=RecordId, style=RECORDS_STYLE)
        if self.filter_expr is not None:
            listing = listing.filter(self.filter_expr)

        ids = [record.id for record in listing.fetch_all()]
        for record_id in ids:
            DestroyRequestBuilder(self.client, f"{self.path}/{record_id}").execute()
        logger.debug("deleted %d records from %s", len(ids), self.collection)
        return len(ids)


class RecordsManager(Generic[T]):
    """
    Builder factory for the records of one collection.

    Args:
        client: Client issuing the requests
        name: Collection name
        model: Type each record is decoded into
    """

    def __init__(self, client: BaseClient, name: str, model: Any = dict):
        self.client = client
        self.name = name
        self.model = model

    @property
    def path(self) -> str:
        return f"/api/collections/{self.name}/records"

    def list(self) -> ListRequestBuilder[T]:
        """List records; defaults to ``page=1, per_page=100``."""
        return ListRequestBuilder(self.client, self.path, item_type=self.model, style=RECORDS_STYLE)

    def view(self, identifier: str) -> ViewRequestBuilder[T]:
        return ViewRequestBuilder(
            self.client,
            f"{self.path}/{identifier}",
            response_type=self.model,
            not_found=(self.name, identifier),
        )

    def create(self, record: Any) -> CreateRequestBuilder[T]:
        return CreateRequestBuilder(self.client, self.path, record=record)

    def update(self, identifier: str, record: T) -> UpdateRequestBuilder[T]:
        return UpdateRequestBuilder(self.client, f"{self.path}/{identifier}", record=record)

    def destroy(self, identifier: str) -> DestroyRequestBuilder:
        return DestroyRequestBuilder(self.client, f"{self.path}/{identifier}")

    def delete_all(self) -> DeleteAllRequestBuilder:
        return DeleteAllRequestBuilder(self.client, self.path, collection=self.name)

    def fetch_all(self, max_pages: Optional[int] = None) -> List[T]:
        """Every record of the collection, unfiltered."""
        return self.list().fetch_all(max_pages=max_pages)
