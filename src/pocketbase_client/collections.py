"""
Collections resource: ``/api/collections``.
"""

from __future__ import annotations
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING

from .builders import COLLECTIONS_STYLE, ListRequestBuilder, RequestBuilder, ViewRequestBuilder
from .decoding import classify
from .models import Collection, CollectionDetails, FieldDeclaration

if TYPE_CHECKING:
    from .client import BaseClient

COLLECTIONS_PATH = "/api/collections"

RULE_KINDS = ("list", "view", "create", "update", "delete")


@dataclass(frozen=True)
class CollectionCreateRequestBuilder(RequestBuilder):
    """
    Create a collection.

    Example:
        ```python
        created = (
            admin.collections()
            .create("posts")
            .field("title", "text", required=True)
            .field("body", "editor")
            .rule("list", "")
            .execute()
        )
        ```
    """

    details: CollectionDetails = field(default_factory=CollectionDetails)

    def _with(self, **changes) -> CollectionCreateRequestBuilder:
        return replace(self, details=self.details.model_copy(update=changes))

    def type(self, collection_type: str) -> CollectionCreateRequestBuilder:
        """Collection type: ``base``, ``auth`` or ``view``."""
        return self._with(type=collection_type)

    def field(self, name: str, field_type: str, required: bool = False) -> CollectionCreateRequestBuilder:
        declaration = FieldDeclaration(name=name, type=field_type, required=required)
        return self._with(schema_=[*self.details.schema_, declaration])

    def rule(self, kind: str, expression: str) -> CollectionCreateRequestBuilder:
        """
        Set an API rule.

        Args:
            kind: One of ``list``, ``view``, ``create``, ``update``, ``delete``
            expression: Filter expression; empty string allows everyone
        """
        if kind not in RULE_KINDS:
            raise ValueError(f"Unknown rule kind {kind!r}; expected one of {RULE_KINDS}")
        return self._with(**{f"{kind}_rule": expression})

    def index(self, statement: str) -> CollectionCreateRequestBuilder:
        return self._with(indexes=[*self.details.indexes, statement])

    def system(self, system: bool = True) -> CollectionCreateRequestBuilder:
        return self._with(system=system)

    def execute(self) -> Collection:
        """
        Send the create request.

        Raises:
            ValidationFailure: Server rejected the collection definition
            HttpStatusError: Other non-2xx response
            DecodeError: Created collection could not be decoded
        """
        url = self.url
        response = self.client.send("POST", url, json=self.details)
        return classify(response, Collection, url, validation=True)


class CollectionsManager:
    """Builder factory for collection reads."""

    def __init__(self, client: BaseClient):
        self.client = client

    def list(self) -> ListRequestBuilder[Collection]:
        return ListRequestBuilder(
            self.client, COLLECTIONS_PATH, item_type=Collection, style=COLLECTIONS_STYLE,
        )

    def view(self, name: str) -> ViewRequestBuilder[Collection]:
        return ViewRequestBuilder(self.client, f"{COLLECTIONS_PATH}/{name}", response_type=Collection)


class AuthenticatedCollectionsManager(CollectionsManager):
    """Collection operations that need a token."""

    def create(self, name: str) -> CollectionCreateRequestBuilder:
        return CollectionCreateRequestBuilder(
            self.client, COLLECTIONS_PATH, details=CollectionDetails(name=name),
        )
