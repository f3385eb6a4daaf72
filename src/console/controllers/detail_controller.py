"""Controller for detail views.

A client's detail view also lists the policies it owns, fetched through the
policy resource's ``list_by_owner``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, List, Optional

from src.console.controllers.base import Confirm, RequestSequence, ViewStatus, confirmed
from src.console.navigation import Navigator
from src.console.schemas import EntityView
from src.error_handler import ErrorHandler
from src.integrations.contracts.interfaces import OwnedResourceApi, ResourceApi
from src.integrations.errors import NotFoundError

logger = logging.getLogger(__name__)


@dataclass
class DetailState:
    entity: Optional[Any] = None
    related: List[Any] = field(default_factory=list)
    status: ViewStatus = ViewStatus.IDLE
    error: Optional[str] = None
    related_error: Optional[str] = None


class DetailController:
    def __init__(
        self,
        view: EntityView,
        resource: ResourceApi,
        entity_id: int,
        *,
        navigator: Optional[Navigator] = None,
        owned: Optional[OwnedResourceApi] = None,
        owned_view: Optional[EntityView] = None,
        error_handler: Optional[ErrorHandler] = None,
    ) -> None:
        self.view = view
        self.resource = resource
        self.entity_id = entity_id
        self.navigator = navigator or Navigator(view.detail_path(entity_id))
        self.owned = owned
        self.owned_view = owned_view
        self.error_handler = error_handler or ErrorHandler()
        self.state = DetailState()
        self._requests = RequestSequence()

    async def mount(self) -> DetailState:
        ticket = self._requests.issue()
        s = self.state
        s.status = ViewStatus.LOADING
        s.error = None
        try:
            response = await self.resource.get_by_id(self.entity_id)
        except Exception as exc:
            if not self._requests.is_current(ticket):
                return s
            s.entity = None
            s.status = ViewStatus.NOT_FOUND if isinstance(exc, NotFoundError) else ViewStatus.FAILED
            s.error = self.error_handler.user_message(
                exc, "load_one", self.view.singular, self.view.plural, {"id": self.entity_id}
            )
            return s

        if not self._requests.is_current(ticket):
            logger.debug("Discarding stale %s %s response", self.view.singular, self.entity_id)
            return s
        s.entity = response.data

        if self.owned is not None:
            await self._load_related(ticket)
        if self._requests.is_current(ticket):
            s.status = ViewStatus.LOADED
        return s

    def unmount(self) -> None:
        self._requests.invalidate()

    async def delete(self, confirm: Confirm) -> bool:
        if self.state.entity is None:
            return False
        if not await confirmed(confirm, self.view.delete_prompt):
            return False
        try:
            await self.resource.delete(self.entity_id)
        except Exception as exc:
            self.state.error = self.error_handler.user_message(
                exc, "delete", self.view.singular, self.view.plural, {"id": self.entity_id}
            )
            return False
        self.navigator.go(self.view.list_path())
        return True

    def create_related_path(self) -> Optional[str]:
        """Location of the create form for an owned entity, pre-selecting this owner."""
        if self.owned_view is None:
            return None
        return f"/{self.owned_view.plural}/create?clientId={self.entity_id}"

    async def _load_related(self, ticket: int) -> None:
        s = self.state
        owned_view = self.owned_view
        try:
            response = await self.owned.list_by_owner(self.entity_id)
        except Exception as exc:
            if self._requests.is_current(ticket):
                s.related = []
                s.related_error = self.error_handler.user_message(
                    exc,
                    "load",
                    owned_view.singular if owned_view else "item",
                    owned_view.plural if owned_view else "items",
                    {"owner_id": self.entity_id},
                )
            return
        if self._requests.is_current(ticket):
            s.related = list(response.data or [])
            s.related_error = None
