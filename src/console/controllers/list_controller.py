"""Controller for list views (clients, policies)."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, List, Optional

from pydantic.alias_generators import to_snake

from src.console.controllers.base import Confirm, RequestSequence, ViewStatus, confirmed
from src.console.schemas import EntityView
from src.error_handler import ErrorHandler
from src.integrations.contracts.interfaces import ResourceApi, SortDirection
from src.utils.config_loader import PaginationDefaults

logger = logging.getLogger(__name__)


@dataclass
class ListState:
    items: List[Any] = field(default_factory=list)
    page: int = 0
    size: int = 5
    sort_field: str = "id"
    sort_direction: SortDirection = SortDirection.ASC
    total_elements: int = 0
    total_pages: int = 0
    last: bool = True
    status: ViewStatus = ViewStatus.IDLE
    error: Optional[str] = None

    @property
    def loading(self) -> bool:
        return self.status is ViewStatus.LOADING

    @property
    def is_empty(self) -> bool:
        return self.status is ViewStatus.LOADED and not self.items

    @property
    def can_go_previous(self) -> bool:
        return self.total_pages > 0 and self.page > 0

    @property
    def can_go_next(self) -> bool:
        return self.total_pages > 0 and self.page < self.total_pages - 1


class ListController:
    """
    Drives one list view: Idle -> Loading -> Loaded | Failed.

    Every change of page, page size, sort field or sort direction (and the
    refresh after a delete) re-enters Loading. With ``paginated=False`` the
    whole collection is fetched once per load and sorted locally.
    """

    def __init__(
        self,
        view: EntityView,
        resource: ResourceApi,
        *,
        paginated: bool = True,
        defaults: Optional[PaginationDefaults] = None,
        error_handler: Optional[ErrorHandler] = None,
    ) -> None:
        defaults = defaults or PaginationDefaults()
        self.view = view
        self.resource = resource
        self.paginated = paginated
        self.page_size_options = list(defaults.page_size_options)
        self.error_handler = error_handler or ErrorHandler()
        self.state = ListState(
            page=defaults.page,
            size=defaults.size,
            sort_field=defaults.sort_field,
            sort_direction=SortDirection(defaults.sort_direction),
        )
        self._requests = RequestSequence()

    # Lifecycle
    async def mount(self) -> ListState:
        await self._load()
        return self.state

    def unmount(self) -> None:
        self._requests.invalidate()

    async def refresh(self) -> ListState:
        await self._load()
        return self.state

    # Pagination
    async def go_to_page(self, page: int) -> bool:
        s = self.state
        if not self.paginated or s.total_pages == 0:
            return False
        target = min(max(page, 0), s.total_pages - 1)
        if target == s.page:
            return False
        s.page = target
        await self._load()
        return True

    async def first_page(self) -> bool:
        return await self.go_to_page(0)

    async def previous_page(self) -> bool:
        return await self.go_to_page(self.state.page - 1)

    async def next_page(self) -> bool:
        return await self.go_to_page(self.state.page + 1)

    async def last_page(self) -> bool:
        return await self.go_to_page(self.state.total_pages - 1)

    async def set_page_size(self, size: int) -> bool:
        if size < 1:
            raise ValueError(f"Page size must be at least 1, got {size}")
        if size == self.state.size:
            return False
        self.state.size = size
        self.state.page = 0
        await self._load()
        return True

    # Sorting
    async def toggle_sort(self, sort_field: str) -> None:
        if self.view.sortable and sort_field not in self.view.sortable:
            raise ValueError(f"{self.view.plural} cannot be sorted by {sort_field}")
        s = self.state
        if sort_field == s.sort_field:
            s.sort_direction = s.sort_direction.flipped()
        else:
            s.sort_field = sort_field
            s.sort_direction = SortDirection.ASC
        await self._load()

    # Mutations
    async def delete(self, entity_id: int, confirm: Confirm) -> bool:
        if not await confirmed(confirm, self.view.delete_prompt):
            return False
        try:
            await self.resource.delete(entity_id)
        except Exception as exc:
            self.state.error = self.error_handler.user_message(
                exc, "delete", self.view.singular, self.view.plural, {"id": entity_id}
            )
            return False

        if self.paginated:
            # Removal may shift rows in from the following page.
            await self._load()
        else:
            s = self.state
            s.error = None
            s.items = [item for item in s.items if getattr(item, "id", None) != entity_id]
            s.total_elements = len(s.items)
            s.total_pages = 1 if s.items else 0
        return True

    # Loading
    async def _load(self) -> None:
        ticket = self._requests.issue()
        s = self.state
        s.status = ViewStatus.LOADING
        s.error = None
        try:
            if self.paginated:
                result = await self.resource.list_paginated(
                    s.page, s.size, s.sort_field, s.sort_direction.value
                )
            else:
                result = await self.resource.list()
        except Exception as exc:
            if not self._requests.is_current(ticket):
                logger.debug("Discarding stale %s failure (request %s)", self.view.plural, ticket)
                return
            s.items = []
            s.status = ViewStatus.FAILED
            s.error = self.error_handler.user_message(exc, "load", self.view.singular, self.view.plural)
            return

        if not self._requests.is_current(ticket):
            logger.debug("Discarding stale %s response (request %s)", self.view.plural, ticket)
            return

        if self.paginated:
            if result.is_out_of_range:
                s.page = result.total_pages - 1
                await self._load()
                return
            s.items = list(result.content)
            s.page = result.page
            s.size = result.size
            s.total_elements = result.total_elements
            s.total_pages = result.total_pages
            s.last = result.last
        else:
            s.items = self._sorted(list(result.data or []))
            s.page = 0
            s.total_elements = len(s.items)
            s.total_pages = 1 if s.items else 0
            s.last = True
        s.status = ViewStatus.LOADED

    def _sorted(self, items: List[Any]) -> List[Any]:
        attribute = to_snake(self.state.sort_field)

        def sort_key(item):
            value = getattr(item, attribute, None)
            return (value is None, value if value is not None else 0, getattr(item, "id", 0))

        return sorted(items, key=sort_key, reverse=self.state.sort_direction is SortDirection.DESC)
