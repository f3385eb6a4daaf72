"""Controllers for create/edit forms.

Form values are kept as a flat dict keyed by snake_case field name. On submit
the values are validated client-side first; a FormValidationError blocks the
request and its field errors stay on the form until the offending field is
edited again.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Callable, Dict, List, Optional, Type

from pydantic import ValidationError
from pydantic.alias_generators import to_snake

from src.console.controllers.base import RequestSequence, ViewStatus
from src.console.navigation import Navigator
from src.console.schemas import EntityView
from src.console.validation import FormValidationError, raise_if_errors
from src.error_handler import ErrorHandler
from src.integrations.contracts.interfaces import ResourceApi, WireModel
from src.integrations.errors import NotFoundError

logger = logging.getLogger(__name__)

OWNER_FIELD = "client_id"


@dataclass
class FormState:
    values: Dict[str, Any] = field(default_factory=dict)
    field_errors: Dict[str, str] = field(default_factory=dict)
    status: ViewStatus = ViewStatus.IDLE
    saving: bool = False
    error: Optional[str] = None
    owner_locked: bool = False
    owner_options: List[Any] = field(default_factory=list)


class _FormController:
    def __init__(
        self,
        view: EntityView,
        resource: ResourceApi,
        *,
        navigator: Optional[Navigator] = None,
        owner_resource: Optional[ResourceApi] = None,
        error_handler: Optional[ErrorHandler] = None,
        today: Callable[[], date] = date.today,
    ) -> None:
        self.view = view
        self.resource = resource
        self.navigator = navigator or Navigator()
        self.owner_resource = owner_resource
        self.error_handler = error_handler or ErrorHandler()
        self.today = today
        self.state = FormState(values=view.initial_values())
        self._options_loaded = False
        self._requests = RequestSequence()

    def change_field(self, name: str, value: Any) -> None:
        if name == OWNER_FIELD and self.state.owner_locked:
            logger.debug("Ignoring change to locked owner field")
            return
        self.state.values[name] = value
        self.state.field_errors.pop(name, None)

    def unmount(self) -> None:
        self._requests.invalidate()

    async def load_options(self) -> List[Any]:
        """Fetch the client list for the owner select, once per form."""
        if self.owner_resource is None or self._options_loaded:
            return self.state.owner_options
        self._options_loaded = True
        try:
            response = await self.owner_resource.list()
        except Exception as exc:
            self.state.error = self.error_handler.user_message(exc, "load", "client", "clients")
            return self.state.owner_options
        self.state.owner_options = list(response.data or [])
        return self.state.owner_options

    def _validated(self, model_type: Type[WireModel], extra: Optional[Dict[str, Any]] = None) -> WireModel:
        values = dict(self.state.values)
        errors = self.view.validator(values, today=self.today(), original=self._stored_values())
        raise_if_errors(errors)
        # blank inputs fall back to the model defaults
        cleaned = {k: v for k, v in values.items() if v != ""}
        cleaned.update(extra or {})
        try:
            return model_type.model_validate(cleaned)
        except ValidationError as exc:
            field_errors: Dict[str, str] = {}
            for err in exc.errors():
                name = to_snake(str(err["loc"][0])) if err.get("loc") else "__all__"
                field_errors.setdefault(name, err.get("msg", "Invalid value"))
            raise FormValidationError(field_errors=field_errors) from exc

    def _prepare(self, values: Optional[Dict[str, Any]]) -> Optional[WireModel]:
        for name, value in (values or {}).items():
            self.change_field(name, value)
        self.state.error = None
        try:
            return self._build_payload()
        except FormValidationError as exc:
            self.state.field_errors = dict(exc.field_errors)
            logger.info("%s form blocked by validation: %s", self.view.singular, sorted(exc.field_errors))
            return None

    def _stored_values(self) -> Optional[Dict[str, Any]]:
        return None

    def _build_payload(self) -> WireModel:
        raise NotImplementedError


class CreateFormController(_FormController):
    """Empty form seeded with defaults; an owner passed from navigation is pre-selected and locked."""

    def __init__(self, view: EntityView, resource: ResourceApi, *, owner_id: Optional[int] = None, **kwargs) -> None:
        super().__init__(view, resource, **kwargs)
        self.owner_id = owner_id
        if owner_id is not None and OWNER_FIELD in view.form_fields:
            self.state.values[OWNER_FIELD] = owner_id
            self.state.owner_locked = True

    async def mount(self) -> FormState:
        await self.load_options()
        self.state.status = ViewStatus.LOADED
        return self.state

    def _build_payload(self) -> WireModel:
        return self._validated(self.view.contract.create_model)

    async def submit(self, values: Optional[Dict[str, Any]] = None) -> Optional[int]:
        payload = self._prepare(values)
        if payload is None:
            return None
        self.state.saving = True
        try:
            response = await self.resource.create(payload)
        except Exception as exc:
            self.state.error = self.error_handler.user_message(exc, "create", self.view.singular, self.view.plural)
            return None
        finally:
            self.state.saving = False
        new_id = response.data.id
        logger.info("Created %s %s", self.view.singular, new_id)
        self.navigator.go(self.view.detail_path(new_id))
        return new_id


class EditFormController(_FormController):
    """Loads the entity first; a missing entity is a terminal not-found state."""

    def __init__(self, view: EntityView, resource: ResourceApi, entity_id: int, **kwargs) -> None:
        super().__init__(view, resource, **kwargs)
        self.entity_id = entity_id
        self.entity: Optional[WireModel] = None
        self._stored: Optional[Dict[str, Any]] = None

    async def mount(self) -> FormState:
        ticket = self._requests.issue()
        s = self.state
        s.status = ViewStatus.LOADING
        try:
            response = await self.resource.get_by_id(self.entity_id)
        except Exception as exc:
            if self._requests.is_current(ticket):
                s.status = ViewStatus.NOT_FOUND if isinstance(exc, NotFoundError) else ViewStatus.FAILED
                s.error = self.error_handler.user_message(
                    exc, "load_one", self.view.singular, self.view.plural, {"id": self.entity_id}
                )
            return s
        if not self._requests.is_current(ticket):
            return s
        self.entity = response.data
        s.values = self.view.to_form_values(self.entity)
        self._stored = dict(s.values)
        s.field_errors = {}
        await self.load_options()
        s.status = ViewStatus.LOADED
        return s

    def _stored_values(self) -> Optional[Dict[str, Any]]:
        return self._stored

    def _build_payload(self) -> WireModel:
        return self._validated(self.view.contract.update_model, {"id": self.entity_id})

    async def submit(self, values: Optional[Dict[str, Any]] = None) -> bool:
        if self.entity is None:
            return False
        payload = self._prepare(values)
        if payload is None:
            return False
        self.state.saving = True
        try:
            response = await self.resource.update(payload)
        except Exception as exc:
            self.state.error = self.error_handler.user_message(
                exc, "update", self.view.singular, self.view.plural, {"id": self.entity_id}
            )
            return False
        finally:
            self.state.saving = False
        self.entity = response.data
        self.navigator.go(self.view.detail_path(self.entity_id))
        return True
