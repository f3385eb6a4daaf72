"""
Insurance REST API HTTP Client.

Purpose:
- Translates typed CRUD / pagination calls into HTTP requests against the backend
- Normalizes every response into ApiResponse / PagedResponse contracts

Implementation notes:
- Use httpx for async requests; one fresh round trip per call (no retry, no cache)
- The base URL is resolved on each call so a runtime override applies without a restart
- Non-2xx and network failures surface as TransportError, 404 on a single
  entity as NotFoundError, unparseable payloads as MalformedResponseError

Important:
- Keep this client as the ONLY place where backend HTTP calls are made.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import httpx

from src.integrations.contracts.interfaces import (
    ApiResponse,
    OwnedResourceApi,
    PagedResponse,
    ResourceApi,
    SortDirection,
    WireModel,
)
from src.integrations.contracts.resources import CLIENTS, POLICIES, ResourceContract
from src.integrations.errors import MalformedResponseError, NotFoundError, TransportError
from src.integrations.policy.response_wrappers import normalize_ack, normalize_envelope, normalize_paged
from src.utils.config_loader import ApiSettings

logger = logging.getLogger(__name__)

JSON_HEADERS = {"Content-Type": "application/json", "Accept": "application/json"}


class InsuranceApiClient:
    def __init__(
        self,
        settings: Optional[ApiSettings] = None,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.settings = settings or ApiSettings()
        self._transport = transport
        self.clients = ResourceClient(self, CLIENTS)
        self.policies = PolicyResourceClient(self, POLICIES)

    @property
    def base_url(self) -> str:
        return self.settings.resolve_base_url()

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        payload: Optional[Dict[str, Any]] = None,
        not_found: Optional[tuple] = None,
    ) -> Any:
        """Perform one HTTP call and return the decoded JSON body (None when empty).

        ``not_found`` is a ``(resource_name, id)`` pair; when given, a 404 is
        raised as NotFoundError instead of a plain TransportError.
        """
        url = f"{self.base_url}{path}"
        logger.info(f"{method} {url}")
        logger.debug("Request params=%s payload=%s", params, payload)
        try:
            async with httpx.AsyncClient(
                timeout=self.settings.timeout_seconds,
                transport=self._transport,
                headers=JSON_HEADERS,
            ) as client:
                response = await client.request(method, url, params=params, json=payload)
                response.raise_for_status()
        except httpx.HTTPStatusError as e:
            status_code = e.response.status_code
            body = e.response.text
            logger.error(f"HTTP error from insurance API: {status_code} {method} {url} {body}")
            if status_code == 404 and not_found is not None:
                raise NotFoundError(not_found[0], not_found[1], body=body) from e
            raise TransportError(
                f"{method} {path} failed with HTTP {status_code}",
                status_code=status_code,
                body=body,
            ) from e
        except httpx.RequestError as e:
            logger.error(f"Request error connecting to insurance API: {e}")
            raise TransportError(f"{method} {path} failed: {e}") from e

        logger.info(f"Received insurance API response: status={response.status_code}")
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise MalformedResponseError(
                f"{method} {path} returned a non-JSON body.",
                payload={"body": response.text},
            ) from e


class ResourceClient(ResourceApi):
    """CRUD + pagination for one REST collection."""

    def __init__(self, api: InsuranceApiClient, contract: ResourceContract) -> None:
        self.api = api
        self.contract = contract

    async def list(self) -> ApiResponse:
        raw = await self.api.request("GET", self.contract.path)
        return normalize_envelope(raw, self.contract, many=True)

    async def list_paginated(
        self,
        page: Optional[int] = None,
        size: Optional[int] = None,
        sort_field: Optional[str] = None,
        sort_direction: Optional[str] = None,
    ) -> PagedResponse:
        defaults = self.api.settings.pagination
        params = {
            "page": defaults.page if page is None else page,
            "size": defaults.size if size is None else size,
            "sort": sort_field or defaults.sort_field,
            "direction": SortDirection((sort_direction or defaults.sort_direction).lower()).value,
        }
        if params["page"] < 0:
            raise ValueError(f"page must be >= 0, got {params['page']}")
        if params["size"] < 1:
            raise ValueError(f"size must be >= 1, got {params['size']}")
        raw = await self.api.request("GET", f"{self.contract.path}/paged", params=params)
        return normalize_paged(raw, self.contract)

    async def get_by_id(self, entity_id: int) -> ApiResponse:
        raw = await self.api.request(
            "GET",
            self.contract.item_path(entity_id),
            not_found=(self.contract.name, entity_id),
        )
        if raw is None:
            raise NotFoundError(self.contract.name, entity_id)
        response = normalize_envelope(raw, self.contract)
        if response.data is None:
            raise NotFoundError(self.contract.name, entity_id)
        return response

    async def create(self, payload: WireModel) -> ApiResponse:
        body = self._coerce(payload, self.contract.create_model).to_wire()
        body.pop("id", None)
        raw = await self.api.request("POST", self.contract.path, payload=body)
        return self._expect_entity(raw, "create")

    async def update(self, payload: WireModel) -> ApiResponse:
        model = self._coerce(payload, self.contract.update_model)
        raw = await self.api.request(
            "PUT",
            self.contract.item_path(model.id),
            payload=model.to_wire(),
            not_found=(self.contract.name, model.id),
        )
        return self._expect_entity(raw, "update")

    async def delete(self, entity_id: int) -> ApiResponse:
        raw = await self.api.request(
            "DELETE",
            self.contract.item_path(entity_id),
            not_found=(self.contract.name, entity_id),
        )
        return normalize_ack(raw)

    def _expect_entity(self, raw: Any, operation: str) -> ApiResponse:
        response = normalize_envelope(raw, self.contract)
        if response.data is None:
            raise MalformedResponseError(
                f"{operation} {self.contract.name} returned no entity.",
                payload=raw,
            )
        return response

    @staticmethod
    def _coerce(payload: Any, model_type):
        if type(payload) is model_type:
            return payload
        if isinstance(payload, WireModel):
            return model_type.model_validate(payload.model_dump())
        return model_type.model_validate(payload)


class PolicyResourceClient(ResourceClient, OwnedResourceApi):
    async def list_by_owner(self, owner_id: int) -> ApiResponse:
        raw = await self.api.request("GET", f"{self.contract.path}/client/{owner_id}")
        return normalize_envelope(raw, self.contract, many=True)


__all__ = ["InsuranceApiClient", "PolicyResourceClient", "ResourceClient"]
