"""Error taxonomy surfaced by the integration clients.

- TransportError: network failure or non-2xx response
- NotFoundError: the backend has no record for the requested id
- MalformedResponseError: the payload matches none of the tolerated shapes
"""

from __future__ import annotations

from typing import Any, Optional


class InsuranceApiError(Exception):
    """Base for everything the API client raises."""


class IntegrationResponseError(InsuranceApiError, ValueError):
    def __init__(self, message: str, *, payload: Any = None) -> None:
        super().__init__(message)
        self.payload = payload if payload is not None else {}


class MalformedResponseError(IntegrationResponseError):
    pass


class TransportError(InsuranceApiError):
    def __init__(self, message: str, *, status_code: Optional[int] = None, body: str = "") -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class NotFoundError(TransportError):
    def __init__(self, resource: str, entity_id: Any, *, body: str = "") -> None:
        super().__init__(f"{resource} {entity_id} not found", status_code=404, body=body)
        self.resource = resource
        self.entity_id = entity_id
