"""Response normalization for the insurance REST backend.

Two backend contract versions are deployed: one always wraps payloads as
``{data, message, success}``, the other sometimes returns the bare entity or
bare array. Every response goes through ``classify_shape`` first and is then
parsed according to its tag, so callers only ever see ApiResponse or
PagedResponse models.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Type

from pydantic import ValidationError

from src.integrations.contracts.interfaces import ApiResponse, PagedResponse, WireModel
from src.integrations.contracts.resources import ResourceContract
from src.integrations.errors import IntegrationResponseError, MalformedResponseError

_PAGED_KEYS = ("content", "totalPages")


class ResponseShape(str, Enum):
    ENVELOPE = "envelope"
    PAGED = "paged"
    ENTITY = "entity"
    ARRAY = "array"
    MALFORMED = "malformed"


def classify_shape(raw: Any, resource: ResourceContract) -> ResponseShape:
    if isinstance(raw, dict):
        if "data" in raw:
            return ResponseShape.ENVELOPE
        if all(key in raw for key in _PAGED_KEYS):
            return ResponseShape.PAGED
        if resource.matches(raw):
            return ResponseShape.ENTITY
        return ResponseShape.MALFORMED
    if isinstance(raw, list):
        return ResponseShape.ARRAY
    return ResponseShape.MALFORMED


def normalize_envelope(raw: Any, resource: ResourceContract, *, many: bool = False) -> ApiResponse:
    """Extract the entity (or list of entities) from any tolerated shape.

    Envelope -> unwrap ``data``; bare entity -> itself; bare array -> itself;
    paged window -> its ``content`` (list reads only). Anything else raises
    MalformedResponseError. An envelope carrying ``data: null`` is returned
    with ``data=None`` so the caller can decide whether that means "not found".
    """
    shape = classify_shape(raw, resource)
    message = ""
    success = True

    if shape is ResponseShape.ENVELOPE:
        payload = raw["data"]
        message = str(raw.get("message") or "")
        success = bool(raw.get("success", True))
        if payload is None:
            return ApiResponse(data=None, message=message, success=success)
    elif shape is ResponseShape.ENTITY and not many:
        payload = raw
    elif shape is ResponseShape.ARRAY and many:
        payload = raw
    elif shape is ResponseShape.PAGED and many:
        payload = raw["content"]
    else:
        raise MalformedResponseError(
            f"Unexpected {shape.value} response for {resource.plural if many else resource.name}.",
            payload=raw,
        )

    if many:
        if not isinstance(payload, list):
            raise MalformedResponseError(f"Expected a list of {resource.plural}.", payload=raw)
        data = [_build_model(resource.model, item, raw) for item in payload]
    else:
        if not isinstance(payload, dict):
            raise MalformedResponseError(f"Expected a {resource.name} object.", payload=raw)
        data = _build_model(resource.model, payload, raw)

    return ApiResponse(data=data, message=message, success=success)


def normalize_paged(raw: Any, resource: ResourceContract) -> PagedResponse:
    if classify_shape(raw, resource) is not ResponseShape.PAGED:
        raise MalformedResponseError(f"Expected a paged {resource.plural} response.", payload=raw)
    content = raw.get("content")
    if not isinstance(content, list):
        raise MalformedResponseError("Paged response content must be a list.", payload=raw)
    window: Dict[str, Any] = dict(raw)
    window["content"] = [_build_model(resource.model, item, raw) for item in content]
    return _build_model(PagedResponse, window, raw)


def normalize_ack(raw: Any) -> ApiResponse:
    """Acknowledgement for writes without a payload (delete).

    Accepts an empty body, an envelope, or any JSON object with a message.
    """
    if raw is None or raw == "":
        return ApiResponse(data=None)
    if isinstance(raw, dict):
        return ApiResponse(
            data=None,
            message=str(raw.get("message") or ""),
            success=bool(raw.get("success", True)),
        )
    raise MalformedResponseError("Unexpected acknowledgement body.", payload=raw)


def _build_model(model_type: Type[WireModel], payload: Any, raw: Any):
    try:
        return model_type.model_validate(payload)
    except ValidationError as exc:
        raise MalformedResponseError(f"Response validation failed: {exc}", payload=raw) from exc


__all__ = [
    "IntegrationResponseError",
    "MalformedResponseError",
    "ResponseShape",
    "classify_shape",
    "normalize_ack",
    "normalize_envelope",
    "normalize_paged",
]
