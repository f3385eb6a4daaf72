"""
Contracts (data models).

This folder defines the request/response shapes exchanged with the insurance
REST backend:
- Client and Policy entities, plus their create/update request variants
- the ``{data, message, success}`` envelope and the paged window
- one ResourceContract per REST collection

Both the real HTTP client and the mock backend use these contracts, so
controllers rely on stable models rather than ad-hoc dicts.
"""

from .entities import Client, ClientCreate, ClientUpdate, Policy, PolicyCreate, PolicyUpdate
from .interfaces import (
    ApiResponse,
    OwnedResourceApi,
    PagedResponse,
    PolicyStatus,
    PolicyType,
    ResourceApi,
    SortDirection,
    WireModel,
    as_calendar_date,
)
from .resources import CLIENTS, POLICIES, ResourceContract

__all__ = [
    "ApiResponse",
    "CLIENTS",
    "Client",
    "ClientCreate",
    "ClientUpdate",
    "OwnedResourceApi",
    "POLICIES",
    "PagedResponse",
    "Policy",
    "PolicyCreate",
    "PolicyStatus",
    "PolicyType",
    "PolicyUpdate",
    "ResourceApi",
    "ResourceContract",
    "SortDirection",
    "WireModel",
    "as_calendar_date",
]
