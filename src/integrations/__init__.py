"""
Integrations layer.
This package contains all code used to communicate with the insurance REST backend:
- Contracts: wire models (clients, policies, envelopes, pages) and resource descriptors
- Clients: the real HTTP client and an in-memory mock backend
- Policy: response normalization (envelope vs bare entity vs array vs page)

Key rule:
- Console views MUST NOT call the backend directly.
- Views go through controllers, which go through the resource clients (src/integrations/clients).

Switching implementations:
- The selection of mock vs real backend happens in ONE place (src/console/dependencies.py).
"""

from .contracts import (
    ApiResponse,
    Client,
    ClientCreate,
    ClientUpdate,
    PagedResponse,
    Policy,
    PolicyCreate,
    PolicyStatus,
    PolicyType,
    PolicyUpdate,
    SortDirection,
)
from .errors import (
    InsuranceApiError,
    IntegrationResponseError,
    MalformedResponseError,
    NotFoundError,
    TransportError,
)

__all__ = [
    # contracts
    "ApiResponse", "PagedResponse", "SortDirection",
    "Client", "ClientCreate", "ClientUpdate",
    "Policy", "PolicyCreate", "PolicyUpdate", "PolicyStatus", "PolicyType",
    # errors
    "InsuranceApiError", "IntegrationResponseError", "MalformedResponseError",
    "NotFoundError", "TransportError",
]
