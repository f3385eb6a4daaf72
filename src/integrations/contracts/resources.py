"""
Resource contracts.

One descriptor per REST collection: where it lives, which models travel in
each direction, and which wire fields identify a bare entity when the
backend skips the ``{data: ...}`` envelope.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple, Type

from .entities import Client, ClientCreate, ClientUpdate, Policy, PolicyCreate, PolicyUpdate
from .interfaces import WireModel


@dataclass(frozen=True)
class ResourceContract:
    name: str                            # singular, e.g. "policy"
    plural: str                          # e.g. "policies"
    path: str                            # collection path under the base URL
    model: Type[WireModel]
    create_model: Type[WireModel]
    update_model: Type[WireModel]
    required_fields: Tuple[str, ...]     # wire (camelCase) names

    def item_path(self, entity_id: int) -> str:
        return f"{self.path}/{entity_id}"

    def matches(self, raw: object) -> bool:
        """Structural check: does ``raw`` look like a bare entity of this resource?"""
        return isinstance(raw, dict) and all(key in raw for key in self.required_fields)


CLIENTS = ResourceContract(
    name="client",
    plural="clients",
    path="/clients",
    model=Client,
    create_model=ClientCreate,
    update_model=ClientUpdate,
    required_fields=("id", "firstName", "lastName"),
)

POLICIES = ResourceContract(
    name="policy",
    plural="policies",
    path="/policies",
    model=Policy,
    create_model=PolicyCreate,
    update_model=PolicyUpdate,
    required_fields=("id", "policyNumber", "status"),
)
