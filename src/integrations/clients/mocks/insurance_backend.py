"""
In-memory insurance backend for local development and tests.

Mirrors the REST service the console talks to: ids and audit timestamps are
assigned here, collections can be paged and sorted, policies can be filtered
by owning client, and deleting a client also deletes its policies. It is NOT
intended for production use.
"""

from __future__ import annotations

import math
from datetime import date, datetime, timedelta
from typing import Callable, Dict, List, Optional, Tuple

from pydantic.alias_generators import to_snake

from src.integrations.contracts.entities import (
    Client,
    ClientCreate,
    Policy,
    PolicyCreate,
)
from src.integrations.contracts.interfaces import PagedResponse, PolicyStatus, PolicyType, SortDirection


_UNSORTABLE = {"client"}


class EntityNotFound(LookupError):
    def __init__(self, resource: str, entity_id: int) -> None:
        super().__init__(f"{resource.capitalize()} not found with id: {entity_id}")
        self.resource = resource
        self.entity_id = entity_id


class InMemoryInsuranceBackend:
    """
    In-memory stand-in for the insurance REST backend.

    ``clock`` and ``today`` are injectable so date rules can be tested
    deterministically.
    """

    def __init__(
        self,
        clock: Callable[[], datetime] = datetime.now,
        today: Callable[[], date] = date.today,
    ) -> None:
        self._clock = clock
        self._today = today
        self._clients: Dict[int, Client] = {}
        self._policies: Dict[int, Policy] = {}
        self._next_client_id = 1
        self._next_policy_id = 1

    def today(self) -> date:
        return self._today()

    # ------------------------------------------------------------------ #
    # Clients
    # ------------------------------------------------------------------ #
    def list_clients(self) -> List[Client]:
        return [self._clients[k] for k in sorted(self._clients)]

    def page_clients(self, page: int, size: int, sort: str = "id", direction: str = "asc") -> PagedResponse:
        return self._page(self.list_clients(), Client, page, size, sort, direction)

    def get_client(self, client_id: int) -> Client:
        client = self._clients.get(client_id)
        if client is None:
            raise EntityNotFound("client", client_id)
        return client

    def create_client(self, payload: ClientCreate) -> Client:
        now = self._clock()
        client = Client(
            **payload.model_dump(exclude={"id"}),
            id=self._next_client_id,
            created_at=now,
            updated_at=now,
        )
        self._clients[client.id] = client
        self._next_client_id += 1
        return client

    def update_client(self, client_id: int, payload: ClientCreate) -> Client:
        existing = self.get_client(client_id)
        client = Client(
            **payload.model_dump(exclude={"id"}),
            id=client_id,
            created_at=existing.created_at,
            updated_at=self._clock(),
        )
        self._clients[client_id] = client
        return client

    def delete_client(self, client_id: int) -> None:
        self.get_client(client_id)
        for policy_id in [p.id for p in self._policies.values() if p.client_id == client_id]:
            del self._policies[policy_id]
        del self._clients[client_id]

    # ------------------------------------------------------------------ #
    # Policies
    # ------------------------------------------------------------------ #
    def list_policies(self) -> List[Policy]:
        return [self._with_client(self._policies[k]) for k in sorted(self._policies)]

    def page_policies(self, page: int, size: int, sort: str = "id", direction: str = "asc") -> PagedResponse:
        return self._page(self.list_policies(), Policy, page, size, sort, direction)

    def policies_for_client(self, client_id: int) -> List[Policy]:
        return [p for p in self.list_policies() if p.client_id == client_id]

    def get_policy(self, policy_id: int) -> Policy:
        policy = self._policies.get(policy_id)
        if policy is None:
            raise EntityNotFound("policy", policy_id)
        return self._with_client(policy)

    def create_policy(self, payload: PolicyCreate) -> Policy:
        self._validate_policy(payload)
        now = self._clock()
        policy = Policy(
            **payload.model_dump(exclude={"id"}),
            id=self._next_policy_id,
            created_at=now,
            updated_at=now,
        )
        self._policies[policy.id] = policy
        self._next_policy_id += 1
        return self._with_client(policy)

    def update_policy(self, policy_id: int, payload: PolicyCreate) -> Policy:
        existing = self.get_policy(policy_id)
        self._validate_policy(payload, stored_start=existing.start_date)
        policy = Policy(
            **payload.model_dump(exclude={"id"}),
            id=policy_id,
            created_at=existing.created_at,
            updated_at=self._clock(),
        )
        self._policies[policy_id] = policy
        return self._with_client(policy)

    def delete_policy(self, policy_id: int) -> None:
        self.get_policy(policy_id)
        del self._policies[policy_id]

    # ------------------------------------------------------------------ #
    # Helpers
    # ------------------------------------------------------------------ #
    def _validate_policy(self, payload: PolicyCreate, stored_start: Optional[date] = None) -> None:
        if payload.start_date < self._today() and payload.start_date != stored_start:
            raise ValueError("Coverage start date cannot be in the past")
        if payload.end_date < payload.start_date:
            raise ValueError("Coverage end date must be after start date")
        if payload.client_id is not None and payload.client_id not in self._clients:
            raise EntityNotFound("client", payload.client_id)

    def _with_client(self, policy: Policy) -> Policy:
        owner = self._clients.get(policy.client_id) if policy.client_id is not None else None
        return policy.model_copy(update={"client": owner})

    @staticmethod
    def _page(items: List, model, page: int, size: int, sort: str, direction: str) -> PagedResponse:
        if size < 1:
            raise ValueError("Page size must be at least 1")
        if page < 0:
            raise ValueError("Page index must not be negative")
        field = to_snake(sort or "id")
        if field not in model.model_fields or field in _UNSORTABLE:
            raise ValueError(f"Unknown sort field: {sort}")
        descending = (direction or "").lower() != SortDirection.ASC.value

        def sort_key(item) -> Tuple:
            value = getattr(item, field)
            # None sorts after everything else in ascending order
            return (value is None, value if value is not None else 0, item.id)

        ordered = sorted(items, key=sort_key, reverse=descending)
        total = len(ordered)
        total_pages = math.ceil(total / size) if total else 0
        if total_pages and page >= total_pages:
            page = total_pages - 1
        start = page * size
        content = ordered[start:start + size]
        return PagedResponse(
            content=content,
            page=page,
            size=size,
            total_elements=total,
            total_pages=total_pages,
            last=page >= total_pages - 1,
        )


def seed_demo_data(backend: InMemoryInsuranceBackend, policies_per_client: int = 3) -> InMemoryInsuranceBackend:
    """Populate a backend with a handful of clients and policies."""
    people = [
        ("Amelia", "Nakato", "amelia.nakato@example.com", "+256701000001", "Plot 4, Kampala Road", date(1985, 4, 12)),
        ("Brian", "Okello", "brian.okello@example.com", "+256701000002", "12 Jinja Avenue", date(1979, 11, 3)),
        ("Carla", "Mensah", "carla.mensah@example.com", "+256701000003", "7 Lake Drive, Entebbe", date(1992, 6, 27)),
        ("Daniel", "Ssempa", "daniel.ssempa@example.com", "+256701000004", "31 Mbarara Street", date(1968, 1, 19)),
    ]
    types = list(PolicyType)
    statuses = [PolicyStatus.ACTIVE, PolicyStatus.PENDING, PolicyStatus.ACTIVE, PolicyStatus.INACTIVE]
    start = backend.today()
    counter = 1
    for first, last, email, phone, address, dob in people:
        client = backend.create_client(
            ClientCreate(
                first_name=first,
                last_name=last,
                email=email,
                phone_number=phone,
                address=address,
                date_of_birth=dob,
            )
        )
        for i in range(policies_per_client):
            policy_type = types[(counter - 1) % len(types)]
            backend.create_policy(
                PolicyCreate(
                    policy_number=f"POL-{start.year}-{counter:04d}",
                    policy_type=policy_type,
                    start_date=start + timedelta(days=i * 30),
                    end_date=start + timedelta(days=365 + i * 30),
                    premium_amount=round(120.0 + 35.5 * counter, 2),
                    coverage_amount=float(10_000 * (counter % 5 + 1)),
                    status=statuses[(counter - 1) % len(statuses)],
                    client_id=client.id,
                )
            )
            counter += 1
    return backend


__all__ = ["EntityNotFound", "InMemoryInsuranceBackend", "seed_demo_data"]
