"""
Client and Policy contracts.

Canonical shapes for the two entities the console manages. Both the real
HTTP client and the mock backend build and return these models, so views
never look at raw dictionaries.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from pydantic import Field, field_validator, model_validator

from .interfaces import PolicyStatus, PolicyType, WireModel, as_calendar_date, as_timestamp


# ---------------------------------------------------------------------------
# Client
# ---------------------------------------------------------------------------

class ClientCreate(WireModel):
    first_name: str = Field(min_length=1)
    last_name: str = Field(min_length=1)
    email: str
    phone_number: str = ""
    address: str = ""
    date_of_birth: Optional[date] = None

    @field_validator("date_of_birth", mode="before")
    @classmethod
    def _calendar_date(cls, value):
        return as_calendar_date(value)


class ClientUpdate(ClientCreate):
    id: int


class Client(ClientUpdate):
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator("created_at", "updated_at", mode="before")
    @classmethod
    def _timestamps(cls, value):
        return as_timestamp(value)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


# ---------------------------------------------------------------------------
# Policy
# ---------------------------------------------------------------------------

class PolicyCreate(WireModel):
    policy_number: str = Field(min_length=1)
    policy_type: PolicyType = PolicyType.HEALTH
    start_date: date
    end_date: date
    premium_amount: float = Field(ge=0)
    coverage_amount: float = Field(ge=0)
    status: PolicyStatus = PolicyStatus.ACTIVE
    client_id: Optional[int] = None

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def _calendar_date(cls, value):
        return as_calendar_date(value)


class PolicyUpdate(PolicyCreate):
    id: int


class Policy(PolicyUpdate):
    client: Optional[Client] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator("created_at", "updated_at", mode="before")
    @classmethod
    def _timestamps(cls, value):
        return as_timestamp(value)

    @model_validator(mode="after")
    def _owner_matches_embedded_client(self) -> "Policy":
        if self.client is None:
            return self
        if self.client_id is None:
            self.client_id = self.client.id
        elif self.client.id != self.client_id:
            raise ValueError(
                f"embedded client {self.client.id} does not match clientId {self.client_id}"
            )
        return self
