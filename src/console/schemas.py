"""
Entity view descriptors.

One descriptor per entity type drives the generic list, detail and form
controllers: labels, table columns, sortable fields, form defaults, which
form fields hold calendar dates, and the client-side validator.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Dict, Tuple

from src.integrations.contracts.interfaces import PolicyStatus, PolicyType, WireModel
from src.integrations.contracts.resources import CLIENTS, POLICIES, ResourceContract
from src.console.validation import FormValidator, validate_client_form, validate_policy_form


@dataclass(frozen=True)
class EntityView:
    contract: ResourceContract
    title: str                                   # list heading, e.g. "Insurance Policies"
    columns: Tuple[Tuple[str, str], ...]         # (attribute, header label)
    form_fields: Tuple[str, ...]
    date_fields: Tuple[str, ...] = ()
    sortable: Tuple[str, ...] = ("id",)
    defaults: Dict[str, Any] = field(default_factory=dict)
    validator: FormValidator = lambda values, **context: {}
    delete_prompt: str = "Are you sure you want to delete this item?"

    @property
    def singular(self) -> str:
        return self.contract.name

    @property
    def plural(self) -> str:
        return self.contract.plural

    def list_path(self) -> str:
        return f"/{self.plural}"

    def detail_path(self, entity_id: int) -> str:
        return f"/{self.plural}/{entity_id}"

    def edit_path(self, entity_id: int) -> str:
        return f"/{self.plural}/edit/{entity_id}"

    def empty_message(self) -> str:
        return f"No {self.plural} found. Create a new one to get started."

    def initial_values(self) -> Dict[str, Any]:
        values: Dict[str, Any] = {name: "" for name in self.form_fields}
        values.update(self.defaults)
        return values

    def to_form_values(self, entity: WireModel) -> Dict[str, Any]:
        """Seed form values from a fetched entity.

        Date fields are reduced to ``YYYY-MM-DD`` so date inputs accept them.
        """
        values: Dict[str, Any] = {}
        for name in self.form_fields:
            value = getattr(entity, name, None)
            if name in self.date_fields:
                values[name] = _date_only(value)
            elif value is None:
                values[name] = ""
            else:
                values[name] = getattr(value, "value", value)
        return values


def _date_only(value: Any) -> str:
    if value is None or value == "":
        return ""
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    return str(value).split("T", 1)[0]


def cell_value(entity: Any, attribute: str) -> str:
    if attribute == "full_name":
        return f"{getattr(entity, 'first_name', '')} {getattr(entity, 'last_name', '')}".strip()
    value = getattr(entity, attribute, None)
    if value is None:
        return ""
    if isinstance(value, (date, datetime)):
        return _date_only(value)
    if isinstance(value, float):
        return f"{value:,.2f}"
    return str(getattr(value, "value", value))


CLIENT_VIEW = EntityView(
    contract=CLIENTS,
    title="Clients",
    columns=(
        ("full_name", "Name"),
        ("email", "Email"),
        ("phone_number", "Phone"),
        ("address", "Address"),
        ("date_of_birth", "Date of Birth"),
    ),
    form_fields=("first_name", "last_name", "email", "phone_number", "address", "date_of_birth"),
    date_fields=("date_of_birth",),
    sortable=("id", "firstName", "lastName", "email", "dateOfBirth"),
    validator=validate_client_form,
    delete_prompt="Are you sure you want to delete this client? This will also delete all associated policies.",
)

POLICY_VIEW = EntityView(
    contract=POLICIES,
    title="Insurance Policies",
    columns=(
        ("policy_number", "Policy Number"),
        ("policy_type", "Type"),
        ("status", "Status"),
        ("start_date", "Start Date"),
        ("end_date", "End Date"),
        ("premium_amount", "Premium"),
        ("coverage_amount", "Coverage"),
    ),
    form_fields=(
        "policy_number",
        "policy_type",
        "start_date",
        "end_date",
        "premium_amount",
        "coverage_amount",
        "status",
        "client_id",
    ),
    date_fields=("start_date", "end_date"),
    sortable=("id", "policyNumber", "policyType", "status", "startDate", "endDate", "premiumAmount", "coverageAmount"),
    defaults={"policy_type": PolicyType.HEALTH.value, "status": PolicyStatus.ACTIVE.value},
    validator=validate_policy_form,
    delete_prompt="Are you sure you want to delete this policy?",
)

VIEWS: Dict[str, EntityView] = {view.plural: view for view in (CLIENT_VIEW, POLICY_VIEW)}