from datetime import date

import pytest

from src.console.controllers import CreateFormController, EditFormController, ViewStatus
from src.console.navigation import Navigator
from src.console.schemas import CLIENT_VIEW, POLICY_VIEW
from src.integrations.contracts import PolicyStatus
from tests.helpers import FIXED_TODAY


def _policy_values(**overrides):
    values = {
        "policy_number": "POL-NEW-9",
        "policy_type": "AUTO",
        "start_date": "2030-01-15",
        "end_date": "2030-01-15",
        "premium_amount": "250",
        "coverage_amount": "50000",
        "status": "ACTIVE",
        "client_id": 1,
    }
    values.update(overrides)
    return values


def _create_policy_form(api, **kwargs):
    return CreateFormController(
        POLICY_VIEW,
        api.policies,
        navigator=Navigator("/policies"),
        owner_resource=api.clients,
        today=lambda: FIXED_TODAY,
        **kwargs,
    )


class CountingClients:
    def __init__(self, api):
        self.api = api
        self.calls = 0

    async def list(self):
        self.calls += 1
        return await self.api.clients.list()


def test_create_form_seeded_with_defaults(api):
    form = _create_policy_form(api)

    assert form.state.values["status"] == "ACTIVE"
    assert form.state.values["policy_type"] == "HEALTH"
    assert form.state.values["policy_number"] == ""
    assert form.state.owner_locked is False


@pytest.mark.asyncio
async def test_create_submits_and_navigates_to_new_detail(api, seeded_backend):
    form = _create_policy_form(api)
    await form.mount()

    new_id = await form.submit(_policy_values())

    assert new_id == 13
    assert form.navigator.current == "/policies/13"
    created = seeded_backend.get_policy(13)
    assert created.client_id == 1
    assert created.premium_amount == 250.0
    assert form.state.saving is False


@pytest.mark.asyncio
async def test_start_date_before_today_blocks_submission(api, seeded_backend):
    form = _create_policy_form(api)

    new_id = await form.submit(_policy_values(start_date="2030-01-14", end_date="2030-02-01"))

    assert new_id is None
    assert form.state.field_errors == {"start_date": "Start date cannot be in the past"}
    assert len(seeded_backend.list_policies()) == 12
    assert form.navigator.current == "/policies"


@pytest.mark.asyncio
async def test_end_date_before_start_blocks_submission(api, seeded_backend):
    form = _create_policy_form(api)

    assert await form.submit(_policy_values(start_date="2030-03-01", end_date="2030-02-28")) is None

    assert form.state.field_errors == {"end_date": "End date cannot be before start date"}
    assert len(seeded_backend.list_policies()) == 12


@pytest.mark.asyncio
async def test_editing_a_field_clears_only_its_error(api):
    form = _create_policy_form(api)
    await form.submit(_policy_values(policy_number="", start_date="2030-01-01", end_date="2029-12-31"))
    assert set(form.state.field_errors) == {"policy_number", "start_date", "end_date"}

    form.change_field("start_date", "2030-01-20")

    assert set(form.state.field_errors) == {"policy_number", "end_date"}
    assert form.state.values["start_date"] == "2030-01-20"


@pytest.mark.asyncio
async def test_owner_from_navigation_is_preselected_and_locked(api, seeded_backend):
    form = _create_policy_form(api, owner_id=3)
    await form.mount()

    form.change_field("client_id", 1)
    new_id = await form.submit(_policy_values(client_id=2))

    assert form.state.owner_locked is True
    assert seeded_backend.get_policy(new_id).client_id == 3


@pytest.mark.asyncio
async def test_owner_options_fetched_once(api):
    clients = CountingClients(api)
    form = CreateFormController(POLICY_VIEW, api.policies, owner_resource=clients, today=lambda: FIXED_TODAY)

    await form.mount()
    await form.mount()

    assert clients.calls == 1
    assert [c.id for c in form.state.owner_options] == [1, 2, 3, 4]


@pytest.mark.asyncio
async def test_backend_rejection_sets_static_error(api):
    form = _create_policy_form(api)

    new_id = await form.submit(_policy_values(client_id=99))

    assert new_id is None
    assert form.state.error == "Failed to create policy. Please try again."
    assert form.state.field_errors == {}
    assert form.navigator.current == "/policies"


@pytest.mark.asyncio
async def test_client_form_validates_and_creates(api):
    form = CreateFormController(CLIENT_VIEW, api.clients, navigator=Navigator("/clients"), today=lambda: FIXED_TODAY)

    assert await form.submit({"first_name": "Grace", "last_name": "Hopper", "email": "grace-at-navy"}) is None
    assert form.state.field_errors == {"email": "Email is not valid"}

    new_id = await form.submit({"email": "grace@navy.example", "date_of_birth": "1906-12-09"})

    assert new_id == 5
    assert form.navigator.current == "/clients/5"


@pytest.mark.asyncio
async def test_edit_seeds_form_from_entity(api):
    form = EditFormController(POLICY_VIEW, api.policies, 2, owner_resource=api.clients, today=lambda: FIXED_TODAY)

    state = await form.mount()

    assert state.status is ViewStatus.LOADED
    assert state.values["start_date"] == "2030-02-14"
    assert state.values["policy_type"] == "LIFE"
    assert state.values["client_id"] == 1
    assert len(state.owner_options) == 4


@pytest.mark.asyncio
async def test_edit_submit_merges_id_and_navigates(api, seeded_backend):
    form = EditFormController(
        POLICY_VIEW, api.policies, 4, navigator=Navigator("/policies/edit/4"), today=lambda: FIXED_TODAY
    )
    await form.mount()

    assert await form.submit({"status": "CANCELLED", "premium_amount": "310.25"}) is True

    updated = seeded_backend.get_policy(4)
    assert updated.status is PolicyStatus.CANCELLED
    assert updated.premium_amount == 310.25
    assert updated.policy_number == "POL-2030-0004"
    assert form.navigator.current == "/policies/4"


@pytest.mark.asyncio
async def test_edit_of_missing_entity_is_terminal_not_found(api):
    form = EditFormController(POLICY_VIEW, api.policies, 999, today=lambda: FIXED_TODAY)

    state = await form.mount()

    assert state.status is ViewStatus.NOT_FOUND
    assert state.error == "Policy not found."
    assert await form.submit({"status": "ACTIVE"}) is False


@pytest.mark.asyncio
async def test_edit_update_failure_keeps_form(api, seeded_backend):
    form = EditFormController(POLICY_VIEW, api.policies, 5, navigator=Navigator("/policies/edit/5"), today=lambda: FIXED_TODAY)
    await form.mount()
    seeded_backend.delete_policy(5)

    assert await form.submit({"status": "EXPIRED"}) is False

    assert form.state.error == "Policy not found."
    assert form.navigator.current == "/policies/edit/5"


@pytest.mark.asyncio
async def test_policy_in_force_can_be_edited_without_moving_start(api, seeded_backend):
    later = date(2030, 3, 1)
    seeded_backend._today = lambda: later
    form = EditFormController(POLICY_VIEW, api.policies, 1, today=lambda: later)
    await form.mount()

    assert await form.submit({"status": "CANCELLED"}) is True
    assert seeded_backend.get_policy(1).status is PolicyStatus.CANCELLED

    moved = EditFormController(POLICY_VIEW, api.policies, 1, today=lambda: later)
    await moved.mount()
    assert await moved.submit({"start_date": "2030-02-01"}) is False
    assert moved.state.field_errors == {"start_date": "Start date cannot be in the past"}
