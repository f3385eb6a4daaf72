from datetime import datetime

import pytest

from src.console.controllers import DetailController, DetailState, ListController, ViewStatus
from src.console.controllers.form_controller import FormState
from src.console.controllers.list_controller import ListState
from src.console.presentation import render_alert, render_detail, render_form_errors, render_list, render_pager
from src.console.schemas import CLIENT_VIEW, POLICY_VIEW, VIEWS, cell_value
from src.integrations.contracts import Policy


def _policy(**overrides):
    values = dict(
        id=3,
        policy_number="POL-3",
        policy_type="HOME",
        start_date="2030-05-01T00:00:00",
        end_date="2031-05-01",
        premium_amount=1234.5,
        coverage_amount=100000,
        status="ACTIVE",
        client_id=1,
        created_at="2030-01-15T09:30:00",
    )
    values.update(overrides)
    return Policy(**values)


def test_views_registry_and_paths():
    assert set(VIEWS) == {"clients", "policies"}
    assert POLICY_VIEW.detail_path(3) == "/policies/3"
    assert POLICY_VIEW.edit_path(3) == "/policies/edit/3"
    assert CLIENT_VIEW.list_path() == "/clients"


def test_form_values_reduce_dates_to_calendar_days():
    values = POLICY_VIEW.to_form_values(_policy())

    assert values["start_date"] == "2030-05-01"
    assert values["end_date"] == "2031-05-01"
    assert values["policy_type"] == "HOME"
    assert values["premium_amount"] == 1234.5


def test_cell_values_formatted_for_display():
    policy = _policy(created_at=datetime(2030, 1, 15, 9, 30))

    assert cell_value(policy, "premium_amount") == "1,234.50"
    assert cell_value(policy, "status") == "ACTIVE"
    assert cell_value(policy, "start_date") == "2030-05-01"
    assert cell_value(policy, "client") == ""


def test_empty_list_message():
    state = ListState(status=ViewStatus.LOADED)

    assert render_list(POLICY_VIEW, state).splitlines() == [
        "Insurance Policies",
        "No policies found. Create a new one to get started.",
    ]


def test_loading_and_failed_lists():
    assert "Loading..." in render_list(CLIENT_VIEW, ListState(status=ViewStatus.LOADING))

    failed = ListState(status=ViewStatus.FAILED, error="Failed to load clients. Please try again later.")
    assert render_list(CLIENT_VIEW, failed).splitlines()[1] == "[error] Failed to load clients. Please try again later."


def test_pager_shows_disabled_edges():
    first = ListState(page=0, total_pages=3, total_elements=12, status=ViewStatus.LOADED)
    last = ListState(page=2, total_pages=3, total_elements=12, status=ViewStatus.LOADED)

    assert "Page 1 of 3 > >>" in render_pager(first)
    assert "<" not in render_pager(first)
    assert "<< < Page 3 of 3" in render_pager(last)
    assert render_pager(ListState()) == "Page 0 of 0"


@pytest.mark.asyncio
async def test_rendered_list_and_detail_from_controllers(api):
    listing = ListController(POLICY_VIEW, api.policies)
    await listing.mount()
    text = render_list(POLICY_VIEW, listing.state)

    assert "Policy Number" in text
    assert "POL-2030-0001" in text
    assert "Page 1 of 3" in text

    detail = DetailController(CLIENT_VIEW, api.clients, 1, owned=api.policies, owned_view=POLICY_VIEW)
    await detail.mount()
    text = render_detail(CLIENT_VIEW, detail.state, POLICY_VIEW)

    assert text.startswith("Client #1")
    assert "Name: Amelia Nakato" in text
    assert "POL-2030-0003" in text


def test_detail_not_found_and_form_errors():
    assert render_detail(POLICY_VIEW, DetailState(error="Policy not found.")) == "[error] Policy not found."

    form = FormState(field_errors={"start_date": "Start date cannot be in the past"}, error=None)
    assert render_form_errors(form) == "  start_date: Start date cannot be in the past"
    assert render_alert("success", "Saved") == "[ok] Saved"
