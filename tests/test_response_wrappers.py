from datetime import date, datetime, timedelta, timezone

import pytest

from src.integrations.contracts import CLIENTS, POLICIES, Policy
from src.integrations.policy.response_wrappers import (
    MalformedResponseError,
    ResponseShape,
    classify_shape,
    normalize_ack,
    normalize_envelope,
    normalize_paged,
)


def _policy_wire(**overrides):
    body = {
        "id": 7,
        "policyNumber": "POL-7",
        "policyType": "LIFE",
        "startDate": "2030-02-01",
        "endDate": "2031-02-01",
        "premiumAmount": 120.5,
        "coverageAmount": 50000,
        "status": "ACTIVE",
        "clientId": 3,
    }
    body.update(overrides)
    return body


def test_classify_shape_tags_every_tolerated_shape():
    assert classify_shape({"data": None}, POLICIES) is ResponseShape.ENVELOPE
    assert classify_shape(_policy_wire(), POLICIES) is ResponseShape.ENTITY
    assert classify_shape([_policy_wire()], POLICIES) is ResponseShape.ARRAY
    assert classify_shape({"content": [], "totalPages": 0}, POLICIES) is ResponseShape.PAGED
    assert classify_shape({}, POLICIES) is ResponseShape.MALFORMED
    assert classify_shape("oops", POLICIES) is ResponseShape.MALFORMED
    # a client-shaped object is not a policy
    assert classify_shape({"id": 1, "firstName": "A", "lastName": "B"}, POLICIES) is ResponseShape.MALFORMED


def test_single_entity_extracted_from_envelope_and_bare_object():
    wrapped = normalize_envelope({"data": _policy_wire(), "message": "ok", "success": True}, POLICIES)
    bare = normalize_envelope(_policy_wire(), POLICIES)

    assert isinstance(wrapped.data, Policy)
    assert wrapped.data == bare.data
    assert wrapped.message == "ok"
    assert bare.message == "" and bare.success is True


def test_list_extracted_from_envelope_bare_array_and_page():
    expected = normalize_envelope({"data": [_policy_wire()]}, POLICIES, many=True).data
    from_array = normalize_envelope([_policy_wire()], POLICIES, many=True).data
    from_page = normalize_envelope(
        {"content": [_policy_wire()], "page": 0, "size": 5, "totalElements": 1, "totalPages": 1, "last": True},
        POLICIES,
        many=True,
    ).data

    assert expected == from_array == from_page
    assert expected[0].policy_number == "POL-7"


def test_unrelated_shapes_are_malformed():
    with pytest.raises(MalformedResponseError):
        normalize_envelope({}, POLICIES)
    with pytest.raises(MalformedResponseError):
        normalize_envelope([_policy_wire()], POLICIES)  # array where one entity is expected
    with pytest.raises(MalformedResponseError):
        normalize_envelope(_policy_wire(), POLICIES, many=True)  # entity where a list is expected
    with pytest.raises(MalformedResponseError):
        normalize_envelope(42, CLIENTS)


def test_envelope_with_null_data_is_returned_empty():
    response = normalize_envelope({"data": None, "message": "Policy not found", "success": False}, POLICIES)

    assert response.data is None
    assert response.success is False
    assert response.message == "Policy not found"


def test_invalid_payload_inside_envelope_is_malformed():
    with pytest.raises(MalformedResponseError) as exc_info:
        normalize_envelope({"data": _policy_wire(status="SOMETIMES")}, POLICIES)

    assert exc_info.value.payload["data"]["status"] == "SOMETIMES"


def test_embedded_client_must_match_client_id():
    client = {"id": 4, "firstName": "Ada", "lastName": "Lovelace", "email": "ada@example.com"}
    with pytest.raises(MalformedResponseError):
        normalize_envelope(_policy_wire(client=client), POLICIES)

    filled = normalize_envelope(_policy_wire(clientId=None, client=client), POLICIES).data
    assert filled.client_id == 4


def test_date_time_values_reduced_to_calendar_dates():
    policy = normalize_envelope(_policy_wire(startDate="2030-02-01T10:15:00"), POLICIES).data

    assert policy.start_date == date(2030, 2, 1)


def test_normalize_paged_builds_typed_window():
    page = normalize_paged(
        {"content": [_policy_wire()], "page": 1, "size": 1, "totalElements": 3, "totalPages": 3, "last": False},
        POLICIES,
    )

    assert page.page == 1
    assert page.total_elements == 3
    assert isinstance(page.content[0], Policy)
    assert page.is_out_of_range is False


def test_normalize_paged_rejects_oversized_content_and_non_pages():
    with pytest.raises(MalformedResponseError):
        normalize_paged(
            {"content": [_policy_wire(), _policy_wire(id=8)], "page": 0, "size": 1, "totalElements": 2, "totalPages": 2},
            POLICIES,
        )
    with pytest.raises(MalformedResponseError):
        normalize_paged({"data": []}, POLICIES)


def test_out_of_range_page_is_flagged_not_rejected():
    page = normalize_paged(
        {"content": [], "page": 4, "size": 5, "totalElements": 6, "totalPages": 2, "last": True},
        POLICIES,
    )

    assert page.is_out_of_range is True


def test_normalize_ack_tolerates_empty_and_enveloped_bodies():
    assert normalize_ack(None).data is None
    assert normalize_ack("").success is True
    assert normalize_ack({"data": None, "message": "Policy deleted successfully", "success": True}).message == (
        "Policy deleted successfully"
    )
    with pytest.raises(MalformedResponseError):
        normalize_ack([1, 2])


@pytest.mark.parametrize(
    "stamp,expected",
    [
        ("2025-03-01T10:15:00.12345", datetime(2025, 3, 1, 10, 15, 0, 123450)),
        ("2025-03-01T10:15:00.123456789", datetime(2025, 3, 1, 10, 15, 0, 123456)),
        ("2025-03-01T10:15:00Z", datetime(2025, 3, 1, 10, 15, tzinfo=timezone.utc)),
        ("2025-03-01", datetime(2025, 3, 1)),
    ],
)
def test_backend_audit_timestamps_parsed(stamp, expected):
    policy = normalize_envelope({"data": _policy_wire(createdAt=stamp, updatedAt=stamp)}, POLICIES).data

    # nanoseconds are cut down to microsecond precision
    assert abs(policy.created_at - expected) <= timedelta(microseconds=1)
    assert policy.updated_at == policy.created_at
