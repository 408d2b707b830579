"""Tests for IlertApi escalation policy operations."""

from collections.abc import Callable
from typing import Any
from unittest.mock import MagicMock

import httpx
import pytest

from ilert_api import (
    EscalationPolicy,
    EscalationRule,
    IlertApi,
    IlertApiError,
    IlertValidationError,
    Schedule,
    TeamShort,
    User,
)

POLICY = {
    "id": 3,
    "name": "Default",
    "escalationRules": [
        {"user": {"id": 1, "username": "jdoe"}, "escalationTimeout": 15},
        {"schedule": {"id": 5, "name": "On call"}, "escalationTimeout": 30},
    ],
    "repeating": True,
    "frequency": 2,
    "teams": [{"id": 9, "name": "SRE"}],
}


# --- Model Tests ---


def test_escalation_policy_model() -> None:
    policy = EscalationPolicy.model_validate(POLICY)

    assert policy.id == 3
    assert policy.name == "Default"
    assert policy.repeating is True
    assert policy.frequency == 2
    assert policy.teams == [TeamShort(id=9, name="SRE")]
    assert policy.escalation_rules[0].user == User(id=1, username="jdoe")
    assert policy.escalation_rules[0].schedule is None
    assert policy.escalation_rules[1].schedule == Schedule(id=5, name="On call")
    assert policy.escalation_rules[1].escalation_timeout == 30


def test_escalation_policy_to_request() -> None:
    """Test id is omitted when unset, escalation rules are always sent."""
    policy = EscalationPolicy(
        name="Default",
        escalation_rules=[EscalationRule(user=User(id=1), escalation_timeout=15)],
    )
    assert policy.to_request() == {
        "name": "Default",
        "escalationRules": [{"user": {"id": 1}, "escalationTimeout": 15}],
    }
    assert EscalationPolicy(name="Empty").to_request() == {
        "name": "Empty",
        "escalationRules": [],
    }


# --- Client Tests ---


def test_create_escalation_policy(
    ilert_api: IlertApi,
    mock_httpx_client: MagicMock,
    make_response: Callable[..., httpx.Response],
) -> None:
    mock_httpx_client.request.return_value = make_response(201, POLICY)
    policy = EscalationPolicy(
        name="Default",
        escalation_rules=[EscalationRule(user=User(id=1), escalation_timeout=15)],
    )

    created = ilert_api.create_escalation_policy(policy)

    assert created.id == 3
    mock_httpx_client.request.assert_called_once_with(
        "POST",
        "/api/v1/escalation-policies",
        params=None,
        json={
            "name": "Default",
            "escalationRules": [{"user": {"id": 1}, "escalationTimeout": 15}],
        },
    )


def test_create_escalation_policy_wrong_status(
    ilert_api: IlertApi,
    mock_httpx_client: MagicMock,
    make_response: Callable[..., httpx.Response],
) -> None:
    """Create expects 201, anything else is an error even if 2xx."""
    mock_httpx_client.request.return_value = make_response(200, POLICY)

    with pytest.raises(IlertApiError, match="Wrong status code 200"):
        ilert_api.create_escalation_policy(EscalationPolicy(name="Default"))


def test_get_escalation_policy(
    ilert_api: IlertApi,
    mock_httpx_client: MagicMock,
    make_response: Callable[..., httpx.Response],
) -> None:
    mock_httpx_client.request.return_value = make_response(200, POLICY)

    policy = ilert_api.get_escalation_policy(3)

    assert policy.name == "Default"
    mock_httpx_client.request.assert_called_once_with(
        "GET", "/api/v1/escalation-policies/3", params=None, json=None
    )


def test_get_escalation_policies(
    ilert_api: IlertApi,
    mock_httpx_client: MagicMock,
    make_response: Callable[..., httpx.Response],
) -> None:
    mock_httpx_client.request.return_value = make_response(
        200, [POLICY, {**POLICY, "id": 4, "name": "Night"}]
    )

    policies = ilert_api.get_escalation_policies()

    assert [p.name for p in policies] == ["Default", "Night"]
    mock_httpx_client.request.assert_called_once_with(
        "GET", "/api/v1/escalation-policies", params=None, json=None
    )


def test_get_escalation_policies_empty(
    ilert_api: IlertApi,
    mock_httpx_client: MagicMock,
    make_response: Callable[..., httpx.Response],
) -> None:
    mock_httpx_client.request.return_value = make_response(200, [])
    assert ilert_api.get_escalation_policies() == []


def test_update_escalation_policy(
    ilert_api: IlertApi,
    mock_httpx_client: MagicMock,
    make_response: Callable[..., httpx.Response],
) -> None:
    mock_httpx_client.request.return_value = make_response(
        200, {**POLICY, "name": "Renamed"}
    )
    policy = EscalationPolicy(name="Renamed", repeating=False)

    updated = ilert_api.update_escalation_policy(3, policy)

    assert updated.name == "Renamed"
    mock_httpx_client.request.assert_called_once_with(
        "PUT",
        "/api/v1/escalation-policies/3",
        params=None,
        json={"name": "Renamed", "escalationRules": [], "repeating": False},
    )


def test_delete_escalation_policy(
    ilert_api: IlertApi,
    mock_httpx_client: MagicMock,
    make_response: Callable[..., httpx.Response],
) -> None:
    mock_httpx_client.request.return_value = make_response(204)

    assert ilert_api.delete_escalation_policy(3) is None
    mock_httpx_client.request.assert_called_once_with(
        "DELETE", "/api/v1/escalation-policies/3", params=None, json=None
    )


def test_delete_escalation_policy_conflict(
    ilert_api: IlertApi,
    mock_httpx_client: MagicMock,
    make_response: Callable[..., httpx.Response],
) -> None:
    mock_httpx_client.request.return_value = make_response(
        409,
        {"status": 409, "message": "Policy is still in use", "code": "IN_USE"},
    )

    with pytest.raises(IlertApiError) as exc_info:
        ilert_api.delete_escalation_policy(3)

    assert exc_info.value.status_code == 409
    assert exc_info.value.code == "IN_USE"


@pytest.mark.parametrize(
    "call",
    [
        pytest.param(lambda api: api.create_escalation_policy(None), id="create"),
        pytest.param(lambda api: api.get_escalation_policy(None), id="get"),
        pytest.param(
            lambda api: api.update_escalation_policy(None, EscalationPolicy(name="a")),
            id="update-without-id",
        ),
        pytest.param(
            lambda api: api.update_escalation_policy(3, None),
            id="update-without-policy",
        ),
        pytest.param(lambda api: api.delete_escalation_policy(None), id="delete"),
    ],
)
def test_missing_required_input(
    ilert_api: IlertApi,
    mock_httpx_client: MagicMock,
    call: Callable[[IlertApi], Any],
) -> None:
    with pytest.raises(IlertValidationError, match="is required"):
        call(ilert_api)
    mock_httpx_client.request.assert_not_called()
