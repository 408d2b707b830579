"""iLert API client with hook system.

This module provides a stateless client for the iLert REST API. Every
operation follows the same path: validate input, send the request, check the
status code against the expected one, decode the body into a typed model.

Failed status checks raise IlertApiError. Transport errors (httpx.HTTPError)
propagate unchanged.
"""

import contextvars
import time
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Self

import httpx
import structlog

from ilert_api.config import API_ENDPOINT, TIMEOUT, IlertSettings
from ilert_api.errors import IlertApiError, IlertValidationError
from ilert_api.hooks import Hooks, invoke_with_hooks, with_hooks
from ilert_api.metrics import (
    ilert_request,
    ilert_request_duration,
    ilert_request_errors,
)
from ilert_api.models import (
    Connector,
    EscalationPolicy,
    GenericCountResponse,
    IlertModel,
    Incident,
    IncidentAction,
    IncidentLogEntry,
    IncidentResponder,
    IncidentStatus,
    Language,
)
from ilert_api.version import VERSION

logger = structlog.get_logger(__name__)

API_ROUTES_CONNECTORS = "/api/v1/connectors"
API_ROUTES_ESCALATION_POLICIES = "/api/v1/escalation-policies"
API_ROUTES_INCIDENTS = "/api/v1/incidents"

USER_AGENT = f"ilert-api/{VERSION}"

# Local storage for latency tracking (tuple stack to support nested calls)
_latency_tracker: contextvars.ContextVar[tuple[float, ...]] = contextvars.ContextVar(
    f"{__name__}.latency_tracker", default=()
)


@dataclass(frozen=True)
class IlertApiCallContext:
    """Context information passed to API call hooks.

    Attributes:
        method: API method name (e.g., "incidents.get")
        verb: HTTP verb (e.g., "GET")
        endpoint: iLert API endpoint the client talks to
    """

    method: str
    verb: str
    endpoint: str


def _metrics_hook(context: IlertApiCallContext) -> None:
    """Built-in Prometheus metrics hook.

    Hooks wrap the whole client method, so calls rejected by input validation
    before any request is sent are counted as well (and as errors).
    """
    ilert_request.labels(context.method, context.verb).inc()


def _error_metrics_hook(context: IlertApiCallContext) -> None:
    ilert_request_errors.labels(context.method, context.verb).inc()


def _latency_start_hook(_context: IlertApiCallContext) -> None:
    """Built-in hook to start latency measurement."""
    _latency_tracker.set((*_latency_tracker.get(), time.perf_counter()))


def _latency_end_hook(context: IlertApiCallContext) -> None:
    """Built-in hook to record latency measurement."""
    stack = _latency_tracker.get()
    start_time = stack[-1]
    _latency_tracker.set(stack[:-1])
    duration = time.perf_counter() - start_time
    ilert_request_duration.labels(context.method, context.verb).observe(duration)


def _request_log_hook(context: IlertApiCallContext) -> None:
    """Built-in hook for logging API requests."""
    logger.debug(
        "API request",
        method=context.method,
        verb=context.verb,
        endpoint=context.endpoint,
    )


def _context(method: str, verb: str) -> Any:
    return lambda self: IlertApiCallContext(
        method=method, verb=verb, endpoint=self.endpoint
    )


def check_response(response: httpx.Response, *expected_status_codes: int) -> None:
    """Raise IlertApiError if the response status is not one of the expected ones.

    Args:
        response: httpx response to check
        *expected_status_codes: Status codes that mean success

    Raises:
        IlertApiError: With code and message from the API error body, or a
            generic "Wrong status code" error if the body can't be decoded
    """
    if response.status_code in expected_status_codes:
        return
    error = IlertApiError.from_response(response)
    logger.warning(
        "API error",
        status_code=response.status_code,
        code=error.code,
        message=error.message,
    )
    raise error


def _require(value: Any, name: str) -> None:
    if value is None:
        raise IlertValidationError(f"{name} is required")


def _format_time(value: datetime | str) -> str:
    return value.isoformat() if isinstance(value, datetime) else value


def _language_params(language: Language | str | None) -> list[tuple[str, str]] | None:
    """Only "en" and "de" are sent, anything else uses the API default."""
    if language in {Language.EN, Language.DE}:
        return [("lng", str(language))]
    return None


def _repeated(
    key: str, values: Iterable[Any] | None, name: str
) -> list[tuple[str, str]]:
    """Repeat key once per value. A bare string is rejected, not split."""
    if isinstance(values, str):
        raise IlertValidationError(f"{name} must be a list of values, not a string")
    return [(key, str(value)) for value in values or []]


def _incident_filter_params(
    *,
    states: Iterable[IncidentStatus | str] | None,
    alert_sources: Iterable[int] | None,
    assigned_to_user_ids: Iterable[int] | None,
    assigned_to_usernames: Iterable[str] | None,
    from_: datetime | str | None,
    until: datetime | str | None,
) -> list[tuple[str, str]]:
    params: list[tuple[str, str]] = []
    if from_ is not None:
        params.append(("from", _format_time(from_)))
    if until is not None:
        params.append(("until", _format_time(until)))
    params.extend(_repeated("state", states, "states"))
    params.extend(_repeated("alert-source", alert_sources, "alert_sources"))
    params.extend(
        _repeated("assigned-to", assigned_to_user_ids, "assigned_to_user_ids")
    )
    params.extend(
        _repeated("assigned-to", assigned_to_usernames, "assigned_to_usernames")
    )
    return params


@with_hooks(
    hooks=Hooks(
        pre_hooks=[
            _metrics_hook,
            _request_log_hook,
            _latency_start_hook,
        ],
        post_hooks=[_latency_end_hook],
        error_hooks=[_error_metrics_hook],
    )
)
class IlertApi:
    """Stateless iLert API client with hook system.

    Provides one method per API operation for incidents, escalation policies
    and connectors.

    Authentication:
    - api_token: sent as "Authorization: Bearer <token>"
    - organization, username and password: basic auth with
      "<username>@<organization>" as user name
    The token wins when both are given.

    Hook System:
    - Always includes built-in hooks (metrics, logging, latency)
    - Supports additional custom hooks via hooks parameter
    - Hooks receive IlertApiCallContext with method, verb, endpoint

    Example:
        >>> api = IlertApi(api_token="...")
        >>> incident = api.get_incident(1234)
        >>> print(incident.summary)
    """

    # Set by @with_hooks decorator
    _hooks: Hooks

    def __init__(
        self,
        endpoint: str = API_ENDPOINT,
        api_token: str | None = None,
        organization: str | None = None,
        username: str | None = None,
        password: str | None = None,
        timeout: int = TIMEOUT,
        user_agent: str | None = None,
        hooks: Hooks | None = None,  # noqa: ARG002 - Handled by @with_hooks decorator
    ) -> None:
        """Initialize iLert API client.

        Args:
            endpoint: iLert API base URL (default: "https://api.ilert.com")
            api_token: API token (Bearer token)
            organization: Organization for basic auth
            username: Username for basic auth
            password: Password for basic auth
            timeout: API request timeout in seconds (default: 30)
            user_agent: Override the default User-Agent header
            hooks: Optional custom hooks to merge with built-in hooks.

        Raises:
            IlertValidationError: If basic auth credentials are incomplete
        """
        self.endpoint = endpoint.rstrip("/")
        headers = {
            "Accept": "application/json",
            "Content-Type": "application/json",
            "Accept-Encoding": "gzip",
            "User-Agent": user_agent or USER_AGENT,
        }
        auth: httpx.Auth | None = None
        basic_credentials = (organization, username, password)
        if api_token:
            headers["Authorization"] = f"Bearer {api_token}"
        elif all(basic_credentials):
            auth = httpx.BasicAuth(f"{username}@{organization}", password or "")
        elif any(basic_credentials):
            raise IlertValidationError(
                "organization, username and password are required for basic auth"
            )
        self._client = httpx.Client(
            base_url=self.endpoint,
            headers=headers,
            auth=auth,
            timeout=timeout,
        )

    @classmethod
    def from_settings(
        cls, settings: IlertSettings | None = None, hooks: Hooks | None = None
    ) -> Self:
        """Create a client from IlertSettings.

        Args:
            settings: Settings to use, read from ILERT_* environment
                variables when omitted
            hooks: Optional custom hooks

        Example:
            >>> # ILERT_API_TOKEN=... python app.py
            >>> api = IlertApi.from_settings()
        """
        settings = settings or IlertSettings()
        basic_auth = settings.has_basic_auth
        return cls(
            endpoint=settings.endpoint,
            api_token=settings.api_token,
            organization=settings.organization if basic_auth else None,
            username=settings.username if basic_auth else None,
            password=settings.password if basic_auth else None,
            timeout=settings.timeout,
            user_agent=settings.user_agent,
            hooks=hooks,
        )

    def _request(
        self,
        verb: str,
        path: str,
        *,
        expected: int,
        params: list[tuple[str, str]] | None = None,
        body: IlertModel | None = None,
    ) -> httpx.Response:
        response = self._client.request(
            verb,
            path,
            params=params,
            json=body.to_request() if body is not None else None,
        )
        check_response(response, expected)
        return response

    def _get(self, path: str, params: list[tuple[str, str]] | None = None) -> Any:
        return self._request("GET", path, expected=200, params=params).json()

    # Escalation policies

    @invoke_with_hooks(_context("escalation_policies.create", "POST"))
    def create_escalation_policy(self, policy: EscalationPolicy) -> EscalationPolicy:
        """Create a new escalation policy.

        Args:
            policy: EscalationPolicy to create (id will be ignored)

        Returns:
            Created EscalationPolicy with id set by the API

        Example:
            >>> policy = EscalationPolicy(
            ...     name="default",
            ...     escalation_rules=[
            ...         EscalationRule(user=User(id=1), escalation_timeout=15)
            ...     ],
            ... )
            >>> created = api.create_escalation_policy(policy)
        """
        _require(policy, "escalation policy")
        response = self._request(
            "POST", API_ROUTES_ESCALATION_POLICIES, expected=201, body=policy
        )
        return EscalationPolicy.model_validate(response.json())

    @invoke_with_hooks(_context("escalation_policies.get", "GET"))
    def get_escalation_policy(self, policy_id: int) -> EscalationPolicy:
        """Get the escalation policy with the given id."""
        _require(policy_id, "escalation policy id")
        return EscalationPolicy.model_validate(
            self._get(f"{API_ROUTES_ESCALATION_POLICIES}/{policy_id}")
        )

    @invoke_with_hooks(_context("escalation_policies.list", "GET"))
    def get_escalation_policies(self) -> list[EscalationPolicy]:
        """List all escalation policies."""
        return [
            EscalationPolicy.model_validate(r)
            for r in self._get(API_ROUTES_ESCALATION_POLICIES)
        ]

    @invoke_with_hooks(_context("escalation_policies.update", "PUT"))
    def update_escalation_policy(
        self, policy_id: int, policy: EscalationPolicy
    ) -> EscalationPolicy:
        """Update an existing escalation policy.

        Args:
            policy_id: Id of the policy to update
            policy: New policy content

        Returns:
            Updated EscalationPolicy

        Raises:
            IlertValidationError: If policy_id or policy is None
        """
        _require(policy, "escalation policy")
        _require(policy_id, "escalation policy id")
        response = self._request(
            "PUT",
            f"{API_ROUTES_ESCALATION_POLICIES}/{policy_id}",
            expected=200,
            body=policy,
        )
        return EscalationPolicy.model_validate(response.json())

    @invoke_with_hooks(_context("escalation_policies.delete", "DELETE"))
    def delete_escalation_policy(self, policy_id: int) -> None:
        """Delete the escalation policy with the given id."""
        _require(policy_id, "escalation policy id")
        self._request(
            "DELETE", f"{API_ROUTES_ESCALATION_POLICIES}/{policy_id}", expected=204
        )

    # Connectors

    @invoke_with_hooks(_context("connectors.create", "POST"))
    def create_connector(self, connector: Connector) -> Connector:
        """Create a new connector.

        Args:
            connector: Connector to create

        Returns:
            Created Connector with id and timestamps set by the API

        Example:
            >>> connector = Connector(
            ...     name="datadog",
            ...     type=ConnectorType.DATADOG,
            ...     params=ConnectorParamsDatadog(api_key="..."),
            ... )
            >>> created = api.create_connector(connector)
        """
        _require(connector, "connector")
        response = self._request(
            "POST", API_ROUTES_CONNECTORS, expected=201, body=connector
        )
        return Connector.model_validate(response.json())

    @invoke_with_hooks(_context("connectors.get", "GET"))
    def get_connector(self, connector_id: str) -> Connector:
        _require(connector_id, "connector id")
        return Connector.model_validate(
            self._get(f"{API_ROUTES_CONNECTORS}/{connector_id}")
        )

    @invoke_with_hooks(_context("connectors.list", "GET"))
    def get_connectors(self) -> list[Connector]:
        return [Connector.model_validate(r) for r in self._get(API_ROUTES_CONNECTORS)]

    @invoke_with_hooks(_context("connectors.update", "PUT"))
    def update_connector(self, connector_id: str, connector: Connector) -> Connector:
        """Update an existing connector.

        Raises:
            IlertValidationError: If connector_id or connector is None
        """
        _require(connector, "connector")
        _require(connector_id, "connector id")
        response = self._request(
            "PUT",
            f"{API_ROUTES_CONNECTORS}/{connector_id}",
            expected=200,
            body=connector,
        )
        return Connector.model_validate(response.json())

    @invoke_with_hooks(_context("connectors.delete", "DELETE"))
    def delete_connector(self, connector_id: str) -> None:
        _require(connector_id, "connector id")
        self._request("DELETE", f"{API_ROUTES_CONNECTORS}/{connector_id}", expected=204)

    # Incidents

    @invoke_with_hooks(_context("incidents.get", "GET"))
    def get_incident(self, incident_id: int) -> Incident:
        """Get the incident with the given id.

        Example:
            >>> incident = api.get_incident(1234)
            >>> print(incident.status)
            ACCEPTED
        """
        _require(incident_id, "incident id")
        return Incident.model_validate(
            self._get(f"{API_ROUTES_INCIDENTS}/{incident_id}")
        )

    @invoke_with_hooks(_context("incidents.list", "GET"))
    def get_incidents(
        self,
        *,
        start_index: int | None = None,
        max_results: int | None = None,
        states: Iterable[IncidentStatus | str] | None = None,
        alert_sources: Iterable[int] | None = None,
        assigned_to_user_ids: Iterable[int] | None = None,
        assigned_to_usernames: Iterable[str] | None = None,
        from_: datetime | str | None = None,
        until: datetime | str | None = None,
    ) -> list[Incident]:
        """List incidents matching the given filters.

        Args:
            start_index: Starting point (beginning with 0) when paging
            max_results: Maximum number of results (API default: 50)
            states: Only incidents in one of these states
            alert_sources: Only incidents of these alert source ids
            assigned_to_user_ids: Only incidents assigned to these user ids
            assigned_to_usernames: Only incidents assigned to these usernames
            from_: Only incidents reported after this time
            until: Only incidents reported before this time

        Returns:
            List of Incident objects

        Example:
            >>> incidents = api.get_incidents(
            ...     states=[IncidentStatus.NEW, IncidentStatus.PENDING],
            ...     max_results=10,
            ... )
        """
        params: list[tuple[str, str]] = []
        if start_index is not None:
            params.append(("start-index", str(start_index)))
        if max_results is not None:
            params.append(("max-results", str(max_results)))
        params.extend(
            _incident_filter_params(
                states=states,
                alert_sources=alert_sources,
                assigned_to_user_ids=assigned_to_user_ids,
                assigned_to_usernames=assigned_to_usernames,
                from_=from_,
                until=until,
            )
        )
        return [
            Incident.model_validate(r)
            for r in self._get(API_ROUTES_INCIDENTS, params=params)
        ]

    @invoke_with_hooks(_context("incidents.count", "GET"))
    def get_incidents_count(
        self,
        *,
        states: Iterable[IncidentStatus | str] | None = None,
        alert_sources: Iterable[int] | None = None,
        assigned_to_user_ids: Iterable[int] | None = None,
        assigned_to_usernames: Iterable[str] | None = None,
        from_: datetime | str | None = None,
        until: datetime | str | None = None,
    ) -> int:
        """Count incidents matching the given filters.

        Takes the same filters as get_incidents, without paging.
        """
        params = _incident_filter_params(
            states=states,
            alert_sources=alert_sources,
            assigned_to_user_ids=assigned_to_user_ids,
            assigned_to_usernames=assigned_to_usernames,
            from_=from_,
            until=until,
        )
        body = self._get(f"{API_ROUTES_INCIDENTS}/count", params=params)
        return GenericCountResponse.model_validate(body).count

    @invoke_with_hooks(_context("incidents.responders.list", "GET"))
    def get_incident_responders(
        self, incident_id: int, language: Language | str | None = None
    ) -> list[IncidentResponder]:
        """List possible responders for an incident.

        Args:
            incident_id: Incident id
            language: Language of responder names ("en" or "de")
        """
        _require(incident_id, "incident id")
        return [
            IncidentResponder.model_validate(r)
            for r in self._get(
                f"{API_ROUTES_INCIDENTS}/{incident_id}/responder",
                params=_language_params(language),
            )
        ]

    @invoke_with_hooks(_context("incidents.assign", "PUT"))
    def assign_incident(
        self,
        incident_id: int,
        *,
        user_id: int | None = None,
        username: str | None = None,
        escalation_policy_id: int | None = None,
        schedule_id: int | None = None,
    ) -> Incident:
        """Assign an incident to a user, escalation policy or schedule.

        Args:
            incident_id: Incident id
            user_id: Assign to the user with this id
            username: Assign to the user with this username
            escalation_policy_id: Assign to this escalation policy
            schedule_id: Assign to whoever is on call in this schedule

        Returns:
            The updated Incident

        Raises:
            IlertValidationError: If incident_id is None or no assignment
                target is given
        """
        _require(incident_id, "incident id")
        params: list[tuple[str, str]] = []
        # the API takes both user ids and usernames as user-id
        if user_id is not None:
            params.append(("user-id", str(user_id)))
        if username is not None:
            params.append(("user-id", username))
        if escalation_policy_id is not None:
            params.append(("policy-id", str(escalation_policy_id)))
        if schedule_id is not None:
            params.append(("schedule-id", str(schedule_id)))
        if not params:
            raise IlertValidationError(
                "one of user_id, username, escalation_policy_id or schedule_id is required"
            )
        response = self._request(
            "PUT",
            f"{API_ROUTES_INCIDENTS}/{incident_id}/assign",
            expected=200,
            params=params,
        )
        return Incident.model_validate(response.json())

    @invoke_with_hooks(_context("incidents.accept", "PUT"))
    def accept_incident(self, incident_id: int) -> Incident:
        _require(incident_id, "incident id")
        response = self._request(
            "PUT", f"{API_ROUTES_INCIDENTS}/{incident_id}/accept", expected=200
        )
        return Incident.model_validate(response.json())

    @invoke_with_hooks(_context("incidents.resolve", "PUT"))
    def resolve_incident(self, incident_id: int) -> Incident:
        _require(incident_id, "incident id")
        response = self._request(
            "PUT", f"{API_ROUTES_INCIDENTS}/{incident_id}/resolve", expected=200
        )
        return Incident.model_validate(response.json())

    @invoke_with_hooks(_context("incidents.log_entries.list", "GET"))
    def get_incident_log_entries(
        self, incident_id: int, language: Language | str | None = None
    ) -> list[IncidentLogEntry]:
        """List log entries of an incident.

        Args:
            incident_id: Incident id
            language: Language of log entry texts ("en" or "de")
        """
        _require(incident_id, "incident id")
        return [
            IncidentLogEntry.model_validate(r)
            for r in self._get(
                f"{API_ROUTES_INCIDENTS}/{incident_id}/log-entries",
                params=_language_params(language),
            )
        ]

    @invoke_with_hooks(_context("incidents.actions.list", "GET"))
    def get_incident_actions(self, incident_id: int) -> list[IncidentAction]:
        _require(incident_id, "incident id")
        return [
            IncidentAction.model_validate(r)
            for r in self._get(f"{API_ROUTES_INCIDENTS}/{incident_id}/actions")
        ]

    @invoke_with_hooks(_context("incidents.actions.invoke", "POST"))
    def invoke_incident_action(
        self, incident_id: int, action: IncidentAction
    ) -> IncidentAction:
        """Invoke an action on an incident.

        Args:
            incident_id: Incident id
            action: One of the actions returned by get_incident_actions

        Returns:
            The invoked IncidentAction
        """
        _require(incident_id, "incident id")
        _require(action, "incident action")
        response = self._request(
            "POST",
            f"{API_ROUTES_INCIDENTS}/{incident_id}/actions",
            expected=201,
            body=action,
        )
        return IncidentAction.model_validate(response.json())

    def close(self) -> None:
        """Close the underlying httpx client."""
        self._client.close()

    def __enter__(self) -> Self:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()
