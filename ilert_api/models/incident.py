"""Pydantic models for iLert incidents."""

from datetime import datetime
from enum import StrEnum
from typing import Annotated, Any

from pydantic import AfterValidator, Field

from ilert_api.models.common import AlertSource, IlertModel, Phone, User, known_value


class IncidentStatus(StrEnum):
    NEW = "NEW"
    PENDING = "PENDING"
    ACCEPTED = "ACCEPTED"
    RESOLVED = "RESOLVED"


class IncidentPriority(StrEnum):
    HIGH = "HIGH"
    LOW = "LOW"


class IncidentResponderType(StrEnum):
    """Who acknowledged or resolved an incident."""

    USER = "USER"
    ALERT_SOURCE = "SOURCE"


class IncidentResponderGroup(StrEnum):
    SUGGESTED = "SUGGESTED"
    USER = "USER"
    ESCALATION_POLICY = "ESCALATION_POLICY"
    ON_CALL_SCHEDULE = "ON_CALL_SCHEDULE"


class IncidentLogEntryType(StrEnum):
    """Known log entry types.

    IncidentLogEntry.log_entry_type is a plain string, the API may add types
    not listed here.
    """

    ALERT_RECEIVED = "AlertReceivedLogEntry"
    ALERT_SOURCE_RESPONSE = "AlertSourceResponseLogEntry"
    EMAIL_RECEIVED = "EmailReceivedLogEntry"
    INCIDENT_ASSIGNED_BY_SYSTEM = "IncidentAssignedBySystemLogEntry"
    INCIDENT_ASSIGNED_BY_USER = "IncidentAssignedByUserLogEntry"
    INCIDENT_CREATED_BY_USER = "IncidentCreatedByUserLogEntry"
    NOTIFICATION = "NotificationLogEntry"
    USER_RESPONSE = "UserResponseLogEntry"


class Language(StrEnum):
    """Languages supported for localized responder and log entry texts."""

    EN = "en"
    DE = "de"


# Known values decode to enum members, values added by the API stay strings
IncidentStatusValue = Annotated[
    IncidentStatus | str, AfterValidator(known_value(IncidentStatus))
]
IncidentPriorityValue = Annotated[
    IncidentPriority | str, AfterValidator(known_value(IncidentPriority))
]
IncidentResponderTypeValue = Annotated[
    IncidentResponderType | str, AfterValidator(known_value(IncidentResponderType))
]
IncidentResponderGroupValue = Annotated[
    IncidentResponderGroup | str, AfterValidator(known_value(IncidentResponderGroup))
]


class IncidentImage(IlertModel):
    src: str = ""
    href: str = ""
    alt: str = ""


class IncidentLink(IlertModel):
    text: str = ""
    href: str = ""


class CallRoutingNumber(IlertModel):
    id: int | None = None
    number: Phone | None = None
    voice_language_locale: str | None = None
    alert_source: AlertSource | None = None


class Incident(IlertModel):
    """An iLert incident.

    Attributes:
        id: Incident id, set by the API
        summary: Short description
        details: Long description
        report_time: When the incident was reported
        resolved_on: When the incident was resolved, if it was
        status: Current incident status
        alert_source: Alert source that raised the incident
        priority: Incident priority
        incident_key: Deduplication key
        assigned_to: User the incident is assigned to
        next_escalation: When the incident escalates next
        call_routing_number: Call routing number that raised the incident
        acknowledged_by: User who accepted the incident
        acknowledged_by_type: Kind of responder that accepted the incident
        resolved_by: User who resolved the incident
        resolved_by_type: Kind of responder that resolved the incident
        images: Images attached by the alert source
        links: Links attached by the alert source
        custom_details: Free-form details attached by the alert source
    """

    id: int | None = None
    summary: str = ""
    details: str = ""
    report_time: datetime | None = None
    resolved_on: datetime | None = None
    status: IncidentStatusValue | None = None
    alert_source: AlertSource | None = None
    priority: IncidentPriorityValue | None = None
    incident_key: str | None = None
    assigned_to: User | None = None
    next_escalation: datetime | None = None
    call_routing_number: CallRoutingNumber | None = None
    acknowledged_by: User | None = None
    acknowledged_by_type: IncidentResponderTypeValue | None = None
    resolved_by: User | None = None
    resolved_by_type: IncidentResponderTypeValue | None = None
    images: list[IncidentImage] = Field(default_factory=list)
    links: list[IncidentLink] = Field(default_factory=list)
    custom_details: dict[str, Any] = Field(default_factory=dict)


class IncidentComment(IlertModel):
    id: str | None = None
    content: str = ""
    creator: User | None = None
    trigger_type: str | None = None
    resolve_comment: bool = False
    created: datetime | None = None
    updated: datetime | None = None


class IncidentResponder(IlertModel):
    id: int | None = None
    name: str = ""
    group: IncidentResponderGroupValue | None = None
    disabled: bool = False


class IncidentLogEntry(IlertModel):
    id: int | None = None
    timestamp: datetime | None = None
    log_entry_type: str = ""
    text: str = ""
    incident_id: int | None = None


class IncidentActionResult(IlertModel):
    id: str | None = None
    incident_id: int | None = None
    webhook_id: str | None = None
    extension_id: str | None = None
    actor: User | None = None
    success: bool = False


class IncidentAction(IlertModel):
    """An action that can be invoked on an incident (e.g. create a Jira ticket).

    Attributes:
        name: Display name of the action
        webhook_id: Connector webhook the action triggers
        extension_id: Extension the action belongs to
        icon_url: Icon shown for the action
        history: Previous invocations of the action
    """

    name: str
    webhook_id: str | None = None
    extension_id: str | None = None
    icon_url: str | None = None
    history: list[IncidentActionResult] = Field(default_factory=list)
