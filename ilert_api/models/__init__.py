from ilert_api.models.common import (
    AlertSource,
    GenericCountResponse,
    GenericErrorResponse,
    IlertModel,
    Phone,
    Schedule,
    TeamShort,
    User,
)
from ilert_api.models.connector import (
    Connector,
    ConnectorParams,
    ConnectorParamsAutotask,
    ConnectorParamsAWSLambda,
    ConnectorParamsAzureFunction,
    ConnectorParamsDatadog,
    ConnectorParamsDiscord,
    ConnectorParamsGithub,
    ConnectorParamsGoogleFunction,
    ConnectorParamsJira,
    ConnectorParamsMattermost,
    ConnectorParamsMicrosoftTeams,
    ConnectorParamsServiceNow,
    ConnectorParamsSlack,
    ConnectorParamsStatusPageIO,
    ConnectorParamsSysdig,
    ConnectorParamsTopdesk,
    ConnectorParamsZammad,
    ConnectorParamsZendesk,
    ConnectorType,
)
from ilert_api.models.escalation_policy import EscalationPolicy, EscalationRule
from ilert_api.models.incident import (
    CallRoutingNumber,
    Incident,
    IncidentAction,
    IncidentActionResult,
    IncidentComment,
    IncidentImage,
    IncidentLink,
    IncidentLogEntry,
    IncidentLogEntryType,
    IncidentPriority,
    IncidentResponder,
    IncidentResponderGroup,
    IncidentResponderType,
    IncidentStatus,
    Language,
)

__all__ = [
    "AlertSource",
    "CallRoutingNumber",
    "Connector",
    "ConnectorParams",
    "ConnectorParamsAWSLambda",
    "ConnectorParamsAutotask",
    "ConnectorParamsAzureFunction",
    "ConnectorParamsDatadog",
    "ConnectorParamsDiscord",
    "ConnectorParamsGithub",
    "ConnectorParamsGoogleFunction",
    "ConnectorParamsJira",
    "ConnectorParamsMattermost",
    "ConnectorParamsMicrosoftTeams",
    "ConnectorParamsServiceNow",
    "ConnectorParamsSlack",
    "ConnectorParamsStatusPageIO",
    "ConnectorParamsSysdig",
    "ConnectorParamsTopdesk",
    "ConnectorParamsZammad",
    "ConnectorParamsZendesk",
    "ConnectorType",
    "EscalationPolicy",
    "EscalationRule",
    "GenericCountResponse",
    "GenericErrorResponse",
    "IlertModel",
    "Incident",
    "IncidentAction",
    "IncidentActionResult",
    "IncidentComment",
    "IncidentImage",
    "IncidentLink",
    "IncidentLogEntry",
    "IncidentLogEntryType",
    "IncidentPriority",
    "IncidentResponder",
    "IncidentResponderGroup",
    "IncidentResponderType",
    "IncidentStatus",
    "Language",
    "Phone",
    "Schedule",
    "TeamShort",
    "User",
]
