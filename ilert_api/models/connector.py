"""Pydantic models for iLert connectors."""

from datetime import datetime
from enum import StrEnum
from typing import Annotated

from pydantic import AfterValidator, Field

from ilert_api.models.common import IlertModel, known_value


class ConnectorType(StrEnum):
    AWS_LAMBDA = "aws_lambda"
    AZURE_FAAS = "azure_faas"
    DATADOG = "datadog"
    DISCORD = "discord"
    EMAIL = "email"
    GITHUB = "github"
    GOOGLE_FAAS = "google_faas"
    JIRA = "jira"
    MICROSOFT_TEAMS = "microsoft_teams"
    SERVICENOW = "servicenow"
    SLACK = "slack"
    SYSDIG = "sysdig"
    TOPDESK = "topdesk"
    WEBHOOK = "webhook"
    ZAPIER = "zapier"
    ZENDESK = "zendesk"
    MICROSOFT_TEAMS_CHAT = "microsoft_teams_chat"
    MICROSOFT_TEAMS_MEETING = "microsoft_teams_meeting"
    AUTOTASK = "autotask"
    MATTERMOST = "mattermost"
    ZAMMAD = "zammad"
    ZOOM_CHAT = "zoom_chat"
    ZOOM_MEETING = "zoom_meeting"
    STATUS_PAGE_IO = "status_page_io"
    WEBEX = "webex"


# Known types decode to ConnectorType members, types added by the API stay strings
ConnectorTypeValue = Annotated[
    ConnectorType | str, AfterValidator(known_value(ConnectorType))
]


class ConnectorParams(IlertModel):
    """Connector parameters.

    The API returns the union of all parameter fields. The per-type
    subclasses below make the fields a given connector type needs required.

    Attributes:
        api_key: Datadog, Zendesk, Github, Sysdig, Zammad or StatusPage.io api key
        authorization: Authorization header for serverless connectors
        url: Server or webhook url
        email: Jira, Zendesk or Autotask username or email
        username: TOPdesk or ServiceNow username
        password: Password or api token
    """

    api_key: str | None = None
    authorization: str | None = None
    url: str | None = None
    email: str | None = None
    username: str | None = None
    password: str | None = None


class ConnectorParamsDatadog(ConnectorParams):
    api_key: str


class ConnectorParamsJira(ConnectorParams):
    url: str
    email: str
    password: str


class ConnectorParamsMicrosoftTeams(ConnectorParams):
    url: str


class ConnectorParamsServiceNow(ConnectorParams):
    url: str
    username: str
    password: str


class ConnectorParamsSlack(ConnectorParams):
    pass


class ConnectorParamsZendesk(ConnectorParams):
    url: str
    email: str
    api_key: str


class ConnectorParamsDiscord(ConnectorParams):
    url: str


class ConnectorParamsGithub(ConnectorParams):
    api_key: str


class ConnectorParamsTopdesk(ConnectorParams):
    url: str
    username: str
    password: str


class ConnectorParamsAWSLambda(ConnectorParams):
    pass


class ConnectorParamsAzureFunction(ConnectorParams):
    pass


class ConnectorParamsGoogleFunction(ConnectorParams):
    pass


class ConnectorParamsSysdig(ConnectorParams):
    api_key: str


class ConnectorParamsAutotask(ConnectorParams):
    url: str
    email: str
    password: str


class ConnectorParamsMattermost(ConnectorParams):
    url: str


class ConnectorParamsZammad(ConnectorParams):
    url: str
    api_key: str


class ConnectorParamsStatusPageIO(ConnectorParams):
    api_key: str


class Connector(IlertModel):
    """An iLert connector.

    Used for requests and responses. id, created_at and updated_at are set by
    the API and omitted from request bodies when unset.

    Attributes:
        id: Connector id
        name: Connector name
        type: Connector type
        created_at: Creation time
        updated_at: Last update time
        params: Type-specific parameters
    """

    id: str | None = None
    name: str
    type: ConnectorTypeValue
    created_at: datetime | None = None
    updated_at: datetime | None = None
    params: ConnectorParams = Field(default_factory=ConnectorParams)
