"""iLert API client and models.

This package provides a typed client for the iLert incident management API.

- IlertApi: Stateless API client with hooks for metrics and logging
- Models: Pydantic models for incidents, escalation policies and connectors
- IlertSettings: Client configuration from ILERT_* environment variables

Hook System:
- IlertApiCallContext: Context passed to hooks
- Hooks: pre, post and error hooks around every API call

Example:
    >>> from ilert_api import IlertApi
    >>> api = IlertApi(api_token="...")
    >>> for incident in api.get_incidents(states=["NEW"]):
    ...     print(incident.summary)
"""

from ilert_api.client import (
    API_ROUTES_CONNECTORS,
    API_ROUTES_ESCALATION_POLICIES,
    API_ROUTES_INCIDENTS,
    IlertApi,
    IlertApiCallContext,
    check_response,
)
from ilert_api.config import API_ENDPOINT, TIMEOUT, IlertSettings
from ilert_api.errors import IlertApiError, IlertError, IlertValidationError
from ilert_api.hooks import Hooks
from ilert_api.models import *  # noqa: F403
from ilert_api.models import __all__ as _models_all
from ilert_api.version import VERSION

__all__ = [
    "API_ENDPOINT",
    "API_ROUTES_CONNECTORS",
    "API_ROUTES_ESCALATION_POLICIES",
    "API_ROUTES_INCIDENTS",
    "TIMEOUT",
    "VERSION",
    "Hooks",
    "IlertApi",
    "IlertApiCallContext",
    "IlertApiError",
    "IlertError",
    "IlertSettings",
    "IlertValidationError",
    "check_response",
    *_models_all,
]
