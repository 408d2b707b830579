"""Shared pydantic models for the iLert API.

All models:
- serialize to the camelCase keys used by the API
- accept snake_case attribute names on construction
- are immutable (frozen=True)
- treat a JSON null like a missing key, so the field default applies
"""

from collections.abc import Callable
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, model_validator
from pydantic.alias_generators import to_camel


def known_value[E: StrEnum](enum: type[E]) -> Callable[[str], E | str]:
    """Convert values listed in enum to its members, keep others as strings.

    Used with AfterValidator on fields the API may extend with new values.
    """

    def convert(value: str) -> E | str:
        try:
            return enum(value)
        except ValueError:
            return value

    return convert


class IlertModel(BaseModel):
    """Base model for all iLert resources."""

    model_config = ConfigDict(
        frozen=True, populate_by_name=True, alias_generator=to_camel
    )

    @model_validator(mode="before")
    @classmethod
    def drop_nulls(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if value is not None}
        return data

    def to_request(self) -> dict:
        """Serialize to an API request body, omitting unset optional fields."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class User(IlertModel):
    id: int | None = None
    username: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    timezone: str | None = None
    language: str | None = None
    role: str | None = None


class Schedule(IlertModel):
    id: int | None = None
    name: str | None = None
    timezone: str | None = None
    type: str | None = None


class AlertSource(IlertModel):
    id: int | None = None
    name: str | None = None
    integration_type: str | None = None
    status: str | None = None


class TeamShort(IlertModel):
    id: int | None = None
    name: str | None = None


class Phone(IlertModel):
    region_code: str | None = None
    number: str | None = None


class GenericErrorResponse(IlertModel):
    """Error envelope returned by the API on failed requests.

    Attributes:
        status: HTTP status echoed by the API
        message: Human readable error message
        code: Machine readable error code (e.g. "NOT_FOUND")
    """

    status: int | None = None
    message: str = ""
    code: str = ""


class GenericCountResponse(IlertModel):
    count: int
