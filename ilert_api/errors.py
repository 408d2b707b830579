"""Exceptions raised by the iLert API client."""

from typing import Self

import httpx
from pydantic import ValidationError

from ilert_api.models.common import GenericErrorResponse


class IlertError(Exception):
    """Base exception for all ilert-api errors."""


class IlertValidationError(IlertError, ValueError):
    """Invalid input, raised before any request is sent."""


class IlertApiError(IlertError):
    """The API answered with an unexpected status code.

    Attributes:
        status_code: HTTP status code of the response
        message: Error message from the API, or a generic one if the
            response carried no usable error body
        code: Error code from the API, None for generic errors
    """

    def __init__(self, status_code: int, message: str, code: str | None = None) -> None:
        self.status_code = status_code
        self.message = message
        self.code = code
        super().__init__(f"{code}: {message}" if code is not None else message)

    @classmethod
    def from_response(cls, response: httpx.Response) -> Self:
        """Build an error from a failed response.

        Uses the API error envelope when it decodes and has a message,
        otherwise falls back to "Wrong status code <status>".
        """
        try:
            body = GenericErrorResponse.model_validate_json(response.content)
        except ValidationError:
            body = None
        if body is None or not body.message:
            return cls(
                response.status_code, f"Wrong status code {response.status_code}"
            )
        return cls(response.status_code, body.message, code=body.code)
