"""Base provider interface."""

import json
import logging
from abc import ABC, abstractmethod
from typing import Any, Type, TypeVar

import httpx
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from app.core.errors import UpstreamError

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


def parse_body(response: httpx.Response) -> Any:
    """Decode a response body as JSON, falling back to raw text."""
    text = response.text
    if not text:
        return None
    try:
        return json.loads(text)
    except ValueError:
        return text


class ApiProvider(ABC):
    """Base class for third-party API clients."""

    def __init__(self, name: str):
        self.name = name

    @abstractmethod
    def is_available(self) -> bool:
        """Check if provider is available (API key configured, etc.)."""
        pass

    def check_response(self, response: httpx.Response, action: str) -> Any:
        """
        Return the decoded body of a successful response.

        Raises UpstreamError carrying the upstream status and body otherwise.
        """
        body = parse_body(response)
        if response.is_success:
            return body

        logger.error(f"{self.name} API error on {action}: {response.status_code}")
        raise UpstreamError(
            f"{self.name} API request failed: {action} ({response.status_code} {response.reason_phrase})",
            status_code=response.status_code,
            body=body,
        )

    def validate_payload(self, model: Type[ModelT], data: Any, action: str) -> ModelT:
        """
        Validate a successful response body against a model.

        Raises UpstreamError when the body does not have the documented shape.
        """
        try:
            return model.model_validate(data)
        except PydanticValidationError as e:
            logger.error(f"{self.name} API returned an unexpected payload on {action}: {e.error_count()} errors")
            raise UpstreamError(
                f"{self.name} API returned an unexpected payload: {action}",
                status_code=200,
                body=data,
            ) from e
