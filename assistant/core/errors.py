from __future__ import annotations

from typing import Optional


class DeclutterError(Exception):
    """Base error; ``status_code`` is what the HTTP layer answers with."""

    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(DeclutterError):
    """Client input is missing or the conversation has the wrong shape."""

    status_code = 400


class InvalidInput(ValidationError):
    """The uploaded image is not a usable data URL."""


class ProviderError(DeclutterError):
    """The external model failed, either in transport or with a non-2xx status."""

    status_code = 500

    def __init__(
        self,
        message: str,
        *,
        provider_status: Optional[int] = None,
        detail: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.provider_status = provider_status
        self.detail = detail
