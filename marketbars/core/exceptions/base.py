"""marketbars core exception classes."""

from typing import Any


class MarketBarsError(Exception):
    """Base exception for marketbars."""

    def __init__(
        self,
        message: str,
        error_code: str = "GENERAL_ERROR",
        details: dict[str, Any] | None = None,
    ):
        """Initialise the exception.

        Args:
            message: Human readable error message
            error_code: Machine readable error code
            details: Additional context
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}


class ProviderError(MarketBarsError):
    """Failure talking to, or understanding, a data provider."""

    def __init__(
        self,
        message: str,
        provider_name: str,
        error_code: str = "PROVIDER_ERROR",
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, error_code, details)
        self.provider_name = provider_name


class NetworkError(ProviderError):
    """Transport failure or non-success HTTP status."""

    def __init__(
        self,
        message: str,
        provider_name: str,
        status_code: int | None = None,
        details: dict[str, Any] | None = None,
        error_code: str = "NETWORK_ERROR",
    ):
        super_details = details or {}
        if status_code is not None:
            super_details["status_code"] = status_code
        super().__init__(message, provider_name, error_code, super_details)
        self.status_code = status_code


class RateLimitError(NetworkError):
    """Provider answered 429."""

    def __init__(
        self,
        message: str,
        provider_name: str,
        retry_after: int | None = None,
        details: dict[str, Any] | None = None,
    ):
        super_details = details or {}
        if retry_after is not None:
            super_details["retry_after"] = retry_after
        super().__init__(message, provider_name, 429, super_details, "RATE_LIMIT_ERROR")
        self.retry_after = retry_after


class DataValidationError(MarketBarsError):
    """Input that cannot be interpreted."""

    def __init__(
        self,
        message: str,
        validation_errors: dict[str, Any] | None = None,
        details: dict[str, Any] | None = None,
    ):
        super_details = details or {}
        if validation_errors:
            super_details["validation_errors"] = validation_errors
        super().__init__(message, "VALIDATION_ERROR", super_details)
        self.validation_errors = validation_errors or {}
