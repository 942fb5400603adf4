"""Tests for the exception hierarchy."""

from marketbars.core.exceptions import (
    DataValidationError,
    MarketBarsError,
    NetworkError,
    ProviderError,
    RateLimitError,
)


def test_base_error_defaults():
    error = MarketBarsError("something broke")

    assert str(error) == "something broke"
    assert error.error_code == "GENERAL_ERROR"
    assert error.details == {}


def test_network_error_records_status():
    error = NetworkError("bad gateway", "polygon", status_code=502, details={"body": "oops"})

    assert isinstance(error, ProviderError)
    assert error.provider_name == "polygon"
    assert error.error_code == "NETWORK_ERROR"
    assert error.details == {"body": "oops", "status_code": 502}


def test_rate_limit_error_is_a_network_error():
    error = RateLimitError("slow down", "polygon", retry_after=30)

    assert isinstance(error, NetworkError)
    assert error.status_code == 429
    assert error.error_code == "RATE_LIMIT_ERROR"
    assert error.details == {"retry_after": 30, "status_code": 429}


def test_validation_error_carries_validation_errors():
    error = DataValidationError("bad input", validation_errors={"value": "x"})

    assert error.error_code == "VALIDATION_ERROR"
    assert error.details["validation_errors"] == {"value": "x"}
