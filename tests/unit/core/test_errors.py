"""Unit tests for the exception hierarchy."""

from teamcity.rest.core import (
    ApplicationFailure,
    BuildId,
    ConfigurationError,
    ConnectionFailure,
    ProtocolInconsistency,
    RemoteFetchError,
    TeamCityRestError,
    TransportFailure,
)


def test_application_failure_carries_status_and_body():
    """ApplicationFailure keeps the server status and error payload."""
    error = ApplicationFailure(
        "failed", method="GET", url="https://tc/app/rest/builds", status_code=503, error_body="busy"
    )
    assert error.status_code == 503
    assert error.error_body == "busy"
    assert error.method == "GET"
    assert isinstance(error, TransportFailure)
    assert isinstance(error, TeamCityRestError)


def test_connection_failure_has_no_status():
    """ConnectionFailure is a TransportFailure without a response."""
    error = ConnectionFailure("reset", method="GET", url="https://tc/")
    assert error.status_code is None
    assert isinstance(error, TransportFailure)


def test_remote_fetch_error_keeps_id_and_cause():
    """RemoteFetchError names the handle and wraps the transport failure."""
    cause = ConnectionFailure("reset", method="GET", url="https://tc/")
    error = RemoteFetchError(BuildId("42"), cause)
    assert error.resource_id == BuildId("42")
    assert error.cause is cause
    assert "42" in str(error)


def test_configuration_error_is_value_error():
    """ConfigurationError can be caught as ValueError."""
    error = ConfigurationError("bad limit")
    assert isinstance(error, ValueError)
    assert isinstance(error, TeamCityRestError)


def test_protocol_inconsistency_is_library_error():
    assert issubclass(ProtocolInconsistency, TeamCityRestError)
