import pytest
from myqnapcloud.core.exceptions import (
    MyQNAPcloudError,
    ConfigError,
    LoggerError
)
from myqnapcloud.api.errors import (
    APIError,
    DecodeError,
    EncodingError,
    ErrorResult,
    TransportError
)

def test_base_exception():
    """Test MyQNAPcloudError base exception"""
    with pytest.raises(MyQNAPcloudError) as exc_info:
        raise MyQNAPcloudError("Base error message")
    assert str(exc_info.value) == "Base error message"
    assert exc_info.value.details == {}

def test_config_error():
    """Test ConfigError"""
    with pytest.raises(ConfigError) as exc_info:
        raise ConfigError("Invalid configuration")
    assert str(exc_info.value) == "Invalid configuration"
    assert isinstance(exc_info.value, MyQNAPcloudError)

def test_logger_error():
    """Test LoggerError"""
    with pytest.raises(LoggerError) as exc_info:
        raise LoggerError("Logging failed")
    assert str(exc_info.value) == "Logging failed"
    assert isinstance(exc_info.value, MyQNAPcloudError)

def test_error_with_details():
    """Test exception with additional details"""
    details = {"status": 500, "body": "not json"}
    with pytest.raises(DecodeError) as exc_info:
        raise DecodeError("Undecodable body", details=details)
    assert exc_info.value.details == details

def test_error_result():
    """Test ErrorResult carries the response context"""
    error = ErrorResult(
        message="not found",
        code=404,
        method="GET",
        url="https://api.example.com/v1.1/me",
        status=404,
        headers={"Content-Type": "application/json"},
        details={"hint": "check id"}
    )
    assert str(error) == "GET https://api.example.com/v1.1/me: 404 not found"
    assert error.message == "not found"
    assert error.code == 404
    assert error.details == {"hint": "check id"}
    assert "status=404" in repr(error)

def test_error_inheritance():
    """Test proper exception inheritance"""
    for exception_class in [EncodingError, TransportError, DecodeError]:
        exc = exception_class("Test")
        assert isinstance(exc, APIError)
        assert isinstance(exc, MyQNAPcloudError)

    assert issubclass(ErrorResult, APIError)
    for exception_class in [EncodingError, TransportError, ErrorResult]:
        assert not issubclass(exception_class, DecodeError)
