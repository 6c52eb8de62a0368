# myqnapcloud/api/errors.py

from typing import Any, Dict, Mapping, Optional

from ..core.exceptions import MyQNAPcloudError

class APIError(MyQNAPcloudError):
    """Base exception for API call failures"""
    pass

class EncodingError(APIError):
    """Raised when a request payload cannot be serialized; nothing was sent"""
    pass

class TransportError(APIError):
    """Raised when the transport fails to complete the HTTP exchange"""
    pass

class DecodeError(APIError):
    """Raised when a response body is not valid JSON or has the wrong shape"""
    pass

class ErrorResult(APIError):
    """
    A well-formed API failure: the status code was outside 200-299 and the
    body decoded as ``{"message": ..., "code": ...}``.

    Any other fields the endpoint returned are kept in ``details``.
    """

    def __init__(
        self,
        message: str,
        code: int,
        method: str,
        url: str,
        status: int,
        headers: Optional[Mapping[str, str]] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message, details)
        self.code = code
        self.method = method
        self.url = url
        self.status = status
        self.headers = dict(headers or {})

    def __str__(self) -> str:
        return f"{self.method} {self.url}: {self.status} {self.message}"

    def __repr__(self) -> str:
        return (
            f"ErrorResult(method={self.method!r}, url={self.url!r}, "
            f"status={self.status}, code={self.code}, message={self.message!r})"
        )
