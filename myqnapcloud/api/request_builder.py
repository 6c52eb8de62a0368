# myqnapcloud/api/request_builder.py

from typing import Dict, Any, Optional, Union
from dataclasses import dataclass, field, fields, is_dataclass
from enum import Enum
import json
import yarl

from .errors import EncodingError

class RequestMethod(Enum):
    """HTTP request methods accepted by the API"""
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"

DEFAULT_HEADERS = {
    "Content-Type": "application/json",
    "Accept": "application/json",
}

@dataclass(frozen=True)
class PreparedRequest:
    """In-memory description of one outgoing request"""
    method: str
    url: str
    headers: Dict[str, str] = field(default_factory=dict)
    body: Optional[bytes] = None

def versioned(path: str, version: str) -> str:
    """Prefix a relative path with the ``/{version}/`` segment."""
    return f"/{version.strip('/')}/{path.strip('/')}"

def _to_jsonable(value: Any) -> Any:
    """``json.dumps`` hook: dataclass payloads are sent as their fields"""
    if is_dataclass(value) and not isinstance(value, type):
        return {f.name: getattr(value, f.name) for f in fields(value)}
    if isinstance(value, Enum):
        return value.value
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")

def encode_payload(payload: Any) -> bytes:
    """
    Serialize a request payload to JSON bytes.

    Raises:
        EncodingError: payload holds values JSON cannot represent
    """
    try:
        return json.dumps(payload, default=_to_jsonable, allow_nan=False).encode("utf-8")
    except (TypeError, ValueError, RecursionError) as e:
        raise EncodingError(f"Failed to encode request payload: {str(e)}") from e

class RequestBuilder:
    """
    Builds requests against one base path and API version.

    Callers pass paths relative to the versioned root (``"me"``,
    ``"/me/activity/"``); slashes and the version segment are handled here.
    """

    def __init__(self, base_path: str, version: str):
        self.base_path = base_path.rstrip("/")
        self.version = version

    def url_for(self, path: str) -> str:
        """Absolute URL for a relative path"""
        return str(yarl.URL(self.base_path + versioned(path, self.version)))

    def build(
        self,
        method: Union[RequestMethod, str],
        path: str,
        payload: Any = None
    ) -> PreparedRequest:
        """
        Build a request

        Args:
            method: HTTP method to use
            path: Path relative to the versioned API root
            payload: Optional value to send as the JSON body

        Returns:
            PreparedRequest ready to hand to a transport
        """
        try:
            method = RequestMethod(method.upper() if isinstance(method, str) else method)
        except ValueError as e:
            raise EncodingError(f"Unsupported HTTP method: {method}") from e

        body = encode_payload(payload) if payload is not None else None

        return PreparedRequest(
            method=method.value,
            url=self.url_for(path),
            headers=dict(DEFAULT_HEADERS),
            body=body
        )
