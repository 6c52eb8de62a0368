# myqnapcloud/api/__init__.py

"""
Request dispatch and error classification shared by every account resource.
"""

from .api_client import (
    APIClient,
    APIResponse,
    ServiceConfig
)

from .destinations import (
    DestinationKind,
    JSONDestination,
    RawDestination
)

from .errors import (
    APIError,
    DecodeError,
    EncodingError,
    ErrorResult,
    TransportError
)

from .request_builder import (
    PreparedRequest,
    RequestBuilder,
    RequestMethod,
    versioned
)

from .response_handler import (
    check_response,
    decode_model,
    is_success
)

from .transport import (
    AiohttpTransport,
    SecurityProvider,
    Transport,
    TransportResponse
)

__all__ = [
    'APIClient',
    'APIResponse',
    'ServiceConfig',
    'DestinationKind',
    'JSONDestination',
    'RawDestination',
    'APIError',
    'DecodeError',
    'EncodingError',
    'ErrorResult',
    'TransportError',
    'PreparedRequest',
    'RequestBuilder',
    'RequestMethod',
    'versioned',
    'check_response',
    'decode_model',
    'is_success',
    'AiohttpTransport',
    'SecurityProvider',
    'Transport',
    'TransportResponse'
]
