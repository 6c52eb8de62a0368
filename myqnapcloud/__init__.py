# myqnapcloud/__init__.py

"""
Async client for the myQNAPcloud account API.
"""

from .account import AccountService, GetUserResponse, UserProfile
from .api import (
    APIClient,
    APIError,
    AiohttpTransport,
    DecodeError,
    EncodingError,
    ErrorResult,
    JSONDestination,
    RawDestination,
    ServiceConfig,
    TransportError
)

__version__ = "1.0.0"

__all__ = [
    'AccountService',
    'GetUserResponse',
    'UserProfile',
    'APIClient',
    'APIError',
    'AiohttpTransport',
    'DecodeError',
    'EncodingError',
    'ErrorResult',
    'JSONDestination',
    'RawDestination',
    'ServiceConfig',
    'TransportError'
]
