'''Minimal HTTP request helper: compose, send one request, normalize the response.'''

from simplehttp.aio import AsyncRequestClient
from simplehttp.client import RequestClient, Response, new
from simplehttp.config import DEFAULT_TIMEOUT, ClientConfig
from simplehttp.errors import (
    ConfigurationError,
    ErrorKind,
    RequestConstructionError,
    ResponseReadError,
    SerializationError,
    SimpleHTTPError,
    TransportError,
)
from simplehttp.headers import Headers

__all__ = [
    'AsyncRequestClient',
    'ClientConfig',
    'ConfigurationError',
    'DEFAULT_TIMEOUT',
    'ErrorKind',
    'Headers',
    'RequestClient',
    'RequestConstructionError',
    'Response',
    'ResponseReadError',
    'SerializationError',
    'SimpleHTTPError',
    'TransportError',
    'new',
]
