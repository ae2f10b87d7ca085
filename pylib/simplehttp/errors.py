'''
Error kinds raised by the request clients.

Every message reads "simplehttp: METHOD PATH: <prefix>: <detail>", where the
prefix is fixed per kind so logs can be grepped for it.
'''

from enum import Enum


class ErrorKind(str, Enum):
    '''Tag carried by every SimpleHTTPError.'''

    CONFIGURATION = 'configuration'
    SERIALIZATION = 'serialization'
    REQUEST_CONSTRUCTION = 'request_construction'
    TRANSPORT = 'transport'
    RESPONSE_READ = 'response_read'


class SimpleHTTPError(Exception):
    '''Base for all errors raised while issuing a request.'''

    kind: ErrorKind
    prefix: str

    def __init__(self, detail: str, *, method: str | None = None, path: str | None = None) -> None:
        self.detail = detail
        self.method = method
        self.path = path
        super().__init__(self._format())

    def _format(self) -> str:
        context = 'simplehttp'
        if self.method is not None:
            context = f'{context}: {self.method} {self.path or ""}'.rstrip()
        return f'{context}: {self.prefix}: {self.detail}'


class ConfigurationError(SimpleHTTPError):
    '''The client has no transport handle; nothing was sent.'''

    kind = ErrorKind.CONFIGURATION
    prefix = 'client not configured'


class SerializationError(SimpleHTTPError):
    '''Body fields could not be encoded as a flat JSON object.'''

    kind = ErrorKind.SERIALIZATION
    prefix = 'marshaling request data'


class RequestConstructionError(SimpleHTTPError):
    '''Method or URL do not make a valid request.'''

    kind = ErrorKind.REQUEST_CONSTRUCTION
    prefix = 'creating request'


class TransportError(SimpleHTTPError):
    '''Network, TLS, timeout or redirect-limit failure.'''

    kind = ErrorKind.TRANSPORT
    prefix = 'sending request'


class ResponseReadError(SimpleHTTPError):
    '''The response body could not be read in full.'''

    kind = ErrorKind.RESPONSE_READ
    prefix = 'reading response body'
