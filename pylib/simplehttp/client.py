'''
Blocking request client: base URL, headers, JSON body fields and query
parameters held as plain mutable attributes, plus one method per HTTP verb.

Thread safety: none is provided. Issuing requests from several threads is fine
as long as nobody edits headers, body_fields or query_params while a request
is in flight; every call builds its own httpx.Request.
'''

from dataclasses import dataclass, field
from datetime import timedelta

import httpx
import structlog

from simplehttp.config import ClientConfig
from simplehttp.errors import ConfigurationError, ResponseReadError, TransportError
from simplehttp.headers import Headers
from simplehttp.request import build_request

logger = structlog.get_logger()


@dataclass(frozen=True)
class Response:
    '''A fully read response. Built fresh per call.'''

    body: str
    status_code: int
    headers: Headers = field(default_factory=Headers)


def _timeout_seconds(timeout: float | timedelta) -> float:
    if isinstance(timeout, timedelta):
        return timeout.total_seconds()
    return float(timeout)


class BaseRequestClient:
    '''State and request construction common to the blocking and asyncio clients.'''

    def __init__(self, config: ClientConfig, http_client, owns_transport: bool) -> None:
        self.base_url = config.base_url
        self.headers = dict(config.headers)
        self.body_fields = dict(config.body_fields)
        self.query_params = dict(config.query_params)
        self.http_client = http_client
        self._owns_transport = owns_transport

    def _require_transport(self, method: str | None = None, path: str | None = None):
        if self.http_client is None:
            raise ConfigurationError('http client is None', method=method, path=path)
        if self.http_client.is_closed:
            raise ConfigurationError('http client is closed', method=method, path=path)
        return self.http_client

    def _prepare(self, method: str, path: str) -> httpx.Request:
        http_client = self._require_transport(method, path)
        return build_request(
            http_client,
            method,
            path,
            base_url=self.base_url,
            headers=self.headers,
            body_fields=self.body_fields,
            query_params=self.query_params,
        )

    @property
    def timeout(self) -> float | None:
        '''Current transport timeout in seconds.'''
        return self._require_transport().timeout.read

    def set_timeout(self, timeout: float | timedelta) -> None:
        '''
        Replace the transport timeout. Requests already sent keep the timeout
        they were issued with.
        '''
        self._require_transport().timeout = httpx.Timeout(_timeout_seconds(timeout))

    @staticmethod
    def _to_response(response: httpx.Response) -> Response:
        return Response(
            body=response.text,
            status_code=response.status_code,
            headers=Headers.from_pairs(response.headers.multi_items()),
        )

    @staticmethod
    def _transport_error(e: Exception, method: str, path: str) -> TransportError:
        logger.warning('request failed', method=method, path=path, error=repr(e))
        return TransportError(str(e) or type(e).__name__, method=method, path=path)

    @staticmethod
    def _read_error(e: Exception, method: str, path: str) -> ResponseReadError:
        logger.warning('response read failed', method=method, path=path, error=repr(e))
        return ResponseReadError(str(e) or type(e).__name__, method=method, path=path)


class RequestClient(BaseRequestClient):
    '''
    Blocking client over an httpx.Client.

    Set http_client to None and every request raises ConfigurationError
    without touching the network.
    '''

    def __init__(self, config: ClientConfig, http_client: httpx.Client | None = None) -> None:
        owns = http_client is None
        super().__init__(config, http_client if http_client is not None else config.build_transport(), owns)

    def __enter__(self) -> 'RequestClient':
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        '''Close the transport if this client created it.'''
        if self._owns_transport and self.http_client is not None:
            self.http_client.close()

    def request(self, method: str, path: str) -> Response:
        '''
        Send one request for base_url + path and read the whole response.
        Raises a SimpleHTTPError subclass on any failure; nothing is retried.
        '''
        request = self._prepare(method, path)
        method = request.method
        logger.debug('sending request', method=method, url=str(request.url))
        try:
            response = self.http_client.send(request, stream=True)
        except httpx.HTTPError as e:
            raise self._transport_error(e, method, path) from e

        try:
            response.read()
            result = self._to_response(response)
        except (httpx.HTTPError, httpx.StreamError) as e:
            raise self._read_error(e, method, path) from e
        finally:
            response.close()

        logger.debug('request complete', method=method, url=str(request.url), status=result.status_code)
        return result

    def get(self, path: str) -> Response:
        return self.request('GET', path)

    def post(self, path: str) -> Response:
        return self.request('POST', path)

    def patch(self, path: str) -> Response:
        return self.request('PATCH', path)

    def put(self, path: str) -> Response:
        return self.request('PUT', path)

    def delete(self, path: str) -> Response:
        return self.request('DELETE', path)

    def head(self, path: str) -> Response:
        return self.request('HEAD', path)


def new(base_url: str) -> RequestClient:
    '''Client for base_url with empty mappings and the default 10 second timeout.'''
    return RequestClient(ClientConfig(base_url=base_url))
