'''asyncio counterpart of RequestClient over an httpx.AsyncClient.'''

import httpx
import structlog

from simplehttp.client import BaseRequestClient, Response
from simplehttp.config import ClientConfig

logger = structlog.get_logger()


class AsyncRequestClient(BaseRequestClient):
    '''
    Same attributes, errors and request steps as RequestClient; the verb
    methods are coroutines.
    '''

    def __init__(self, config: ClientConfig, http_client: httpx.AsyncClient | None = None) -> None:
        owns = http_client is None
        super().__init__(config, http_client if http_client is not None else config.build_async_transport(), owns)

    async def __aenter__(self) -> 'AsyncRequestClient':
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_transport and self.http_client is not None:
            await self.http_client.aclose()

    async def request(self, method: str, path: str) -> Response:
        '''Send one request for base_url + path and read the whole response.'''
        request = self._prepare(method, path)
        method = request.method
        logger.debug('sending request', method=method, url=str(request.url))
        try:
            response = await self.http_client.send(request, stream=True)
        except httpx.HTTPError as e:
            raise self._transport_error(e, method, path) from e

        try:
            await response.aread()
            result = self._to_response(response)
        except (httpx.HTTPError, httpx.StreamError) as e:
            raise self._read_error(e, method, path) from e
        finally:
            await response.aclose()

        logger.debug('request complete', method=method, url=str(request.url), status=result.status_code)
        return result

    async def get(self, path: str) -> Response:
        return await self.request('GET', path)

    async def post(self, path: str) -> Response:
        return await self.request('POST', path)

    async def patch(self, path: str) -> Response:
        return await self.request('PATCH', path)

    async def put(self, path: str) -> Response:
        return await self.request('PUT', path)

    async def delete(self, path: str) -> Response:
        return await self.request('DELETE', path)

    async def head(self, path: str) -> Response:
        return await self.request('HEAD', path)
