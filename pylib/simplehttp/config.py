'''Construction-time configuration for the request clients.'''

from dataclasses import dataclass, field

import httpx

DEFAULT_TIMEOUT = 10.0  # seconds


@dataclass
class ClientConfig:
    '''
    Configuration a client is built from. The client copies these fields into
    its own public attributes; later edits to the config do not reach it.
    '''

    base_url: str
    headers: dict[str, str] = field(default_factory=dict)
    body_fields: dict[str, str] = field(default_factory=dict)  # sent as a flat JSON object
    query_params: dict[str, str] = field(default_factory=dict)
    timeout: float = DEFAULT_TIMEOUT
    follow_redirects: bool = True  # httpx's own redirect cap still applies

    def build_transport(self) -> httpx.Client:
        '''Default blocking transport handle.'''
        return httpx.Client(timeout=self.timeout, follow_redirects=self.follow_redirects)

    def build_async_transport(self) -> httpx.AsyncClient:
        '''Default asyncio transport handle.'''
        return httpx.AsyncClient(timeout=self.timeout, follow_redirects=self.follow_redirects)
