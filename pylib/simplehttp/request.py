'''
Request construction shared by the blocking and asyncio clients.

Steps 2 through 5 of sending a request live here: encode the body, join base
URL and path, append query parameters, apply headers. Nothing in this module
does I/O.
'''

import json
import re

import httpx

from simplehttp.errors import RequestConstructionError, SerializationError

JSON_CONTENT_TYPE = 'application/json'

# RFC 9110 token characters
_METHOD_TOKEN = re.compile(r"^[!#$%&'*+\-.^_`|~0-9A-Za-z]+$")


def check_method(method: str, path: str) -> str:
    '''Return method as given, or raise if it is not a valid token.'''
    if not isinstance(method, str) or not _METHOD_TOKEN.match(method):
        raise RequestConstructionError(f'invalid method {method!r}', method=str(method), path=path)
    return method


def encode_body(body_fields: dict[str, str], method: str, path: str) -> bytes | None:
    '''
    Compact JSON object for a non-empty mapping, None for an empty one.
    Keys are sorted so the same mapping always produces the same bytes.
    '''
    if not body_fields:
        return None
    for key, value in body_fields.items():
        if not isinstance(key, str) or not isinstance(value, str):
            raise SerializationError(
                f'body fields must map str to str, got {type(key).__name__} -> {type(value).__name__}',
                method=method,
                path=path,
            )
    try:
        return json.dumps(body_fields, separators=(',', ':'), sort_keys=True).encode('utf-8')
    except (TypeError, ValueError) as e:
        raise SerializationError(str(e), method=method, path=path) from e


def build_url(base_url: str, path: str, query_params: dict[str, str], method: str) -> httpx.URL:
    '''
    base_url and path are concatenated verbatim. Query parameters are added
    after any query string path already carries.
    '''
    try:
        url = httpx.URL(f'{base_url}{path}')
        for key, value in sorted(query_params.items()):
            url = url.copy_add_param(key, value)
    except (httpx.InvalidURL, TypeError) as e:
        raise RequestConstructionError(str(e), method=method, path=path) from e
    return url


def build_request(
    http_client: httpx.Client | httpx.AsyncClient,
    method: str,
    path: str,
    *,
    base_url: str,
    headers: dict[str, str],
    body_fields: dict[str, str],
    query_params: dict[str, str],
) -> httpx.Request:
    '''
    Build (but do not send) the request for method and path. Configured headers
    override both the transport defaults and the JSON content type.
    '''
    body = encode_body(body_fields, method, path)
    method = check_method(method, path)
    url = build_url(base_url, path, query_params, method)

    request_headers: dict[str, str] = {}
    if body is not None:
        request_headers['Content-Type'] = JSON_CONTENT_TYPE
    # Case-insensitive overwrite, so a configured 'content-type' wins over the default
    for name, value in headers.items():
        for existing in [k for k in request_headers if k.lower() == name.lower()]:
            del request_headers[existing]
        request_headers[name] = value

    try:
        request = http_client.build_request(method, url, content=body, headers=request_headers)
    except (httpx.InvalidURL, TypeError, ValueError) as e:
        raise RequestConstructionError(str(e), method=method, path=path) from e
    # httpx upper-cases methods; tokens are case-sensitive, so send it as given
    request.method = method
    return request
