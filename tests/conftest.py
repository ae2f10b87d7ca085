'''Local echo server standing in for a remote API. Runs once per test session.'''

import json
import threading
import time
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from urllib.parse import urlsplit

import pytest

from simplehttp import ClientConfig, RequestClient

DAD_JOKE = {
    'id': 'R7UfaahVfFd',
    'joke': 'My dog used to chase people on a bike a lot. It got so bad I had to take his bike away.',
    'status': 200,
}

JSON_TYPE = 'application/json; charset=utf-8'


class EchoHandler(BaseHTTPRequestHandler):
    '''Routes mirror the ones the client is exercised against in tests.'''

    def log_message(self, format, *args):
        pass

    def _read_body(self) -> bytes:
        length = int(self.headers.get('Content-Length') or 0)
        return self.rfile.read(length) if length else b''

    def _header_map(self) -> dict[str, list[str]]:
        result: dict[str, list[str]] = {}
        for name in self.headers.keys():
            if name not in result:
                result[name] = self.headers.get_all(name)
        return result

    def _reply(self, status: int = 200, body: bytes = b'', headers: list[tuple[str, str]] | None = None):
        self.send_response(status)
        self.send_header('Method', self.command)
        for name, value in headers or []:
            self.send_header(name, value)
        self.send_header('Content-Length', str(len(body)))
        self.end_headers()
        if self.command != 'HEAD' and body:
            self.wfile.write(body)

    def do_GET(self):
        url = urlsplit(self.path)
        route = url.path
        if route == '/icanhazdadjoke':
            self._reply(body=json.dumps(DAD_JOKE).encode(), headers=[('Content-Type', JSON_TYPE)])
        elif route == '/bad-request':
            self._reply(400)
        elif route == '/too-many':
            self._reply(429, b'{"errMsg":"too many requests"}', [('Content-Type', JSON_TYPE)])
        elif route == '/protected':
            if self.headers.get('Authorization') == 'Bearer goodtoken':
                self._reply(body=b'good')
            else:
                self._reply(401, b'bad')
        elif route == '/query-parameter':
            self._reply(body=url.query.encode())
        elif route == '/header':
            self._reply(body=json.dumps(self._header_map()).encode(), headers=[('Content-Type', JSON_TYPE)])
        elif route == '/payload':
            self._reply(body=self._read_body())
        elif route == '/content-type':
            self._read_body()
            self._reply(body=(self.headers.get('Content-Type') or '').encode())
        elif route == '/multi-header':
            self._reply(headers=[('Set-Cookie', 'a=1'), ('Set-Cookie', 'b=2')])
        elif route == '/unlimited-redirect':
            self._reply(301, headers=[('Location', '/unlimited-redirect')])
        elif route == '/slow':
            time.sleep(0.5)
            try:
                self._reply(body=b'late')
            except (BrokenPipeError, ConnectionResetError):
                pass
        else:
            self._reply()

    def do_POST(self):
        route = urlsplit(self.path).path
        body = self._read_body()
        if route == '/echo':
            echo = {'header': self._header_map(), 'body': body.decode('utf-8')}
            self._reply(body=json.dumps(echo, separators=(',', ':')).encode(), headers=[('Content-Type', JSON_TYPE)])
        elif route == '/content-type':
            self._reply(body=(self.headers.get('Content-Type') or '').encode())
        else:
            self._reply(body=b'TestPost: text response')

    def do_HEAD(self):
        if urlsplit(self.path).path == '/header':
            self._reply(body=json.dumps(self._header_map()).encode(), headers=[('Content-Type', JSON_TYPE)])
        else:
            self._reply()

    def _reply_with_payload(self):
        self._read_body()
        self._reply()

    do_PATCH = _reply_with_payload
    do_PUT = _reply_with_payload
    do_DELETE = _reply_with_payload


@pytest.fixture(scope='session')
def server_url():
    server = ThreadingHTTPServer(('127.0.0.1', 0), EchoHandler)
    server.daemon_threads = True
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    host, port = server.server_address[:2]
    yield f'http://{host}:{port}'
    server.shutdown()
    server.server_close()


@pytest.fixture
def client(server_url):
    with RequestClient(ClientConfig(base_url=server_url)) as c:
        yield c


@pytest.fixture
def anyio_backend():
    return 'asyncio'
