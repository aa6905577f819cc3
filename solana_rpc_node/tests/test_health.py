# Copyright 2018-present Network Optix, Inc. Licensed under MPL 2.0: www.mozilla.org/MPL/2.0/
import json
import unittest
from http.server import BaseHTTPRequestHandler
from http.server import HTTPServer
from threading import Thread

from solana_rpc_node.health import RpcUnhealthy
from solana_rpc_node.health import rpc_health


class _FakeNode(BaseHTTPRequestHandler):
    # The answer and the received requests live on the server object.

    def do_POST(self):
        length = int(self.headers['Content-Length'])
        self.server.requests.append(json.loads(self.rfile.read(length)))
        status, body = self.server.answer
        self.send_response(status)
        self.send_header('Content-Type', 'application/json')
        self.send_header('Content-Length', str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    def log_message(self, format, *args):
        pass


class TestRpcHealth(unittest.TestCase):

    def setUp(self):
        self.server = HTTPServer(('127.0.0.1', 0), _FakeNode)
        self.server.requests = []
        listen_host, listen_port = self.server.server_address
        self.thread = Thread(target=self.server.serve_forever, daemon=True)
        self.thread.start()
        self.url = f'http://{listen_host}:{listen_port}'

    def tearDown(self):
        self.server.shutdown()
        self.thread.join(timeout=10)
        # HTTPServer does not wait for its socket to close.
        self.server.socket.close()

    def _answer(self, status, payload):
        body = payload if isinstance(payload, bytes) else json.dumps(payload).encode()
        self.server.answer = (status, body)

    def test_healthy(self):
        self._answer(200, {'jsonrpc': '2.0', 'result': 'ok', 'id': 1})
        self.assertEqual(rpc_health(self.url), 'ok')
        self.assertEqual(self.server.requests, [{'jsonrpc': '2.0', 'id': 1, 'method': 'getHealth'}])

    def test_behind(self):
        self._answer(200, {
            'jsonrpc': '2.0',
            'error': {'code': -32005, 'message': 'Node is behind by 42 slots', 'data': {'numSlotsBehind': 42}},
            'id': 1,
            })
        with self.assertRaisesRegex(RpcUnhealthy, 'behind by 42 slots'):
            rpc_health(self.url)

    def test_http_error(self):
        self._answer(503, {'error': 'unavailable'})
        with self.assertRaises(RpcUnhealthy):
            rpc_health(self.url)

    def test_not_json(self):
        self._answer(200, b'<html>proxy page</html>')
        with self.assertRaisesRegex(RpcUnhealthy, 'not a JSON response'):
            rpc_health(self.url)

    def test_error_is_a_string(self):
        self._answer(200, {'jsonrpc': '2.0', 'error': 'boom', 'id': 1})
        with self.assertRaisesRegex(RpcUnhealthy, 'boom'):
            rpc_health(self.url)

    def test_no_result(self):
        self._answer(200, {'jsonrpc': '2.0', 'id': 1})
        with self.assertRaisesRegex(RpcUnhealthy, 'no result'):
            rpc_health(self.url)

    def test_body_is_not_an_object(self):
        self._answer(200, b'"ok"')
        with self.assertRaisesRegex(RpcUnhealthy, 'unexpected response'):
            rpc_health(self.url)


class TestNoNode(unittest.TestCase):

    def test_connection_refused(self):
        server = HTTPServer(('127.0.0.1', 0), _FakeNode)
        [host, port] = server.server_address
        server.server_close()
        with self.assertRaises(RpcUnhealthy):
            rpc_health(f'http://{host}:{port}', timeout=2)
