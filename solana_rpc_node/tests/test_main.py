# Copyright 2018-present Network Optix, Inc. Licensed under MPL 2.0: www.mozilla.org/MPL/2.0/
import io
import unittest
from contextlib import redirect_stderr
from contextlib import redirect_stdout

from solana_rpc_node.__main__ import main
from solana_rpc_node.tests._fake_host import FakeHost


class TestMain(unittest.TestCase):

    def setUp(self):
        self.stdout = io.StringIO()
        self.stderr = io.StringIO()

    def _main(self, environ, host):
        # No config files: nothing is read from this machine's /etc or home.
        with redirect_stdout(self.stdout), redirect_stderr(self.stderr):
            return main(environ, host, config_paths=[])

    def test_success(self):
        host = FakeHost()
        self.assertEqual(self._main({}, host), 0)
        self.assertIn('systemctl status solana-validator', self.stdout.getvalue())
        self.assertIn('/solana/log/validator.log', self.stdout.getvalue())
        self.assertEqual(self.stderr.getvalue(), '')
        self.assertEqual(host.commands_with('systemctl restart solana-validator'), ['systemctl restart solana-validator'])

    def test_not_administrator(self):
        host = FakeHost(administrator=False)
        self.assertEqual(self._main({}, host), 1)
        self.assertIn('ERROR', self.stderr.getvalue())
        self.assertIn('root', self.stderr.getvalue())
        self.assertEqual(host.commands, [])
        self.assertEqual(host.files, {})

    def test_failed_step_exit_code(self):
        host = FakeHost()
        host.fail_on('apt-get -y install', returncode=100)
        self.assertEqual(self._main({}, host), 100)
        self.assertEqual(host.commands_with('useradd'), [])
        self.assertNotIn('systemctl status', self.stdout.getvalue())

    def test_bad_port(self):
        host = FakeHost()
        self.assertEqual(self._main({'RPC_PORT': 'x'}, host), 1)
        self.assertIn('RPC_PORT', self.stderr.getvalue())
        self.assertEqual(host.commands, [])

    def test_environment_is_used(self):
        host = FakeHost()
        self.assertEqual(self._main({'SOLANA_USER': 'rpc', 'LOG_DIR': '/var/log/rpc'}, host), 0)
        self.assertIn('/var/log/rpc/validator.log', self.stdout.getvalue())
        self.assertIn('rpc', host.users)
