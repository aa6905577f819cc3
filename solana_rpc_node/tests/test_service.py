# Copyright 2018-present Network Optix, Inc. Licensed under MPL 2.0: www.mozilla.org/MPL/2.0/
import unittest
from configparser import ConfigParser

from solana_rpc_node._config import build_configuration
from solana_rpc_node._kernel import LIMITS_CONF
from solana_rpc_node._kernel import KernelTuning
from solana_rpc_node._service import RegisterService
from solana_rpc_node._service import render_unit
from solana_rpc_node.tests._fake_host import FakeHost


def _parse_unit(text):
    parser = ConfigParser(interpolation=None, default_section='__none__')
    parser.optionxform = str
    parser.read_string(text)
    return {section: dict(parser.items(section)) for section in parser.sections()}


class TestUnit(unittest.TestCase):

    def test_default_unit(self):
        unit = _parse_unit(render_unit(build_configuration({})))
        self.assertEqual(unit, {
            'Unit': {
                'Description': 'Solana Validator (RPC Node)',
                'After': 'network-online.target',
                'Wants': 'network-online.target',
                },
            'Service': {
                'User': 'solana',
                'Group': 'solana',
                'Type': 'simple',
                'LimitNOFILE': '1000000',
                'ExecStart': '/home/solana/validator.sh',
                'Restart': 'always',
                'RestartSec': '5',
                'StandardOutput': 'append:/solana/log/systemd.out',
                'StandardError': 'append:/solana/log/systemd.err',
                },
            'Install': {
                'WantedBy': 'multi-user.target',
                },
            })

    def test_follows_configuration(self):
        config = build_configuration({'SOLANA_USER': 'rpc', 'LOG_DIR': '/var/log/rpc'})
        service = _parse_unit(render_unit(config))['Service']
        self.assertEqual(service['User'], 'rpc')
        self.assertEqual(service['Group'], 'rpc')
        self.assertEqual(service['ExecStart'], '/home/rpc/validator.sh')
        self.assertEqual(service['StandardOutput'], 'append:/var/log/rpc/systemd.out')
        self.assertEqual(service['StandardError'], 'append:/var/log/rpc/systemd.err')

    def test_file_limit_matches_ulimit(self):
        host = FakeHost()
        KernelTuning().apply(host)
        limits = host.files[LIMITS_CONF].decode().split()
        service = _parse_unit(render_unit(build_configuration({})))['Service']
        self.assertEqual(limits[limits.index('nofile') + 1], service['LimitNOFILE'])


class TestRegisterService(unittest.TestCase):

    def test_install_reload_enable_restart(self):
        host = FakeHost()
        config = build_configuration({})
        outcome = RegisterService(config).apply(host)
        self.assertFalse(outcome.failed())
        self.assertEqual(host.commands, [
            'install /dev/stdin /etc/systemd/system/solana-validator.service -o root -g root -m 644 -D',
            'systemctl daemon-reload',
            'systemctl enable solana-validator',
            'systemctl restart solana-validator',
            ])
        self.assertEqual(host.files[config.unit_path].decode(), render_unit(config))

    def test_reload_failure(self):
        host = FakeHost()
        host.fail_on('daemon-reload')
        outcome = RegisterService(build_configuration({})).apply(host)
        self.assertTrue(outcome.failed())
        self.assertEqual(host.commands_with('systemctl'), ['systemctl daemon-reload'])
