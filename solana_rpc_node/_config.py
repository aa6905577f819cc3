# Copyright 2018-present Network Optix, Inc. Licensed under MPL 2.0: www.mozilla.org/MPL/2.0/
import fnmatch
import logging
import socket
from configparser import ConfigParser
from configparser import Error as ConfigParserError
from pathlib import Path
from pathlib import PurePosixPath
from typing import Mapping
from typing import MutableMapping
from typing import NamedTuple
from typing import Sequence
from typing import Tuple

_defaults = {
    'SOLANA_USER': 'solana',
    'DATA_DIR': '/solana',
    'RPC_BIND': '0.0.0.0',
    'RPC_PORT': '8899',
    'DYNAMIC_PORT_RANGE': '8000-8020',
    'ENTRYPOINT1': 'entrypoint.mainnet-beta.solana.com:8001',
    'ENTRYPOINT2': 'entrypoint2.mainnet-beta.solana.com:8001',
    'ENTRYPOINT3': 'entrypoint3.mainnet-beta.solana.com:8001',
    'ENABLE_TX_HISTORY': 'true',
    'ENABLE_CPI_LOG_STORAGE': 'true',
    'LIMIT_LEDGER_SIZE': 'true',
    'SOLANA_INSTALL_URL': 'https://release.solana.com/stable/install',
    }

# Known names that have no constant default: they are derived from others.
_derived = ['LEDGER_DIR', 'ACCOUNTS_DIR', 'LOG_DIR', 'SNAPSHOTS_DIR', 'IDENTITY_PATH']

SERVICE_NAME = 'solana-validator'


class RunConfiguration(NamedTuple):
    service_user: str
    data_dir: str
    ledger_dir: str
    accounts_dir: str
    log_dir: str
    snapshots_dir: str
    identity_path: str
    rpc_bind: str
    rpc_port: int
    dynamic_port_range: str
    entrypoints: Tuple[str, str, str]
    enable_tx_history: bool
    enable_cpi_log_storage: bool
    limit_ledger_size: bool
    install_url: str

    @property
    def home_dir(self) -> str:
        return str(PurePosixPath('/home', self.service_user))

    @property
    def launch_script_path(self) -> str:
        return str(PurePosixPath(self.home_dir, 'validator.sh'))

    @property
    def unit_path(self) -> str:
        return f'/etc/systemd/system/{SERVICE_NAME}.service'

    @property
    def solana_bin_dir(self) -> str:
        # Where the upstream installer puts the active release.
        return str(PurePosixPath(self.home_dir, '.local/share/solana/install/active_release/bin'))

    @property
    def validator_log(self) -> str:
        return str(PurePosixPath(self.log_dir, 'validator.log'))

    def data_dirs(self) -> Sequence[str]:
        return [self.ledger_dir, self.accounts_dir, self.log_dir, self.snapshots_dir]


def build_configuration(values: Mapping[str, str]) -> RunConfiguration:
    """Fill in defaults and derive paths.

    >>> c = build_configuration({'DATA_DIR': '/mnt/sol', 'LOG_DIR': '/var/log/sol'})
    >>> c.ledger_dir, c.log_dir, c.snapshots_dir
    ('/mnt/sol/ledger', '/var/log/sol', '/mnt/sol/snapshots')
    >>> build_configuration({'SOLANA_USER': 'rpc'}).identity_path
    '/home/rpc/.config/solana/identity.json'
    >>> build_configuration({'ENABLE_TX_HISTORY': 'True'}).enable_tx_history
    False
    >>> build_configuration({'LOG_DIR': '/mnt/my logs'}) # doctest: +IGNORE_EXCEPTION_DETAIL
    Traceback (most recent call last):
    ...
    ConfigurationError: LOG_DIR must not contain whitespace, got '/mnt/my logs'
    >>> build_configuration({'RPC_PORT': 'http'}) # doctest: +IGNORE_EXCEPTION_DETAIL
    Traceback (most recent call last):
    ...
    ConfigurationError: RPC_PORT must be an integer, got 'http'
    """
    v = {**_defaults, **values}
    data_dir = v['DATA_DIR']
    user = v['SOLANA_USER']
    port = v['RPC_PORT']
    try:
        rpc_port = int(port)
    except ValueError:
        raise ConfigurationError(f"RPC_PORT must be an integer, got {port!r}")
    log_dir = v.get('LOG_DIR') or f'{data_dir}/log'
    # systemd cannot parse "append:" paths with whitespace.
    if any(c.isspace() for c in log_dir):
        raise ConfigurationError(f"LOG_DIR must not contain whitespace, got {log_dir!r}")
    return RunConfiguration(
        service_user=user,
        data_dir=data_dir,
        ledger_dir=v.get('LEDGER_DIR') or f'{data_dir}/ledger',
        accounts_dir=v.get('ACCOUNTS_DIR') or f'{data_dir}/accounts',
        log_dir=log_dir,
        snapshots_dir=v.get('SNAPSHOTS_DIR') or f'{data_dir}/snapshots',
        identity_path=v.get('IDENTITY_PATH') or f'/home/{user}/.config/solana/identity.json',
        rpc_bind=v['RPC_BIND'],
        rpc_port=rpc_port,
        dynamic_port_range=v['DYNAMIC_PORT_RANGE'],
        entrypoints=(v['ENTRYPOINT1'], v['ENTRYPOINT2'], v['ENTRYPOINT3']),
        enable_tx_history=_is_true(v['ENABLE_TX_HISTORY']),
        enable_cpi_log_storage=_is_true(v['ENABLE_CPI_LOG_STORAGE']),
        limit_ledger_size=_is_true(v['LIMIT_LEDGER_SIZE']),
        install_url=v['SOLANA_INSTALL_URL'],
        )


def load_configuration(environ: Mapping[str, str], *paths: Path) -> RunConfiguration:
    """Read ini files, then let the environment override them.

    Empty environment variables are treated as unset, like ${VAR:-default} does.
    """
    values = _read_config(*paths)
    for name in [*_defaults, *_derived]:
        if environ.get(name):
            values[name] = environ[name]
    return build_configuration(values)


def _read_config(*paths: Path) -> MutableMapping[str, str]:
    """Read [defaults] and sections whose name matches the hostname.

    Host sections override [defaults]; later files override earlier ones.
    """
    host = socket.gethostname()
    known = {name.lower(): name for name in [*_defaults, *_derived]}
    config = {}
    for path in paths:
        config_parser = ConfigParser(default_section='__none__', interpolation=None)
        try:
            found = config_parser.read(path)
        except ConfigParserError as e:
            raise ConfigurationError(f"Cannot parse {path}: {e}")
        if not found:
            _logger.debug("Config %s: not found", path)
            continue
        # Stable sort: [defaults] first, host sections in file order.
        for section in sorted(config_parser.sections(), key=lambda s: s != 'defaults'):
            mask = '*' if section == 'defaults' else section
            if not fnmatch.fnmatch(host, mask):
                _logger.debug("Config %s: section %s: skip", path, section)
                continue
            _logger.info("Config %s: section %s: read", path, section)
            for key, value in config_parser.items(section):
                if key not in known:
                    raise ConfigurationError(f"Config {path}: section {section}: unknown key {key!r}")
                config[known[key]] = value
    return config


def _is_true(value: str) -> bool:
    return value == 'true'


class ConfigurationError(Exception):
    pass


default_config_paths = [
    Path('/etc/solana_rpc_node.ini'),
    Path('~/.config/solana_rpc_node.ini').expanduser(),
    ]

_logger = logging.getLogger(__name__)
