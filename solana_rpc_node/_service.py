# Copyright 2018-present Network Optix, Inc. Licensed under MPL 2.0: www.mozilla.org/MPL/2.0/
import shlex

from solana_rpc_node._config import SERVICE_NAME
from solana_rpc_node._config import RunConfiguration
from solana_rpc_node._core import CompositeStep
from solana_rpc_node._core import InstallFile
from solana_rpc_node._core import Run
from solana_rpc_node._kernel import NOFILE_LIMIT
from solana_rpc_node._templates import render

RESTART_SEC = 5


def render_unit(config: RunConfiguration) -> str:
    return render(
        'solana-validator.service.j2',
        config=config,
        nofile_limit=NOFILE_LIMIT,
        restart_sec=RESTART_SEC,
        )


class RegisterService(CompositeStep):
    """Install the unit, enable it at boot and (re)start it.

    If the validator was already running, it is restarted
    to pick up the new launch script.
    """

    def __init__(self, config: RunConfiguration):
        super().__init__([
            InstallFile('root', config.unit_path, render_unit(config).encode(), 0o644),
            SystemCtl('daemon-reload'),
            SystemCtl('enable', SERVICE_NAME),
            SystemCtl('restart', SERVICE_NAME),
            ])
        self._repr = f'{RegisterService.__name__}({config.unit_path!r})'

    def __repr__(self):
        return self._repr


class SystemCtl(Run):
    """Command to the system instance of systemd.

    >>> print(SystemCtl('enable', 'solana-validator')._command)
    systemctl enable solana-validator
    """

    def __init__(self, *command: str):
        super().__init__(f'systemctl {shlex.join(command)}')
        self._repr = f'{SystemCtl.__name__}{command!r}'

    def __repr__(self):
        return self._repr
