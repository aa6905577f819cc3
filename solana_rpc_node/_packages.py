# Copyright 2018-present Network Optix, Inc. Licensed under MPL 2.0: www.mozilla.org/MPL/2.0/
import shlex
from typing import Sequence

from solana_rpc_node._core import CompositeStep
from solana_rpc_node._core import Run

packages = [
    'curl', 'wget', 'jq', 'git', 'tmux', 'htop', 'iotop', 'iftop',
    'build-essential', 'pkg-config', 'libssl-dev',
    'chrony',
    ]


class SystemPackages(CompositeStep):
    """Bring the system up to date and install tools. Start time sync.

    There is no guard: apt itself does nothing when everything is current.
    """

    def __init__(self, names: Sequence[str] = tuple(packages)):
        # With noninteractive frontend, debconf takes defaults instead of asking.
        apt = 'DEBIAN_FRONTEND=noninteractive apt-get'
        super().__init__([
            Run(f'{apt} update'),
            Run(f'{apt} -y upgrade', timeout=3600),
            Run(f'{apt} -y install {shlex.join(names)}', timeout=3600),
            # Votes and slots are timestamped. A drifting clock makes the node
            # look behind or ahead of the cluster.
            Run('systemctl enable --now chrony'),
            ])
        self._repr = f'{SystemPackages.__name__}({len(names)} packages)'

    def __repr__(self):
        return self._repr
