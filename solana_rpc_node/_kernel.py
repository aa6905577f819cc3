# Copyright 2018-present Network Optix, Inc. Licensed under MPL 2.0: www.mozilla.org/MPL/2.0/
from pathlib import Path

from solana_rpc_node._core import CompositeStep
from solana_rpc_node._core import InstallFile
from solana_rpc_node._core import Run

# Must match the nofile line of 90-solana.conf.
NOFILE_LIMIT = 1000000

SYSCTL_CONF = '/etc/sysctl.d/20-solana.conf'
LIMITS_CONF = '/etc/security/limits.d/90-solana.conf'


class KernelTuning(CompositeStep):
    """Large socket buffers, many open files and memory maps.

    Files are overwritten with the same contents on every run.
    """

    def __init__(self):
        super().__init__([
            InstallFile('root', SYSCTL_CONF, _read('20-solana.conf'), 0o644),
            InstallFile('root', LIMITS_CONF, _read('90-solana.conf'), 0o644),
            Run('sysctl --system'),
            ])

    def __repr__(self):
        return f'{KernelTuning.__name__}()'


def _read(name):
    return Path(__file__).with_name('files').joinpath(name).read_bytes()
