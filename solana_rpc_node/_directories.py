# Copyright 2018-present Network Optix, Inc. Licensed under MPL 2.0: www.mozilla.org/MPL/2.0/
import shlex
from pathlib import PurePosixPath
from typing import Sequence

from solana_rpc_node._core import CompositeStep
from solana_rpc_node._core import Run


class DataDirectories(CompositeStep):
    """Make data dirs and give them to the service account.

    Ownership is re-applied on every run, even if the dirs exist.
    A dir moved out of the data root is chowned separately.

    >>> d = DataDirectories('sol', '/solana', ['/solana/ledger', '/mnt/accounts'])
    >>> [s._command for s in d._steps]
    ['mkdir -p /solana/ledger /mnt/accounts', 'chown -R sol:sol /solana /mnt/accounts']
    """

    def __init__(self, owner: str, data_dir: str, dirs: Sequence[str]):
        roots = [data_dir, *[d for d in dirs if not _is_within(d, data_dir)]]
        o = shlex.quote(owner)
        super().__init__([
            Run(f'mkdir -p {shlex.join(dirs)}'),
            Run(f'chown -R {o}:{o} {shlex.join(roots)}'),
            ])
        self._repr = f'{DataDirectories.__name__}({owner!r}, {data_dir!r})'

    def __repr__(self):
        return self._repr


def _is_within(path: str, root: str) -> bool:
    return PurePosixPath(path).is_relative_to(PurePosixPath(root))
