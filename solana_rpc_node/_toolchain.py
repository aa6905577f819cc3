# Copyright 2018-present Network Optix, Inc. Licensed under MPL 2.0: www.mozilla.org/MPL/2.0/
import logging
import shlex
from pathlib import PurePosixPath

from solana_rpc_node._core import CompositeStep
from solana_rpc_node._core import Run


class InstallToolchain(Run):
    """Fetch and run the upstream installer as the service account.

    The installer script is stored in a variable first: a failed download
    must fail the step rather than run an empty script.

    >>> print(InstallToolchain('sol', 'https://release.solana.com/stable/install')._command)
    sudo -Hu sol bash -lc 'installer="$(curl -sSfL https://release.solana.com/stable/install)" && sh -c "$installer"'
    """

    def __init__(self, user: str, install_url: str):
        script = f'installer="$(curl -sSfL {shlex.quote(install_url)})" && sh -c "$installer"'
        super().__init__(f'sudo -Hu {shlex.quote(user)} bash -lc {shlex.quote(script)}', timeout=1800)
        self._repr = f'{InstallToolchain.__name__}({user!r}, {install_url!r})'

    def __repr__(self):
        return self._repr


class GenerateIdentity(CompositeStep):
    """Generate the node identity keypair, once.

    An existing identity is never overwritten, whatever the configuration says:
    losing it means losing the node's identity on the cluster.
    """

    def __init__(self, user: str, identity_path: str):
        u = shlex.quote(user)
        parent = shlex.quote(str(PurePosixPath(identity_path).parent))
        # Login shell: PATH to solana-keygen is set up in the profile by the installer.
        keygen = f'solana-keygen new --no-bip39-passphrase -o {shlex.quote(identity_path)}'
        super().__init__([
            Run(f'sudo -Hu {u} mkdir -p {parent}', timeout=60),
            Run(f'sudo -Hu {u} bash -lc {shlex.quote(keygen)}', timeout=60),
            ])
        self._identity_path = identity_path
        self._repr = f'{GenerateIdentity.__name__}({user!r}, {identity_path!r})'

    def __repr__(self):
        return self._repr

    def is_satisfied(self, host):
        if host.file_exists(self._identity_path):
            _logger.info("Identity already exists: %s", self._identity_path)
            return True
        return False


_logger = logging.getLogger(__name__)
