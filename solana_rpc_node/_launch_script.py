# Copyright 2018-present Network Optix, Inc. Licensed under MPL 2.0: www.mozilla.org/MPL/2.0/
from typing import Sequence

from solana_rpc_node._config import RunConfiguration
from solana_rpc_node._core import InstallFile
from solana_rpc_node._templates import render


def optional_flags(config: RunConfiguration) -> Sequence[str]:
    """Flags switched by the feature toggles, in a fixed order.

    >>> from solana_rpc_node._config import build_configuration
    >>> optional_flags(build_configuration({}))
    ['--limit-ledger-size', '--enable-rpc-transaction-history', '--enable-cpi-and-log-storage']
    >>> optional_flags(build_configuration({'ENABLE_TX_HISTORY': 'false'}))
    ['--limit-ledger-size', '--enable-cpi-and-log-storage']
    """
    flags = []
    if config.limit_ledger_size:
        flags.append('--limit-ledger-size')
    if config.enable_tx_history:
        flags.append('--enable-rpc-transaction-history')
    if config.enable_cpi_log_storage:
        flags.append('--enable-cpi-and-log-storage')
    return flags


def render_launch_script(config: RunConfiguration) -> str:
    return render('validator.sh.j2', config=config, optional_flags=optional_flags(config))


class WriteLaunchScript(InstallFile):
    """Always rewritten: the script follows the current configuration."""

    def __init__(self, config: RunConfiguration):
        super().__init__(
            config.service_user,
            config.launch_script_path,
            render_launch_script(config).encode(),
            0o755,
            )
