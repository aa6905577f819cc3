# Copyright 2018-present Network Optix, Inc. Licensed under MPL 2.0: www.mozilla.org/MPL/2.0/
from typing import Sequence

from solana_rpc_node._config import RunConfiguration
from solana_rpc_node._core import Step
from solana_rpc_node._directories import DataDirectories
from solana_rpc_node._kernel import KernelTuning
from solana_rpc_node._launch_script import WriteLaunchScript
from solana_rpc_node._packages import SystemPackages
from solana_rpc_node._service import RegisterService
from solana_rpc_node._toolchain import GenerateIdentity
from solana_rpc_node._toolchain import InstallToolchain
from solana_rpc_node._users import AddServiceAccount


def provisioning_steps(config: RunConfiguration) -> Sequence[Step]:
    """Steps to turn a fresh Ubuntu host into a non-voting RPC node.

    Order matters: each step relies on the previous ones.
    """
    return [
        SystemPackages(),
        KernelTuning(),
        AddServiceAccount(config.service_user),
        DataDirectories(config.service_user, config.data_dir, config.data_dirs()),
        InstallToolchain(config.service_user, config.install_url),
        GenerateIdentity(config.service_user, config.identity_path),
        WriteLaunchScript(config),
        RegisterService(config),
        ]
