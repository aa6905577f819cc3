# Copyright 2018-present Network Optix, Inc. Licensed under MPL 2.0: www.mozilla.org/MPL/2.0/
"""Turn a fresh Ubuntu host into a non-voting Solana RPC node.

The configuration of the host is kept in code under version control.
It serves as documentation for what is installed and configured.

Everything the node does is done by the external solana-validator binary.
This package only prepares the host and hands the binary to systemd:
packages, kernel tuning, the service account, data dirs, the toolchain,
the identity keypair, the launch script and the unit.

Every action is formulated in terms of a step.
In most cases, it is a Run object or a subclass of CompositeStep.
It is desirable that commands be written in the most raw form,
so that it is clear what is being run and it is easy to copy.

Steps must be idempotent. Running them again must be safe.
Steps that cannot be undone (the account, the identity)
are guarded and skipped when already done.

Steps are not executed directly. Only via a StepRunner.
The runner stops on the first failure and leaves the host as is.
If provisioning fails, the human who runs it must investigate the problem.

Configuration is taken from ini files and the environment,
see _config.py for the names and the defaults.
"""
from solana_rpc_node._config import ConfigurationError
from solana_rpc_node._config import RunConfiguration
from solana_rpc_node._config import build_configuration
from solana_rpc_node._config import load_configuration
from solana_rpc_node._core import CompositeStep
from solana_rpc_node._core import InstallFile
from solana_rpc_node._core import NotAdministrator
from solana_rpc_node._core import Outcome
from solana_rpc_node._core import Run
from solana_rpc_node._core import RunReport
from solana_rpc_node._core import Step
from solana_rpc_node._core import StepRunner
from solana_rpc_node._host import Host
from solana_rpc_node._host import LocalHost
from solana_rpc_node._plan import provisioning_steps

__all__ = [
    'CompositeStep',
    'ConfigurationError',
    'Host',
    'InstallFile',
    'LocalHost',
    'NotAdministrator',
    'Outcome',
    'Run',
    'RunConfiguration',
    'RunReport',
    'Step',
    'StepRunner',
    'build_configuration',
    'load_configuration',
    'provisioning_steps',
    ]
