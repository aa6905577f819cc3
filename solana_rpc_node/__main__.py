# Copyright 2018-present Network Optix, Inc. Licensed under MPL 2.0: www.mozilla.org/MPL/2.0/
import logging
import os
import sys
from typing import Mapping
from typing import Optional
from typing import Sequence

from solana_rpc_node._config import SERVICE_NAME
from solana_rpc_node._config import ConfigurationError
from solana_rpc_node._config import RunConfiguration
from solana_rpc_node._config import default_config_paths
from solana_rpc_node._config import load_configuration
from solana_rpc_node._core import NotAdministrator
from solana_rpc_node._core import StepRunner
from solana_rpc_node._host import Host
from solana_rpc_node._host import LocalHost
from solana_rpc_node._plan import provisioning_steps
from solana_rpc_node.health import local_rpc_url


def main(environ: Mapping[str, str] = os.environ, host: Optional[Host] = None, config_paths=default_config_paths):
    try:
        config = load_configuration(environ, *config_paths)
    except ConfigurationError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1
    runner = StepRunner(host if host is not None else LocalHost())
    try:
        report = runner.run(provisioning_steps(config))
    except NotAdministrator as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1
    failure = report.failure()
    if failure is not None:
        [step, outcome] = failure
        _logger.error("Provisioning stopped at %r: %s", step, outcome.reason)
        return report.exit_code()
    _logger.info("Done. Useful commands:")
    for line in operator_hints(config):
        print(f"  {line}")
    return 0


def operator_hints(config: RunConfiguration) -> Sequence[str]:
    request = '{"jsonrpc":"2.0","id":1,"method":"getHealth"}'
    return [
        f"sudo systemctl status {SERVICE_NAME} --no-pager",
        f"sudo tail -f {config.validator_log}",
        f"curl -s {local_rpc_url(config.rpc_port)} -H 'Content-Type: application/json' -d '{request}'",
        "python3 -m solana_rpc_node.health",
        ]


def _init_logging():
    level = logging.DEBUG if os.getenv('PROVISION_DEBUG') else logging.INFO
    logging.basicConfig(level=level, format='[install] %(levelname)s %(name)s %(message)s')


_logger = logging.getLogger(__name__)


def entry_point():
    _init_logging()
    exit(main())


if __name__ == '__main__':
    entry_point()
