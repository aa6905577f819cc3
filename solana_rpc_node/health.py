# Copyright 2018-present Network Optix, Inc. Licensed under MPL 2.0: www.mozilla.org/MPL/2.0/
"""Ask the local node whether it is healthy.

The node answers "ok" once it has caught up with the cluster.
Otherwise, it answers with an error, e.g. "Node is behind by 42 slots".
See: https://solana.com/docs/rpc/http/gethealth
"""
import logging
import os
import sys

import requests

from solana_rpc_node._config import ConfigurationError
from solana_rpc_node._config import default_config_paths
from solana_rpc_node._config import load_configuration


def rpc_health(url: str, timeout: float = 5) -> str:
    payload = {'jsonrpc': '2.0', 'id': 1, 'method': 'getHealth'}
    try:
        response = requests.post(url, json=payload, timeout=timeout)
        response.raise_for_status()
    except requests.RequestException as e:
        raise RpcUnhealthy(f"{url}: {e}")
    try:
        body = response.json()
    except ValueError as e:
        raise RpcUnhealthy(f"{url}: not a JSON response: {e}")
    if not isinstance(body, dict):
        raise RpcUnhealthy(f"{url}: unexpected response: {body!r}")
    if 'error' in body:
        error = body['error']
        message = error.get('message', error) if isinstance(error, dict) else error
        raise RpcUnhealthy(f"{url}: {message}")
    if 'result' not in body:
        raise RpcUnhealthy(f"{url}: no result in response")
    return body['result']


def local_rpc_url(rpc_port: int) -> str:
    return f'http://127.0.0.1:{rpc_port}'


class RpcUnhealthy(Exception):
    pass


def main():
    try:
        config = load_configuration(os.environ, *default_config_paths)
    except ConfigurationError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1
    try:
        result = rpc_health(local_rpc_url(config.rpc_port))
    except RpcUnhealthy as e:
        _logger.error("Unhealthy: %s", e)
        return 1
    print(result)
    return 0 if result == 'ok' else 1


_logger = logging.getLogger(__name__)


def entry_point():
    logging.basicConfig(level=logging.INFO)
    exit(main())


if __name__ == '__main__':
    entry_point()
