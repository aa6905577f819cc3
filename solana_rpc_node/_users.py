# Copyright 2018-present Network Optix, Inc. Licensed under MPL 2.0: www.mozilla.org/MPL/2.0/
import logging
import shlex

from solana_rpc_node._core import Step


class AddServiceAccount(Step):

    def __init__(self, username: str):
        self._username = username

    def __repr__(self):
        return f'{AddServiceAccount.__name__}({self._username!r})'

    def is_satisfied(self, host):
        if host.user_exists(self._username):
            _logger.info("User exists: %s", self._username)
            return True
        return False

    def _apply(self, host):
        host.run(f'useradd -m -s /bin/bash {shlex.quote(self._username)}', timeout=60)
        _logger.info("User added: %s", self._username)


_logger = logging.getLogger(__name__)
