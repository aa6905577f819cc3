# Copyright 2018-present Network Optix, Inc. Licensed under MPL 2.0: www.mozilla.org/MPL/2.0/
import logging
import os
import pwd
import subprocess
from abc import ABCMeta
from abc import abstractmethod
from typing import Optional


class Host(metaclass=ABCMeta):
    """Everything a step may do to the machine.

    Commands are passed as shell strings in their raw form,
    so that a command from the log can be copied and run manually.
    """

    @abstractmethod
    def is_administrator(self) -> bool:
        pass

    @abstractmethod
    def user_exists(self, username: str) -> bool:
        pass

    @abstractmethod
    def file_exists(self, path: str) -> bool:
        pass

    @abstractmethod
    def run(self, command: str, *, timeout: Optional[float]):
        """Run command, raise CalledProcessError on non-zero exit status."""
        pass

    @abstractmethod
    def run_input(self, command: str, stdin: bytes, *, timeout: Optional[float]):
        """Run command with data on its standard input."""
        pass


class LocalHost(Host):

    def is_administrator(self):
        return os.geteuid() == 0

    def user_exists(self, username):
        try:
            pwd.getpwnam(username)
        except KeyError:
            return False
        return True

    def file_exists(self, path):
        return os.path.isfile(path)

    def run(self, command, *, timeout):
        r = subprocess.run(
            _build(command),
            # A command must never wait for the operator.
            # If it asks for input, it fails instead of hanging.
            stdin=subprocess.DEVNULL,
            timeout=timeout,
            )
        r.check_returncode()
        return r

    def run_input(self, command, stdin, *, timeout):
        r = subprocess.run(_build(command), input=stdin, timeout=timeout)
        r.check_returncode()
        return r


def _build(command):
    _logger.info("Run: %s", command)
    return ['bash', '-c', command]


_logger = logging.getLogger(__name__)
