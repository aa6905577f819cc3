# Copyright 2018-present Network Optix, Inc. Licensed under MPL 2.0: www.mozilla.org/MPL/2.0/
import logging
import shlex
import subprocess
from abc import ABCMeta
from abc import abstractmethod
from typing import List
from typing import NamedTuple
from typing import Optional
from typing import Sequence
from typing import Tuple

from solana_rpc_node._host import Host


class Outcome(NamedTuple):
    status: str
    returncode: int = 0
    reason: str = ''

    def failed(self) -> bool:
        return self.status == 'failed'


APPLIED = Outcome('applied')
SKIPPED = Outcome('skipped')


def failed_with(returncode: int, reason: str) -> Outcome:
    return Outcome('failed', returncode, reason)


class Step(metaclass=ABCMeta):

    def is_satisfied(self, host: Host) -> bool:
        """Tell whether there is nothing to do. Unguarded steps always run."""
        return False

    def apply(self, host: Host) -> Outcome:
        try:
            self._apply(host)
        except subprocess.CalledProcessError as e:
            return failed_with(e.returncode, f"{_command_repr(e.cmd)} exited with status {e.returncode}")
        except subprocess.TimeoutExpired as e:
            # Same status as timeout(1) from coreutils.
            return failed_with(124, f"{_command_repr(e.cmd)} timed out after {e.timeout} seconds")
        except OSError as e:
            return failed_with(1, str(e))
        return APPLIED

    @abstractmethod
    def _apply(self, host: Host):
        pass


class Run(Step):

    def __init__(self, command: str, timeout: Optional[float] = 600):
        self._command = command
        self._timeout = timeout

    def __repr__(self):
        return f'{Run.__name__}({self._command!r})'

    def _apply(self, host):
        host.run(self._command, timeout=self._timeout)


class InstallFile(Step):
    """Write file contents. Set owner and mode. Make parent dirs.

    >>> print(InstallFile('root', '/etc/sysctl.d/20-solana.conf', b'', 0o644)._command)
    install /dev/stdin /etc/sysctl.d/20-solana.conf -o root -g root -m 644 -D
    >>> print(InstallFile('sol', '/home/sol/my script.sh', b'', 0o755)._command)
    install /dev/stdin '/home/sol/my script.sh' -o sol -g sol -m 755 -D
    >>> InstallFile('root', 'etc/relative.conf', b'', 0o644) # doctest: +IGNORE_EXCEPTION_DETAIL
    Traceback (most recent call last):
    ...
    ValueError: Target must be an absolute path, got 'etc/relative.conf'
    """

    def __init__(self, owner: str, target: str, data: bytes, mode: int):
        if not target.startswith('/'):
            raise ValueError(f"Target must be an absolute path, got {target!r}")
        self._repr = f'{InstallFile.__name__}({owner!r}, {target!r})'
        params = shlex.join(['-o', owner, '-g', owner, '-m', format(mode, 'o'), '-D'])
        self._command = f'install /dev/stdin {shlex.quote(target)} {params}'
        self._data = data

    def __repr__(self):
        return self._repr

    def _apply(self, host):
        host.run_input(self._command, self._data, timeout=60)


class CompositeStep(Step):

    def __init__(self, steps: Sequence[Step]):
        self._steps: Sequence[Step] = steps

    def __repr__(self):
        return f'<{self.__class__.__name__} with {len(self._steps)} steps>'

    def _apply(self, host):
        for step in self._steps:
            if step.is_satisfied(host):
                _logger.info("%r: already satisfied", step)
            else:
                step._apply(host)


class RunReport:

    def __init__(self):
        self._outcomes: List[Tuple[Step, Outcome]] = []

    def add(self, step: Step, outcome: Outcome):
        self._outcomes.append((step, outcome))

    def outcomes(self) -> Sequence[Tuple[Step, Outcome]]:
        return list(self._outcomes)

    def failure(self) -> Optional[Tuple[Step, Outcome]]:
        for step, outcome in self._outcomes:
            if outcome.failed():
                return step, outcome
        return None

    def exit_code(self) -> int:
        failure = self.failure()
        if failure is None:
            return 0
        [_step, outcome] = failure
        if outcome.returncode < 0:
            # Killed by a signal: report it the way shells do.
            return 128 - outcome.returncode
        return outcome.returncode or 1


class StepRunner:
    """Run steps in order. Stop on the first failure.

    Nothing is rolled back: a partially provisioned host is left as is,
    so that the operator can investigate. Running again is safe.
    """

    def __init__(self, host: Host):
        self._host = host

    def run(self, steps: Sequence[Step]) -> RunReport:
        if not self._host.is_administrator():
            raise NotAdministrator("Please run as root (sudo).")
        report = RunReport()
        for step in steps:
            if step.is_satisfied(self._host):
                _logger.info("Step %r: already satisfied, skip", step)
                report.add(step, SKIPPED)
                continue
            _logger.info("Step %r: apply", step)
            outcome = step.apply(self._host)
            report.add(step, outcome)
            if outcome.failed():
                _logger.error("Step %r: failed: %s", step, outcome.reason)
                break
        return report


class NotAdministrator(Exception):
    pass


def _command_repr(cmd):
    if isinstance(cmd, (list, tuple)):
        # Commands run as ['bash', '-c', command]; the last item is the command itself.
        return repr(cmd[-1])
    return repr(cmd)


_logger = logging.getLogger(__name__)
