# Copyright 2018-present Network Optix, Inc. Licensed under MPL 2.0: www.mozilla.org/MPL/2.0/
import doctest
import fnmatch
import importlib
import logging
import os
import sys
import unittest
from pathlib import Path
from pathlib import PurePath


def main():
    suite = unittest.TestSuite()
    for python_file in _walk('*.py', exclude=['tests', '__pycache__']):
        module = importlib.import_module(_build_module_name(python_file))
        doctests = doctest.DocTestSuite(module)
        if doctests.countTestCases() > 0:
            _logger.debug("Will run doctests: %r", module)
            suite.addTests(doctests)
    for python_file in _walk('test_*.py', exclude=['__pycache__']):
        module_name = _build_module_name(python_file)
        _logger.debug("Import: %s", module_name)
        module = importlib.import_module(module_name)
        scope = unittest.defaultTestLoader.loadTestsFromModule(module)
        if scope.countTestCases() > 0:
            _logger.debug("Will run: %r as %r", module, scope)
            suite.addTests(scope)
        else:
            _logger.debug("Skip empty: %r", module)
    if os.getenv('DRY_RUN'):
        _logger.info("Dry run: would run %d tests", suite.countTestCases())
        return 0
    _logger.info("Run tests")
    runner = unittest.TextTestRunner(stream=sys.stdout, verbosity=2)
    result = runner.run(suite)
    if result.wasSuccessful():
        return 0
    else:
        return 10


def _walk(pattern: str, *, exclude):
    """Find files in the package recursively, but do not recurse in excluded dirs.

    >>> _walk('test_core.py', exclude=['__pycache__'])  # doctest: +ELLIPSIS
    [...Path...test_core.py...]
    """
    stack = [_package]
    result = []
    while stack:
        f = stack.pop()
        if f.name.startswith('.'):
            _logger.debug("Skip starting with dot: %s", f)
        elif f.is_dir():
            if f.name in exclude:
                _logger.debug("Skip excluded: %s", f)
            else:
                stack.extend(f.iterdir())
        elif f.is_file() and fnmatch.fnmatch(f.name, pattern):
            result.append(f)
    return sorted(result)


def _build_module_name(path: PurePath):
    """Build module name from path.

    >>> _build_module_name(_root / 'solana_rpc_node/tests/test_core.py')
    'solana_rpc_node.tests.test_core'
    """
    path = path.relative_to(_root)
    path = path.with_suffix('')
    return '.'.join(path.parts)


_root = Path(__file__).parent.parent
_package = _root / 'solana_rpc_node'

_logger = logging.getLogger(__name__)

if __name__ == '__main__':
    sys.path.insert(0, str(_root))
    logging.basicConfig(level=logging.INFO)
    exit(main())
