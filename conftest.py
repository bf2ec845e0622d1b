"""Collect the unittest suite built by zc.nagiosplugins.tests.test_suite().

The suite is assembled with ``load_tests``/``test_suite`` (manuel and
doctest suites), which pytest does not honor on its own.
"""
import unittest

import pytest


def _flatten(suite):
    for test in suite:
        if isinstance(test, unittest.TestSuite):
            for t in _flatten(test):
                yield t
        else:
            yield test


class SuiteItem(pytest.Item):

    def __init__(self, *, test, **kw):
        super().__init__(**kw)
        self.test = test

    def runtest(self):
        result = unittest.TestResult()
        self.test(result)
        problems = result.errors + result.failures
        if problems:
            raise SuiteFailure('\n'.join(tb for _, tb in problems))

    def repr_failure(self, excinfo):
        if isinstance(excinfo.value, SuiteFailure):
            return str(excinfo.value)
        return super().repr_failure(excinfo)

    def reportinfo(self):
        return self.path, None, self.name


class SuiteFailure(Exception):
    pass


class SuiteFile(pytest.File):

    def collect(self):
        from zc.nagiosplugins.tests import test_suite
        seen = {}
        for test in _flatten(test_suite()):
            name = test.id()
            seen[name] = seen.get(name, 0) + 1
            if seen[name] > 1:
                name = '%s[%d]' % (name, seen[name])
            yield SuiteItem.from_parent(self, name=name, test=test)


def pytest_collect_file(parent, file_path):
    if (file_path.name == 'tests.py'
            and file_path.parent.name == 'nagiosplugins'):
        return SuiteFile.from_parent(parent, path=file_path)
