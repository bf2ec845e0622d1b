##############################################################################
#
# Copyright (c) Zope Foundation and Contributors.
# All Rights Reserved.
#
# This software is subject to the provisions of the Zope Public License,
# Version 2.0 (ZPL).  A copy of the ZPL should accompany this distribution.
# THIS SOFTWARE IS PROVIDED "AS IS" AND ANY AND ALL EXPRESS OR IMPLIED
# WARRANTIES ARE DISCLAIMED, INCLUDING, BUT NOT LIMITED TO, THE IMPLIED
# WARRANTIES OF TITLE, MERCHANTABILITY, AGAINST INFRINGEMENT, AND FITNESS
# FOR A PARTICULAR PURPOSE.
#
##############################################################################
from zope.testing import setupstack
import doctest
import manuel.capture
import manuel.doctest
import manuel.testing
import mock
import os
import pdb
import pprint
import unittest

def setUpPP(test):
    test.globs.update(
        pdb = pdb,
        pprint = pprint.pprint,
        pp = pprint.pprint,
        )

def setUp(test):
    setUpPP(test)
    setupstack.setUpDirectory(test)

    globs = test.globs
    globs['now'] = 1418487287.0
    setupstack.context_manager(
        test, mock.patch('time.time', side_effect=lambda: globs['now']))

    setupstack.context_manager(test, mock.patch('logging.basicConfig'))
    setupstack.context_manager(test, mock.patch('ZConfig.configureLoggers'))
    setupstack.context_manager(
        test,
        mock.patch('socket.gethostname', return_value='nagios1.example.com'))

    def touch(name, age):
        "Create a file last modified age seconds ago"
        with open(name, 'w') as f:
            f.write(name + '\n')
        mtime = globs['now'] - age
        os.utime(name, (mtime, mtime))

    def run(main, *args):
        "Call a plugin main, showing argparse exits"
        try:
            return main(list(args))
        except SystemExit as v:
            print('exit %s' % v.code)

    globs.update(touch=touch, run=run)

def test_suite():
    optionflags = doctest.NORMALIZE_WHITESPACE | doctest.ELLIPSIS
    return unittest.TestSuite((
        manuel.testing.TestSuite(
            manuel.doctest.Manuel(optionflags=optionflags) +
            manuel.capture.Manuel(),
            'fileage.rst', 'report.rst',
            setUp=setUp, tearDown=setupstack.tearDown),
        doctest.DocTestSuite('zc.nagiosplugins.plugin',
                             optionflags=optionflags),
        doctest.DocTestSuite('zc.nagiosplugins.threshold',
                             optionflags=optionflags),
        doctest.DocTestSuite('zc.nagiosplugins.fileage',
                             optionflags=optionflags),
        doctest.DocTestSuite('zc.nagiosplugins.nagiosperf',
                             optionflags=optionflags),
        doctest.DocTestSuite('zc.nagiosplugins.statusdat',
                             optionflags=optionflags,
                             setUp=setUpPP),
        ))

def load_tests(loader, tests, pattern):
    return test_suite()
