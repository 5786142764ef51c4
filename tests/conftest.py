# coding=utf-8
#

# pylint: skip-file

"""
 Copyright (c) 2019, Alexander Magola. All rights reserved.
 license: BSD 3-Clause License, see LICENSE for more details.
"""

import os
import platform as _platform
import pytest

from tplan.constants import ENV_VERBOSE, ENV_ON_TTY
from tplan.core.targets import TargetRegistry
from tplan import log
import tests.common as cmn

@pytest.hookimpl(hookwrapper = True, tryfirst = True)
def pytest_runtest_makereport(item, call):
    outcome = yield
    rep = outcome.get_result()
    setattr(item, "rep_" + rep.when, rep)

@pytest.fixture(scope = "session", autouse = True)
def beforeAllTests(request):
    # Additional check for pyenv
    if 'PYENV_VERSION' in os.environ:
        realVersion = _platform.python_version()
        envVersion = os.environ['PYENV_VERSION']
        assert envVersion in (realVersion, 'system')

@pytest.fixture
def unsetEnviron(monkeypatch):
    for v in (ENV_VERBOSE, ENV_ON_TTY, 'NOCOLOR', 'TERM'):
        monkeypatch.delenv(v, raising = False)

@pytest.fixture
def resetLog():
    verbose = log.verbose()
    colors = dict(log.colorSettings)
    yield
    log.setVerbose(verbose)
    log.colorSettings.update(colors)

@pytest.fixture
def registry():
    registry = TargetRegistry()
    for decl in cmn.SAMPLE_TARGETS:
        registry.register(decl)
    return registry

@pytest.fixture
def engine():
    return cmn.makeEngine()
