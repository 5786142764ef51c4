# coding=utf-8
#

# pylint: skip-file

"""
 Copyright (c) 2019, Alexander Magola. All rights reserved.
 license: BSD 3-Clause License, see LICENSE for more details.
"""

import sys
import string
import random
from contextlib import contextmanager
from io import StringIO

from tplan.core.engine import Engine

def randomstr(length = 20, withDigits = False):
    letters = string.ascii_lowercase
    if withDigits:
        letters += string.digits
    return ''.join(random.choice(letters) for i in range(length))

@contextmanager
def capturedOutput():
    newout, newerr = StringIO(), StringIO()
    oldout, olderr = sys.stdout, sys.stderr
    try:
        sys.stdout, sys.stderr = newout, newerr
        yield sys.stdout, sys.stderr
    finally:
        sys.stdout, sys.stderr = oldout, olderr

RELEASE_O2 = {
    'if' : "configuration == 'Release'",
    'then' : '-O2',
    'else' : '-O0',
}

# app -> mathlib -> corelib
SAMPLE_TARGETS = [
    {
        'name' : 'corelib',
        'kind' : 'static-library',
        'sources' : ['core.c'],
        'private' : { 'defines' : ['CORE_BUILD'], 'options' : ['-fPIC'] },
        'public' : { 'includes' : ['core/include'] },
        'interface' : { 'defines' : ['USE_CORE'] },
    },
    {
        'name' : 'mathlib',
        'kind' : 'static-library',
        'sources' : ['math.c'],
        'private' : { 'includes' : ['math/src'] },
        'public' : { 'includes' : ['math/include'], 'deps' : ['corelib'] },
    },
    {
        'name' : 'app',
        'kind' : 'executable',
        'sources' : ['main.c'],
        'private' : { 'deps' : ['mathlib'], 'options' : [RELEASE_O2] },
    },
]

SAMPLE_PRESETS = [
    { 'name' : 'base', 'context' : { 'platform' : 'linux' } },
    {
        'name' : 'ci', 'inherits' : 'base',
        'context' : { 'configuration' : 'Release' },
        'variables' : { 'CI' : True },
    },
]

SAMPLE_BUILDCONF = """
targets:
  corelib:
    kind: stlib
    sources: core.c
    private:
      defines: CORE_BUILD
      options: -fPIC
    public:
      includes: core/include
    interface:
      defines: [ USE_CORE ]

  mathlib:
    kind: static-library
    sources: [ math.c ]
    private:
      includes: math/src
    public:
      includes: math/include
      deps: corelib

  app:
    kind: program
    sources: main.c
    private:
      deps: mathlib
      options:
        - if: configuration == 'Release'
          then: -O2
          else: -O0

presets:
  base:
    hidden: true
    context:
      platform: linux
  debug:
    inherits: base
    description: debug build
    context:
      configuration: Debug
  ci:
    inherits: base
    context:
      configuration: Release
    variables:
      CI: true
"""

def makeEngine(targets = None, presets = None):
    engine = Engine()
    for decl in (SAMPLE_TARGETS if targets is None else targets):
        engine.registerTarget(decl)
    for decl in (SAMPLE_PRESETS if presets is None else presets):
        engine.registerPreset(decl)
    return engine

def writeBuildConf(tmpdir, text = SAMPLE_BUILDCONF, name = 'buildconf.yaml'):
    projectDir = tmpdir.mkdir(randomstr(10))
    confFile = projectDir.join(name)
    confFile.write(text)
    return str(projectDir.realpath()), str(confFile.realpath())
