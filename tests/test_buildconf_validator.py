# coding=utf-8
#

# pylint: disable = missing-docstring, invalid-name
# pylint: disable = no-member, attribute-defined-outside-init

"""
 Copyright (c) 2019, Alexander Magola. All rights reserved.
 license: BSD 3-Clause License, see LICENSE for more details.
"""

from copy import deepcopy
import pytest
from tplan.error import BuildConfError, BuildConfTypeError, BuildConfValueError
from tplan.buildconf.validator import Validator
from tplan.buildconf import yaml
import tests.common as cmn

def validateConfig(buildconf, confpath = None):
    Validator(buildconf, confpath).run()

class TestSuite(object):

    @pytest.fixture(autouse = True)
    def setup(self):
        self.buildconf = yaml.loads(cmn.SAMPLE_BUILDCONF)

    def _target(self, name = 'app'):
        return self.buildconf['targets'][name]

    def testValidSample(self):
        validateConfig(self.buildconf)
        validateConfig({})
        validateConfig({ 'targets' : None, 'presets' : {} })

    def testUnknownTopLevelKey(self):
        self.buildconf['tasks'] = {}
        with pytest.raises(BuildConfError) as cm:
            validateConfig(self.buildconf)
        assert 'tasks' in cm.value.msg

    def testConfPathInMessage(self):
        self.buildconf['tasks'] = {}
        with pytest.raises(BuildConfError) as cm:
            validateConfig(self.buildconf, '/some/buildconf.yaml')
        assert cm.value.confpath == '/some/buildconf.yaml'
        assert '/some/buildconf.yaml' in cm.value.msg

    def testTargetKind(self):
        target = self._target()
        for kind in ('executable', 'program', 'exe', 'static-library', 'stlib',
                     'static', 'interface-only', 'interface', 'headers'):
            target['kind'] = kind
            validateConfig(self.buildconf)

        target['kind'] = 'shlib'
        with pytest.raises(BuildConfValueError):
            validateConfig(self.buildconf)

        target['kind'] = 1
        with pytest.raises(BuildConfTypeError):
            validateConfig(self.buildconf)

        del target['kind']
        with pytest.raises(BuildConfValueError) as cm:
            validateConfig(self.buildconf)
        assert 'kind' in cm.value.msg

    def testTargetName(self):
        targets = self.buildconf['targets']
        targets['my lib'] = { 'kind' : 'stlib' }
        with pytest.raises(BuildConfValueError):
            validateConfig(self.buildconf)

        del targets['my lib']
        targets['my_lib-1.0+x'] = { 'kind' : 'stlib' }
        validateConfig(self.buildconf)

    def testTargetUnknownParam(self):
        self._target()['libs'] = 'm'
        with pytest.raises(BuildConfError) as cm:
            validateConfig(self.buildconf)
        assert 'libs' in cm.value.msg

        del self._target()['libs']
        self._target()['private']['libs'] = 'm'
        with pytest.raises(BuildConfError):
            validateConfig(self.buildconf)

    def testSources(self):
        target = self._target()
        for sources in ('a.c b.c', ['a.c', 'b.c'], []):
            target['sources'] = sources
            validateConfig(self.buildconf)

        for sources in ([1, 'a.c'], { 'a.c' : 1 }, 12):
            target['sources'] = sources
            with pytest.raises(BuildConfTypeError):
                validateConfig(self.buildconf)

    def testRequirementEntries(self):
        private = self._target()['private']

        valid = [
            '-Wall -Wextra',
            ['-Wall', '-Wextra'],
            { 'if' : 'platform == linux', 'then' : '-pthread' },
            { 'if' : True, 'then' : ['-a', '-b'], 'else' : '-c' },
            ['-g', { 'if' : 'compiler == gcc', 'then' : '-fPIC' }],
        ]
        for options in valid:
            private['options'] = deepcopy(options)
            validateConfig(self.buildconf)

        invalid = [
            12,
            [12],
            { 'then' : '-pthread' },
            { 'if' : 'platform == linux' },
            { 'if' : 1, 'then' : '-a' },
            { 'if' : 'true', 'then' : [1] },
            { 'if' : 'true', 'then' : '-a', 'when' : 'x' },
            ['-g', { 'then' : '-fPIC' }],
        ]
        for options in invalid:
            private['options'] = deepcopy(options)
            with pytest.raises(BuildConfError):
                validateConfig(self.buildconf)

    def testDeps(self):
        private = self._target()['private']
        for deps in ('mathlib', ['mathlib', 'corelib']):
            private['deps'] = deps
            validateConfig(self.buildconf)

        private['deps'] = { 'mathlib' : 1 }
        with pytest.raises(BuildConfTypeError):
            validateConfig(self.buildconf)

    def testPresets(self):
        presets = self.buildconf['presets']

        presets['debug']['hidden'] = 'yes'
        with pytest.raises(BuildConfTypeError):
            validateConfig(self.buildconf)
        presets['debug']['hidden'] = False
        validateConfig(self.buildconf)

        presets['debug']['context']['arch'] = 'x64'
        with pytest.raises(BuildConfError):
            validateConfig(self.buildconf)
        del presets['debug']['context']['arch']

        presets['debug']['context']['platform'] = None
        validateConfig(self.buildconf)

        presets['debug']['inherits'] = 'bad name'
        with pytest.raises(BuildConfValueError):
            validateConfig(self.buildconf)
        presets['debug']['inherits'] = 'base'

        presets['ci']['variables'] = { 'A' : 1, 'B' : 'str', 'C' : False }
        validateConfig(self.buildconf)
        presets['ci']['variables'] = { 'A' : [1] }
        with pytest.raises(BuildConfTypeError):
            validateConfig(self.buildconf)
        presets['ci']['variables'] = { 1 : 'a' }
        with pytest.raises(BuildConfTypeError):
            validateConfig(self.buildconf)
