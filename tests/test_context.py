# coding=utf-8
#

# pylint: disable = missing-docstring, invalid-name

"""
 Copyright (c) 2019, Alexander Magola. All rights reserved.
 license: BSD 3-Clause License, see LICENSE for more details.
"""

import pytest
from tplan.constants import CONTEXT_KEYS, CONFIGURATIONS
from tplan.error import UnknownContextKey, UnsetContextKey, InvalidContextValue
from tplan.core.context import BuildContext, UNSET

def testDefaults():

    ctx = BuildContext()
    assert len(ctx) == len(CONTEXT_KEYS)
    assert list(ctx) == list(CONTEXT_KEYS)
    for key in CONTEXT_KEYS:
        assert key in ctx
        assert ctx[key] is UNSET
        assert not ctx.isSet(key)
    assert ctx.unsetKeys() == CONTEXT_KEYS
    assert ctx.asdict() == {}
    assert not UNSET
    assert repr(UNSET) == 'UNSET'
    assert dict(ctx.variables) == {}

def testValues():

    ctx = BuildContext({ 'configuration' : 'Debug', 'platform' : 'linux' })
    assert ctx['configuration'] == 'Debug'
    assert ctx.value('platform') == 'linux'
    assert ctx.isSet('platform')
    assert ctx.unsetKeys() == ('compiler', )
    assert ctx.asdict() == { 'configuration' : 'Debug', 'platform' : 'linux' }

    # None means unset
    ctx = BuildContext({ 'platform' : None })
    assert ctx['platform'] is UNSET

    for config in CONFIGURATIONS:
        assert BuildContext({ 'configuration' : config })['configuration'] == config

def testUnknownKey():

    ctx = BuildContext()
    assert 'arch' not in ctx
    assert ctx.get('arch') is None
    assert ctx.get('arch', 1) == 1

    with pytest.raises(UnknownContextKey) as cm:
        ctx['arch'] # pylint: disable = pointless-statement
    assert cm.value.key == 'arch'

    with pytest.raises(UnknownContextKey):
        BuildContext({ 'arch' : 'x64' })

def testUnsetKey():

    ctx = BuildContext({ 'platform' : 'linux' })
    with pytest.raises(UnsetContextKey) as cm:
        ctx.value('compiler')
    assert cm.value.key == 'compiler'

def testInvalidValues():

    with pytest.raises(InvalidContextValue) as cm:
        BuildContext({ 'configuration' : 'Fast' })
    assert cm.value.key == 'configuration'
    assert cm.value.value == 'Fast'
    assert cm.value.allowed == CONFIGURATIONS

    with pytest.raises(InvalidContextValue):
        BuildContext({ 'platform' : 1 })

def testImmutable():

    ctx = BuildContext({ 'platform' : 'linux' }, { 'CI' : True })
    with pytest.raises(TypeError):
        ctx['platform'] = 'windows' # pylint: disable = unsupported-assignment-operation
    with pytest.raises(TypeError):
        ctx.variables['CI'] = False
    with pytest.raises(AttributeError):
        ctx.something = 1 # pylint: disable = assigning-non-slot

def testEqualityAndDerive():

    ctx1 = BuildContext({ 'platform' : 'linux' })
    ctx2 = BuildContext({ 'platform' : 'linux', 'compiler' : None })
    assert ctx1 == ctx2
    assert hash(ctx1) == hash(ctx2)
    assert ctx1 != BuildContext({ 'platform' : 'linux' }, { 'A' : '1' })

    ctx3 = ctx1.derive({ 'compiler' : 'gcc' }, { 'A' : '1' })
    assert ctx3 is not ctx1
    assert ctx3.asdict() == { 'platform' : 'linux', 'compiler' : 'gcc' }
    assert dict(ctx3.variables) == { 'A' : '1' }
    # original is not changed
    assert ctx1.asdict() == { 'platform' : 'linux' }

    assert 'platform' in repr(ctx1)
