# coding=utf-8
#

# pylint: disable = missing-docstring, invalid-name, protected-access

"""
 Copyright (c) 2020, Alexander Magola. All rights reserved.
 license: BSD 3-Clause License, see LICENSE for more details.
"""

import pytest
from tplan.error import DependencyCycle, UnknownTarget
from tplan.core.targets import TargetRegistry
from tplan.core.usage import Propagator, RequirementSet

def _makeRegistry(decls):
    registry = TargetRegistry()
    for decl in decls:
        registry.register(decl)
    return registry

def testRequirementSetMerge():

    parts = [
        RequirementSet(includes = ['a', 'b'], defines = ['X']),
        RequirementSet(includes = ['b', 'c'], options = ['-g']),
        RequirementSet(includes = ['a'], defines = ['X', 'Y'], options = ['-g']),
    ]
    merged = RequirementSet.merge(parts)
    assert merged == RequirementSet(['a', 'b', 'c'], ['X', 'Y'], ['-g'])
    assert list(merged) == [
        ('includes', 'a'), ('includes', 'b'), ('includes', 'c'),
        ('defines', 'X'), ('defines', 'Y'), ('options', '-g'),
    ]
    assert merged.entries('includes') == ('a', 'b', 'c')

def testSampleGraph(registry):

    propagator = Propagator(registry)

    corelib = propagator.resolve('corelib')
    assert corelib.name == 'corelib'
    assert corelib.exported == RequirementSet(
        includes = ['core/include'], defines = ['USE_CORE'])
    assert corelib.effective == RequirementSet(
        includes = ['core/include'], defines = ['CORE_BUILD'], options = ['-fPIC'])

    assert propagator.exported('mathlib') == RequirementSet(
        includes = ['math/include', 'core/include'], defines = ['USE_CORE'])
    assert propagator.effective('mathlib') == RequirementSet(
        includes = ['math/src', 'math/include', 'core/include'],
        defines = ['USE_CORE'])

    # app has private edge only
    assert propagator.exported('app') == RequirementSet()
    effective = propagator.effective('app')
    assert effective.includes == ('math/include', 'core/include')
    assert effective.defines == ('USE_CORE', )
    assert len(effective.options) == 1

def testPrivateNeverExported():

    registry = _makeRegistry([
        { 'name' : 'lib', 'kind' : 'static-library', 'sources' : 'lib.c',
          'private' : { 'includes' : 'lib/src', 'defines' : 'LIB_PRIVATE' } },
        { 'name' : 'mid', 'kind' : 'static-library', 'sources' : 'mid.c',
          'public' : { 'deps' : 'lib' } },
        { 'name' : 'app', 'kind' : 'executable', 'sources' : 'main.c',
          'private' : { 'deps' : 'mid' } },
    ])
    propagator = Propagator(registry)

    for name in registry.allNames():
        exported = propagator.exported(name)
        assert 'lib/src' not in exported.includes
        assert 'LIB_PRIVATE' not in exported.defines

    assert 'lib/src' not in propagator.effective('app').includes
    assert 'lib/src' in propagator.effective('lib').includes

def testInterfaceDeps():

    registry = _makeRegistry([
        { 'name' : 'headers', 'kind' : 'interface-only',
          'interface' : { 'includes' : 'hdr/include', 'defines' : 'USE_HEADERS' } },
        { 'name' : 'wrapper', 'kind' : 'static-library', 'sources' : 'w.c',
          'interface' : { 'deps' : 'headers', 'options' : '-DWRAP' } },
        { 'name' : 'user', 'kind' : 'executable', 'sources' : 'main.c',
          'private' : { 'deps' : 'wrapper' } },
    ])
    propagator = Propagator(registry)

    wrapper = propagator.resolve('wrapper')
    # interface deps are in exported but not in effective
    assert wrapper.exported.includes == ('hdr/include', )
    assert wrapper.exported.options == ('-DWRAP', )
    assert wrapper.effective == RequirementSet()

    user = propagator.effective('user')
    assert user.includes == ('hdr/include', )
    assert user.defines == ('USE_HEADERS', )
    assert user.options == ('-DWRAP', )

    # interface entries of the declaring target are not in its effective set
    headers = propagator.resolve('headers')
    assert headers.effective == RequirementSet()
    assert headers.exported.includes == ('hdr/include', )

def testStableDedupOrder():

    registry = _makeRegistry([
        { 'name' : 'a', 'kind' : 'static-library', 'sources' : 'a.c',
          'public' : { 'includes' : ['shared', 'a'] } },
        { 'name' : 'b', 'kind' : 'static-library', 'sources' : 'b.c',
          'public' : { 'includes' : ['b', 'shared'], 'deps' : 'a' } },
        { 'name' : 't', 'kind' : 'executable', 'sources' : 't.c',
          'private' : { 'includes' : ['own'], 'deps' : ['b'] },
          'public' : { 'includes' : ['a', 'own-public'], 'deps' : ['a'] } },
    ])
    propagator = Propagator(registry)

    # own declarations first, then deps in edge order, first appearance wins
    assert propagator.effective('t').includes == \
            ('own', 'a', 'own-public', 'b', 'shared')

def testComputedOnce(mocker):

    # diamond: top -> left, right -> base
    registry = _makeRegistry([
        { 'name' : 'base', 'kind' : 'static-library', 'sources' : 'base.c',
          'public' : { 'includes' : 'base' } },
        { 'name' : 'left', 'kind' : 'static-library', 'sources' : 'l.c',
          'public' : { 'deps' : 'base' } },
        { 'name' : 'right', 'kind' : 'static-library', 'sources' : 'r.c',
          'public' : { 'deps' : 'base' } },
        { 'name' : 'top', 'kind' : 'executable', 'sources' : 'top.c',
          'private' : { 'deps' : ['left', 'right'] } },
    ])
    propagator = Propagator(registry)
    spy = mocker.spy(Propagator, '_make')

    assert propagator.effective('top').includes == ('base', )
    propagator.resolveAll()
    assert spy.call_count == 4
    names = [call.args[0].name for call in spy.call_args_list]
    assert sorted(names) == ['base', 'left', 'right', 'top']

@pytest.mark.parametrize("jobs", [1, 4])
def testResolveAll(registry, jobs, mocker):

    propagator = Propagator(registry)
    spy = mocker.spy(Propagator, '_make')

    resolved = propagator.resolveAll(jobs)
    assert list(resolved) == ['corelib', 'mathlib', 'app']
    assert len(spy.call_args_list) == 3

    sequential = Propagator(registry).resolveAll()
    for name, item in resolved.items():
        assert item.exported == sequential[name].exported
        assert item.effective == sequential[name].effective

def testWideParallelResolve(mocker):

    decls = [{ 'name' : 'core', 'kind' : 'static-library', 'sources' : 'core.c',
               'public' : { 'defines' : 'CORE' } }]
    for i in range(30):
        decls.append({
            'name' : 'lib%d' % i, 'kind' : 'static-library', 'sources' : 'l.c',
            'public' : { 'deps' : 'core', 'defines' : 'LIB%d' % i },
        })
    registry = _makeRegistry(decls)
    propagator = Propagator(registry)
    spy = mocker.spy(Propagator, '_make')

    resolved = propagator.resolveAll(jobs = 8)
    assert len(spy.call_args_list) == len(decls)
    assert resolved['lib7'].exported.defines == ('LIB7', 'CORE')

def testCycle():

    registry = _makeRegistry([
        { 'name' : 'A', 'kind' : 'static-library', 'sources' : 'a.c',
          'public' : { 'deps' : 'B' } },
        { 'name' : 'B', 'kind' : 'static-library', 'sources' : 'b.c',
          'private' : { 'deps' : 'C' } },
        { 'name' : 'C', 'kind' : 'static-library', 'sources' : 'c.c',
          'interface' : { 'deps' : 'A' } },
    ])
    propagator = Propagator(registry)

    with pytest.raises(DependencyCycle) as cm:
        propagator.resolve('A')
    assert cm.value.path == ('A', 'B', 'C', 'A')
    assert 'A -> B -> C -> A' in cm.value.msg

    with pytest.raises(DependencyCycle) as cm:
        propagator.resolveAll(jobs = 2)

def testSelfCycle():

    registry = _makeRegistry([
        { 'name' : 'A', 'kind' : 'static-library', 'sources' : 'a.c',
          'private' : { 'deps' : 'A' } },
    ])
    with pytest.raises(DependencyCycle) as cm:
        Propagator(registry).resolve('A')
    assert cm.value.path == ('A', 'A')

def testUnknownDep():

    registry = _makeRegistry([
        { 'name' : 'app', 'kind' : 'executable', 'sources' : 'main.c',
          'private' : { 'deps' : 'missing' } },
    ])
    with pytest.raises(UnknownTarget) as cm:
        Propagator(registry).resolve('app')
    assert cm.value.name == 'missing'
    assert cm.value.referrer == 'app'
    assert 'app' in cm.value.msg

    with pytest.raises(UnknownTarget):
        Propagator(registry).resolve('nothing')

def testRegistryNotChanged(registry):

    before = { x: registry.lookup(x) for x in registry.allNames() }
    Propagator(registry).resolveAll()
    after = { x: registry.lookup(x) for x in registry.allNames() }
    assert before == after
    assert registry.lookup('app').scope('public').includes == ()
