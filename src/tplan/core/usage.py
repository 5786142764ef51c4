# coding=utf-8
#

"""
 Copyright (c) 2020, Alexander Magola. All rights reserved.
 license: BSD 3-Clause License, see LICENSE for more details.

 Propagation of usage requirements through the dependency graph.

 exported(T)  = own public + own interface entries
                + exported(D) for every public/interface edge T -> D
 effective(T) = own private + own public entries
                + exported(D) for every private/public edge T -> D

 An interface edge T -> D changes exported(T) only: T itself is not
 compiled with requirements of D.

 Entries stay unevaluated here (they may be conditionals), the plan
 generator evaluates them against a build context.
"""

import threading
from concurrent.futures import ThreadPoolExecutor

from tplan.constants import REQUIREMENT_KINDS, VISIBILITY_PRIVATE, VISIBILITY_PUBLIC
from tplan.constants import VISIBILITY_INTERFACE
from tplan.utils import uniqueListWithOrder
from tplan.error import UnknownTarget, DependencyCycle
from tplan import log

_EXPORTED_SCOPES = (VISIBILITY_PUBLIC, VISIBILITY_INTERFACE)
_EFFECTIVE_SCOPES = (VISIBILITY_PRIVATE, VISIBILITY_PUBLIC)

class RequirementSet(object):
    """
    Read-only set of requirement entries of each kind with the order of
    the first appearance.
    """

    __slots__ = REQUIREMENT_KINDS

    def __init__(self, includes = (), defines = (), options = ()):
        self.includes = tuple(includes)
        self.defines = tuple(defines)
        self.options = tuple(options)

    @staticmethod
    def merge(parts):
        """
        Merge iterable of objects with requirement kind attributes
        (RequirementSet or Requirements) with stable deduplication.
        """

        parts = list(parts)
        kwargs = {}
        for kind in REQUIREMENT_KINDS:
            entries = [x for part in parts for x in getattr(part, kind)]
            kwargs[kind] = uniqueListWithOrder(entries)
        return RequirementSet(**kwargs)

    def entries(self, kind):
        """ Get entries of the requirement kind """
        return getattr(self, kind)

    def __iter__(self):
        for kind in REQUIREMENT_KINDS:
            for entry in getattr(self, kind):
                yield kind, entry

    def __eq__(self, other):
        if not isinstance(other, RequirementSet):
            return NotImplemented
        return all(getattr(self, x) == getattr(other, x) for x in REQUIREMENT_KINDS)

    __hash__ = None

    def __repr__(self):
        attrs = ', '.join('%s=%r' % (x, getattr(self, x)) for x in REQUIREMENT_KINDS)
        return 'RequirementSet(%s)' % attrs

class ResolvedTarget(object):
    """
    Derived read-only view of a target with resolved requirements
    """

    __slots__ = ('target', 'exported', 'effective')

    def __init__(self, target, exported, effective):
        self.target = target
        self.exported = exported
        self.effective = effective

    @property
    def name(self):
        """ Name of the target """
        return self.target.name

    def __repr__(self):
        return 'ResolvedTarget(%r, exported=%r, effective=%r)' % \
                (self.name, self.exported, self.effective)

class _Cell(object):
    """
    Computed-once value. The lock is held while the value is being computed
    so concurrent first requesters wait and then read the same result.
    """

    __slots__ = ('lock', 'value')

    def __init__(self):
        self.lock = threading.Lock()
        self.value = None

class Propagator(object):
    """
    Computes exported/effective requirements of targets from a registry.
    It never changes the registry. It's expected that the registry
    is not changed after the propagator is created.
    """

    def __init__(self, registry):
        self._registry = registry
        self._cells = { name:_Cell() for name in registry.allNames() }
        self._acyclic = set()

    def checkCycles(self, names = None):
        """
        Check that there are no cycles and no unknown targets in the
        dependency graph reachable from the names (all targets by default).
        Raise DependencyCycle with the full cycle path or UnknownTarget.
        """

        registry = self._registry
        if names is None:
            names = registry.allNames()

        acyclic = self._acyclic
        path = []
        onPath = set()

        def visit(name, referrer):
            if name in acyclic:
                return
            if name in onPath:
                raise DependencyCycle(path[path.index(name):] + [name])
            if name not in registry:
                raise UnknownTarget(name, referrer)

            path.append(name)
            onPath.add(name)
            for edge in registry.lookup(name).edges:
                visit(edge.target, name)
            onPath.discard(name)
            path.pop()
            acyclic.add(name)

        for name in names:
            visit(name, None)

    def resolve(self, name):
        """
        Get ResolvedTarget for the target name
        """

        self.checkCycles([name])
        return self._compute(name, None, ())

    def exported(self, name):
        """ Get requirements exported by the target to its consumers """
        return self.resolve(name).exported

    def effective(self, name):
        """ Get requirements the target itself is compiled with """
        return self.resolve(name).effective

    def resolveAll(self, jobs = 1):
        """
        Resolve all registered targets. Return dict name -> ResolvedTarget
        in order of registration.
        """

        return self.resolveMany(list(self._registry.allNames()), jobs)

    def resolveMany(self, names, jobs = 1):
        """
        Resolve the targets. Return dict name -> ResolvedTarget in order
        of the names. With jobs > 1 targets are resolved in a thread pool.
        """

        names = list(names)
        self.checkCycles(names)

        def resolveOne(name):
            return self._compute(name, None, ())

        if jobs > 1 and len(names) > 1:
            log.debug("resolving %d targets with %d threads", len(names), jobs)
            with ThreadPoolExecutor(max_workers = jobs) as executor:
                results = list(executor.map(resolveOne, names))
        else:
            results = [resolveOne(x) for x in names]

        return dict(zip(names, results))

    def _compute(self, name, referrer, stack):

        cell = self._cells.get(name)
        if cell is None:
            raise UnknownTarget(name, referrer)

        if name in stack:
            path = list(stack[stack.index(name):]) + [name]
            raise DependencyCycle(path)

        value = cell.value
        if value is not None:
            return value

        with cell.lock:
            if cell.value is None:
                stack = stack + (name,)
                target = self._registry.lookup(name)
                deps = [(edge, self._compute(edge.target, name, stack))
                        for edge in target.edges]
                cell.value = self._make(target, deps)
            return cell.value

    @staticmethod
    def _make(target, deps):
        """
        Make ResolvedTarget from the target and resolved deps in edge order
        """

        log.debug("resolving usage requirements of target %r", target.name)

        exportedParts = [target.scope(x) for x in _EXPORTED_SCOPES]
        exportedParts.extend(resolved.exported for edge, resolved in deps
                             if edge.visibility in _EXPORTED_SCOPES)

        effectiveParts = [target.scope(x) for x in _EFFECTIVE_SCOPES]
        effectiveParts.extend(resolved.exported for edge, resolved in deps
                              if edge.visibility in _EFFECTIVE_SCOPES)

        return ResolvedTarget(target,
                              RequirementSet.merge(exportedParts),
                              RequirementSet.merge(effectiveParts))
