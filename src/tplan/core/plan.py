# coding=utf-8
#

"""
 Copyright (c) 2020, Alexander Magola. All rights reserved.
 license: BSD 3-Clause License, see LICENSE for more details.
"""

import heapq

from tplan.constants import KIND_STLIB, VISIBILITY_INTERFACE
from tplan.pyutils import struct
from tplan.utils import uniqueListWithOrder
from tplan.error import UnknownTarget
from tplan.core.expression import resolveEntries
from tplan.core.usage import Propagator
from tplan import log

_PlanEntryBase = struct('PlanEntry',
                        'name, kind, sources, includes, defines, options, links')

class PlanEntry(_PlanEntryBase):
    """
    Fully resolved build instructions for one target
    """

    __slots__ = ()

    def asdict(self):
        """ Return plain dict with lists for serialization """

        result = {}
        for attr in _PlanEntryBase.__slots__:
            val = getattr(self, attr)
            result[attr] = list(val) if isinstance(val, tuple) else val
        return result

class PlanGenerator(object):
    """
    Makes ordered build plan from registered targets
    """

    def __init__(self, registry, propagator = None):
        self._registry = registry
        if propagator is None:
            propagator = Propagator(registry)
        self._propagator = propagator

    @property
    def propagator(self):
        """ Propagator used by the generator """
        return self._propagator

    def _gatherClosure(self, names):

        registry = self._registry
        closure = set()
        pending = list(names)
        while pending:
            name = pending.pop()
            if name in closure:
                continue
            closure.add(name)
            pending.extend(x.target for x in registry.lookup(name).edges)
        return closure

    def order(self, names):
        """
        Return list of the targets and all their dependencies ordered
        topologically: dependencies first. Ties are broken by order
        of registration. Kahn's algorithm is used.
        """

        registry = self._registry
        self._propagator.checkCycles(names)
        closure = self._gatherClosure(names)

        dependents = { x:[] for x in closure }
        indegree = dict.fromkeys(closure, 0)
        for name in closure:
            deps = uniqueListWithOrder(x.target for x in registry.lookup(name).edges)
            indegree[name] = len(deps)
            for dep in deps:
                dependents[dep].append(name)

        ready = [(registry.index(x), x) for x, degree in indegree.items() if degree == 0]
        heapq.heapify(ready)

        result = []
        while ready:
            _, name = heapq.heappop(ready)
            result.append(name)
            for dependent in dependents[name]:
                indegree[dependent] -= 1
                if indegree[dependent] == 0:
                    heapq.heappush(ready, (registry.index(dependent), dependent))

        # cycles are rejected by checkCycles
        assert len(result) == len(closure)
        return result

    def linkOrder(self, name):
        """
        Return names of static libraries the target must be linked with.
        Each library goes after all libraries it depends on. Own interface
        deps of the target are skipped because the target doesn't use them
        itself. For dependencies all edges are followed because static
        libraries don't carry their own deps.
        """

        registry = self._registry
        result = []
        visited = set()

        def visit(target, isRoot):
            for edge in target.edges:
                if isRoot and edge.visibility == VISIBILITY_INTERFACE:
                    continue
                depName = edge.target
                if depName in visited:
                    continue
                visited.add(depName)
                dep = registry.lookup(depName)
                visit(dep, False)
                if dep.kind == KIND_STLIB:
                    result.append(depName)

        visit(registry.lookup(name), True)
        return result

    def generate(self, targetNames, context, jobs = 1):
        """
        Make list of PlanEntry objects for the targets and all their
        dependencies in build order. All targets are used if targetNames
        is empty.
        """

        registry = self._registry
        names = list(targetNames or ())
        if not names:
            names = list(registry.allNames())

        for name in names:
            if name not in registry:
                raise UnknownTarget(name)

        ordered = self.order(names)
        log.debug("build order: %s", ', '.join(ordered))

        resolved = self._propagator.resolveMany(ordered, jobs)

        plan = []
        for name in ordered:
            target = registry.lookup(name)
            effective = resolved[name].effective
            entry = PlanEntry(
                name = name,
                kind = target.kind,
                sources = target.sources,
                includes = tuple(uniqueListWithOrder(
                    resolveEntries(effective.includes, context))),
                defines = tuple(uniqueListWithOrder(
                    resolveEntries(effective.defines, context))),
                options = tuple(uniqueListWithOrder(
                    resolveEntries(effective.options, context))),
                links = tuple(self.linkOrder(name)),
            )
            plan.append(entry)

        return plan
