# coding=utf-8
#

"""
 Copyright (c) 2019, Alexander Magola. All rights reserved.
 license: BSD 3-Clause License, see LICENSE for more details.
"""

from collections import namedtuple

from tplan.constants import TARGET_KINDS, KIND_INTERFACE, VISIBILITIES, REQUIREMENT_KINDS
from tplan.pyutils import maptype, stringtype
from tplan.utils import toList
from tplan.error import DuplicateTarget, InvalidTarget, UnknownTarget, ExpressionSyntaxError
from tplan.core.expression import makeEntry, Conditional
from tplan import log

DependencyEdge = namedtuple('DependencyEdge', 'source, target, visibility')

_REQUIREMENT_PARAMS = REQUIREMENT_KINDS + ('deps',)

def _makeEntries(val):
    if isinstance(val, (maptype, Conditional)):
        val = [val]
    return tuple(makeEntry(x) for x in toList(val))

class Requirements(object):
    """
    Requirements of one visibility scope: include paths, compile definitions,
    compile options and names of dependency targets. All are tuples.
    """

    __slots__ = REQUIREMENT_KINDS + ('deps', )

    def __init__(self, includes = (), defines = (), options = (), deps = ()):
        self.includes = _makeEntries(includes)
        self.defines = _makeEntries(defines)
        self.options = _makeEntries(options)
        self.deps = tuple(str(x) for x in toList(deps))

    @staticmethod
    def makeFrom(data):
        """
        Make from a mapping with optional keys 'includes', 'defines',
        'options' and 'deps'. Requirements object is returned as is.
        """

        if data is None:
            return Requirements()
        if isinstance(data, Requirements):
            return data
        if not isinstance(data, maptype):
            raise TypeError("Requirements must be a mapping, got %r" % (data,))

        unknown = [x for x in data if x not in _REQUIREMENT_PARAMS]
        if unknown:
            raise KeyError("unknown requirement parameter(s): %s" % ', '.join(unknown))

        kwargs = { k:v for k, v in data.items() if v is not None }
        return Requirements(**kwargs)

    def entries(self, kind):
        """ Get entries of the requirement kind """
        return getattr(self, kind)

    def __bool__(self):
        return any(getattr(self, x) for x in self.__slots__)

    def __eq__(self, other):
        if not isinstance(other, Requirements):
            return NotImplemented
        return all(getattr(self, x) == getattr(other, x) for x in self.__slots__)

    __hash__ = None

    def __repr__(self):
        attrs = ', '.join('%s=%r' % (x, getattr(self, x)) for x in self.__slots__)
        return 'Requirements(%s)' % attrs

class Target(object):
    """
    Declaration of a build target
    """

    __slots__ = ('name', 'kind', 'sources', 'private', 'public', 'interface')

    def __init__(self, name, kind, sources = (), private = None,
                 public = None, interface = None):

        self.name = name
        self.kind = kind
        reason = "sources must be a string or a list of strings, got %r" % (sources,)
        if isinstance(sources, maptype):
            raise InvalidTarget(name, reason)
        try:
            self.sources = tuple(toList(sources) or ())
        except TypeError as ex:
            raise InvalidTarget(name, reason) from ex

        scopes = {}
        for visibility, data in zip(VISIBILITIES, (private, public, interface)):
            try:
                scopes[visibility] = Requirements.makeFrom(data)
            except (TypeError, KeyError) as ex:
                reason = "%s requirements: %s" % (visibility, ex.args[0])
                raise InvalidTarget(name, reason) from ex
            except ExpressionSyntaxError as ex:
                reason = "%s requirements: %s" % (visibility, ex.msg)
                raise InvalidTarget(name, reason) from ex

        self.private = scopes['private']
        self.public = scopes['public']
        self.interface = scopes['interface']

    @staticmethod
    def makeFrom(decl):
        """
        Make Target from a declaration: Target object or mapping with keys
        'name', 'kind', 'sources', 'private', 'public', 'interface'.
        """

        if isinstance(decl, Target):
            return decl

        if not isinstance(decl, maptype):
            raise InvalidTarget(repr(decl), "declaration must be a mapping")

        name = decl.get('name')
        known = ('name', 'kind', 'sources') + VISIBILITIES
        unknown = [x for x in decl if x not in known]
        if unknown:
            reason = "unknown parameter(s): %s" % ', '.join(sorted(unknown))
            raise InvalidTarget(name, reason)

        return Target(name, decl.get('kind'), decl.get('sources') or (),
                      decl.get('private'), decl.get('public'), decl.get('interface'))

    def scope(self, visibility):
        """ Get requirements of the visibility """
        if visibility not in VISIBILITIES:
            raise ValueError("Unknown visibility %r" % visibility)
        return getattr(self, visibility)

    @property
    def edges(self):
        """
        Dependency edges in order: private, public, interface deps,
        each group in the declared order.
        """

        return tuple(DependencyEdge(self.name, dep, visibility)
                     for visibility in VISIBILITIES
                     for dep in self.scope(visibility).deps)

    def validate(self):
        """
        Check that the target is well-formed. Raise InvalidTarget if not.
        """

        name = self.name
        if not name or not isinstance(name, stringtype):
            raise InvalidTarget(name, "name must be a non-empty string")
        if self.kind not in TARGET_KINDS:
            reason = "kind %r is unknown, it should be one of: %s" % \
                        (self.kind, ', '.join(TARGET_KINDS))
            raise InvalidTarget(name, reason)
        if self.kind == KIND_INTERFACE and self.sources:
            raise InvalidTarget(name, "%s target cannot have sources" % KIND_INTERFACE)
        if not all(isinstance(x, stringtype) and x for x in self.sources):
            raise InvalidTarget(name, "sources must be non-empty strings")

    def __repr__(self):
        return 'Target(name=%r, kind=%r)' % (self.name, self.kind)

class TargetRegistry(object):
    """
    Storage of target declarations. Dependency names are not checked here
    because declarations may be registered in any order.
    """

    __slots__ = ('_targets', '_order')

    def __init__(self):
        self._targets = {}
        self._order = {}

    def register(self, target):
        """
        Register target declaration
        """

        target = Target.makeFrom(target)
        target.validate()

        name = target.name
        if name in self._targets:
            raise DuplicateTarget(name)

        self._order[name] = len(self._targets)
        self._targets[name] = target
        log.debug("registered target %r (%s)", name, target.kind)
        return target

    def lookup(self, name):
        """
        Get target declaration by name
        """

        target = self._targets.get(name)
        if target is None:
            raise UnknownTarget(name)
        return target

    def allNames(self):
        """
        Get names of all targets in order of registration.
        Each call returns new iterator.
        """
        return (x for x in self._targets)

    def index(self, name):
        """ Get position of the target in order of registration """
        try:
            return self._order[name]
        except KeyError:
            raise UnknownTarget(name) from None

    def __contains__(self, name):
        return name in self._targets

    def __len__(self):
        return len(self._targets)
