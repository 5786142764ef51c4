# coding=utf-8
#

"""
 Copyright (c) 2020, Alexander Magola. All rights reserved.
 license: BSD 3-Clause License, see LICENSE for more details.
"""

from tplan.constants import CONTEXT_KEYS, MAX_PRESET_CHAIN_DEPTH
from tplan.pyutils import maptype, stringtype, freezeMapping
from tplan.error import DuplicatePreset, RegistrationError, UnknownContextKey
from tplan.error import UnknownPresetContextKey, InvalidContextValue, InvalidPresetContextValue
from tplan.error import UnknownPreset, PresetCycle, PresetChainTooDeep
from tplan.core.context import BuildContext
from tplan import log

class Preset(object):
    """
    Named bundle of build context overrides with optional parent preset
    """

    __slots__ = ('name', 'inherits', 'context', 'variables', 'description', 'hidden')

    def __init__(self, name, inherits = None, context = None, variables = None,
                 description = '', hidden = False):
        for param, value in (('context', context), ('variables', variables)):
            if value is not None and not isinstance(value, maptype):
                msg = "Preset %r: %s must be a mapping, got %r" % (name, param, value)
                raise RegistrationError(msg)

        self.name = name
        self.inherits = inherits
        self.context = freezeMapping(context or {})
        self.variables = freezeMapping(variables or {})
        self.description = description or ''
        self.hidden = bool(hidden)

    @staticmethod
    def makeFrom(decl):
        """
        Make Preset from a declaration: Preset object or mapping with keys
        'name', 'inherits', 'context', 'variables', 'description', 'hidden'.
        """

        if isinstance(decl, Preset):
            return decl

        if not isinstance(decl, maptype):
            raise RegistrationError("Preset declaration must be a mapping, got %r" % (decl,))

        known = Preset.__slots__
        unknown = [x for x in decl if x not in known]
        if unknown:
            msg = "Preset %r has unknown parameter(s): %s" % \
                    (decl.get('name'), ', '.join(sorted(unknown)))
            raise RegistrationError(msg)

        if 'name' not in decl:
            raise RegistrationError("Preset declaration has no name: %r" % (dict(decl),))

        return Preset(**decl)

    def validate(self):
        """
        Check that the preset is well-formed
        """

        name = self.name
        if not name or not isinstance(name, stringtype):
            raise RegistrationError("Preset name must be a non-empty string, got %r" % (name,))
        if self.inherits is not None and not isinstance(self.inherits, stringtype):
            msg = "Preset %r: parent name must be a string, got %r" % (name, self.inherits)
            raise RegistrationError(msg)

        for key in self.context:
            if key not in CONTEXT_KEYS:
                msg = "Preset %r overrides unknown build context key %r." % (name, key)
                raise UnknownPresetContextKey(key, msg)

        # checks values early
        try:
            BuildContext(self.context)
        except InvalidContextValue as ex:
            msg = "Preset %r: %s" % (name, ex.msg)
            raise InvalidPresetContextValue(ex.key, ex.value, ex.allowed, msg) from ex

    def __repr__(self):
        return 'Preset(name=%r, inherits=%r)' % (self.name, self.inherits)

class PresetResolver(object):
    """
    Storage of presets and resolver of effective build context
    """

    __slots__ = ('_presets', 'maxDepth')

    def __init__(self, maxDepth = MAX_PRESET_CHAIN_DEPTH):
        self._presets = {}
        self.maxDepth = maxDepth

    def register(self, preset):
        """
        Register preset declaration. Parent doesn't need to be registered yet.
        """

        preset = Preset.makeFrom(preset)
        preset.validate()

        if preset.name in self._presets:
            raise DuplicatePreset(preset.name)

        self._presets[preset.name] = preset
        log.debug("registered preset %r", preset.name)
        return preset

    def lookup(self, name):
        """ Get preset by name """

        preset = self._presets.get(name)
        if preset is None:
            raise UnknownPreset(name, available = self.availablePresets())
        return preset

    def availablePresets(self):
        """ Return names of not hidden presets in order of registration """
        return [k for k, v in self._presets.items() if not v.hidden]

    def chain(self, name):
        """
        Return list of presets from the root to the preset with the name
        """

        chain = []
        seen = []
        current = name
        referrer = None
        while current is not None:
            if current in seen:
                raise PresetCycle(seen + [current])
            if len(seen) >= self.maxDepth:
                raise PresetChainTooDeep(name, self.maxDepth)

            preset = self._presets.get(current)
            if preset is None:
                raise UnknownPreset(current, referrer, self.availablePresets())

            seen.append(current)
            chain.append(preset)
            referrer = current
            current = preset.inherits

        chain.reverse()
        return chain

    def resolve(self, name, overrides = None):
        """
        Resolve effective build context of the preset. Overrides of child
        presets shadow ones of their ancestors, the explicit overrides are
        applied at the end. Unset keys stay unset.
        """

        preset = self._presets.get(name)
        if preset is not None and preset.hidden:
            msg = "Preset %r is hidden and can be used as a parent only." % name
            raise UnknownPreset(name, msg = msg)

        values = {}
        variables = {}
        for item in self.chain(name):
            values.update(item.context)
            variables.update(item.variables)

        if overrides:
            for key in overrides:
                if key not in CONTEXT_KEYS:
                    raise UnknownContextKey(key)
            values.update(overrides)

        context = BuildContext(values, variables)
        log.debug("preset %r resolved to %r", name, context)
        return context

    def __contains__(self, name):
        return name in self._presets

    def __len__(self):
        return len(self._presets)
