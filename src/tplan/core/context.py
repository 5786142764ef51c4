# coding=utf-8
#

"""
 Copyright (c) 2019, Alexander Magola. All rights reserved.
 license: BSD 3-Clause License, see LICENSE for more details.
"""

from tplan.constants import CONTEXT_KEYS, CTX_CONFIGURATION, CONFIGURATIONS
from tplan.pyutils import maptype, stringtype, freezeMapping
from tplan.error import UnknownContextKey, UnsetContextKey, InvalidContextValue

class _Unset(object):
    """ Explicit 'unset' state of a context key """

    __slots__ = ()

    def __repr__(self):
        return 'UNSET'

    def __bool__(self):
        return False

UNSET = _Unset()

_ALLOWED_VALUES = {
    CTX_CONFIGURATION : CONFIGURATIONS,
}

def _checkValue(key, value):

    if key not in CONTEXT_KEYS:
        raise UnknownContextKey(key)
    if value is UNSET:
        return
    if not isinstance(value, stringtype):
        msg = "Value of the build context key %r must be string, got %r." % (key, value)
        raise InvalidContextValue(key, value, (), msg)

    allowed = _ALLOWED_VALUES.get(key)
    if allowed is not None and value not in allowed:
        raise InvalidContextValue(key, value, allowed)

class BuildContext(maptype):
    """
    Immutable mapping of the fixed key set: configuration, platform and
    compiler. Each key has a string value or is UNSET. Iteration, len() and
    'in' work with all keys of the key set, including unset ones.

    It also carries read-only cache variables from presets. They are not
    context keys and expressions cannot use them.
    """

    __slots__ = ('_values', '_variables')

    def __init__(self, values = None, variables = None):
        _values = dict.fromkeys(CONTEXT_KEYS, UNSET)
        for key, value in (values or {}).items():
            if value is None:
                value = UNSET
            _checkValue(key, value)
            _values[key] = value

        self._values = _values
        self._variables = freezeMapping(variables or {})

    def __getitem__(self, key):
        try:
            return self._values[key]
        except KeyError:
            raise UnknownContextKey(key) from None

    def __contains__(self, key):
        return key in self._values

    def get(self, key, default = None):
        return self._values.get(key, default)

    def __iter__(self):
        return iter(CONTEXT_KEYS)

    def __len__(self):
        return len(CONTEXT_KEYS)

    def __eq__(self, other):
        if not isinstance(other, BuildContext):
            return NotImplemented
        return self._values == other._values and \
                dict(self._variables) == dict(other._variables)

    def __hash__(self):
        return hash(tuple(self._values[x] for x in CONTEXT_KEYS))

    def __repr__(self):
        values = ', '.join('%s=%r' % (x, self._values[x]) for x in CONTEXT_KEYS)
        return 'BuildContext(%s)' % values

    @property
    def variables(self):
        """ Cache variables: read-only mapping """
        return self._variables

    def isSet(self, key):
        """ Return True if the key has a value """
        return self[key] is not UNSET

    def value(self, key):
        """
        Return value of the key. Raise UnsetContextKey if the key
        has no value and UnknownContextKey if there is no such a key.
        """

        val = self[key]
        if val is UNSET:
            raise UnsetContextKey(key)
        return val

    def unsetKeys(self):
        """ Return tuple of keys without values """
        return tuple(x for x in CONTEXT_KEYS if self._values[x] is UNSET)

    def derive(self, values = None, variables = None):
        """
        Make new context with some values/variables replaced
        """

        newValues = dict(self._values)
        newValues.update(values or {})
        newVars = dict(self._variables)
        newVars.update(variables or {})
        return BuildContext(newValues, newVars)

    def asdict(self):
        """ Return plain dict with set keys only """
        return { k:v for k, v in self._values.items() if v is not UNSET }
