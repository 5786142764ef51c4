# coding=utf-8
#

"""
 Copyright (c) 2019, Alexander Magola. All rights reserved.
 license: BSD 3-Clause License, see LICENSE for more details.

 Scheme of buildconf structure for the Validator.
"""

import re

from tplan.constants import TARGET_KINDS, TARGET_KIND_ALIASES, CONTEXT_KEYS
from tplan.constants import VISIBILITIES, REQUIREMENT_KINDS
from tplan.error import BuildConfValueError

class AnyStrKey(object):
    """ Any amount of string keys"""
    __slots__ = ()

    def __eq__(self, other):
        if not isinstance(other, AnyStrKey):
            # don't attempt to compare against unrelated types
            return NotImplemented # pragma: no cover
        return True

    def __hash__(self):
        # necessary for instances to behave sanely in dicts and sets.
        return hash(self.__class__)

ANYSTR_KEY = AnyStrKey()

_RE_NAME = re.compile(r"^[\w.+-]+$", re.ASCII)

def _checkName(value, fullkey):

    if not _RE_NAME.match(value):
        msg = "Name %r is invalid in the param %r." % (value, fullkey)
        msg += " Only letters, digits and '.+-_' are allowed."
        raise BuildConfValueError(msg)

_CONDITIONAL_ENTRY_VARS = {
    'if'   : { 'type': ('str', 'bool') },
    'then' : { 'type': ('str', 'list-of-strs') },
    'else' : { 'type': ('str', 'list-of-strs') },
}

_ENTRIES_SCHEME = {
    'type' : ('str', 'list', 'dict'),
    'dict' : {
        'vars' : _CONDITIONAL_ENTRY_VARS,
        'required' : ('if', 'then'),
    },
    'list' : {
        'vars-type' : ('str', 'dict'),
        'dict-vars' : _CONDITIONAL_ENTRY_VARS,
        'dict-required' : ('if', 'then'),
    },
}

_REQUIREMENTS_SCHEME = {
    'type' : 'dict',
    'vars' : dict(
        { k:_ENTRIES_SCHEME for k in REQUIREMENT_KINDS },
        deps = { 'type': ('str', 'list-of-strs') },
    ),
}

_TARGET_SCHEME = {
    'type' : 'dict',
    'vars' : dict(
        { k:_REQUIREMENTS_SCHEME for k in VISIBILITIES },
        kind = {
            'type' : 'str',
            'allowed' : TARGET_KINDS + tuple(TARGET_KIND_ALIASES),
        },
        sources = { 'type': ('str', 'list-of-strs') },
    ),
    'required' : ('kind', ),
}

_PRESET_SCHEME = {
    'type' : 'dict',
    'vars' : {
        'inherits' : { 'type': 'str', 'check' : _checkName },
        'description' : { 'type': 'str' },
        'hidden' : { 'type': 'bool' },
        'context' : {
            'type' : 'dict',
            'vars' : { k: { 'type': 'str' } for k in CONTEXT_KEYS },
        },
        'variables' : {
            'type' : 'dict',
            'vars' : { ANYSTR_KEY: { 'type': ('str', 'bool', 'int') } },
        },
    },
}

confscheme = {
    'targets' : {
        'type' : 'dict',
        'vars' : { ANYSTR_KEY: _TARGET_SCHEME },
        'key-check' : _checkName,
    },
    'presets' : {
        'type' : 'dict',
        'vars' : { ANYSTR_KEY: _PRESET_SCHEME },
        'key-check' : _checkName,
    },
}
