# coding=utf-8
#

"""
 Copyright (c) 2019, Alexander Magola. All rights reserved.
 license: BSD 3-Clause License, see LICENSE for more details.
"""

from tplan.error import BuildConfError, BuildConfTypeError, BuildConfValueError
from tplan.pyutils import maptype, stringtype
from tplan.utils import toList
from tplan.buildconf.scheme import ANYSTR_KEY, confscheme

class BuildConfSubTypeError(BuildConfTypeError):
    """Invalid buildconf param type error"""

class Validator(object):
    """
    Validator for structure of buildconf.
    """

    __slots__ = ('_conf', '_confpath')

    _typeHandlerNames = {
        'bool' : '_handleBool',
        'int'  : '_handleInt',
        'str'  : '_handleStr',
        'dict' : '_handleDict',
        'list' : '_handleList',
        'complex' : '_handleComplex',
        'list-of-strs' : '_handleListOfStrs',
    }

    def __init__(self, conf, confpath = None):
        self._conf = conf
        self._confpath = confpath

    @staticmethod
    def _getHandler(typeName):
        if not isinstance(typeName, stringtype):
            typeName = 'complex' if len(typeName) > 1 else typeName[0]
        return getattr(Validator, Validator._typeHandlerNames[typeName])

    def _handleComplex(self, node, key, schemeAttrs, fullkey):

        types = schemeAttrs['type']

        failed = True
        for _type in types:
            _schemeAttrs = schemeAttrs.get(_type, schemeAttrs)
            try:
                handler = Validator._getHandler(_type)
                handler(self, node, key, _schemeAttrs, fullkey)
            except BuildConfSubTypeError:
                # it's an error from a sub type
                raise
            except BuildConfTypeError:
                pass
            else:
                failed = False
                break

        if failed:
            typeswitch = {
                'str'         : 'string',
                'list-of-strs': 'list of strings',
                'dict'        : 'dict/another map type',
            }
            typeNames = [ typeswitch.get(_type, _type) for _type in types ]

            msg = "Value `%r` is invalid for the param %r." % (node[key], fullkey)
            msg += " It should be %s." % " or ".join(typeNames)
            raise BuildConfTypeError(msg)

    def _handleBool(self, node, key, _, fullkey):
        if not isinstance(node[key], bool):
            msg = "Param %r should be bool" % fullkey
            raise BuildConfTypeError(msg)

    def _handleInt(self, node, key, _, fullkey):
        value = node[key]
        if not isinstance(value, int) or isinstance(value, bool):
            msg = "Param %r should be integer" % fullkey
            raise BuildConfTypeError(msg)

    def _handleStr(self, node, key, schemeAttrs, fullkey):
        cnode = node[key]
        if not isinstance(cnode, stringtype):
            msg = "Param %r should be string" % fullkey
            raise BuildConfTypeError(msg)

        allowed = schemeAttrs.get('allowed')
        if allowed is not None and cnode not in allowed:
            msg = "Value `%r` is invalid for the param %r." % (cnode, fullkey)
            msg = '%s Allowed values: %s' %(msg, str(list(allowed))[1:-1])
            raise BuildConfValueError(msg)

        check = schemeAttrs.get('check')
        if check is not None:
            check(cnode, fullkey)

    def _handleList(self, node, key, schemeAttrs, fullkey):

        cnode = node[key]
        if not isinstance(cnode, (list, tuple)):
            msg = "Value `%r` is invalid for the param %r." % (cnode, fullkey)
            msg += " It should be list"
            raise BuildConfTypeError(msg)

        varsType = schemeAttrs.get('vars-type')
        if not varsType:
            return

        _schemeAttrs = {
            'type' : varsType,
            'dict' : {
                'vars' : schemeAttrs.get('dict-vars'),
                'required' : schemeAttrs.get('dict-required', ()),
            },
        }
        handler = Validator._getHandler(varsType)
        for i in range(len(cnode)):
            try:
                handler(self, cnode, i, _schemeAttrs, '%s.[%d]' % (fullkey, i))
            except BuildConfTypeError as ex:
                raise BuildConfSubTypeError(ex.msg) from ex

    def _handleListOfStrs(self, node, key, schemeAttrs, fullkey):

        cnode = node[key]
        types = schemeAttrs['type']
        if isinstance(types, stringtype):
            types = [types]
        if 'str' in types:
            cnode = toList(cnode)

        def raiseInvalidTypeErr(value):
            msg = "Value `%r` is invalid for the param %r." % (value, fullkey)
            msg += " It should be list of strings"
            raise BuildConfTypeError(msg)

        if not isinstance(cnode, (list, tuple)):
            raiseInvalidTypeErr(cnode)

        for elem in cnode:
            if not isinstance(elem, stringtype):
                raiseInvalidTypeErr(elem)

    def _handleDict(self, node, key, schemeAttrs, fullkey):

        cnode = node[key]

        if not isinstance(cnode, maptype):
            msg = "Param %r should be dict or another map type." % fullkey
            raise BuildConfTypeError(msg)

        for name in schemeAttrs.get('required', ()):
            if name not in cnode:
                msg = "Param %r must have the key %r." % (fullkey, name)
                raise BuildConfValueError(msg)

        keyCheck = schemeAttrs.get('key-check')
        if keyCheck is not None:
            for ckey in cnode:
                Validator._checkStrKey(ckey, fullkey)
                keyCheck(ckey, fullkey)

        subscheme = schemeAttrs.get('vars')
        if subscheme is None:
            # don't validate keys
            return

        try:
            self._process(cnode, subscheme, fullkey)
        except BuildConfTypeError as ex:
            raise BuildConfSubTypeError(ex.msg) from ex

    @staticmethod
    def _checkStrKey(key, fullkey):
        if not isinstance(key, stringtype):
            msg = "Type of key `%r` is invalid. In %r this key should be string." \
                % (key, fullkey)
            raise BuildConfTypeError(msg)

    @staticmethod
    def _genFullKey(keyprefix, key):
        return '.'.join((keyprefix, key)) if keyprefix else key

    def _process(self, node, scheme, keyprefix, allowUnknownKeys = False):

        scheme = scheme.copy()
        anyStrScheme = scheme.pop(ANYSTR_KEY, None)

        for key in node:
            schemeAttrs = scheme.get(key, anyStrScheme)
            fullKey = Validator._genFullKey(keyprefix, str(key))

            if schemeAttrs is None:
                if allowUnknownKeys:
                    continue
                msg = "Unknown key '%s' is in the param %r." % (str(key), keyprefix)
                msg += " Unknown keys aren't allowed here."
                msg += "\nValid values: %r" % sorted(scheme.keys())
                raise BuildConfError(msg)

            if node[key] is None:
                continue

            if anyStrScheme is not None and key not in scheme:
                Validator._checkStrKey(key, keyprefix)

            handler = Validator._getHandler(schemeAttrs['type'])
            handler(self, node, key, schemeAttrs, fullKey)

    def run(self):
        """
        Entry point for validation
        """

        try:
            self._process(self._conf, confscheme, '')
        except BuildConfError as ex:
            if not self._confpath:
                raise
            msg = ex.msg
            raise type(ex)(msg, confpath = self._confpath) from ex
