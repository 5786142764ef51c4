# coding=utf-8
#

"""
 Copyright (c) 2019, Alexander Magola. All rights reserved.
 license: BSD 3-Clause License, see LICENSE for more details.
"""

import traceback

class TargetPlanError(Exception):
    """Base class for all TargetPlan errors"""

    def __init__(self, msg = None, ex = None):
        if msg is None:
            msg = ''
        if ex and not msg:
            msg = str(ex)
        super(TargetPlanError, self).__init__(msg)

        self.msg = msg
        self.ex = ex
        self.fullmsg = self.verbose_msg

    @property
    def verbose_msg(self):
        """ Message with the description of the origin exception if it exists """
        if not self.ex:
            return self.msg
        lines = [self.msg] if self.msg else []
        lines.extend(traceback.format_exception_only(type(self.ex), self.ex))
        return '\n'.join(x.rstrip('\n') for x in lines)

    def __str__(self):
        return str(self.msg)

class TargetPlanLogicError(TargetPlanError):
    """Some logic/programming error"""

############# registration

class RegistrationError(TargetPlanError):
    """Invalid declaration of target or preset"""

class DuplicateTarget(RegistrationError):
    """ Target with the same name was already registered """

    def __init__(self, name, msg = None):
        self.name = name
        if not msg:
            msg = "Target %r is already registered." % name
        super(DuplicateTarget, self).__init__(msg)

class InvalidTarget(RegistrationError):
    """ Target declaration is not well-formed """

    def __init__(self, name, reason, msg = None):
        self.name = name
        self.reason = reason
        if not msg:
            msg = "Target %r is invalid: %s" % (name, reason)
        super(InvalidTarget, self).__init__(msg)

class DuplicatePreset(RegistrationError):
    """ Preset with the same name was already registered """

    def __init__(self, name, msg = None):
        self.name = name
        if not msg:
            msg = "Preset %r is already registered." % name
        super(DuplicatePreset, self).__init__(msg)

############# resolution

class PlanError(TargetPlanError):
    """Failed to resolve targets or to make a build plan"""

class UnknownTarget(PlanError):
    """ Target with the name was not registered """

    def __init__(self, name, referrer = None, msg = None):
        self.name = name
        self.referrer = referrer
        if not msg:
            if referrer:
                msg = "Target %r depends on unknown target %r." % (referrer, name)
            else:
                msg = "Target %r is unknown." % name
        super(UnknownTarget, self).__init__(msg)

class DependencyCycle(PlanError):
    """ Dependency cycle was found among targets """

    def __init__(self, path, msg = None):
        self.path = tuple(path)
        if not msg:
            msg = "Dependency cycle was found: %s" % ' -> '.join(self.path)
        super(DependencyCycle, self).__init__(msg)

class UnknownContextKey(PlanError):
    """ Build context has no such key """

    def __init__(self, key, msg = None):
        self.key = key
        if not msg:
            msg = "Build context has no key %r." % key
        super(UnknownContextKey, self).__init__(msg)

class UnsetContextKey(UnknownContextKey):
    """ Build context key is known but has no value """

    def __init__(self, key, msg = None):
        if not msg:
            msg = "Build context key %r is not set." % key
        super(UnsetContextKey, self).__init__(key, msg)

class InvalidContextValue(PlanError):
    """ Value is not allowed for the build context key """

    def __init__(self, key, value, allowed, msg = None):
        self.key = key
        self.value = value
        self.allowed = tuple(allowed)
        if not msg:
            msg = "Value %r is invalid for the build context key %r." % (value, key)
            msg += " Allowed values: %s." % ', '.join(self.allowed)
        super(InvalidContextValue, self).__init__(msg)

class UnknownPresetContextKey(RegistrationError, UnknownContextKey):
    """ Preset overrides a key that is not in the build context """

class InvalidPresetContextValue(RegistrationError, InvalidContextValue):
    """ Preset sets a value that is not allowed for the build context key """

############# presets

class PresetError(TargetPlanError):
    """Failed to resolve preset"""

class UnknownPreset(PresetError):
    """ Preset with the name was not registered """

    def __init__(self, name, referrer = None, available = None, msg = None):
        self.name = name
        self.referrer = referrer
        if not msg:
            if referrer:
                msg = "Preset %r inherits unknown preset %r." % (referrer, name)
            else:
                msg = "Preset %r is unknown." % name
            if available:
                msg += " Available: %s." % ', '.join(available)
        super(UnknownPreset, self).__init__(msg)

class PresetCycle(PresetError):
    """ Cycle was found in the preset parent chain """

    def __init__(self, path, msg = None):
        self.path = tuple(path)
        if not msg:
            msg = "Circular preset inheritance: %s" % ' -> '.join(self.path)
        super(PresetCycle, self).__init__(msg)

class PresetChainTooDeep(PresetError):
    """ Preset parent chain is longer than allowed """

    def __init__(self, name, limit, msg = None):
        self.name = name
        self.limit = limit
        if not msg:
            msg = "Parent chain of the preset %r is deeper than %d." % (name, limit)
        super(PresetChainTooDeep, self).__init__(msg)

############# expressions and buildconf

class ExpressionSyntaxError(TargetPlanError):
    """ Invalid conditional expression """

    def __init__(self, expr, pos, reason, msg = None):
        self.expr = expr
        self.pos = pos
        self.reason = reason
        if not msg:
            msg = "There is a syntax error in the expression %r" % expr
            msg += " at position %d: %s" % (pos, reason)
        super(ExpressionSyntaxError, self).__init__(msg)

class BuildConfError(TargetPlanError):
    """Invalid buildconf file error"""

    def __init__(self, msg = None, ex = None, confpath = None):
        if msg is None:
            msg = ''
        if confpath and msg:
            _msg = "Error in the file %r:" % confpath
            for line in msg.splitlines():
                _msg += "\n  %s" % line
            msg = _msg
        self.confpath = confpath
        super(BuildConfError, self).__init__(msg, ex)

class BuildConfTypeError(BuildConfError):
    """Invalid buildconf param type error"""

class BuildConfValueError(BuildConfError):
    """Invalid buildconf param value error"""
