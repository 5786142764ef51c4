# coding=utf-8
#

"""
 Copyright (c) 2020, Alexander Magola. All rights reserved.
 license: BSD 3-Clause License, see LICENSE for more details.
"""

from tplan.core.targets import TargetRegistry
from tplan.core.presets import PresetResolver
from tplan.core.plan import PlanGenerator
from tplan.core.context import BuildContext

class Engine(object):
    """
    Entry points of the resolution core: register declarations,
    resolve a preset, make a build plan.
    """

    def __init__(self):
        self._targets = TargetRegistry()
        self._presets = PresetResolver()
        self._generator = None

    @property
    def targets(self):
        """ Registry of targets """
        return self._targets

    @property
    def presets(self):
        """ Resolver of presets """
        return self._presets

    def registerTarget(self, declaration):
        """
        Register target from Target object or mapping.
        Raises a subclass of RegistrationError.
        """

        # a new target invalidates resolved data
        self._generator = None
        return self._targets.register(declaration)

    def registerPreset(self, declaration):
        """
        Register preset from Preset object or mapping.
        Raises a subclass of RegistrationError.
        """
        return self._presets.register(declaration)

    def resolvePreset(self, name, overrides = None):
        """
        Get BuildContext of the preset. Raises a subclass of PresetError.
        """
        return self._presets.resolve(name, overrides)

    def buildPlan(self, targetNames, context, jobs = 1):
        """
        Get ordered list of PlanEntry objects. Context can be
        a BuildContext or a mapping with context values.
        Raises a subclass of PlanError.
        """

        if not isinstance(context, BuildContext):
            context = BuildContext(context)

        if self._generator is None:
            self._generator = PlanGenerator(self._targets)
        return self._generator.generate(targetNames, context, jobs)
