# coding=utf-8
#

"""
 Copyright (c) 2020, Alexander Magola. All rights reserved.
 license: BSD 3-Clause License, see LICENSE for more details.

 Implementation of the CLI commands that work with a buildconf file.
"""

import json

from tplan.constants import VISIBILITIES
from tplan.error import TargetPlanError
from tplan.core.engine import Engine
from tplan.core.context import BuildContext
from tplan.buildconf import loader
from tplan.cmd import Command as _Command
from tplan import log

def parseDefines(defines):
    """
    Convert list of 'KEY=VALUE' strings into dict
    """

    result = {}
    for item in defines or []:
        key, sep, value = item.partition('=')
        key = key.strip()
        if not sep or not key:
            msg = "Invalid context override %r, it should be KEY=VALUE" % item
            raise TargetPlanError(msg)
        result[key] = value.strip() or None
    return result

def _dumpJson(data):
    return json.dumps(data, indent = 2)

class _BuildConfCommand(_Command):

    COLOR = 'NORMAL'

    def _loadEngine(self, cliArgs):
        path = cliArgs.get('buildconf') or '.'
        engine = loader.loadInto(Engine(), path)
        log.debug("registered %d target(s) and %d preset(s)",
                  len(engine.targets), len(engine.presets))
        return engine

    def _makeContext(self, engine, cliArgs):
        overrides = parseDefines(cliArgs.get('define'))
        presetName = cliArgs.get('preset')
        if presetName:
            return engine.resolvePreset(presetName, overrides)
        return BuildContext(overrides)

    def _run(self, cliArgs):
        raise NotImplementedError

class PlanCommand(_BuildConfCommand):
    """
    Print build plan.
    It's implementation of command 'plan'.
    """

    def _run(self, cliArgs):

        engine = self._loadEngine(cliArgs)
        context = self._makeContext(engine, cliArgs)
        jobs = cliArgs.get('jobs') or 1

        log.debug("build context: %r", context)
        plan = engine.buildPlan(cliArgs.get('targets') or [], context, jobs)

        if cliArgs.get('format') == 'json':
            data = {
                'context' : context.asdict(),
                'variables' : dict(context.variables),
                'plan' : [x.asdict() for x in plan],
            }
            self._out(_dumpJson(data))
            return 0

        lines = []
        for entry in plan:
            lines.append('%s (%s)' % (entry.name, entry.kind))
            for attr in ('sources', 'includes', 'defines', 'options', 'links'):
                values = getattr(entry, attr)
                if values:
                    lines.append('  %s: %s' % (attr, ' '.join(values)))
        self._out('\n'.join(lines))
        return 0

class PresetsCommand(_BuildConfCommand):
    """
    Print available presets.
    It's implementation of command 'presets'.
    """

    def _run(self, cliArgs):

        engine = self._loadEngine(cliArgs)
        resolver = engine.presets
        names = resolver.availablePresets()

        if cliArgs.get('format') == 'json':
            data = []
            for name in names:
                preset = resolver.lookup(name)
                data.append({
                    'name' : name,
                    'inherits' : preset.inherits,
                    'description' : preset.description,
                    'context' : engine.resolvePreset(name).asdict(),
                })
            self._out(_dumpJson(data))
            return 0

        if not names:
            self._warn('No presets found')
            return 0

        lines = []
        for name in names:
            preset = resolver.lookup(name)
            line = name
            if preset.description:
                line = '%-20s %s' % (name, preset.description)
            lines.append(line)
        self._out('\n'.join(lines))
        return 0

class TargetsCommand(_BuildConfCommand):
    """
    Print declared targets.
    It's implementation of command 'targets'.
    """

    def _run(self, cliArgs):

        engine = self._loadEngine(cliArgs)
        registry = engine.targets

        data = []
        for name in registry.allNames():
            target = registry.lookup(name)
            deps = { x: list(target.scope(x).deps) for x in VISIBILITIES }
            data.append({ 'name' : name, 'kind' : target.kind, 'deps' : deps })

        if cliArgs.get('format') == 'json':
            self._out(_dumpJson(data))
            return 0

        lines = []
        for item in data:
            line = '%s (%s)' % (item['name'], item['kind'])
            deps = ['%s:%s' % (vis, dep) for vis in VISIBILITIES
                    for dep in item['deps'][vis]]
            if deps:
                line += ' -> %s' % ' '.join(deps)
            lines.append(line)
        self._out('\n'.join(lines))
        return 0
