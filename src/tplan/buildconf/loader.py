# coding=utf-8
#

"""
 Copyright (c) 2019, Alexander Magola. All rights reserved.
 license: BSD 3-Clause License, see LICENSE for more details.
"""

__all__ = [
    'findConfFile',
    'validate',
    'makeDeclarations',
    'load',
    'loadInto',
]

import os

from tplan.constants import BUILDCONF_FILENAMES, TARGET_KIND_ALIASES, VISIBILITIES
from tplan.error import BuildConfError
from tplan.buildconf.validator import Validator
from tplan.buildconf import yaml
from tplan import log

isfile = os.path.isfile
isdir = os.path.isdir
joinpath = os.path.join

def findConfFile(dpath, fname = None):
    """
    Try to find buildconf file.
    Returns filename if found or None
    """
    if fname:
        if isfile(joinpath(dpath, fname)):
            return fname
        return None

    for name in BUILDCONF_FILENAMES:
        if isfile(joinpath(dpath, name)):
            return name
    return None

def validate(conf, confpath = None):
    """
    Validate structure of buildconf data.
    Raises a subclass of BuildConfError.
    """

    Validator(conf, confpath).run()

def _makeTargetDecl(name, params):

    decl = { 'name' : name }
    kind = params.get('kind')
    decl['kind'] = TARGET_KIND_ALIASES.get(kind, kind)

    sources = params.get('sources')
    if sources:
        decl['sources'] = sources

    for visibility in VISIBILITIES:
        scope = params.get(visibility)
        if scope:
            decl[visibility] = dict(scope)
    return decl

def _makePresetDecl(name, params):

    decl = { 'name' : name }
    for param in ('inherits', 'description', 'hidden'):
        val = params.get(param)
        if val is not None:
            decl[param] = val
    for param in ('context', 'variables'):
        val = params.get(param)
        if val:
            decl[param] = dict(val)
    return decl

def makeDeclarations(conf):
    """
    Convert validated buildconf data into lists of target and preset
    declarations in the form the Engine accepts. Returns tuple
    (targets, presets).
    """

    targets = [_makeTargetDecl(name, params or {})
               for name, params in (conf.get('targets') or {}).items()]
    presets = [_makePresetDecl(name, params or {})
               for name, params in (conf.get('presets') or {}).items()]
    return targets, presets

def load(path):
    """
    Load buildconf file and return tuple (targets, presets) of declarations.
    Param 'path' can be a file or a directory with a buildconf file.
    """

    filepath = path
    if isdir(path):
        filename = findConfFile(path)
        if filename is None:
            msg = "Config %s not found in the directory %r." % \
                    (' or '.join(BUILDCONF_FILENAMES), path)
            raise BuildConfError(msg)
        filepath = joinpath(path, filename)
    elif not isfile(path):
        raise BuildConfError("File %r not found." % path)

    log.debug("loading buildconf %r", filepath)
    conf = yaml.load(filepath)
    validate(conf, filepath)
    return makeDeclarations(conf)

def loadInto(engine, path):
    """
    Load buildconf file and register all declarations in the engine.
    Returns the engine.
    """

    targets, presets = load(path)
    for decl in targets:
        engine.registerTarget(decl)
    for decl in presets:
        engine.registerPreset(decl)
    return engine
