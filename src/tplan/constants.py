# coding=utf-8
#

"""
 Copyright (c) 2019 Alexander Magola. All rights reserved.
 license: BSD 3-Clause License, see LICENSE for more details.
"""

APPNAME = 'targetplan'
CAP_APPNAME = 'TargetPlan'
AUTHOR = 'Alexander Magola'
COPYRIGHT_ONE_LINE = '2019 - present %s' % AUTHOR

BUILDCONF_NAME = 'buildconf'
BUILDCONF_EXTS = ['.yaml', '.yml']
BUILDCONF_FILENAMES = ['%s%s' % (BUILDCONF_NAME, x) for x in BUILDCONF_EXTS]

KIND_EXECUTABLE = 'executable'
KIND_STLIB = 'static-library'
KIND_INTERFACE = 'interface-only'
TARGET_KINDS = (KIND_EXECUTABLE, KIND_STLIB, KIND_INTERFACE)

# aliases are accepted by the buildconf loader only
TARGET_KIND_ALIASES = {
    'program'   : KIND_EXECUTABLE,
    'exe'       : KIND_EXECUTABLE,
    'stlib'     : KIND_STLIB,
    'static'    : KIND_STLIB,
    'interface' : KIND_INTERFACE,
    'headers'   : KIND_INTERFACE,
}

VISIBILITY_PRIVATE = 'private'
VISIBILITY_PUBLIC = 'public'
VISIBILITY_INTERFACE = 'interface'
# the order matters: it's the order of dependency edges of a target
VISIBILITIES = (VISIBILITY_PRIVATE, VISIBILITY_PUBLIC, VISIBILITY_INTERFACE)

REQ_INCLUDES = 'includes'
REQ_DEFINES = 'defines'
REQ_OPTIONS = 'options'
REQUIREMENT_KINDS = (REQ_INCLUDES, REQ_DEFINES, REQ_OPTIONS)

CTX_CONFIGURATION = 'configuration'
CTX_PLATFORM = 'platform'
CTX_COMPILER = 'compiler'
CONTEXT_KEYS = (CTX_CONFIGURATION, CTX_PLATFORM, CTX_COMPILER)

CONFIGURATIONS = ('Debug', 'Release', 'RelWithDebInfo', 'MinSizeRel')

MAX_PRESET_CHAIN_DEPTH = 16

ENV_VERBOSE = 'TARGETPLAN_VERBOSE'
ENV_ON_TTY = 'TARGETPLAN_ON_TTY'
