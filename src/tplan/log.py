# coding=utf-8
#

"""
 Copyright (c) 2019, Alexander Magola. All rights reserved.
 license: BSD 3-Clause License, see LICENSE for more details.
"""

import os
import sys
import logging

from tplan.constants import APPNAME, ENV_ON_TTY
from tplan.utils import envValToBool

class colors(object):
    """ ANSI color codes used in the log output """

    # pylint: disable = too-few-public-methods

    NORMAL = '\x1b[0m'
    BOLD   = '\x1b[01;1m'
    RED    = '\x1b[01;31m'
    GREEN  = '\x1b[32m'
    YELLOW = '\x1b[33m'
    CYAN   = '\x1b[36m'
    GREY   = '\x1b[90m'

colorSettings = { 'USE' : 0 }

_LEVEL_COLORS = {
    logging.DEBUG   : colors.GREY,
    logging.WARNING : colors.YELLOW,
    logging.ERROR   : colors.RED,
}

class _Formatter(logging.Formatter):

    def format(self, record):
        msg = super().format(record)
        if not colorSettings['USE']:
            return msg

        color = getattr(record, 'c1', None) or _LEVEL_COLORS.get(record.levelno)
        if not color:
            return msg
        return '%s%s%s' % (color, msg, colors.NORMAL)

_logger = logging.getLogger(APPNAME)
_logger.addHandler(logging.NullHandler())

_verbose = 0

debug = _logger.debug
info  = _logger.info
warn  = _logger.warning
error = _logger.error

def init(stream = None):
    """
    Set up output of the package logger. It's for CLI only, the library
    itself never configures logging.
    """

    for handler in list(_logger.handlers):
        _logger.removeHandler(handler)

    handler = logging.StreamHandler(stream if stream else sys.stderr)
    handler.setFormatter(_Formatter('%(message)s'))
    _logger.addHandler(handler)
    _logger.propagate = False
    setVerbose(_verbose)

def enableColorsByCli(colorArg):
    """
    Set up log colors by arg from CLI
    """

    setting = {'yes' : 2, 'auto' : 1, 'no' : 0}[colorArg]
    if setting == 1:
        onTTY = os.environ.get(ENV_ON_TTY)
        if onTTY:
            onTTY = envValToBool(onTTY)
        else:
            onTTY = sys.stderr.isatty() or sys.stdout.isatty()
        if not onTTY:
            setting = 0

    if setting == 1 and os.environ.get('TERM', 'dumb') in ('dumb', 'emacs'):
        setting = 0

    colorSettings['USE'] = setting

def colorsEnabled():
    """ Return True if color output is enabled """
    return bool(colorSettings['USE'])

def verbose():
    """ Get current verbosity level """
    return _verbose

def setVerbose(value):
    """ Set verbosity level: 0 - info, 1 and more - debug """

    global _verbose # pylint: disable = global-statement
    _verbose = value
    _logger.setLevel(logging.DEBUG if value > 0 else logging.INFO)
