# coding=utf-8
#

"""
 Copyright (c) 2019, Alexander Magola. All rights reserved.
 license: BSD 3-Clause License, see LICENSE for more details.
"""

import sys
import importlib

if sys.hexversion < 0x3070000:
    raise ImportError('Python >= 3.7 is required')

#pylint: disable=wrong-import-position
from tplan import log, error

_commands = {
    'plan'    : ('tplan.commands', 'PlanCommand'),
    'presets' : ('tplan.commands', 'PresetsCommand'),
    'targets' : ('tplan.commands', 'TargetsCommand'),
    'version' : ('tplan.version', 'Command'),
}

def handleCLI(args):
    """
    Handle CLI and return command object
    """
    from tplan import cli

    return cli.parseAll(args)

def runCmd(cmd):
    """
    Run selected command
    """

    if cmd.name not in _commands:
        raise NotImplementedError('Unknown command')

    moduleName, className = _commands[cmd.name]
    module = importlib.import_module(moduleName)
    return getattr(module, className)().run(cmd.args)

def run(args = None):
    """
    Parse command line and run the command. Returns exit code.
    """

    if args is None:
        args = sys.argv

    cmd = None
    log.init()

    try:
        cmd = handleCLI(args)
        log.setVerbose(cmd.args.get('verbose') or 0)
        return runCmd(cmd)
    except error.TargetPlanError as ex:
        verbose = 0
        if cmd:
            verbose = cmd.args.get('verbose') or 0
        if verbose > 1:
            log.error(ex.fullmsg)
        else:
            log.error(ex.msg)
        return 1
    except KeyboardInterrupt:
        log.error('Interrupted')
        return 68

def main():
    """ Entry point of the console script """
    sys.exit(run())
