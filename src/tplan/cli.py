# coding=utf-8
#

"""
 Copyright (c) 2019, Alexander Magola. All rights reserved.
 license: BSD 3-Clause License, see LICENSE for more details.
"""

import os
import sys
import argparse

from tplan.constants import APPNAME, CAP_APPNAME, ENV_VERBOSE
from tplan.pyutils import struct
from tplan.error import TargetPlanLogicError
from tplan import log

ParsedCommand = struct('ParsedCommand', 'name, args, orig')

"""
Object of ParsedCommand with current command after last parsing of command line.
"""
selected = None

class Command(dict):
    """ Class to set up a command for CLI """

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.setdefault('aliases', [])
        self.setdefault('usageTextTempl', "%s [options]")

    def __getattr__(self, name):
        try:
            return self[name]
        except KeyError:
            raise AttributeError(name) from None

# Declarative list of commands in CLI
commands = [
    Command(
        name = 'help',
        description = 'show help for a given topic or a help overview',
        usageTextTempl = "%s [command/topic]",
    ),
    Command(
        name = 'plan',
        description = 'print resolved build plan',
        usageTextTempl = "%s [options] [target [target] ... ]",
    ),
    Command(
        name = 'presets',
        description = 'print available presets',
    ),
    Command(
        name = 'targets',
        description = 'print declared targets',
    ),
    Command(
        name = 'version',
        aliases = ['ver'],
        description = 'print version of %s' % APPNAME,
    ),
]

def _makeCmdNameMap():
    cmdNameMap = {}
    for cmd in commands:
        cmdNameMap[cmd.name] = cmd
        for alias in cmd.aliases:
            cmdNameMap[alias] = cmd
    return cmdNameMap

class PosArg(Command):
    """ Class to set up positional param for CLI """

    NOTARGPARSE_FIELDS = ('name', 'commands')

    def __init__(self, *args, **kwargs):
        dict.__init__(self, *args, **kwargs)

# Declarative list of positional args after command name in CLI
posargs = [
    PosArg(
        name = 'targets',
        nargs = '*', # optional list of args
        default = [],
        help = 'select targets, all targets if nothing is selected',
        commands = ['plan'],
    ),
]

class Option(Command):
    """ Class to set up an option for CLI """

    NOTARGPARSE_FIELDS = ('names', 'commands', 'runcmd', 'isglobal')

    def __init__(self, *args, **kwargs):
        dict.__init__(self, *args, **kwargs)
        self.setdefault('isglobal', False)
        self.setdefault('commands', [])
        self.setdefault('action', 'store')
        self.setdefault('type', None)
        self.setdefault('choices', None)
        self.setdefault('default', None)

_BUILDCONF_CMD_NAMES = ['plan', 'presets', 'targets']

# Declarative list of options in CLI
# Special param 'runcmd' is used to declare global option that is an alias
# for a command.
options = [
    # global options that are used before command in cmd line
    Option(
        names = ['-h', '--help'],
        isglobal = True,
        action = 'help',
        help = 'show this help message and exit',
    ),
    Option(
        names = ['--version'],
        isglobal = True,
        runcmd = 'version',
        help = 'alias for command "version"',
    ),
    # command options
    Option(
        names = ['-h', '--help'],
        action = 'help',
        commands = [x.name for x in commands], # for all commands
        help = 'show this help message for command and exit',
    ),
    Option(
        names = ['-c', '--buildconf'],
        commands = _BUILDCONF_CMD_NAMES,
        help = 'buildconf file or directory with it',
    ),
    Option(
        names = ['-p', '--preset'],
        commands = ['plan'],
        help = 'name of the preset to make build context',
    ),
    Option(
        names = ['-D', '--define'],
        action = 'append',
        commands = ['plan'],
        help = 'override build context key: -D KEY=VALUE',
    ),
    Option(
        names = ['-j', '--jobs'],
        type = int,
        commands = ['plan'],
        help = 'amount of parallel jobs for resolving',
    ),
    Option(
        names = ['-f', '--format'],
        choices = ('text', 'json'),
        commands = _BUILDCONF_CMD_NAMES,
        help = 'output format',
    ),
    Option(
        names = ['-v', '--verbose'],
        action = "count",
        commands = [x.name for x in commands if x.name != 'help'],
        help = 'verbosity level -v -vv or -vvv',
    ),
    Option(
        names = ['--color'],
        choices = ('yes', 'no', 'auto'),
        commands = [x.name for x in commands if x.name != 'version'],
        help = 'whether to use colors (yes/no/auto)',
    ),
]

def _getReadyOptDefaults():

    # These params should be obtained only before parsing but
    # not when current python has loaded.
    _getenv = os.environ.get
    verbose = _getenv(ENV_VERBOSE, '')
    try:
        verbose = int(verbose) if verbose else 0
    except ValueError:
        verbose = 0

    return {
        'verbose' : verbose,
        'color' : _getenv('NOCOLOR', '') and 'no' or 'auto',
        'buildconf' : '.',
        'format' : 'text',
        'jobs' : 1,
    }

class CmdLineParser(object):
    """
    CLI for TargetPlan
    """

    __slots__ = (
        '_defaults', '_globalOptions', '_command',
        '_parser', '_commandHelps', '_cmdNameMap', '_origArgs',
    )

    def __init__(self, progName, defaults = None):

        self._defaults = _getReadyOptDefaults()
        self._defaults.update(defaults or {})

        self._command = None
        self._origArgs = None

        self._globalOptions = [x for x in options if x.isglobal]
        self._cmdNameMap = _makeCmdNameMap()

        class MyHelpFormatter(argparse.HelpFormatter):
            """ Some customization"""
            def __init__(self, prog):
                super().__init__(prog, max_help_position = 27)
                self._action_max_length = 23

        kwargs = dict(
            prog = progName,
            formatter_class = MyHelpFormatter,
            description = '%s: resolver of declarative build targets' % CAP_APPNAME,
            usage = "%(prog)s <command> [options] [args]",
            add_help = False
        )
        self._parser = argparse.ArgumentParser(**kwargs)

        groupGlobal = self._parser.add_argument_group('global options')
        self._addOptions(groupGlobal, cmd = None)

        kwargs = dict(
            title = 'list of commands',
            help = '', metavar = '', dest = 'command'
        )
        subparsers = self._parser.add_subparsers(**kwargs)

        commandHelps = {}
        helpCmd = None
        for cmd in commands:
            cmdHelpInfo = {
                'usage' : self._makeCmdUsageText(progName, cmd),
                'help' : cmd.description,
                'description' : cmd.description.capitalize(),
                'aliases' : cmd.aliases,
            }
            commandHelps[cmd.name] = cmdHelpInfo

            if cmd.name == 'help': # It will be processed below
                helpCmd = cmd
                continue

            kwargs = dict(cmdHelpInfo)
            kwargs['add_help'] = False
            cmdParser = subparsers.add_parser(cmd.name, **kwargs)

            self._addCmdPosArgs(cmdParser, cmd)

            groupCmdOpts = cmdParser.add_argument_group('command options')
            self._addOptions(groupCmdOpts, cmd = cmd)
            cmdHelpInfo['help'] = cmdParser.format_help()

        # special case for 'help' command
        if helpCmd is None:
            raise TargetPlanLogicError("Programming error: no command "
                                       "'help' in commands") # pragma: no cover
        cmd = helpCmd
        kwargs = dict(commandHelps[cmd.name])
        kwargs['add_help'] = True
        cmdParser = subparsers.add_parser(cmd.name, **kwargs)
        cmdParser.add_argument('topic', nargs='?', default = 'overview')

        self._commandHelps = commandHelps

    def _getOptionDefault(self, opt):
        optName = opt.names[-1].replace('-', '', 2)
        return self._defaults.get(optName, None)

    @staticmethod
    def _joinCmdNameWithAliases(cmd):
        if not cmd.aliases:
            return cmd.name
        return cmd.name + '|' + '|'.join(cmd.aliases)

    @staticmethod
    def _makeCmdUsageText(progName, cmd):
        template = "%s " + cmd.usageTextTempl
        return template % (progName, CmdLineParser._joinCmdNameWithAliases(cmd))

    def _showHelp(self, cmdHelps, topic):
        if topic == 'overview':
            self._parser.print_help()
            return True

        _topic = self._cmdNameMap.get(topic, None)
        if _topic:
            _topic = _topic.name

        if _topic is None or _topic not in cmdHelps:
            log.error("Unknown command/topic to show help: '%s'" % topic)
            return False

        print(cmdHelps[_topic]['help'])
        return True

    def _addCmdPosArgs(self, target, cmd):
        for arg in [x for x in posargs if cmd.name in x.commands]:
            kwargs = { k:v for k, v in arg.items()
                       if v is not None and k not in PosArg.NOTARGPARSE_FIELDS }
            target.add_argument(arg.name, **kwargs)

    def _addOptions(self, target, cmd = None):
        if cmd is None:
            # get only global options
            _options = self._globalOptions
        else:
            _options = [x for x in options if not x.isglobal and cmd.name in x.commands]

        for opt in _options:
            kwargs = { k:v for k, v in opt.items()
                       if v is not None and k not in Option.NOTARGPARSE_FIELDS }

            if 'runcmd' in opt:
                kwargs['action'] = "store_true"
            elif opt.action != 'help':
                default = self._getOptionDefault(opt)
                if default is not None:
                    kwargs['default'] = default
                    kwargs['help'] += ' [default: %r]' % default

            target.add_argument(*opt.names, **kwargs)

    def _fillCmdInfo(self, parsedArgs):
        args = dict(vars(parsedArgs))
        for opt in self._globalOptions:
            if 'runcmd' in opt:
                optName = opt.names[-1].replace('-', '', 2)
                args.pop(optName, None)
        cmd = self._cmdNameMap[args.pop('command')]
        self._command = ParsedCommand(
            name = cmd.name,
            args = args,
            orig = self._origArgs,
        )

    def parse(self, args = None, defaultCmd = 'help'):
        """ Parse command line args """

        if args is None:
            args = sys.argv[1:]

        args = list(args)
        self._origArgs = list(args)

        globalOpts = self._globalOptions
        if args:
            for opt in globalOpts:
                runcmd = opt.get('runcmd')
                if runcmd and args[0] in opt.names:
                    # convert option into corresponding command
                    args[0] = runcmd
                    break

        # simple hack to set default command
        if not args or args[0].startswith('-'):
            # don't use global options for default command
            forbiddenNames = [y for x in globalOpts for y in x.names]
            if not any(x in forbiddenNames for x in args):
                args.insert(0, defaultCmd)

        # parse
        parsedArgs = self._parser.parse_args(args)
        cmd = self._cmdNameMap[parsedArgs.command]

        if cmd.name == 'help':
            self._fillCmdInfo(parsedArgs)
            sys.exit(not self._showHelp(self._commandHelps, parsedArgs.topic))

        self._fillCmdInfo(parsedArgs)
        return self._command

    @property
    def command(self):
        """ current command after last parsing of command line"""
        return self._command

def parseAll(args, defaults = None):
    """
    Parse all command line args with CmdLineParser and save selected
    command as object of ParsedCommand in global var 'selected' of this module.
    Param 'args' must include program name as the first item.
    """

    global selected # pylint: disable = global-statement

    parser = CmdLineParser(APPNAME, defaults)
    selected = parser.parse(args[1:])
    return selected
