# coding=utf-8
#

"""
 Copyright (c) 2019, Alexander Magola. All rights reserved.
 license: BSD 3-Clause License, see LICENSE for more details.
"""

import sys

from tplan import log

class Command(object):
    """ Base class for a CLI command """

    COLOR = 'NORMAL'

    def __init__(self, stream = None):
        self._color = getattr(log.colors, self.COLOR)
        self._stream = stream

    def _info(self, msg):
        log.info(msg, extra = { 'c1': self._color } )

    def _warn(self, msg):
        log.warn(msg, extra = { 'c1': self._color } )

    def _out(self, text):
        # results go to stdout, messages go to the log
        stream = self._stream if self._stream else sys.stdout
        stream.write(text)
        if not text.endswith('\n'):
            stream.write('\n')

    def _run(self, cliArgs):
        raise NotImplementedError

    def run(self, cliArgs):
        """ Run command """

        if cliArgs.get('color'):
            log.enableColorsByCli(cliArgs['color'])

        return self._run(cliArgs)
