# coding=utf-8
#

"""
 Copyright (c) 2021, Alexander Magola. All rights reserved.
 license: BSD 3-Clause License, see LICENSE for more details.
"""

__all__ = [
    'load',
    'loads',
]

import io

import yaml as pyyaml

from tplan.error import BuildConfError
from tplan.pyutils import maptype, stringtype

try:
    YamlLoader = pyyaml.CSafeLoader
except AttributeError:
    YamlLoader = pyyaml.SafeLoader

class StringIO(io.StringIO):
    """
    Customized StringIO
    """

    def __init__(self, data, name = '<file>'):
        super().__init__(data)
        # it's used in pyyaml for error reports
        self.name = name

def loads(text, name = '<string>'):
    """
    Load YAML buildconf from a string. Returns dict.
    """

    stream = StringIO(text, name)

    try:
        loader = YamlLoader(stream)
        try:
            # load main config data as a python map
            data = loader.get_single_data()
        finally:
            loader.dispose()
    except pyyaml.YAMLError as ex:
        raise BuildConfError(ex = ex, confpath = name) from ex

    if data is None:
        raise BuildConfError("There is no config data", confpath = name)

    if not isinstance(data, maptype):
        raise BuildConfError("Invalid structure: top level must be a mapping", confpath = name)

    for k in data:
        if not isinstance(k, stringtype):
            msg = "The variable %r is not string" % k
            raise BuildConfError(msg, confpath = name)

    return dict(data)

def load(filepath):
    """
    Load YAML buildconf from a file. Returns dict.
    """

    # buildconf file should not be very big so it's loaded completely in memory
    with io.open(filepath, 'rt', encoding = 'utf-8') as fstream:
        text = fstream.read()

    return loads(text, filepath)
