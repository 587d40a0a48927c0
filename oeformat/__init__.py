'''
oeformat is a package for decoding the legacy Open Ephys data format
(.continuous, .spikes and .events files) into numpy arrays
'''
import importlib.metadata
# this need to be at the begining because some sub module will need the version
__version__ = importlib.metadata.version("oeformat")

import logging

logging_handler = logging.StreamHandler()

from oeformat.core import *
from oeformat.io import decode, decode_folder, get_decoder
