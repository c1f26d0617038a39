"""

"""
__version__ = "0.1.0"

from .core import *
from .contrib.optim import Scheduler
from .utils import Logger
