r"""Utility functions shared across stormclimo modules."""

from .generic_utils import *
from .colors import *
