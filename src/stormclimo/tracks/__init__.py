r"""Functionality for reading and analyzing storm tracks."""

from .dataset import StormDataset
from .storm import Storm
from .plot import TrackPlot
