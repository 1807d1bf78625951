r"""Shared plotting functionality."""

from .plot import Plot
