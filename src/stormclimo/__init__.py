r"""Package for exploring historical Atlantic storm-track climatology."""

from ._version import get_version  # noqa: E402
__version__ = get_version()
del get_version
