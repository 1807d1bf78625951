r"""Utility functions that are used across modules for colors."""

from .generic_utils import *
from .. import constants

# ===========================================================================================================
# Public utilities
# These are used internally and have use externally.
# ===========================================================================================================


def get_colors_sshws(wind_speed):
    r"""
    Retrieve the default colors for the Saffir-Simpson Hurricane Wind Scale (SSHWS).

    Parameters
    ----------
    wind_speed : int or str
        Sustained wind speed in knots, or a category label (e.g., 'ts', 'c3').

    Returns
    -------
    str
        Hex string for the corresponding color. Missing wind gets the tropical depression color.
    """

    # If category string passed, convert to wind
    if isinstance(wind_speed, str):
        wind_speed = category_label_to_wind(wind_speed)

    return constants.SSHWS_COLORS[wind_to_category(wind_speed)]


def get_colors_status(statuses):
    r"""
    Retrieve a distinct color for each storm status, used for grouped bar charts.

    Parameters
    ----------
    statuses : list
        List of status names (e.g., ['hurricane', 'tropical storm']).

    Returns
    -------
    dict
        Dictionary mapping each status to a hex color string.
    """

    # Named statuses reuse their SSHWS color
    fixed = {'tropical depression': get_colors_sshws('td'),
             'tropical storm': get_colors_sshws('ts'),
             'hurricane': get_colors_sshws('c3')}

    # Other statuses cycle through a neutral palette
    palette = ['#7F7F7F', '#BCBD22', '#17BECF', '#8C564B', '#E377C2', '#2CA02C']
    colors = {}
    extra = 0
    for status in statuses:
        if status in fixed.keys():
            colors[status] = fixed[status]
        else:
            colors[status] = palette[extra % len(palette)]
            extra += 1

    return colors
