r"""Utility functions that are used across modules.

Ensure these do not reference any function from colors.py. If a function does need to reference another function from colors.py,
add it in that file."""

import numpy as np

from .. import constants

# ===========================================================================================================
# Public utilities
# These are used internally and have use externally.
# ===========================================================================================================


def wind_to_category(wind_speed):
    r"""
    Convert sustained wind speed in knots to Saffir-Simpson Hurricane Wind Scale category.

    Parameters
    ----------
    wind_speed : int
        Sustained wind speed in knots.

    Returns
    -------
    int
        Category corresponding to the sustained wind. 0 is tropical storm, -1 is tropical depression or missing wind.
    """

    for category, threshold in constants.SSHWS_THRESHOLDS:
        if wind_speed >= threshold:
            return category
    return -1


def category_to_wind(category):
    r"""
    Convert Saffir-Simpson Hurricane Wind Scale category to minimum threshold sustained wind speed in knots.

    Parameters
    ----------
    category : int
        Saffir-Simpson category, 0 for tropical storm.

    Returns
    -------
    int or float
        Minimum sustained wind in knots of the requested category. NaN for categories outside the scale (e.g., 6).
    """

    return dict(constants.SSHWS_THRESHOLDS).get(category, np.nan)


def knots_to_mph(wind_speed):
    r"""
    Convert wind from knots to miles per hour, rounded to the nearest 5 mph as done in NHC advisories.

    Parameters
    ----------
    wind_speed : int
        Sustained wind in knots. Rounded down to a multiple of 5 knots before converting.

    Returns
    -------
    int
        Sustained wind in miles per hour.
    """

    knots = wind_speed - (wind_speed % 5)
    return int(5 * round(knots * 1.15078 / 5.0))


def year_to_decade(year):
    r"""
    Return the decade a year falls in, computed as ``10 * floor(year / 10)``.

    Parameters
    ----------
    year : int or numpy.ndarray or pandas.Series
        Year or array of years.

    Returns
    -------
    int or numpy.ndarray or pandas.Series
        Decade(s) matching the input type (e.g., 1987 returns 1980).
    """

    return (year // 10) * 10


def all_nan(arr):
    r"""
    Determine whether a list or array holds nothing but missing values.
    """

    return bool(np.isnan(np.asarray(arr, dtype=float)).all())


def is_number(value):
    r"""
    Determine whether the provided value is a number (Python or numpy, integer or float).
    """

    return isinstance(value, (int, np.integer, float, np.floating))


def category_label_to_wind(label):
    r"""
    Convert a category label to a sustained wind speed in knots. Internal function.

    Parameters
    ----------
    label : str
        'td' for tropical depression, 'ts' for tropical storm, or 'c1' through 'c5'.

    Returns
    -------
    int
        Wind speed falling in the requested category. Tropical depression returns 1 knot below tropical storm strength.
    """

    label = label.lower()
    if label == 'td':
        return category_to_wind(0) - 1
    if label == 'ts':
        return category_to_wind(0)
    if label[0] == 'c' and label[1:].isdigit():
        return category_to_wind(int(label[1:]))
    raise ValueError(f"Unrecognized category label '{label}'. Use 'td', 'ts' or 'c1' through 'c5'.")


def format_block(header, entries, colon=True):
    r"""
    Format a dictionary as an indented block of aligned key/value lines. Internal function.

    Parameters
    ----------
    header : str
        First line of the block.
    entries : dict
        Keys and values to list underneath the header.
    colon : bool
        Whether to add a colon after each key. Default is True.

    Returns
    -------
    list
        Lines of the block.
    """

    keys = [f"{key}:" if colon else key for key in entries.keys()]
    width = max([len(key) for key in keys], default=0) + 3
    return [header] + [f'{" "*4}{key:<{width}}{value}' for key, value in zip(keys, entries.values())]


def dynamic_map_extent(min_lon, max_lon, min_lat, max_lat, ratio=1.45, pad=0.15):
    r"""
    Map bounds around a set of coordinates, padded and widened to a fixed aspect ratio.

    Parameters
    ----------
    min_lon : float
        Minimum longitude bound.
    max_lon : float
        Maximum longitude bound.
    min_lat : float
        Minimum latitude bound.
    max_lat : float
        Maximum latitude bound.
    ratio : float
        Width to height ratio of the map. Default is 1.45.
    pad : float
        Fraction of the coordinate range added on each side. Default is 0.15.

    Returns
    -------
    tuple
        West, east, south and north map bounds, respectively.
    """

    #A single point still gets a small spread
    xrng = max(max_lon - min_lon, 1.2) * (1 + 2 * pad)
    yrng = max(max_lat - min_lat, 1.2) * (1 + 2 * pad)
    center_lon = (min_lon + max_lon) / 2.0
    center_lat = (min_lat + max_lat) / 2.0

    #Stretch whichever side is too short
    if xrng / yrng < ratio:
        xrng = yrng * ratio
    else:
        yrng = xrng / ratio

    return (center_lon - xrng / 2.0, center_lon + xrng / 2.0,
            max(center_lat - yrng / 2.0, -90.0), min(center_lat + yrng / 2.0, 90.0))
