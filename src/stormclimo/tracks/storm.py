r"""Functionality for storing and analyzing an individual storm."""

import numpy as np
import pandas as pd
import xarray as xr

# Import internal scripts
from .plot import TrackPlot

# Import tools
from .tools import reduce_storms
from ..utils import *


class Storm:

    r"""
    Initializes an instance of Storm, retrieved via ``StormDataset.get_storm()``.

    Parameters
    ----------
    storm : dict
        Dict entry of the requested storm. Scalar entries ('name', 'year', ...) become attributes, list entries ('time', 'lat', 'long', 'wind', ...) become variables.

    Returns
    -------
    Storm
        Instance of a Storm object.

    Notes
    -----
    A Storm object is retrieved from StormDataset's ``get_storm()`` method, using a tuple of the storm name and year:

    .. code-block:: python

        from stormclimo import tracks
        basin = tracks.StormDataset()
        storm = basin.get_storm(('katrina',2005))

    Variables can be accessed directly from the Storm object (e.g., ``storm.wind``), or through ``storm.vars``. Attributes are listed in ``storm.attrs``.
    """

    def __setitem__(self, key, value):
        self.__dict__[key] = value

    def __getitem__(self, key):
        return self.__dict__[key]

    def __repr__(self):

        wind, pressure = self.vars['wind'], self.vars['pressure']
        max_wind = None if all_nan(wind) else int(np.nanmax(np.asarray(wind, dtype=float)))
        time_format = "%H00 UTC %d %B %Y"

        overview = {
            'Maximum Wind': 'N/A' if max_wind is None else f"{max_wind} knots",
            'Minimum Pressure': 'N/A' if all_nan(pressure) else f"{int(np.nanmin(np.asarray(pressure, dtype=float)))} hPa",
            'Peak Category': 'N/A' if max_wind is None else wind_to_category(max_wind),
            'Observations': len(self.vars['time']),
            'Start Time': pd.Timestamp(self.vars['time'][0]).strftime(time_format),
            'End Time': pd.Timestamp(self.vars['time'][-1]).strftime(time_format),
        }

        # First and last value of each variable
        variables = {key: f"({type(values[0]).__name__.replace('_', '')}) [{values[0]} .... {values[-1]}]"
                     for key, values in self.vars.items()}

        lines = ["<stormclimo.tracks.Storm>"]
        lines += format_block("Storm Summary:", overview)
        lines += [""] + format_block("Variables:", variables, colon=False)
        lines += [""] + format_block("More Information:", self.attrs)
        return "\n".join(lines)

    def __init__(self, storm):

        # Save the dict entry of the storm
        self.dict = storm

        # Lists are per-observation variables, everything else describes the storm
        self.vars = {key: np.array(value) for key, value in storm.items() if isinstance(value, list)}
        self.attrs = {key: value for key, value in storm.items() if not isinstance(value, list)}
        for key, value in {**self.attrs, **self.vars}.items():
            self[key] = value

        if len(self.vars.get('time', [])) == 0:
            raise ValueError("Storm must contain at least one observation.")

    def to_dict(self):
        r"""
        Returns the dict entry for the storm.

        Returns
        -------
        dict
            A dictionary containing information about the storm.
        """

        return self.dict

    def to_xarray(self):
        r"""
        Converts the storm dict into an xarray Dataset object.

        Returns
        -------
        xarray.Dataset
            An xarray Dataset object containing information about the storm.
        """

        data_vars = {key: ('time', values) for key, values in self.vars.items() if key != 'time'}
        return xr.Dataset(data_vars, coords={'time': pd.to_datetime(self.dict['time'])}, attrs=dict(self.attrs))

    def to_dataframe(self, attrs_as_columns=False):
        r"""
        Converts the storm dict into a pandas DataFrame object.

        Parameters
        ----------
        attrs_as_columns : bool
            If True, adds Storm object attributes as columns in the DataFrame returned. Default is False.

        Returns
        -------
        pandas.DataFrame
            A pandas DataFrame object containing information about the storm.
        """

        table = pd.DataFrame({key: self.dict[key] for key in self.vars.keys()})
        if attrs_as_columns:
            for position, (key, value) in enumerate(self.attrs.items()):
                table.insert(position, key, value)
        return table

    def summary(self):
        r"""
        Retrieve the representative observation of this storm.

        The observation is selected at minimum pressure among tropical storm and hurricane observations, then by maximum wind and latest time.

        Returns
        -------
        dict or None
            Representative observation as a dict, or None if the storm never reached tropical storm or hurricane status at its minimum pressure.
        """

        table = self.to_dataframe()
        table['name'] = self.attrs['name']
        table['year'] = self.attrs['year']
        table['month'] = table['time'].dt.month
        table['day'] = table['time'].dt.day
        table['hour'] = table['time'].dt.hour

        reduced = reduce_storms(table)
        if len(reduced) == 0:
            return None
        return reduced.iloc[-1].to_dict()

    def plot(self, domain="dynamic", ax=None, cartopy_proj=None, save_path=None, **kwargs):
        r"""
        Creates a plot of the observed track of the storm.

        Parameters
        ----------
        domain : str
            Domain for the plot. Default is "dynamic".
        ax : axes
            Instance of axes to plot on. If none, one will be generated. Default is none.
        cartopy_proj : ccrs
            Instance of a cartopy projection to use. If none, one will be generated. Default is none.
        save_path : str
            Relative or full path of directory to save the image in. If none, image will not be saved.

        Other Parameters
        ----------------
        prop : dict
            Customization properties of storm track lines.
        map_prop : dict
            Customization properties of Cartopy map.

        Returns
        -------
        ax
            Instance of axes containing the plot is returned.
        """

        # Retrieve kwargs
        prop = kwargs.pop('prop', {})
        map_prop = kwargs.pop('map_prop', {})

        # Create instance of plot object
        plot_obj = TrackPlot()

        # Create cartopy projection
        if cartopy_proj is not None:
            plot_obj.proj = cartopy_proj
        else:
            plot_obj.create_cartopy(proj='PlateCarree', central_longitude=0.0)

        # Plot storm
        return plot_obj.plot_storms([self.dict], domain, title=None, ax=ax, prop=prop,
                                    map_prop=map_prop, save_path=save_path)
