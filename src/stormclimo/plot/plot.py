import numpy as np
import warnings

from .. import constants

try:
    import cartopy.feature as cfeature
    import cartopy.io.img_tiles as cimgt
    from cartopy import crs as ccrs
    from cartopy.mpl.ticker import LongitudeFormatter, LatitudeFormatter
except ImportError:
    warnings.warn(
        "Warning: Cartopy is not installed in your python environment. Plotting functions will not work.")

try:
    import matplotlib.patheffects as path_effects
    import matplotlib.pyplot as plt
    import matplotlib.ticker as mticker
except ImportError:
    warnings.warn(
        "Warning: Matplotlib is not installed in your python environment. Plotting functions will not work.")

# Web map tile sources available as basemaps
TILE_SOURCES = {'osm': lambda: cimgt.OSM(),
                'street': lambda: cimgt.GoogleTiles(style='street'),
                'satellite': lambda: cimgt.GoogleTiles(style='satellite'),
                'terrain': lambda: cimgt.GoogleTiles(style='terrain')}

# Gridline spacing (degrees) used once the smaller side of the map falls below each extent
GRID_SPACING = ((9.0, 1), (25.0, 2), (40.0, 5), (160.0, 10))


class Plot:

    def __init__(self):

        self.use_credit = True
        self.proj = None

    def create_cartopy(self, proj='PlateCarree', mapobj=None, **kwargs):
        r"""
        Initialize a cartopy projection, or reuse an existing one.

        Parameters:
        -----------
        proj : str
            Name of the cartopy projection class.
        mapobj
            Existing cartopy projection. If passed, will be used instead of generating a new one.
        **kwargs
            Additional arguments passed to the projection.
        """

        self.proj = getattr(ccrs, proj)(**kwargs) if mapobj is None else mapobj

    def create_geography(self, prop):
        r"""
        Draw Natural Earth land, ocean, borders and coastlines, used when no tile basemap is requested.

        Parameters:
        -----------
        prop : dict
            Map properties, using 'res' (Natural Earth scale such as '50m'), 'land_color', 'ocean_color', 'linewidth' and 'linecolor'.
        """

        self.ax.set_facecolor(prop['ocean_color'])
        for feature, color in [(cfeature.OCEAN, prop['ocean_color']), (cfeature.LAND, prop['land_color'])]:
            self.ax.add_feature(feature.with_scale(prop['res']), facecolor=color, edgecolor='face')
        for feature in [cfeature.BORDERS, cfeature.COASTLINE]:
            self.ax.add_feature(feature.with_scale(prop['res']), linewidths=prop['linewidth'],
                                linestyle='solid', edgecolor=prop['linecolor'])

    def create_tiles(self, prop):
        r"""
        Add a web map tile basemap underneath the plot.

        Parameters:
        -----------
        prop : dict
            Map properties, using 'tiles' (tile source name) and 'tile_zoom' (zoom level).
        """

        if prop['tiles'] not in TILE_SOURCES.keys():
            msg = f"Tile source must be one of {', '.join(TILE_SOURCES.keys())}, or None."
            raise ValueError(msg)

        self.ax.add_image(TILE_SOURCES[prop['tiles']](), prop['tile_zoom'], zorder=0)

    def plot_lat_lon_lines(self, bounds, check_prop=False):
        r"""
        Plots labeled parallels and meridians, spaced according to the size of the map.

        Parameters:
        -----------
        bounds : list
            West, east, south and north map bounds.
        check_prop : bool
            If True, skip gridlines when map_prop['plot_gridlines'] is False.

        Returns:
        --------
        cartopy.mpl.gridliner.Gridliner
            The gridlines drawn, or None if skipped.
        """

        if check_prop and not self.map_prop['plot_gridlines']:
            return

        bound_w, bound_e, bound_s, bound_n = bounds

        # Coarsest spacing unless the map is small
        extent = min(abs(bound_e - bound_w), abs(bound_n - bound_s))
        spacing = 20
        for limit, step in GRID_SPACING:
            if extent < limit:
                spacing = step
                break

        parallels = np.arange(np.floor(bound_s / spacing) * spacing, bound_n + spacing, spacing)
        meridians = np.arange(np.floor(bound_w / spacing) * spacing, bound_e + spacing, spacing)

        gl = self.ax.gridlines(crs=ccrs.PlateCarree(), draw_labels=True, linewidth=1.0,
                               color='k', alpha=0.5, linestyle='dotted')
        gl.top_labels = False
        gl.right_labels = False
        gl.xlocator = mticker.FixedLocator(meridians)
        gl.ylocator = mticker.FixedLocator(parallels)
        gl.xformatter = LongitudeFormatter()
        gl.yformatter = LatitudeFormatter()

        # Gridlines can widen the view, so restore the bounds
        self.ax.set_extent([bound_w, bound_e, bound_s, bound_n], crs=ccrs.PlateCarree())

        return gl

    def plot_init(self, ax, map_prop, plot_geography=True):
        r"""
        Initializes the plot by creating a cartopy and axes instance, if one hasn't been created yet, and adds the basemap.

        Parameters:
        -----------
        ax : axes
            Instance of axes
        map_prop : dict
            Dictionary of map properties
        """

        # Set default map properties
        default_map_prop = {'res': '50m', 'land_color': '#FBF5EA', 'ocean_color': '#EDFBFF',
                            'linewidth': 0.5, 'linecolor': 'k', 'figsize': (14, 9),
                            'dpi': 200, 'plot_gridlines': True, 'tiles': 'osm', 'tile_zoom': 4}
        self.map_prop = self.add_prop(map_prop, default_map_prop)

        if self.proj is None:
            self.create_cartopy(proj='PlateCarree', central_longitude=0.0)

        if ax is None:
            self.fig = plt.figure(figsize=self.map_prop['figsize'], dpi=self.map_prop['dpi'])
            self.ax = plt.axes(projection=self.proj)
        else:
            self.fig = ax.figure
            self.ax = ax

        # Basemap: web tiles, or Natural Earth geography when tiles is None
        if plot_geography:
            if self.map_prop['tiles'] is None:
                self.create_geography(self.map_prop)
            else:
                self.create_tiles(self.map_prop)

    def add_prop(self, input_prop, default_prop):
        r"""
        Overrides default property dictionary elements with those passed as input arguments.

        Parameters:
        -----------
        input_prop : dict
            Dictionary to use for overriding default entries.
        default_prop : dict
            Dictionary containing default entries.

        Returns:
        --------
        dict
            Default dictionary overriden by entries in input_prop.
        """

        default_prop.update(input_prop)
        return default_prop

    def set_projection(self, domain):
        r"""
        Sets the map extent to a fixed domain.

        Parameters
        ----------
        domain : str or dict
            "storms" for the fixed storm-track domain (5N to 60N, 110W to 6E), or a dict with 'n', 's', 'e' and 'w' bounds.

        Returns
        -------
        tuple
            West, east, south and north map bounds, respectively.
        """

        if domain == "storms":
            bounds = constants.MAP_BOUNDS
        elif isinstance(domain, dict):
            bounds = {key.lower(): value for key, value in domain.items()}
            missing = [key for key in ['n', 's', 'e', 'w'] if key not in bounds.keys()]
            if len(missing) > 0:
                msg = f"Custom domains must have 'n', 's', 'e' and 'w' bounds, missing: {', '.join(missing)}"
                raise ValueError(msg)
        else:
            msg = "Domain must be 'dynamic', 'storms' or a dict of bounds."
            raise TypeError(msg)

        extent = (bounds['w'], bounds['e'], bounds['s'], bounds['n'])
        self.ax.set_extent(list(extent), crs=ccrs.PlateCarree())

        return extent

    def plot_credit(self):

        return "Plot generated using stormclimo"

    def add_credit(self, text):

        if self.use_credit:
            a = self.ax.text(0.99, 0.01, text, fontsize=10, color='k', alpha=0.7, fontweight='bold',
                             transform=self.ax.transAxes, ha='right', va='bottom', zorder=10)
            a.set_path_effects([path_effects.Stroke(linewidth=5, foreground='white'),
                                path_effects.Normal()])
