import numpy as np
import warnings

# Import internal scripts
from ..plot import Plot

# Import tools
from ..utils import *
from .. import constants

try:
    from cartopy import crs as ccrs
except ImportError:
    warnings.warn(
        "Warning: Cartopy is not installed in your python environment. Plotting functions will not work.")

try:
    import matplotlib.lines as mlines
    import matplotlib.patheffects as path_effects
    import matplotlib.pyplot as plt
except ImportError:
    warnings.warn(
        "Warning: Matplotlib is not installed in your python environment. Plotting functions will not work.")


def add_legend(ax, prop):
    r"""
    Add a Saffir-Simpson legend for category-colored tracks.

    Parameters
    ----------
    ax : axes
        Instance of axes to add the legend to.
    prop : dict
        Dictionary containing plot properties.
    """

    # Only category-colored tracks get a legend
    if prop['linecolor'] != 'category':
        return ax

    handles = [mlines.Line2D([], [], linestyle='dotted', label='Other Status', color='k'),
               mlines.Line2D([], [], linestyle='solid', label='Tropical Storm', color=get_colors_sshws(category_to_wind(0)))]
    for category in range(1, 6):
        handles.append(mlines.Line2D([], [], linestyle='solid', label=f'Category {category}',
                                     color=get_colors_sshws(category_to_wind(category))))
    l = ax.legend(handles=handles, prop={'size': 9}, loc=1)
    l.set_zorder(1001)

    return ax


class TrackPlot(Plot):

    def __init__(self):

        self.use_credit = True
        self.proj = None

    def plot_storms(self, storms, domain="dynamic", title="Storm Track Composite", ax=None, save_path=None, prop={}, map_prop={}):
        r"""
        Creates a plot of a single or multiple storm tracks.

        Parameters
        ----------
        storms : list
            List of storm dicts, each with 'name', 'year' and lists of 'lat', 'long', 'wind' and 'status'.
        domain : str or dict
            Domain for the plot. Can be one of the following:
            "dynamic" - default. Dynamically focuses the domain using the storm track(s) plotted.
            "storms" - fixed storm-track domain (5N to 60N, 110W to 6E)
            dict - custom domain with 'n', 's', 'e' and 'w' bounds
        title : str
            Left title of the plot. If None and a single storm is plotted, the storm name is used.
        ax : axes
            Instance of axes to plot on. If none, one will be generated. Default is none.
        save_path : str
            Relative or full path of directory to save the image in. If none, image will not be saved.
        prop : dict
            Property of storm track lines.
        map_prop : dict
            Property of cartopy map.

        Returns
        -------
        ax
            Instance of axes containing the plot.
        """

        # Set default properties
        default_prop = {'linecolor': 'category', 'linewidth': 1.5, 'plot_names': False}

        # Initialize plot
        prop = self.add_prop(prop, default_prop)
        self.plot_init(ax, map_prop)

        # --------------------------------------------------------------------------------------

        # Keep record of lat/lon coordinate extrema
        max_lat = []
        min_lat = []
        max_lon = []
        min_lon = []

        # Iterate through all storms provided
        for storm_data in storms:

            if not isinstance(storm_data, dict):
                raise TypeError("Each storm must be a dict.")

            lats = storm_data['lat']
            lons = storm_data['long']
            if len(lats) == 0:
                continue

            # Add to coordinate extrema
            max_lat.append(max(lats))
            min_lat.append(min(lats))
            max_lon.append(max(lons))
            min_lon.append(min(lons))

            # Iterate over storm data to plot
            for i in range(1, len(lats)):

                # Determine line color, with SSHWS scale used as default
                if prop['linecolor'] == 'category':
                    line_color = get_colors_sshws(np.nan_to_num(storm_data['wind'][i]))
                else:
                    line_color = prop['linecolor']

                # Named statuses get a solid line with a black outline
                if storm_data['status'][i] in constants.NAMED_STATUSES and storm_data['status'][i - 1] in constants.NAMED_STATUSES:
                    self.ax.plot([lons[i - 1], lons[i]], [lats[i - 1], lats[i]], '-',
                                 linewidth=prop['linewidth'] * 1.33, color='k', zorder=3,
                                 transform=ccrs.PlateCarree())
                    self.ax.plot([lons[i - 1], lons[i]], [lats[i - 1], lats[i]], '-',
                                 linewidth=prop['linewidth'], color=line_color, zorder=4,
                                 transform=ccrs.PlateCarree())

                # Other statuses get a dotted line
                else:
                    line_width = min(prop['linewidth'], 1.5)
                    self.ax.plot([lons[i - 1], lons[i]], [lats[i - 1], lats[i]], ':',
                                 linewidth=line_width, color=line_color, zorder=4,
                                 transform=ccrs.PlateCarree(),
                                 path_effects=[path_effects.Stroke(linewidth=line_width * 1.33, foreground='k'),
                                               path_effects.Normal()])

            # Label storm at its starting point
            if prop['plot_names']:
                self.ax.text(lons[0], lats[0] + 1.0, f"{storm_data['name'].upper()} {storm_data['year']}",
                             fontsize=9, clip_on=True, zorder=990, alpha=0.7, ha='center', va='bottom',
                             transform=ccrs.PlateCarree())

        # --------------------------------------------------------------------------------------

        # Storm-centered plot domain
        if domain == "dynamic":
            if len(max_lat) == 0:
                raise RuntimeError("No storm observations were provided to plot.")
            bound_w, bound_e, bound_s, bound_n = dynamic_map_extent(
                min(min_lon), max(max_lon), min(min_lat), max(max_lat))
            self.ax.set_extent(
                [bound_w, bound_e, bound_s, bound_n], crs=ccrs.PlateCarree())

        # Pre-generated or custom domain
        else:
            bound_w, bound_e, bound_s, bound_n = self.set_projection(domain)

        # Plot parallels and meridians
        self.plot_lat_lon_lines([bound_w, bound_e, bound_s, bound_n], check_prop=True)

        # --------------------------------------------------------------------------------------

        # Add left title
        if title is None and len(storms) == 1:
            storm_data = storms[0]
            self.ax.set_title(f"{storm_data['name'].title()} {storm_data['year']}", loc='left',
                              fontsize=17, fontweight='bold')
            wind = [w for w in storm_data['wind'] if not np.isnan(w)]
            pressure = [p for p in storm_data['pressure'] if not np.isnan(p)]
            if len(wind) > 0 and len(pressure) > 0:
                dot = u"•"
                self.ax.set_title(f"{int(max(wind))} kt {dot} {int(min(pressure))} hPa", loc='right', fontsize=13)
        elif title:
            self.ax.set_title(title, loc='left', fontsize=17, fontweight='bold')

        # Add plot credit
        self.add_credit(self.plot_credit())

        # Add legend
        self.ax = add_legend(self.ax, prop)

        # Save image if specified
        if save_path is not None and isinstance(save_path, str):
            plt.savefig(save_path, bbox_inches='tight')

        return self.ax

    def plot_periods(self, before, after, labels=('Before 2000', '2000 and later'), save_path=None, prop={}, map_prop={}):
        r"""
        Creates two side-by-side maps of storm tracks over the fixed storm-track domain.

        Parameters
        ----------
        before : list
            List of storm dicts for the first period.
        after : list
            List of storm dicts for the second period.
        labels : tuple
            Titles of the two maps.
        save_path : str
            Relative or full path of directory to save the image in. If none, image will not be saved.
        prop : dict
            Property of storm track lines.
        map_prop : dict
            Property of cartopy map.

        Returns
        -------
        list
            The two axes instances.
        """

        # Create projection and figure
        if self.proj is None:
            self.create_cartopy(proj='PlateCarree', central_longitude=0.0)
        figsize = map_prop.get('figsize', (18, 6))
        dpi = map_prop.get('dpi', 200)
        fig = plt.figure(figsize=figsize, dpi=dpi)

        axes = []
        for i, (storms, label) in enumerate(zip([before, after], labels)):
            ax = fig.add_subplot(1, 2, i + 1, projection=self.proj)
            ax = self.plot_storms(storms, domain="storms", title=f"{label} ({len(storms)} storms)", ax=ax,
                                  prop=dict(prop), map_prop=dict(map_prop))
            axes.append(ax)

        # Save image if specified
        if save_path is not None and isinstance(save_path, str):
            plt.savefig(save_path, bbox_inches='tight')

        return axes
