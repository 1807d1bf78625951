"""Tests for the `plot` module"""

import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt
import numpy as np
import pytest
from cartopy.mpl.ticker import LongitudeFormatter, LatitudeFormatter
from stormclimo.plot import Plot
from stormclimo import constants

def init_plot():
    """Set up a map without fetching tiles"""

    plot_obj = Plot()
    plot_obj.plot_init(None, {'tiles': None, 'figsize': (6,4), 'dpi': 50})
    return plot_obj

def test_custom_domain():
    """Test a custom dict domain sets the map extent"""

    plot_obj = init_plot()

    bounds = plot_obj.set_projection({'n': 40.0, 's': 20.0, 'e': -60.0, 'w': -100.0})
    assert bounds == (-100.0, -60.0, 20.0, 40.0)
    np.testing.assert_almost_equal(plot_obj.ax.get_extent(), [-100.0, -60.0, 20.0, 40.0], decimal=4)

    #Keys are case insensitive
    bounds = plot_obj.set_projection({'N': 35.0, 'S': 25.0, 'E': -70.0, 'W': -90.0})
    assert bounds == (-90.0, -70.0, 25.0, 35.0)
    plt.close('all')

def test_fixed_domain():
    """Test the fixed storm-track domain"""

    plot_obj = init_plot()

    bounds = plot_obj.set_projection("storms")
    assert bounds == (constants.MAP_BOUNDS['w'], constants.MAP_BOUNDS['e'],
                      constants.MAP_BOUNDS['s'], constants.MAP_BOUNDS['n'])
    plt.close('all')

def test_domain_errors():
    """Test invalid domains"""

    plot_obj = init_plot()

    with pytest.raises(ValueError):
        plot_obj.set_projection({'n': 40.0, 's': 20.0, 'e': -60.0})
    with pytest.raises(TypeError):
        plot_obj.set_projection("north_pacific")
    plt.close('all')

def test_lat_lon_lines():
    """Test gridlines use cartopy tick formatters and respect map_prop"""

    plot_obj = init_plot()

    gl = plot_obj.plot_lat_lon_lines([-100.0, -60.0, 20.0, 40.0])
    assert isinstance(gl.xformatter, LongitudeFormatter)
    assert isinstance(gl.yformatter, LatitudeFormatter)

    plot_obj.map_prop['plot_gridlines'] = False
    assert plot_obj.plot_lat_lon_lines([-100.0, -60.0, 20.0, 40.0], check_prop=True) is None
    plt.close('all')
