"""Tests for the `tracks` module"""

import os
import numpy as np
import pandas as pd
import pytest
import xarray as xr
import stormclimo.tracks as tracks

def read_storm(storm=('katrina',2005)):
    """Read in the sample dataset and retrieve a storm"""

    #Read sample subset of the storms dataset, and retrieve sample storm data
    test_data_dir = os.path.join(os.path.dirname(__file__), '../data')
    filepath = os.path.join(test_data_dir, 'sample_storms.csv')
    basin = tracks.StormDataset(storms_url=filepath)

    return basin.get_storm(storm)

def test_storm_reading():
    """Tests storm reading"""

    #Retrieve data for Hurricane Katrina (2005)
    storm = read_storm()

    #Check stats
    expected_output = {
        'name': 'Katrina',
        'year': 2005,
        'basin': 'north_atlantic',
        'source': storm.source,
    }
    assert storm.attrs == expected_output

    #Check variables
    assert list(storm.wind) == [150,110]
    assert list(storm.pressure) == [902,920]
    assert storm.time[0] == pd.Timestamp(2005,8,28,18)
    assert 'tropicalstorm_force_diameter' in storm.vars.keys()

def test_storm_summary():
    """Tests retrieval of the representative observation"""

    storm = read_storm()
    output = storm.summary()

    assert output['wind'] == 150
    assert output['pressure'] == 902
    assert output['category'] == 5
    assert output['decade'] == 2000

    #Storm that never reached tropical storm status
    storm = read_storm(('two',1995))
    assert storm.summary() is None

def test_storm_repr():
    """Tests the storm summary text"""

    storm = read_storm(('andrew',1992))
    output = repr(storm)

    assert output.startswith("<stormclimo.tracks.Storm>")
    assert "150 knots" in output
    assert "922 hPa" in output
    assert "Peak Category:" in output

def test_storm_empty():
    """Tests that a storm needs at least one observation"""

    with pytest.raises(ValueError):
        tracks.Storm({'name':'Test','year':2000,'time':[]})

def test_to_dataframe():
    """Test storm can be converted to a pandas DataFrame"""

    storm = read_storm()

    assert isinstance(storm.to_dataframe(),pd.DataFrame) is True
    assert len(storm.to_dataframe()) == 2
    assert 'name' in storm.to_dataframe(attrs_as_columns=True).columns

def test_to_xarray():
    """Test storm can be converted to an xarray Dataset"""

    storm = read_storm()
    ds = storm.to_xarray()

    assert isinstance(ds,xr.Dataset) is True
    assert ds.attrs['name'] == 'Katrina'
    np.testing.assert_almost_equal(ds['wind'].values, [150,110], decimal=1)

def test_to_dict():
    """Test storm can be converted to a dictionary"""

    storm = read_storm()

    assert isinstance(storm.to_dict(),dict) is True
