"""Tests for the `tracks` module"""

import os
import shutil
import numpy as np
import pandas as pd
import pytest
import stormclimo.tracks as tracks

def read_dataset():

    #Read sample subset of the storms dataset
    test_data_dir = os.path.join(os.path.dirname(__file__), '../data')
    filepath = os.path.join(test_data_dir, 'sample_storms.csv')
    return tracks.StormDataset(storms_url=filepath)

def test_dataset_reading():
    """Tests dataset reading"""

    #Read sample of storms dataset
    basin = read_dataset()

    #Check data validity, storms outside of the year range are excluded
    assert len(basin.data) == 24
    assert 'rownames' not in basin.data.columns
    assert 'time' in basin.data.columns
    assert basin.data['year'].max() <= 2021
    assert 2022 not in basin.data['year'].values

    #Check stats
    expected_output = {
        'basin': 'north_atlantic',
        'source': basin.storms_url,
        'start_year': 1975,
        'end_year': 2021,
        'year_span': 46,
        'storms': 7,
        'max_wind': ('Andrew', 1992),
        'min_pressure': ('Katrina', 2005),
    }
    assert basin.attrs == expected_output

def test_dataset_from_dataframe():
    """Tests dataset creation from a DataFrame already in memory"""

    test_data_dir = os.path.join(os.path.dirname(__file__), '../data')
    raw = pd.read_csv(os.path.join(test_data_dir, 'sample_storms.csv'))
    raw = raw.drop(columns=['tropicalstorm_force_diameter','hurricane_force_diameter'])
    raw_copy = raw.copy()

    basin = tracks.StormDataset(data=raw)
    assert basin.attrs['source'] == 'dataframe'
    assert basin.data['tropicalstorm_force_diameter'].isna().all()

    #Input table is left untouched
    pd.testing.assert_frame_equal(raw, raw_copy)

def test_dataset_errors():
    """Tests input validation"""

    with pytest.raises(TypeError):
        tracks.StormDataset(year_range=1975)
    with pytest.raises(ValueError):
        tracks.StormDataset(year_range=(2021,1975))
    with pytest.raises(ValueError):
        tracks.StormDataset(data=pd.DataFrame({'name':['Amy'],'year':[1975]}))
    with pytest.raises(TypeError):
        tracks.StormDataset(data=[1,2,3])

def test_summary():
    """Tests reduction to one row per storm"""

    basin = read_dataset()

    #Depression-only and extratropical-at-minimum-pressure storms are dropped
    assert basin.summary['name'].tolist() == ['Amy','Andrew','Gloria','Ivan','Katrina','Michael','Sandy']
    assert basin.summary['wind'].tolist() == [55,150,125,145,150,140,80]
    assert basin.summary['decade'].tolist() == [1970,1990,1980,2000,2000,2010,2010]

    #Summary table is returned as a copy
    df = basin.to_dataframe()
    df['wind'] = 0
    assert basin.summary['wind'].max() == 150

def test_describe():
    """Tests descriptive statistics of the summary table"""

    basin = read_dataset()
    output = basin.describe()

    assert list(output.columns) == ['wind','pressure','tropicalstorm_force_diameter']
    assert output.loc['count','wind'] == 7
    assert output.loc['max','wind'] == 150
    assert output.loc['min','wind'] == 55
    assert output.loc['count','tropicalstorm_force_diameter'] == 4
    assert output.loc['min','pressure'] == 902

    with pytest.raises(ValueError):
        basin.describe(variables=['gusts'])

def test_decade_counts():
    """Tests storm counts by decade and status"""

    basin = read_dataset()
    output = basin.decade_counts()

    assert output.index.tolist() == [1970,1980,1990,2000,2010]
    assert output['hurricane'].tolist() == [0,1,1,2,2]
    assert output['tropical storm'].tolist() == [1,0,0,0,0]

def test_poisson():
    """Tests the Poisson model of category 4 and 5 hurricanes"""

    basin = read_dataset()

    np.testing.assert_almost_equal(basin.poisson_rate(5), 4/46, decimal=6)
    np.testing.assert_almost_equal(basin.poisson_rate(4), 1/46, decimal=6)

    pmf = basin.poisson_pmf(5)
    assert pmf.index.tolist() == list(range(1,51))
    np.testing.assert_almost_equal(pmf.loc[1], (4/46) * np.exp(-4/46), decimal=6)

    #Rate follows the requested year range
    short = tracks.StormDataset(year_range=(2000,2021), storms_url=read_dataset().storms_url)
    np.testing.assert_almost_equal(short.poisson_rate(5), 3/21, decimal=6)

def test_wind_diameter():
    """Tests correlation and extremes of storm diameter"""

    basin = read_dataset()

    expected = np.corrcoef([145,150,140,80],[350,400,370,870])[0,1]
    np.testing.assert_almost_equal(basin.wind_diameter_correlation(), expected, decimal=6)
    assert basin.wind_diameter_correlation() < 0

    assert basin.largest_storm() == {'name':'Sandy', 'year':2012, 'tropicalstorm_force_diameter':870.0}

def test_months():
    """Tests monthly hurricane statistics"""

    basin = read_dataset()

    counts = basin.monthly_counts()
    assert counts.to_dict() == {8:2, 9:2, 10:2}

    #Ties resolve to the earliest month
    assert basin.peak_month() == 8

    spearman = basin.monthly_wind_spearman()
    assert spearman.index.tolist() == list(range(1,13))
    assert np.isnan(spearman.loc[1])
    assert np.isnan(spearman.loc[6])
    assert spearman.loc[8] > 0
    assert spearman.loc[10] < 0

def test_split_period():
    """Tests splitting observations by period"""

    basin = read_dataset()
    before, after = basin.split_period()

    assert len(before) == 11
    assert len(after) == 9
    assert before['year'].max() < 2000
    assert after['year'].min() >= 2000
    assert set(before['status']) | set(after['status']) == {'tropical storm','hurricane'}

def test_report(capsys):
    """Tests the analysis report"""

    basin = read_dataset()
    output = basin.report()

    assert output['storms'] == 7
    assert output['largest_diameter_storm']['name'] == 'Sandy'
    assert output['peak_hurricane_month'] == 8
    np.testing.assert_almost_equal(output['poisson_rate'][5], 4/46, decimal=6)
    np.testing.assert_almost_equal(output['poisson_rate'][4], 1/46, decimal=6)

    captured = capsys.readouterr()
    assert "Storm Analysis Report:" in captured.out
    assert "Sandy 2012" in captured.out

    #No output when printing is turned off
    basin.report(print_output=False)
    captured = capsys.readouterr()
    assert captured.out == ""

def test_search_name():
    """Tests searching for storms by name"""

    basin = read_dataset()

    assert basin.search_name('andrew') == [1992]
    assert basin.search_name('KATRINA') == [2005]
    assert basin.search_name('Alex') == []

def test_get_storm():
    """Tests retrieving a storm"""

    basin = read_dataset()
    storm = basin.get_storm(('katrina',2005))

    assert isinstance(storm, tracks.Storm)
    assert storm.name == 'Katrina'
    assert len(storm.vars['wind']) == 2

    with pytest.raises(RuntimeError):
        basin.get_storm(('katrina',2006))
    with pytest.raises(TypeError):
        basin.get_storm('katrina')
    with pytest.raises(ValueError):
        basin.get_storm(('katrina',2005,1))

def test_repr():
    """Tests the dataset summary"""

    basin = read_dataset()
    output = repr(basin)

    assert output.startswith("<stormclimo.tracks.StormDataset>")
    assert "Number of storms:" in output
    assert "150 knots (175 mph, Andrew 1992)" in output

def test_local_path_with_http(tmp_path):
    """Tests that a local file whose path contains 'http' is read from disk"""

    test_data_dir = os.path.join(os.path.dirname(__file__), '../data')
    folder = tmp_path / 'http_mirror'
    folder.mkdir()
    filepath = folder / 'storms.csv'
    shutil.copy(os.path.join(test_data_dir, 'sample_storms.csv'), filepath)

    basin = tracks.StormDataset(storms_url=str(filepath))
    assert basin.attrs['storms'] == 7
