import warnings
import numpy as np
import pandas as pd
from scipy import stats

from .. import constants
from ..utils import year_to_decade


def observation_time(data):
    r"""
    Compose observation timestamps from the year, month, day and hour columns.

    Parameters
    ----------
    data : pandas.DataFrame
        Observation table containing integer 'year', 'month', 'day' and 'hour' columns.

    Returns
    -------
    pandas.Series
        Series of datetime64 values aligned with the index of ``data``.
    """

    parts = data[['year', 'month', 'day', 'hour']].astype('int64')
    return pd.to_datetime(parts)


def reduce_storms(data, by=('name',)):
    r"""
    Collapse per-observation rows into one summary row per storm.

    Parameters
    ----------
    data : pandas.DataFrame
        Observation table, one row per storm per synoptic time.
    by : tuple, optional
        Columns identifying a storm. Default is ``('name',)``, which merges storms sharing a name across years. Use ``('name', 'year')`` to separate them.

    Returns
    -------
    pandas.DataFrame
        Summary table with the representative observation of each storm, plus 'time' and 'decade' columns.

    Notes
    -----
    Within each storm, rows are narrowed down in this order:

    1. Rows at the storm's minimum pressure (ties kept).
    2. Rows with status "tropical storm" or "hurricane". Storms with none left are dropped.
    3. Rows at the maximum wind of what remains.
    4. Rows at the latest observation time. Rows still tied are all kept.

    The input table is never modified.
    """

    by = list(by)

    # Minimum pressure per storm
    min_pressure = data.groupby(by)['pressure'].transform('min')
    subset = data.loc[data['pressure'] == min_pressure]

    # Tropical storm or hurricane status
    subset = subset.loc[subset['status'].isin(constants.NAMED_STATUSES)]
    if len(subset) == 0:
        return subset.assign(time=pd.Series(dtype='datetime64[ns]'),
                             decade=pd.Series(dtype='int64')).reset_index(drop=True)

    # Maximum wind among remaining rows
    max_wind = subset.groupby(by)['wind'].transform('max')
    subset = subset.loc[subset['wind'] == max_wind]

    # Latest observation time among remaining rows
    subset = subset.assign(time=observation_time(subset))
    latest = subset.groupby(by)['time'].transform('max')
    subset = subset.loc[subset['time'] == latest]

    subset = subset.assign(decade=year_to_decade(subset['year']))
    return subset.sort_values(by + ['time'], kind='stable').reset_index(drop=True)


def decade_category_counts(summary):
    r"""
    Count storms per decade and status, pivoted with one column per status.

    Parameters
    ----------
    summary : pandas.DataFrame
        Summary table returned by ``reduce_storms()``.

    Returns
    -------
    pandas.DataFrame
        Integer counts indexed by decade (ascending). Combinations absent from the input are 0.
    """

    counts = summary.groupby(['decade', 'status']).size()
    if len(counts) == 0:
        return pd.DataFrame(index=pd.Index([], name='decade'), dtype='int64')

    table = counts.unstack('status', fill_value=0).sort_index()
    table.columns.name = None
    return table.astype('int64')


def poisson_rate(summary, category, year_span=constants.YEAR_SPAN):
    r"""
    Average annual number of storms of a given category.

    Parameters
    ----------
    summary : pandas.DataFrame
        Summary table returned by ``reduce_storms()``.
    category : int
        Saffir-Simpson category to count.
    year_span : int, optional
        Number of years the dataset spans. Default is 46 (1975 through 2021).

    Returns
    -------
    float
        Rate (lambda) of the Poisson model, in storms per year.
    """

    if year_span <= 0:
        raise ValueError("year_span must be a positive number of years")

    total = int((summary['category'] == category).sum())
    return total / year_span


def poisson_pmf(rate, counts=None):
    r"""
    Evaluate the Poisson probability mass function for an annual rate.

    Parameters
    ----------
    rate : float
        Poisson rate (lambda), e.g. from ``poisson_rate()``.
    counts : list or numpy.ndarray, optional
        Counts to evaluate. Default is 1 through 50.

    Returns
    -------
    pandas.Series
        Probabilities indexed by count.
    """

    if counts is None:
        counts = constants.POISSON_COUNTS
    counts = np.asarray(counts)

    return pd.Series(stats.poisson.pmf(counts, rate), index=pd.Index(counts, name='count'), name='probability')


def wind_diameter_correlation(summary, diameter='tropicalstorm_force_diameter'):
    r"""
    Pearson correlation between wind and storm diameter, using complete pairs only.

    Parameters
    ----------
    summary : pandas.DataFrame
        Summary table returned by ``reduce_storms()``.
    diameter : str, optional
        Diameter column to correlate against. Default is 'tropicalstorm_force_diameter'.

    Returns
    -------
    float
        Correlation coefficient, or NaN if it is undefined for the available pairs.
    """

    # Pairwise deletion of missing values
    complete = summary[['wind', diameter]].dropna()

    if len(complete) < 2:
        warnings.warn(f"Fewer than 2 storms have both wind and {diameter}; correlation is undefined.")
        return np.nan
    if complete['wind'].nunique() < 2 or complete[diameter].nunique() < 2:
        warnings.warn(f"Wind or {diameter} is constant; correlation is undefined.")
        return np.nan

    r, _ = stats.pearsonr(complete['wind'].astype(float), complete[diameter].astype(float))
    return float(r)


def largest_diameter(summary, diameter='tropicalstorm_force_diameter'):
    r"""
    Retrieve the storm with the largest diameter.

    Parameters
    ----------
    summary : pandas.DataFrame
        Summary table returned by ``reduce_storms()``.
    diameter : str, optional
        Diameter column to rank by. Default is 'tropicalstorm_force_diameter'.

    Returns
    -------
    pandas.Series
        Summary row of the storm. If several storms share the largest value, the first in table order is returned.
    """

    valid = summary.dropna(subset=[diameter])
    if len(valid) == 0:
        raise RuntimeError(f"No storms have {diameter} data.")

    return valid.loc[valid[diameter].idxmax()]


def monthly_hurricane_counts(summary):
    r"""
    Count hurricanes per month, for storms with category 1 through 6.

    Returns
    -------
    pandas.Series
        Counts indexed by month, ascending. Months without hurricanes are omitted.
    """

    subset = summary.loc[summary['category'].isin(constants.HURRICANE_CATEGORIES)]
    return subset.groupby('month').size().rename('count')


def peak_hurricane_month(summary):
    r"""
    Return the month with the most hurricanes. Ties resolve to the earliest month.
    """

    counts = monthly_hurricane_counts(summary)
    if len(counts) == 0:
        raise RuntimeError("No hurricanes were found given the requested criteria.")

    return int(counts.idxmax())


def monthly_wind_spearman(summary, threshold=constants.HIGH_WIND_THRESHOLD):
    r"""
    Per-month Spearman correlation between wind and an "observed in this month" indicator.

    Parameters
    ----------
    summary : pandas.DataFrame
        Summary table returned by ``reduce_storms()``.
    threshold : int, optional
        Only rows with wind strictly above this value (knots) are used. Default is 64.

    Returns
    -------
    pandas.Series
        Correlation for each month 1 through 12. Months where the indicator or the wind is constant are NaN.
    """

    high = summary.loc[summary['wind'] > threshold]
    wind = high['wind'].astype(float)

    correlations = {}
    for month in range(1, 13):
        indicator = (high['month'] == month).astype(int)
        if indicator.nunique() < 2 or wind.nunique() < 2:
            correlations[month] = np.nan
            continue
        rho, _ = stats.spearmanr(wind, indicator)
        correlations[month] = float(rho)

    return pd.Series(correlations, name='spearman').rename_axis('month')


def split_by_period(data, split_year=constants.SPLIT_YEAR):
    r"""
    Split observations into before and on-or-after a given year.

    Parameters
    ----------
    data : pandas.DataFrame
        Observation table.
    split_year : int, optional
        First year of the second period. Default is 2000.

    Returns
    -------
    tuple
        Two DataFrames (before, after), each restricted to tropical storm and hurricane observations.
    """

    named = data.loc[data['status'].isin(constants.NAMED_STATUSES)]
    before = named.loc[named['year'] < split_year].reset_index(drop=True)
    after = named.loc[named['year'] >= split_year].reset_index(drop=True)
    return before, after


def storms_to_dicts(data, by=('name', 'year')):
    r"""
    Convert an observation table into a list of storm dicts for track plotting. Internal function.

    Parameters
    ----------
    data : pandas.DataFrame
        Observation table.
    by : tuple, optional
        Columns identifying a storm. Default is ``('name', 'year')``.

    Returns
    -------
    list
        List of dicts with scalar 'name' and 'year' entries and list entries for each variable, in time order.
    """

    storms = []
    for _, group in data.groupby(list(by), sort=False):
        group = group.assign(time=observation_time(group)).sort_values('time', kind='stable')
        storms.append(table_to_dict(group))
    return storms


def table_to_dict(group):
    r"""
    Convert the observations of a single storm into a storm dict. Internal function.
    """

    storm_dict = {'name': group['name'].iloc[0], 'year': int(group['year'].iloc[0])}
    for key in ['time', 'lat', 'long', 'status', 'category', 'wind', 'pressure'] + list(constants.DIAMETER_COLUMNS):
        if key in group.columns:
            storm_dict[key] = group[key].tolist()
    return storm_dict


def plot_credit():
    return "Plot generated using stormclimo"


def add_credit(ax, text):
    import matplotlib.patheffects as path_effects
    a = ax.text(0.99, 0.01, text, fontsize=9, color='k', alpha=0.7, fontweight='bold',
                transform=ax.transAxes, ha='right', va='bottom', zorder=10)
    a.set_path_effects([path_effects.Stroke(linewidth=5, foreground='white'),
                        path_effects.Normal()])
