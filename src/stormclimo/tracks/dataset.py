r"""Functionality for storing and analyzing an entire storm-track dataset."""

import numpy as np
import pandas as pd
import requests
import warnings
from datetime import datetime as dt
from io import StringIO

#Import other stormclimo objects
from .plot import TrackPlot
from .storm import Storm
from .. import constants

#Import tools
from .tools import *
from ..utils import *

#Import matplotlib
try:
    import matplotlib.pyplot as plt
    import matplotlib.ticker as mticker
except ImportError:
    warnings.warn("Warning: Matplotlib is not installed in your python environment. Plotting functions will not work.")

class StormDataset:

    r"""
    Creates an instance of a StormDataset object containing historical Atlantic storm observations.

    Parameters
    ----------
    year_range : list or tuple
        Start and end years (inclusive) of observations to keep. Default is (1975,2021).

    Other Parameters
    ----------------
    storms_url : str, optional
        URL or local path of a CSV file in the layout of the dplyr ``storms`` table. Default is retrieval of the Rdatasets copy online.
    data : pandas.DataFrame, optional
        Observation table already in memory. If provided, ``storms_url`` is ignored. The DataFrame is copied, never modified.

    Returns
    -------
    StormDataset
        An instance of StormDataset.

    Notes
    -----
    Upon creation, observations are reduced to one summary row per storm (``self.summary``): the observation at minimum pressure with tropical storm or hurricane status, then at maximum wind, then latest in time. Storms are identified by name alone, so names reused across years are merged.
    """

    def __repr__(self):

        summary = ["<stormclimo.tracks.StormDataset>"]

        #Add general summary
        emdash = '—'
        max_wind = self.summary['wind'].max()
        summary_keys = {'Basin':self.attrs['basin'],
                        'Source':self.attrs['source'],
                        'Number of observations':len(self.data),
                        'Number of storms':self.attrs['storms'],
                        'Maximum wind':'N/A' if self.attrs['max_wind'] is None else \
                            f"{int(max_wind)} knots ({knots_to_mph(int(max_wind))} mph, {self.attrs['max_wind'][0]} {self.attrs['max_wind'][1]})",
                        'Minimum pressure':'N/A' if self.attrs['min_pressure'] is None else \
                            f"{int(self.summary['pressure'].min())} hPa ({self.attrs['min_pressure'][0]} {self.attrs['min_pressure'][1]})",
                        'Year range':f"{self.attrs['start_year']} {emdash} {self.attrs['end_year']}"}

        #Add dataset summary
        summary += format_block("Dataset Summary:",summary_keys)

        return "\n".join(summary)

    def __init__(self,year_range=constants.YEAR_RANGE,**kwargs):

        #kwargs
        storms_url = kwargs.pop('storms_url', constants.STORMS_URL)
        data = kwargs.pop('data', None)
        if len(kwargs) > 0:
            raise TypeError(f"Unexpected keyword arguments: {', '.join(kwargs.keys())}")

        #Error check
        if isinstance(year_range,(list,tuple)) == False:
            raise TypeError("year_range must be of type tuple or list")
        if len(year_range) != 2 or False in [is_number(i) for i in year_range]:
            raise ValueError("year_range must be a tuple or list with 2 elements: (start_year, end_year)")
        if year_range[1] <= year_range[0]:
            raise ValueError("end_year must be greater than start_year")

        #Store input arguments
        self.start_year = int(year_range[0])
        self.end_year = int(year_range[1])
        self.year_span = self.end_year - self.start_year
        self.storms_url = str(storms_url)

        #Read in from specified data source
        if data is not None:
            if isinstance(data,pd.DataFrame) == False:
                raise TypeError("data must be of type pandas.DataFrame")
            self.source = 'dataframe'
            raw = data.copy()
        else:
            self.source = self.storms_url
            raw = self.__read_storms()
        self.data = self.__prepare(raw)

        #Reduce observations to one row per storm
        self.summary = reduce_storms(self.data)

        #Store attributes
        self.attrs = {
            'basin': 'north_atlantic',
            'source': self.source,
            'start_year': self.start_year,
            'end_year': self.end_year,
            'year_span': self.year_span,
            'storms': len(self.summary),
            'max_wind': self.__extreme_storm('wind',largest=True),
            'min_pressure': self.__extreme_storm('pressure',largest=False),
        }

    def __read_storms(self):

        r"""
        Reads in the storm observation CSV from a URL or local path.
        """

        #Time duration to read in data
        start_time = dt.now()
        print("--> Starting to read in storm track data")

        if self.storms_url.startswith(("http://","https://")):
            response = requests.get(self.storms_url, timeout=60)
            response.raise_for_status()
            raw = pd.read_csv(StringIO(response.text))
        else:
            raw = pd.read_csv(self.storms_url)

        #Determine time elapsed
        time_elapsed = dt.now() - start_time
        tsec = str(round(time_elapsed.total_seconds(),2))
        print(f"--> Completed reading in storm track data ({tsec} seconds)")

        return raw

    def __prepare(self,raw):

        r"""
        Normalizes columns and restricts observations to the requested year range.
        """

        #Drop row index column written by R
        raw = raw.drop(columns=[c for c in ['rownames','Unnamed: 0'] if c in raw.columns])

        #Check for required columns
        missing = [c for c in constants.REQUIRED_COLUMNS if c not in raw.columns]
        if len(missing) > 0:
            raise ValueError(f"Storm data is missing required columns: {', '.join(missing)}")

        #Diameters are only recorded from 2004 onward, keep them as explicit missing values
        for column in constants.DIAMETER_COLUMNS:
            if column not in raw.columns:
                raw[column] = np.nan

        raw['status'] = raw['status'].astype(str).str.strip().str.lower()
        raw['category'] = pd.to_numeric(raw['category'], errors='coerce')

        #Filter by year
        data = raw.loc[(raw['year'] >= self.start_year) & (raw['year'] <= self.end_year)].reset_index(drop=True)
        data['time'] = observation_time(data)

        if len(data) == 0:
            warnings.warn(f"No observations were found between {self.start_year} and {self.end_year}.")

        return data

    def __extreme_storm(self,variable,largest=True):

        #Name and year of the storm holding the extreme value of a summary variable
        values = self.summary[variable].dropna()
        if len(values) == 0:
            return None
        idx = values.idxmax() if largest == True else values.idxmin()
        return (self.summary.loc[idx,'name'], int(self.summary.loc[idx,'year']))

    def to_dataframe(self):

        r"""
        Returns a copy of the storm summary table, one row per storm.

        Returns
        -------
        pandas.DataFrame
            Summary table with the representative observation of each storm.
        """

        return self.summary.copy()

    def get_storm(self,storm):

        r"""
        Retrieves a Storm object for the requested storm.

        Parameters
        ----------
        storm : tuple
            Tuple with storm name and year (e.g., ("Katrina",2005)).

        Returns
        -------
        stormclimo.tracks.Storm
            Object containing information about the requested storm, and methods for analyzing and plotting the storm.
        """

        #Error check
        if isinstance(storm,tuple) == False:
            raise TypeError("storm must be of type tuple.")
        if len(storm) != 2:
            raise ValueError("storm must contain 2 elements, name (str) and year (int)")
        name,year = storm

        #Search for corresponding observations
        match = self.data.loc[(self.data['name'].str.upper() == str(name).upper()) & (self.data['year'] == int(year))]
        if len(match) == 0:
            raise RuntimeError("Storm not found")

        storm_dict = table_to_dict(match.sort_values('time',kind='stable'))
        storm_dict['basin'] = self.attrs['basin']
        storm_dict['source'] = self.source
        return Storm(storm_dict)

    def search_name(self,name):

        r"""
        Searches for years containing a storm of the requested name.

        Parameters
        ----------
        name : str
            Name to search through the dataset for.

        Returns
        -------
        list
            List containing the years where a storm of the requested name was found.
        """

        years = self.data.loc[self.data['name'].str.upper() == name.upper(),'year'].unique()
        return sorted([int(year) for year in years])

    def describe(self,variables=('wind','pressure','tropicalstorm_force_diameter')):

        r"""
        Descriptive statistics of the storm summary table.

        Parameters
        ----------
        variables : list or tuple
            Summary columns to describe. Default is wind, pressure and tropical storm force diameter.

        Returns
        -------
        pandas.DataFrame
            Count, mean, standard deviation, minimum, quartiles and maximum of each variable. Missing values are excluded per variable.
        """

        missing = [v for v in variables if v not in self.summary.columns]
        if len(missing) > 0:
            raise ValueError(f"Variables not found in storm summary: {', '.join(missing)}")
        return self.summary[list(variables)].astype(float).describe()

    def decade_counts(self):

        r"""
        Number of storms per decade and status.

        Returns
        -------
        pandas.DataFrame
            Counts indexed by decade, with one column per status. Missing combinations are 0.
        """

        return decade_category_counts(self.summary)

    def poisson_rate(self,category):

        r"""
        Average annual number of storms of the requested category over the dataset's year span.

        Parameters
        ----------
        category : int
            Saffir-Simpson category (e.g., 4 or 5).

        Returns
        -------
        float
            Poisson rate, in storms per year.
        """

        return poisson_rate(self.summary,category,year_span=self.year_span)

    def poisson_pmf(self,category,counts=None):

        r"""
        Poisson probability mass function for the annual number of storms of the requested category.

        Parameters
        ----------
        category : int
            Saffir-Simpson category (e.g., 4 or 5).
        counts : list, optional
            Counts to evaluate. Default is 1 through 50.

        Returns
        -------
        pandas.Series
            Probabilities indexed by count.
        """

        return poisson_pmf(self.poisson_rate(category),counts=counts)

    def wind_diameter_correlation(self,diameter='tropicalstorm_force_diameter'):

        r"""
        Pearson correlation between wind and storm diameter, over storms with diameter data.
        """

        return wind_diameter_correlation(self.summary,diameter=diameter)

    def largest_storm(self,diameter='tropicalstorm_force_diameter'):

        r"""
        Retrieves the storm with the largest diameter.

        Returns
        -------
        dict
            Dictionary with the storm 'name', 'year' and diameter value.
        """

        row = largest_diameter(self.summary,diameter=diameter)
        return {'name':row['name'], 'year':int(row['year']), diameter:float(row[diameter])}

    def monthly_counts(self):

        r"""
        Number of hurricanes per month.
        """

        return monthly_hurricane_counts(self.summary)

    def peak_month(self):

        r"""
        Month with the most hurricanes. Ties resolve to the earliest month.
        """

        return peak_hurricane_month(self.summary)

    def monthly_wind_spearman(self,threshold=constants.HIGH_WIND_THRESHOLD):

        r"""
        Per-month Spearman correlation between wind and a month indicator, over storms with wind above ``threshold``.
        """

        return monthly_wind_spearman(self.summary,threshold=threshold)

    def split_period(self,split_year=constants.SPLIT_YEAR):

        r"""
        Splits tropical storm and hurricane observations into before and on-or-after ``split_year``.

        Returns
        -------
        tuple
            Two observation DataFrames (before, after).
        """

        return split_by_period(self.data,split_year=split_year)

    def report(self,print_output=True):

        r"""
        Computes the headline results of the analysis.

        Parameters
        ----------
        print_output : bool
            Whether to print the results. Default is True.

        Returns
        -------
        dict
            Dictionary with the number of storms, the wind vs. diameter correlation, the largest storm, the month with most hurricanes, and the Poisson rates for categories 4 and 5.
        """

        try:
            largest = self.largest_storm()
        except RuntimeError:
            largest = None
        try:
            peak = self.peak_month()
        except RuntimeError:
            peak = None

        output = {
            'storms': len(self.summary),
            'wind_diameter_correlation': self.wind_diameter_correlation(),
            'largest_diameter_storm': largest,
            'peak_hurricane_month': peak,
            'poisson_rate': {4:self.poisson_rate(4), 5:self.poisson_rate(5)},
        }

        if print_output == True:
            entries = {'Number of storms':output['storms'],
                       'Wind vs. diameter r':f"{output['wind_diameter_correlation']:.4f}",
                       'Largest storm':'N/A' if largest is None else \
                            f"{largest['name']} {largest['year']} ({largest['tropicalstorm_force_diameter']:.0f} nmi)",
                       'Peak hurricane month':'N/A' if peak is None else f"{peak} ({pd.Timestamp(2000,peak,1):%B})",
                       'Category 4 rate':f"{output['poisson_rate'][4]:.5f} per year",
                       'Category 5 rate':f"{output['poisson_rate'][5]:.5f} per year"}
            print("\n".join(format_block("Storm Analysis Report:",entries)))

        return output

    def plot_histogram(self,variable='wind',bins=20,ax=None,save_path=None):

        r"""
        Creates a histogram of a storm summary variable.

        Parameters
        ----------
        variable : str
            Summary column to plot. Default is 'wind'.
        bins : int
            Number of histogram bins. Default is 20.
        ax : axes
            Instance of axes to plot on. If none, one will be generated. Default is none.
        save_path : str
            Relative or full path of directory to save the image in. If none, image will not be saved.

        Returns
        -------
        ax
            Instance of axes containing the plot.
        """

        values = self.summary[variable].dropna()

        #Create figure
        if ax == None:
            fig,ax = plt.subplots(figsize=(9,6),dpi=200)

        ax.hist(values,bins=bins,color='#3185D3',edgecolor='k',linewidth=0.5,zorder=2)
        ax.set_xlabel(variable.replace('_',' ').capitalize(),fontsize=12)
        ax.set_ylabel('Number of storms',fontsize=12)
        ax.grid(axis='y',alpha=0.5,zorder=0)
        ax.set_title(f"Storm {variable.replace('_',' ')} distribution\n{self.start_year}-{self.end_year}",
                     fontsize=14,fontweight='bold',loc='left')
        add_credit(ax,plot_credit())

        #Save image if specified
        if save_path != None:
            plt.savefig(save_path,bbox_inches='tight',facecolor='w')
        return ax

    def plot_boxplot(self,variable='wind',by='decade',ax=None,save_path=None):

        r"""
        Creates a boxplot of a storm summary variable grouped by another column.

        Parameters
        ----------
        variable : str
            Summary column to plot. Default is 'wind'.
        by : str
            Summary column to group by. Default is 'decade'.
        ax : axes
            Instance of axes to plot on. If none, one will be generated. Default is none.
        save_path : str
            Relative or full path of directory to save the image in. If none, image will not be saved.

        Returns
        -------
        ax
            Instance of axes containing the plot.
        """

        valid = self.summary.dropna(subset=[variable,by])
        groups = sorted(valid[by].unique())
        values = [valid.loc[valid[by]==group,variable].values for group in groups]

        #Create figure
        if ax == None:
            fig,ax = plt.subplots(figsize=(9,6),dpi=200)

        ax.boxplot(values,positions=np.arange(1,len(groups)+1),patch_artist=True,
                   boxprops={'facecolor':'#8FC2F2'},medianprops={'color':'k'})
        ax.set_xticks(np.arange(1,len(groups)+1))
        ax.set_xticklabels([str(group) for group in groups])
        ax.set_xlabel(by.replace('_',' ').capitalize(),fontsize=12)
        ax.set_ylabel(variable.replace('_',' ').capitalize(),fontsize=12)
        ax.grid(axis='y',alpha=0.5)
        ax.set_title(f"Storm {variable.replace('_',' ')} by {by.replace('_',' ')}",fontsize=14,fontweight='bold',loc='left')
        add_credit(ax,plot_credit())

        #Save image if specified
        if save_path != None:
            plt.savefig(save_path,bbox_inches='tight',facecolor='w')
        return ax

    def plot_decade_counts(self,ax=None,save_path=None):

        r"""
        Creates a grouped bar chart of the number of storms per decade and status.

        Parameters
        ----------
        ax : axes
            Instance of axes to plot on. If none, one will be generated. Default is none.
        save_path : str
            Relative or full path of directory to save the image in. If none, image will not be saved.

        Returns
        -------
        ax
            Instance of axes containing the plot.
        """

        counts = self.decade_counts()
        colors = get_colors_status(counts.columns)

        #Create figure
        if ax == None:
            fig,ax = plt.subplots(figsize=(9,6),dpi=200)

        x = np.arange(len(counts.index))
        width = 0.8 / max(len(counts.columns),1)
        for i,status in enumerate(counts.columns):
            ax.bar(x + (i - (len(counts.columns)-1)/2) * width,counts[status].values,width,
                   color=colors[status],edgecolor='k',linewidth=0.5,label=status.title(),zorder=2)
        ax.set_xticks(x)
        ax.set_xticklabels([f"{decade}s" for decade in counts.index])
        ax.yaxis.set_major_locator(mticker.MaxNLocator(integer=True))
        ax.set_ylabel('Number of storms',fontsize=12)
        ax.grid(axis='y',alpha=0.5,zorder=0)
        ax.legend(loc=2)
        ax.set_title("Storms per decade by status",fontsize=14,fontweight='bold',loc='left')
        add_credit(ax,plot_credit())

        #Save image if specified
        if save_path != None:
            plt.savefig(save_path,bbox_inches='tight',facecolor='w')
        return ax

    def plot_wind_diameter(self,diameter='tropicalstorm_force_diameter',ax=None,save_path=None):

        r"""
        Creates a scatterplot of wind against storm diameter, for storms with diameter data.

        Parameters
        ----------
        diameter : str
            Diameter column to plot. Default is 'tropicalstorm_force_diameter'.
        ax : axes
            Instance of axes to plot on. If none, one will be generated. Default is none.
        save_path : str
            Relative or full path of directory to save the image in. If none, image will not be saved.

        Returns
        -------
        ax
            Instance of axes containing the plot.
        """

        complete = self.summary[['wind',diameter,'category']].dropna(subset=['wind',diameter])
        r = self.wind_diameter_correlation(diameter=diameter)

        #Create figure
        if ax == None:
            fig,ax = plt.subplots(figsize=(9,6),dpi=200)

        colors = [get_colors_sshws(wind) for wind in complete['wind']]
        ax.scatter(complete[diameter],complete['wind'],c=colors,s=40,edgecolor='k',linewidth=0.5,zorder=3)
        ax.set_xlabel(f"{diameter.replace('_',' ').capitalize()} (nmi)",fontsize=12)
        ax.set_ylabel('Maximum sustained wind (kt)',fontsize=12)
        ax.grid(alpha=0.5,zorder=0)
        ax.set_title(f"Wind vs. {diameter.replace('_',' ')}",fontsize=14,fontweight='bold',loc='left')
        ax.set_title(f"r = {r:.2f} (n = {len(complete)})",fontsize=12,loc='right')
        add_credit(ax,plot_credit())

        #Save image if specified
        if save_path != None:
            plt.savefig(save_path,bbox_inches='tight',facecolor='w')
        return ax

    def plot_poisson(self,category,ax=None,save_path=None):

        r"""
        Creates a line chart of the Poisson probability mass function for the annual number of storms of a category.

        Parameters
        ----------
        category : int
            Saffir-Simpson category (e.g., 4 or 5).
        ax : axes
            Instance of axes to plot on. If none, one will be generated. Default is none.
        save_path : str
            Relative or full path of directory to save the image in. If none, image will not be saved.

        Returns
        -------
        ax
            Instance of axes containing the plot.
        """

        rate = self.poisson_rate(category)
        pmf = self.poisson_pmf(category)

        #Create figure
        if ax == None:
            fig,ax = plt.subplots(figsize=(9,6),dpi=200)

        ax.plot(pmf.index,pmf.values,'-',color='k',linewidth=2.0,zorder=3)
        ax.plot(pmf.index,pmf.values,'o',color=get_colors_sshws(category_to_wind(category)),
                mec='k',mew=0.5,ms=5,zorder=4)
        ax.set_xlabel(f'Category {category} hurricanes per year',fontsize=12)
        ax.set_ylabel('Probability',fontsize=12)
        ax.grid(alpha=0.5,zorder=0)
        ax.set_title(f"Poisson model of category {category} hurricanes",fontsize=14,fontweight='bold',loc='left')
        ax.set_title(f"λ = {rate:.4f} per year",fontsize=12,loc='right')
        add_credit(ax,plot_credit())

        #Save image if specified
        if save_path != None:
            plt.savefig(save_path,bbox_inches='tight',facecolor='w')
        return ax

    def plot_periods(self,split_year=constants.SPLIT_YEAR,save_path=None,prop={},map_prop={}):

        r"""
        Creates two side-by-side maps of tropical storm and hurricane tracks, before and on-or-after ``split_year``.

        Parameters
        ----------
        split_year : int
            First year of the second period. Default is 2000.
        save_path : str
            Relative or full path of directory to save the image in. If none, image will not be saved.
        prop : dict
            Customization properties of storm track lines.
        map_prop : dict
            Customization properties of Cartopy map. Set ``'tiles'`` to None to draw Natural Earth geography instead of map tiles.

        Returns
        -------
        list
            The two axes instances.
        """

        before,after = self.split_period(split_year=split_year)
        labels = (f"{self.start_year}–{split_year-1}",f"{split_year}–{self.end_year}")

        plot_obj = TrackPlot()
        return plot_obj.plot_periods(storms_to_dicts(before),storms_to_dicts(after),labels=labels,
                                     save_path=save_path,prop=prop,map_prop=map_prop)
