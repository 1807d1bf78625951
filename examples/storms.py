"""
=============================
Atlantic Storm Climatology
=============================
This sample script illustrates how to analyze historical Atlantic storms with stormclimo.
"""

import matplotlib.pyplot as plt
from stormclimo import tracks

###########################################
# Reading In The Storms Dataset
# -----------------------------
#
# Let's start by loading the storms dataset into memory. By default, this reads in the Rdatasets copy of the ``dplyr::storms`` table, unless you specify a local file path using ``storms_url``, or pass a DataFrame already in memory using ``data``.
#
# Only observations between 1975 and 2021 are kept by default. This can be changed with the ``year_range`` argument.

basin = tracks.StormDataset()

###########################################
# Let's peek at our StormDataset object:

print(basin)

###########################################
# Upon creation, observations are reduced to one row per storm, stored in ``basin.summary``. Each storm is represented by the tropical storm or hurricane observation at its minimum pressure:

print(basin.summary.head())

###########################################
# Descriptive Statistics
# ----------------------
#
# Let's look at the distribution of wind, pressure and storm diameter across all storms:

print(basin.describe())

basin.plot_histogram('wind')
basin.plot_boxplot('wind', by='decade')

###########################################
# Storms by Decade
# ----------------
#
# The number of storms per decade, split by status, can be retrieved as a table or plotted:

print(basin.decade_counts())

basin.plot_decade_counts()

###########################################
# Major Hurricane Frequency
# -------------------------
#
# The annual frequency of category 4 and 5 hurricanes can be modeled with a Poisson distribution, whose rate is the number of storms of that category divided by the number of years:

print(basin.poisson_rate(5))

basin.plot_poisson(5)

###########################################
# Wind and Storm Size
# -------------------
#
# Storm diameter is only available from 2004 onward. Let's check how wind relates to the diameter of tropical storm force winds, and which storm was the largest:

print(basin.wind_diameter_correlation())
print(basin.largest_storm())

basin.plot_wind_diameter()

###########################################
# Storm Tracks Before and After 2000
# ----------------------------------
#
# Tropical storm and hurricane tracks can be compared between two periods. By default, maps use OpenStreetMap tiles as a basemap; set ``map_prop={'tiles':None}`` to use Natural Earth geography instead:

basin.plot_periods(split_year=2000)

###########################################
# Individual Storms
# -----------------
#
# Let's retrieve Hurricane Katrina from 2005 and plot its track:

storm = basin.get_storm(('katrina',2005))
print(storm)

storm.plot()

###########################################
# Finally, the headline results of the analysis can be printed as a report:

output = basin.report()
plt.show()
