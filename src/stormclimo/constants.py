r"""A collection of relevant constants used throughout stormclimo scripts."""

#Default location of the dplyr storms table
STORMS_URL = 'https://vincentarelbundock.github.io/Rdatasets/csv/dplyr/storms.csv'

#Columns every observation table must carry
REQUIRED_COLUMNS = ('name','year','month','day','hour','lat','long','status','category','wind','pressure')

#Storm extent columns, only recorded from 2004 onward
DIAMETER_COLUMNS = ('tropicalstorm_force_diameter','hurricane_force_diameter')

#Statuses kept when summarizing or mapping storms
NAMED_STATUSES = frozenset(['tropical storm','hurricane'])

#Categories counted as hurricanes when ranking months
HURRICANE_CATEGORIES = (1,2,3,4,5,6)

#Default analysis period and the number of years it spans
YEAR_RANGE = (1975,2021)
YEAR_SPAN = 46

#Counts over which the Poisson PMF is evaluated
POISSON_COUNTS = range(1,51)

#Wind threshold (knots) for the per-month rank correlation
HIGH_WIND_THRESHOLD = 64

#Year separating the two mapped periods
SPLIT_YEAR = 2000

#Fixed map domain for period maps
MAP_BOUNDS = {'w':-110.0,'e':6.0,'s':5.0,'n':60.0}

#Saffir-Simpson category and its minimum sustained wind (knots), 0 is tropical storm
SSHWS_THRESHOLDS = ((5,137),(4,113),(3,96),(2,83),(1,64),(0,34))

#Color of each Saffir-Simpson category, -1 is tropical depression
SSHWS_COLORS = {-1:'#8FC2F2', 0:'#3185D3', 1:'#FFFF00', 2:'#FF9E00', 3:'#DD0000', 4:'#FF00FC', 5:'#8B0088'}
