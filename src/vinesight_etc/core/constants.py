"""
Application-wide constants for vineyard ETc estimation.

Physical constants and FAO-56 coefficients used by the reference
evapotranspiration engine, plus default irrigation system parameters.
"""

# Physical Constants
SOLAR_CONSTANT = 0.0820  # MJ m⁻² min⁻¹
STEFAN_BOLTZMANN = 4.903e-9  # MJ K⁻⁴ m⁻² day⁻¹
KELVIN_OFFSET = 273.16

# Vapor Pressure Constants (Tetens formula, FAO-56 eq. 11)
TETENS_A = 0.6108  # kPa
TETENS_B = 17.27
TETENS_C = 237.3  # °C
SLOPE_COEF = 4098

# Atmospheric pressure from elevation (FAO-56 eq. 7)
SEA_LEVEL_PRESSURE = 101.3  # kPa
PRESSURE_LAPSE_RATE = 0.0065
PRESSURE_REFERENCE_TEMP = 293.0  # K
PRESSURE_EXPONENT = 5.26

# Psychrometric Constant Coefficient
PSYCHROMETRIC_COEF = 0.665e-3  # kPa/°C

# Penman-Monteith grass reference surface (FAO-56 eq. 6)
PM_RADIATION_COEF = 0.408
PM_AERODYNAMIC_COEF = 900
PM_WIND_COEF = 0.34

# Wind profile (FAO-56 eq. 47)
WIND_PROFILE_A = 4.87
WIND_PROFILE_B = 67.8
WIND_PROFILE_C = 5.42
STANDARD_WIND_HEIGHT = 2.0  # m
PROVIDER_WIND_HEIGHT = 10.0  # m, height of wind_speed_10m_max

# Grass reference albedo
DEFAULT_ALBEDO = 0.23

# Radiation Constants (Ångström-Prescott)
ANGSTROM_A = 0.25
ANGSTROM_B = 0.5
CLEAR_SKY_COEF = 0.75
ALTITUDE_FACTOR = 2e-5

# Hargreaves radiation adjustment coefficient (kRs)
HARGREAVES_KRS_INTERIOR = 0.16
HARGREAVES_KRS_COASTAL = 0.19

# Hargreaves ETo equation (FAO-56 eq. 52)
HARGREAVES_ETO_COEF = 0.0023
HARGREAVES_TEMP_OFFSET = 17.8  # °C

# Net Longwave Radiation Constants
NLW_CONST_1 = 0.34
NLW_CONST_2 = 0.14
NLW_CONST_3 = 1.35
NLW_CONST_4 = 0.35

# Solar Geometry Constants
EARTH_ORBIT_ECCENTRICITY = 0.033
SOLAR_DECLINATION_AMPLITUDE = 0.409
SOLAR_DECLINATION_PHASE = 1.39  # radians
DAYS_PER_YEAR = 365

# Unit conversions
LUX_PER_WATT_M2 = 110.0  # sunlight, approximate
WATT_M2_TO_MJ_DAY = 0.0864  # mean W/m² over a day -> MJ/m²/day
WH_M2_TO_MJ = 0.0036
SECONDS_PER_HOUR = 3600.0
KMH_TO_MS = 1 / 3.6

# Input bounds
HUMIDITY_MIN = 0.0
HUMIDITY_MAX = 100.0
LATITUDE_LIMIT = 90.0

# Default location (used when the caller supplies none)
DEFAULT_LATITUDE = 19.0760
DEFAULT_LONGITUDE = 72.8777
DEFAULT_ELEVATION = 500.0  # m

# Irrigation defaults
DEFAULT_FIELD_AREA = 10000.0  # m² (1 ha)
DEFAULT_DISCHARGE_RATES = {  # L/h for a 1 ha block
    "drip": 10000.0,
    "sprinkler": 40000.0,
    "surface": 100000.0,
}
DEFAULT_APPLICATION_EFFICIENCY = {
    "drip": 0.90,
    "sprinkler": 0.75,
    "surface": 0.60,
}

# Advisory thresholds
HIGH_ETO_THRESHOLD = 7.0  # mm/day
HIGH_HUMIDITY_THRESHOLD = 80.0  # %
HIGH_WIND_THRESHOLD = 5.0  # m/s
HIGH_DEMAND_THRESHOLD = 4.0  # mm/day, switches drip scheduling to daily

# Cross-validation tolerance band
VALIDATION_TOLERANCE_PCT = 10.0

# Seasonal planning
DEFAULT_SEASONAL_ETO = 4.0  # mm/day

# Multi-day forecast (Open-Meteo serves up to 16 days)
DEFAULT_FORECAST_DAYS = 7
MAX_FORECAST_DAYS = 16
