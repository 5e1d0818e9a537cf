"""System-wide constants"""

# Unit conversions
GRAMS_PER_KG = 1000.0
DAYS_PER_YEAR = 365

# Float comparisons for exact fills (e.g. 49kg on a 50kg shelf)
FLOAT_TOLERANCE = 1e-9

# Compliance thresholds
LOW_DAYS_OF_SUPPLY = 2.0  # days

# Optimization settings
UNDERUTILIZED_THRESHOLD = 85.0  # % of shelf width
TARGET_UTILIZATION = 95.0
UPLIFT_FACTOR = 0.15  # share of current sales/profit potential
FACING_BUFFER_DAYS = 1.5  # optimal facings = ceil(sales_velocity * buffer)

SPACE_SUGGESTION_PRIORITY = 80
FACING_SUGGESTION_PRIORITY = 70

# Defaults for newly created fixtures (cm / kg)
DEFAULT_FIXTURES = {
    'door': {
        'location': 'New Location',
        'traffic_flow': 50
    },
    'equipment': {
        'type': 'shelf unit',
        'width': 120,
        'height': 200,
        'depth': 50
    },
    'bay': {
        'width': 200,
        'height': 100,
        'depth': 60,
        'max_weight': 100
    },
    'shelf': {
        'width': 200,
        'height': 40,
        'depth': 50,
        'max_weight': 50
    }
}
