"""
Constants and configuration values for the pharmacy bonus calculator.

All magic numbers and program constants are centralized here
so the engine and comparator never hardcode them inline.
"""

# Complex letter surcharge: 10% on top of the per-event bonus sum
COMPLEX_LETTER_RATE = 0.10

# Deep integration: tier percentage is normalised against the baseline bonus scale
DEEP_INTEGRATION_NORMALIZER = 5.4
DEFAULT_TIER_KEY = "1.5"
DEFAULT_COMPARISON_MONTHS = 3     # Comparator assumes a quarter

# Default business inputs
DEFAULT_SOZ = 2_500_000           # Quarterly purchase volume (RUB)
DEFAULT_MONTHS = 3
DEFAULT_PHARMACIES = 1

# Chart label widths (characters)
BAR_LABEL_WIDTH = 20
PIE_LABEL_WIDTH = 15

# Display formatting
CURRENCY_FORMAT = "{:,.0f} ₽"     # Rounded roubles
PERCENTAGE_FORMAT = "{:.2f}%"
LARGE_NUMBER_FORMAT = "{:,.0f}"

# Breakdown table row labels when the config has no 'labels' section
DEFAULT_LABELS = {
    'complex_letter': "Complex letter (10% of bonus)",
    'total': "Total",
}
