"""Market and simulation constants."""
from datetime import date

# Day-count convention used for CAGR
DAYS_PER_YEAR = 365.25

DEFAULT_SYMBOL = "^NSEI"  # NIFTY 50

# A live series shorter than this is replaced by the synthetic one
MIN_LIVE_POINTS = 10

# Synthetic index walk
SYNTHETIC_START_PRICE = 5000.0
SYNTHETIC_SEED = 123456789
LCG_MULTIPLIER = 9301
LCG_INCREMENT = 49297
LCG_MODULUS = 233280

YAHOO_CHART_HOSTS = (
    "https://query1.finance.yahoo.com",
    "https://query2.finance.yahoo.com",
)

# Defaults shown in the CLI and web API
DEFAULT_START_DATE = date(2010, 1, 1)
DEFAULT_LUMP_SUM = 100_000
DEFAULT_DCA_AMOUNT = 10_000
