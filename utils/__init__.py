"""Utility modules for the DCA simulator."""
from utils.logger import setup_logging
from utils.formatters import format_money, format_pct, format_units
from utils.http_client import HTTPClient, APIError
