"""WSGI entry point for production deployment."""
import sys
import os
from pathlib import Path

# Ensure project root is on path
sys.path.insert(0, str(Path(__file__).parent))

from config import load_config
from utils.logger import setup_logging
from prices import PriceSeriesProvider
from dca.service import SimulationService
from web.app import create_app

config = load_config(os.environ.get("DCASIM_CONFIG"))
setup_logging(config["logging"]["level"], config["logging"].get("file"))

provider = PriceSeriesProvider(config)
service = SimulationService(provider, config)

app = create_app(config, {"service": service, "provider": provider})
