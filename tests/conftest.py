"""
Pytest configuration and shared fixtures for all tests.
"""

import sys
import json
from datetime import date
from pathlib import Path

import pytest

# Add src/ to sys.path so the package imports without installation
src_root = Path(__file__).parent.parent / "src"
if str(src_root) not in sys.path:
    sys.path.insert(0, str(src_root))

from vinesight_etc.models import WeatherObservation, Location  # noqa: E402


@pytest.fixture
def hot_day():
    """Clear, hot fruit-set day with measured solar radiation."""
    return WeatherObservation(
        date=date(2024, 5, 15),
        temperature_max=35.0,
        temperature_min=22.0,
        relative_humidity=65.0,
        wind_speed=2.5,
        rainfall=0.0,
        solar_radiation=25.5
    )


@pytest.fixture
def farm_location():
    """Default farm site (Maharashtra, 500 m)."""
    return Location(latitude=19.076, longitude=72.8777, elevation=500.0)


@pytest.fixture
def config_data(tmp_path):
    """Minimal valid configuration dictionary."""
    return {
        "weather_api": {
            "base_url": "https://api.open-meteo.com",
            "timeout": 10,
            "max_retries": 1
        },
        "processing": {
            "timezone": "Asia/Kolkata"
        },
        "farm": {
            "latitude": 19.076,
            "longitude": 72.8777,
            "elevation": 500,
            "irrigation_method": "drip",
            "soil_type": "loamy"
        },
        "logging": {
            "level": "DEBUG",
            "file": str(tmp_path / "logs" / "vinesight_etc.log")
        }
    }


@pytest.fixture
def config_file(tmp_path, config_data):
    """Write the configuration to a temporary JSON file."""
    path = tmp_path / "config.json"
    path.write_text(json.dumps(config_data), encoding="utf-8")
    return str(path)


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line(
        "markers", "integration: mark test as integration test requiring API access"
    )
    config.addinivalue_line(
        "markers", "unit: mark test as unit test (no external dependencies)"
    )
