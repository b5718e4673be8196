"""
Configuration module for vineyard ETc estimation.

Loads configuration from JSON file and environment variables.
"""

import json
import os
from typing import Dict, Any, Optional
from pathlib import Path

from . import constants

class Config:
    """Configuration manager for the application."""

    def __init__(self, config_file: Optional[str] = None):
        """
        Initialize configuration.

        Args:
            config_file: Path to configuration JSON file. If None, uses CONFIG_FILE env var
                        or defaults to 'config.json'
        """
        self.config_file = config_file or os.getenv("CONFIG_FILE", "config.json")
        self.config: Dict[str, Any] = {}
        self._load_config()
        self._override_from_env()
        self._validate_config()

    def _load_config(self) -> None:
        """Load configuration from JSON file."""
        config_path = Path(self.config_file)
        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {self.config_file}")

        with open(config_path, "r", encoding="utf-8") as f:
            self.config = json.load(f)

    def _override_from_env(self) -> None:
        """Override configuration with environment variables."""
        if os.getenv("WEATHER_API_BASE_URL"):
            self.config.setdefault("weather_api", {})
            self.config["weather_api"]["base_url"] = os.getenv("WEATHER_API_BASE_URL")

        if os.getenv("FARM_TIMEZONE"):
            self.config.setdefault("processing", {})
            self.config["processing"]["timezone"] = os.getenv("FARM_TIMEZONE")

        if os.getenv("LOG_LEVEL"):
            self.config.setdefault("logging", {})
            self.config["logging"]["level"] = os.getenv("LOG_LEVEL")

        if os.getenv("LOG_FILE"):
            self.config.setdefault("logging", {})
            self.config["logging"]["file"] = os.getenv("LOG_FILE")

    def _validate_config(self) -> None:
        """Validate that required configuration keys are present."""
        required_config = {
            "weather_api": ["base_url", "timeout", "max_retries"],
            "processing": ["timezone"],
        }

        missing_sections = [
            section for section in required_config if section not in self.config
        ]
        if missing_sections:
            raise ValueError(
                f"Missing required configuration sections: {', '.join(missing_sections)}"
            )

        missing_keys = []
        for section, keys in required_config.items():
            for key in keys:
                if key not in self.config[section]:
                    missing_keys.append(f"{section}.{key}")

        if missing_keys:
            raise ValueError(
                f"Missing required configuration keys: {', '.join(missing_keys)}"
            )

        tolerance = self.validation_tolerance_pct
        if tolerance <= 0:
            raise ValueError(
                f"calculation.validation_tolerance_pct must be positive, got {tolerance}"
            )

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value by key (supports dot notation).

        Args:
            key: Configuration key (e.g., 'weather_api.base_url')
            default: Default value if key not found

        Returns:
            Configuration value
        """
        keys = key.split(".")
        value = self.config

        for k in keys:
            if isinstance(value, dict):
                value = value.get(k)
                if value is None:
                    return default
            else:
                return default

        return value

    @property
    def weather_api_base_url(self) -> str:
        """Get weather API base URL."""
        return self.get("weather_api.base_url", "")

    @property
    def weather_api_timeout(self) -> int:
        """Get weather API timeout in seconds."""
        return self.get("weather_api.timeout", 30)

    @property
    def weather_api_max_retries(self) -> int:
        """Get maximum weather API retry attempts."""
        return self.get("weather_api.max_retries", 3)

    @property
    def weather_api_verify_ssl(self) -> bool:
        """Get weather API SSL verification setting."""
        return self.get("weather_api.verify_ssl", True)

    @property
    def timezone(self) -> str:
        """Get farm timezone."""
        return self.get("processing.timezone", "UTC")

    @property
    def log_level(self) -> str:
        """Get log level."""
        return self.get("logging.level", "INFO")

    @property
    def log_file(self) -> Optional[str]:
        """Get log file path."""
        return self.get("logging.file")

    @property
    def albedo(self) -> float:
        """Get reference surface albedo."""
        return self.get("calculation.albedo", constants.DEFAULT_ALBEDO)

    @property
    def validation_tolerance_pct(self) -> float:
        """Get cross-validation tolerance band (%)."""
        return self.get(
            "calculation.validation_tolerance_pct", constants.VALIDATION_TOLERANCE_PCT
        )

    @property
    def high_eto_threshold(self) -> float:
        """Get ETo above which a high-demand note is emitted (mm/day)."""
        return self.get("calculation.high_eto_threshold", constants.HIGH_ETO_THRESHOLD)

    @property
    def strict_validation(self) -> bool:
        """Reject impossible readings instead of clamping them."""
        return self.get("calculation.strict_validation", False)

    @property
    def discharge_rates(self) -> Dict[str, float]:
        """Get discharge rate per irrigation method (L/h), merged over defaults."""
        rates = dict(constants.DEFAULT_DISCHARGE_RATES)
        rates.update(self.get("calculation.discharge_rates", {}))
        return rates

    @property
    def application_efficiency(self) -> Dict[str, float]:
        """Get application efficiency per irrigation method, merged over defaults."""
        efficiency = dict(constants.DEFAULT_APPLICATION_EFFICIENCY)
        efficiency.update(self.get("calculation.application_efficiency", {}))
        return efficiency

    @property
    def farm(self) -> Dict[str, Any]:
        """Get default farm settings (location and irrigation profile)."""
        return self.get("farm", {})

    def __repr__(self) -> str:
        """String representation of config."""
        return f"Config(file={self.config_file}, timezone={self.timezone})"
