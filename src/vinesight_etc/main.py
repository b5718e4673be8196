"""
Main entry point for the vineyard irrigation advisor.

Orchestrates a single-day ETc calculation: resolve the farm date, optionally
fetch weather from the provider, apply manual readings, compute the advice
and cross-validate against the provider's reference ETo. A multi-day run
repeats the calculation for each day of the provider forecast.
"""

import json
import sys
from datetime import date
from typing import Any, Dict, Optional, Union

from .core import Config, DateUtils, constants, VineSightError, InvalidInputError, WeatherFetchError
from .logger import setup_logger, LoggerContext
from .models import Location, FarmProfile, GrowthStage, WeatherObservation
from .algorithms import ETcCalculator, infer_growth_stage
from .api import OpenMeteoAPI
from .services import WeatherService, FetchedWeather

REQUIRED_WEATHER_FIELDS = (
    "temperature_max",
    "temperature_min",
    "relative_humidity",
    "wind_speed",
)


class IrrigationAdvisorApp:
    """Main application for vineyard irrigation advice."""

    def __init__(self, config_file: Optional[str] = None):
        """
        Initialize application.

        Args:
            config_file: Path to configuration file
        """
        self.config = Config(config_file)

        self.logger = setup_logger(
            log_file=self.config.log_file,
            log_level=self.config.log_level
        )
        self.logger.info("VineSight ETc irrigation advisor")
        self.logger.debug(f"Configuration: {self.config}")

        self.date_utils = DateUtils(logger=self.logger)
        self.calculator = ETcCalculator.from_config(self.config, logger=self.logger)

        # Created on first fetch
        self.api_client: Optional[OpenMeteoAPI] = None
        self.weather_service: Optional[WeatherService] = None

    def initialize_weather_service(self) -> WeatherService:
        """Create the provider client and weather service if needed."""
        if self.weather_service is None:
            self.api_client = OpenMeteoAPI(
                base_url=self.config.weather_api_base_url,
                timeout=self.config.weather_api_timeout,
                max_retries=self.config.weather_api_max_retries,
                verify_ssl=self.config.weather_api_verify_ssl,
                logger=self.logger
            )
            self.weather_service = WeatherService(
                api_client=self.api_client,
                logger=self.logger
            )
        return self.weather_service

    def default_location(self) -> Location:
        """Farm location from configuration, falling back to built-in defaults."""
        farm = self.config.farm
        defaults = Location()
        return Location(
            latitude=farm.get("latitude", defaults.latitude),
            longitude=farm.get("longitude", defaults.longitude),
            elevation=farm.get("elevation"),
            coastal=farm.get("coastal", False)
        )

    def default_farm(self) -> FarmProfile:
        """Farm irrigation profile from configuration."""
        farm = self.config.farm
        defaults = FarmProfile()
        return FarmProfile(
            irrigation_method=farm.get("irrigation_method", defaults.irrigation_method),
            soil_type=farm.get("soil_type", defaults.soil_type),
            field_area=farm.get("field_area", defaults.field_area),
            discharge_rate=farm.get("discharge_rate")
        )

    def run(
        self,
        weather_inputs: Optional[Dict[str, Any]] = None,
        target_date: Optional[Union[str, date]] = None,
        growth_stage: Optional[Union[str, GrowthStage]] = None,
        location: Optional[Location] = None,
        farm: Optional[FarmProfile] = None,
        fetch: bool = False,
        reference_eto: Optional[float] = None
    ) -> Dict[str, Any]:
        """
        Run the irrigation advice for one day.

        Args:
            weather_inputs: Manually entered weather values by field name
            target_date: Day to advise for. If None, today at the farm
            growth_stage: Growth stage. If None, guessed from the month
            location: Farm location. If None, taken from configuration
            farm: Farm profile. If None, taken from configuration
            fetch: Fetch weather from the provider before applying manual values
            reference_eto: External reference ETo; overrides the fetched one

        Returns:
            Dictionary with the result and, when a reference exists, the
            cross-validation

        Raises:
            VineSightError: On configuration or input errors
            ValueError: On malformed dates or weather fields
        """
        weather_inputs = dict(weather_inputs or {})
        location = location or self.default_location()
        farm = farm or self.default_farm()

        if target_date is None:
            target_date = self.date_utils.get_local_date(self.config.timezone)
        else:
            target_date = DateUtils.parse_date(target_date)
        self.logger.info(f"Calculating irrigation advice for: {target_date.isoformat()}")

        weather = None
        if fetch:
            weather, location, fetched_reference = self._fetch_weather(
                location, target_date, weather_inputs
            )
            if reference_eto is None:
                reference_eto = fetched_reference

        if weather is None:
            weather = self._build_manual_weather(target_date, weather_inputs)

        if growth_stage is None:
            growth_stage = infer_growth_stage(target_date)
            self.logger.info(
                f"No growth stage given; assuming '{growth_stage.value}' for month {target_date.month}"
            )

        with LoggerContext(self.logger, "ETc calculation"):
            result = self.calculator.calculate(
                weather=weather,
                growth_stage=growth_stage,
                location=location,
                farm=farm
            )

        validation = self.calculator.validate_against_reference(result.eto, reference_eto)

        rec = result.irrigation_recommendation
        self.logger.info(
            f"ETc={result.etc:.2f} mm/day, need={result.irrigation_need:.2f} mm, "
            f"irrigate={rec.should_irrigate}, duration={rec.duration:.2f}h"
        )

        return {
            "result": result.to_dict(),
            "validation": validation.to_dict() if validation else None,
        }

    def _fetch_weather(
        self,
        location: Location,
        target_date: date,
        weather_inputs: Dict[str, Any]
    ):
        service = self.initialize_weather_service()
        try:
            with LoggerContext(self.logger, "weather fetch"):
                fetched = service.fetch_daily_weather(location, target_date)
        except WeatherFetchError as e:
            self.logger.warning(f"Weather fetch failed, using manual values only: {e}")
            return None, location, None

        location = self._with_provider_elevation(location, fetched)
        weather = service.merge_manual(fetched, weather_inputs)
        return weather, location, fetched.reference_eto

    def run_forecast(
        self,
        days: int = constants.DEFAULT_FORECAST_DAYS,
        start_date: Optional[Union[str, date]] = None,
        growth_stage: Optional[Union[str, GrowthStage]] = None,
        location: Optional[Location] = None,
        farm: Optional[FarmProfile] = None
    ) -> Dict[str, Any]:
        """
        Run the irrigation advice for each day of a provider forecast.

        Args:
            days: Number of forecast days (1-16)
            start_date: First day. If None, today at the farm
            growth_stage: Growth stage for every day. If None, guessed per day
            location: Farm location. If None, taken from configuration
            farm: Farm profile. If None, taken from configuration

        Returns:
            Dictionary with one result/validation entry per day under ``forecast``

        Raises:
            WeatherFetchError: If the forecast cannot be fetched
            VineSightError: On configuration errors
            ValueError: On malformed dates or a day count outside 1-16
        """
        location = location or self.default_location()
        farm = farm or self.default_farm()

        if start_date is None:
            start_date = self.date_utils.get_local_date(self.config.timezone)
        else:
            start_date = DateUtils.parse_date(start_date)
        self.logger.info(f"Calculating {days}-day irrigation forecast from: {start_date.isoformat()}")

        service = self.initialize_weather_service()
        with LoggerContext(self.logger, "forecast fetch"):
            forecast = service.fetch_forecast(location, start_date, days)

        entries = []
        for fetched in forecast:
            day_location = self._with_provider_elevation(location, fetched)
            day = fetched.observation.date
            stage = growth_stage if growth_stage is not None else infer_growth_stage(day)

            result = self.calculator.calculate(
                weather=fetched.observation,
                growth_stage=stage,
                location=day_location,
                farm=farm
            )
            validation = self.calculator.validate_against_reference(
                result.eto, fetched.reference_eto
            )
            self.logger.info(
                f"{day.isoformat()}: ETc={result.etc:.2f} mm/day, "
                f"need={result.irrigation_need:.2f} mm"
            )
            entries.append({
                "result": result.to_dict(),
                "validation": validation.to_dict() if validation else None,
            })

        return {"forecast": entries}

    def _with_provider_elevation(self, location: Location, fetched: FetchedWeather) -> Location:
        if location.elevation is not None or fetched.elevation is None:
            return location
        self.logger.debug(f"Using provider elevation {fetched.elevation:.0f} m")
        return Location(
            latitude=location.latitude,
            longitude=location.longitude,
            elevation=fetched.elevation,
            coastal=location.coastal
        )

    def _build_manual_weather(
        self,
        target_date: date,
        weather_inputs: Dict[str, Any]
    ) -> WeatherObservation:
        values = {key: value for key, value in weather_inputs.items() if value is not None}
        missing = [name for name in REQUIRED_WEATHER_FIELDS if name not in values]
        if missing:
            raise InvalidInputError(
                f"Missing required weather inputs: {', '.join(missing)}",
                component="app"
            )
        return WeatherObservation(date=target_date, **values)

    def close(self) -> None:
        """Release the provider session."""
        if self.api_client:
            self.api_client.close()


def main():
    """Main entry point."""
    import argparse

    parser = argparse.ArgumentParser(
        description="Vineyard ETc and irrigation advisor (FAO-56 Penman-Monteith)"
    )
    parser.add_argument("--config", type=str, default=None, help="Path to configuration file")
    parser.add_argument(
        "--date", type=str, default=None,
        help="Target date (YYYY-MM-DD). Default: today in the farm timezone"
    )
    parser.add_argument(
        "--stage", type=str, default=None,
        help="Growth stage (dormant, budbreak, flowering, fruit_set, veraison, "
             "harvest, post_harvest). Default: guessed from the month"
    )

    weather = parser.add_argument_group("weather")
    weather.add_argument("--tmax", type=float, help="Maximum temperature (°C)")
    weather.add_argument("--tmin", type=float, help="Minimum temperature (°C)")
    weather.add_argument("--humidity", type=float, help="Mean relative humidity (%%)")
    weather.add_argument("--wind", type=float, help="Wind speed at 2 m (m/s)")
    weather.add_argument("--rain", type=float, help="Rainfall (mm)")
    radiation = weather.add_mutually_exclusive_group()
    radiation.add_argument("--solar", type=float, help="Solar radiation (MJ/m²/day)")
    radiation.add_argument("--lux", type=float, help="Daily mean illuminance (lux)")
    radiation.add_argument("--sunshine", type=float, help="Sunshine hours")

    site = parser.add_argument_group("site")
    site.add_argument("--lat", type=float, help="Latitude (decimal degrees)")
    site.add_argument("--lon", type=float, help="Longitude (decimal degrees)")
    site.add_argument("--elevation", type=float, help="Elevation (m)")
    site.add_argument("--coastal", action="store_true", help="Site is near the coast")
    site.add_argument("--method", type=str, help="Irrigation method (drip, sprinkler, surface)")
    site.add_argument("--soil", type=str, help="Soil type (sandy, loamy, clay)")
    site.add_argument("--area", type=float, help="Field area (m²)")

    parser.add_argument(
        "--fetch", action="store_true",
        help="Fetch weather from the provider; manual values override fetched ones"
    )
    parser.add_argument(
        "--reference-eto", type=float, default=None,
        help="External reference ETo (mm/day) to cross-validate against"
    )
    parser.add_argument(
        "--days", type=int, default=None,
        help="Advise for each day of an N-day provider forecast starting at --date (1-16)"
    )

    args = parser.parse_args()

    weather_inputs = {
        "temperature_max": args.tmax,
        "temperature_min": args.tmin,
        "relative_humidity": args.humidity,
        "wind_speed": args.wind,
        "rainfall": args.rain,
        "solar_radiation": args.solar,
        "solar_radiation_lux": args.lux,
        "sunshine_hours": args.sunshine,
    }

    if args.days is not None and (
        any(value is not None for value in weather_inputs.values())
        or args.reference_eto is not None
    ):
        parser.error("--days cannot be combined with manual weather values or --reference-eto")

    app = None
    try:
        app = IrrigationAdvisorApp(config_file=args.config)

        location = app.default_location()
        location = Location(
            latitude=args.lat if args.lat is not None else location.latitude,
            longitude=args.lon if args.lon is not None else location.longitude,
            elevation=args.elevation if args.elevation is not None else location.elevation,
            coastal=args.coastal or location.coastal
        )

        farm = app.default_farm()
        farm = FarmProfile(
            irrigation_method=args.method or farm.irrigation_method,
            soil_type=args.soil or farm.soil_type,
            field_area=args.area if args.area is not None else farm.field_area,
            discharge_rate=farm.discharge_rate
        )

        if args.days is not None:
            output = app.run_forecast(
                days=args.days,
                start_date=args.date,
                growth_stage=args.stage,
                location=location,
                farm=farm
            )
        else:
            output = app.run(
                weather_inputs=weather_inputs,
                target_date=args.date,
                growth_stage=args.stage,
                location=location,
                farm=farm,
                fetch=args.fetch,
                reference_eto=args.reference_eto
            )
    except (VineSightError, ValueError, FileNotFoundError) as e:
        print(f"Application failed: {e}", file=sys.stderr)
        sys.exit(1)
    finally:
        if app:
            app.close()

    print(json.dumps(output, indent=2, ensure_ascii=False))


if __name__ == "__main__":
    main()
