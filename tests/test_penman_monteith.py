"""
Tests for the FAO-56 Penman-Monteith reference ET engine.

Reference values come from the worked examples in FAO Irrigation and
Drainage Paper 56 (Allen et al., 1998).
"""

from dataclasses import replace
from datetime import date, timedelta

import pytest  # type: ignore

from vinesight_etc.algorithms import PenmanMonteithCalculator
from vinesight_etc.core.exceptions import InvalidInputError
from vinesight_etc.models import (
    WeatherObservation,
    Location,
    Confidence,
    RadiationSource,
)
from vinesight_etc.processing import UnitConverter


class TestPenmanMonteithBasicComponents:
    """Test cases for the individual FAO-56 equations."""

    def test_saturation_vapor_pressure(self):
        """FAO-56 Table 2.3: e°(20°C) = 2.338 kPa."""
        es_20 = PenmanMonteithCalculator._calculate_saturation_vapor_pressure(20.0)
        assert abs(es_20 - 2.338) < 0.001, f"e°(20°C) should be 2.338 kPa, got {es_20:.4f}"

    def test_vapor_pressures(self):
        """Mean saturation, actual vapor pressure and deficit from mean RH."""
        es, ea, vpd = PenmanMonteithCalculator._calculate_vapor_pressures(
            t_max=21.5, t_min=12.3, relative_humidity=70.5
        )

        assert abs(es - 1.997) < 0.002, f"es mismatch: expected 1.997, got {es:.4f}"
        assert abs(ea - 1.408) < 0.002, f"ea mismatch: expected 1.408, got {ea:.4f}"
        assert abs(vpd - (es - ea)) < 1e-9, "VPD should equal es - ea"

    def test_vapor_pressure_deficit_never_negative(self):
        """Saturated air gives zero deficit, not a negative one."""
        _, _, vpd = PenmanMonteithCalculator._calculate_vapor_pressures(
            t_max=20.0, t_min=15.0, relative_humidity=100.0
        )
        assert vpd == 0.0

    def test_atmospheric_pressure(self):
        """FAO-56 Example 2: 1800 m gives P = 81.8 kPa."""
        pressure = PenmanMonteithCalculator._calculate_atmospheric_pressure(1800.0)
        assert abs(pressure - 81.8) < 0.1, f"Pressure should be 81.8 kPa, got {pressure:.2f}"

    def test_psychrometric_constant(self):
        """FAO-56 Example 2: P = 81.8 kPa gives γ = 0.054 kPa/°C."""
        gamma = PenmanMonteithCalculator._calculate_psychrometric_constant(81.8)
        assert abs(gamma - 0.054) < 0.001, f"γ should be 0.054, got {gamma:.4f}"

    def test_slope_vapor_pressure_curve(self):
        """FAO-56 Table 2.4: Δ(25°C) = 0.189 kPa/°C."""
        delta = PenmanMonteithCalculator._calculate_slope_vapor_pressure_curve(25.0)
        assert abs(delta - 0.189) < 0.001, f"Δ should be 0.189, got {delta:.4f}"

    def test_wind_speed_adjustment(self):
        """FAO-56 Example 14: 3.2 m/s at 10 m is 2.4 m/s at 2 m."""
        u2 = PenmanMonteithCalculator._adjust_wind_speed(3.2, 10.0)
        assert abs(u2 - 2.4) < 0.02, f"u2 should be 2.4 m/s, got {u2:.3f}"

    def test_wind_speed_at_two_meters_unchanged(self):
        """Wind measured at 2 m passes through."""
        assert PenmanMonteithCalculator._adjust_wind_speed(2.5, 2.0) == 2.5

    def test_net_radiation(self):
        """FAO-56 Example 11: Rns = 11.1, Rnl = 3.5, Rn = 7.6 MJ/m²/day."""
        calculator = PenmanMonteithCalculator()
        rns, rnl, rn = calculator._calculate_net_radiation(
            rs=14.5, rso=18.8, t_max=25.1, t_min=19.1, ea=2.1
        )

        assert abs(rns - 11.1) < 0.1, f"Rns should be 11.1, got {rns:.2f}"
        assert abs(rnl - 3.5) < 0.1, f"Rnl should be 3.5, got {rnl:.2f}"
        assert abs(rn - 7.6) < 0.1, f"Rn should be 7.6, got {rn:.2f}"
        assert abs(rn - (rns - rnl)) < 1e-9, "Rn should equal Rns - Rnl"


class TestPenmanMonteithCalculator:
    """Test cases for the full daily ETo calculation."""

    @pytest.fixture
    def calculator(self):
        """Create calculator instance."""
        return PenmanMonteithCalculator()

    @pytest.fixture
    def brussels(self):
        """FAO-56 Examples 17/18: Brussels, 6 July."""
        weather = WeatherObservation(
            date=date(2023, 7, 6),
            temperature_max=21.5,
            temperature_min=12.3,
            relative_humidity=70.5,
            wind_speed=2.778,
            wind_height=10.0,
            sunshine_hours=9.25
        )
        location = Location(latitude=50.8, longitude=4.35, elevation=100.0)
        return weather, location

    def test_fao56_brussels_example(self, calculator, brussels):
        """FAO-56 Example 18 gives ETo = 3.9 mm/day."""
        weather, location = brussels
        components = calculator.calculate_with_components(weather, location)

        assert abs(components.ra - 41.09) < 0.1, f"Ra mismatch: got {components.ra:.2f}"
        assert abs(components.daylight_hours - 16.1) < 0.1
        assert abs(components.rs - 22.07) < 0.2, f"Rs mismatch: got {components.rs:.2f}"
        assert abs(components.u2 - 2.078) < 0.01
        assert abs(components.eto - 3.9) < 0.2, f"ETo should be ~3.9, got {components.eto:.2f}"
        assert components.radiation_source is RadiationSource.SUNSHINE
        assert components.confidence is Confidence.MEDIUM

    def test_components_sum_to_eto(self, calculator, hot_day, farm_location):
        """Radiation and aerodynamic terms add up to ETo."""
        components = calculator.calculate_with_components(hot_day, farm_location)

        assert components.eto > 0
        assert components.radiation_term > 0
        assert components.aerodynamic_term > 0
        assert abs(components.eto - (components.radiation_term + components.aerodynamic_term)) < 1e-9
        assert abs(components.rn - (components.rns - components.rnl)) < 1e-9

    def test_calculate_eto_matches_components(self, calculator, hot_day, farm_location):
        """calculate_eto returns the ETo of calculate_with_components."""
        eto = calculator.calculate_eto(hot_day, farm_location)
        assert eto == calculator.calculate_with_components(hot_day, farm_location).eto

    def test_default_location(self, calculator, hot_day, farm_location):
        """Omitted location uses the default site at 500 m."""
        default_eto = calculator.calculate_eto(hot_day)
        explicit_eto = calculator.calculate_eto(hot_day, farm_location)
        assert default_eto == explicit_eto

    def test_confidence_ordering(self, calculator, hot_day, farm_location):
        """Measured radiation is high, sunshine medium, nothing low."""
        measured = calculator.calculate_with_components(hot_day, farm_location)
        sunshine = calculator.calculate_with_components(
            replace(hot_day, solar_radiation=None, sunshine_hours=9.0), farm_location
        )
        estimated = calculator.calculate_with_components(
            replace(hot_day, solar_radiation=None), farm_location
        )

        assert measured.confidence is Confidence.HIGH
        assert sunshine.confidence is Confidence.MEDIUM
        assert estimated.confidence is Confidence.LOW
        assert estimated.radiation_source is RadiationSource.TEMPERATURE

    def test_lux_round_trip(self, calculator, hot_day, farm_location):
        """Lux converted to MJ gives the same ETo as the MJ value itself."""
        lux = UnitConverter.mj_per_day_to_lux(hot_day.solar_radiation)
        from_lux = calculator.calculate_with_components(
            replace(hot_day, solar_radiation=None, solar_radiation_lux=lux), farm_location
        )
        direct = calculator.calculate_with_components(hot_day, farm_location)

        assert abs(from_lux.eto - direct.eto) < 1e-6
        assert from_lux.confidence is Confidence.HIGH
        assert from_lux.radiation_source is RadiationSource.LUX

    def test_measured_radiation_takes_priority(self, calculator, hot_day, farm_location):
        """Measured radiation wins over lux and sunshine."""
        weather = replace(hot_day, solar_radiation_lux=1000.0, sunshine_hours=1.0)
        components = calculator.calculate_with_components(weather, farm_location)
        assert components.radiation_source is RadiationSource.MEASURED
        assert components.rs == hot_day.solar_radiation

    @pytest.mark.parametrize("solar_radiation", [25.5, None])
    def test_monotonic_in_max_temperature(self, calculator, hot_day, farm_location, solar_radiation):
        """Raising Tmax never lowers ETo."""
        previous = None
        for t_max in [24.0, 27.0, 30.0, 33.0, 36.0, 39.0, 42.0]:
            weather = replace(hot_day, temperature_max=t_max, solar_radiation=solar_radiation)
            eto = calculator.calculate_eto(weather, farm_location)
            if previous is not None:
                assert eto >= previous, f"ETo decreased at Tmax={t_max}: {previous:.3f} -> {eto:.3f}"
            previous = eto

    @pytest.mark.parametrize("radiation", [
        {"solar_radiation": 4.0},
        {"solar_radiation_lux": UnitConverter.mj_per_day_to_lux(4.0)},
        {"sunshine_hours": 2.0},
        {},
    ])
    @pytest.mark.parametrize("wind_speed", [0.0, 0.5])
    def test_monotonic_on_calm_humid_winter_day(self, calculator, radiation, wind_speed):
        """Raising Tmax never lowers ETo on a cold, calm, humid mid-latitude day."""
        location = Location(latitude=45.0)
        previous = None
        for t_max in [12.0, 13.0, 14.0, 15.0, 16.0]:
            weather = WeatherObservation(
                date=date(2024, 1, 15),
                temperature_max=t_max,
                temperature_min=10.0,
                relative_humidity=90.0,
                wind_speed=wind_speed,
                **radiation
            )
            eto = calculator.calculate_eto(weather, location)
            if previous is not None:
                assert eto >= previous, f"ETo decreased at Tmax={t_max}: {previous:.4f} -> {eto:.4f}"
            previous = eto

    def test_temperature_only_uses_hargreaves_equation(self, calculator):
        """Without radiation input ETo follows FAO-56 eq. 52."""
        weather = WeatherObservation(
            date=date(2024, 1, 15),
            temperature_max=16.0,
            temperature_min=10.0,
            relative_humidity=90.0,
            wind_speed=0.0
        )
        components = calculator.calculate_with_components(weather, Location(latitude=45.0))

        expected = 0.0023 * (13.0 + 17.8) * 6.0 ** 0.5 * 0.408 * components.ra
        assert components.radiation_source is RadiationSource.TEMPERATURE
        assert components.eto == pytest.approx(expected)
        assert components.aerodynamic_term == 0.0

    def test_temperature_only_not_negative_in_frost(self, calculator):
        weather = WeatherObservation(
            date=date(2024, 1, 15),
            temperature_max=-25.0,
            temperature_min=-35.0,
            relative_humidity=80.0,
            wind_speed=1.0
        )
        assert calculator.calculate_eto(weather, Location(latitude=60.0)) == 0.0

    def test_idempotent(self, calculator, hot_day, farm_location):
        """Identical inputs give identical components."""
        first = calculator.calculate_with_components(hot_day, farm_location)
        second = calculator.calculate_with_components(hot_day, farm_location)
        assert first == second

    def test_non_negative_in_cold_humid_conditions(self, calculator, farm_location):
        """ETo is clamped at zero."""
        weather = WeatherObservation(
            date=date(2024, 1, 10),
            temperature_max=-5.0,
            temperature_min=-12.0,
            relative_humidity=100.0,
            wind_speed=0.0,
            solar_radiation=0.5
        )
        assert calculator.calculate_eto(weather, farm_location) >= 0.0

    @pytest.mark.parametrize("latitude,day", [(89.0, 172), (-89.0, 172), (75.0, 355)])
    def test_polar_latitudes(self, calculator, hot_day, latitude, day):
        """Polar day and night do not fail."""
        weather = replace(
            hot_day,
            date=date(2023, 1, 1) + timedelta(days=day - 1),
            solar_radiation=None,
            sunshine_hours=5.0
        )
        components = calculator.calculate_with_components(weather, Location(latitude=latitude))
        assert components.eto >= 0.0
        assert 0.0 <= components.daylight_hours <= 24.0


class TestInputClamping:
    """Test cases for soft input handling and strict mode."""

    @pytest.fixture
    def calculator(self):
        return PenmanMonteithCalculator()

    def test_swapped_temperatures(self, calculator, hot_day, farm_location):
        """Tmax below Tmin is swapped and lowers confidence one tier."""
        swapped = replace(hot_day, temperature_max=22.0, temperature_min=35.0)
        components = calculator.calculate_with_components(swapped, farm_location)
        reference = calculator.calculate_with_components(hot_day, farm_location)

        assert abs(components.eto - reference.eto) < 1e-9
        assert components.confidence is Confidence.MEDIUM
        assert [issue.field for issue in components.issues] == ["temperature_max"]

    def test_humidity_clamped(self, calculator, hot_day, farm_location):
        """Humidity above 100% is clamped."""
        components = calculator.calculate_with_components(
            replace(hot_day, relative_humidity=104.0), farm_location
        )
        saturated = calculator.calculate_with_components(
            replace(hot_day, relative_humidity=100.0), farm_location
        )

        assert components.eto == saturated.eto
        assert components.issues[0].adjusted == 100.0
        assert components.confidence is Confidence.MEDIUM

    def test_negative_wind_clamped(self, calculator, hot_day, farm_location):
        """Negative wind is treated as calm."""
        components = calculator.calculate_with_components(
            replace(hot_day, wind_speed=-3.0), farm_location
        )
        assert components.u2 == 0.0
        assert components.eto > 0.0

    def test_latitude_clamped(self, calculator, hot_day):
        """Latitude outside ±90 is clamped."""
        components = calculator.calculate_with_components(hot_day, Location(latitude=95.0))
        assert components.issues[0].field == "latitude"
        assert components.issues[0].adjusted == 90.0

    def test_confidence_never_below_low(self, calculator, hot_day, farm_location):
        """Clamping a low-confidence estimate keeps it low."""
        weather = replace(hot_day, solar_radiation=None, relative_humidity=110.0)
        components = calculator.calculate_with_components(weather, farm_location)
        assert components.confidence is Confidence.LOW

    def test_strict_mode_rejects(self, hot_day, farm_location):
        """Strict mode raises InvalidInputError carrying the issues."""
        calculator = PenmanMonteithCalculator(strict=True)

        with pytest.raises(InvalidInputError) as exc_info:
            calculator.calculate_with_components(
                replace(hot_day, relative_humidity=150.0, wind_speed=-1.0), farm_location
            )

        fields = {issue.field for issue in exc_info.value.issues}
        assert fields == {"relative_humidity", "wind_speed"}

    def test_strict_mode_accepts_valid_input(self, hot_day, farm_location):
        """Strict mode does not affect valid input."""
        strict = PenmanMonteithCalculator(strict=True)
        assert strict.calculate_eto(hot_day, farm_location) == \
            PenmanMonteithCalculator().calculate_eto(hot_day, farm_location)
