"""
Tests for irrigation need, duration and advisory notes.
"""

from dataclasses import replace

import pytest  # type: ignore

from vinesight_etc.algorithms import IrrigationNeedCalculator
from vinesight_etc.core.exceptions import ConfigurationError
from vinesight_etc.models import (
    GrowthStage,
    IrrigationMethod,
    SoilType,
    FarmProfile,
    Confidence,
    InputIssue,
)


class TestIrrigationNeed:
    """Test cases for ETc and net irrigation need."""

    def test_etc(self):
        assert IrrigationNeedCalculator.calculate_etc(6.0, 0.95) == pytest.approx(5.7)

    @pytest.mark.parametrize("etc,rainfall,expected", [
        (5.7, 0.0, 5.7),
        (5.7, 2.0, 3.7),
        (5.7, 50.0, 0.0),
        (5.7, -3.0, 5.7),
    ])
    def test_irrigation_need(self, etc, rainfall, expected):
        need = IrrigationNeedCalculator.calculate_irrigation_need(etc, rainfall)
        assert need == pytest.approx(expected)

    def test_rainfall_never_increases_need(self):
        previous = None
        for rainfall in [0.0, 1.0, 2.5, 5.0, 10.0, 50.0]:
            need = IrrigationNeedCalculator.calculate_irrigation_need(5.0, rainfall)
            if previous is not None:
                assert need <= previous
            previous = need


class TestDuration:
    """Test cases for the depth to run-time conversion."""

    @pytest.fixture
    def calculator(self):
        return IrrigationNeedCalculator()

    def test_drip_one_hectare(self, calculator):
        """5 mm net at 90% over 1 ha is 55 556 L, 5.56 h at 10 000 L/h."""
        farm = FarmProfile()
        assert calculator.calculate_volume(5.0, farm) == pytest.approx(55555.56, abs=0.01)
        assert calculator.calculate_duration(5.0, farm) == pytest.approx(5.5556, abs=1e-4)

    def test_sprinkler(self, calculator):
        farm = FarmProfile(irrigation_method=IrrigationMethod.SPRINKLER)
        assert calculator.calculate_duration(5.0, farm) == pytest.approx(5.0 / 0.75 * 10000 / 40000)

    def test_duration_proportional_to_need(self, calculator):
        farm = FarmProfile()
        assert calculator.calculate_duration(6.0, farm) == pytest.approx(
            2 * calculator.calculate_duration(3.0, farm)
        )

    def test_duration_inverse_to_discharge(self, calculator):
        slow = FarmProfile(discharge_rate=5000.0)
        fast = FarmProfile(discharge_rate=20000.0)
        assert calculator.calculate_duration(4.0, slow) == pytest.approx(
            4 * calculator.calculate_duration(4.0, fast)
        )

    def test_custom_rates(self):
        calculator = IrrigationNeedCalculator(
            discharge_rates={"drip": 20000.0},
            application_efficiency={"drip": 1.0}
        )
        assert calculator.calculate_duration(2.0, FarmProfile()) == pytest.approx(1.0)

    @pytest.mark.parametrize("farm", [
        FarmProfile(discharge_rate=0.0),
        FarmProfile(discharge_rate=-10.0),
        FarmProfile(field_area=0.0),
    ])
    def test_invalid_farm_rejected(self, calculator, farm):
        with pytest.raises(ConfigurationError):
            calculator.calculate_duration(5.0, farm)

    def test_missing_method_rate_rejected(self):
        calculator = IrrigationNeedCalculator(discharge_rates={"drip": 10000.0})
        farm = FarmProfile(irrigation_method=IrrigationMethod.SURFACE)
        with pytest.raises(ConfigurationError):
            calculator.calculate_duration(5.0, farm)

    def test_unknown_method_rejected(self, calculator):
        with pytest.raises(ConfigurationError):
            calculator.calculate_duration(5.0, FarmProfile(irrigation_method="flood"))


class TestRecommendation:
    """Test cases for the advisory recommendation."""

    @pytest.fixture
    def calculator(self):
        return IrrigationNeedCalculator()

    def test_irrigate(self, calculator, hot_day):
        rec = calculator.recommend(5.0, 6.0, GrowthStage.FRUIT_SET, hot_day)

        assert rec.should_irrigate is True
        assert rec.duration == 5.56
        assert rec.water_volume == 55555.6
        assert rec.cycles == 1
        assert rec.frequency == "daily"
        assert rec.notes[0] == "Critical growth stage - maintain consistent moisture"

    def test_rain_covered_demand(self, calculator, hot_day):
        weather = replace(hot_day, rainfall=50.0)
        rec = calculator.recommend(0.0, 6.0, GrowthStage.FRUIT_SET, weather)

        assert rec.should_irrigate is False
        assert rec.duration == 0.0
        assert rec.water_volume == 0.0
        assert rec.cycles == 0
        assert rec.frequency == "as needed"
        assert rec.notes[0] == "No irrigation needed - rainfall exceeded crop demand"

    def test_negligible_need_rounds_to_zero(self, calculator, hot_day):
        rec = calculator.recommend(0.004, 0.5, GrowthStage.DORMANT, hot_day)

        assert rec.should_irrigate is False
        assert rec.notes[0] == "No irrigation needed - crop water demand is negligible"

    def test_sandy_soil(self, calculator, hot_day):
        farm = FarmProfile(soil_type=SoilType.SANDY)
        rec = calculator.recommend(2.0, 5.0, GrowthStage.FRUIT_SET, hot_day, farm=farm)

        assert rec.cycles == 2
        assert rec.frequency == "every 2 days, split into shorter, more frequent cycles"
        assert "Sandy soil - use shorter, more frequent irrigation cycles" in rec.notes

    def test_clay_soil(self, calculator, hot_day):
        farm = FarmProfile(soil_type=SoilType.CLAY)
        rec = calculator.recommend(2.0, 5.0, GrowthStage.VERAISON, hot_day, farm=farm)

        assert rec.cycles == 1
        assert rec.frequency == "every 3 days, as fewer, longer cycles"
        assert "Clay soil - use longer, less frequent irrigation cycles" in rec.notes

    def test_soil_never_changes_depth(self, calculator, hot_day):
        sandy = calculator.recommend(
            3.0, 5.0, GrowthStage.FLOWERING, hot_day, farm=FarmProfile(soil_type=SoilType.SANDY)
        )
        clay = calculator.recommend(
            3.0, 5.0, GrowthStage.FLOWERING, hot_day, farm=FarmProfile(soil_type=SoilType.CLAY)
        )
        assert sandy.water_volume == clay.water_volume

    def test_weather_notes(self, calculator, hot_day):
        weather = replace(hot_day, relative_humidity=85.0, wind_speed=6.0)
        farm = FarmProfile(irrigation_method=IrrigationMethod.SPRINKLER)
        rec = calculator.recommend(5.0, 7.5, GrowthStage.BUDBREAK, weather, farm=farm)

        assert rec.notes == (
            "High evapotranspiration day - monitor soil moisture",
            "High humidity - monitor for disease risk",
            "Windy conditions - expect sprinkler drift, prefer calm hours",
        )

    def test_configurable_high_eto_threshold(self, hot_day):
        calculator = IrrigationNeedCalculator(high_eto_threshold=5.0)
        rec = calculator.recommend(2.0, 6.0, GrowthStage.BUDBREAK, hot_day)
        assert "High evapotranspiration day - monitor soil moisture" in rec.notes

    def test_low_confidence_and_issue_notes(self, calculator, hot_day):
        issue = InputIssue(
            field="relative_humidity", original=104.0, adjusted=100.0,
            message="relative_humidity 104.0 is out of range; clamped to 100.0"
        )
        rec = calculator.recommend(
            2.0, 5.0, GrowthStage.BUDBREAK, hot_day,
            confidence=Confidence.LOW, issues=(issue,)
        )

        assert rec.notes[-2].startswith("Low confidence estimate")
        assert rec.notes[-1] == f"Input adjusted - {issue.message}"

    def test_invalid_discharge_rejected_without_irrigation(self, calculator, hot_day):
        with pytest.raises(ConfigurationError):
            calculator.recommend(
                0.0, 1.0, GrowthStage.DORMANT, hot_day, farm=FarmProfile(discharge_rate=0.0)
            )

    def test_deterministic(self, calculator, hot_day):
        first = calculator.recommend(4.2, 6.1, GrowthStage.VERAISON, hot_day)
        second = calculator.recommend(4.2, 6.1, GrowthStage.VERAISON, hot_day)
        assert first == second
