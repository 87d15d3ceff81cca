import math
import pathlib
import sys

ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import pytest

from core.errors import InvalidTransition, ValidationAppException
from core.settings import Settings
from modules.estimator.schemas import CostSettings, JobInput
from modules.estimator.service import Estimator, compute_results, parse_number
from modules.estimator.types import NavEvent, ViewState


@pytest.fixture
def estimator():
    return Estimator(app_settings=Settings())


def test_default_results(estimator):
    results = estimator.results

    assert results.material_cost_total == pytest.approx(5.5)
    assert results.power_cost_total == pytest.approx(0.7938)
    assert results.time_cost_total == pytest.approx(22.5)
    assert results.total_cost == pytest.approx(28.7938)
    assert results.selling_price == pytest.approx(43.1907)
    assert results.profit == pytest.approx(14.3969)


@pytest.mark.parametrize(
    "settings_kwargs, input_kwargs",
    [
        ({}, {}),
        ({"material_cost_per_kg": 0.0, "hourly_rate": 12.75}, {"print_duration_hours": 10.0}),
        ({"power_cost_per_kwh": 1.2, "printer_power_watts": 1500}, {"filament_weight_grams": 1234.5}),
        ({"markup_percent": 0.0}, {"print_duration_hours": 0.25, "filament_weight_grams": 3.0}),
        ({"markup_percent": 333.3, "material_cost_per_kg": 250.0}, {"print_duration_hours": 72.0}),
    ],
)
def test_totals_and_profit_are_consistent(settings_kwargs, input_kwargs):
    results = compute_results(CostSettings(**settings_kwargs), JobInput(**input_kwargs))

    parts = results.material_cost_total + results.power_cost_total + results.time_cost_total
    assert results.total_cost == pytest.approx(parts)
    assert results.selling_price - results.total_cost == pytest.approx(results.profit)


def test_zero_job_costs_nothing():
    results = compute_results(
        CostSettings(markup_percent=250.0),
        JobInput(print_duration_hours=0, filament_weight_grams=0),
    )

    assert results.total_cost == 0
    assert results.selling_price == 0
    assert results.profit == 0


def test_full_markup_doubles_cost():
    job = JobInput()
    no_markup = compute_results(CostSettings(markup_percent=0), job)
    full_markup = compute_results(CostSettings(markup_percent=100), job)

    assert no_markup.selling_price == pytest.approx(no_markup.total_cost)
    assert full_markup.selling_price == pytest.approx(2 * full_markup.total_cost)


def test_print_speed_does_not_affect_cost():
    job = JobInput()
    slow = compute_results(CostSettings(print_speed=10), job)
    fast = compute_results(CostSettings(print_speed=500), job)

    assert slow == fast


def test_results_follow_setters(estimator):
    estimator.set_setting("material_cost_per_kg", "200")
    estimator.set_input("filament_weight_grams", 100)

    assert estimator.results.material_cost_total == pytest.approx(20.0)

    estimator.set_input("print_duration_hours", 0)
    assert estimator.results.time_cost_total == 0
    assert estimator.results.power_cost_total == 0


def test_setters_replace_records(estimator):
    before = estimator.settings
    after = estimator.set_setting("hourly_rate", 8)

    assert before.hourly_rate == 5.0
    assert after.hourly_rate == 8.0
    assert estimator.settings is after


@pytest.mark.parametrize("raw", ["abc", "", "   ", None, "1,5"])
def test_unparseable_input_becomes_nan(raw):
    assert math.isnan(parse_number(raw))


def test_parse_number_accepts_numbers_and_text():
    assert parse_number(3) == 3.0
    assert parse_number(" 4.25 ") == 4.25
    assert parse_number(0.588) == 0.588


def test_nan_propagates_without_error(estimator):
    estimator.set_input("filament_weight_grams", "not a number")
    results = estimator.results

    assert math.isnan(results.material_cost_total)
    assert math.isnan(results.total_cost)
    assert math.isnan(results.selling_price)
    assert math.isnan(results.profit)
    assert results.time_cost_total == pytest.approx(22.5)


def test_unknown_field_is_rejected(estimator):
    with pytest.raises(ValidationAppException):
        estimator.set_setting("filament_weight_grams", 10)
    with pytest.raises(ValidationAppException):
        estimator.set_input("markup", 10)


def test_validation_rejects_nan_and_negatives():
    estimator = Estimator(app_settings=Settings(validate_inputs=True))

    with pytest.raises(ValidationAppException):
        estimator.set_setting("hourly_rate", "x")
    with pytest.raises(ValidationAppException):
        estimator.set_input("print_duration_hours", -1)

    assert estimator.settings.hourly_rate == 5.0
    assert estimator.job_input.print_duration_hours == 4.5


def test_reset_restores_defaults_and_view(estimator):
    estimator.set_setting("material_cost_per_kg", 80)
    estimator.set_setting("print_speed", 120)
    estimator.set_input("print_duration_hours", 12)
    estimator.navigate(ViewState.RESULTS)

    estimator.reset()

    assert estimator.settings == CostSettings()
    assert estimator.settings.print_speed == 50
    assert estimator.job_input == JobInput()
    assert estimator.view == ViewState.SETTINGS
    assert estimator.results.total_cost == pytest.approx(28.7938)


def test_initial_view_is_settings(estimator):
    assert estimator.view == ViewState.SETTINGS


def test_navigation_cycle_keeps_values(estimator):
    estimator.set_setting("markup_percent", 75)
    estimator.set_input("filament_weight_grams", 120)
    settings_before, input_before = estimator.settings, estimator.job_input

    assert estimator.dispatch(NavEvent.NEXT) == ViewState.INPUT
    assert estimator.dispatch(NavEvent.CALCULATE) == ViewState.RESULTS
    assert estimator.dispatch(NavEvent.BACK) == ViewState.INPUT
    assert estimator.dispatch(NavEvent.BACK) == ViewState.SETTINGS

    assert estimator.settings == settings_before
    assert estimator.job_input == input_before


def test_export_keeps_results_view(estimator):
    estimator.navigate(ViewState.RESULTS)

    assert estimator.dispatch(NavEvent.EXPORT) == ViewState.RESULTS


@pytest.mark.parametrize("view", list(ViewState))
def test_reset_event_from_any_view(estimator, view):
    estimator.set_input("print_duration_hours", 1)
    estimator.navigate(view)

    assert estimator.dispatch(NavEvent.RESET) == ViewState.SETTINGS
    assert estimator.job_input.print_duration_hours == 4.5


@pytest.mark.parametrize(
    "view, event",
    [
        (ViewState.SETTINGS, NavEvent.CALCULATE),
        (ViewState.SETTINGS, NavEvent.BACK),
        (ViewState.SETTINGS, NavEvent.EXPORT),
        (ViewState.INPUT, NavEvent.NEXT),
        (ViewState.INPUT, NavEvent.EXPORT),
        (ViewState.RESULTS, NavEvent.NEXT),
    ],
)
def test_unknown_transition_raises(estimator, view, event):
    estimator.navigate(view)

    with pytest.raises(InvalidTransition):
        estimator.dispatch(event)
    assert estimator.view == view


def test_navigate_is_unguarded(estimator):
    estimator.set_input("filament_weight_grams", "garbage")

    assert estimator.navigate(ViewState.RESULTS) == ViewState.RESULTS
    assert math.isnan(estimator.results.total_cost)
