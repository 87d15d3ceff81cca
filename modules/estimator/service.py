import logging
import math
from typing import Any, Dict, Optional, Tuple

from core.errors import InvalidTransition, ValidationAppException
from core.settings import Settings, get_settings, per_kg_to_per_gram, watts_to_kw
from modules.estimator.schemas import CostResults, CostSettings, JobInput
from modules.estimator.types import NavEvent, ViewState

logger = logging.getLogger(__name__)

# (current view, event) -> next view. RESET is accepted from every view.
TRANSITIONS: Dict[Tuple[ViewState, NavEvent], ViewState] = {
    (ViewState.SETTINGS, NavEvent.NEXT): ViewState.INPUT,
    (ViewState.INPUT, NavEvent.CALCULATE): ViewState.RESULTS,
    (ViewState.INPUT, NavEvent.BACK): ViewState.SETTINGS,
    (ViewState.RESULTS, NavEvent.BACK): ViewState.INPUT,
    (ViewState.RESULTS, NavEvent.EXPORT): ViewState.RESULTS,
}


def parse_number(value: Any) -> float:
    """Parse user input to a float; anything unparseable becomes NaN."""
    if isinstance(value, (int, float)):
        return float(value)
    if value is None:
        return math.nan
    text = str(value).strip()
    if not text:
        return math.nan
    try:
        return float(text)
    except ValueError:
        return math.nan


def compute_results(settings: CostSettings, job_input: JobInput) -> CostResults:
    material_cost_per_gram = per_kg_to_per_gram(settings.material_cost_per_kg)
    material_cost_total = job_input.filament_weight_grams * material_cost_per_gram

    printer_power_kw = watts_to_kw(settings.printer_power_watts)
    power_consumption_kwh = printer_power_kw * job_input.print_duration_hours
    power_cost_total = power_consumption_kwh * settings.power_cost_per_kwh

    time_cost_total = job_input.print_duration_hours * settings.hourly_rate

    total_cost = material_cost_total + power_cost_total + time_cost_total
    selling_price = total_cost * (1 + settings.markup_percent / 100)
    profit = selling_price - total_cost

    return CostResults(
        material_cost_total=material_cost_total,
        power_cost_total=power_cost_total,
        time_cost_total=time_cost_total,
        total_cost=total_cost,
        selling_price=selling_price,
        profit=profit,
    )


class Estimator:
    def __init__(self, app_settings: Optional[Settings] = None):
        self.app_settings = app_settings or get_settings()
        self.settings = CostSettings()
        self.job_input = JobInput()
        self.view = ViewState.SETTINGS

    @property
    def results(self) -> CostResults:
        return compute_results(self.settings, self.job_input)

    def snapshot(self) -> Tuple[CostSettings, JobInput, CostResults]:
        return self.settings, self.job_input, self.results

    def _checked_value(self, field: str, value: Any) -> float:
        number = parse_number(value)
        if self.app_settings.validate_inputs:
            if math.isnan(number):
                raise ValidationAppException(f"Valor numérico inválido para '{field}'")
            if number < 0:
                raise ValidationAppException(f"'{field}' não pode ser negativo")
        return number

    def set_setting(self, field: str, value: Any) -> CostSettings:
        if field not in CostSettings.model_fields:
            raise ValidationAppException(f"Configuração desconhecida: {field}")
        number = self._checked_value(field, value)
        self.settings = self.settings.model_copy(update={field: number})
        logger.debug("setting %s=%r", field, number)
        return self.settings

    def set_input(self, field: str, value: Any) -> JobInput:
        if field not in JobInput.model_fields:
            raise ValidationAppException(f"Dado de impressão desconhecido: {field}")
        number = self._checked_value(field, value)
        self.job_input = self.job_input.model_copy(update={field: number})
        logger.debug("input %s=%r", field, number)
        return self.job_input

    def reset(self) -> None:
        self.settings = CostSettings()
        self.job_input = JobInput()
        self.view = ViewState.SETTINGS
        logger.debug("estimator reset to defaults")

    def navigate(self, view: ViewState) -> ViewState:
        self.view = ViewState(view)
        return self.view

    def dispatch(self, event: NavEvent) -> ViewState:
        event = NavEvent(event)
        if event == NavEvent.RESET:
            self.reset()
            return self.view
        target = TRANSITIONS.get((self.view, event))
        if target is None:
            raise InvalidTransition(self.view.value, event.value)
        logger.debug("view %s --%s--> %s", self.view.value, event.value, target.value)
        return self.navigate(target)
