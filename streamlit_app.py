import logging
from datetime import date

import streamlit as st

from core.errors import AppException
from core.log_config import configure_logging
from core.settings import get_settings
from modules.estimator.service import Estimator
from modules.estimator.types import NavEvent, ViewState
from modules.reports.csv_report import (
    DIVIDER,
    MIME_TYPE,
    build_report_stream,
    build_rows,
    format_currency,
    report_filename,
    save_report,
    to_report,
)
from ui import components as ui
from ui.texts_pt import (
    APP_TITLE,
    BTN_BACK,
    BTN_CALCULATE,
    BTN_EXPORT,
    BTN_NEW_CALCULATION,
    BTN_NEXT,
    BTN_RESET,
    LBL_DURATION,
    LBL_ENERGY,
    LBL_HOURLY_RATE,
    LBL_MARKUP,
    LBL_MATERIAL,
    LBL_MATERIAL_COST,
    LBL_POWER_COST,
    LBL_PRINTER_POWER,
    LBL_PRINTER_TIME,
    LBL_PROFIT,
    LBL_SELLING_PRICE,
    LBL_TOTAL_COST,
    LBL_WEIGHT,
    MSG_PRICE_BASIS,
    MSG_VIEW_ERROR,
    PAGE_INPUT,
    PAGE_RESULTS_COST,
    PAGE_RESULTS_PRICE,
    PAGE_SETTINGS,
)

settings = get_settings()
configure_logging(settings.log_level)
logger = logging.getLogger(__name__)

st.set_page_config(page_title=settings.app_name, layout="centered")

# (label, field, step)
SETTING_FIELDS = [
    (LBL_MATERIAL_COST, "material_cost_per_kg", 0.1),
    (LBL_HOURLY_RATE, "hourly_rate", 0.1),
    (LBL_POWER_COST, "power_cost_per_kwh", 0.01),
    (LBL_PRINTER_POWER, "printer_power_watts", 1.0),
    (LBL_MARKUP, "markup_percent", 1.0),
]
INPUT_FIELDS = [
    (LBL_DURATION, "print_duration_hours", 0.1),
    (LBL_WEIGHT, "filament_weight_grams", 1.0),
]


def get_estimator() -> Estimator:
    if "estimator" not in st.session_state:
        st.session_state["estimator"] = Estimator(app_settings=settings)
    return st.session_state["estimator"]


def _widget_key(field: str) -> str:
    return f"field_{field}"


def _clear_widgets():
    for _, field, _ in SETTING_FIELDS + INPUT_FIELDS:
        st.session_state.pop(_widget_key(field), None)


def _on_setting_change(key: str, field: str):
    _apply(get_estimator().set_setting, field, st.session_state[key])


def _on_input_change(key: str, field: str):
    _apply(get_estimator().set_input, field, st.session_state[key])


def _apply(setter, field: str, value):
    try:
        setter(field, value)
    except AppException as exc:
        st.session_state["flash_message"] = exc.message


def go(event: NavEvent):
    estimator = get_estimator()
    try:
        estimator.dispatch(event)
    except AppException as exc:
        ui.error(exc.message)
        return
    if event == NavEvent.RESET:
        _clear_widgets()
    st.rerun()


def render_settings_view(estimator: Estimator):
    st.subheader(f"⚙️ {PAGE_SETTINGS}")
    for label, field, step in SETTING_FIELDS:
        ui.number_field(
            label,
            _widget_key(field),
            getattr(estimator.settings, field),
            step,
            _on_setting_change,
            args=(field,),
        )

    cols = st.columns([2, 3])
    if cols[0].button(BTN_RESET, use_container_width=True, key="settings_reset"):
        go(NavEvent.RESET)
    if cols[1].button(BTN_NEXT, type="primary", use_container_width=True, key="settings_next"):
        go(NavEvent.NEXT)


def render_input_view(estimator: Estimator):
    st.subheader(f"🧮 {PAGE_INPUT}")
    for label, field, step in INPUT_FIELDS:
        ui.number_field(
            label,
            _widget_key(field),
            getattr(estimator.job_input, field),
            step,
            _on_input_change,
            args=(field,),
        )

    cols = st.columns([2, 3])
    if cols[0].button(BTN_BACK, use_container_width=True, key="input_back"):
        go(NavEvent.BACK)
    if cols[1].button(BTN_CALCULATE, type="primary", use_container_width=True, key="input_calculate"):
        go(NavEvent.CALCULATE)


def render_results_view(estimator: Estimator):
    cost_settings, job_input, results = estimator.snapshot()
    symbol = settings.currency_symbol

    st.subheader(f"⏱️ {PAGE_RESULTS_COST}")
    ui.headline(LBL_TOTAL_COST, format_currency(results.total_cost, symbol), muted=not results.total_cost > 0)
    ui.metric_row(
        [
            {"label": LBL_MATERIAL, "value": format_currency(results.material_cost_total, symbol)},
            {"label": LBL_ENERGY, "value": format_currency(results.power_cost_total, symbol)},
            {"label": LBL_PRINTER_TIME, "value": format_currency(results.time_cost_total, symbol)},
        ]
    )

    st.markdown("---")
    st.subheader(f"✅ {PAGE_RESULTS_PRICE}")
    st.write(
        MSG_PRICE_BASIS.format(
            total=format_currency(results.total_cost, symbol),
            markup=f"{cost_settings.markup_percent:g}",
        )
    )
    ui.headline(LBL_SELLING_PRICE, format_currency(results.selling_price, symbol), size="2rem")
    ui.headline(LBL_PROFIT, format_currency(results.profit, symbol), size="1.5rem")

    rows = [
        {"Detalhe": row.label, "Valor": row.value}
        for row in build_rows(cost_settings, job_input, results)
        if row.label != DIVIDER
    ]
    with st.expander("Detalhes"):
        ui.render_table("Resumo", rows, ["Detalhe", "Valor"])

    report = to_report(cost_settings, job_input, results, currency_symbol=symbol)
    exported = st.download_button(
        label=BTN_EXPORT,
        data=build_report_stream(report),
        file_name=report_filename(date.today()),
        mime=MIME_TYPE,
        type="primary",
        use_container_width=True,
        key="results_export",
    )
    if exported:
        estimator.dispatch(NavEvent.EXPORT)
        logger.info("report exported as %s", report_filename(date.today()))
        if settings.export_dir is not None:
            save_report(report, settings.export_dir, date.today())
    if st.button(BTN_NEW_CALCULATION, use_container_width=True, key="results_back"):
        go(NavEvent.BACK)


RENDERERS = {
    ViewState.SETTINGS: render_settings_view,
    ViewState.INPUT: render_input_view,
    ViewState.RESULTS: render_results_view,
}


def main():
    st.title(APP_TITLE)
    estimator = get_estimator()

    flash_msg = st.session_state.pop("flash_message", None)
    if flash_msg:
        ui.error(flash_msg)

    renderer = RENDERERS.get(estimator.view)
    if renderer is None:
        ui.error(MSG_VIEW_ERROR)
        return
    renderer(estimator)


if __name__ == "__main__":
    main()
