import logging
import math
from datetime import date
from io import BytesIO
from pathlib import Path
from typing import List, NamedTuple, Optional, Tuple, Union

from modules.estimator.schemas import CostResults, CostSettings, JobInput

logger = logging.getLogger(__name__)

DELIMITER = ";"
DIVIDER = "---"
HEADER = ("Detalhe", "Valor")
ENCODING = "utf-8"
MIME_TYPE = "text/csv"


class ReportRow(NamedTuple):
    label: str
    value: Union[float, str]
    currency: bool = False


def _format_number(value: float) -> str:
    """Default numeric text with the decimal point swapped for a comma."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value.is_integer():
        return str(int(value))
    return repr(value).replace(".", ",")


def format_currency(value: float, symbol: str = "R$") -> str:
    """On-screen currency text, e.g. "R$ 1.234,56". Never used in the exported file."""
    text = f"{value:,.2f}".replace(",", "X").replace(".", ",").replace("X", ".")
    return f"{symbol} {text}"


def build_rows(settings: CostSettings, job_input: JobInput, results: CostResults) -> List[ReportRow]:
    return [
        ReportRow("Custo do Material (R$/kg)", settings.material_cost_per_kg, True),
        ReportRow("Taxa Horária (R$/h)", settings.hourly_rate, True),
        ReportRow("Custo da Energia (R$/kWh)", settings.power_cost_per_kwh, True),
        ReportRow("Potência da Impressora (W)", settings.printer_power_watts),
        ReportRow("Markup (%)", settings.markup_percent),
        ReportRow("Duração da Impressão (Horas)", job_input.print_duration_hours),
        ReportRow("Peso do Filamento (Gramas)", job_input.filament_weight_grams),
        ReportRow(DIVIDER, DIVIDER),
        ReportRow("Custo Total Material (R$)", results.material_cost_total, True),
        ReportRow("Custo Total Energia (R$)", results.power_cost_total, True),
        ReportRow("Custo Total Tempo Impressora (R$)", results.time_cost_total, True),
        ReportRow("Custo Total Produção (R$)", results.total_cost, True),
        ReportRow(DIVIDER, DIVIDER),
        ReportRow("Preço de Venda Sugerido (R$)", results.selling_price, True),
        ReportRow("Lucro Estimado (R$)", results.profit, True),
    ]


def to_report(
    settings: CostSettings,
    job_input: JobInput,
    results: CostResults,
    currency_symbol: str = "R$",
) -> str:
    """Render the semicolon-delimited report, one ``label;value`` row per field."""
    lines = [DELIMITER.join(HEADER)]
    for row in build_rows(settings, job_input, results):
        if row.value == DIVIDER:
            value = DIVIDER
        else:
            value = _format_number(row.value)
            if row.currency and not math.isnan(row.value):
                value = f"{currency_symbol} {value}"
        lines.append(f"{row.label}{DELIMITER}{value}")
    return "\n".join(lines) + "\n"


def _parse_value(text: str, currency_symbol: str) -> float:
    if text.startswith(currency_symbol):
        text = text[len(currency_symbol):].strip()
    if text == "NaN":
        return math.nan
    if text in ("Infinity", "-Infinity"):
        return float(text.replace("Infinity", "inf"))
    return float(text.replace(",", "."))


def parse_report(text: str, currency_symbol: str = "R$") -> List[Tuple[str, float]]:
    """Read a report back into ordered ``(label, value)`` pairs, skipping header and dividers."""
    pairs: List[Tuple[str, float]] = []
    for line in text.splitlines():
        if not line.strip():
            continue
        label, _, raw = line.partition(DELIMITER)
        if (label, raw) == HEADER or label == DIVIDER:
            continue
        pairs.append((label, _parse_value(raw, currency_symbol)))
    return pairs


def report_filename(on_date: Optional[date] = None) -> str:
    on_date = on_date or date.today()
    return f"report_{on_date.isoformat()}.csv"


def build_report_stream(text: str) -> BytesIO:
    stream = BytesIO(text.encode(ENCODING))
    stream.seek(0)
    return stream


def save_report(text: str, directory: Path, on_date: Optional[date] = None) -> Path:
    directory = Path(directory)
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / report_filename(on_date)
    with path.open("w", encoding=ENCODING, newline="") as handle:
        handle.write(text)
    logger.info("report saved to %s", path)
    return path
