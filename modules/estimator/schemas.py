from pydantic import BaseModel, ConfigDict, Field

DEFAULT_MATERIAL_COST_PER_KG = 110.0
DEFAULT_PRINT_SPEED = 50.0
DEFAULT_HOURLY_RATE = 5.0
DEFAULT_POWER_COST_PER_KWH = 0.588
DEFAULT_PRINTER_POWER_WATTS = 300.0
DEFAULT_MARKUP_PERCENT = 50.0

DEFAULT_PRINT_DURATION_HOURS = 4.5
DEFAULT_FILAMENT_WEIGHT_GRAMS = 50.0


class CostSettings(BaseModel):
    model_config = ConfigDict(frozen=True)

    material_cost_per_kg: float = Field(DEFAULT_MATERIAL_COST_PER_KG, description="Custo do material (R$/kg)")
    # Kept for reset and display only; no cost depends on it.
    print_speed: float = Field(DEFAULT_PRINT_SPEED, description="Velocidade de impressão (mm/s)")
    hourly_rate: float = Field(DEFAULT_HOURLY_RATE, description="Taxa horária (R$/h)")
    power_cost_per_kwh: float = Field(DEFAULT_POWER_COST_PER_KWH, description="Custo da energia (R$/kWh)")
    printer_power_watts: float = Field(DEFAULT_PRINTER_POWER_WATTS, description="Potência da impressora (W)")
    markup_percent: float = Field(DEFAULT_MARKUP_PERCENT, description="Markup (%)")


class JobInput(BaseModel):
    model_config = ConfigDict(frozen=True)

    print_duration_hours: float = Field(DEFAULT_PRINT_DURATION_HOURS, description="Duração da impressão (horas)")
    filament_weight_grams: float = Field(DEFAULT_FILAMENT_WEIGHT_GRAMS, description="Peso do filamento (gramas)")


class CostResults(BaseModel):
    model_config = ConfigDict(frozen=True)

    material_cost_total: float
    power_cost_total: float
    time_cost_total: float
    total_cost: float
    selling_price: float
    profit: float
