"""Application settings and shared constants."""

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    app_name: str = "Calculadora de Custo de Impressão 3D"
    currency_symbol: str = "R$"
    # When set, every export also writes the report file into this directory.
    export_dir: Optional[Path] = None
    log_level: str = "INFO"
    validate_inputs: bool = False

    @field_validator("currency_symbol")
    @classmethod
    def validate_currency_symbol(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("currency_symbol must not be empty")
        return v.strip()

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        return v.upper()


def per_kg_to_per_gram(value_per_kg: float) -> float:
    return value_per_kg / 1000.0


def watts_to_kw(value_w: float) -> float:
    return value_w / 1000.0


@lru_cache
def get_settings() -> Settings:
    return Settings()
