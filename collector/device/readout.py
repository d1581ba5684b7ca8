"""Validación de la respuesta de lectura del dispositivo.

Formato de la respuesta MWR: valores numéricos separados por comas,
terminados en CR, p.ej. "50.1,49.8,51.2\\r". Se asignan por posición a
los nombres de campo configurados.
"""

from __future__ import annotations

import math
from typing import Sequence

from pydantic import BaseModel, Field, field_validator


class ReadoutPayload(BaseModel):
    """Schema de validación para una lectura cruda."""

    values: list[float] = Field(..., min_length=1)

    @field_validator("values")
    @classmethod
    def validate_values(cls, v: list[float]) -> list[float]:
        for value in v:
            if math.isnan(value):
                raise ValueError("Value is NaN")
            if math.isinf(value):
                raise ValueError("Value is infinite")
        return v


def parse_readout(raw: str, field_names: Sequence[str]) -> dict[str, float]:
    """Convierte la respuesta cruda en {campo: valor}.

    Raises:
        ValueError: si la respuesta no es numérica, no es finita o no
            coincide en número con los campos
    """
    parts = [p.strip() for p in raw.strip().split(",") if p.strip()]
    payload = ReadoutPayload(values=parts)
    if len(payload.values) != len(field_names):
        raise ValueError(
            f"Expected {len(field_names)} values, got {len(payload.values)}"
        )
    return dict(zip(field_names, payload.values))
