"""Unit definitions and conversion rules into the canonical unit system."""

from collections.abc import Mapping
from enum import Enum
from typing import Any

from .exceptions import MappingConfigurationError, UnsupportedUnitError


class BloodPressureUnit(str, Enum):
    """Pressure units."""

    MM_OF_MERCURY = "mmHg"
    KILOPASCAL = "kPa"


class MassUnit(str, Enum):
    """Body mass units."""

    KILOGRAM = "kg"
    POUND = "lb"
    STONE = "st"


class KcalUnit(str, Enum):
    """Energy units."""

    KILOCALORIE = "kcal"


class HeartRateUnit(str, Enum):
    """Heart rate units."""

    BEATS_PER_MINUTE = "beats/min"


class PercentUnit(str, Enum):
    """Ratio units."""

    PERCENT = "%"


KPA_TO_MMHG_CONVERSION_RATE = 7.500617
LB_TO_KG_CONVERSION_RATE = 0.45359237
STONE_TO_KG_CONVERSION_RATE = 6.35029318

_TO_MM_OF_MERCURY = {
    BloodPressureUnit.MM_OF_MERCURY: 1.0,
    BloodPressureUnit.KILOPASCAL: KPA_TO_MMHG_CONVERSION_RATE,
}

_TO_KILOGRAMS = {
    MassUnit.KILOGRAM: 1.0,
    MassUnit.POUND: LB_TO_KG_CONVERSION_RATE,
    MassUnit.STONE: STONE_TO_KG_CONVERSION_RATE,
}


def _convert(value: float, unit: Enum, table: dict[Any, float]) -> float:
    factor = table.get(unit)
    if factor is None:
        raise MappingConfigurationError(f"No conversion rule for unit: {unit!r}")
    if factor == 1.0:
        return value
    return value * factor


def to_mm_of_mercury(value: float, unit: BloodPressureUnit) -> float:
    """
    Convert a pressure reading to mmHg.

    Args:
        value: Raw pressure value
        unit: Unit the raw value is expressed in

    Returns:
        Pressure in mmHg
    """
    return _convert(value, unit, _TO_MM_OF_MERCURY)


def to_kilograms(value: float, unit: MassUnit) -> float:
    """Convert a body mass reading to kilograms."""
    return _convert(value, unit, _TO_KILOGRAMS)


def resolve_unit_code(code: Any, table: Mapping[Any, Enum], field: str | None = None) -> Enum:
    """
    Look up a provider-specific unit code.

    Args:
        code: Unit code as declared in the response (numeric or string)
        table: Provider code -> unit mapping
        field: Name of the declaring field, for diagnostics

    Returns:
        The unit enum member

    Raises:
        UnsupportedUnitError: If the code is not in the table
    """
    try:
        return table[code]
    except (KeyError, TypeError):
        raise UnsupportedUnitError(
            f"Unsupported unit code {code!r}",
            path=field,
            unit_code=code,
        ) from None
