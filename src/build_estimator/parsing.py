"""
Specification Text Parsing
==========================

Catalog specification fields arrive as free text ("32.5g", "2750KV",
"5x4.3x3", "4S", "45A"). These helpers pull numbers out of that text.

None of the functions raise on malformed input: each returns either a
caller-supplied fallback or None. Negative, non-finite and implausibly large
numbers (above MAX_FIELD_VALUE) count as unreadable.
"""

import math
import re
from typing import Optional, Tuple, Union

SpecText = Union[str, int, float, None]

_NUMBER = re.compile(r"(\d+\.?\d*)")
_CELL_COUNT = re.compile(r"(\d+)\s*S(?![a-z])", re.IGNORECASE)
_MASS = re.compile(r"(\d+\.?\d*)\s*(kg|g)?", re.IGNORECASE)
_STATOR_CODE = re.compile(r"^\s*(\d{2})(\d{2})\b")

# Unitless thrust values below this are read as kilograms
THRUST_KG_THRESHOLD = 20.0

# Largest magnitude accepted from any field; larger values are unreadable
MAX_FIELD_VALUE = 1.0e6


def _checked(value: Union[int, float]) -> Optional[float]:
    """The value as a float when finite and within [0, MAX_FIELD_VALUE], else None."""
    try:
        value = float(value)
    except OverflowError:
        return None
    if not math.isfinite(value) or value < 0 or value > MAX_FIELD_VALUE:
        return None
    return value


def parse_spec_value(text: SpecText, fallback: Optional[float] = 0.0) -> Optional[float]:
    """
    Extract the first decimal number from a specification field.

    Parameters:
    ----------
    text : str, int, float or None
        Field value, e.g. "32.5g" or "2750KV". Numbers pass through.

    fallback : float, optional
        Returned when the text holds no number. Default 0.0.

    Returns:
    -------
    float or fallback
    """
    if text is None or isinstance(text, bool):
        return fallback
    if isinstance(text, (int, float)):
        value = _checked(text)
    else:
        match = _NUMBER.search(str(text))
        value = _checked(float(match.group(1))) if match else None
    return fallback if value is None else value


def parse_cell_count(text: SpecText, fallback: Optional[int] = None) -> Optional[int]:
    """Parse a series cell count written as "nS" (e.g. "4S", "6s 1300mAh")."""
    if text is None:
        return fallback
    if isinstance(text, (int, float)) and not isinstance(text, bool):
        value = _checked(text)
    else:
        match = _CELL_COUNT.search(str(text))
        value = _checked(float(match.group(1))) if match else None
    if value is None or int(value) <= 0:
        return fallback
    return int(value)


def parse_mass_g(text: SpecText, fallback: Optional[float] = 0.0) -> Optional[float]:
    """Parse a mass in grams; values written in kg are converted."""
    if text is None or isinstance(text, bool):
        return fallback
    if isinstance(text, (int, float)):
        value = _checked(text)
    else:
        match = _MASS.search(str(text))
        if not match:
            return fallback
        value = float(match.group(1))
        if match.group(2) and match.group(2).lower() == "kg":
            value *= 1000.0
        value = _checked(value)
    return fallback if value is None else value


def parse_thrust_g(text: SpecText) -> Optional[float]:
    """
    Parse a declared maximum thrust into grams.

    "1.6kg" -> 1600, "1450g" -> 1450, "1.45" -> 1450 (unitless small values
    are kilograms), "1450" -> 1450.
    """
    if text is None or isinstance(text, bool):
        return None
    unit = None
    if isinstance(text, (int, float)):
        value = _checked(text)
    else:
        match = _MASS.search(str(text))
        if not match:
            return None
        value = _checked(float(match.group(1)))
        unit = match.group(2).lower() if match.group(2) else None

    if value is None or value <= 0:
        return None
    if unit == "kg" or (unit is None and value < THRUST_KG_THRESHOLD):
        return _checked(value * 1000.0)
    return value


def parse_stator_size(text: SpecText) -> Tuple[Optional[float], Optional[float]]:
    """
    Parse a motor stator size into (diameter_mm, height_mm).

    Handles:
    - "2207" -> (22.0, 7.0)    # four-digit size code
    - "1404" -> (14.0, 4.0)
    - "22mm" -> (22.0, None)
    - 22     -> (22.0, None)

    Returns (None, None) when nothing can be parsed.
    """
    if text is None or isinstance(text, bool):
        return None, None
    if isinstance(text, (int, float)):
        value = _checked(text)
        if value is None:
            return None, None
        if value >= 1000:
            return float(int(value) // 100), float(int(value) % 100)
        return value, None

    text = str(text)
    match = _STATOR_CODE.match(text)
    if match:
        return float(match.group(1)), float(match.group(2))

    value = parse_spec_value(text, None)
    if value is None:
        return None, None
    return value, None


def parse_prop_dimensions(
    prop_id: SpecText
) -> Tuple[Optional[float], Optional[float], Optional[int]]:
    """
    Parse a propeller size into (diameter, pitch, blades).

    Handles the common FPV naming conventions:
    - "5x4.3x3"  -> (5.0, 4.3, 3)
    - "5x4.3"    -> (5.0, 4.3, None)
    - "51433"    -> (5.1, 4.3, 3)    # HQ-style DDPPB code
    - "5143"     -> (5.1, 4.3, None)
    - "5 inch"   -> (5.0, None, None)

    Parameters:
    ----------
    prop_id : str
        Propeller size text

    Returns:
    -------
    Tuple[Optional[float], Optional[float], Optional[int]]
        (diameter in, pitch in, blade count); None where not present
    """
    if prop_id is None or isinstance(prop_id, bool):
        return None, None, None
    if isinstance(prop_id, (int, float)):
        return _checked(prop_id), None, None

    prop_id = str(prop_id).strip()

    # Pattern 1: "5x4.3x3", "5x4.3", "5.1x4.6x3"
    match = re.match(r'^(\d+\.?\d*)\s*[xX]\s*(\d+\.?\d*)(?:\s*[xX]\s*(\d+))?', prop_id)
    if match:
        diameter = float(match.group(1))
        pitch = float(match.group(2))

        # "51x46" style encoded tenths
        if diameter > 30:
            diameter = diameter / 10.0
        if pitch > 20 and diameter <= 20:
            pitch = pitch / 10.0

        blades = int(match.group(3)) if match.group(3) else None
        return _checked(diameter), _checked(pitch), blades

    # Pattern 2: compact codes "5143" / "51433"
    match = re.match(r'^(\d{2})(\d{2})(\d)?$', prop_id)
    if match:
        diameter = float(match.group(1)) / 10.0
        pitch = float(match.group(2)) / 10.0
        blades = int(match.group(3)) if match.group(3) else None
        return diameter, pitch, blades

    # Pattern 3: bare diameter "5 inch", "5\""
    diameter = parse_spec_value(prop_id, None)
    return diameter, None, None


def contains_keyword(text: SpecText, keyword: str) -> bool:
    """Case-insensitive substring check that tolerates missing text."""
    if text is None:
        return False
    return keyword.lower() in str(text).lower()
