"""
Build Advisories
================

Human-readable notes on an estimated build: thrust-to-weight bands, ESC and
current load, flight time, battery capacity and C-rating, and whether the
all-up weight suits the frame class.

Every function returns a list of strings (possibly empty) and never raises.
"""

from dataclasses import dataclass
from typing import List, Optional, Tuple

from ..config import DEFAULT_CONFIG, MOTOR_COUNT, ModelConfig


# =============================================================================
# Frame Weight Classes
# =============================================================================

@dataclass(frozen=True)
class WeightClass:
    """All-up weight window for a frame class."""
    name: str
    max_wheelbase_mm: float
    min_weight_g: float
    max_weight_g: float


# Checked in order; first class whose wheelbase limit is not exceeded wins
WEIGHT_CLASSES: Tuple[WeightClass, ...] = (
    WeightClass("Tiny Whoop", 85.0, 20.0, 50.0),
    WeightClass("3-inch", 140.0, 80.0, 200.0),
    WeightClass("4-inch", 200.0, 150.0, 350.0),
    WeightClass("5-inch", 260.0, 200.0, 700.0),
    WeightClass("6-7 inch", 350.0, 400.0, 1200.0),
)


def classify_frame(wheelbase_mm: Optional[float]) -> Optional[WeightClass]:
    """Frame class for a wheelbase, or None when unknown or out of range."""
    if not wheelbase_mm or wheelbase_mm <= 0:
        return None
    for weight_class in WEIGHT_CLASSES:
        if wheelbase_mm <= weight_class.max_wheelbase_mm:
            return weight_class
    return None


def validate_weight(total_mass_g: float, wheelbase_mm: Optional[float]) -> Tuple[bool, str, List[str]]:
    """
    Check the all-up weight against the frame class window.

    Returns:
    -------
    tuple
        (is_valid, category, recommendations). Unknown frames are always
        valid with category "Unknown".
    """
    weight_class = classify_frame(wheelbase_mm)
    if weight_class is None:
        return True, "Unknown", []

    recommendations = []
    if total_mass_g < weight_class.min_weight_g:
        recommendations.append(
            f"Weight seems too low for a {weight_class.name} build. "
            "Check that every component has a weight."
        )
    elif total_mass_g > weight_class.max_weight_g:
        recommendations.append(
            f"Weight is high for a {weight_class.name} build. "
            "Lighter components will improve performance."
        )
    return not recommendations, weight_class.name, recommendations


# =============================================================================
# Performance Bands
# =============================================================================

def thrust_advisories(thrust_to_weight: float, config: ModelConfig = DEFAULT_CONFIG) -> Tuple[bool, List[str]]:
    """
    Classify a thrust-to-weight ratio.

    Returns:
    -------
    tuple
        (is_optimal, recommendations), optimal meaning inside the
        configured optimal range
    """
    low, high = config.thrust.optimal_twr_range
    is_optimal = low <= thrust_to_weight <= high

    if thrust_to_weight < 1.0:
        notes = [
            "Thrust-to-weight ratio is below 1.0; the build may not be able to fly.",
            "Use more powerful motors or lighter components.",
        ]
    elif thrust_to_weight < 1.5:
        notes = [
            "Low thrust-to-weight ratio; expect limited manoeuvrability.",
            "Suitable for gentle flying only.",
        ]
    elif thrust_to_weight < low:
        notes = ["Adequate thrust for basic flying and slow cinematic work."]
    elif thrust_to_weight <= 4.0:
        notes = ["Good thrust-to-weight ratio for sport and freestyle flying."]
    elif thrust_to_weight <= high:
        notes = ["High performance; suits racing and aggressive freestyle."]
    else:
        notes = [
            "Very high thrust-to-weight ratio; this may cost flight time.",
            "Check whether this much power is needed.",
        ]
    return is_optimal, notes


def esc_utilisation(average_current_a: float, esc_rating_a: float) -> float:
    """Average current as a share of the combined ESC rating (%)."""
    capacity = esc_rating_a * MOTOR_COUNT
    if capacity <= 0:
        return 0.0
    return average_current_a / capacity * 100.0


def power_advisories(average_current_a: float, esc_rating_a: float) -> List[str]:
    notes = []
    if esc_rating_a > 0:
        utilisation = esc_utilisation(average_current_a, esc_rating_a)
        if utilisation > 85:
            notes.append("High ESC utilisation. Higher rated ESCs would be more reliable.")
        elif utilisation > 70:
            notes.append("Moderate ESC utilisation. Good for performance flying.")
        elif utilisation < 30:
            notes.append("Low ESC utilisation. The ESCs may be oversized for this build.")

    if average_current_a > 50:
        notes.append("High power draw. Expect short flights with strong performance.")
    elif average_current_a > 35:
        notes.append("Moderate power draw. Balanced performance and flight time.")
    elif 0 < average_current_a < 20:
        notes.append("Low power draw. Efficient setup for longer flights.")
    return notes


def flight_time_advisories(
    flight_time_min: float,
    capacity_mah: Optional[float],
    c_rating: Optional[float],
    kv: Optional[float] = None,
    wheelbase_mm: Optional[float] = None
) -> List[str]:
    """Flight-time band, battery size and C-rating notes."""
    notes = []
    if flight_time_min <= 0:
        return notes

    if flight_time_min < 2:
        notes.append("Very short flight time. A larger battery or a more efficient setup would help.")
    elif flight_time_min < 4:
        notes.append("Short flight time. Fine for racing, limited for anything else.")
    elif flight_time_min < 6:
        notes.append("Moderate flight time. A good balance for sport flying.")
    elif flight_time_min < 10:
        notes.append("Good flight time for recreational flying and light work.")
    elif flight_time_min > 15:
        notes.append("Excellent flight time for long-range and work flights.")

    if capacity_mah:
        if capacity_mah < 1000:
            notes.append("Small battery capacity. A larger pack gives longer flights.")
        elif capacity_mah > 2500:
            notes.append("Large battery. Good endurance at the cost of extra weight.")

    if c_rating:
        if c_rating < 30:
            notes.append("Low C-rating battery. May limit aggressive flying.")
        elif c_rating > 100:
            notes.append("High C-rating battery. Well suited to racing.")

    if kv and wheelbase_mm:
        if kv > 2400 and wheelbase_mm <= 230:
            notes.append("High-KV racing setup. Short flights, strong performance.")
        elif kv < 1800:
            notes.append("Efficient low-KV setup. Good for cinematic and long-range flying.")
    return notes
