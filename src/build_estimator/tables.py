"""
Band Lookup Tables
==================

Ordered lookup tables used by the estimators to map a measured quantity
(stator size, C-rate, wheelbase, ...) onto an empirical factor.

Every table is immutable and evaluated top to bottom; the first matching
row wins and the default applies when nothing matches.

Table Types:
-----------
- StepTable:  rows of (threshold, factor) compared with one operator
- RangeTable: rows of (low, high, factor), value inside [low, high]
- StyleTable: rows of (min_kv, max_wheelbase, factor) for build-style bands

Usage:
------
    from src.build_estimator.tables import StepTable

    esc_efficiency = StepTable(
        rows=((60, 0.96), (40, 0.95), (25, 0.93)),
        default=0.90,
        comparison="ge",
    )
    esc_efficiency.lookup(45)  # 0.95
"""

import math
import operator
from dataclasses import dataclass
from typing import Tuple


# Supported comparisons for StepTable rows: value <op> threshold
COMPARISONS = {
    "lt": operator.lt,
    "le": operator.le,
    "gt": operator.gt,
    "ge": operator.ge,
}


@dataclass(frozen=True)
class StepTable:
    """
    Threshold table: first row where ``value <comparison> threshold`` wins.

    Attributes:
    ----------
    rows : Tuple[Tuple[float, float], ...]
        (threshold, factor) pairs in evaluation order

    default : float
        Factor returned when no row matches

    comparison : str
        One of "lt", "le", "gt", "ge"
    """
    rows: Tuple[Tuple[float, float], ...]
    default: float
    comparison: str = "ge"

    def lookup(self, value: float) -> float:
        """Return the factor for ``value``."""
        compare = COMPARISONS[self.comparison]
        for threshold, factor in self.rows:
            if compare(value, threshold):
                return factor
        return self.default

    def validate(self) -> Tuple[bool, str]:
        """Check the comparison name and that thresholds are monotonic."""
        if self.comparison not in COMPARISONS:
            return False, f"Unknown comparison: {self.comparison}"
        thresholds = [row[0] for row in self.rows]
        if self.comparison in ("lt", "le"):
            ordered = thresholds == sorted(thresholds)
        else:
            ordered = thresholds == sorted(thresholds, reverse=True)
        if not ordered:
            return False, f"Thresholds out of order for '{self.comparison}' table"
        return True, ""


@dataclass(frozen=True)
class RangeTable:
    """
    Nested range table: first row with ``low <= value <= high`` wins.

    Rows are listed from the narrowest (best) window to the widest.
    """
    rows: Tuple[Tuple[float, float, float], ...]
    default: float

    def lookup(self, value: float) -> float:
        """Return the factor for ``value``."""
        for low, high, factor in self.rows:
            if low <= value <= high:
                return factor
        return self.default

    def validate(self) -> Tuple[bool, str]:
        for low, high, _ in self.rows:
            if low > high:
                return False, f"Range ({low}, {high}) is inverted"
        return True, ""


@dataclass(frozen=True)
class StyleTable:
    """
    Build-style table keyed on motor KV and frame wheelbase.

    A row matches when ``kv >= min_kv`` and ``wheelbase <= max_wheelbase``.
    Use ``math.inf`` as max_wheelbase for KV-only rows.
    """
    rows: Tuple[Tuple[float, float, float], ...]
    default: float

    def lookup(self, kv: float, wheelbase_mm: float) -> float:
        """Return the factor for a KV / wheelbase pair."""
        for min_kv, max_wheelbase, factor in self.rows:
            if kv >= min_kv and wheelbase_mm <= max_wheelbase:
                return factor
        return self.default

    def validate(self) -> Tuple[bool, str]:
        kvs = [row[0] for row in self.rows]
        if kvs != sorted(kvs, reverse=True):
            return False, "Style rows must be ordered by descending KV"
        return True, ""


# KV-only rows in a StyleTable
ANY_WHEELBASE = math.inf
