"""
Build Estimator Models
======================

Catalog selections, typed specifications and report records.
"""

from .component import AuxiliaryWeight, CatalogComponent, ComponentSelection, ComponentSlot
from .specs import (
    AuxiliarySpec,
    BatterySpec,
    BuildSpecs,
    CameraSpec,
    FrameSpec,
    MotorSpec,
    PropellerSpec,
    StackSpec,
    ingest_selection,
)
from .report import (
    BatteryMetrics,
    CompatibilityReport,
    HoverMetrics,
    MotorMetrics,
    PerformanceReport,
    PriceBreakdown,
)

__all__ = [
    "AuxiliaryWeight",
    "CatalogComponent",
    "ComponentSelection",
    "ComponentSlot",
    "AuxiliarySpec",
    "BatterySpec",
    "BuildSpecs",
    "CameraSpec",
    "FrameSpec",
    "MotorSpec",
    "PropellerSpec",
    "StackSpec",
    "ingest_selection",
    "BatteryMetrics",
    "CompatibilityReport",
    "HoverMetrics",
    "MotorMetrics",
    "PerformanceReport",
    "PriceBreakdown",
]
