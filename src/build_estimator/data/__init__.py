"""
Build Estimator Data Module
===========================

Sample component catalog and reference builds.
"""

from .sample_catalog import (
    SAMPLE_BATTERIES,
    SAMPLE_BUILDS,
    SAMPLE_CAMERAS,
    SAMPLE_FRAMES,
    SAMPLE_MOTORS,
    SAMPLE_PROPELLERS,
    SAMPLE_STACKS,
    build_selection,
    get_component,
    list_builds,
    list_components,
)

__all__ = [
    "SAMPLE_BATTERIES",
    "SAMPLE_BUILDS",
    "SAMPLE_CAMERAS",
    "SAMPLE_FRAMES",
    "SAMPLE_MOTORS",
    "SAMPLE_PROPELLERS",
    "SAMPLE_STACKS",
    "build_selection",
    "get_component",
    "list_builds",
    "list_components",
]
