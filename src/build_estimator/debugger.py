"""
Estimation Debugger
===================

Records every estimation step (band lookups, physics formulas, clamps) so a
performance report can be traced back to its inputs.

Estimators call ``debug_step``; it records only while a debugger is
installed for the current thread, so normal estimates pay nothing.
"""

import threading
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Iterator, List, Optional

RULE = "=" * 70


@dataclass(frozen=True)
class CalculationStep:
    """One recorded estimate: the formula, its inputs and what it produced."""
    category: str
    description: str
    result: Any
    result_name: str
    formula: str = ""
    variables: Optional[Dict[str, Any]] = None
    result_unit: str = ""
    comment: str = ""
    section: Optional[str] = None

    def render(self, number: int) -> List[str]:
        lines = [f"[{number}] {self.description}"]
        if self.variables:
            rendered = ", ".join(f"{name}={_format_value(value)}" for name, value in self.variables.items())
            lines.append(f"    Inputs: {rendered}")
        if self.formula:
            lines.append(f"    Formula: {self.formula}")
        unit = f" {self.result_unit}" if self.result_unit else ""
        lines.append(f"    => {self.result_name} = {_format_value(self.result)}{unit}")
        if self.comment:
            lines.append(f"    // {self.comment}")
        return lines


class CalculationDebugger:
    """
    Collects estimation steps and renders them as a text trace.

    Keyword arguments given to the constructor label the trace header.

    Usage:
        debugger = CalculationDebugger(build="5-inch freestyle")
        debugger.start_section("Thrust")
        debugger.add_step(
            category="Thrust",
            description="Loaded motor RPM",
            formula="rpm = KV × V × η_load",
            variables={"KV": 2750, "V": 14.8, "η_load": 0.782},
            result=31827.0,
            result_name="loaded_rpm",
            result_unit="RPM",
        )
        print(debugger.get_report())
    """

    def __init__(self, **metadata):
        self.metadata: Dict[str, Any] = metadata
        self.steps: List[CalculationStep] = []
        self.started = datetime.now()
        self.finished: Optional[datetime] = None
        self._section: Optional[str] = None

    def finish(self):
        self.finished = datetime.now()

    def start_section(self, name: str):
        """Steps added from now on belong to ``name``."""
        self._section = name

    def add_step(
        self,
        category: str,
        description: str,
        result: Any,
        result_name: str,
        formula: str = "",
        variables: Optional[dict] = None,
        result_unit: str = "",
        comment: str = ""
    ):
        self.steps.append(CalculationStep(
            category=category,
            description=description,
            result=result,
            result_name=result_name,
            formula=formula,
            variables=dict(variables) if variables else None,
            result_unit=result_unit,
            comment=comment,
            section=self._section,
        ))

    def add_input(self, name: str, value: Any, unit: str = "", description: str = ""):
        """Record an input value (component field, configuration knob)."""
        self.add_step("Input", description or f"Input: {name}", value, name, result_unit=unit)

    def get_report(self, include_sections: bool = True) -> str:
        """
        Render all recorded steps as a text report.

        Parameters:
        ----------
        include_sections : bool
            Include section headers in the report

        Returns:
        -------
        str
            Formatted estimation trace
        """
        lines = [RULE, "ESTIMATION TRACE", RULE]
        lines.append(f"Generated: {self.started.strftime('%Y-%m-%d %H:%M:%S')}")

        if self.metadata:
            lines.extend(["", "Build:"])
            lines.extend(f"  {key}: {value}" for key, value in self.metadata.items())
        lines.append("")

        section = category = None
        for number, step in enumerate(self.steps, start=1):
            if include_sections and step.section is not None and step.section != section:
                lines.extend(["", RULE, f">>> {step.section}", RULE, ""])
                category = None
            section = step.section

            if step.category not in (category, "Input"):
                lines.extend([f"--- {step.category} ---", ""])
                category = step.category

            lines.extend(step.render(number))
            lines.append("")

        lines.extend([RULE, f"Total Steps: {len(self.steps)}"])
        if self.finished is not None:
            elapsed = (self.finished - self.started).total_seconds()
            lines.append(f"Elapsed Time: {elapsed:.3f} seconds")
        lines.append(RULE)
        return "\n".join(lines)

    def get_step_count(self) -> int:
        return len(self.steps)

    def find_steps_by_category(self, category: str) -> List[CalculationStep]:
        return [s for s in self.steps if s.category == category]

    def find_step_by_result(self, result_name: str) -> Optional[CalculationStep]:
        """Find the most recent step that produced ``result_name``."""
        for step in reversed(self.steps):
            if step.result_name == result_name:
                return step
        return None

    def results(self) -> Dict[str, Any]:
        """Latest value of every named result."""
        return {step.result_name: step.result for step in self.steps}


def _format_value(value: Any) -> str:
    if isinstance(value, float):
        return f"{value:.6g}"
    return str(value)


# Debugger installed per thread so concurrent estimates never share a trace
_local = threading.local()


def get_debugger() -> Optional[CalculationDebugger]:
    """Return the debugger installed for this thread (or None)."""
    return getattr(_local, "debugger", None)


def set_debugger(debugger: Optional[CalculationDebugger]):
    """Install (or with None, remove) the debugger for this thread."""
    _local.debugger = debugger


@contextmanager
def debugging(debugger: CalculationDebugger) -> Iterator[CalculationDebugger]:
    """Install ``debugger`` for the duration of a ``with`` block."""
    previous = get_debugger()
    set_debugger(debugger)
    try:
        yield debugger
    finally:
        set_debugger(previous)


def debug_section(name: str):
    """Start a section on the active debugger (if any)."""
    debugger = get_debugger()
    if debugger is not None:
        debugger.start_section(name)


def debug_step(
    category: str,
    description: str,
    formula: str,
    variables: dict,
    result: Any,
    result_name: str,
    result_unit: str = "",
    comment: str = ""
):
    """Add a step to the active debugger (if any)."""
    debugger = get_debugger()
    if debugger is not None:
        debugger.add_step(category, description, result, result_name, formula, variables, result_unit, comment)
