"""What-if scenario comparison against a base borrowing power assessment."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from borrowpower.calculators import calculate_borrowing_power
from borrowpower.models import BorrowingPowerInputs, BorrowingPowerResult
from core.config import settings
from core.exceptions import ScenarioLimitError, ScenarioNotFoundError, UnknownOverrideError

logger = logging.getLogger(__name__)

MAX_SCENARIOS = settings.max_scenarios

# field names and their camelCase aliases, both mapped to the field name
_INPUT_KEYS = {
    **{name: name for name in BorrowingPowerInputs.model_fields},
    **{f.alias: name for name, f in BorrowingPowerInputs.model_fields.items() if f.alias},
}

# (result field, label, whether a dollar difference is shown)
COMPARED_METRICS = [
    ("max_loan", "Borrowing Power", True),
    ("monthly_repayment", "Monthly Repayment", True),
    ("monthly_surplus", "Monthly Surplus", True),
    ("dti_ratio", "DTI Ratio", False),
]


@dataclass
class Scenario:
    id: str
    label: str
    overrides: Dict[str, Any]
    inputs: BorrowingPowerInputs
    result: BorrowingPowerResult


def metric_diff(current: float, base: float) -> Optional[float]:
    """Difference from base, or ``None`` when it is under one dollar."""
    if current == base:
        return None
    diff = current - base
    if abs(diff) < 1:
        return None
    return diff


def _normalize_overrides(overrides: Dict[str, Any]) -> Dict[str, Any]:
    """Map override keys to input field names, rejecting unknown ones."""
    unknown = sorted(k for k in overrides if k not in _INPUT_KEYS)
    if unknown:
        raise UnknownOverrideError(f"Unknown input field(s): {', '.join(unknown)}")
    return {_INPUT_KEYS[k]: v for k, v in overrides.items()}


@dataclass
class ScenarioSet:
    """Base assessment plus up to ``MAX_SCENARIOS`` what-if variants."""

    base_inputs: BorrowingPowerInputs
    base_result: BorrowingPowerResult = field(init=False)
    scenarios: List[Scenario] = field(default_factory=list)
    _counter: int = field(default=0, init=False, repr=False)

    def __post_init__(self) -> None:
        self.base_result = calculate_borrowing_power(self.base_inputs)

    def _apply(self, overrides: Dict[str, Any]) -> BorrowingPowerInputs:
        # Re-validate so overrides obey the same constraints as the base inputs.
        data = self.base_inputs.model_dump()
        data.update(overrides)
        return BorrowingPowerInputs.model_validate(data)

    def add_scenario(self, label: Optional[str] = None, **overrides: Any) -> Scenario:
        """Add a variant of the base inputs.

        Without overrides the variant stresses the target rate by
        ``settings.scenario_rate_step`` percentage points.
        """
        if len(self.scenarios) >= MAX_SCENARIOS:
            raise ScenarioLimitError(f"At most {MAX_SCENARIOS} scenarios can be compared")
        if not overrides:
            step = settings.scenario_rate_step
            overrides = {"target_rate": round(self.base_inputs.target_rate + step, 2)}
            label = label or f"+{step:g}%"
        overrides = _normalize_overrides(overrides)
        inputs = self._apply(overrides)
        self._counter += 1
        scenario = Scenario(
            id=f"scenario-{self._counter}",
            label=label or f"Scenario {self._counter}",
            overrides=dict(overrides),
            inputs=inputs,
            result=calculate_borrowing_power(inputs),
        )
        self.scenarios.append(scenario)
        logger.info("Scenario added", extra={"scenario_id": scenario.id, "overrides": scenario.overrides})
        return scenario

    def get(self, scenario_id: str) -> Scenario:
        for s in self.scenarios:
            if s.id == scenario_id:
                return s
        raise ScenarioNotFoundError(scenario_id)

    def remove_scenario(self, scenario_id: str) -> None:
        self.scenarios.remove(self.get(scenario_id))

    def rename_scenario(self, scenario_id: str, label: str) -> None:
        self.get(scenario_id).label = label

    def rebase(self, inputs: BorrowingPowerInputs) -> None:
        """Swap in new base inputs and recompute every scenario from its overrides."""
        self.base_inputs = inputs
        self.base_result = calculate_borrowing_power(inputs)
        for s in self.scenarios:
            s.inputs = self._apply(s.overrides)
            s.result = calculate_borrowing_power(s.inputs)

    def compare(self) -> List[Dict[str, Any]]:
        """One row per compared metric with base value, scenario values and diffs."""
        rows = []
        for key, label, diffed in COMPARED_METRICS:
            base = getattr(self.base_result, key)
            row: Dict[str, Any] = {"metric": label, "base": base, "scenarios": []}
            for s in self.scenarios:
                value = getattr(s.result, key)
                row["scenarios"].append(
                    {"id": s.id, "label": s.label, "value": value, "diff": metric_diff(value, base) if diffed else None}
                )
            rows.append(row)
        return rows
