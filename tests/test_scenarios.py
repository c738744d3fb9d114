import pytest
from pydantic import ValidationError

from borrowpower.models import BorrowingPowerInputs
from core.exceptions import (
    BorrowingPowerError,
    ScenarioLimitError,
    ScenarioNotFoundError,
    UnknownOverrideError,
)
from core.scenarios import MAX_SCENARIOS, ScenarioSet, metric_diff


def _base(**overrides):
    data = dict(
        gross_salary=8000,
        rental_income=3000,
        living_expenses=2000,
        existing_property_loans=1500,
        credit_card_limits=10000,
        target_rate=6.2,
        floor_rate=5.5,
        existing_debt=400000,
        gross_annual_income=96000,
    )
    data.update(overrides)
    return BorrowingPowerInputs(**data)


def test_default_scenario_stresses_rate():
    sset = ScenarioSet(_base())
    s = sset.add_scenario()
    assert s.id == "scenario-1"
    assert s.label == "+1%"
    assert s.inputs.target_rate == pytest.approx(7.2)
    assert s.result.assessment_rate == pytest.approx(10.2)
    assert s.result.max_loan < sset.base_result.max_loan


def test_custom_overrides_and_label():
    sset = ScenarioSet(_base())
    s = sset.add_scenario(label="Pay off cards", credit_card_limits=0)
    assert s.label == "Pay off cards"
    assert s.result.max_loan > sset.base_result.max_loan
    assert sset.base_inputs.credit_card_limits == 10000


def test_invalid_override_rejected():
    sset = ScenarioSet(_base())
    with pytest.raises(ValidationError):
        sset.add_scenario(dependants=-2)
    assert sset.scenarios == []
    assert sset.add_scenario().id == "scenario-1"


def test_unknown_override_field_rejected():
    sset = ScenarioSet(_base())
    with pytest.raises(UnknownOverrideError):
        sset.add_scenario(label="typo", target_rte=9.0)
    assert sset.scenarios == []
    # a failed add does not use up an id
    assert sset.add_scenario().id == "scenario-1"


def test_camel_case_override_accepted():
    sset = ScenarioSet(_base())
    s = sset.add_scenario(targetRate=9.0)
    assert s.overrides == {"target_rate": 9.0}
    assert s.inputs.target_rate == 9.0
    assert s.result.max_loan < sset.base_result.max_loan


def test_scenario_limit():
    sset = ScenarioSet(_base())
    for _ in range(MAX_SCENARIOS):
        sset.add_scenario()
    with pytest.raises(ScenarioLimitError):
        sset.add_scenario()


def test_remove_and_rename():
    sset = ScenarioSet(_base())
    first = sset.add_scenario()
    second = sset.add_scenario(loan_term_years=25)
    sset.rename_scenario(second.id, "25 years")
    assert sset.get(second.id).label == "25 years"
    sset.remove_scenario(first.id)
    assert [s.id for s in sset.scenarios] == [second.id]
    # ids keep counting after a removal
    assert sset.add_scenario().id == "scenario-3"


def test_unknown_scenario():
    sset = ScenarioSet(_base())
    with pytest.raises(ScenarioNotFoundError):
        sset.remove_scenario("scenario-9")
    with pytest.raises(BorrowingPowerError):
        sset.rename_scenario("nope", "x")


def test_rebase_recomputes_scenarios():
    sset = ScenarioSet(_base())
    s = sset.add_scenario(label="Cards gone", credit_card_limits=0)
    before = s.result.max_loan
    sset.rebase(_base(gross_salary=9000))
    assert sset.base_inputs.gross_salary == 9000
    assert s.inputs.gross_salary == 9000
    assert s.inputs.credit_card_limits == 0
    assert s.result.max_loan > before


def test_compare_rows():
    sset = ScenarioSet(_base())
    sset.add_scenario()
    rows = sset.compare()
    assert [r["metric"] for r in rows] == ["Borrowing Power", "Monthly Repayment", "Monthly Surplus", "DTI Ratio"]
    loan_row = rows[0]
    assert loan_row["base"] == sset.base_result.max_loan
    assert loan_row["scenarios"][0]["diff"] < 0
    # the surplus is unaffected by the assessment rate
    assert rows[2]["scenarios"][0]["diff"] is None
    assert rows[3]["scenarios"][0]["diff"] is None


def test_metric_diff_ignores_small_changes():
    assert metric_diff(100.4, 100) is None
    assert metric_diff(99, 100) == -1
    assert metric_diff(float("inf"), float("inf")) is None
