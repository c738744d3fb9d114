from __future__ import annotations
import logging
import math
from typing import Dict

from borrowpower.models import (
    BorrowingPowerInputs,
    BorrowingPowerResult,
    DtiClassification,
    HouseholdType,
    IncomeSource,
    annualize_income,  # noqa: F401 (re-exported)
)
from borrowpower.presets import (
    APRA_BUFFER,
    CREDIT_CARD_COMMITMENT_RATE,
    DTI_BANDS,
    HEM_TABLE,
    INCOME_SHADING,
)

logger = logging.getLogger(__name__)


def round_half_up(x: float) -> float:
    """Round to the nearest whole unit with halves rounding up.

    Python's ``round`` uses banker's rounding, which would turn a repayment of
    ``$1,234.50`` into ``$1,234``.  Lenders quote whole dollars rounded up on
    the half, so the calculator uses this helper for every displayed figure.
    """

    if math.isinf(x) or math.isnan(x):
        return x
    return float(math.floor(x + 0.5))


def get_hem_benchmark(household_type: HouseholdType, dependants: int) -> float:
    """Return the monthly HEM floor for a household.

    Three or more dependants share the last column of the table.  Negative
    counts are not checked here; :class:`BorrowingPowerInputs` rejects them.
    """

    row = HEM_TABLE[household_type]
    return row[min(dependants, len(row) - 1)]


def shade_income(monthly_amount: float, source: IncomeSource) -> float:
    """Apply bank-standard shading to a monthly income stream."""

    return monthly_amount * INCOME_SHADING[source]


def get_assessment_rate(product_rate: float, floor_rate: float) -> float:
    """Rate used for serviceability: quoted rate plus the APRA buffer, never below the floor."""

    return max(floor_rate, product_rate + APRA_BUFFER)


def monthly_payment(principal: float, annual_rate_pct: float, term_years: float) -> float:
    """Calculate the fully amortizing monthly payment for a loan.

    ``annual_rate_pct`` is the nominal yearly rate (e.g. ``9.2`` for 9.2%).
    A zero rate spreads the principal evenly over the term.
    """

    n = int(term_years * 12)
    if principal <= 0 or n <= 0:
        return 0.0
    r = annual_rate_pct / 100 / 12
    if r == 0:
        return principal / n
    return principal * r / (1 - (1 + r) ** (-n))


def calculate_max_loan(monthly_surplus: float, assessment_rate_pct: float, term_years: float) -> float:
    """Largest principal whose amortized repayment equals ``monthly_surplus``.

    This inverts the annuity formula used by :func:`monthly_payment`.  No
    loan is serviceable without a positive surplus, so the result is ``0``.
    """

    if monthly_surplus <= 0:
        return 0.0
    r = assessment_rate_pct / 100 / 12
    n = int(term_years * 12)
    if r == 0:
        return round_half_up(monthly_surplus * n)
    return round_half_up(monthly_surplus * (1 - (1 + r) ** (-n)) / r)


def calculate_dti(total_debt: float, gross_annual_income: float) -> float:
    """Total debt over gross annual income.

    No debt is always ``0``; debt with no income is ``math.inf``.
    """

    if total_debt == 0:
        return 0.0
    if gross_annual_income == 0:
        return math.inf
    return total_debt / gross_annual_income


def get_dti_classification(dti: float) -> DtiClassification:
    if dti < DTI_BANDS["amber"]:
        return "green"
    if dti < DTI_BANDS["red"]:
        return "amber"
    return "red"


def income_allocation(result: BorrowingPowerResult) -> Dict[str, float]:
    """Split of shaded monthly income into expenses, repayment and surplus (percent)."""

    income = result.total_monthly_income if result.total_monthly_income > 0 else 1.0
    expenses_pct = min(result.effective_living_expenses / income * 100, 100.0)
    repayment_pct = min(result.monthly_repayment / income * 100, 100.0)
    surplus_pct = max(100.0 - expenses_pct - repayment_pct, 0.0)
    return {"expenses": expenses_pct, "repayment": repayment_pct, "surplus": surplus_pct}


def calculate_borrowing_power(inputs: BorrowingPowerInputs) -> BorrowingPowerResult:
    """Run the full serviceability assessment for one set of inputs.

    Income is shaded per source, living expenses are floored at the HEM
    benchmark, and existing commitments (including 3.8% of credit-card limits)
    are deducted to get the monthly surplus.  The surplus is converted to a
    maximum loan at the stressed assessment rate, and the DTI ratio is taken
    over existing debt plus that loan.  Every intermediate figure is returned
    so the caller can disclose how the estimate was reached.
    """

    salary, rental, other = (shade_income(s.monthly_amount, s.source) for s in inputs.income_streams)
    total_income = salary + rental + other

    household = inputs.household
    hem = get_hem_benchmark(household.household_type, household.dependant_count)
    effective_living = max(inputs.living_expenses, hem)
    hem_applied = inputs.living_expenses < hem

    commitments = inputs.commitments
    card_commitment = commitments.credit_card_limits * CREDIT_CARD_COMMITMENT_RATE
    total_commitments = commitments.existing_property_loans + card_commitment + commitments.other_loans

    surplus = total_income - effective_living - total_commitments

    params = inputs.assessment_params
    rate = get_assessment_rate(params.target_rate, params.floor_rate)
    max_loan = calculate_max_loan(surplus, rate, params.loan_term_years)
    repayment = round_half_up(monthly_payment(max_loan, rate, params.loan_term_years)) if max_loan > 0 else 0.0

    dti_ratio = calculate_dti(inputs.existing_debt + max_loan, inputs.gross_annual_income)

    logger.debug(
        "Borrowing power calculated",
        extra={
            "assessment_rate": rate,
            "monthly_surplus": surplus,
            "max_loan": max_loan,
            "hem_applied": hem_applied,
            "dti_ratio": dti_ratio,
        },
    )
    return BorrowingPowerResult(
        shaded_salary=salary,
        shaded_rental=rental,
        shaded_other=other,
        total_monthly_income=total_income,
        hem_benchmark=hem,
        effective_living_expenses=effective_living,
        hem_applied=hem_applied,
        credit_card_commitment=card_commitment,
        total_monthly_commitments=total_commitments,
        monthly_surplus=surplus,
        assessment_rate=rate,
        max_loan=max_loan,
        monthly_repayment=repayment,
        dti_ratio=dti_ratio,
        dti_classification=get_dti_classification(dti_ratio),
        hecs_balance=commitments.hecs_balance,
    )
