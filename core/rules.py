from __future__ import annotations
from typing import Literal, List, Dict, Any, Optional
from pydantic import BaseModel, Field

from borrowpower.models import BorrowingPowerInputs, BorrowingPowerResult
from core.utils import format_dti


class RuleResult(BaseModel):
    code: str
    severity: Literal["info", "warn", "critical"]
    message: str
    context: Dict[str, Any] = Field(default_factory=dict)


def evaluate_rules(
    result: BorrowingPowerResult, inputs: Optional[BorrowingPowerInputs] = None
) -> List[RuleResult]:
    res: List[RuleResult] = []

    if result.total_monthly_income <= 0:
        res.append(
            RuleResult(
                code="NO_INCOME",
                severity="critical",
                message="No income entered; borrowing power is not meaningful.",
            )
        )

    if result.hem_applied:
        res.append(
            RuleResult(
                code="HEM_APPLIED",
                severity="info",
                message="Declared living expenses are below the HEM benchmark; the benchmark was used instead.",
                context={
                    "declared": inputs.living_expenses if inputs is not None else None,
                    "benchmark": result.hem_benchmark,
                },
            )
        )

    if inputs is not None and result.assessment_rate == inputs.floor_rate:
        res.append(
            RuleResult(
                code="FLOOR_RATE_APPLIED",
                severity="info",
                message="Assessed at the lender floor rate rather than the buffered product rate.",
                context={"floor_rate": inputs.floor_rate, "target_rate": inputs.target_rate},
            )
        )

    if result.hecs_balance > 0:
        res.append(
            RuleResult(
                code="HECS_NOT_DEDUCTED",
                severity="info",
                message="HECS/HELP balance shown for reference; lenders deduct compulsory repayments from income.",
                context={"hecs_balance": result.hecs_balance},
            )
        )

    if result.monthly_surplus <= 0:
        res.append(
            RuleResult(
                code="NOT_SERVICEABLE",
                severity="critical",
                message="Expenses and commitments exceed shaded income; no new loan is serviceable.",
                context={"monthly_surplus": result.monthly_surplus},
            )
        )

    if result.dti_classification == "amber":
        res.append(
            RuleResult(
                code="DTI_ELEVATED",
                severity="warn",
                message="Debt-to-income ratio is elevated; some lenders apply tighter policy.",
                context={"dti": format_dti(result.dti_ratio)},
            )
        )

    if result.dti_classification == "red":
        res.append(
            RuleResult(
                code="DTI_HIGH",
                severity="warn",
                message="DTI ratio is at or above 6x, which exceeds APRA's serviceability guidance. "
                "Most lenders will decline applications at this level.",
                context={"dti": format_dti(result.dti_ratio)},
            )
        )

    return res


def has_blocking(res: List[RuleResult]) -> bool:
    return any(r.severity == "critical" for r in res)
