"""Portfolio-level borrowing snapshot built from property, loan and transaction records."""
from __future__ import annotations

import logging
from datetime import date, timedelta
from typing import List, Literal, Optional

import pandas as pd
from pydantic import BaseModel

from borrowpower.calculators import round_half_up
from borrowpower.models import BorrowingPowerInputs
from borrowpower.presets import (
    APRA_BUFFER,
    CAPITAL_CATEGORIES,
    DSR_BANDS,
    MAX_LVR,
    REPAYMENTS_PER_YEAR,
)
from core.config import settings

logger = logging.getLogger(__name__)


class PropertyRecord(BaseModel):
    id: str
    purchase_price: float = 0.0
    latest_value: Optional[float] = None


class LoanRecord(BaseModel):
    property_id: str
    current_balance: float = 0.0
    interest_rate: float = 0.0
    repayment_amount: float = 0.0
    repayment_frequency: Literal["weekly", "fortnightly", "monthly"] = "monthly"


class TransactionRecord(BaseModel):
    property_id: str
    amount: float
    transaction_type: str
    category: str = ""
    transaction_date: date


class PortfolioSnapshot(BaseModel):
    total_portfolio_value: float = 0.0
    total_debt: float = 0.0
    portfolio_lvr: float = 0.0
    usable_equity: float = 0.0
    annual_rental_income: float = 0.0
    annual_expenses: float = 0.0
    annual_repayments: float = 0.0
    net_surplus: float = 0.0
    debt_service_ratio: Optional[float] = None
    estimated_borrowing_power: float = 0.0
    weighted_avg_rate: float = 0.0
    has_loans: bool = False


class PurchaseAssessment(BaseModel):
    deposit_needed: float
    new_monthly_repayment: float
    surplus_after: float
    equity_shortfall: float
    equity_ok: bool
    serviceability_ok: bool
    feasible: bool


def _transactions_frame(transactions: List[TransactionRecord], as_of: Optional[date]) -> pd.DataFrame:
    cols = ["property_id", "amount", "transaction_type", "category", "transaction_date"]
    if not transactions:
        return pd.DataFrame(columns=cols).astype({"amount": float})
    df = pd.DataFrame([t.model_dump() for t in transactions], columns=cols)
    df["amount"] = pd.to_numeric(df["amount"], errors="coerce").fillna(0.0)
    if as_of is not None:
        start = as_of - timedelta(days=365)
        df = df[(df["transaction_date"] > start) & (df["transaction_date"] <= as_of)]
    return df


def annual_repayments(loans: List[LoanRecord]) -> float:
    """Annualize loan repayments by their payment frequency."""
    return sum(l.repayment_amount * REPAYMENTS_PER_YEAR[l.repayment_frequency] for l in loans)


def weighted_average_rate(loans: List[LoanRecord]) -> float:
    """Interest rate weighted by current balance; ``0`` without debt."""
    total = sum(l.current_balance for l in loans)
    if total <= 0:
        return 0.0
    return sum(l.current_balance * l.interest_rate for l in loans) / total


def portfolio_snapshot(
    properties: List[PropertyRecord],
    loans: List[LoanRecord],
    transactions: List[TransactionRecord],
    as_of: Optional[date] = None,
) -> PortfolioSnapshot:
    """Summarize equity and serviceability across the whole portfolio.

    Property values use the latest valuation and fall back to the purchase
    price.  Usable equity is what can be drawn while keeping the portfolio at
    80% LVR.  Rental income and operating expenses come from the transactions
    (optionally the 12 months up to ``as_of``); capital costs such as stamp
    duty are excluded because they are not recurring.  The additional
    borrowing estimate is the usable equity, but only while the portfolio
    still produces a positive surplus after repayments.
    """

    if not properties:
        return PortfolioSnapshot()

    property_ids = {p.id for p in properties}
    loans = [l for l in loans if l.property_id in property_ids]

    total_value = sum(p.latest_value if p.latest_value is not None else p.purchase_price for p in properties)
    total_debt = sum(l.current_balance for l in loans)
    lvr = total_debt / total_value * 100 if total_value > 0 else 0.0
    usable_equity = max(0.0, total_value * MAX_LVR - total_debt)

    df = _transactions_frame(transactions, as_of)
    df = df[df["property_id"].isin(property_ids)]
    income = float(df.loc[df["transaction_type"] == "income", "amount"].sum())
    expense_rows = df[(df["transaction_type"] == "expense") & ~df["category"].isin(CAPITAL_CATEGORIES)]
    expenses = float(expense_rows["amount"].abs().sum())

    repayments = annual_repayments(loans)
    surplus = income - expenses - repayments
    dsr = repayments / income * 100 if income > 0 else None

    snapshot = PortfolioSnapshot(
        total_portfolio_value=round(total_value, 2),
        total_debt=round(total_debt, 2),
        portfolio_lvr=lvr,
        usable_equity=round(usable_equity, 2),
        annual_rental_income=round(income, 2),
        annual_expenses=round(expenses, 2),
        annual_repayments=round(repayments, 2),
        net_surplus=round(surplus, 2),
        debt_service_ratio=dsr,
        estimated_borrowing_power=round(usable_equity, 2) if surplus > 0 else 0.0,
        weighted_avg_rate=weighted_average_rate(loans),
        has_loans=len(loans) > 0,
    )
    logger.debug(
        "Portfolio snapshot built",
        extra={"properties": len(properties), "loans": len(loans), "net_surplus": snapshot.net_surplus},
    )
    return snapshot


def classify_dsr(dsr: Optional[float]) -> str:
    if dsr is None:
        return "unknown"
    if dsr < DSR_BANDS["green"]:
        return "green"
    if dsr <= DSR_BANDS["amber"]:
        return "amber"
    return "red"


def assess_purchase(snapshot: PortfolioSnapshot, target_price: float) -> Optional[PurchaseAssessment]:
    """Quick feasibility check for buying another property at ``target_price``.

    Assumes an 80% loan funded by a 20% deposit drawn from usable equity, with
    interest-only repayments at the portfolio rate plus the APRA buffer.
    """

    if not target_price or target_price <= 0:
        return None
    new_loan = target_price * MAX_LVR
    deposit = target_price - new_loan
    new_annual_repayment = new_loan * (snapshot.weighted_avg_rate + APRA_BUFFER) / 100
    surplus_after = snapshot.net_surplus - new_annual_repayment
    equity_ok = deposit <= snapshot.usable_equity
    serviceability_ok = surplus_after > 0
    return PurchaseAssessment(
        deposit_needed=deposit,
        new_monthly_repayment=new_annual_repayment / 12,
        surplus_after=round_half_up(surplus_after),
        equity_shortfall=round_half_up(max(0.0, deposit - snapshot.usable_equity)),
        equity_ok=equity_ok,
        serviceability_ok=serviceability_ok,
        feasible=equity_ok and serviceability_ok,
    )


def prefill_inputs(snapshot: PortfolioSnapshot, base: Optional[BorrowingPowerInputs] = None) -> BorrowingPowerInputs:
    """Seed calculator inputs with figures already known from the portfolio.

    Only portfolios with loans are carried across; otherwise ``base`` is
    returned unchanged.  ``gross_annual_income`` is left as given in ``base``.
    """

    base = base or BorrowingPowerInputs(
        target_rate=settings.default_target_rate, floor_rate=settings.default_floor_rate
    )
    if not snapshot.has_loans:
        return base
    rate = snapshot.weighted_avg_rate if snapshot.weighted_avg_rate > 0 else settings.default_target_rate
    return base.model_copy(
        update={
            "rental_income": round_half_up(snapshot.annual_rental_income / 12),
            "existing_property_loans": round_half_up(snapshot.annual_repayments / 12),
            "existing_debt": snapshot.total_debt,
            "target_rate": round(rate, 2),
        }
    )
