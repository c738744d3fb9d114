from __future__ import annotations
from typing import List, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

HouseholdType = Literal["single", "couple"]
IncomeSource = Literal["salary", "rental", "other"]
DtiClassification = Literal["green", "amber", "red"]


def annualize_income(gross_salary: float, rental_income: float, other_income: float) -> float:
    """Gross annual income from the monthly streams, before shading."""

    return (gross_salary + rental_income + other_income) * 12


class _Record(BaseModel):
    """Immutable record that also accepts the camelCase field names."""

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        # keep the infinite DTI sentinel as `Infinity` in JSON output
        ser_json_inf_nan="constants",
    )


class HouseholdProfile(_Record):
    household_type: HouseholdType = "single"
    dependant_count: int = Field(default=0, ge=0)


class IncomeStream(_Record):
    monthly_amount: float = 0.0
    source: IncomeSource = "salary"


class CommitmentSet(_Record):
    existing_property_loans: float = 0.0
    credit_card_limits: float = 0.0
    other_loans: float = 0.0
    hecs_balance: float = 0.0


class LoanAssessmentParams(_Record):
    target_rate: float = 6.2
    floor_rate: float = 5.5
    loan_term_years: int = 30


class BorrowingPowerInputs(_Record):
    gross_salary: float = Field(default=0.0, ge=0)
    rental_income: float = Field(default=0.0, ge=0)
    other_income: float = Field(default=0.0, ge=0)
    household_type: HouseholdType = "single"
    dependants: int = Field(default=0, ge=0)
    living_expenses: float = Field(default=0.0, ge=0)
    existing_property_loans: float = Field(default=0.0, ge=0)
    credit_card_limits: float = Field(default=0.0, ge=0)
    other_loans: float = Field(default=0.0, ge=0)
    hecs_balance: float = Field(default=0.0, ge=0)
    target_rate: float = Field(default=6.2, ge=0)
    loan_term_years: int = Field(default=30, gt=0)
    floor_rate: float = Field(default=5.5, ge=0)
    existing_debt: float = Field(default=0.0, ge=0)
    gross_annual_income: float = Field(default=0.0, ge=0)

    @property
    def household(self) -> HouseholdProfile:
        return HouseholdProfile(household_type=self.household_type, dependant_count=self.dependants)

    @property
    def income_streams(self) -> List[IncomeStream]:
        return [
            IncomeStream(monthly_amount=self.gross_salary, source="salary"),
            IncomeStream(monthly_amount=self.rental_income, source="rental"),
            IncomeStream(monthly_amount=self.other_income, source="other"),
        ]

    @property
    def commitments(self) -> CommitmentSet:
        return CommitmentSet(
            existing_property_loans=self.existing_property_loans,
            credit_card_limits=self.credit_card_limits,
            other_loans=self.other_loans,
            hecs_balance=self.hecs_balance,
        )

    @property
    def assessment_params(self) -> LoanAssessmentParams:
        return LoanAssessmentParams(
            target_rate=self.target_rate,
            floor_rate=self.floor_rate,
            loan_term_years=self.loan_term_years,
        )

    def with_synced_income(self) -> "BorrowingPowerInputs":
        """Return a copy whose annual income matches the monthly streams."""
        annual = annualize_income(self.gross_salary, self.rental_income, self.other_income)
        return self.model_copy(update={"gross_annual_income": annual})


class BorrowingPowerResult(_Record):
    shaded_salary: float
    shaded_rental: float
    shaded_other: float
    total_monthly_income: float
    hem_benchmark: float
    effective_living_expenses: float
    hem_applied: bool
    credit_card_commitment: float
    total_monthly_commitments: float
    monthly_surplus: float
    assessment_rate: float
    max_loan: float
    monthly_repayment: float
    dti_ratio: float
    dti_classification: DtiClassification
    hecs_balance: float = 0.0
