DISCLAIMER = (
    "This tool implements common serviceability calculations aligned with Australian lender practice "
    "(e.g., HEM living-expense floors, income shading and the APRA serviceability buffer). "
    "Results are estimates only; lender policy, credit assessment and individual circumstances prevail. "
    "Income used must be stable and documented, and declared expenses should reflect actual spending."
)

# Monthly Household Expenditure Measure floors (approximate, published
# annually by the Melbourne Institute). Columns: 0, 1, 2, 3+ dependants.
HEM_TABLE = {
    "single": [1400.0, 1800.0, 2100.0, 2400.0],
    "couple": [2100.0, 2400.0, 2700.0, 3000.0],
}

INCOME_SHADING = {"salary": 1.0, "rental": 0.8, "other": 0.8}

APRA_BUFFER = 3.0
CREDIT_CARD_COMMITMENT_RATE = 0.038

DTI_BANDS = {"amber": 4.0, "red": 6.0}
DSR_BANDS = {"green": 40.0, "amber": 60.0}

MAX_LVR = 0.80
REPAYMENTS_PER_YEAR = {"weekly": 52, "fortnightly": 26, "monthly": 12}
CAPITAL_CATEGORIES = {"stamp_duty", "conveyancing", "buyers_agent_fees", "initial_repairs"}

DEFAULT_INPUTS = {
    "gross_salary": 0.0,
    "rental_income": 0.0,
    "other_income": 0.0,
    "household_type": "single",
    "dependants": 0,
    "living_expenses": 0.0,
    "existing_property_loans": 0.0,
    "credit_card_limits": 0.0,
    "other_loans": 0.0,
    "hecs_balance": 0.0,
    "target_rate": 6.2,
    "loan_term_years": 30,
    "floor_rate": 5.5,
    "existing_debt": 0.0,
    "gross_annual_income": 0.0,
}
