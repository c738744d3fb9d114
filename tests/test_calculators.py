import math

import pytest

from borrowpower.calculators import (
    annualize_income,
    calculate_dti,
    calculate_max_loan,
    get_assessment_rate,
    get_dti_classification,
    get_hem_benchmark,
    monthly_payment,
    round_half_up,
    shade_income,
)


def test_hem_benchmark_table():
    assert get_hem_benchmark("single", 0) == 1400
    assert get_hem_benchmark("single", 1) == 1800
    assert get_hem_benchmark("single", 2) == 2100
    assert get_hem_benchmark("couple", 0) == 2100
    assert get_hem_benchmark("couple", 1) == 2400
    assert get_hem_benchmark("couple", 2) == 2700


@pytest.mark.parametrize("household", ["single", "couple"])
@pytest.mark.parametrize("dependants", [3, 4, 5, 10])
def test_hem_benchmark_clamps_three_or_more(household, dependants):
    assert get_hem_benchmark(household, dependants) == get_hem_benchmark(household, 3)


def test_shade_income_by_source():
    assert shade_income(10000, "salary") == 10000
    assert shade_income(5000, "rental") == pytest.approx(4000)
    assert shade_income(2000, "other") == pytest.approx(1600)
    assert shade_income(0, "salary") == 0
    assert shade_income(0, "rental") == 0


@pytest.mark.parametrize("amount", [0.0, 1.5, 1234.56, 99999.0])
def test_salary_is_not_shaded(amount):
    assert shade_income(amount, "salary") == amount


def test_assessment_rate_buffer_and_floor():
    assert get_assessment_rate(6.0, 5.5) == pytest.approx(9.0)
    assert get_assessment_rate(2.0, 5.5) == 5.5
    assert get_assessment_rate(2.5, 5.5) == pytest.approx(5.5)


@pytest.mark.parametrize("rate,floor", [(0.0, 5.5), (1.0, 8.0), (6.2, 5.5), (9.0, 0.0)])
def test_assessment_rate_never_below_floor(rate, floor):
    assert get_assessment_rate(rate, floor) >= floor


@pytest.mark.parametrize("surplus", [0, -0.01, -500])
@pytest.mark.parametrize("rate,term", [(6.0, 30), (0.0, 25), (9.2, 15)])
def test_max_loan_zero_without_surplus(surplus, rate, term):
    assert calculate_max_loan(surplus, rate, term) == 0


def test_max_loan_known_values():
    thirty = calculate_max_loan(2000, 6.0, 30)
    fifteen = calculate_max_loan(2000, 6.0, 15)
    assert 333000 < thirty < 334000
    assert 237000 < fifteen < 238000
    assert thirty == float(int(thirty))


def test_max_loan_zero_rate_uses_straight_line():
    assert calculate_max_loan(1000, 0.0, 30) == 360000
    assert monthly_payment(360000, 0.0, 30) == pytest.approx(1000)


def test_max_loan_inverts_monthly_payment():
    principal = calculate_max_loan(2500, 7.5, 30)
    assert abs(monthly_payment(principal, 7.5, 30) - 2500) < 0.01


def test_monthly_payment_degenerate_inputs():
    assert monthly_payment(0, 6.0, 30) == 0
    assert monthly_payment(100000, 6.0, 0) == 0


@pytest.mark.parametrize(
    "fn,args,expected",
    [
        (shade_income, (-1000, "salary"), -1000),
        (shade_income, (-1000, "rental"), -800),
        (shade_income, (-500, "other"), -400),
        (calculate_dti, (-200000, 100000), -2.0),
    ],
)
def test_negative_amounts_propagate(fn, args, expected):
    assert fn(*args) == pytest.approx(expected)


def test_dti_ratio():
    assert calculate_dti(600000, 100000) == pytest.approx(6.0)
    assert calculate_dti(0, 100000) == 0


def test_dti_sentinels():
    assert calculate_dti(0, 0) == 0
    assert calculate_dti(500000, 0) == math.inf


def test_dti_classification_bands():
    assert get_dti_classification(3.5) == "green"
    assert get_dti_classification(3.999999) == "green"
    assert get_dti_classification(4.0) == "amber"
    assert get_dti_classification(5.9) == "amber"
    assert get_dti_classification(5.999999) == "amber"
    assert get_dti_classification(6.0) == "red"
    assert get_dti_classification(8.0) == "red"
    assert get_dti_classification(math.inf) == "red"


def test_round_half_up():
    assert round_half_up(2.5) == 3
    assert round_half_up(1234.5) == 1235
    assert round_half_up(1234.49) == 1234
    assert round_half_up(-2.5) == -2
    assert round_half_up(math.inf) == math.inf


def test_annualize_income():
    assert annualize_income(8000, 3000, 500) == 138000


def test_annualize_income_single_definition():
    from borrowpower import models

    assert annualize_income is models.annualize_income
