import math

from downsize_analyzer.core.amortization import (
    PAYOFF_EPSILON,
    LoanState,
    advance_year,
    aggregate_yearly,
    amort_schedule,
    fixed_monthly_payment,
)


def test_fixed_payment_known_case():
    # Known approximate monthly payment for 100k @5% over 20y ~ 659.96
    payment = fixed_monthly_payment(100_000, 0.05, 20)
    assert math.isclose(payment, 659.96, rel_tol=1e-3, abs_tol=1e-1)


def test_zero_rate_payment_is_straight_line():
    assert fixed_monthly_payment(120_000, 0.0, 10) == 1_000.0


def test_no_principal_no_payment():
    assert fixed_monthly_payment(0.0, 0.065, 30) == 0.0


def test_interest_plus_principal_equals_payment_until_payoff():
    principal, rate, years = 200_000, 0.04, 25
    payment = fixed_monthly_payment(principal, rate, years)
    df = amort_schedule(principal, rate, years)
    assert len(df) == years * 12
    for _, row in df.iloc[:-1].iterrows():
        assert math.isclose(row["interest"] + row["principal"], payment, rel_tol=1e-12)
    assert df.iloc[-1]["payment"] <= payment + 1e-9


def test_amort_schedule_balance_non_increasing_and_paid_off():
    df = amort_schedule(450_000, 0.065, 30)
    balances = df["balance"].tolist()
    assert all(b2 <= b1 for b1, b2 in zip(balances, balances[1:]))
    assert min(balances) >= 0.0
    assert balances[-1] <= PAYOFF_EPSILON


def test_advance_year_pays_off_mid_year():
    year = advance_year(1_000.0, 600.0, 0.01)
    # month 1: 10 interest, 590 principal; month 2: 4.10 interest, 410 principal
    assert year.months_paid == 2
    assert year.state is LoanState.PAID_OFF
    assert year.paid_off_this_year
    assert math.isclose(year.interest, 14.1)
    assert math.isclose(year.principal, 1_000.0)
    assert year.end_balance == 0.0


def test_paid_off_loan_accrues_nothing():
    year = advance_year(0.0, 600.0, 0.01)
    assert year.state is LoanState.PAID_OFF
    assert year.months_paid == 0
    assert year.interest == 0.0
    assert not year.paid_off_this_year


def test_advance_year_matches_yearly_aggregate():
    principal, rate, years = 300_000, 0.05, 15
    payment = fixed_monthly_payment(principal, rate, years)
    yearly = aggregate_yearly(amort_schedule(principal, rate, years))
    assert yearly["year"].tolist() == list(range(1, years + 1))

    balance = float(principal)
    for _, row in yearly.iterrows():
        step = advance_year(balance, payment, rate / 12)
        assert math.isclose(step.interest, row["interest"], rel_tol=1e-12)
        assert math.isclose(step.end_balance, row["end_balance"], rel_tol=1e-9, abs_tol=1e-9)
        assert step.end_balance <= balance
        balance = step.end_balance
    assert balance <= PAYOFF_EPSILON


def test_empty_schedule_for_no_principal():
    assert amort_schedule(0.0, 0.05, 10).empty
    assert aggregate_yearly(amort_schedule(0.0, 0.05, 10)).empty
