"""
Interest and Amortization Calculator

Pure numeric functions over principal, rate and time.

Rates are percentages (``12`` means 12%). Time is in years unless noted
otherwise and ``frequency`` is the number of compounding periods per
year. No rounding is applied beyond IEEE-754 float arithmetic; rounding
for display is the presentation layer's job.
"""

DEFAULT_FREQUENCY = 12


def simple_interest(principal: float, rate: float, years: float) -> float:
    return principal * (rate / 100) * years


def compound_interest(
    principal: float,
    rate: float,
    years: float,
    frequency: int = DEFAULT_FREQUENCY,
) -> float:
    """Interest earned (not the final amount) under periodic compounding."""
    return principal * (1 + (rate / 100) / frequency) ** (frequency * years) - principal


def future_value(
    principal: float,
    rate: float,
    years: float,
    frequency: int = DEFAULT_FREQUENCY,
) -> float:
    return principal * (1 + (rate / 100) / frequency) ** (frequency * years)


def present_value(
    future: float,
    rate: float,
    years: float,
    frequency: int = DEFAULT_FREQUENCY,
) -> float:
    return future / (1 + (rate / 100) / frequency) ** (frequency * years)


def installment_payment(principal: float, rate: float, periods: int) -> float:
    """
    Fixed monthly installment of an amortized loan (Price system).

    ``rate`` is the nominal annual rate in percent; it is converted to a
    monthly rate. A zero rate degrades to straight division.
    """
    if rate == 0:
        return principal / periods

    monthly_rate = rate / 100 / 12
    growth = (1 + monthly_rate) ** periods
    return principal * (monthly_rate * growth) / (growth - 1)


def remaining_balance(
    principal: float,
    rate: float,
    total_periods: int,
    paid_periods: int,
) -> float:
    """
    Unpaid principal after ``paid_periods`` installments.

    Walks the schedule one period at a time so the result follows the
    exact float behavior of ``installment_payment``. The installment is
    priced from ``rate * 12`` while each period accrues interest at
    ``rate / 100 / 12``; a fully paid schedule always clamps to zero.
    """
    if rate == 0:
        return principal * (total_periods - paid_periods) / total_periods

    monthly_rate = rate / 100 / 12
    installment = installment_payment(principal, rate * 12, total_periods)

    balance = principal
    for _ in range(paid_periods):
        interest = balance * monthly_rate
        balance -= installment - interest

    return max(0.0, balance)
