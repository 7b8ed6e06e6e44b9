from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

import pandas as pd


@dataclass(frozen=True)
class LoanTerms:
    principal: float
    annual_rate_percent: float
    term_years: float

    @property
    def periodic_rate(self) -> float:
        return self.annual_rate_percent / 100 / 12

    @property
    def periods(self) -> int:
        return int(round(self.term_years * 12))


@dataclass(frozen=True)
class AmortizationRow:
    period: int
    payment: float
    principal: float
    interest: float
    balance: float


@dataclass(frozen=True, eq=False)
class LoanResult:
    monthly_payment: float
    total_payment: float
    total_interest: float
    schedule: pd.DataFrame  # 列见 AMORTIZATION_COLUMNS，完整 n 期

    def rows(self) -> list:
        return [AmortizationRow(**r) for r in self.schedule.to_dict("records")]


@dataclass(frozen=True)
class GrowthTerms:
    initial_principal: float
    monthly_contribution: float
    annual_rate_percent: float
    years: float


@dataclass(frozen=True)
class GrowthYearRow:
    year: int
    contributions: float
    interest: float
    balance: float


@dataclass(frozen=True, eq=False)
class GrowthResult:
    final_amount: float
    total_contributions: float
    total_interest: float
    yearly: pd.DataFrame  # 列见 GROWTH_COLUMNS

    def rows(self) -> list:
        return [GrowthYearRow(**r) for r in self.yearly.to_dict("records")]


@dataclass(frozen=True)
class SavingsGoal:
    target_amount: float
    current_amount: float
    target_date: date
    monthly_contribution: float = 0.0
    goal_id: str = ""
    name: str = ""


@dataclass(frozen=True)
class GoalStats:
    progress_percent: float
    remaining: float
    days_remaining: int
    months_remaining: int
    # None 表示目标日期已过、需立即补足
    required_monthly_contribution: Optional[float]
    is_on_track: bool


@dataclass(frozen=True)
class Expense:
    expense_id: str
    amount: float
    description: str
    date: date
    category: Optional[str] = None


@dataclass(frozen=True)
class ConversionResult:
    from_amount: float
    from_currency: str
    to_amount: float
    to_currency: str
    rate: float
    timestamp: datetime

