"""核心计算：固定利率贷款月供、完整还款计划、IRR 真实年化率"""
from typing import Optional

import pandas as pd
from scipy import optimize

from config.constants import AMORTIZATION_COLUMNS
from core.errors import InvalidInputError
from data_manager.schema import LoanTerms, LoanResult
from utils.logging import get_logger

logger = get_logger(__name__)


def calc_monthly_payment(
    principal: float,
    annual_rate_percent: float,
    periods: int,
) -> Optional[float]:
    """等额本息月供：M = P·r·(1+r)^n / ((1+r)^n - 1)

    利率为 0 或期数非正时公式无意义，返回 None。
    n 极大或 r 极小时 (1+r)^n - 1 会损失精度，属已知限制。
    """
    r = annual_rate_percent / 100 / 12
    if r == 0 or periods <= 0:
        return None
    growth = (1 + r) ** periods
    return principal * r * growth / (growth - 1)


def amortize(
    principal: float,
    annual_rate_percent: float,
    term_years: float,
) -> Optional[LoanResult]:
    """生成贷款月供与逐期还款计划。

    本金非正、利率或年限为负时抛 InvalidInputError；
    利率或年限为 0 时公式无意义，返回 None。
    """
    if principal <= 0:
        raise InvalidInputError("principal must be greater than 0")
    if annual_rate_percent < 0:
        raise InvalidInputError("annual rate cannot be negative")
    if term_years < 0:
        raise InvalidInputError("loan term cannot be negative")

    terms = LoanTerms(principal, annual_rate_percent, term_years)
    n = terms.periods
    r = terms.periodic_rate
    if r == 0 or n == 0:
        logger.debug("loan_not_computable", rate=annual_rate_percent, term_years=term_years)
        return None

    monthly_payment = calc_monthly_payment(principal, annual_rate_percent, n)
    total_payment = monthly_payment * n

    records = []
    balance = principal
    for period in range(1, n + 1):
        interest = balance * r
        prin = monthly_payment - interest
        balance -= prin
        # 最后一期吸收浮点尾差
        if period == n or balance < 0:
            balance = 0.0
        records.append({
            "period": period,
            "payment": monthly_payment,
            "principal": prin,
            "interest": interest,
            "balance": balance,
        })

    logger.debug(
        "loan_amortized",
        principal=principal, rate=annual_rate_percent, periods=n,
        monthly_payment=monthly_payment,
    )
    return LoanResult(
        monthly_payment=monthly_payment,
        total_payment=total_payment,
        total_interest=total_payment - principal,
        schedule=pd.DataFrame(records, columns=AMORTIZATION_COLUMNS),
    )


def calc_effective_annual_rate(principal: float, schedule: pd.DataFrame) -> float:
    """用 IRR 法计算真实年化率 (%)，无解时返回 0"""
    if schedule.empty or principal <= 0:
        return 0.0
    cash_flows = [-principal]
    cash_flows.extend(schedule["payment"].tolist())

    def npv(rate):
        return sum(cf / (1 + rate) ** i for i, cf in enumerate(cash_flows))

    try:
        monthly_irr = optimize.brentq(npv, -0.5, 1.0)
    except (ValueError, RuntimeError):
        logger.warning("irr_not_found", principal=principal, periods=len(schedule))
        return 0.0
    annual = (1 + monthly_irr) ** 12 - 1
    return round(annual * 100, 4)
