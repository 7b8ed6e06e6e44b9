"""复利增长测算：期初本金 + 每月定投"""
from typing import Optional

import pandas as pd

from config.constants import GROWTH_COLUMNS
from core.errors import InvalidInputError
from data_manager.schema import GrowthTerms, GrowthResult
from utils.logging import get_logger

logger = get_logger(__name__)


def _future_value(principal: float, contribution: float, r: float, months: int) -> float:
    """闭式终值，定投在每月月末投入"""
    fv_principal = principal * (1 + r) ** months
    if r > 0:
        fv_contrib = contribution * ((1 + r) ** months - 1) / r
    else:
        fv_contrib = contribution * months
    return fv_principal + fv_contrib


def _simulate_yearly(principal: float, contribution: float, r: float, months: int) -> pd.DataFrame:
    """逐月模拟并按年汇总；不足 12 个月的尾段单独成一行"""
    rows = []
    balance = principal
    year_contrib = 0.0
    year_interest = 0.0
    for month in range(1, months + 1):
        interest = balance * r
        balance += interest + contribution
        year_interest += interest
        year_contrib += contribution
        if month % 12 == 0 or month == months:
            rows.append({
                "year": (month + 11) // 12,
                "contributions": year_contrib,
                "interest": year_interest,
                "balance": balance,
            })
            year_contrib = 0.0
            year_interest = 0.0
    return pd.DataFrame(rows, columns=GROWTH_COLUMNS)


def project(
    initial_principal: float,
    monthly_contribution: float,
    annual_rate_percent: float,
    years: float,
) -> Optional[GrowthResult]:
    """测算终值、总投入、总收益及逐年明细。

    终值用闭式公式，逐年明细用逐月模拟独立得出，两者应在浮点误差内一致。
    年限非正时返回 None；本金、定投或收益率为负时抛 InvalidInputError
    （负收益率下公式无定义）。
    """
    if initial_principal < 0:
        raise InvalidInputError("initial principal cannot be negative")
    if monthly_contribution < 0:
        raise InvalidInputError("monthly contribution cannot be negative")
    if annual_rate_percent < 0:
        raise InvalidInputError("annual rate cannot be negative")

    terms = GrowthTerms(initial_principal, monthly_contribution, annual_rate_percent, years)
    months = int(round(terms.years * 12)) if terms.years > 0 else 0
    if months <= 0:
        logger.debug("growth_not_computable", years=years)
        return None

    r = terms.annual_rate_percent / 100 / 12
    final_amount = _future_value(terms.initial_principal, terms.monthly_contribution, r, months)
    total_contributions = terms.initial_principal + terms.monthly_contribution * months
    yearly = _simulate_yearly(terms.initial_principal, terms.monthly_contribution, r, months)

    logger.debug(
        "growth_projected",
        months=months, rate=annual_rate_percent, final_amount=final_amount,
    )
    return GrowthResult(
        final_amount=final_amount,
        total_contributions=total_contributions,
        total_interest=final_amount - total_contributions,
        yearly=yearly,
    )
