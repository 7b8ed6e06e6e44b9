import math
from datetime import date
from typing import Optional, Tuple

from config.constants import STATIC_EXCHANGE_RATES


def _all_finite(*values) -> bool:
    """排除 nan / inf（click 的 float 类型会接受它们）"""
    return all(math.isfinite(v) for v in values)


def validate_loan_inputs(
    principal: float,
    annual_rate: float,
    term_years: float,
) -> Tuple[bool, str]:
    """校验贷款输入，返回 (是否合法, 错误信息)"""
    if not _all_finite(principal, annual_rate, term_years):
        return False, "Inputs must be finite numbers"
    if principal <= 0:
        return False, "Loan amount must be greater than 0"
    if annual_rate < 0 or annual_rate > 100:
        return False, "Interest rate must be between 0 and 100%"
    if term_years < 0 or term_years > 50:
        return False, "Loan term must be between 0 and 50 years"
    return True, ""


def validate_growth_inputs(
    initial_principal: float,
    monthly_contribution: float,
    annual_return: float,
    years: float,
) -> Tuple[bool, str]:
    """校验投资测算输入"""
    if not _all_finite(initial_principal, monthly_contribution, annual_return, years):
        return False, "Inputs must be finite numbers"
    if initial_principal < 0:
        return False, "Initial investment cannot be negative"
    if monthly_contribution < 0:
        return False, "Monthly contribution cannot be negative"
    if annual_return < 0 or annual_return > 100:
        return False, "Annual return must be between 0 and 100%"
    if years < 0 or years > 100:
        return False, "Investment period must be between 0 and 100 years"
    return True, ""


def validate_goal(
    name: str,
    target_amount: float,
    current_amount: float,
    target_date: Optional[date],
    monthly_contribution: float,
) -> Tuple[bool, str]:
    """校验储蓄目标：名称、目标金额、目标日期必填"""
    if not name or not name.strip():
        return False, "Goal name cannot be empty"
    if not _all_finite(target_amount, current_amount, monthly_contribution):
        return False, "Amounts must be finite numbers"
    if target_amount <= 0:
        return False, "Target amount must be greater than 0"
    if current_amount < 0:
        return False, "Current amount cannot be negative"
    if target_date is None:
        return False, "Target date is required"
    if monthly_contribution < 0:
        return False, "Monthly contribution cannot be negative"
    return True, ""


def validate_current_amount(current_amount: float) -> Tuple[bool, str]:
    if not _all_finite(current_amount):
        return False, "Current amount must be a finite number"
    if current_amount < 0:
        return False, "Current amount cannot be negative"
    return True, ""

def validate_expense(amount: float, description: str) -> Tuple[bool, str]:
    if not _all_finite(amount):
        return False, "Amount must be a finite number"
    if amount <= 0:
        return False, "Amount must be greater than 0"
    if not description or not description.strip():
        return False, "Description cannot be empty"
    return True, ""


def validate_conversion(amount: float, from_currency: str, to_currency: str) -> Tuple[bool, str]:
    if not _all_finite(amount):
        return False, "Amount must be a finite number"
    if amount <= 0:
        return False, "Amount must be greater than 0"
    for code in (from_currency, to_currency):
        if code not in STATIC_EXCHANGE_RATES:
            return False, f"Unsupported currency: {code}"
    return True, ""
