import numpy as np

from config.constants import CURRENCIES
from config.settings import DEFAULT_BASE_CURRENCY


def is_displayable(value) -> bool:
    """计算结果是否可展示（排除 inf / nan）"""
    try:
        return bool(np.isfinite(value))
    except TypeError:
        return False


def fmt_amount(value: float, currency: str = DEFAULT_BASE_CURRENCY) -> str:
    """格式化金额：1234567.891 -> $1,234,567.89"""
    if not is_displayable(value):
        return "N/A"
    info = CURRENCIES.get(currency)
    if info is None:
        return f"{value:,.2f} {currency}"
    sign = "-" if value < 0 else ""
    return f"{sign}{info['symbol']}{abs(value):,.2f}"


def fmt_rate(value: float) -> str:
    """格式化利率百分比：4.5 -> 4.50%"""
    return f"{value:.2f}%"


def fmt_percent(value: float) -> str:
    """格式化进度百分比：25 -> 25.0%"""
    return f"{value:.1f}%"


def fmt_months(months: int) -> str:
    """格式化月数：30 -> 2y 6m"""
    years = months // 12
    remain = months % 12
    if years == 0:
        return f"{remain}m"
    if remain == 0:
        return f"{years}y"
    return f"{years}y {remain}m"
