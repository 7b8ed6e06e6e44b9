from datetime import date, datetime
from typing import Union

from dateutil.relativedelta import relativedelta


def add_months(d: date, months: int) -> date:
    """日期加 N 个月"""
    return d + relativedelta(months=months)


def parse_date(value: Union[str, date, datetime]) -> date:
    """将 Excel/CLI 中读到的日期统一转为 date"""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return datetime.strptime(str(value)[:10], "%Y-%m-%d").date()
