"""展示用表格：预览截取、列重命名、金额格式化"""
import pandas as pd

from config.settings import PREVIEW_HEAD_ROWS, DEFAULT_BASE_CURRENCY
from core.goals import goal_status
from utils.formatters import fmt_amount, fmt_percent


def schedule_preview(schedule: pd.DataFrame, head: int = PREVIEW_HEAD_ROWS) -> pd.DataFrame:
    """前 head 期 + 最后一期；不足时原样返回"""
    if len(schedule) <= head + 1:
        return schedule.copy()
    return pd.concat([schedule.head(head), schedule.tail(1)])


def format_amortization_table(
    schedule: pd.DataFrame,
    show_all: bool = False,
    currency: str = DEFAULT_BASE_CURRENCY,
) -> pd.DataFrame:
    """还款计划展示表"""
    display_df = schedule if show_all else schedule_preview(schedule)
    display_df = display_df.rename(columns={
        "period": "Month",
        "payment": "Payment",
        "principal": "Principal",
        "interest": "Interest",
        "balance": "Balance",
    })
    for col in ["Payment", "Principal", "Interest", "Balance"]:
        display_df[col] = display_df[col].apply(lambda x: fmt_amount(x, currency))
    return display_df.reset_index(drop=True)


def format_growth_table(yearly: pd.DataFrame, currency: str = DEFAULT_BASE_CURRENCY) -> pd.DataFrame:
    """逐年投资明细展示表"""
    display_df = yearly.rename(columns={
        "year": "Year",
        "contributions": "Contributions",
        "interest": "Interest",
        "balance": "Balance",
    })
    for col in ["Contributions", "Interest", "Balance"]:
        display_df[col] = display_df[col].apply(lambda x: fmt_amount(x, currency))
    return display_df


def format_goals_table(
    goals: list,
    stats: list,
    currency: str = DEFAULT_BASE_CURRENCY,
) -> pd.DataFrame:
    rows = []
    for goal, st in zip(goals, stats):
        required = st.required_monthly_contribution
        rows.append({
            "ID": goal.goal_id,
            "Goal": goal.name,
            "Target": fmt_amount(goal.target_amount, currency),
            "Current": fmt_amount(goal.current_amount, currency),
            "Progress": fmt_percent(st.progress_percent),
            "Remaining": fmt_amount(st.remaining, currency),
            "Target Date": goal.target_date.strftime("%Y-%m-%d"),
            "Days Left": st.days_remaining,
            "Monthly": fmt_amount(goal.monthly_contribution, currency),
            "Required Monthly": "Due now" if required is None else fmt_amount(required, currency),
            "Status": goal_status(st).label,
        })
    return pd.DataFrame(rows)


def format_expenses_table(expenses: list, currency: str = DEFAULT_BASE_CURRENCY) -> pd.DataFrame:
    rows = [{
        "ID": e.expense_id,
        "Date": e.date.strftime("%Y-%m-%d"),
        "Description": e.description,
        "Category": e.category or "",
        "Amount": fmt_amount(e.amount, currency),
    } for e in sorted(expenses, key=lambda e: e.date, reverse=True)]
    return pd.DataFrame(rows)


def format_conversion_table(history: list) -> pd.DataFrame:
    rows = [{
        "Time": c.timestamp.strftime("%Y-%m-%d %H:%M"),
        "From": fmt_amount(c.from_amount, c.from_currency),
        "To": fmt_amount(c.to_amount, c.to_currency),
        "Rate": f"{c.rate:.4f}",
    } for c in history]
    return pd.DataFrame(rows)
