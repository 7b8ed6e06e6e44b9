"""支出汇总"""
from typing import Dict, Iterable

import pandas as pd

from config.constants import CATEGORY_SUMMARY_COLUMNS, UNCATEGORIZED
from data_manager.schema import Expense


def summarize_expenses(expenses: Iterable[Expense]) -> Dict:
    """返回总额、笔数及按类别汇总（按金额降序）"""
    df = pd.DataFrame(
        [{"category": e.category or UNCATEGORIZED, "amount": e.amount} for e in expenses],
        columns=["category", "amount"],
    )
    if df.empty:
        return {
            "total": 0.0,
            "count": 0,
            "by_category": pd.DataFrame(columns=CATEGORY_SUMMARY_COLUMNS),
        }

    by_category = (
        df.groupby("category")["amount"]
        .agg(total="sum", count="count")
        .reset_index()
        .sort_values(["total", "category"], ascending=[False, True])
        .reset_index(drop=True)
    )
    return {
        "total": float(df["amount"].sum()),
        "count": int(len(df)),
        "by_category": by_category[CATEGORY_SUMMARY_COLUMNS],
    }
