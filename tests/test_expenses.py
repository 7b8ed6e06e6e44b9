"""支出汇总测试"""
from datetime import date

from core.expenses import summarize_expenses
from data_manager.schema import Expense


def _expense(i, amount, category=None):
    return Expense(str(i), amount, f"item {i}", date(2024, 1, i), category)


class TestSummary:
    def test_empty(self):
        summary = summarize_expenses([])
        assert summary["total"] == 0.0
        assert summary["count"] == 0
        assert summary["by_category"].empty

    def test_totals_and_grouping(self):
        expenses = [
            _expense(1, 45.99, "Food"),
            _expense(2, 12.50, "Food"),
            _expense(3, 89.99, "Transportation"),
            _expense(4, 25.00),
        ]
        summary = summarize_expenses(expenses)
        assert abs(summary["total"] - 173.48) < 1e-9
        assert summary["count"] == 4

        by_cat = summary["by_category"].set_index("category")
        assert list(summary["by_category"]["category"]) == ["Transportation", "Food", "Uncategorized"]
        assert abs(by_cat.loc["Food", "total"] - 58.49) < 1e-9
        assert by_cat.loc["Food", "count"] == 2
        assert by_cat.loc["Uncategorized", "count"] == 1
