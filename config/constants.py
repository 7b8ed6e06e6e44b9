from enum import Enum


class ExpenseCategory(str, Enum):
    FOOD = "Food"
    TRANSPORTATION = "Transportation"
    ENTERTAINMENT = "Entertainment"
    UTILITIES = "Utilities"
    HEALTHCARE = "Healthcare"
    SHOPPING = "Shopping"
    OTHER = "Other"


class GoalStatus(str, Enum):
    ON_TRACK = "on_track"
    BEHIND = "behind"
    OVERDUE = "overdue"  # 目标日期已过且未达成
    REACHED = "reached"

    @property
    def label(self) -> str:
        return {
            "on_track": "On Track",
            "behind": "Behind Schedule",
            "overdue": "Past Due",
            "reached": "Reached",
        }[self.value]


UNCATEGORIZED = "Uncategorized"

# 币种：符号 / 名称
CURRENCIES = {
    "USD": {"symbol": "$", "name": "US Dollar"},
    "EUR": {"symbol": "€", "name": "Euro"},
    "GBP": {"symbol": "£", "name": "British Pound"},
    "JPY": {"symbol": "¥", "name": "Japanese Yen"},
    "CAD": {"symbol": "C$", "name": "Canadian Dollar"},
    "AUD": {"symbol": "A$", "name": "Australian Dollar"},
    "CHF": {"symbol": "CHF", "name": "Swiss Franc"},
}

# 静态汇率表 (from -> to)，仅作演示用途
STATIC_EXCHANGE_RATES = {
    "USD": {"EUR": 0.85, "GBP": 0.73, "JPY": 110.0, "CAD": 1.25, "AUD": 1.35, "CHF": 0.92},
    "EUR": {"USD": 1.18, "GBP": 0.86, "JPY": 129.5, "CAD": 1.47, "AUD": 1.59, "CHF": 1.08},
    "GBP": {"USD": 1.37, "EUR": 1.16, "JPY": 150.5, "CAD": 1.71, "AUD": 1.85, "CHF": 1.26},
    "JPY": {"USD": 0.0091, "EUR": 0.0077, "GBP": 0.0066, "CAD": 0.0113, "AUD": 0.0122, "CHF": 0.0083},
    "CAD": {"USD": 0.80, "EUR": 0.68, "GBP": 0.58, "JPY": 88.0, "AUD": 1.08, "CHF": 0.74},
    "AUD": {"USD": 0.74, "EUR": 0.63, "GBP": 0.54, "JPY": 81.5, "CAD": 0.93, "CHF": 0.68},
    "CHF": {"USD": 1.09, "EUR": 0.93, "GBP": 0.79, "JPY": 119.5, "CAD": 1.35, "AUD": 1.47},
}

# Sheet 名称
SHEET_SAVINGS_GOALS = "savings_goals"
SHEET_EXPENSES = "expenses"
SHEET_CONVERSIONS = "conversion_history"
SHEET_CONFIG = "config"

# 列定义
AMORTIZATION_COLUMNS = ["period", "payment", "principal", "interest", "balance"]

GROWTH_COLUMNS = ["year", "contributions", "interest", "balance"]

SAVINGS_GOALS_COLUMNS = [
    "goal_id", "name", "target_amount", "current_amount",
    "target_date", "monthly_contribution",
]

EXPENSES_COLUMNS = ["expense_id", "amount", "description", "date", "category"]

CONVERSIONS_COLUMNS = [
    "from_amount", "from_currency", "to_amount", "to_currency", "rate", "timestamp",
]

CATEGORY_SUMMARY_COLUMNS = ["category", "total", "count"]

CONFIG_COLUMNS = ["key", "value", "description", "updated_at"]
