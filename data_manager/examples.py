"""演示数据，供 load-examples 命令写入工作簿"""

EXAMPLE_GOALS = [
    {
        "goal_id": "1", "name": "Emergency Fund",
        "target_amount": 10000.0, "current_amount": 2500.0,
        "target_date": "2025-12-31", "monthly_contribution": 500.0,
    },
    {
        "goal_id": "2", "name": "Vacation to Europe",
        "target_amount": 5000.0, "current_amount": 1200.0,
        "target_date": "2025-06-15", "monthly_contribution": 300.0,
    },
    {
        "goal_id": "3", "name": "New Car Down Payment",
        "target_amount": 8000.0, "current_amount": 3200.0,
        "target_date": "2025-09-01", "monthly_contribution": 400.0,
    },
]

EXAMPLE_EXPENSES = [
    {"expense_id": "1", "amount": 45.99, "description": "Grocery shopping", "date": "2024-01-15", "category": "Food"},
    {"expense_id": "2", "amount": 12.50, "description": "Coffee and pastry", "date": "2024-01-14", "category": "Food"},
    {"expense_id": "3", "amount": 89.99, "description": "Gas station", "date": "2024-01-13", "category": "Transportation"},
    {"expense_id": "4", "amount": 25.00, "description": "Movie tickets", "date": "2024-01-12", "category": "Entertainment"},
]

# 最新记录在前
EXAMPLE_CONVERSIONS = [
    {"from_amount": 1000.0, "from_currency": "USD", "to_amount": 850.0, "to_currency": "EUR",
     "rate": 0.85, "timestamp": "2025-01-20T10:30:00"},
    {"from_amount": 500.0, "from_currency": "EUR", "to_amount": 590.0, "to_currency": "USD",
     "rate": 1.18, "timestamp": "2025-01-19T14:15:00"},
    {"from_amount": 10000.0, "from_currency": "JPY", "to_amount": 91.0, "to_currency": "USD",
     "rate": 0.0091, "timestamp": "2025-01-18T09:45:00"},
]
