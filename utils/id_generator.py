import uuid
from datetime import datetime


def generate_goal_id() -> str:
    return f"SG-{datetime.now().strftime('%Y%m%d%H%M%S')}-{uuid.uuid4().hex[:4]}"


def generate_expense_id() -> str:
    return f"EX-{datetime.now().strftime('%Y%m%d%H%M%S')}-{uuid.uuid4().hex[:4]}"
