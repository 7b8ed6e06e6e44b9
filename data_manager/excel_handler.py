import shutil
from datetime import datetime
from pathlib import Path
from typing import List, Optional

import pandas as pd

from config.constants import (
    SHEET_SAVINGS_GOALS, SHEET_EXPENSES, SHEET_CONVERSIONS, SHEET_CONFIG,
    SAVINGS_GOALS_COLUMNS, EXPENSES_COLUMNS, CONVERSIONS_COLUMNS, CONFIG_COLUMNS,
)
from config.settings import (
    EXCEL_FILE, BACKUP_KEEP, HISTORY_LIMIT,
    DEFAULT_BASE_CURRENCY, DEFAULT_LOAN_RATE, DEFAULT_ANNUAL_RETURN,
)
from data_manager.examples import EXAMPLE_GOALS, EXAMPLE_EXPENSES, EXAMPLE_CONVERSIONS
from data_manager.schema import SavingsGoal, Expense, ConversionResult
from utils.date_utils import parse_date
from utils.logging import get_logger

logger = get_logger(__name__)

SHEETS = {
    SHEET_SAVINGS_GOALS: SAVINGS_GOALS_COLUMNS,
    SHEET_EXPENSES: EXPENSES_COLUMNS,
    SHEET_CONVERSIONS: CONVERSIONS_COLUMNS,
    SHEET_CONFIG: CONFIG_COLUMNS,
}


def _default_config_rows() -> List[dict]:
    now = datetime.now().isoformat()
    return [
        {"key": "base_currency", "value": DEFAULT_BASE_CURRENCY, "description": "Default currency", "updated_at": now},
        {"key": "loan_rate", "value": str(DEFAULT_LOAN_RATE), "description": "Default loan rate (%)", "updated_at": now},
        {"key": "annual_return", "value": str(DEFAULT_ANNUAL_RETURN), "description": "Default annual return (%)", "updated_at": now},
    ]


def init_excel(filepath: Path = EXCEL_FILE):
    """初始化 Excel 文件，创建所有 Sheet 和表头"""
    filepath.parent.mkdir(parents=True, exist_ok=True)
    if filepath.exists():
        return

    with pd.ExcelWriter(filepath, engine="openpyxl") as writer:
        for sheet_name, columns in SHEETS.items():
            if sheet_name == SHEET_CONFIG:
                df = pd.DataFrame(_default_config_rows(), columns=columns)
            else:
                df = pd.DataFrame(columns=columns)
            df.to_excel(writer, sheet_name=sheet_name, index=False)
    logger.info("workbook_created", path=str(filepath))


def backup_excel(filepath: Path = EXCEL_FILE):
    """写入前自动备份，只保留最近 BACKUP_KEEP 个"""
    if filepath.exists():
        ts = datetime.now().strftime("%Y%m%d_%H%M%S_%f")
        backup_path = filepath.with_suffix(f".xlsx.bak_{ts}")
        shutil.copy2(filepath, backup_path)
        backups = sorted(filepath.parent.glob(f"{filepath.stem}.xlsx.bak_*"))
        for old in backups[:-BACKUP_KEEP]:
            old.unlink()


def read_sheet(sheet_name: str, filepath: Path = EXCEL_FILE) -> pd.DataFrame:
    """读取指定 Sheet，缺失时返回带表头的空表"""
    init_excel(filepath)
    try:
        df = pd.read_excel(filepath, sheet_name=sheet_name, engine="openpyxl")
    except ValueError:
        df = pd.DataFrame(columns=SHEETS.get(sheet_name, []))
    return df


def write_sheet(df: pd.DataFrame, sheet_name: str, filepath: Path = EXCEL_FILE):
    """写入指定 Sheet（覆盖该 Sheet，保留其他 Sheet）"""
    init_excel(filepath)
    backup_excel(filepath)

    with pd.ExcelWriter(filepath, engine="openpyxl", mode="a", if_sheet_exists="replace") as writer:
        df.to_excel(writer, sheet_name=sheet_name, index=False)
    logger.info("sheet_written", sheet=sheet_name, rows=len(df), path=str(filepath))


class SheetRepository:
    """单个 Sheet 的 load()/save() 仓储，注入给展示层使用"""

    def __init__(self, sheet_name: str, filepath: Path = EXCEL_FILE):
        self.sheet_name = sheet_name
        self.columns = SHEETS[sheet_name]
        self.filepath = filepath

    def load(self) -> pd.DataFrame:
        df = read_sheet(self.sheet_name, self.filepath)
        for col in self.columns:
            if col not in df.columns:
                df[col] = None
        return df[self.columns].copy()

    def save(self, df: pd.DataFrame):
        write_sheet(df[self.columns], self.sheet_name, self.filepath)


def _clean(value):
    return None if pd.isna(value) else value


# ---- 储蓄目标 ----

def goal_from_row(row) -> SavingsGoal:
    return SavingsGoal(
        goal_id=str(row["goal_id"]),
        name=str(row["name"]),
        target_amount=float(row["target_amount"]),
        current_amount=float(_clean(row["current_amount"]) or 0),
        target_date=parse_date(row["target_date"]),
        monthly_contribution=float(_clean(row["monthly_contribution"]) or 0),
    )


def get_all_goals(filepath: Path = EXCEL_FILE) -> List[SavingsGoal]:
    df = SheetRepository(SHEET_SAVINGS_GOALS, filepath).load()
    return [goal_from_row(row) for _, row in df.iterrows()]


def get_goal_by_id(goal_id: str, filepath: Path = EXCEL_FILE) -> Optional[SavingsGoal]:
    df = SheetRepository(SHEET_SAVINGS_GOALS, filepath).load()
    match = df[df["goal_id"].astype(str) == goal_id]
    if match.empty:
        return None
    return goal_from_row(match.iloc[0])


def save_goal(goal: SavingsGoal, filepath: Path = EXCEL_FILE):
    """新增或覆盖同 id 的目标"""
    repo = SheetRepository(SHEET_SAVINGS_GOALS, filepath)
    df = repo.load()
    record = {
        "goal_id": goal.goal_id,
        "name": goal.name,
        "target_amount": goal.target_amount,
        "current_amount": goal.current_amount,
        "target_date": goal.target_date.strftime("%Y-%m-%d"),
        "monthly_contribution": goal.monthly_contribution,
    }
    df = df[df["goal_id"].astype(str) != goal.goal_id]
    df = pd.concat([df, pd.DataFrame([record])], ignore_index=True)
    repo.save(df)


def update_current_amount(goal_id: str, amount: float, filepath: Path = EXCEL_FILE) -> bool:
    repo = SheetRepository(SHEET_SAVINGS_GOALS, filepath)
    df = repo.load()
    mask = df["goal_id"].astype(str) == goal_id
    if not mask.any():
        return False
    df["current_amount"] = df["current_amount"].astype(float)
    df.loc[mask, "current_amount"] = float(amount)
    repo.save(df)
    return True


def delete_goal(goal_id: str, filepath: Path = EXCEL_FILE):
    repo = SheetRepository(SHEET_SAVINGS_GOALS, filepath)
    df = repo.load()
    repo.save(df[df["goal_id"].astype(str) != goal_id])


# ---- 支出 ----

def expense_from_row(row) -> Expense:
    category = _clean(row["category"])
    return Expense(
        expense_id=str(row["expense_id"]),
        amount=float(row["amount"]),
        description=str(_clean(row["description"]) or ""),
        date=parse_date(row["date"]),
        category=str(category) if category else None,
    )


def get_all_expenses(filepath: Path = EXCEL_FILE) -> List[Expense]:
    df = SheetRepository(SHEET_EXPENSES, filepath).load()
    return [expense_from_row(row) for _, row in df.iterrows()]


def add_expense(expense: Expense, filepath: Path = EXCEL_FILE):
    repo = SheetRepository(SHEET_EXPENSES, filepath)
    df = repo.load()
    record = {
        "expense_id": expense.expense_id,
        "amount": expense.amount,
        "description": expense.description,
        "date": expense.date.strftime("%Y-%m-%d"),
        "category": expense.category,
    }
    repo.save(pd.concat([df, pd.DataFrame([record])], ignore_index=True))


def delete_expense(expense_id: str, filepath: Path = EXCEL_FILE):
    repo = SheetRepository(SHEET_EXPENSES, filepath)
    df = repo.load()
    repo.save(df[df["expense_id"].astype(str) != expense_id])


# ---- 换算记录 ----

def get_conversion_history(filepath: Path = EXCEL_FILE) -> List[ConversionResult]:
    df = SheetRepository(SHEET_CONVERSIONS, filepath).load()
    return [
        ConversionResult(
            from_amount=float(row["from_amount"]),
            from_currency=str(row["from_currency"]),
            to_amount=float(row["to_amount"]),
            to_currency=str(row["to_currency"]),
            rate=float(row["rate"]),
            timestamp=datetime.fromisoformat(str(row["timestamp"])),
        )
        for _, row in df.iterrows()
    ]


def record_conversion(
    result: ConversionResult,
    limit: int = HISTORY_LIMIT,
    filepath: Path = EXCEL_FILE,
):
    """最新记录在前，只保留最近 limit 条"""
    repo = SheetRepository(SHEET_CONVERSIONS, filepath)
    df = repo.load()
    record = {
        "from_amount": result.from_amount,
        "from_currency": result.from_currency,
        "to_amount": result.to_amount,
        "to_currency": result.to_currency,
        "rate": result.rate,
        "timestamp": result.timestamp.isoformat(),
    }
    df = pd.concat([pd.DataFrame([record]), df], ignore_index=True)
    repo.save(df.head(limit))


# ---- 示例数据 ----

def load_example_data(filepath: Path = EXCEL_FILE):
    """写入演示用的储蓄目标、支出和换算记录（覆盖现有数据）"""
    SheetRepository(SHEET_SAVINGS_GOALS, filepath).save(
        pd.DataFrame(EXAMPLE_GOALS, columns=SAVINGS_GOALS_COLUMNS))
    SheetRepository(SHEET_EXPENSES, filepath).save(
        pd.DataFrame(EXAMPLE_EXPENSES, columns=EXPENSES_COLUMNS))
    SheetRepository(SHEET_CONVERSIONS, filepath).save(
        pd.DataFrame(EXAMPLE_CONVERSIONS, columns=CONVERSIONS_COLUMNS))


# ---- 系统配置 ----

def get_config(key: str, filepath: Path = EXCEL_FILE) -> Optional[str]:
    df = read_sheet(SHEET_CONFIG, filepath)
    match = df[df["key"] == key]
    if match.empty:
        return None
    return str(match.iloc[0]["value"])


def get_all_config(filepath: Path = EXCEL_FILE) -> pd.DataFrame:
    """获取所有系统配置"""
    return read_sheet(SHEET_CONFIG, filepath)


def set_config(key: str, value: str, description: str = "", filepath: Path = EXCEL_FILE):
    df = read_sheet(SHEET_CONFIG, filepath)
    now = datetime.now().isoformat()
    if key in df["key"].values:
        df.loc[df["key"] == key, "value"] = value
        df.loc[df["key"] == key, "updated_at"] = now
        if description:
            df.loc[df["key"] == key, "description"] = description
    else:
        new_row = pd.DataFrame([{
            "key": key, "value": value,
            "description": description, "updated_at": now,
        }])
        df = pd.concat([df, new_row], ignore_index=True)
    write_sheet(df, SHEET_CONFIG, filepath)
