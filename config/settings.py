import os
from pathlib import Path

# 项目根目录
PROJECT_ROOT = Path(__file__).parent.parent

# 数据文件路径
DATA_DIR = PROJECT_ROOT / "data"
EXCEL_FILE = DATA_DIR / "finance_data.xlsx"
BACKUP_KEEP = 5

# 日志级别，可由环境变量覆盖
LOG_LEVEL = os.environ.get("FINTOOLS_LOG_LEVEL", "WARNING")

# 贷款计算器默认值
DEFAULT_LOAN_PRINCIPAL = 300000.0
DEFAULT_LOAN_RATE = 4.5  # 年利率 (%)
DEFAULT_LOAN_TERM_YEARS = 30

# 投资计算器默认值
DEFAULT_INITIAL_PRINCIPAL = 10000.0
DEFAULT_MONTHLY_CONTRIBUTION = 500.0
DEFAULT_ANNUAL_RETURN = 7.0  # 年化收益 (%)
DEFAULT_INVESTMENT_YEARS = 30

# 汇率换算
DEFAULT_BASE_CURRENCY = "USD"
DEFAULT_TARGET_CURRENCY = "EUR"
HISTORY_LIMIT = 10  # 仅保留最近 N 条换算记录

# 还款计划预览：前 N 期 + 最后一期
PREVIEW_HEAD_ROWS = 12

# 目标追踪：按 30 天折算为一个月
DAYS_PER_MONTH = 30

# 金额精度
AMOUNT_PRECISION = 2
RATE_PRECISION = 4
