"""储蓄目标追踪：进度、剩余时间、所需月存额"""
import math
from datetime import date
from typing import Optional

from config.constants import GoalStatus
from config.settings import DAYS_PER_MONTH
from core.errors import InvalidInputError
from data_manager.schema import SavingsGoal, GoalStats
from utils.date_utils import add_months
from utils.logging import get_logger

logger = get_logger(__name__)


def _check_goal(goal: SavingsGoal):
    if not all(math.isfinite(v) for v in (goal.target_amount, goal.current_amount, goal.monthly_contribution)):
        raise InvalidInputError("goal amounts must be finite numbers")
    if goal.target_amount <= 0:
        raise InvalidInputError("target amount must be greater than 0")
    if goal.current_amount < 0:
        raise InvalidInputError("current amount cannot be negative")
    if goal.monthly_contribution < 0:
        raise InvalidInputError("monthly contribution cannot be negative")


def evaluate(goal: SavingsGoal, as_of: Optional[date] = None) -> GoalStats:
    """按 as_of（默认今天）计算目标快照。

    月数按每月 30 天近似折算。目标日期已过且仍有缺口时，
    required_monthly_contribution 为 None，表示需立即补足。
    """
    _check_goal(goal)
    as_of = as_of or date.today()

    progress = min(100.0, goal.current_amount / goal.target_amount * 100)
    remaining = max(0.0, goal.target_amount - goal.current_amount)
    days_remaining = max(0, (goal.target_date - as_of).days)
    months_remaining = max(0, math.ceil(days_remaining / DAYS_PER_MONTH))

    if remaining == 0:
        required = 0.0
    elif months_remaining > 0:
        required = remaining / months_remaining
    else:
        required = None

    logger.debug(
        "goal_evaluated",
        goal_id=goal.goal_id, remaining=remaining, months_remaining=months_remaining,
        required=required,
    )
    return GoalStats(
        progress_percent=progress,
        remaining=remaining,
        days_remaining=days_remaining,
        months_remaining=months_remaining,
        required_monthly_contribution=required,
        is_on_track=required is not None and goal.monthly_contribution >= required,
    )


def goal_status(stats: GoalStats) -> GoalStatus:
    if stats.remaining == 0:
        return GoalStatus.REACHED
    if stats.required_monthly_contribution is None:
        return GoalStatus.OVERDUE
    return GoalStatus.ON_TRACK if stats.is_on_track else GoalStatus.BEHIND


def estimate_completion_date(goal: SavingsGoal, as_of: Optional[date] = None) -> Optional[date]:
    """按计划月存额估算达成日期（自然月）；月存额为 0 且未达成时返回 None"""
    _check_goal(goal)
    as_of = as_of or date.today()
    remaining = goal.target_amount - goal.current_amount
    if remaining <= 0:
        return as_of
    if goal.monthly_contribution == 0:
        return None
    return add_months(as_of, math.ceil(remaining / goal.monthly_contribution))
