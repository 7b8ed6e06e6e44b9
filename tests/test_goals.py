"""储蓄目标测试"""
from datetime import date, timedelta

import pytest
from structlog.testing import capture_logs

from config.constants import GoalStatus
from core.errors import InvalidInputError
from core.goals import evaluate, estimate_completion_date, goal_status
from data_manager.schema import SavingsGoal


def make_goal(target=10000, current=2500, target_date=date(2025, 10, 28), monthly=500):
    return SavingsGoal(
        target_amount=target,
        current_amount=current,
        target_date=target_date,
        monthly_contribution=monthly,
    )


class TestEvaluate:
    def test_behind_schedule(self, as_of):
        """目标 1 万、已存 2500、剩 10 个月（300 天）、月存 500 -> 需每月 750"""
        goal = make_goal(target_date=as_of + timedelta(days=300))
        stats = evaluate(goal, as_of)
        assert stats.progress_percent == pytest.approx(25.0)
        assert stats.remaining == 7500
        assert stats.days_remaining == 300
        assert stats.months_remaining == 10
        assert stats.required_monthly_contribution == pytest.approx(750)
        assert stats.is_on_track is False

    def test_on_track(self, as_of):
        goal = make_goal(monthly=800, target_date=as_of + timedelta(days=300))
        assert evaluate(goal, as_of).is_on_track is True

    def test_thirty_day_months_round_up(self, as_of):
        goal = make_goal(target_date=as_of + timedelta(days=31))
        stats = evaluate(goal, as_of)
        assert stats.months_remaining == 2
        assert stats.required_monthly_contribution == pytest.approx(3750)

    def test_goal_reached(self, as_of):
        goal = make_goal(current=10000, monthly=0, target_date=as_of + timedelta(days=90))
        stats = evaluate(goal, as_of)
        assert stats.progress_percent == 100
        assert stats.remaining == 0
        assert stats.required_monthly_contribution == 0
        assert stats.is_on_track is True

    def test_reached_after_target_date(self, as_of):
        goal = make_goal(current=10000, monthly=0, target_date=as_of - timedelta(days=5))
        stats = evaluate(goal, as_of)
        assert stats.is_on_track is True
        assert goal_status(stats) == GoalStatus.REACHED

    def test_over_saved_caps_progress(self, as_of):
        stats = evaluate(make_goal(current=12000), as_of)
        assert stats.progress_percent == 100
        assert stats.remaining == 0

    def test_target_date_passed(self, as_of):
        goal = make_goal(target_date=as_of - timedelta(days=10))
        stats = evaluate(goal, as_of)
        assert stats.days_remaining == 0
        assert stats.months_remaining == 0
        assert stats.required_monthly_contribution is None
        assert stats.is_on_track is False
        assert goal_status(stats) == GoalStatus.OVERDUE

    def test_due_today(self, as_of):
        stats = evaluate(make_goal(target_date=as_of), as_of)
        assert stats.required_monthly_contribution is None

    def test_defaults_to_today(self):
        goal = make_goal(target_date=date.today() + timedelta(days=60))
        assert evaluate(goal).days_remaining == 60

    def test_idempotent(self, as_of):
        goal = make_goal()
        assert evaluate(goal, as_of) == evaluate(goal, as_of)

    def test_logs_evaluation(self, as_of):
        with capture_logs() as logs:
            evaluate(make_goal(target_date=as_of + timedelta(days=300)), as_of)
        assert logs[0]["event"] == "goal_evaluated"
        assert logs[0]["log_level"] == "debug"
        assert logs[0]["months_remaining"] == 10

    @pytest.mark.parametrize("kwargs", [
        {"target": 0}, {"target": -100}, {"current": -1}, {"monthly": -5},
        {"target": float("nan")}, {"current": float("inf")},
    ])
    def test_invalid_goal(self, as_of, kwargs):
        with pytest.raises(InvalidInputError):
            evaluate(make_goal(**kwargs), as_of)


class TestStatus:
    def test_behind(self, as_of):
        stats = evaluate(make_goal(target_date=as_of + timedelta(days=300)), as_of)
        assert goal_status(stats) == GoalStatus.BEHIND
        assert goal_status(stats).label == "Behind Schedule"


class TestCompletionDate:
    def test_calendar_months(self, as_of):
        # 缺口 7500，每月 500 -> 15 个月
        assert estimate_completion_date(make_goal(), as_of) == date(2026, 4, 1)

    def test_partial_month_rounds_up(self, as_of):
        assert estimate_completion_date(make_goal(monthly=700), as_of) == date(2025, 12, 1)

    def test_already_reached(self, as_of):
        assert estimate_completion_date(make_goal(current=10000), as_of) == as_of

    def test_no_contribution(self, as_of):
        assert estimate_completion_date(make_goal(monthly=0), as_of) is None
