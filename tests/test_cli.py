"""命令行测试"""
from datetime import date

import pytest
from click.testing import CliRunner

from cli import cli
from data_manager.excel_handler import get_all_expenses, get_all_goals, save_goal
from data_manager.schema import SavingsGoal


@pytest.fixture
def run(temp_excel):
    runner = CliRunner()

    def _run(*args, **kwargs):
        return runner.invoke(cli, ["--data-file", str(temp_excel), *args], **kwargs)
    return _run


class TestLoan:
    def test_defaults(self, run):
        result = run("loan")
        assert result.exit_code == 0, result.output
        assert "Monthly payment: $1,520.06" in result.output

    def test_csv_has_every_month(self, run):
        result = run("loan", "--principal", "12000", "--annual-rate", "6", "--term-years", "1", "--csv")
        assert result.exit_code == 0
        lines = result.output.strip().splitlines()
        assert lines[0] == "period,payment,principal,interest,balance"
        assert len(lines) == 13

    def test_zero_rate(self, run):
        result = run("loan", "--annual-rate", "0")
        assert result.exit_code == 0
        assert "Not computable" in result.output

    def test_invalid_principal(self, run):
        result = run("loan", "--principal", "-5")
        assert result.exit_code != 0
        assert "Loan amount must be greater than 0" in result.output


class TestInvest:
    def test_defaults(self, run):
        result = run("invest")
        assert result.exit_code == 0, result.output
        assert "Final amount: $691,1" in result.output

    def test_zero_years(self, run):
        result = run("invest", "--years", "0")
        assert "Not computable" in result.output


class TestGoals:
    def test_add_list_evaluate(self, run):
        result = run("goal-add", "--name", "Trip", "--target", "5000", "--current", "1000",
                     "--target-date", "2025-11-01", "--monthly", "300")
        assert result.exit_code == 0, result.output
        goal_id = result.output.split("ID '")[1].split("'")[0]

        result = run("goal-list", "--as-of", "2025-01-01")
        assert "Trip" in result.output

        result = run("goal-evaluate", "--goal-id", goal_id, "--as-of", "2025-01-01")
        assert result.exit_code == 0, result.output
        assert "Progress: 20.0%" in result.output

        result = run("goal-update", "--goal-id", goal_id, "--current", "5000")
        assert result.exit_code == 0
        result = run("goal-evaluate", "--goal-id", goal_id, "--as-of", "2025-01-01")
        assert "Status: Reached" in result.output

    def test_overdue_goal_status(self, run):
        result = run("goal-add", "--name", "Late", "--target", "1000",
                     "--target-date", "2024-06-01", "--monthly", "100")
        goal_id = result.output.split("ID '")[1].split("'")[0]
        result = run("goal-evaluate", "--goal-id", goal_id, "--as-of", "2025-01-01")
        assert "Status: Past Due" in result.output

    @pytest.mark.parametrize("field, value", [("--target", "nan"), ("--current", "inf"), ("--monthly", "nan")])
    def test_non_finite_goal_rejected(self, run, temp_excel, field, value):
        args = {"--target": "5000", "--current": "0", "--monthly": "100"}
        args[field] = value
        result = run("goal-add", "--name", "Trip", "--target-date", "2025-11-01",
                     *[item for pair in args.items() for item in pair])
        assert result.exit_code != 0
        assert "finite" in result.output
        assert get_all_goals(temp_excel) == []

    def test_update_rejects_nan(self, run, temp_excel):
        save_goal(SavingsGoal(5000, 100, date(2025, 11, 1), 0, "g-1", "Trip"), temp_excel)
        result = run("goal-update", "--goal-id", "g-1", "--current", "nan")
        assert result.exit_code != 0
        assert get_all_goals(temp_excel)[0].current_amount == 100

    def test_bad_stored_goal_reported(self, run, temp_excel):
        save_goal(SavingsGoal(0, 100, date(2025, 11, 1), 0, "g-1", "Broken"), temp_excel)
        result = run("goal-list", "--as-of", "2025-01-01")
        assert result.exit_code == 1
        assert "target amount must be greater than 0" in result.output
        assert isinstance(result.exception, SystemExit)

    def test_missing_goal(self, run):
        result = run("goal-evaluate", "--goal-id", "nope")
        assert result.exit_code != 0
        assert "not found" in result.output


class TestExpensesAndCurrency:
    def test_expense_summary(self, run):
        run("expense-add", "--amount", "45.99", "--description", "Groceries", "--category", "Food")
        run("expense-add", "--amount", "10", "--description", "Parking")
        result = run("expense-summary")
        assert result.exit_code == 0, result.output
        assert "Total expenses: $55.99" in result.output
        assert "Number of expenses: 2" in result.output

    def test_infinite_expense_rejected(self, run, temp_excel):
        result = run("expense-add", "--amount", "inf", "--description", "Oops")
        assert result.exit_code != 0
        assert "finite" in result.output
        assert get_all_expenses(temp_excel) == []

    def test_nan_conversion_rejected(self, run):
        result = run("convert", "--amount", "nan")
        assert result.exit_code != 0
        assert "finite" in result.output

    @pytest.mark.parametrize("command, option", [("loan", "--principal"), ("invest", "--annual-return")])
    def test_non_finite_engine_inputs(self, run, command, option):
        result = run(command, option, "nan")
        assert result.exit_code != 0
        assert "finite" in result.output

    def test_convert_and_history(self, run):
        result = run("convert", "--amount", "1000", "--from", "USD", "--to", "EUR")
        assert result.exit_code == 0, result.output
        assert "€850.00" in result.output
        assert "rate 0.8500" in result.output
        assert "$1,000.00" in run("history").output

    def test_load_examples(self, run):
        result = run("load-examples", "--yes")
        assert result.exit_code == 0, result.output
        assert "Emergency Fund" in run("goal-list").output
