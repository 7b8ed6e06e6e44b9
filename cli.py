from datetime import datetime
from pathlib import Path

import click

from config.settings import (
    EXCEL_FILE, LOG_LEVEL,
    DEFAULT_LOAN_PRINCIPAL, DEFAULT_LOAN_RATE, DEFAULT_LOAN_TERM_YEARS,
    DEFAULT_INITIAL_PRINCIPAL, DEFAULT_MONTHLY_CONTRIBUTION,
    DEFAULT_ANNUAL_RETURN, DEFAULT_INVESTMENT_YEARS,
    DEFAULT_BASE_CURRENCY, DEFAULT_TARGET_CURRENCY,
)
from components.tables import (
    format_amortization_table, format_growth_table, format_goals_table,
    format_expenses_table, format_conversion_table,
)
from core.calculator import amortize, calc_effective_annual_rate
from core.currency import convert, supported_currencies
from core.errors import FinanceError
from core.expenses import summarize_expenses
from core.goals import evaluate, estimate_completion_date, goal_status
from core.growth import project
from data_manager.data_validator import (
    validate_loan_inputs, validate_growth_inputs, validate_goal, validate_current_amount,
    validate_expense, validate_conversion,
)
from data_manager.excel_handler import (
    get_all_goals, get_goal_by_id, save_goal, update_current_amount, delete_goal,
    get_all_expenses, add_expense, delete_expense,
    get_conversion_history, record_conversion, load_example_data,
    get_all_config, get_config, set_config,
)
from data_manager.schema import SavingsGoal, Expense
from utils.formatters import fmt_amount, fmt_rate, fmt_months, is_displayable
from utils.id_generator import generate_goal_id, generate_expense_id
from utils.logging import configure_logging, get_logger

logger = get_logger(__name__)

CURRENCY_CHOICE = click.Choice(supported_currencies())


def _check(result):
    ok, message = result
    if not ok:
        raise click.BadParameter(message)


def _require_finite(**values):
    bad = [name for name, v in values.items() if not is_displayable(v)]
    if bad:
        raise click.ClickException(
            f"Result overflowed ({', '.join(bad)}); try a smaller term or rate.")


def _base_currency(filepath: Path) -> str:
    return get_config("base_currency", filepath) or DEFAULT_BASE_CURRENCY


@click.group()
@click.option('--data-file', type=click.Path(dir_okay=False, path_type=Path), default=EXCEL_FILE,
              show_default=True, help='Excel workbook used for goals, expenses and history')
@click.option('--log-level', type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR'], case_sensitive=False),
              default=LOG_LEVEL, show_default=True, help='Log level (stderr)')
@click.pass_context
def cli(ctx, data_file, log_level):
    """Personal finance toolkit: loans, investments, goals, expenses and currency."""
    configure_logging(log_level)
    ctx.obj = {"data_file": data_file}


@cli.command()
@click.option('--principal', type=float, default=DEFAULT_LOAN_PRINCIPAL, show_default=True, help='Loan amount')
@click.option('--annual-rate', type=float, default=DEFAULT_LOAN_RATE, show_default=True, help='Annual interest rate (%)')
@click.option('--term-years', type=float, default=DEFAULT_LOAN_TERM_YEARS, show_default=True, help='Loan term in years')
@click.option('--all', 'show_all', is_flag=True, help='Show every month instead of a preview')
@click.option('--csv', 'as_csv', is_flag=True, help='Print the full schedule as CSV')
@click.option('--irr', is_flag=True, help='Also report the effective annual rate (IRR)')
@click.pass_context
def loan(ctx, principal, annual_rate, term_years, show_all, as_csv, irr):
    """Monthly payment and amortization schedule for a fixed-rate loan."""
    _check(validate_loan_inputs(principal, annual_rate, term_years))
    try:
        result = amortize(principal, annual_rate, term_years)
    except FinanceError as e:
        raise click.ClickException(str(e))
    if result is None:
        click.echo("Not computable: interest rate and term must both be greater than 0.")
        return
    _require_finite(monthly_payment=result.monthly_payment, total_payment=result.total_payment)

    if as_csv:
        click.echo(result.schedule.to_csv(index=False))
        return

    currency = _base_currency(ctx.obj["data_file"])
    click.echo(f"Monthly payment: {fmt_amount(result.monthly_payment, currency)}")
    click.echo(f"Total payment: {fmt_amount(result.total_payment, currency)}")
    click.echo(f"Total interest: {fmt_amount(result.total_interest, currency)}")
    if irr:
        rate = calc_effective_annual_rate(principal, result.schedule)
        click.echo(f"Effective annual rate: {fmt_rate(rate)}")
    click.echo("")
    click.echo(format_amortization_table(result.schedule, show_all, currency).to_string(index=False))


@cli.command()
@click.option('--principal', type=float, default=DEFAULT_INITIAL_PRINCIPAL, show_default=True, help='Initial investment')
@click.option('--monthly', type=float, default=DEFAULT_MONTHLY_CONTRIBUTION, show_default=True, help='Monthly contribution')
@click.option('--annual-return', type=float, default=DEFAULT_ANNUAL_RETURN, show_default=True, help='Expected annual return (%)')
@click.option('--years', type=float, default=DEFAULT_INVESTMENT_YEARS, show_default=True, help='Investment period in years')
@click.option('--csv', 'as_csv', is_flag=True, help='Print the yearly breakdown as CSV')
@click.pass_context
def invest(ctx, principal, monthly, annual_return, years, as_csv):
    """Compound growth of an initial investment plus monthly contributions."""
    _check(validate_growth_inputs(principal, monthly, annual_return, years))
    try:
        result = project(principal, monthly, annual_return, years)
    except FinanceError as e:
        raise click.ClickException(str(e))
    if result is None:
        click.echo("Not computable: investment period must be greater than 0.")
        return
    _require_finite(final_amount=result.final_amount)

    if as_csv:
        click.echo(result.yearly.to_csv(index=False))
        return

    currency = _base_currency(ctx.obj["data_file"])
    click.echo(f"Final amount: {fmt_amount(result.final_amount, currency)}")
    click.echo(f"Total contributions: {fmt_amount(result.total_contributions, currency)}")
    click.echo(f"Total interest: {fmt_amount(result.total_interest, currency)}")
    click.echo("")
    click.echo(format_growth_table(result.yearly, currency).to_string(index=False))


# ---- 储蓄目标 ----

@cli.command('goal-add')
@click.option('--name', type=str, required=True, help='Goal name')
@click.option('--target', type=float, required=True, help='Target amount')
@click.option('--current', type=float, default=0.0, help='Amount saved so far')
@click.option('--target-date', type=click.DateTime(formats=['%Y-%m-%d']), required=True, help='Target date (YYYY-MM-DD)')
@click.option('--monthly', type=float, default=0.0, help='Planned monthly contribution')
@click.pass_context
def goal_add(ctx, name, target, current, target_date, monthly):
    """Adds a savings goal."""
    _check(validate_goal(name, target, current, target_date, monthly))
    goal = SavingsGoal(
        goal_id=generate_goal_id(),
        name=name.strip(),
        target_amount=target,
        current_amount=current,
        target_date=target_date.date(),
        monthly_contribution=monthly,
    )
    save_goal(goal, ctx.obj["data_file"])
    click.echo(f"Goal '{goal.name}' added with ID '{goal.goal_id}'.")


@cli.command('goal-list')
@click.option('--as-of', type=click.DateTime(formats=['%Y-%m-%d']), help='Evaluate as of this date (default: today)')
@click.pass_context
def goal_list(ctx, as_of):
    """Lists savings goals with their progress."""
    goals = get_all_goals(ctx.obj["data_file"])
    if not goals:
        click.echo("No savings goals yet.")
        return
    as_of_date = as_of.date() if as_of else None
    try:
        stats = [evaluate(g, as_of_date) for g in goals]
    except FinanceError as e:
        raise click.ClickException(str(e))
    currency = _base_currency(ctx.obj["data_file"])
    click.echo(format_goals_table(goals, stats, currency).to_string(index=False))


@cli.command('goal-evaluate')
@click.option('--goal-id', type=str, required=True, help='Goal ID')
@click.option('--as-of', type=click.DateTime(formats=['%Y-%m-%d']), help='Evaluate as of this date (default: today)')
@click.pass_context
def goal_evaluate(ctx, goal_id, as_of):
    """Shows the detailed status of one goal."""
    goal = get_goal_by_id(goal_id, ctx.obj["data_file"])
    if goal is None:
        raise click.ClickException(f"Goal with ID '{goal_id}' not found.")
    as_of_date = as_of.date() if as_of else None
    try:
        stats = evaluate(goal, as_of_date)
        finish = estimate_completion_date(goal, as_of_date)
    except FinanceError as e:
        raise click.ClickException(str(e))

    currency = _base_currency(ctx.obj["data_file"])
    click.echo(f"Goal: {goal.name}")
    click.echo(f"Progress: {stats.progress_percent:.1f}%")
    click.echo(f"Remaining: {fmt_amount(stats.remaining, currency)}")
    click.echo(f"Time left: {stats.days_remaining} days (~{fmt_months(stats.months_remaining)})")
    if stats.required_monthly_contribution is None:
        click.echo("Required monthly: target date has passed, the remaining amount is due now")
    else:
        click.echo(f"Required monthly: {fmt_amount(stats.required_monthly_contribution, currency)}")
    click.echo(f"Status: {goal_status(stats).label}")
    if finish is not None:
        click.echo(f"Estimated completion: {finish:%Y-%m-%d}")


@cli.command('goal-update')
@click.option('--goal-id', type=str, required=True, help='Goal ID')
@click.option('--current', type=float, required=True, help='New amount saved so far')
@click.pass_context
def goal_update(ctx, goal_id, current):
    """Updates the amount saved for a goal."""
    _check(validate_current_amount(current))
    if not update_current_amount(goal_id, current, ctx.obj["data_file"]):
        raise click.ClickException(f"Goal with ID '{goal_id}' not found.")
    click.echo(f"Goal '{goal_id}' updated.")


@cli.command('goal-delete')
@click.option('--goal-id', type=str, required=True, help='Goal ID')
@click.pass_context
def goal_delete(ctx, goal_id):
    """Deletes a savings goal."""
    delete_goal(goal_id, ctx.obj["data_file"])
    click.echo(f"Goal '{goal_id}' deleted.")


# ---- 支出 ----

@cli.command('expense-add')
@click.option('--amount', type=float, required=True, help='Amount spent')
@click.option('--description', type=str, required=True, help='What it was for')
@click.option('--date', 'spent_on', type=click.DateTime(formats=['%Y-%m-%d']), help='Date (default: today)')
@click.option('--category', type=str, help='Optional category, e.g. Food')
@click.pass_context
def expense_add(ctx, amount, description, spent_on, category):
    """Records an expense."""
    _check(validate_expense(amount, description))
    expense = Expense(
        expense_id=generate_expense_id(),
        amount=amount,
        description=description.strip(),
        date=spent_on.date() if spent_on else datetime.today().date(),
        category=category or None,
    )
    add_expense(expense, ctx.obj["data_file"])
    click.echo(f"Expense '{expense.description}' added with ID '{expense.expense_id}'.")


@cli.command('expense-list')
@click.pass_context
def expense_list(ctx):
    """Lists expenses, newest first."""
    expenses = get_all_expenses(ctx.obj["data_file"])
    if not expenses:
        click.echo("No expenses recorded.")
        return
    currency = _base_currency(ctx.obj["data_file"])
    click.echo(format_expenses_table(expenses, currency).to_string(index=False))


@cli.command('expense-delete')
@click.option('--expense-id', type=str, required=True, help='Expense ID')
@click.pass_context
def expense_delete(ctx, expense_id):
    """Deletes an expense."""
    delete_expense(expense_id, ctx.obj["data_file"])
    click.echo(f"Expense '{expense_id}' deleted.")


@cli.command('expense-summary')
@click.pass_context
def expense_summary(ctx):
    """Total spent, number of expenses and totals per category."""
    summary = summarize_expenses(get_all_expenses(ctx.obj["data_file"]))
    currency = _base_currency(ctx.obj["data_file"])
    click.echo(f"Total expenses: {fmt_amount(summary['total'], currency)}")
    click.echo(f"Number of expenses: {summary['count']}")
    if summary["count"]:
        by_category = summary["by_category"].copy()
        by_category["total"] = by_category["total"].apply(lambda x: fmt_amount(x, currency))
        click.echo("")
        click.echo(by_category.to_string(index=False))


# ---- 汇率换算 ----

@cli.command('convert')
@click.option('--amount', type=float, required=True, help='Amount to convert')
@click.option('--from', 'from_currency', type=CURRENCY_CHOICE, default=DEFAULT_BASE_CURRENCY, show_default=True)
@click.option('--to', 'to_currency', type=CURRENCY_CHOICE, default=DEFAULT_TARGET_CURRENCY, show_default=True)
@click.option('--no-save', is_flag=True, help='Do not add the conversion to the history')
@click.pass_context
def convert_command(ctx, amount, from_currency, to_currency, no_save):
    """Converts an amount using the static exchange-rate table."""
    _check(validate_conversion(amount, from_currency, to_currency))
    try:
        result = convert(amount, from_currency, to_currency)
    except FinanceError as e:
        raise click.ClickException(str(e))
    if not no_save:
        record_conversion(result, filepath=ctx.obj["data_file"])
    click.echo(
        f"{fmt_amount(result.from_amount, from_currency)} = "
        f"{fmt_amount(result.to_amount, to_currency)} (rate {result.rate:.4f})")


@cli.command('history')
@click.pass_context
def history(ctx):
    """Shows the most recent conversions."""
    records = get_conversion_history(ctx.obj["data_file"])
    if not records:
        click.echo("No conversions yet.")
        return
    click.echo(format_conversion_table(records).to_string(index=False))


@cli.command('load-examples')
@click.confirmation_option(prompt='This replaces existing goals, expenses and history. Continue?')
@click.pass_context
def load_examples(ctx):
    """Loads demonstration goals, expenses and conversions."""
    load_example_data(ctx.obj["data_file"])
    click.echo("Example data loaded.")


# ---- 系统配置 ----

@cli.command('list-configs')
@click.pass_context
def list_configs(ctx):
    """Lists all stored settings."""
    click.echo(get_all_config(ctx.obj["data_file"]).to_string(index=False))


@cli.command('get-config')
@click.option('--key', type=str, required=True, help='Config key')
@click.pass_context
def get_config_command(ctx, key):
    """Gets a stored setting."""
    value = get_config(key, ctx.obj["data_file"])
    if value is not None:
        click.echo(value)
    else:
        click.echo(f"Config with key '{key}' not found.")


@cli.command('set-config')
@click.option('--key', type=str, required=True, help='Config key')
@click.option('--value', type=str, required=True, help='Config value')
@click.option('--description', type=str, default="", help='Description')
@click.pass_context
def set_config_command(ctx, key, value, description):
    """Sets a stored setting."""
    set_config(key, value, description, ctx.obj["data_file"])
    logger.info("config_set", key=key)
    click.echo(f"Config with key '{key}' set successfully.")


if __name__ == "__main__":
    cli()
