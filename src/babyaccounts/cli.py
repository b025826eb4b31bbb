"""Flask CLI commands for the Baby Accounts console."""

from __future__ import annotations

import click

from .infra.api import BackendError


def init_app(app) -> None:
    """Register CLI commands on the Flask app."""

    @app.cli.command("babyaccounts-report")
    @click.option("--business", default="", help="Only transactions for this business")
    @click.option("--type", "type_", default="", help="Only transactions of this type")
    @click.option("--ledger", default="", help="Only transactions in this ledger")
    @click.option("--head", default="", help="Only transactions under this head")
    @click.option("--mode", default="", help="Only transactions paid with this mode")
    def babyaccounts_report(business: str, type_: str, ledger: str, head: str, mode: str) -> None:
        """Print credit/debit totals for the (optionally filtered) transactions."""

        from .extensions import transaction_repository
        from .services.formatting import format_currency
        from .services.reports import build_report, load_report_snapshot

        try:
            snapshot = load_report_snapshot(transaction_repository())
        except BackendError as exc:
            raise click.ClickException(f"Failed to load transactions: {exc.user_message()}")

        view = build_report(
            snapshot,
            {"business": business, "type": type_, "ledger": ledger, "head": head, "mode": mode},
        )
        symbol = app.config["BABYACCOUNTS_CONFIG"].CURRENCY_SYMBOL
        totals = view.totals
        click.echo(f"Transactions: {len(view.transactions)}")
        click.echo(f"Total credit: {format_currency(totals.total_credit, symbol)}")
        click.echo(f"Total debit:  {format_currency(totals.total_debit, symbol)}")
        click.echo(
            f"Net balance:  {format_currency(totals.net_amount, symbol)} ({totals.net_direction})"
        )

    @app.cli.command("babyaccounts-ping")
    def babyaccounts_ping() -> None:
        """Check that the backend API answers."""

        from .extensions import get_api

        api = get_api()
        if not api.ping():
            raise click.ClickException(f"Backend at {api.base_url} is not reachable.")
        click.echo(f"Backend at {api.base_url} is reachable.")
