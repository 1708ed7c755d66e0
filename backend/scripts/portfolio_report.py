"""Print current holdings and the portfolio summary from the database."""

from __future__ import annotations

import argparse
import asyncio

from app.config import get_settings
from app.core.logging import setup_logging
from app.db.session import Database
from app.services.valuation import compute_portfolio
from portfolio_tracker import PortfolioValuation


def format_report(valuation: PortfolioValuation, currency: str) -> str:
    lines = [
        f"{'Symbol':<10}{'Shares':>10}{'Avg':>12}{'Latest':>12}{'Value':>16}{'P/L':>16}{'%':>9}",
    ]
    for holding in sorted(valuation.holdings, key=lambda h: h.symbol):
        latest = f"{holding.latest_price:.2f}" if holding.latest_price is not None else "n/a"
        lines.append(
            f"{holding.symbol:<10}{holding.shares_held:>10}{holding.avg_buy_price:>12.2f}{latest:>12}"
            f"{holding.market_value:>16.2f}{holding.unrealized_pl:>16.2f}{holding.percent_updown:>8.2f}%"
        )
    summary = valuation.summary
    lines.extend(
        [
            "",
            f"Total investment:   {currency} {summary.total_investment:,.2f}",
            f"Total market value: {currency} {summary.total_market_value:,.2f}",
            f"Unrealized P/L:     {currency} {summary.total_unrealized_pl:,.2f} ({summary.total_percent_updown:.2f}%)",
            f"Realized profit:    {currency} {summary.realized_profit:,.2f}",
        ]
    )
    return "\n".join(lines)


async def _run(database_url: str | None) -> None:
    settings = get_settings()
    database = Database(database_url or settings.database_url)
    try:
        async with database.session() as session:
            valuation = await compute_portfolio(session, settings)
    finally:
        await database.dispose()
    print(format_report(valuation, settings.currency_label))


def main() -> None:
    parser = argparse.ArgumentParser(description="Print holdings and portfolio summary")
    parser.add_argument("--database-url", default=None, help="Override the configured database URL")
    args = parser.parse_args()
    setup_logging()
    asyncio.run(_run(args.database_url))


if __name__ == "__main__":
    main()
