#!/usr/bin/env python3
"""
Capitol Trades Query Service - Command Line Entry Point

Runs one query and prints its JSON report, or serves the HTTP API:

    python main.py trades --stock apple --type BUY --days 30
    python main.py top-assets --party DEMOCRAT --limit 5
    python main.py politician-stats "nancy pelosi"
    python main.py serve --port 8000
"""
from __future__ import annotations

import json
import sys
import logging

from config.settings import get_config
from modules.errors import CapitolTradesError
from modules import queries

# Module logger
main_logger = logging.getLogger("capitol_trades.main")


def _add_days(parser) -> None:
    parser.add_argument(
        "--days",
        type=int,
        default=get_config().query.default_days,
        help="Lookback window in days (30, 90, 180 or 365)"
    )


def _add_party(parser) -> None:
    parser.add_argument(
        "--party",
        default=None,
        help="DEMOCRAT or REPUBLICAN (omit for all)"
    )


def _add_limit(parser, maximum: int) -> None:
    parser.add_argument(
        "--limit",
        type=int,
        default=get_config().query.default_result_limit,
        help=f"Number of results (1-{maximum})"
    )


def build_parser():
    """Build the argument parser with one subcommand per operation."""
    import argparse

    query_config = get_config().query

    parser = argparse.ArgumentParser(
        description="Congressional stock trade lookups from Capitol Trades"
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging"
    )
    commands = parser.add_subparsers(dest="command", required=True)

    serve = commands.add_parser("serve", help="Run the HTTP API")
    serve.add_argument("--host", default=get_config().api.host)
    serve.add_argument("--port", type=int, default=get_config().api.port)
    serve.add_argument("--reload", action="store_true", help="Reload on code changes")

    trades = commands.add_parser("trades", help="List recent trades")
    trades.add_argument("--stock", default=None, help="Company name or ticker")
    trades.add_argument("--politician", default=None, help="Politician name")
    _add_party(trades)
    trades.add_argument(
        "--type",
        dest="types",
        action="append",
        default=None,
        help="Transaction type, repeatable (BUY, SELL, RECEIVE, EXCHANGE)"
    )
    _add_days(trades)

    top = commands.add_parser("top-assets", help="Most traded assets")
    _add_party(top)
    top.add_argument("--type", dest="types", action="append", default=None)
    _add_days(top)
    _add_limit(top, query_config.max_top_assets)

    politician = commands.add_parser("politician-stats", help="Statistics for one politician")
    politician.add_argument("politician", help="Politician name")
    _add_days(politician)

    asset = commands.add_parser("asset-stats", help="Statistics for one asset")
    asset.add_argument("stock", help="Company name or ticker")
    _add_days(asset)

    momentum = commands.add_parser("buy-momentum", help="Assets with net buying")
    _add_party(momentum)
    _add_days(momentum)
    _add_limit(momentum, query_config.max_momentum_assets)

    party = commands.add_parser("party-momentum", help="Net buying split by party")
    _add_days(party)
    _add_limit(party, query_config.max_momentum_assets)

    return parser


def run_command(args) -> dict:
    """Dispatch parsed arguments to the matching query operation."""
    if args.command == "trades":
        return queries.get_politician_trades(
            stock=args.stock, politician=args.politician,
            party=args.party, types=args.types, days=args.days,
        )
    if args.command == "top-assets":
        return queries.get_top_traded_assets(
            party=args.party, types=args.types, days=args.days, limit=args.limit,
        )
    if args.command == "politician-stats":
        return queries.get_politician_stats(politician=args.politician, days=args.days)
    if args.command == "asset-stats":
        return queries.get_asset_stats(stock=args.stock, days=args.days)
    if args.command == "buy-momentum":
        return queries.get_buy_momentum_assets(party=args.party, days=args.days, limit=args.limit)
    if args.command == "party-momentum":
        return queries.get_party_buy_momentum(days=args.days, limit=args.limit)
    raise ValueError(f"Unknown command: {args.command}")


def main(argv=None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)

    if args.debug:
        logging.getLogger().setLevel(logging.DEBUG)

    if args.command == "serve":
        import uvicorn
        main_logger.info(f"Serving API on {args.host}:{args.port}")
        uvicorn.run("api.main:app", host=args.host, port=args.port, reload=args.reload)
        return 0

    try:
        result = run_command(args)
    except CapitolTradesError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(json.dumps(result, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
