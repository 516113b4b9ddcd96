"""WinGo predictor CLI entry point."""

from __future__ import annotations

import argparse
import asyncio
import json
import sys

from wingo.config.loader import ConfigError, ConfigLoader
from wingo.data.redis_cache import RedisCache
from wingo.errors import SessionError
from wingo.session import PredictionSession, build_session


def build_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="wingo",
        description="WinGo BIG/SMALL ensemble predictor (educational; draws are random)",
    )

    mode = parser.add_mutually_exclusive_group(required=True)
    mode.add_argument(
        "--predict",
        action="store_true",
        help="Predict the next draw and score the previous prediction",
    )
    mode.add_argument("--stats", action="store_true", help="Show recent draw statistics")
    mode.add_argument(
        "--backtest",
        action="store_true",
        help="Report the walk-forward accuracy of the ensemble",
    )

    parser.add_argument(
        "--config-dir",
        type=str,
        default="config",
        help="Config directory path (default: config)",
    )
    parser.add_argument(
        "--env",
        type=str,
        default=None,
        help="Environment name (default: from WINGO_ENV)",
    )

    return parser


async def _execute(session: PredictionSession, args: argparse.Namespace) -> dict[str, object]:
    try:
        if args.stats:
            return (await session.stats()).model_dump(mode="json")
        if args.backtest:
            return (await session.backtest()).model_dump(mode="json")

        result = await session.run()
        payload = result.model_dump(mode="json")
        payload["message"] = result.message
        return payload
    finally:
        await session.close()


async def _run(args: argparse.Namespace) -> int:
    config = ConfigLoader(config_dir=args.config_dir, env=args.env)
    try:
        config.load()
        session = build_session(config)
    except ConfigError as exc:
        print(f"Config error: {exc}", file=sys.stderr)
        return 2

    if args.predict and isinstance(session.cache, RedisCache) and not await session.cache.ping():
        print("Redis cache unreachable", file=sys.stderr)
        await session.close()
        return 1

    try:
        payload = await _execute(session, args)
    except SessionError as exc:
        print(json.dumps({"success": False, "error": str(exc)}, indent=2))
        return 1

    print(json.dumps({"success": True, **payload}, indent=2))
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)
    return asyncio.run(_run(args))


if __name__ == "__main__":
    sys.exit(main())
