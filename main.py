#!/usr/bin/env python
"""CLI for the travel intel pipeline."""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from pydantic import BaseModel, field_validator

from travel_intel.config import create_from_config, get_default_config_path, load_config
from travel_intel.errors import ConfigurationError

logger = logging.getLogger(__name__)


class CLIArgs(BaseModel):
    """Validated CLI arguments."""

    country: str
    config: Path
    log: bool = False
    log_dir: str = "logs"
    show_trace: bool = False

    @field_validator("country")
    @classmethod
    def country_must_not_be_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Country name must not be blank")
        return v.strip()

    @field_validator("config")
    @classmethod
    def config_must_exist(cls, v: Path) -> Path:
        if not v.exists():
            raise ValueError(f"Config file not found: {v}")
        return v


async def run(args: CLIArgs) -> None:
    """Execute the pipeline with the given configuration.

    Args:
        args: Validated CLI arguments.
    """
    config = load_config(args.config)
    pipeline, run_logger = create_from_config(
        config,
        log_override=args.log if args.log else None,
        log_dir_override=args.log_dir if args.log_dir != "logs" else None,
    )

    logger.info(f"Running intel pipeline for: {args.country}")
    logger.info(f"Config: {args.config}")

    try:
        report, trace = await pipeline.run(args.country)
    finally:
        await pipeline.aclose()

    if report.notice:
        logger.info(f"\n{report.notice}")
    for key, items in report.categories.items():
        logger.info(f"\n== {key} ({len(items)} items) ==")
        for i, item in enumerate(items, 1):
            logger.info(f"{i}. {item.summary}")
            logger.info(f"   Source: {item.source}")

    logger.info("\n--- Usage Summary ---")
    logger.info(f"Search requests: {report.usage.search_requests}")
    logger.info(f"Pages fetched: {report.usage.scrape_requests}")
    logger.info(f"Model calls: {len(report.usage.api_calls)}")
    logger.info(f"Input tokens: {report.usage.input_tokens:,}")
    logger.info(f"Output tokens: {report.usage.output_tokens:,}")

    if args.show_trace:
        logger.info("\n--- Execution Trace ---")
        for line in trace:
            logger.info(line)

    if run_logger and run_logger.last_log_path:
        logger.info(f"\nRun log written to: {run_logger.last_log_path}")


def main() -> None:
    """Entry point for the CLI."""
    parser = argparse.ArgumentParser(description="Gather recent travel safety intel for a country.")
    parser.add_argument(
        "country",
        help="Country name, e.g. Laos",
    )
    parser.add_argument(
        "--config",
        "-c",
        type=Path,
        default=None,
        help="Path to YAML config file (default: configs/default.yaml)",
    )
    parser.add_argument(
        "--log",
        action="store_true",
        default=False,
        help="Enable intermediate pipeline logging to JSON file",
    )
    parser.add_argument(
        "--log-dir",
        type=str,
        default="logs",
        help="Directory for log files (default: logs/)",
    )
    parser.add_argument(
        "--trace",
        action="store_true",
        default=False,
        help="Print the execution trace after the report",
    )

    logging.basicConfig(level=logging.INFO, format="%(message)s")

    ns = parser.parse_args()
    config_path: Path = ns.config if ns.config else get_default_config_path()

    try:
        args = CLIArgs(
            country=ns.country,
            config=config_path,
            log=ns.log,
            log_dir=ns.log_dir,
            show_trace=ns.trace,
        )
    except Exception as e:
        logger.error(str(e))
        sys.exit(1)

    try:
        asyncio.run(run(args))
    except ConfigurationError as e:
        logger.error(f"Configuration error: {e}")
        sys.exit(1)
    except KeyboardInterrupt:
        sys.exit(130)


if __name__ == "__main__":
    main()
