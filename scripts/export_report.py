import argparse
import asyncio
import logging
from pathlib import Path

from fastapi import HTTPException

from organic_trace.core.errors import RemoteError
from organic_trace.core.logging import setup_logging
from organic_trace.dependencies import build_table_client
from organic_trace.services.analytics_service import (
    build_report,
    collect_analytics,
    dump_report,
    report_filename,
)

logger = logging.getLogger(__name__)


def parse_args():
    parser = argparse.ArgumentParser(description="Export the supply-chain analytics report.")
    parser.add_argument(
        "--output",
        default=None,
        help="Output file (defaults to supply-chain-report-<date>.json).",
    )
    return parser.parse_args()


async def _export(output):
    report = build_report(await collect_analytics(build_table_client()))
    path = Path(output or report_filename())
    path.write_text(dump_report(report), encoding="utf-8")
    return path


def main():
    setup_logging()
    args = parse_args()
    try:
        path = asyncio.run(_export(args.output))
    except RemoteError as exc:
        logger.error("Report export failed: %s", exc.message)
        raise SystemExit(1) from exc
    except HTTPException as exc:
        # Raised by backend selection when settings are incomplete.
        logger.error("Report export failed: %s", exc.detail)
        raise SystemExit(1) from exc
    print("Report written to {}".format(path))


if __name__ == "__main__":
    main()
