#!/usr/bin/env python3
"""
LibreSpeed CLI -- measure ping, jitter, download and upload speed against
a LibreSpeed server.

Usage::

    python librespeed_cli.py
"""
from __future__ import annotations

import argparse
import asyncio
import sys

from librespeed.client import LibrespeedClient, Result
from librespeed.constants import DEFAULT_BASE_URL
from librespeed.errors import SpeedtestError, Stage
from librespeed.logger import setup_log
from ui.dashboard import (
    STAGE_LABELS,
    console,
    print_error,
    print_final_results,
    print_header,
)
from ui.output import format_text_result


# ---------------------------------------------------------------------------
# Core test runner
# ---------------------------------------------------------------------------

async def run_speedtest(base_url: str = DEFAULT_BASE_URL) -> Result:
    """Run the full test against *base_url*, showing a spinner per stage."""
    async with LibrespeedClient(base_url) as client:
        with console.status(STAGE_LABELS[Stage.IDENTITY]) as status:
            client.on_stage = lambda stage: status.update(STAGE_LABELS[stage])
            return await client.run_test()


def report(result: Result) -> None:
    if console.is_terminal:
        print_final_results(result)
    else:
        print(format_text_result(result))


# ---------------------------------------------------------------------------
# CLI
# ---------------------------------------------------------------------------

def main() -> None:
    parser = argparse.ArgumentParser(
        description=f"LibreSpeed CLI -- speed test against {DEFAULT_BASE_URL}",
    )
    parser.parse_args()

    setup_log(console=console)

    if console.is_terminal:
        print_header(DEFAULT_BASE_URL)

    try:
        result = asyncio.run(run_speedtest(DEFAULT_BASE_URL))
    except KeyboardInterrupt:
        print_error("Test cancelled by user")
        sys.exit(1)
    except SpeedtestError as exc:
        print_error(f"Speed test failed: {exc}")
        sys.exit(1)

    report(result)


if __name__ == "__main__":
    main()
