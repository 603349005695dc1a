"""
Plain-text output, used when stdout is not a terminal.
"""
from __future__ import annotations

from librespeed.client import Result


def format_text_result(result: Result) -> str:
    return (
        "Speed Test Results:\n"
        f"IP: {result.ip}\n"
        f"ISP: {result.isp}\n"
        f"Download: {result.download_speed_mbps:.2f} Mbps\n"
        f"Upload: {result.upload_speed_mbps:.2f} Mbps\n"
        f"Ping: {result.ping_ms:.2f} ms\n"
        f"Jitter: {result.jitter_ms:.2f} ms"
    )
