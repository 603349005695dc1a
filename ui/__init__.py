"""UI layer -- Rich console output and result formatters."""

from .dashboard import (
    STAGE_LABELS,
    console,
    print_client_info,
    print_error,
    print_final_results,
    print_header,
)
from .output import format_text_result

__all__ = [
    "STAGE_LABELS",
    "console",
    "format_text_result",
    "print_client_info",
    "print_error",
    "print_final_results",
    "print_header",
]
