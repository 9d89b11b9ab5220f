"""Rich/JSON output helpers.

The CLI renders ServiceResult for humans (Rich tables and colors) or
machines (--json).  The formatter layer adapts ServiceResult to the
requested output mode.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ddnsctl.output.renderers import render_quiet, render_result

if TYPE_CHECKING:
    from ddnsctl.services.result import ServiceResult


def format_result(
    result: ServiceResult,
    *,
    json_output: bool = False,
    quiet: bool = False,
) -> str:
    """Format a ServiceResult for display.

    Args:
        result: The service result to format.
        json_output: Return JSON; takes precedence over *quiet*.
        quiet: Return only the essential values.
    """
    if json_output:
        return result.model_dump_json(indent=2)
    if quiet:
        return render_quiet(result)
    return render_result(result)
