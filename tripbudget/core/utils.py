"""
Utility functions for the application.
"""
import re
from typing import Any, Dict


def format_error(message: str, details: Any = None) -> Dict[str, Any]:
    """Format error response."""
    response = {"error": message}
    if details:
        response["details"] = details
    return response


def report_file_name(trip_name: str) -> str:
    """Build the export file name for a trip report."""
    stem = re.sub(r"\s+", "_", trip_name.strip())
    return f"{stem}_Trip_Report.pdf"
