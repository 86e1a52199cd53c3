"""Uniform response payloads for tool calls."""
import json
from dataclasses import dataclass
from typing import Any, List


@dataclass
class Envelope:
    """A tool result: JSON payload plus the error flag reported to the host."""
    payload: Any
    is_error: bool = False

    @property
    def text(self) -> str:
        return json.dumps(self.payload, indent=2, default=str)


def success(**fields) -> Envelope:
    return Envelope({"success": True, **fields})


def failure(error: str, **fields) -> Envelope:
    return Envelope({"success": False, "error": error, **fields}, is_error=True)


def batch(results: List[dict]) -> Envelope:
    """Wrap per-item results with a summary; any failed item flags the envelope."""
    total = len(results)
    succeeded = sum(1 for r in results if r.get("success"))
    return Envelope(
        {
            "success": succeeded == total,
            "summary": {
                "total": total,
                "succeeded": succeeded,
                "failed": total - succeeded,
            },
            "results": results,
        },
        is_error=succeeded < total,
    )
