"""Completion result handed back to the caller."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class HintList:
    """
    Candidates for one completion request.

    An empty hint list is a valid answer (nothing matches the prefix). A
    request that should end the completion session returns None instead.
    """

    hints: list[str] = field(default_factory=list)
    match: str = ""
    select_initial: bool = True
    handle_wide_results: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "hints": list(self.hints),
            "match": self.match,
            "selectInitial": self.select_initial,
            "handleWideResults": self.handle_wide_results,
        }
