"""Error taxonomy with error codes and recovery hints.

Error Code Convention:
    PR1xx - Graph errors
    PR2xx - Centrality errors
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorCode(Enum):
    """Structured error codes for observability and debugging."""

    # Graph errors (PR1xx)
    PR100 = "PR100"  # Contraction key function failed

    # Centrality errors (PR2xx)
    PR200 = "PR200"  # Non-finite edge weight rejected by checked PageRank


@dataclass
class RankError(Exception):
    """Base exception with structured context for logging.

    Attributes:
        message: Human-readable error description
        code: Structured error code for categorization
        context: Additional context (node index, weight, etc.)
        recoverable: Whether the caller can fall back to another path
        recovery_hint: Suggested fix for the user
    """

    message: str
    code: ErrorCode
    context: dict[str, Any] = field(default_factory=dict)
    recoverable: bool = True
    recovery_hint: str | None = None

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.message}"

    def __post_init__(self) -> None:
        super().__init__(str(self))

    def to_json(self) -> dict[str, Any]:
        """Structured logging format."""
        return {
            "error_code": self.code.value,
            "message": self.message,
            "context": self.context,
            "recoverable": self.recoverable,
            "recovery_hint": self.recovery_hint,
        }


class GraphError(RankError):
    """Errors during graph construction and transformation (PR1xx)."""

    pass


class CentralityError(RankError):
    """Errors during centrality computation (PR2xx)."""

    pass
