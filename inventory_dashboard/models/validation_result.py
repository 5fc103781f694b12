from __future__ import annotations

from dataclasses import dataclass

"""ValidationResult model.

errors block reconstruction from being surfaced, warnings are advisory only.
"""

__all__ = [
    "ValidationResult",
]


@dataclass(frozen=True)
class ValidationResult:
    errors: tuple[str, ...] = ()
    warnings: tuple[str, ...] = ()

    @property
    def is_valid(self) -> bool:
        return not self.errors
