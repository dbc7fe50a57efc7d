"""
Generic result container for PyRegress passes.

The Result class provides a standardized envelope that the training and
evaluation passes use. This enables shared tooling for timing and warnings
while allowing each pass to define its own parameter structure.

Design decisions:
    - Generic over parameter payload P for type safety
    - info dict for flexible metadata (rows read, rows skipped)
    - timing is optional (don't burden unit tests)
    - Immutable (frozen=True)
"""

from dataclasses import dataclass, field
from typing import TypeVar, Generic, Any

P = TypeVar('P')  # Parameter payload type


@dataclass(frozen=True)
class Result(Generic[P]):
    """
    Immutable result envelope for a pass over observations.

    Type Parameters:
        P: The pass-specific parameter payload type

    Attributes:
        params: Pass-specific payload (trained model, accuracy figures)
        info: Structured metadata (rows read, rows skipped, target name)
        timing: Execution timing breakdown, or None if not measured
        method: Identifier of the procedure that produced this result
        warnings: Non-fatal issues encountered during the pass

    Examples:
        >>> Result(
        ...     params=TrainingParams(model=model, n_rows=10, n_skipped=1),
        ...     info={'target': 'user_us'},
        ...     timing={'total_seconds': 0.01},
        ...     method='additive_train',
        ... )
    """
    params: P
    info: dict[str, Any]
    timing: dict[str, float] | None
    method: str
    warnings: tuple[str, ...] = field(default_factory=tuple)

    def has_warning(self, substring: str) -> bool:
        """Check if any warning contains the given substring."""
        return any(substring in w for w in self.warnings)
