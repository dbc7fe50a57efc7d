from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from pyregress.core.rows import DEFAULT_CHUNKSIZE
from pyregress.regression.solvers import DEFAULT_TARGET


@dataclass(frozen=True, slots=True)
class RunConfig:
    train_path: Path
    predict_path: Path | None = None
    target: str = DEFAULT_TARGET
    chunksize: int = DEFAULT_CHUNKSIZE
    verbose: bool = False

    @property
    def prediction_path(self) -> Path:
        """File scored by the prediction pass; the training file by default."""
        return self.predict_path if self.predict_path is not None else self.train_path
