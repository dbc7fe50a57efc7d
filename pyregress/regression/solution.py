"""
Regression solution types.

Contains the immutable payloads produced by the training and evaluation
passes and the user-facing wrappers that format the text report.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, TYPE_CHECKING

from pyregress.core.result import Result

if TYPE_CHECKING:
    from pyregress.regression.additive import AdditiveRegressionModel


VARIABLES_BANNER = "================== RESULTS: VARIABLES ===================="
ACCURACY_BANNER = "================= RESULTS: ACTUAL-VS-PRED ==================="
VARIABLES_HEADER = "variable             count  R^2     slope  (t-stat) intercept  (t-stat)"


@dataclass(frozen=True)
class VariableStats:
    """
    Snapshot of one simple regression.

    slope_tstat is slope / slope_stderr; intercept_tstat is the absolute
    value of intercept / intercept_stderr. Both are inf or nan when the
    standard error is 0 (two or fewer samples). p-values are two-sided
    Student-t on count - 2 degrees of freedom, nan with two or fewer
    samples.
    """
    name: str
    count: float
    r_squared: float
    slope: float
    slope_stderr: float
    slope_tstat: float
    slope_pvalue: float
    intercept: float
    intercept_stderr: float
    intercept_tstat: float
    intercept_pvalue: float

    def format_row(self) -> str:
        """One line of the variables table."""
        return (
            f"{self.name:<20} {self.count:5.0f} {self.r_squared:4.2f} "
            f"{self.slope:9.3g} {self.slope_tstat:9.3g} "
            f"{self.intercept:9.3g} {self.intercept_tstat:9.3g}"
        )


@dataclass(frozen=True)
class TrainingParams:
    """
    Parameter payload for a training pass.

    Attributes:
        model: The trained model (mutable; owned by the caller from here)
        n_rows: Rows read
        n_skipped: Rows that left the model unchanged (zero target,
            zero predictor mass or no positive predictor)
    """
    model: 'AdditiveRegressionModel'
    n_rows: int
    n_skipped: int


@dataclass(frozen=True)
class AccuracyParams:
    """
    Parameter payload for an evaluation pass.

    Attributes:
        n_rows: Rows read
        count: Rows predicted (rows with a non-zero target)
        mape: Mean of |(actual - predicted) / actual|, nan if count == 0
        fit: Regression of predicted on actual values
    """
    n_rows: int
    count: int
    mape: float
    fit: VariableStats


@dataclass
class TrainingSolution:
    """
    User-facing training results.

    Wraps the pass Result and gives access to the trained model and its
    per-predictor statistics.
    """
    _result: Result[TrainingParams]

    @property
    def model(self) -> 'AdditiveRegressionModel':
        return self._result.params.model

    @property
    def n_rows(self) -> int:
        return self._result.params.n_rows

    @property
    def n_skipped(self) -> int:
        return self._result.params.n_skipped

    @property
    def variables(self) -> tuple[VariableStats, ...]:
        return self.model.variables()

    @property
    def info(self) -> dict[str, Any]:
        return self._result.info

    @property
    def timing(self) -> dict[str, float] | None:
        return self._result.timing

    @property
    def method(self) -> str:
        return self._result.method

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings

    def summary(self) -> str:
        """Per-predictor table, one row per trained key in key order."""
        lines = [
            VARIABLES_BANNER,
            "",
            VARIABLES_HEADER,
        ]
        lines.extend(stats.format_row() for stats in self.variables)
        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"TrainingSolution(n_rows={self.n_rows}, n_skipped={self.n_skipped}, "
            f"n_variables={len(self.model)})"
        )


@dataclass
class AccuracySolution:
    """
    User-facing evaluation results.

    How well predictions track the actual target: MAPE plus a simple
    regression of predicted on actual (a perfect model has slope 1,
    intercept 0 and R² 1).
    """
    _result: Result[AccuracyParams]

    @property
    def n_rows(self) -> int:
        return self._result.params.n_rows

    @property
    def count(self) -> int:
        return self._result.params.count

    @property
    def mape(self) -> float:
        return self._result.params.mape

    @property
    def fit(self) -> VariableStats:
        return self._result.params.fit

    @property
    def slope(self) -> float:
        return self.fit.slope

    @property
    def intercept(self) -> float:
        return self.fit.intercept

    @property
    def r_squared(self) -> float:
        return self.fit.r_squared

    @property
    def info(self) -> dict[str, Any]:
        return self._result.info

    @property
    def timing(self) -> dict[str, float] | None:
        return self._result.timing

    @property
    def method(self) -> str:
        return self._result.method

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings

    def summary(self) -> str:
        fit = self.fit
        return "\n".join([
            ACCURACY_BANNER,
            f"Slope: {fit.slope:.2g} T-stat: {fit.slope_tstat:.2g} "
            f"Intercept: {fit.intercept:.2g} T-stat: {fit.intercept_tstat:.2g} "
            f"R^2 {fit.r_squared:.2g} MAPE: {self.mape:.2g}",
        ])

    def __repr__(self) -> str:
        return (
            f"AccuracySolution(count={self.count}, mape={self.mape:.4g}, "
            f"r_squared={self.r_squared:.4f})"
        )
