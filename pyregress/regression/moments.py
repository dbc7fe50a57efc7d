"""
Streaming simple linear regression.

StreamingMoments keeps the six sufficient statistics of a simple (one
predictor) least-squares fit and derives slope, intercept, R² and standard
errors from them on demand. Samples are never stored, so memory is
constant and each add() is O(1).

The statistics are algebraically the same as a two-pass computation but
are not bit-identical to it: large, nearly equal sums lose precision when
subtracted. That trade is acceptable for the modest magnitudes this is
used with.

Degenerate inputs never raise. Too few samples give 0; divisions by zero
(every x equal to 0, R² or standard errors of a constant x or y) give
inf or nan.
"""

from __future__ import annotations

import numpy as np
from scipy import stats as sp_stats

from pyregress.regression.solution import VariableStats


# x is treated as constant when n*Sxx - Sx^2 is within this fraction of n*Sxx
CONSTANT_X_RTOL = 1e-12


class StreamingMoments:
    """
    Online accumulator for ordinary least squares of y on x.

    Attributes:
        n: Number of samples added (held as a float)
        sx, sy, sxx, sxy, syy: Running sums of x, y, x², xy and y²

    Example:
        >>> m = StreamingMoments()
        >>> for x, y in [(1, 2), (2, 4), (3, 6)]:
        ...     m.add(x, y)
        >>> m.slope(), m.intercept(), m.rsq()
        (2.0, 0.0, 1.0)
    """

    __slots__ = ('n', 'sx', 'sy', 'sxx', 'sxy', 'syy')

    def __init__(self):
        self.n = np.float64(0.0)
        self.sx = np.float64(0.0)
        self.sy = np.float64(0.0)
        self.sxx = np.float64(0.0)
        self.sxy = np.float64(0.0)
        self.syy = np.float64(0.0)

    def add(self, x: float, y: float) -> None:
        """Incorporate one (x, y) sample. Non-finite values propagate."""
        x = np.float64(x)
        y = np.float64(y)
        with np.errstate(over='ignore', invalid='ignore'):
            self.n += 1.0
            self.sx += x
            self.sy += y
            self.sxx += x * x
            self.sxy += x * y
            self.syy += y * y

    def count(self) -> float:
        return float(self.n)

    def mean_x(self) -> float:
        if self.n == 0:
            return 0.0
        return float(self.sx / self.n)

    def mean_y(self) -> float:
        if self.n == 0:
            return 0.0
        return float(self.sy / self.n)

    def slope(self) -> float:
        """
        Least-squares slope.

        With no samples the slope is 0. With exactly one sample it is the
        slope of the line through the origin and that sample, sy / sx.
        The same through-origin rule applies when every x seen so far is
        equal, where the least-squares slope would be 0/0.
        """
        n = self.n
        if n == 0:
            return 0.0
        with np.errstate(divide='ignore', invalid='ignore'):
            if n == 1:
                return float(self.sy / self.sx)
            ss_xy = n * self.sxy - self.sx * self.sy
            ss_xx = n * self.sxx - self.sx * self.sx
            if abs(ss_xx) <= CONSTANT_X_RTOL * n * self.sxx:
                return float(self.sy / self.sx)
            return float(ss_xy / ss_xx)

    def intercept(self) -> float:
        n = self.n
        if n < 2:
            return 0.0
        with np.errstate(divide='ignore', invalid='ignore'):
            return float((self.sy - np.float64(self.slope()) * self.sx) / n)

    def rsq(self) -> float:
        """Squared Pearson correlation of x and y."""
        n = self.n
        if n < 2:
            return 0.0
        with np.errstate(divide='ignore', invalid='ignore'):
            ss_xy = n * self.sxy - self.sx * self.sy
            ss_xx = n * self.sxx - self.sx * self.sx
            ss_yy = n * self.syy - self.sy * self.sy
            return float(ss_xy * ss_xy / ss_xx / ss_yy)

    def _centered(self) -> tuple[np.float64, np.float64, np.float64]:
        """Centered sums of squares and cross-products (Sxx, Sxy, Syy)."""
        n = self.n
        s_xx = self.sxx - self.sx * self.sx / n
        s_xy = self.sxy - self.sx * self.sy / n
        s_yy = self.syy - self.sy * self.sy / n
        return s_xx, s_xy, s_yy

    def _residual_variance(self) -> np.float64:
        """s² = (Syy - Sxy² / Sxx) / (n - 2)."""
        s_xx, s_xy, s_yy = self._centered()
        return (s_yy - s_xy * s_xy / s_xx) / (self.n - 2.0)

    def slope_stderr(self) -> float:
        if self.n <= 2:
            return 0.0
        with np.errstate(divide='ignore', invalid='ignore'):
            s_xx, _, _ = self._centered()
            return float(np.sqrt(self._residual_variance()) / np.sqrt(s_xx))

    def intercept_stderr(self) -> float:
        n = self.n
        if n <= 2:
            return 0.0
        with np.errstate(divide='ignore', invalid='ignore'):
            s_xx, _, _ = self._centered()
            mean_x = self.sx / n
            s = np.sqrt(self._residual_variance())
            return float(s * np.sqrt(1.0 / n + mean_x * mean_x / s_xx))

    def slope_tstat(self) -> float:
        """slope / slope_stderr; non-finite when the standard error is 0."""
        with np.errstate(divide='ignore', invalid='ignore'):
            return float(np.float64(self.slope()) / np.float64(self.slope_stderr()))

    def intercept_tstat(self) -> float:
        """|intercept / intercept_stderr|; non-finite when the standard error is 0."""
        with np.errstate(divide='ignore', invalid='ignore'):
            return float(np.abs(np.float64(self.intercept()) / np.float64(self.intercept_stderr())))

    def slope_pvalue(self) -> float:
        return self._two_sided_pvalue(self.slope_tstat())

    def intercept_pvalue(self) -> float:
        return self._two_sided_pvalue(self.intercept_tstat())

    def _two_sided_pvalue(self, t: float) -> float:
        """Two-sided Student-t p-value on n - 2 degrees of freedom."""
        if self.n <= 2 or np.isnan(t):
            return float('nan')
        return float(2.0 * sp_stats.t.sf(abs(t), df=self.n - 2.0))

    def summary(self, name: str) -> VariableStats:
        """Snapshot every derived statistic under the given name."""
        return VariableStats(
            name=name,
            count=self.count(),
            r_squared=self.rsq(),
            slope=self.slope(),
            slope_stderr=self.slope_stderr(),
            slope_tstat=self.slope_tstat(),
            slope_pvalue=self.slope_pvalue(),
            intercept=self.intercept(),
            intercept_stderr=self.intercept_stderr(),
            intercept_tstat=self.intercept_tstat(),
            intercept_pvalue=self.intercept_pvalue(),
        )

    def __repr__(self) -> str:
        return (
            f"StreamingMoments(n={self.count():.0f}, slope={self.slope():.4g}, "
            f"intercept={self.intercept():.4g}, rsq={self.rsq():.4f})"
        )
