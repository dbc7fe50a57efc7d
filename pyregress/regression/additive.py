"""
Additive per-predictor regression.

Many predictors are observed at once and jointly add up to one target
(per-process resource use summing to a system total, say). Regressing
each predictor against the whole target would count the target once per
predictor. Instead the target is apportioned across the predictors in
proportion to their values, and each predictor is regressed against the
share it was assigned. Its slope then estimates "target per unit" for
that predictor.

Prediction sums each present predictor's fitted line. Predictors that
were never trained, or whose fitted slope is not positive, contribute
nothing; negative intercepts are clipped to 0.

Zero and negative predictor values are ignored by both training and
prediction, so "absent" and "present but zero" are the same thing here.
"""

from __future__ import annotations

import logging
from typing import Iterator, Mapping

from pyregress.core.validation import check_predictors, check_real
from pyregress.regression.moments import StreamingMoments
from pyregress.regression.solution import VariableStats

logger = logging.getLogger(__name__)


def apportion(predictors: Mapping[str, float], target: float) -> dict[str, tuple[float, float]]:
    """
    Split a target across predictors in proportion to their values.

    Args:
        predictors: Predictor key -> value
        target: Observed target for this observation

    Returns:
        Key -> (x, contribution) for every key with a positive value,
        where contribution = target / sum(values) * x. Empty when the
        target is 0 or the values sum to 0.

    Note:
        The sum runs over every value, including zero and negative ones;
        only the keys receiving a share are restricted to positive values.

    Example:
        >>> apportion({'a': 3.0, 'b': 7.0}, 10.0)
        {'a': (3.0, 3.0), 'b': (7.0, 7.0)}
    """
    if target == 0:
        return {}
    total = sum(predictors.values())
    if total == 0:
        return {}
    unit_rate = target / total
    return {
        key: (value, unit_rate * value)
        for key, value in predictors.items()
        if value > 0
    }


class AdditiveRegressionModel:
    """
    One StreamingMoments per predictor key, trained on apportioned targets.

    The model exclusively owns its accumulators. A key's accumulator is
    created on the first observation where that key has a positive value
    and is reused for the lifetime of the model; keys are never removed.

    Training mutates the model and must be serialized. predict() only
    reads it, so concurrent predictions are safe while no train() call is
    in flight.

    Example:
        >>> model = AdditiveRegressionModel()
        >>> for _ in range(10):
        ...     model.train({'a': 2.0}, 4.0)
        >>> model.predict({'a': 2.0})
        4.0
    """

    def __init__(self):
        self._vars: dict[str, StreamingMoments] = {}

    def train(self, predictors: Mapping[str, float], target: float) -> bool:
        """
        Apportion target across predictors and update each key's fit.

        Args:
            predictors: Predictor key -> value (target field removed)
            target: Observed target

        Returns:
            True if any accumulator was updated, False for a no-op
            (zero target, zero predictor mass, or no positive predictor)

        Raises:
            ValidationError: If a key is not a string or a value is not
                a real number
        """
        predictors = check_predictors(predictors, 'predictors')
        target = check_real(target, 'target')

        shares = apportion(predictors, target)
        for key, (x, contribution) in shares.items():
            moments = self._vars.get(key)
            if moments is None:
                moments = self._vars[key] = StreamingMoments()
            if logger.isEnabledFor(logging.DEBUG):
                logger.debug(
                    "TRAIN",
                    extra={
                        "variable": key,
                        "x": f"{x:.5g}",
                        "y": f"{target:.5g}",
                        "rate": f"{contribution / x:.5g}",
                        "contrib": f"{contribution:.5g}",
                    },
                )
            moments.add(x, contribution)
        return bool(shares)

    def predict(self, predictors: Mapping[str, float]) -> float:
        """
        Sum the fitted contribution of every present predictor.

        Each key with a positive value and a trained accumulator adds
        max(intercept, 0) + value * slope, provided its slope is positive.

        Raises:
            ValidationError: If a key is not a string or a value is not
                a real number
        """
        predictors = check_predictors(predictors, 'predictors')

        result = 0.0
        for key, value in predictors.items():
            if not value > 0:
                continue
            moments = self._vars.get(key)
            if moments is None:
                continue
            slope = moments.slope()
            if not slope > 0:
                continue
            intercept = max(moments.intercept(), 0.0)
            result += intercept + value * slope
        return result

    # === Read access ===

    def __len__(self) -> int:
        return len(self._vars)

    def __contains__(self, key: object) -> bool:
        return key in self._vars

    def __getitem__(self, key: str) -> StreamingMoments:
        if key not in self._vars:
            raise KeyError(
                f"Model has no predictor {key!r}. Available: {sorted(self._vars)}"
            )
        return self._vars[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self.keys())

    def keys(self) -> list[str]:
        """Trained predictor keys, sorted."""
        return sorted(self._vars)

    def items(self) -> list[tuple[str, StreamingMoments]]:
        return [(key, self._vars[key]) for key in self.keys()]

    def variables(self) -> tuple[VariableStats, ...]:
        """Per-predictor statistics, sorted by key."""
        return tuple(moments.summary(key) for key, moments in self.items())

    def __repr__(self) -> str:
        return f"AdditiveRegressionModel(n_variables={len(self)})"
