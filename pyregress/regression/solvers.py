"""
Training and evaluation passes.

This module provides train() and evaluate() (public API): each is a
single sequential fold over a stream of rows, where one designated field
is the target and every other field is a predictor.
"""

from __future__ import annotations

import logging
import warnings
from typing import Iterable, Mapping

from pyregress.core.protocols import RowSource
from pyregress.core.result import Result
from pyregress.core.timing import Timer
from pyregress.core.validation import check_name, check_real
from pyregress.regression.additive import AdditiveRegressionModel
from pyregress.regression.moments import StreamingMoments
from pyregress.regression.solution import (
    AccuracyParams,
    AccuracySolution,
    TrainingParams,
    TrainingSolution,
)

logger = logging.getLogger(__name__)

DEFAULT_TARGET = 'user_us'


def _split(row: Mapping[str, float], target: str) -> tuple[dict[str, float], float]:
    """Copy a row and pop its target; a missing target reads as 0."""
    predictors = dict(row)
    y = predictors.pop(target, 0.0)
    return predictors, check_real(y, target)


def train(
    rows: RowSource | Iterable[Mapping[str, float]],
    *,
    target: str = DEFAULT_TARGET,
    model: AdditiveRegressionModel | None = None,
) -> TrainingSolution:
    """
    Train an additive model on every row.

    Each row's target field is removed and the remaining fields are
    passed to AdditiveRegressionModel.train(). Rows with a zero (or
    missing) target, or whose predictors sum to zero, leave the model
    unchanged and are counted as skipped.

    Args:
        rows: Row source or any iterable of name -> value mappings
        target: Name of the target field
        model: Model to continue training; a new one if None

    Returns:
        TrainingSolution with the trained model and per-predictor stats

    Raises:
        ValidationError: If target is not a non-empty string
        IngestionError: If the row source fails (propagated unchanged)

    Example:
        >>> from pyregress.regression import train
        >>> solution = train([{'a': 3.0, 'b': 7.0, 'user_us': 10.0}])
        >>> print(solution.summary())
    """
    target = check_name(target, 'target')
    if model is None:
        model = AdditiveRegressionModel()

    timer = Timer()
    timer.start()

    n_rows = 0
    n_skipped = 0
    for row in rows:
        n_rows += 1
        predictors, y = _split(row, target)
        with timer.section('train'):
            if not model.train(predictors, y):
                n_skipped += 1

    timer.stop()
    logger.info(
        "Training pass complete",
        extra={"rows": n_rows, "skipped": n_skipped, "variables": len(model)},
    )

    result = Result(
        params=TrainingParams(model=model, n_rows=n_rows, n_skipped=n_skipped),
        info={'target': target, 'n_variables': len(model)},
        timing=timer.result(),
        method='additive_train',
    )
    return TrainingSolution(_result=result)


def evaluate(
    model: AdditiveRegressionModel,
    rows: RowSource | Iterable[Mapping[str, float]],
    *,
    target: str = DEFAULT_TARGET,
) -> AccuracySolution:
    """
    Predict every row with a non-zero target and score the predictions.

    For each such row the target is removed, the rest is passed to
    model.predict(), |(actual - predicted) / actual| is accumulated into
    the mean absolute percentage error, and (actual, predicted) is added
    to a StreamingMoments fit. Rows with a zero or missing target are
    skipped.

    Args:
        model: Trained model (read, never modified)
        rows: Row source or any iterable of name -> value mappings
        target: Name of the target field

    Returns:
        AccuracySolution. If no row had a non-zero target, MAPE is nan and
        the result carries a warning.

    Raises:
        ValidationError: If target is not a non-empty string
        IngestionError: If the row source fails (propagated unchanged)
    """
    target = check_name(target, 'target')

    timer = Timer()
    timer.start()

    fit = StreamingMoments()
    total_error = 0.0
    count = 0
    n_rows = 0
    for row in rows:
        n_rows += 1
        predictors, actual = _split(row, target)
        if actual == 0:
            continue
        with timer.section('predict'):
            predicted = model.predict(predictors)
        count += 1
        total_error += abs((actual - predicted) / actual)
        fit.add(actual, predicted)
        logger.debug(
            "PREDICT",
            extra={"actual": f"{actual:.5g}", "predicted": f"{predicted:.5g}"},
        )

    timer.stop()

    pass_warnings: tuple[str, ...] = ()
    if count == 0:
        mape = float('nan')
        message = f"No rows with a non-zero {target!r}; MAPE is undefined"
        warnings.warn(message, RuntimeWarning, stacklevel=2)
        pass_warnings = (message,)
    else:
        mape = total_error / count

    logger.info(
        "Evaluation pass complete",
        extra={"rows": n_rows, "predicted": count, "mape": f"{mape:.4g}"},
    )

    result = Result(
        params=AccuracyParams(
            n_rows=n_rows,
            count=count,
            mape=mape,
            fit=fit.summary('actual_vs_predicted'),
        ),
        info={'target': target},
        timing=timer.result(),
        method='additive_predict',
        warnings=pass_warnings,
    )
    return AccuracySolution(_result=result)
