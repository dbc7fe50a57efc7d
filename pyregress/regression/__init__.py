"""
Streaming additive regression.

Public API:
    train(rows, ...) -> TrainingSolution
    evaluate(model, rows, ...) -> AccuracySolution

Building blocks:
    StreamingMoments: constant-memory simple linear regression
    AdditiveRegressionModel: one StreamingMoments per predictor, trained
        on the target apportioned across simultaneous predictors

Example:
    >>> from pyregress.core import CSVRowSource
    >>> from pyregress.regression import train, evaluate
    >>> trained = train(CSVRowSource.from_file("train.csv"))
    >>> scored = evaluate(trained.model, CSVRowSource.from_file("test.csv"))
    >>> print(trained.summary())
    >>> print(scored.summary())
"""

from pyregress.regression.moments import StreamingMoments
from pyregress.regression.additive import AdditiveRegressionModel, apportion
from pyregress.regression.solution import (
    VariableStats,
    TrainingParams,
    TrainingSolution,
    AccuracyParams,
    AccuracySolution,
)
from pyregress.regression.solvers import train, evaluate, DEFAULT_TARGET

__all__ = [
    "train",
    "evaluate",
    "DEFAULT_TARGET",
    "StreamingMoments",
    "AdditiveRegressionModel",
    "apportion",
    "VariableStats",
    "TrainingParams",
    "TrainingSolution",
    "AccuracyParams",
    "AccuracySolution",
]
