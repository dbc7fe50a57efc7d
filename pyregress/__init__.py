"""
PyRegress: streaming additive regression for exploratory analysis.

Trains one simple linear regression per predictor from tabular numeric
data, with the target apportioned across predictors that add up to it,
then predicts the target as the sum of the per-predictor fits.

Submodules:
    core: Row sources, result envelope, exceptions, validation
    regression: StreamingMoments, AdditiveRegressionModel, train/evaluate
    cli: Command-line driver
"""

__version__ = "0.1.0"

from pyregress import core
from pyregress import regression

__all__ = [
    "__version__",
    "core",
    "regression",
]
