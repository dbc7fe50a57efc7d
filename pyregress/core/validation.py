"""
Input validation utilities for PyRegress.

These validators follow the "fail fast, fail loud" principle. They raise
immediately with clear error messages rather than silently correcting
or making assumptions about user intent.

Only argument *types* are validated here. Numerical degeneracies (zero
targets, zero predictor mass, too few samples) are not errors and are
handled where the statistics are computed.
"""

from numbers import Real
from typing import Any, Mapping

import numpy as np

from pyregress.core.exceptions import ValidationError


def check_name(name: Any, label: str) -> str:
    """
    Verify a field or predictor name is a non-empty string.

    Args:
        name: Value to check
        label: Parameter name for error messages

    Returns:
        The name, unchanged

    Raises:
        ValidationError: If name is not a string or is empty
    """
    if not isinstance(name, str):
        raise ValidationError(
            f"{label}: expected str, got {type(name).__name__}"
        )
    if not name:
        raise ValidationError(f"{label}: must be a non-empty string")
    return name


def check_real(value: Any, name: str) -> float:
    """
    Validate and convert a scalar to float.

    Accepts Python and NumPy real numbers. Rejects bools, strings and
    anything else that is not a real number. Non-finite values are passed
    through unchanged.

    Args:
        value: Scalar to validate
        name: Parameter name for error messages

    Returns:
        The value as a Python float

    Raises:
        ValidationError: If value is not a real number
    """
    if isinstance(value, (bool, np.bool_)) or not isinstance(value, (Real, np.number)):
        raise ValidationError(
            f"{name}: expected a real number, got {type(value).__name__} {value!r}"
        )
    if isinstance(value, np.complexfloating):
        raise ValidationError(f"{name}: complex values are not supported, got {value!r}")
    return float(value)


def check_predictors(predictors: Mapping[str, Any], name: str) -> dict[str, float]:
    """
    Validate a predictor mapping.

    Args:
        predictors: Mapping from predictor key to numeric value
        name: Parameter name for error messages

    Returns:
        A new dict with every value converted to float

    Raises:
        ValidationError: If predictors is not a mapping, a key is not a
            non-empty string, or a value is not a real number
    """
    if not isinstance(predictors, Mapping):
        raise ValidationError(
            f"{name}: expected a mapping of name -> value, got {type(predictors).__name__}"
        )
    checked = {}
    for key, value in predictors.items():
        check_name(key, f"{name} key")
        checked[key] = check_real(value, f"{name}[{key!r}]")
    return checked


def check_positive_int(value: Any, name: str) -> int:
    """
    Verify a count-like argument is a positive integer.

    Raises:
        ValidationError: If value is not an int or is < 1
    """
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
        raise ValidationError(f"{name}: expected int, got {type(value).__name__}")
    if value < 1:
        raise ValidationError(f"{name}: must be >= 1, got {value}")
    return int(value)
