"""
Regression test helpers.
"""

import pytest

from pyregress.regression import StreamingMoments


@pytest.fixture
def make_moments():
    """Build a StreamingMoments from (x, y) pairs."""
    def _make(pairs):
        moments = StreamingMoments()
        for x, y in pairs:
            moments.add(x, y)
        return moments
    return _make
