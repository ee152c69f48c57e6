"""
Copyright (c) 2025, the bign developers
See LICENSE for details
"""

import random

import pytest

from bign.crypto.ec import scalar
from bign.crypto.ec.curve import Curve
from bign.util import helpers


# Seed initialization is delegated to tests.
# random.seed(0)


@pytest.fixture
def randBytes():
    def _randBytes(low=0, high=50):
        return bytes(random.randint(0, 255) for _ in range(random.randint(low, high)))

    return _randBytes


@pytest.fixture(scope="module")
def prepareLogger(request):
    helpers.prepareLogging()


@pytest.fixture(scope="session")
def standardCurve():
    return Curve.standard()


@pytest.fixture
def restoreDefaults():
    """Restores the process-wide multiplier defaults after the test."""
    method, window = scalar.getDefaults()
    yield
    scalar.setDefaults(method, window)
