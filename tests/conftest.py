"""Shared fixtures: both providers, and the per-curve known answers."""

from __future__ import annotations

import pytest

from keyconvert import Curve
from keyconvert.providers import PurePythonProvider, PycaProvider

from .vectors import VECTORS


@pytest.fixture(params=[PycaProvider, PurePythonProvider], ids=["cryptography", "pure-python"])
def provider(request):
    return request.param()


@pytest.fixture(params=list(VECTORS), ids=str)
def curve(request) -> Curve:
    return request.param


@pytest.fixture
def vector(curve):
    return VECTORS[curve]
