"""Shared fixtures for partition tests."""

import pytest


class ScriptedRandom:
    """Random source replaying a fixed sequence of values."""

    def __init__(self, values):
        self.values = list(values)
        self.call_count = 0

    def random(self):
        value = self.values[self.call_count]
        self.call_count += 1
        return value


def make_feature(geom_type, coordinates):
    return {"type": "Feature", "geometry": {"type": geom_type, "coordinates": coordinates}}


def square(x0, y0, size=1.0):
    return [[x0, y0], [x0 + size, y0], [x0 + size, y0 + size], [x0, y0 + size], [x0, y0]]


@pytest.fixture
def scripted():
    return ScriptedRandom


@pytest.fixture
def two_squares():
    """Two unit squares three units apart."""
    return [
        make_feature("Polygon", [square(0, 0)]),
        make_feature("Polygon", [square(3, 0)]),
    ]


@pytest.fixture
def unit_square():
    return make_feature("Polygon", [square(0, 0)])
