"""Tests for input feature decomposition."""

import numpy as np
import pytest

from voronoi_geom.core.features import decompose_features, feature_ring, simplify_feature

from conftest import make_feature, square


class TestDecomposeFeatures:
    """Test splitting and normalizing input features."""

    def test_multipolygon_split_and_holes_dropped(self):
        """Each polygon member becomes its own hole-free Polygon."""
        hole = [[0.2, 0.2], [0.4, 0.2], [0.4, 0.4], [0.2, 0.4], [0.2, 0.2]]
        feature = make_feature("MultiPolygon", [[square(0, 0), hole], [square(3, 0)]])

        decomposed = decompose_features([feature])

        assert len(decomposed) == 2
        for part in decomposed:
            assert part["geometry"]["type"] == "Polygon"
            assert len(part["geometry"]["coordinates"]) == 1
        assert decomposed[0]["geometry"]["coordinates"][0] == square(0, 0)
        assert decomposed[1]["geometry"]["coordinates"][0] == square(3, 0)

    def test_polygon_hole_dropped(self):
        """A single polygon keeps only its outer ring."""
        hole = [[0.2, 0.2], [0.4, 0.2], [0.4, 0.4], [0.2, 0.4], [0.2, 0.2]]
        decomposed = decompose_features([make_feature("Polygon", [square(0, 0), hole])])

        assert decomposed[0]["geometry"] == {"type": "Polygon", "coordinates": [square(0, 0)]}

    def test_multipoint_and_multilinestring(self):
        """Multi points and lines split into their members in order."""
        features = [
            make_feature("MultiPoint", [[1, 2], [3, 4]]),
            make_feature("MultiLineString", [[[0, 0], [1, 1]], [[2, 2], [3, 3]]]),
        ]

        decomposed = decompose_features(features)

        assert [f["geometry"]["type"] for f in decomposed] == [
            "Point", "Point", "LineString", "LineString"
        ]
        assert decomposed[1]["geometry"]["coordinates"] == [3, 4]
        assert decomposed[3]["geometry"]["coordinates"] == [[2, 2], [3, 3]]

    def test_single_features_pass_through(self):
        """Points and lines are returned as given."""
        point = make_feature("Point", [1, 1])
        line = make_feature("LineString", [[0, 0], [1, 0]])

        assert decompose_features([point, line]) == [point, line]


class TestSimplify:
    """Test optional simplification of decomposed shapes."""

    def test_removes_near_collinear_vertex(self):
        line = make_feature("LineString", [[0, 0], [1, 0.00001], [2, 0]])
        simplified = simplify_feature(line, 0.001)

        assert simplified["geometry"]["coordinates"] == [[0.0, 0.0], [2.0, 0.0]]

    def test_zero_tolerance_is_noop(self):
        line = make_feature("LineString", [[0, 0], [1, 0.00001], [2, 0]])
        assert simplify_feature(line, 0) is line

    def test_collapsing_polygon_kept(self):
        """A polygon smaller than the tolerance is not simplified away."""
        tiny = make_feature("Polygon", [square(0, 0, size=0.00001)])
        assert simplify_feature(tiny, 0.001) is tiny

    def test_decompose_applies_tolerance(self):
        line = make_feature("MultiLineString", [[[0, 0], [1, 0.00001], [2, 0]]])
        decomposed = decompose_features([line], simplify_tolerance=0.001)

        assert len(decomposed[0]["geometry"]["coordinates"]) == 2


class TestFeatureRing:
    """Test coordinate ring extraction."""

    def test_point_ring(self):
        ring = feature_ring(make_feature("Point", [1.5, 2.5]))
        np.testing.assert_array_equal(ring, [[1.5, 2.5]])

    def test_polygon_uses_outer_ring(self):
        ring = feature_ring(make_feature("Polygon", [square(0, 0)]))
        assert ring.shape == (5, 2)
        np.testing.assert_array_equal(ring[0], ring[-1])

    def test_linestring_ring(self):
        ring = feature_ring(make_feature("LineString", [[0, 0], [1, 1], [2, 0]]))
        assert ring.shape == (3, 2)

    def test_multi_geometry_rejected(self):
        with pytest.raises(ValueError):
            feature_ring(make_feature("MultiPoint", [[0, 0], [1, 1]]))
