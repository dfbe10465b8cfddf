"""Tests for Voronoi construction and cell merging."""

import numpy as np
import pytest
from shapely.geometry import LineString, Point, box

from voronoi_geom.core.merge import (
    MergedCell, build_voronoi, group_by_owner, merge_polygons, merge_voronoi_cells
)


class TestBuildVoronoi:
    """Test raw diagram construction."""

    def test_one_cell_per_site(self):
        seeds = np.array([[0.0, 0.5], [1.0, 0.5], [0.5, 2.0]])
        cells = build_voronoi(seeds, box(0, 0, 1, 2))

        assert len(cells) == 3
        for x, y in seeds:
            assert sum(1 for c in cells if c.contains(Point(x, y))) == 1

    def test_cells_cover_envelope(self):
        envelope = box(-5, -5, 5, 5)
        cells = build_voronoi(np.array([[0.0, 0.0], [1.0, 1.0]]), envelope)

        covered = cells[0].union(cells[1])
        assert covered.covers(envelope)

    def test_duplicate_sites_collapsed(self):
        cells = build_voronoi(np.array([[0.0, 0.0], [0.0, 0.0], [1.0, 1.0]]), box(0, 0, 1, 1))
        assert len(cells) == 2

    def test_single_site(self):
        envelope = box(0, 0, 2, 3)
        cells = build_voronoi(np.array([[1.0, 1.0]]), envelope)

        assert len(cells) == 1
        assert cells[0].equals(envelope)

    def test_no_sites(self):
        assert build_voronoi(np.empty((0, 2)), box(0, 0, 1, 1)) == []


class TestGrouping:
    """Test assigning raw cells to owners."""

    def test_first_owner_wins(self):
        """A cell touching two owners goes to the earlier one."""
        cell = box(0, 0, 2, 2)
        owners = [Point(1, 1), LineString([(0, 1), (2, 1)])]

        groups = group_by_owner([cell], owners)

        assert groups == [[cell], []]

    def test_orphans_appended(self):
        owned = box(0, 0, 1, 1)
        orphan = box(10, 10, 11, 11)

        groups = group_by_owner([orphan, owned], [Point(0.5, 0.5)])

        assert groups == [[owned], [orphan]]

    def test_merge_polygons(self):
        merged = merge_polygons([box(0, 0, 1, 1), box(1, 0, 2, 1), box(2, 0, 3, 1)])
        assert merged.area == pytest.approx(3.0)
        assert merged.geom_type == "Polygon"

    def test_merge_polygons_leaves_input(self):
        polygons = [box(0, 0, 1, 1), box(1, 0, 2, 1)]
        merge_polygons(polygons)
        assert len(polygons) == 2


class TestMergeVoronoiCells:
    """Test one merged cell per owner."""

    def test_cells_merged_per_owner(self):
        cells = [box(0, 0, 1, 1), box(1, 0, 2, 1), box(5, 0, 6, 1)]
        owners = [LineString([(0.5, 0.5), (1.5, 0.5)]), Point(5.5, 0.5)]

        merged = merge_voronoi_cells(cells, owners)

        assert [m.owner for m in merged] == [0, 1]
        assert merged[0].geometry.area == pytest.approx(2.0)

    def test_owner_without_cells_skipped(self):
        cells = [box(0, 0, 1, 1)]
        owners = [Point(0.5, 0.5), Point(0.6, 0.6)]

        merged = merge_voronoi_cells(cells, owners)

        assert len(merged) == 1
        assert merged[0].owner == 0

    def test_orphan_cells(self):
        merged = merge_voronoi_cells([box(0, 0, 1, 1), box(9, 9, 10, 10)], [Point(0.5, 0.5)])

        assert [m.owner for m in merged] == [0, None]
        assert merged[1].is_orphan
        assert isinstance(merged[1], MergedCell)
