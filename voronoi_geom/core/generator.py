"""
Partition generation: one Voronoi cell per input feature.

The generator densifies feature boundaries into seed sites, samples any
requested empty sites, builds a Voronoi diagram, merges raw cells back onto
the feature (or empty site) that owns them and checks the result. Invalid
diagrams are retried:

- wrong number of merged cells: resample the empty sites
- a feature or site not inside exactly one cell: halve the densification
  interval and rebuild

Every diagram build counts towards ``max_iterations``; reaching it raises
:class:`GenerationExhausted`. The accepted diagram is clipped to the
bounding feature, or to the extended bounding box of the inputs.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

import numpy as np
import structlog
from shapely.geometry import Point
from shapely.geometry.base import BaseGeometry

from ..config import Settings, settings as default_settings
from ..utils.geojson import read_geometry
from ..utils.random import RandomSource, make_prng, new_seed
from .bounds import bbox_to_polygon, extend_bounds, get_feature_bounds
from .clipping import OutputCell, clip_cells
from .densify import DensifiedSites, densify_rings, get_average_length
from .errors import GenerationExhausted
from .features import decompose_features, feature_ring
from .merge import MergedCell, build_voronoi, merge_voronoi_cells
from .sampling import Coordinate, create_coords
from .validation import validate_partition

logger = structlog.get_logger()


class GeneratorState(Enum):
    """States of the retry loop."""
    SAMPLING = "sampling"      # empty sites need (re)sampling
    BUILT = "built"            # diagram built, not yet judged
    DENSIFYING = "densifying"  # seeds need a finer interval
    VALID = "valid"
    FAILED = "failed"


@dataclass
class PartitionResult:
    """Clipped cells plus what it took to produce them."""
    cells: List[OutputCell]
    iterations: int = 0
    intervals: List[Optional[float]] = field(default_factory=list)
    empty_sites: List[Coordinate] = field(default_factory=list)
    seed: Optional[str] = None

    def to_features(self) -> List[Dict[str, Any]]:
        return [cell.to_feature() for cell in self.cells]

    @property
    def owners(self) -> List[Optional[int]]:
        return [cell.owner for cell in self.cells]


class VoronoiGeomGenerator:
    """
    Builds a clipped Voronoi partition with one cell per feature.

    Owner indices of the produced cells are the positions of the original
    input features, followed by ``len(features) + i`` for empty site ``i``.
    """

    def __init__(self, features: List[Dict[str, Any]], num_empty: int = 0,
                 bounding_feature: Optional[Dict[str, Any]] = None,
                 prng: Optional[RandomSource] = None, seed: Optional[str] = None,
                 settings: Optional[Settings] = None):
        """
        Args:
            features: Input GeoJSON features (Point, LineString, Polygon or Multi*)
            num_empty: Number of extra sites without a feature
            bounding_feature: Polygon feature clipping the partition
            prng: Random source for empty sites; overrides seed
            seed: Seed for the default Alea PRNG
            settings: Settings override
        """
        if num_empty < 0:
            raise ValueError(f"num_empty must not be negative, got {num_empty}")

        self.features = list(features)
        self.num_empty = num_empty
        self.bounding_feature = bounding_feature
        self.settings = settings or default_settings

        if prng is None:
            self.seed = seed or self.settings.random_seed or new_seed()
            self.prng = make_prng(self.seed)
        else:
            self.seed = seed
            self.prng = prng

        self.state = GeneratorState.SAMPLING
        self.iterations = 0
        self.intervals: List[Optional[float]] = []

    @property
    def expected_cells(self) -> int:
        return len(self.features) + self.num_empty

    def generate(self) -> PartitionResult:
        """
        Run the retry loop and clip the accepted diagram.

        Raises:
            GenerationExhausted: If no valid diagram is found within max_iterations
            ValueError: If no bounding region can be derived
        """
        if not self.features and self.num_empty == 0:
            return PartitionResult(cells=[], seed=self.seed)

        logger.info("Starting partition generation",
                    features=len(self.features), empty=self.num_empty,
                    seed=self.seed, max_iterations=self.settings.max_iterations)

        decomposed = decompose_features(self.features, self.settings.simplify_tolerance)
        region, sample_bounds = self._bounding_region(decomposed)

        owner_geoms = [read_geometry(f["geometry"]) for f in self.features]
        rings = [feature_ring(f) for f in decomposed]
        self.intervals = []
        sites = self._densify(rings, get_average_length(rings))

        empty: List[Coordinate] = []
        merged: List[MergedCell] = []
        self.state = GeneratorState.SAMPLING

        for iteration in range(1, self.settings.max_iterations + 1):
            self.iterations = iteration

            if self.state is GeneratorState.SAMPLING:
                try:
                    empty = create_coords(sample_bounds, decomposed, self.num_empty,
                                          self.prng, self.settings.max_iterations)
                except GenerationExhausted:
                    self.state = GeneratorState.FAILED
                    raise
            elif self.state is GeneratorState.DENSIFYING:
                sites = self._densify(rings, sites.interval / 2)

            empty_points = [Point(c) for c in empty]
            seeds = np.vstack([sites.coordinates, np.array(empty, dtype=float).reshape(-1, 2)])
            raw_cells = build_voronoi(seeds, region)
            merged = merge_voronoi_cells(raw_cells, owner_geoms + empty_points)
            self.state = GeneratorState.BUILT
            logger.debug("Diagram built", iteration=iteration, state=self.state.value,
                         seeds=len(seeds), cells=len(merged))

            self.state = self._next_state(merged, owner_geoms, empty_points, sites)
            if self.state is GeneratorState.VALID:
                break
        else:
            self.state = GeneratorState.FAILED
            logger.error("Partition generation exhausted",
                         iterations=self.iterations, interval=sites.interval)
            raise GenerationExhausted(
                f"Could not create a valid diagram in {self.settings.max_iterations} tries",
                iterations=self.iterations,
            )

        cells = clip_cells(merged, region)
        logger.info("Partition generated", iterations=self.iterations,
                    interval=sites.interval, cells=len(cells))

        return PartitionResult(
            cells=cells,
            iterations=self.iterations,
            intervals=list(self.intervals),
            empty_sites=list(empty),
            seed=self.seed,
        )

    def _bounding_region(self, decomposed):
        """Clip region and sampling bounds (polygon or bbox tuple)."""
        if self.bounding_feature is not None:
            region = read_geometry(self.bounding_feature["geometry"])
            sample_bounds = region
        elif decomposed:
            sample_bounds = extend_bounds(get_feature_bounds(decomposed),
                                          self.settings.bounds_margin)
            region = bbox_to_polygon(sample_bounds)
        else:
            raise ValueError("Empty sites need either input features or a bounding feature")

        if region.area <= 0:
            raise ValueError("Bounding region has no area; pass a bounding feature")
        return region, sample_bounds

    def _densify(self, rings, interval: Optional[float]) -> DensifiedSites:
        """
        Densify the rings at the given interval.

        Raises:
            GenerationExhausted: If the seed count passes max_seeds
        """
        self.intervals.append(interval)
        sites = densify_rings(rings, interval)
        if len(sites) > self.settings.max_seeds:
            self.state = GeneratorState.FAILED
            logger.error("Densification exceeded seed limit",
                         iterations=self.iterations, interval=interval,
                         seeds=len(sites), max_seeds=self.settings.max_seeds)
            raise GenerationExhausted(
                f"Densifying at interval {interval} needs {len(sites)} seeds "
                f"(limit {self.settings.max_seeds})",
                iterations=self.iterations,
            )
        return sites

    def _next_state(self, merged: List[MergedCell], owner_geoms: List[BaseGeometry],
                    empty_points: List[Point], sites: DensifiedSites) -> GeneratorState:
        """Decide where to go from BUILT."""
        if len(merged) != self.expected_cells:
            logger.debug("Cell count mismatch, resampling empty sites",
                         iteration=self.iterations, cells=len(merged),
                         expected=self.expected_cells)
            return GeneratorState.SAMPLING

        if not validate_partition(owner_geoms, empty_points, merged):
            if sites.interval is None:
                # Point-only input has no interval to refine
                return GeneratorState.SAMPLING
            logger.debug("Containment check failed, densifying",
                         iteration=self.iterations, interval=sites.interval / 2)
            return GeneratorState.DENSIFYING

        return GeneratorState.VALID


def generate_partition(features: List[Dict[str, Any]], num_empty: int = 0,
                       bounding_feature: Optional[Dict[str, Any]] = None, *,
                       seed: Optional[str] = None, prng: Optional[RandomSource] = None,
                       settings: Optional[Settings] = None) -> PartitionResult:
    """
    Partition the plane into one cell per feature and per empty site.

    Returns:
        PartitionResult whose cells keep their owner index
    """
    generator = VoronoiGeomGenerator(features, num_empty, bounding_feature,
                                     prng=prng, seed=seed, settings=settings)
    return generator.generate()


def voronoi_geom(features: List[Dict[str, Any]], num_empty: int = 0,
                 bounding_feature: Optional[Dict[str, Any]] = None, *,
                 seed: Optional[str] = None, prng: Optional[RandomSource] = None,
                 settings: Optional[Settings] = None) -> List[Dict[str, Any]]:
    """
    Create a set of Voronoi polygons for a set of geometries.

    Args:
        features: Input GeoJSON features
        num_empty: Number of extra cells not tied to a feature
        bounding_feature: Polygon feature to clip to (default: extended bbox of the inputs)
        seed: Seed for empty site sampling
        prng: Random source overriding seed
        settings: Settings override

    Returns:
        Polygon features, one or more per input feature and empty site
    """
    return generate_partition(features, num_empty, bounding_feature,
                              seed=seed, prng=prng, settings=settings).to_features()
