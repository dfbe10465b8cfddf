"""
Voronoi partitions of the plane with one cell per geographic feature.
"""

from .core import GenerationExhausted, PartitionResult, generate_partition, voronoi_geom

__version__ = "0.1.0"

__all__ = ['GenerationExhausted', 'PartitionResult', 'generate_partition', 'voronoi_geom']
