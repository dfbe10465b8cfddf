"""
Core partition generation functionality.
"""

from .errors import GenerationExhausted
from .generator import (GeneratorState, PartitionResult, VoronoiGeomGenerator,
                        generate_partition, voronoi_geom)
from .clipping import OutputCell
from .merge import MergedCell

__all__ = ['GenerationExhausted', 'GeneratorState', 'PartitionResult', 'VoronoiGeomGenerator',
           'generate_partition', 'voronoi_geom', 'OutputCell', 'MergedCell']
