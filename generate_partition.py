#!/usr/bin/env python3
"""
Partition the area around a set of GeoJSON features into Voronoi regions.

Every input feature gets its own region; --empty adds regions with no
feature. Output is a GeoJSON FeatureCollection of polygons.

Usage:
    python generate_partition.py cities.geojson -o regions.geojson --empty 5 --seed demo
    python generate_partition.py coast.geojson --bounds island.geojson --plot regions.png
"""

import argparse
import sys
from pathlib import Path
sys.path.append(str(Path(__file__).parent))

import structlog

from voronoi_geom.config import settings
from voronoi_geom.core import GenerationExhausted, generate_partition
from voronoi_geom.utils.geojson import dump_features, load_features
from voronoi_geom.utils.logging import configure_logging

logger = structlog.get_logger()


def plot_partition(result, features, output_path):
    """Draw the regions with their input features on top."""
    import matplotlib.pyplot as plt
    from shapely.geometry import shape

    fig, ax = plt.subplots(figsize=(10, 10))
    cmap = plt.get_cmap("tab20")

    for cell in result.cells:
        color = cmap((cell.owner or 0) % 20)
        x, y = cell.geometry.exterior.xy
        ax.fill(x, y, color=color, alpha=0.5)
        ax.plot(x, y, color="black", linewidth=0.5)

    for feature in features:
        geom = shape(feature["geometry"])
        parts = geom.geoms if hasattr(geom, "geoms") else [geom]
        for part in parts:
            if part.geom_type == "Point":
                ax.plot(part.x, part.y, "k.", markersize=6)
            elif part.geom_type == "LineString":
                x, y = part.xy
                ax.plot(x, y, color="black", linewidth=1.5)
            elif part.geom_type == "Polygon":
                x, y = part.exterior.xy
                ax.plot(x, y, color="black", linewidth=1.5)

    for x, y in result.empty_sites:
        ax.plot(x, y, "rx", markersize=6)

    ax.set_aspect("equal")
    ax.set_title(f"{len(features)} features, {len(result.empty_sites)} empty sites, "
                 f"{result.iterations} iteration(s)")
    fig.savefig(output_path, dpi=150, bbox_inches="tight")
    plt.close(fig)


def main(argv=None):
    parser = argparse.ArgumentParser(description=__doc__.strip().splitlines()[0])
    parser.add_argument("input", help="GeoJSON file with the input features")
    parser.add_argument("-o", "--output", help="Output GeoJSON file (default: stdout)")
    parser.add_argument("--empty", type=int, default=0, help="Number of empty regions to add")
    parser.add_argument("--bounds", help="GeoJSON file with a polygon to clip the partition to")
    parser.add_argument("--seed", help="Seed for empty site sampling")
    parser.add_argument("--plot", help="Write a PNG rendering of the partition")
    args = parser.parse_args(argv)

    configure_logging(settings.log_level, settings.log_format)

    features = load_features(args.input)
    bounding_feature = load_features(args.bounds)[0] if args.bounds else None

    try:
        result = generate_partition(features, args.empty, bounding_feature, seed=args.seed)
    except (GenerationExhausted, ValueError) as e:
        logger.error("Partition generation failed", error=str(e))
        return 1

    if args.output:
        dump_features(result.to_features(), args.output)
        logger.info("Partition written", path=args.output, cells=len(result.cells))
    else:
        import json
        json.dump({"type": "FeatureCollection", "features": result.to_features()}, sys.stdout)
        sys.stdout.write("\n")

    if args.plot:
        plot_partition(result, features, args.plot)
        logger.info("Partition plotted", path=args.plot)

    return 0


if __name__ == "__main__":
    sys.exit(main())
