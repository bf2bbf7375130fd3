"""Command line entry point, extracts a graph file from an OSM XML file and
a folder of SRTM tiles."""

import argparse
import logging
import os
from typing import List, Optional

from bikegraph.containers import DEFAULT_METRICS, ExtractionConfig
from bikegraph.dumper import dump_graph
from bikegraph.errors import ExtractionError
from bikegraph.extractor import GraphExtractor
from bikegraph.extractor.ways import EDGE_FILTERS
from bikegraph.metrics import CATALOGUE

logger = logging.getLogger(__name__)


def _build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bikegraph",
        description="Extracts graphs with multidimensional costs from OSM files",
    )
    parser.add_argument(
        "osm_path",
        metavar="OSM-FILE",
        help="OSM XML file to extract from (.osm or .osm.gz)",
    )
    parser.add_argument(
        "srtm_dir", metavar="SRTM", help="Directory with srtm files"
    )
    parser.add_argument(
        "output_path", metavar="GRAPH", help="File to write graph to"
    )
    parser.add_argument(
        "-z", dest="gzip_output", action="store_true", help="Save graph gzipped"
    )
    parser.add_argument(
        "--metric",
        dest="metrics",
        action="append",
        choices=sorted(CATALOGUE),
        help=(
            "Metric to write out, may be repeated "
            f"(default: {', '.join(DEFAULT_METRICS)})"
        ),
    )
    parser.add_argument(
        "--internal-metric",
        dest="internal_metrics",
        action="append",
        default=[],
        choices=sorted(CATALOGUE),
        help="Metric to compute without writing it out, may be repeated",
    )
    parser.add_argument(
        "--edge-filter",
        default="bicycle",
        choices=sorted(EDGE_FILTERS),
        help="Which ways are usable",
    )
    parser.add_argument(
        "--grid-cell-size",
        type=float,
        default=0.1,
        help="Cell size in degrees for the grid metrics",
    )
    parser.add_argument(
        "--grid-origin",
        type=float,
        nargs=2,
        default=[0.0, 0.0],
        metavar=("LAT", "LON"),
        help="South-west corner of grid cell (0, 0)",
    )
    parser.add_argument(
        "--seed",
        dest="random_seed",
        type=int,
        default=None,
        help="Seed for the random metric",
    )
    parser.add_argument(
        "--no-progress",
        dest="show_progress",
        action="store_false",
        help="Hide progress bars",
    )
    parser.add_argument(
        "--log-level",
        dest="log_level",
        default="INFO",
        help="Log level (e.g. INFO, DEBUG)",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = _build_arg_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, str(args.log_level).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )

    config = ExtractionConfig(
        osm_path=args.osm_path,
        srtm_dir=args.srtm_dir,
        output_path=args.output_path,
        metrics=tuple(args.metrics or DEFAULT_METRICS),
        internal_metrics=tuple(args.internal_metrics),
        edge_filter=args.edge_filter,
        gzip_output=args.gzip_output,
        grid_cell_size=args.grid_cell_size,
        grid_origin=tuple(args.grid_origin),
        random_seed=args.random_seed,
        show_progress=args.show_progress,
    )

    if not os.path.isfile(config.osm_path):
        logger.error("Input file does not exist: %s", config.osm_path)
        return 1
    if not os.path.isdir(config.srtm_dir):
        logger.error("SRTM directory does not exist: %s", config.srtm_dir)
        return 1

    try:
        graph = GraphExtractor(config).extract()
        dump_graph(graph, config.output_path, gzip_output=config.gzip_output)
    except ExtractionError as exc:
        logger.error("Extraction failed: %s", exc)
        return 2

    logger.info("Done.")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
