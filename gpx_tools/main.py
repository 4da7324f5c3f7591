"""Command line entry point for the GPX tools."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Optional, Sequence

from .config import COMPUTE_DEVIATION, DEFAULT_MAX_ITERATIONS, MAX_WORKERS
from .errors import ConfigurationError, GpxFormatError
from .gpx_io import read_gpx, update_gpx_tracks, write_gpx
from .info import format_file_info
from .models import SimplificationMethod, SolverConfig
from .services import ReductionService


def _setup_logging(level: int = logging.INFO) -> None:
    if not logging.getLogger().hasHandlers():
        logging.basicConfig(
            level=level,
            format="[%(asctime)s] %(levelname)s %(name)s: %(message)s",
        )
    logging.getLogger().setLevel(level)


def _resolve_output_path(input_path: Path, output_path: Path) -> Path:
    if output_path.is_dir():
        return output_path / input_path.name
    return output_path


def _build_parser() -> argparse.ArgumentParser:
    """Return the CLI argument parser with one sub-command per tool."""

    parser = argparse.ArgumentParser(prog="gpx-tools", description="GPX file utilities")
    commands = parser.add_subparsers(dest="command", required=True)

    reduce_parser = commands.add_parser(
        "reduce-points", help="Reduce the number of points in tracks."
    )
    reduce_parser.add_argument("input", type=Path, help="Input GPX file")
    reduce_parser.add_argument(
        "-o", "--output", type=Path, required=True, help="Output GPX file or directory"
    )
    reduce_parser.add_argument(
        "-n", "--points", dest="max_points", type=int, required=True,
        help="Max point count per track",
    )
    reduce_parser.add_argument(
        "-i", "--iterations", dest="max_iterations", type=int,
        default=DEFAULT_MAX_ITERATIONS,
        help=f"Max solver iterations (default: {DEFAULT_MAX_ITERATIONS})",
    )
    reduce_parser.add_argument(
        "-a", "--algorithm",
        choices=[method.value for method in SimplificationMethod],
        default=SimplificationMethod.RDP.value,
        help="Simplification algorithm: rdp (Ramer-Douglas-Peucker) or "
        "vw (Visvalingam-Whyatt)",
    )
    reduce_parser.add_argument(
        "-e", "--epsilon", type=float,
        help="Initial epsilon value (default depends on the algorithm)",
    )
    reduce_parser.add_argument(
        "--workers", type=int, default=MAX_WORKERS,
        help="Tracks reduced in parallel",
    )
    reduce_parser.add_argument(
        "--deviation", action="store_true", default=COMPUTE_DEVIATION,
        help="Log the maximum deviation introduced per track",
    )
    _add_verbosity_flags(reduce_parser)

    info_parser = commands.add_parser("info", help="Show a summary of a GPX file.")
    info_parser.add_argument("input", type=Path, help="Input GPX file")
    info_parser.add_argument(
        "-v", "--verbose", action="store_true", help="Display additional information"
    )
    return parser


def _add_verbosity_flags(parser: argparse.ArgumentParser) -> None:
    group = parser.add_mutually_exclusive_group()
    group.add_argument("-q", "--quiet", action="store_true", help="Only log warnings")
    group.add_argument(
        "-v", "--verbose", action="store_true", help="Log every solver iteration"
    )


def run_reduce_points(args: argparse.Namespace) -> int:
    level = logging.INFO
    if args.quiet:
        level = logging.WARNING
    elif args.verbose:
        level = logging.DEBUG
    _setup_logging(level)

    try:
        config = SolverConfig.from_method(
            args.max_points,
            args.algorithm,
            max_iterations=args.max_iterations,
            initial_epsilon=args.epsilon,
        )
    except ConfigurationError as exc:
        logging.error("Invalid solver settings: %s", exc)
        return 1
    try:
        service = ReductionService(
            config, max_workers=args.workers, compute_deviation=args.deviation
        )
    except ValueError as exc:
        logging.error("Invalid worker count %s: %s", args.workers, exc)
        return 1

    output_path = _resolve_output_path(args.input, args.output)
    logging.info("Loading input file '%s'...", args.input)
    try:
        document, tracks = read_gpx(args.input)
    except (GpxFormatError, FileNotFoundError) as exc:
        logging.error("Failed to load '%s': %s", args.input, exc)
        return 1

    results = service.process(tracks)
    update_gpx_tracks(document, [result.track for result in results])
    write_gpx(document, output_path)
    logging.info("Finished simplification. Wrote output to '%s'.", output_path)
    return 0


def run_info(args: argparse.Namespace) -> int:
    _setup_logging(logging.WARNING)
    try:
        document, tracks = read_gpx(args.input)
    except (GpxFormatError, FileNotFoundError) as exc:
        logging.error("Failed to load '%s': %s", args.input, exc)
        return 1
    for line in format_file_info(args.input, document, tracks, verbose=args.verbose):
        print(line)
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    """CLI entry point used via ``gpx-tools`` or ``python -m gpx_tools``."""

    parser = _build_parser()
    args = parser.parse_args(argv)
    if args.command == "reduce-points":
        return run_reduce_points(args)
    return run_info(args)


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
