"""Command-line interface for planet generation."""

import argparse
import time

import structlog
from pydantic import ValidationError

from .config import PlanetConfig, find_config, load_config
from .exceptions import PlanetError
from .mesh.icosphere import build_all_patches, generate_icosphere
from .shape import ShapeGenerator
from .validation import validate_patches


def configure_logging(verbose: bool = False) -> None:
    """Configure structlog for console output."""
    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(10 if verbose else 20),
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Generate a procedural icosphere planet"
    )
    parser.add_argument(
        "--config",
        type=str,
        help="Path or name of planet TOML config file",
    )
    parser.add_argument(
        "--detail", type=int, default=None, help="Detail level >= 1 (overrides config)"
    )
    parser.add_argument(
        "--resolution",
        type=int,
        default=None,
        help="Explicit subdivision resolution (overrides --detail)",
    )
    parser.add_argument(
        "--radius", type=float, default=None, help="Planet radius (overrides config)"
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Threads used to build patches (overrides config)",
    )
    parser.add_argument(
        "--validate",
        action="store_true",
        help="Check seam coincidence and normal agreement after generation",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Verbose logging"
    )
    return parser


def apply_overrides(config: PlanetConfig, args: argparse.Namespace) -> PlanetConfig:
    """Return a re-validated copy of ``config`` with CLI overrides applied."""
    data = config.model_dump()
    if args.detail is not None:
        data["detail"] = args.detail
        data["resolution"] = None
    if args.resolution is not None:
        data["resolution"] = args.resolution
    if args.workers is not None:
        data["workers"] = args.workers
    if args.radius is not None:
        data["shape"]["radius"] = args.radius
    return PlanetConfig.model_validate(data)


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for planet generation."""
    args = build_parser().parse_args(argv)

    configure_logging(args.verbose)
    logger = structlog.get_logger()

    try:
        if args.config:
            try:
                config_path = find_config(args.config)
            except FileNotFoundError:
                logger.error("config_not_found", path=args.config)
                raise SystemExit(1)

            config = load_config(config_path)
            logger.info("config_loaded", path=str(config_path))
        else:
            config = PlanetConfig()
            logger.info("using_default_config")

        config = apply_overrides(config, args)
        resolution = config.subdivision_resolution()
        shape = ShapeGenerator(config.shape)
    except (ValidationError, PlanetError) as e:
        logger.error("invalid_config", error=str(e))
        raise SystemExit(1)

    logger.info(
        "planet_starting",
        resolution=resolution,
        radius=config.shape.radius,
        layers=len(config.shape.noise_layers),
        workers=config.workers,
    )

    start_time = time.time()

    if args.validate:
        builds = build_all_patches(resolution, shape, config.workers)
        patches = [build.to_patch() for build in builds]
    else:
        patches = generate_icosphere(resolution, shape, config.workers)

    elapsed = time.time() - start_time
    logger.info(
        "planet_generated",
        patches=len(patches),
        vertices=sum(p.vertex_count for p in patches),
        triangles=sum(p.triangle_count for p in patches),
        max_radius=config.shape.max_radius(),
        elapsed_s=round(elapsed, 3),
    )

    if args.validate:
        result = validate_patches(patches, builds)
        if not result.passed:
            raise SystemExit(1)


if __name__ == "__main__":
    main()
