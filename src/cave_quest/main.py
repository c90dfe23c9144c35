"""Main entry point for Cave Quest."""

from __future__ import annotations

import argparse
import logging

from .config import Config
from .errors import CaveQuestError
from .renderer import PygameRenderer
from .simulation import World

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Explore a procedurally generated cave world.")
    p.add_argument("--seed", type=int, default=None, help="Optional seed for a reproducible map.")
    p.add_argument("--width", type=int, default=None, help="Map width in tiles.")
    p.add_argument("--height", type=int, default=None, help="Map height in tiles.")
    p.add_argument("--tile-size", type=int, default=None, help="Tile size in pixels.")
    p.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity (default: INFO)",
    )
    return p.parse_args(argv)


def build_config(args: argparse.Namespace) -> Config:
    """Apply command line overrides to the default configuration."""
    config = Config.default()
    if args.seed is not None:
        config.spawn.seed = args.seed
    if args.width is not None:
        config.map.width = args.width
    if args.height is not None:
        config.map.height = args.height
    if args.tile_size is not None:
        config.renderer.tile_size = args.tile_size
    return config


def run(renderer: PygameRenderer, world: World) -> None:
    """Drive the frame loop until the window is closed."""
    running = True
    dt = 0.0
    while running:
        running = renderer.handle_events(world)
        world.step(dt)
        renderer.render(world)
        dt = renderer.tick()


def main(argv: list[str] | None = None) -> None:
    """Run the game."""
    args = parse_args(argv)
    logging.basicConfig(level=args.log_level, format="%(levelname)s %(name)s: %(message)s")

    config = build_config(args)
    try:
        config.validate()
    except CaveQuestError as exc:
        raise SystemExit(f"cave-quest: {exc}") from exc

    renderer = PygameRenderer(config.renderer, config.map.width, config.map.height)
    try:
        world = World(
            config,
            surface=renderer,
            spawner=renderer,
            on_goal_reached=renderer.show_win,
        )
        world.initialize()
        logger.info("starting with seed %s", world.seed)

        # A new map requested in play can also exhaust the regeneration ceiling
        run(renderer, world)
    except CaveQuestError as exc:
        raise SystemExit(f"cave-quest: {exc}") from exc
    finally:
        renderer.cleanup()


if __name__ == "__main__":
    main()
