"""Centralized configuration for map generation, placement and play."""

from dataclasses import dataclass, field

from .errors import ConfigurationError
from .simulation.placement import Scenario


@dataclass
class MapConfig:
    """Configuration for the noise terrain generator."""

    width: int = 60
    height: int = 40
    noise_scale: float = 0.12
    water_threshold: float = 0.35  # Noise below which is water
    mountain_threshold: float = 0.62  # Noise above which is mountain
    border_mountains: bool = True
    # Multi-octave noise (1 octave = plain coherent noise sample)
    octaves: int = 1
    persistence: float = 0.5
    lacunarity: float = 2.0
    # World units per cell
    cell_size: float = 1.0

    def validate(self) -> None:
        """Raise ConfigurationError if the map cannot be generated."""
        if self.width < 3 or self.height < 3:
            raise ConfigurationError(
                f"map must be at least 3x3, got {self.width}x{self.height}"
            )
        if self.noise_scale <= 0:
            raise ConfigurationError(f"noise_scale must be positive, got {self.noise_scale}")
        if self.water_threshold >= self.mountain_threshold:
            raise ConfigurationError(
                "water_threshold must be below mountain_threshold "
                f"({self.water_threshold} >= {self.mountain_threshold})"
            )
        if self.octaves < 1:
            raise ConfigurationError(f"octaves must be >= 1, got {self.octaves}")
        if self.cell_size <= 0:
            raise ConfigurationError(f"cell_size must be positive, got {self.cell_size}")


@dataclass
class SpawnConfig:
    """Configuration for player, item and goal placement."""

    min_reachable: int = 100
    max_tries: int = 200  # random player spawn attempts per map
    min_item_distance: float = 5.0
    min_goal_distance: float = 15.0
    pick_attempts: int = 80  # random draws per item before giving up on it
    pickaxe_attempts: int = 100  # place-and-verify rounds for the pickaxe
    # Safety valve on full map regenerations (None = retry forever)
    max_regenerations: int | None = 100
    # Force an item scenario (None = chosen uniformly per attempt)
    scenario: Scenario | None = None
    # Escalate a missing goal to a regeneration instead of a warning
    require_goal: bool = False
    # Random seed for reproducibility (None = random seed)
    seed: int | None = None

    def validate(self) -> None:
        """Raise ConfigurationError for placement settings that can never work."""
        if self.min_reachable < 1:
            raise ConfigurationError(f"min_reachable must be >= 1, got {self.min_reachable}")
        for name in ("max_tries", "pick_attempts", "pickaxe_attempts"):
            value = getattr(self, name)
            if value < 1:
                raise ConfigurationError(f"{name} must be >= 1, got {value}")
        if self.min_item_distance < 0 or self.min_goal_distance < 0:
            raise ConfigurationError("spawn distances must not be negative")
        if self.max_regenerations is not None and self.max_regenerations < 1:
            raise ConfigurationError(
                f"max_regenerations must be >= 1 or None, got {self.max_regenerations}"
            )


@dataclass
class PlayerConfig:
    """Configuration for player movement along a path."""

    move_speed: float = 3.0  # world units per second
    arrive_epsilon: float = 0.01  # distance at which a waypoint counts as reached

    def validate(self) -> None:
        if self.move_speed <= 0:
            raise ConfigurationError(f"move_speed must be positive, got {self.move_speed}")
        if self.arrive_epsilon <= 0:
            raise ConfigurationError(
                f"arrive_epsilon must be positive, got {self.arrive_epsilon}"
            )


@dataclass
class MiningConfig:
    """Configuration for mining reach."""

    allow_diagonal: bool = False  # 8 directions instead of 4
    allow_current_tile: bool = False


@dataclass
class RendererConfig:
    """Configuration for the Pygame renderer."""

    tile_size: int = 16  # pixels per cell
    sidebar_width: int = 240
    target_fps: int = 60
    show_instructions: bool = True

    def validate(self) -> None:
        if self.tile_size < 1:
            raise ConfigurationError(f"tile_size must be >= 1 pixel, got {self.tile_size}")
        if self.sidebar_width < 0:
            raise ConfigurationError(f"sidebar_width must not be negative, got {self.sidebar_width}")
        if self.target_fps < 1:
            raise ConfigurationError(f"target_fps must be >= 1, got {self.target_fps}")


@dataclass
class Config:
    """Main configuration container."""

    map: MapConfig = field(default_factory=MapConfig)
    spawn: SpawnConfig = field(default_factory=SpawnConfig)
    player: PlayerConfig = field(default_factory=PlayerConfig)
    mining: MiningConfig = field(default_factory=MiningConfig)
    renderer: RendererConfig = field(default_factory=RendererConfig)

    @classmethod
    def default(cls) -> "Config":
        """Create default configuration."""
        return cls(
            map=MapConfig(),
            spawn=SpawnConfig(),
            player=PlayerConfig(),
            mining=MiningConfig(),
            renderer=RendererConfig(),
        )

    def validate(self) -> None:
        """Validate every section, raising ConfigurationError on the first problem."""
        self.map.validate()
        self.spawn.validate()
        self.player.validate()
        self.renderer.validate()
