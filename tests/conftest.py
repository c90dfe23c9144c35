import pytest

from cave_quest.config import Config, MapConfig, SpawnConfig
from cave_quest.simulation.grid import TerrainGrid, TerrainKind


class FakeSurface:
    """In-memory terrain surface recording every write."""

    def __init__(self):
        self.tiles = {}
        self.writes = []
        self.clears = 0

    def set_tile(self, cell, kind):
        self.tiles[cell] = kind
        self.writes.append((cell, kind))

    def clear_all(self):
        self.tiles.clear()
        self.clears += 1

    def get_tile(self, cell):
        return self.tiles.get(cell, TerrainKind.EMPTY)


class FakeSpawner:
    """Entity spawner tracking live handles."""

    def __init__(self):
        self.live = {}
        self.despawned = []
        self._next = 0

    def spawn(self, kind, position):
        self._next += 1
        self.live[self._next] = (kind, position)
        return self._next

    def despawn(self, handle):
        self.despawned.append(handle)
        self.live.pop(handle, None)


class StubGenerator:
    """Terrain generator returning canned grids, one per call (last one repeats)."""

    def __init__(self, *grids):
        self.grids = list(grids)
        self.seeds = []
        self.heightmap = None

    def generate(self, seed):
        self.seeds.append(seed)
        index = min(len(self.seeds), len(self.grids)) - 1
        return self.grids[index].copy()


@pytest.fixture
def fake_surface():
    return FakeSurface()


@pytest.fixture
def fake_spawner():
    return FakeSpawner()


@pytest.fixture
def grass_config():
    """20x20 map: mountain border around an all-grass interior."""
    return Config(
        map=MapConfig(
            width=20,
            height=20,
            water_threshold=0.0,
            mountain_threshold=1.0,
            border_mountains=True,
        ),
        spawn=SpawnConfig(
            seed=1,
            min_reachable=50,
            min_item_distance=2.0,
            min_goal_distance=3.0,
            max_regenerations=5,
        ),
    )


@pytest.fixture
def noisy_config():
    """Small noise-driven map with settings that are easy to satisfy."""
    return Config(
        map=MapConfig(width=40, height=30),
        spawn=SpawnConfig(
            min_reachable=30,
            min_item_distance=3.0,
            min_goal_distance=8.0,
            max_regenerations=500,
        ),
    )


@pytest.fixture
def corridor_grid():
    return TerrainGrid.from_rows(
        [
            "^^^^^^^",
            "^.....^",
            "^^^^^^^",
        ]
    )
