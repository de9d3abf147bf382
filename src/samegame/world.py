from esper import World

from samegame.components.hover_state import HoverState
from samegame.components.level_state import LevelStatus
from samegame.components.score import Score
from samegame.components.tile_types import TileTypes
from samegame.config import LevelConfig


def create_world(config: LevelConfig | None = None) -> World:
    """Create a world holding the tile type registry and the level resources.

    The board itself is spawned separately (``spawn_board`` or a new game
    request) so a presenter can be wired up first.
    """
    config = config or LevelConfig()
    world = World()
    world.create_entity(TileTypes(count=config.type_count))
    world.create_entity(LevelStatus(), Score(), HoverState())
    return world


def get_tile_registry(world: World) -> TileTypes:
    for _, registry in world.get_component(TileTypes):
        return registry
    raise RuntimeError("TileTypes definitions not found")
