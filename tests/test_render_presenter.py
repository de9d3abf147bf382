import pytest

from samegame.config import LevelConfig
from samegame.components.tile import TileVisual
from samegame.events.bus import EventBus
from samegame.systems.board_ops import cell_center, get_tile, remove_and_compact
from samegame.systems.game_flow_system import GameFlowSystem
from samegame.systems.level import LevelSystem, WIN_MESSAGE
from samegame.systems.render import RenderSystem
from samegame.world import create_world
from tests.helpers import types_from_rows


class DummyWindow:
    width = 800
    height = 600


def _setup(rows):
    config = LevelConfig(cols=len(rows[0]), rows=len(rows), type_count=2, origin=(0.0, 0.0), cell_size=(1.0, 1.0))
    bus = EventBus()
    world = create_world(config)
    render = RenderSystem(world, bus, DummyWindow())
    level = LevelSystem(world, bus)
    flow = GameFlowSystem(world, bus, level, config, presenter=render)
    board = flow.start_new_game(types=types_from_rows(rows))
    return world, render, level, flow, board


def test_spawned_tiles_get_sprites_at_cell_centers():
    world, render, _, _, board = _setup(["AB", "BA"])
    assert render.sprite_count == 4
    handle = world.component_for_entity(get_tile(board, 3), TileVisual).handle
    sprite = render.sprite_for(handle)
    assert (sprite.x, sprite.y) == cell_center(board, 3)
    assert sprite.type_id == 1


def test_sprites_follow_moves_and_removals():
    world, render, _, _, board = _setup(["BA", "AB"])
    faller = get_tile(board, 2)
    handle = world.component_for_entity(faller, TileVisual).handle
    remove_and_compact(world, board, [0])
    assert render.sprite_count == 3
    sprite = render.sprite_for(handle)
    assert (sprite.x, sprite.y) == cell_center(board, 0)


def test_level_messages_and_restart():
    world, render, level, flow, board = _setup(["AA"])
    level.on_player_select(0.5, 0.5)
    assert render.message == WIN_MESSAGE
    assert render.sprite_count == 0
    flow.start_new_game(types=types_from_rows(["BB"]))
    assert render.message is None
    assert render.sprite_count == 2


def test_unknown_handle_raises():
    render = RenderSystem(create_world(), EventBus(), DummyWindow())
    with pytest.raises(KeyError):
        render.move(42, (0.0, 0.0))
    with pytest.raises(KeyError):
        render.release(42)
