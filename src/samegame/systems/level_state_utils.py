from typing import Type, TypeVar

from esper import World

from samegame.components.hover_state import HoverState
from samegame.components.level_state import LevelStatus
from samegame.components.score import Score

T = TypeVar("T")


def _get_or_create(world: World, component_type: Type[T]) -> T:
    existing = list(world.get_component(component_type))
    if existing:
        return existing[0][1]
    component = component_type()
    # Level resources share one entity so a new game can reset them together.
    for entity, _ in world.get_component(LevelStatus):
        world.add_component(entity, component)
        return component
    world.create_entity(component)
    return component


def get_or_create_score(world: World) -> Score:
    """Return the shared Score component, creating it if absent."""
    return _get_or_create(world, Score)


def get_or_create_status(world: World) -> LevelStatus:
    return _get_or_create(world, LevelStatus)


def get_or_create_hover(world: World) -> HoverState:
    return _get_or_create(world, HoverState)
