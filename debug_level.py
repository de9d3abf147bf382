import sys, os
ROOT = os.path.dirname(__file__)
SRC = os.path.join(ROOT, 'src')
if SRC not in sys.path:
    sys.path.insert(0, SRC)
from samegame.config import LevelConfig
from samegame.events.bus import EventBus, EVENT_LEVEL_CLEARED, EVENT_LEVEL_STUCK
from samegame.systems.board_ops import format_board, get_board, occupied_indices
from samegame.systems.connectivity import select_group
from samegame.systems.game_flow_system import GameFlowSystem
from samegame.systems.level import LevelSystem
from samegame.world import create_world

# Plays the largest available group every turn on a small seeded board.
seed = int(sys.argv[1]) if len(sys.argv) > 1 else 7
config = LevelConfig(cols=8, rows=6, type_count=3, seed=seed)

bus = EventBus()
world = create_world(config)
level = LevelSystem(world, bus)
flow = GameFlowSystem(world, bus, level, config)

for ev in [EVENT_LEVEL_CLEARED, EVENT_LEVEL_STUCK]:
    bus.subscribe(ev, lambda s, _ev=ev, **k: print(_ev, k))

board = flow.start_new_game()
print(format_board(world, board))
turn = 0
while level.state.name == 'PLAYABLE':
    board = get_board(world)
    best = None
    seen = set()
    for index in occupied_indices(board):
        if index in seen:
            continue
        group = select_group(world, board, index)
        seen |= group
        if best is None or len(group) > len(best):
            best = group
    turn += 1
    outcome = level.select_index(min(best))
    print(f"\nturn {turn}: removed {outcome.cells_affected} tiles, points {outcome.points:+d}, score {level.score}")
    print(format_board(world, board))
print('final state', level.state.name, 'score', level.score)
