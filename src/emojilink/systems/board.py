from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Dict, List, Sequence, Tuple, Union

from esper import World

from emojilink.components.grid import Coord, Grid
from emojilink.events.bus import EVENT_BOARD_RESET, EVENT_CELLS_CLEARED, EventBus
from emojilink.utils.connectivity import Connected, PathResult, connect
from emojilink.utils.game_state import get_session_config

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Matched:
    path: Tuple[Coord, ...]


@dataclass(frozen=True, slots=True)
class Rejected:
    pass


REJECTED = Rejected()
MatchOutcome = Union[Matched, Rejected]


class BoardSystem:
    """Owns the board entity and its Grid: fill, match clearing, move detection."""

    def __init__(self, world: World, event_bus: EventBus, grid: Grid | None = None):
        self.world = world
        self.event_bus = event_bus
        self.board_entity = self.world.create_entity()
        if grid is not None:
            self.replace_grid(grid)
        else:
            self.new_board()

    @property
    def grid(self) -> Grid:
        return self.world.component_for_entity(self.board_entity, Grid)

    def new_board(
        self,
        size: int | None = None,
        palette: Sequence[str] | None = None,
        rng: random.Random | None = None,
    ) -> Grid:
        """Replace the grid with a freshly randomized one."""
        config = get_session_config(self.world)
        grid = Grid.create(
            size if size is not None else config.grid_size,
            palette if palette is not None else config.palette,
            rng or getattr(self.world, "random", None),
        )
        return self.replace_grid(grid)

    def replace_grid(self, grid: Grid) -> Grid:
        # Adding a component of an existing type replaces it.
        self.world.add_component(self.board_entity, grid)
        logger.debug("new %dx%d board", grid.size, grid.size)
        self.event_bus.emit(EVENT_BOARD_RESET, size=grid.size, cells=grid.snapshot())
        return grid

    def find_path(self, a: Tuple[int, int], b: Tuple[int, int]) -> PathResult:
        return connect(self.grid, a, b)

    def attempt_match(self, a: Tuple[int, int], b: Tuple[int, int]) -> MatchOutcome:
        """Clear both cells if they connect; otherwise leave the board untouched."""
        grid = self.grid
        result = connect(grid, a, b)
        if not isinstance(result, Connected):
            return REJECTED
        symbol = grid.get(a)
        grid.clear(a)
        grid.clear(b)
        self.event_bus.emit(EVENT_CELLS_CLEARED, positions=[Coord(*a), Coord(*b)], symbol=symbol)
        return Matched(path=result.path)

    def find_move(self) -> Tuple[Coord, Coord, Tuple[Coord, ...]] | None:
        """First connectable equal-symbol pair in row-major order, with its path."""
        grid = self.grid
        by_symbol: Dict[str, List[Coord]] = {}
        for coord, symbol in grid.occupied():
            by_symbol.setdefault(symbol, []).append(coord)
        for first, _ in grid.occupied():
            for second in by_symbol[grid.get(first)]:
                if second <= first:
                    continue
                result = connect(grid, first, second)
                if isinstance(result, Connected):
                    return first, second, result.path
        return None

    def has_any_move(self) -> bool:
        return self.find_move() is not None
