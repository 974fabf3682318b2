"""
Invader formation and its lockstep movement.

The formation is spawned as a rectangular lattice and only ever shrinks.
FormationController moves every live invader together on a fixed cadence,
turning down a row and speeding up whenever any invader reaches a side edge.
"""

import logging
from enum import Enum
from typing import List, Optional

from .config import SpaceInvadersConfig
from .entities import Entity, EntityKind, EntityRegistry, InvaderType

logger = logging.getLogger(__name__)


class MovementState(Enum):
    """Direction state of the formation."""
    MOVING_RIGHT = "moving_right"
    MOVING_LEFT = "moving_left"
    TURNING_TO_LEFT = "turning_to_left"  # One downward step, then left
    TURNING_TO_RIGHT = "turning_to_right"  # One downward step, then right


class InvaderFormation:
    """
    The row/column lattice of invaders.

    Cells hold entity handles. A cell empties when its invader leaves the
    registry; nothing ever refills it.
    """

    def __init__(self, registry: EntityRegistry, cells: List[List[Optional[int]]]):
        self.registry = registry
        self._cells = cells

    @classmethod
    def spawn(cls, registry: EntityRegistry, config: SpaceInvadersConfig) -> "InvaderFormation":
        """Spawn a full grid of invaders into the registry."""
        origin_x = config.width * config.formation_origin_x
        origin_y = config.height * config.formation_origin_y
        step_x = config.invader_width + config.invader_spacing_x
        step_y = config.invader_height + config.invader_spacing_y

        cells: List[List[Optional[int]]] = []
        for row in range(config.invader_rows):
            invader_type = InvaderType(row % 3)
            y = origin_y + row * step_y
            cell_row: List[Optional[int]] = []
            for col in range(config.invader_cols):
                invader = registry.spawn(
                    EntityKind.INVADER,
                    x=origin_x + col * step_x,
                    y=y,
                    width=config.invader_width,
                    height=config.invader_height,
                    invader_type=invader_type,
                )
                cell_row.append(invader.id)
            cells.append(cell_row)

        return cls(registry, cells)

    @property
    def rows(self) -> int:
        return len(self._cells)

    @property
    def cols(self) -> int:
        return len(self._cells[0]) if self._cells else 0

    def cell(self, row: int, col: int) -> Optional[int]:
        """Handle of the live invader in a cell, or None if the cell is empty."""
        entity_id = self._cells[row][col]
        if entity_id is not None and entity_id not in self.registry:
            self._cells[row][col] = None
            return None
        return entity_id

    def live_invaders(self) -> List[Entity]:
        """Live invaders in row-major lattice order."""
        invaders: List[Entity] = []
        for row in range(self.rows):
            for col in range(self.cols):
                entity_id = self.cell(row, col)
                if entity_id is not None:
                    invaders.append(self.registry.get(entity_id))
        return invaders

    def __len__(self) -> int:
        return len(self.live_invaders())

    def is_empty(self) -> bool:
        return len(self) == 0

    def lowest_edge(self) -> Optional[float]:
        """Lowest bottom edge among live invaders, None when empty."""
        invaders = self.live_invaders()
        if not invaders:
            return None
        return min(inv.box.bottom for inv in invaders)


class FormationController:
    """
    Owns the formation's movement state and moves it in lockstep.

    advance() is called once per tick. The formation only moves when a full
    move interval has passed since its last move.
    """

    def __init__(self, formation: InvaderFormation, config: SpaceInvadersConfig):
        self.formation = formation
        self.config = config
        self.state = MovementState.MOVING_RIGHT
        self.move_interval = config.initial_move_interval
        self.last_move_timestamp = 0.0
        self.step_count = 0  # Drives the two-frame invader animation

    def advance(self, now: float) -> bool:
        """
        Move the formation if its cadence allows it.

        Args:
            now: Current simulation time

        Returns:
            True if the formation moved this tick
        """
        if now - self.last_move_timestamp < self.move_interval:
            return False

        invaders = self.formation.live_invaders()
        if not invaders:
            return False

        self._resolve_direction(invaders)

        dx, dy = 0.0, 0.0
        if self.state == MovementState.MOVING_RIGHT:
            dx = self.config.march_step
        elif self.state == MovementState.MOVING_LEFT:
            dx = -self.config.march_step
        else:
            dy = -self.config.drop_distance

        for invader in invaders:
            invader.box.x += dx
            invader.box.y += dy

        self.last_move_timestamp = now
        self.step_count += 1
        return True

    def _resolve_direction(self, invaders: List[Entity]) -> None:
        """Re-evaluate the direction before stepping."""
        if self.state == MovementState.TURNING_TO_LEFT:
            self.state = MovementState.MOVING_LEFT
            return
        if self.state == MovementState.TURNING_TO_RIGHT:
            self.state = MovementState.MOVING_RIGHT
            return

        right_limit = self.config.width - self.config.edge_margin
        left_limit = self.config.edge_margin

        # First invader found at the edge wins; scan stops there
        for invader in invaders:
            if self.state == MovementState.MOVING_RIGHT and invader.box.right >= right_limit:
                self.state = MovementState.TURNING_TO_LEFT
                self.scale_interval(self.config.speed_up_factor)
                return
            if self.state == MovementState.MOVING_LEFT and invader.box.left <= left_limit:
                self.state = MovementState.TURNING_TO_RIGHT
                self.scale_interval(self.config.speed_up_factor)
                return

    def scale_interval(self, factor: float) -> bool:
        """
        Multiply the move interval by a factor.

        A result that is not strictly positive is rejected and the interval
        stays unchanged.

        Returns:
            True if the interval changed
        """
        proposed = self.move_interval * factor
        if proposed <= 0:
            logger.debug("Rejected move interval scale %s (interval %s)", factor, self.move_interval)
            return False
        self.move_interval = proposed
        logger.debug("Formation move interval now %.4f", self.move_interval)
        return True
