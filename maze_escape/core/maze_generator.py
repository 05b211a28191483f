"""
Maze Escape Maze Generator

Builds perfect mazes with a randomized depth-first backtracker and scatters
collectible hearts over them.

Maze Model:
    cells[y][x]   = Cell with four walls (top, right, bottom, left)
    start         = (0, 0)
    end           = (width - 1, height - 1)
    collectibles  = hearts, each carrying one message from MESSAGE_POOL
"""

import random
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class Direction(Enum):
    """Movement directions, named after the wall they cross."""
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"

    @property
    def delta(self) -> tuple[int, int]:
        """Get (dx, dy) for this direction."""
        deltas = {
            Direction.UP: (0, -1),
            Direction.DOWN: (0, 1),
            Direction.LEFT: (-1, 0),
            Direction.RIGHT: (1, 0),
        }
        return deltas[self]

    @property
    def wall(self) -> str:
        """Name of the wall that blocks this direction."""
        walls = {
            Direction.UP: "top",
            Direction.DOWN: "bottom",
            Direction.LEFT: "left",
            Direction.RIGHT: "right",
        }
        return walls[self]


OPPOSITE_WALL = {"top": "bottom", "bottom": "top", "left": "right", "right": "left"}

MESSAGE_POOL = (
    "You're amazing! 💕",
    "Your smile brightens my day ☀️",
    "You inspire me every day 🌟",
    "You're one of a kind 🦄",
    "Your kindness touches hearts 💖",
    "You make everything better ✨",
)

COLLECTIBLE_DENSITY = 0.1


@dataclass
class Position:
    """2D position in the maze."""
    x: int
    y: int

    def move(self, direction: Direction) -> "Position":
        """Return new position after moving in direction."""
        dx, dy = direction.delta
        return Position(self.x + dx, self.y + dy)

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {"x": self.x, "y": self.y}


def _all_walls() -> dict[str, bool]:
    return {"top": True, "right": True, "bottom": True, "left": True}


@dataclass
class Cell:
    """A single maze cell. A True wall is impassable."""
    x: int
    y: int
    walls: dict[str, bool] = field(default_factory=_all_walls)
    visited: bool = False

    def has_wall(self, side: str) -> bool:
        return self.walls[side]

    def to_dict(self) -> dict:
        return {"x": self.x, "y": self.y, "walls": dict(self.walls)}


@dataclass
class Collectible:
    """A heart placed in the maze."""
    x: int
    y: int
    message: str
    collected: bool = False

    def to_dict(self) -> dict:
        return {
            "x": self.x,
            "y": self.y,
            "message": self.message,
            "collected": self.collected,
        }


@dataclass
class Maze:
    """A generated maze with its start, end and collectibles."""
    width: int
    height: int
    cells: list[list[Cell]]
    start: Position
    end: Position
    collectibles: list[Collectible] = field(default_factory=list)

    def cell(self, x: int, y: int) -> Optional[Cell]:
        """Get the cell at (x, y), or None when out of bounds."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            return None
        return self.cells[y][x]

    def collectible_at(self, x: int, y: int) -> Optional[Collectible]:
        """Get the uncollected collectible at (x, y), if any."""
        for collectible in self.collectibles:
            if collectible.x == x and collectible.y == y and not collectible.collected:
                return collectible
        return None

    def open_passages(self) -> int:
        """Count open walls between adjacent cells."""
        count = 0
        for row in self.cells:
            for cell in row:
                # Right and bottom only, so each passage is counted once
                if cell.x + 1 < self.width and not cell.walls["right"]:
                    count += 1
                if cell.y + 1 < self.height and not cell.walls["bottom"]:
                    count += 1
        return count

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "width": self.width,
            "height": self.height,
            "cells": [[cell.to_dict() for cell in row] for row in self.cells],
            "start": self.start.to_dict(),
            "end": self.end.to_dict(),
            "collectibles": [c.to_dict() for c in self.collectibles],
        }

    def visualize(self, player: Optional[Position] = None) -> str:
        """
        Generate ASCII visualization of the maze.

        Args:
            player: If provided, marks the player position with '@'.

        Returns:
            ASCII string with '+', '-', '|' walls, 'E' for the end and
            'h' for uncollected hearts.
        """
        lines = ["+" + "---+" * self.width]
        for row in self.cells:
            body = "|"
            floor = "+"
            for cell in row:
                if player is not None and (cell.x, cell.y) == (player.x, player.y):
                    marker = "@"
                elif (cell.x, cell.y) == (self.end.x, self.end.y):
                    marker = "E"
                elif self.collectible_at(cell.x, cell.y):
                    marker = "h"
                else:
                    marker = " "
                body += f" {marker} " + ("|" if cell.walls["right"] else " ")
                floor += ("---" if cell.walls["bottom"] else "   ") + "+"
            lines.append(body)
            lines.append(floor)
        return "\n".join(lines)


class MazeGenerator:
    """
    Randomized depth-first backtracker.

    Example usage:
        generator = MazeGenerator(15, 15, rng=random.Random(42))
        maze = generator.generate()
    """

    def __init__(
        self,
        width: int,
        height: int,
        rng: Optional[random.Random] = None,
        messages: tuple[str, ...] = MESSAGE_POOL,
    ):
        """
        Initialize the generator.

        Args:
            width: Number of columns, at least 1.
            height: Number of rows, at least 1.
            rng: Random source. A seeded instance gives a reproducible maze.
            messages: Ordered pool of collectible messages.

        Raises:
            ValueError: If a dimension is not positive.
        """
        if width < 1 or height < 1:
            raise ValueError(f"Maze dimensions must be positive, got {width}x{height}")
        self.width = width
        self.height = height
        self.rng = rng if rng is not None else random.Random()
        self.messages = messages
        self.cells: list[list[Cell]] = []

    def generate(self) -> Maze:
        """Carve a perfect maze and place collectibles on it."""
        self._initialize_cells()

        stack = [self.cells[0][0]]
        self.cells[0][0].visited = True

        while stack:
            current = stack[-1]
            neighbors = self._unvisited_neighbors(current)

            if neighbors:
                chosen = self.rng.choice(neighbors)
                self._remove_wall(current, chosen)
                chosen.visited = True
                stack.append(chosen)
            else:
                stack.pop()

        return Maze(
            width=self.width,
            height=self.height,
            cells=self.cells,
            start=Position(0, 0),
            end=Position(self.width - 1, self.height - 1),
            collectibles=self._place_collectibles(),
        )

    def _initialize_cells(self) -> None:
        self.cells = [
            [Cell(x, y) for x in range(self.width)]
            for y in range(self.height)
        ]

    def _get_cell(self, x: int, y: int) -> Optional[Cell]:
        if not (0 <= x < self.width and 0 <= y < self.height):
            return None
        return self.cells[y][x]

    def _unvisited_neighbors(self, cell: Cell) -> list[Cell]:
        candidates = [
            self._get_cell(cell.x, cell.y - 1),  # top
            self._get_cell(cell.x + 1, cell.y),  # right
            self._get_cell(cell.x, cell.y + 1),  # bottom
            self._get_cell(cell.x - 1, cell.y),  # left
        ]
        return [n for n in candidates if n is not None and not n.visited]

    @staticmethod
    def _remove_wall(current: Cell, neighbor: Cell) -> None:
        dx = neighbor.x - current.x
        dy = neighbor.y - current.y
        if dx == 1:
            side = "right"
        elif dx == -1:
            side = "left"
        elif dy == 1:
            side = "bottom"
        else:
            side = "top"
        current.walls[side] = False
        neighbor.walls[OPPOSITE_WALL[side]] = False

    def _collectible_count(self) -> int:
        return min(len(self.messages), int(self.width * self.height * COLLECTIBLE_DENSITY))

    def _place_collectibles(self) -> list[Collectible]:
        used = {(0, 0), (self.width - 1, self.height - 1)}
        collectibles = []

        for index in range(self._collectible_count()):
            while True:
                x = self.rng.randrange(self.width)
                y = self.rng.randrange(self.height)
                if (x, y) not in used:
                    break
            used.add((x, y))
            collectibles.append(Collectible(x=x, y=y, message=self.messages[index]))

        return collectibles


def generate_maze(
    width: int,
    height: int,
    rng: Optional[random.Random] = None,
) -> Maze:
    """Generate a maze of the given size."""
    return MazeGenerator(width, height, rng=rng).generate()
