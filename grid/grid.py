"""
grid.py — Grid Container
=========================
Single source of truth for the board.  The interaction controller, the
search algorithms and the replay scheduler all talk to this object.

Responsibilities:
  1. Placement invariants             (one start, one end, walls never on either)
  2. Edit operations                  (toggle_wall, move_start, move_end)
  3. Reset helpers                    (reset = wipe scratch, clear = back to defaults)
  4. Snapshots for search runs        (independent copy, scratch reset)
  5. Display projection               (display / to_ascii)

Design decisions:
  - Cells live in one flat row-major list so a predecessor can be stored
    as a plain int index (no cross-grid object references).
  - `start` / `end` coordinates are fields of the Grid, updated in the
    same call that flips the cell flags, so they can never drift apart.
  - Rejected edits are silent: every mutator returns True when the grid
    changed and False otherwise.
"""

from typing import List, Optional, Iterator, Set, Tuple, Dict, Any

from grid.cell import Cell, Coord


class Grid:
    """
    Attributes:
        rows, cols     : Fixed shape.
        cells          : Flat row-major list of Cells.
        start, end     : Current marker coordinates.
        default_start  : Where `clear()` puts the start marker back.
        default_end    : Where `clear()` puts the end marker back.
    """

    def __init__(self, rows: int, cols: int, start: Tuple[int, int], end: Tuple[int, int]):
        if rows < 1 or cols < 1:
            raise ValueError(f"Grid shape must be positive, got {rows}x{cols}")
        start, end = Coord(*start), Coord(*end)
        for name, c in (("start", start), ("end", end)):
            if not (0 <= c.row < rows and 0 <= c.col < cols):
                raise ValueError(f"{name} {tuple(c)} is outside a {rows}x{cols} grid")
        if start == end:
            raise ValueError("start and end must be different cells")

        self.rows: int           = rows
        self.cols: int           = cols
        self.default_start: Coord = start
        self.default_end: Coord   = end
        self.cells: List[Cell]   = [Cell(r, c) for r in range(rows) for c in range(cols)]
        self.start: Coord        = start
        self.end: Coord          = end
        self._place_markers(start, end)

    @classmethod
    def create(cls, rows: int, cols: int, start: Tuple[int, int], end: Tuple[int, int]) -> "Grid":
        return cls(rows, cols, start, end)

    # ==================================================================
    # LOOKUP
    # ==================================================================
    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols

    def index(self, row: int, col: int) -> int:
        return row * self.cols + col

    def coord_of(self, index: int) -> Coord:
        return Coord(*divmod(index, self.cols))

    def cell(self, row: int, col: int) -> Cell:
        if not self.in_bounds(row, col):
            raise IndexError(f"({row}, {col}) is outside a {self.rows}x{self.cols} grid")
        return self.cells[self.index(row, col)]

    def get_cell(self, row: int, col: int) -> Optional[Cell]:
        """Like cell() but returns None out of bounds."""
        return self.cells[self.index(row, col)] if self.in_bounds(row, col) else None

    @property
    def start_cell(self) -> Cell:
        return self.cell(*self.start)

    @property
    def end_cell(self) -> Cell:
        return self.cell(*self.end)

    def walls(self) -> Set[Coord]:
        return {c.coord for c in self.cells if c.is_wall}

    def iter_rows(self) -> Iterator[List[Cell]]:
        for r in range(self.rows):
            yield self.cells[r * self.cols:(r + 1) * self.cols]

    # ==================================================================
    # EDITS
    # ==================================================================
    def toggle_wall(self, row: int, col: int) -> bool:
        cell = self.get_cell(row, col)
        if cell is None or cell.is_special:
            return False
        cell.is_wall = not cell.is_wall
        return True

    def move_start(self, row: int, col: int) -> bool:
        target = self.get_cell(row, col)
        if target is None or target.is_wall or target.is_end or target.is_start:
            return False
        self.start_cell.is_start = False
        target.is_start = True
        self.start = target.coord
        return True

    def move_end(self, row: int, col: int) -> bool:
        target = self.get_cell(row, col)
        if target is None or target.is_wall or target.is_start or target.is_end:
            return False
        self.end_cell.is_end = False
        target.is_end = True
        self.end = target.coord
        return True

    # ==================================================================
    # RESET HELPERS
    # ==================================================================
    def reset(self) -> None:
        """Wipe search scratch and reveals, keep walls and markers."""
        for c in self.cells:
            c.reset_search_state()

    def clear(self) -> None:
        """Back to the default markers with no walls."""
        for c in self.cells:
            c.is_start = c.is_end = c.is_wall = False
            c.reset_search_state()
        self._place_markers(self.default_start, self.default_end)

    def snapshot(self) -> "Grid":
        """Independent copy with the same layout and fresh search scratch."""
        copy = Grid(self.rows, self.cols, self.default_start, self.default_end)
        for src, dst in zip(self.cells, copy.cells):
            dst.is_start = src.is_start
            dst.is_end   = src.is_end
            dst.is_wall  = src.is_wall
        copy.start, copy.end = self.start, self.end
        return copy

    def _place_markers(self, start: Coord, end: Coord) -> None:
        self.cells[self.index(*start)].is_start = True
        self.cells[self.index(*end)].is_end = True
        self.start, self.end = start, end

    # ==================================================================
    # DISPLAY
    # ==================================================================
    def display(self) -> List[List[Dict[str, Any]]]:
        """Read-only projection for the rendering layer."""
        return [[c.to_dict() for c in row] for row in self.iter_rows()]

    def to_ascii(self) -> str:
        """
        '.' open, '#' wall, 'S' start, 'E' end, '*' path, 'o' visited.
        """
        def glyph(c: Cell) -> str:
            if c.is_start:
                return "S"
            if c.is_end:
                return "E"
            if c.is_wall:
                return "#"
            if c.on_path:
                return "*"
            if c.visited:
                return "o"
            return "."
        return "\n".join("".join(glyph(c) for c in row) for row in self.iter_rows())

    @classmethod
    def from_ascii(cls, text: str) -> "Grid":
        """
        Build a grid from a block of lines using the to_ascii() glyphs
        ('.', '#', 'S', 'E').  Blank lines and surrounding whitespace are
        ignored.  Exactly one 'S' and one 'E' are required.
        """
        lines = [ln.strip() for ln in text.strip().splitlines() if ln.strip()]
        if not lines:
            raise ValueError("Empty grid text")
        width = len(lines[0])
        if any(len(ln) != width for ln in lines):
            raise ValueError("Ragged grid text: every row must be the same width")

        starts = [(r, c) for r, ln in enumerate(lines) for c, ch in enumerate(ln) if ch == "S"]
        ends   = [(r, c) for r, ln in enumerate(lines) for c, ch in enumerate(ln) if ch == "E"]
        if len(starts) != 1 or len(ends) != 1:
            raise ValueError("Grid text needs exactly one 'S' and one 'E'")

        grid = cls(len(lines), width, starts[0], ends[0])
        for r, ln in enumerate(lines):
            for c, ch in enumerate(ln):
                if ch == "#":
                    grid.toggle_wall(r, c)
                elif ch not in ".SE":
                    raise ValueError(f"Unknown glyph {ch!r} at ({r}, {c})")
        return grid

    # ------------------------------------------------------------------
    def __repr__(self) -> str:
        return f"Grid({self.rows}x{self.cols}, start={tuple(self.start)}, end={tuple(self.end)}, walls={len(self.walls())})"
