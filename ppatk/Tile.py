from typing import Tuple
from ppatk.ColorSet import ColorSet

class Tile:
    def __init__(self, index: int, color_set: ColorSet, column: int, row: int):
        self._index = index
        self._color_set = color_set
        self._column = column
        self._row = row

    # Position in the instance's tile order.  Heuristics visit tiles in this order.
    @property
    def index(self) -> int:
        return self._index

    @property
    def color_set(self) -> ColorSet:
        return self._color_set

    @property
    def column(self) -> int:
        return self._column

    @property
    def row(self) -> int:
        return self._row

    def get_position(self) -> Tuple[int, int]:
        return (self._column, self._row)

    def __repr__(self) -> str:
        return f"Tile({self._index}, {self._color_set.get_colors()}, @{self.get_position()})"
