from typing import List, Sequence

class IndexedColorArray:
    def __init__(self, width: int, height: int, indexed_array: List[int]):
        if len(indexed_array) != width * height:
            raise ValueError(f"A {width}x{height} array needs {width * height} entries, got {len(indexed_array)}.")

        self.width = width
        self.height = height
        self.array = indexed_array

    @classmethod
    def filled(cls, width: int, height: int, value: int) -> 'IndexedColorArray':
        return cls(width, height, [value] * (width * height))

    @classmethod
    def copy_construct_from(cls, rhs: 'IndexedColorArray') -> 'IndexedColorArray':
        return cls(rhs.width, rhs.height, list(rhs.array))

    # Remaps the contents of the array via a lookup table.
    # For example, if our indexed array holds color ids, the
    # remap could be the RGB value for each color id.
    def remap_contents(self, content_remap_list: Sequence[object]):
        for idx in range(len(self.array)):
            content = self.array[idx]
            self.array[idx] = content_remap_list[content]

    def get_value(self, x: int, y: int) -> int:
        idx = (y * self.width) + x
        return self.array[idx]

    def set_value(self, x: int, y: int, value: int):
        idx = (y * self.width) + x
        self.array[idx] = value

    def get_row(self, y: int) -> List[int]:
        start = y * self.width
        return self.array[start:start + self.width]
