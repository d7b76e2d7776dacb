"""Flat-storage 2-D and 3-D arrays addressed by (i, j) and (i, j, k)."""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any


class _FlatArray:
    __hash__ = None  # type: ignore[assignment]

    def __init__(self, shape: tuple[int, ...], fill: Any) -> None:
        if any(extent < 0 for extent in shape):
            raise ValueError("array extents must be non-negative")
        self._shape = shape
        size = 1
        for extent in shape:
            size *= extent
        self._data = [fill] * size

    def _offset(self, index) -> int:
        if isinstance(index, tuple):
            if len(index) != len(self._shape):
                raise IndexError(
                    f"expected {len(self._shape)} indices, got {len(index)}"
                )
            offset = 0
            stride = 1
            for coord, extent in zip(index, self._shape):
                if not 0 <= coord < extent:
                    raise IndexError(f"index {index} out of range {self._shape}")
                offset += coord * stride
                stride *= extent
            return offset
        return index

    def __getitem__(self, index):
        return self._data[self._offset(index)]

    def __setitem__(self, index, value) -> None:
        self._data[self._offset(index)] = value

    def __len__(self) -> int:
        return len(self._data)

    def __iter__(self) -> Iterator[Any]:
        return iter(self._data)

    def __eq__(self, other) -> bool:
        if not isinstance(other, _FlatArray):
            return NotImplemented
        return self._shape == other._shape and self._data == other._data

    def __repr__(self) -> str:
        dims = "x".join(str(extent) for extent in self._shape)
        return f"{type(self).__name__}({dims})"


class Array2(_FlatArray):
    """A width-by-height grid stored row by row.

    ``a[i, j]`` addresses column ``i`` of row ``j``; ``a[n]`` addresses the
    flat storage directly.
    """

    def __init__(self, width: int, height: int, fill: Any = 0) -> None:
        super().__init__((width, height), fill)

    @property
    def width(self) -> int:
        return self._shape[0]

    @property
    def height(self) -> int:
        return self._shape[1]

    def __getitem__(self, index):
        return super().__getitem__(index)

    def __setitem__(self, index, value) -> None:
        super().__setitem__(index, value)


class Array3(_FlatArray):
    """A width-by-height-by-depth volume stored slice by slice.

    ``a[i, j, k]`` addresses column ``i`` of row ``j`` of slice ``k``;
    ``a[n]`` addresses the flat storage directly.
    """

    def __init__(self, width: int, height: int, depth: int, fill: Any = 0) -> None:
        super().__init__((width, height, depth), fill)

    @property
    def width(self) -> int:
        return self._shape[0]

    @property
    def height(self) -> int:
        return self._shape[1]

    @property
    def depth(self) -> int:
        return self._shape[2]

    def __getitem__(self, index):
        return super().__getitem__(index)

    def __setitem__(self, index, value) -> None:
        super().__setitem__(index, value)