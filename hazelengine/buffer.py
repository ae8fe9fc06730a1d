"""Vertex attribute types and the layouts built from them."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field, replace
from enum import Enum


class ShaderDataType(Enum):
    """Data types a vertex attribute can have."""

    NONE = 0
    FLOAT = 1
    FLOAT2 = 2
    FLOAT3 = 3
    FLOAT4 = 4
    MAT3 = 5
    MAT4 = 6
    INT = 7
    INT2 = 8
    INT3 = 9
    INT4 = 10
    BOOL = 11

    @property
    def size(self) -> int:
        """Size of one value of this type in bytes."""
        try:
            return _SIZES[self]
        except KeyError:
            raise ValueError(f"Unknown ShaderDataType: {self.name}") from None

    @property
    def component_count(self) -> int:
        """Number of components; matrices count their column vectors."""
        try:
            return _COMPONENTS[self]
        except KeyError:
            raise ValueError(f"Unknown ShaderDataType: {self.name}") from None


_SIZES = {
    ShaderDataType.FLOAT: 4,
    ShaderDataType.FLOAT2: 4 * 2,
    ShaderDataType.FLOAT3: 4 * 3,
    ShaderDataType.FLOAT4: 4 * 4,
    ShaderDataType.MAT3: 4 * 3 * 3,
    ShaderDataType.MAT4: 4 * 4 * 4,
    ShaderDataType.INT: 4,
    ShaderDataType.INT2: 4 * 2,
    ShaderDataType.INT3: 4 * 3,
    ShaderDataType.INT4: 4 * 4,
    ShaderDataType.BOOL: 1,
}

_COMPONENTS = {
    ShaderDataType.FLOAT: 1,
    ShaderDataType.FLOAT2: 2,
    ShaderDataType.FLOAT3: 3,
    ShaderDataType.FLOAT4: 4,
    ShaderDataType.MAT3: 3,
    ShaderDataType.MAT4: 4,
    ShaderDataType.INT: 1,
    ShaderDataType.INT2: 2,
    ShaderDataType.INT3: 3,
    ShaderDataType.INT4: 4,
    ShaderDataType.BOOL: 1,
}


def shader_data_type_size(data_type: ShaderDataType) -> int:
    """Size in bytes of a shader data type."""
    return ShaderDataType(data_type).size


@dataclass(frozen=True)
class BufferElement:
    """One named attribute inside a vertex layout."""

    type: ShaderDataType
    name: str
    normalized: bool = False
    offset: int = 0
    size: int = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "size", shader_data_type_size(self.type))

    @property
    def component_count(self) -> int:
        return self.type.component_count


class BufferLayout:
    """An ordered list of elements with computed offsets and stride."""

    def __init__(self, elements: Iterable[BufferElement] = ()) -> None:
        self._elements: list[BufferElement] = []
        offset = 0
        for element in elements:
            self._elements.append(replace(element, offset=offset))
            offset += element.size
        self._stride = offset

    @property
    def stride(self) -> int:
        """Total size of one vertex in bytes."""
        return self._stride

    @property
    def elements(self) -> tuple[BufferElement, ...]:
        return tuple(self._elements)

    def __iter__(self) -> Iterator[BufferElement]:
        return iter(self._elements)

    def __len__(self) -> int:
        return len(self._elements)

    def __repr__(self) -> str:
        return f"BufferLayout({self._elements!r})"