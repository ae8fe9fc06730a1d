"""Shader programs and a named library of them."""

from __future__ import annotations

import os
from collections.abc import Callable, Sequence
from pathlib import Path
from typing import Any

import numpy as np


class Shader:
    """A named shader program that records the uniform values given to it."""

    def __init__(self, name: str, source: str = "", filepath: str | None = None) -> None:
        self.name = name
        self.source = source
        self.filepath = filepath
        self.uniforms: dict[str, Any] = {}

    @classmethod
    def from_file(cls, filepath: str | os.PathLike[str]) -> "Shader":
        """Read a shader from disk; its name is the file name without extension."""
        path = Path(filepath)
        return cls(path.stem, path.read_text(encoding="utf-8"), str(path))

    def set_int(self, name: str, value: int) -> None:
        self.uniforms[name] = int(value)

    def set_int_array(self, name: str, values: Sequence[int]) -> None:
        self.uniforms[name] = [int(v) for v in values]

    def set_float(self, name: str, value: float) -> None:
        self.uniforms[name] = float(value)

    def _set_vector(self, name: str, value: Sequence[float], length: int) -> None:
        array = np.array(value, dtype=float)
        if array.shape != (length,):
            raise ValueError(f"uniform {name!r} needs {length} components")
        self.uniforms[name] = array

    def set_float2(self, name: str, value: Sequence[float]) -> None:
        self._set_vector(name, value, 2)

    def set_float3(self, name: str, value: Sequence[float]) -> None:
        self._set_vector(name, value, 3)

    def set_float4(self, name: str, value: Sequence[float]) -> None:
        self._set_vector(name, value, 4)

    def set_mat4(self, name: str, value: Any) -> None:
        matrix = np.array(value, dtype=float)
        if matrix.shape != (4, 4):
            raise ValueError(f"uniform {name!r} needs a 4x4 matrix")
        self.uniforms[name] = matrix

    def __repr__(self) -> str:
        return f"Shader({self.name!r})"


class ShaderLibrary:
    """Shaders stored under unique names."""

    def __init__(
        self, factory: Callable[[str], Shader] = Shader.from_file
    ) -> None:
        self._factory = factory
        self._shaders: dict[str, Shader] = {}

    def add(self, shader: Shader, name: str | None = None) -> None:
        """Store a shader under ``name`` or its own name; names must be unique."""
        key = shader.name if name is None else name
        if self.exists(key):
            raise ValueError(f"Shader already exists: {key!r}")
        self._shaders[key] = shader

    def load(self, filepath: str | os.PathLike[str], name: str | None = None) -> Shader:
        """Create a shader from a file and add it."""
        shader = self._factory(os.fspath(filepath))
        self.add(shader, name)
        return shader

    def get(self, name: str) -> Shader:
        try:
            return self._shaders[name]
        except KeyError:
            raise KeyError(f"Shader not found: {name!r}") from None

    def exists(self, name: str) -> bool:
        return name in self._shaders

    def __contains__(self, name: object) -> bool:
        return name in self._shaders

    def __len__(self) -> int:
        return len(self._shaders)