"""Runtime value model: the shaped integer array every verb consumes and produces."""

from __future__ import annotations

import math
import numbers
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Final

import jax.numpy as jnp

INT_MIN: Final[int] = -(2**31)
INT_MAX: Final[int] = 2**31 - 1
DTYPE: Final = jnp.int32


def shape_size(shape: tuple[int, ...]) -> int:
    return math.prod(shape)


@dataclass(frozen=True)
class JArray:
    """Immutable integer array; ``shape == ()`` is a scalar holding one element."""

    shape: tuple[int, ...]
    data: tuple[int, ...]

    def __post_init__(self) -> None:
        if any(dim < 0 for dim in self.shape):
            raise ValueError(f"JArray shape {self.shape} has a negative axis")
        if shape_size(self.shape) != len(self.data):
            raise ValueError(
                f"JArray shape {self.shape} requires {shape_size(self.shape)} elements, got {len(self.data)}"
            )
        for item in self.data:
            if not isinstance(item, numbers.Integral) or isinstance(item, bool):
                raise TypeError(f"JArray data must be integers, got {type(item).__name__}")
            if not INT_MIN <= item <= INT_MAX:
                raise ValueError(f"JArray element {item} is outside the 32-bit integer range")

    @classmethod
    def scalar(cls, value: int) -> "JArray":
        return cls(shape=(), data=(int(value),))

    @classmethod
    def vector(cls, items: Iterable[int]) -> "JArray":
        data = tuple(int(x) for x in items)
        return cls(shape=(len(data),), data=data)

    @classmethod
    def from_jax(cls, array) -> "JArray":
        arr = jnp.asarray(array)
        shape = tuple(int(d) for d in arr.shape)
        flat = jnp.ravel(arr).tolist()
        return cls(shape=shape, data=tuple(int(x) for x in flat))

    def as_jax_array(self) -> jnp.ndarray:
        return jnp.asarray(self.data, dtype=DTYPE).reshape(self.shape)

    @property
    def rank(self) -> int:
        return len(self.shape)

    @property
    def size(self) -> int:
        return len(self.data)

    @property
    def tally(self) -> int:
        if not self.shape:
            return 1
        return self.shape[0]

    @property
    def is_scalar(self) -> bool:
        return self.shape in ((), (1,))

    def item(self) -> int:
        if self.size != 1:
            raise ValueError(f"JArray of shape {self.shape} is not a single element")
        return self.data[0]
