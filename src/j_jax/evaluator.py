"""Evaluator for resolved J expressions on top of JAX."""

from __future__ import annotations

from typing import Callable, Final

import jax
from jax import lax
import jax.numpy as jnp

from .ast import DyadicVerb, Literal, MonadicVerb, ResolvedNode
from .config import USE_JITTED_KERNELS, EvaluationLimits
from .errors import (
    ArrayTooLarge,
    IndexOutOfRange,
    InvalidArgument,
    InvalidShape,
    RecursionLimitExceeded,
    ShapeMismatch,
)
from .values import DTYPE, INT_MIN, JArray, shape_size
from .verbs import verb_info

_NOT_FOUND: Final[int] = -1


def _add_checked(w: jnp.ndarray, x: jnp.ndarray) -> tuple[jnp.ndarray, jnp.ndarray]:
    out = jnp.add(w, x)
    # Signs of both operands agree but the sum's sign differs.
    overflow = (jnp.bitwise_xor(w, x) >= 0) & (jnp.bitwise_xor(w, out) < 0)
    return out, jnp.any(overflow)


def _sub_checked(w: jnp.ndarray, x: jnp.ndarray) -> tuple[jnp.ndarray, jnp.ndarray]:
    out = jnp.subtract(w, x)
    overflow = (jnp.bitwise_xor(w, x) < 0) & (jnp.bitwise_xor(w, out) < 0)
    return out, jnp.any(overflow)


def _less_than(w: jnp.ndarray, x: jnp.ndarray) -> tuple[jnp.ndarray, jnp.ndarray]:
    return lax.convert_element_type(jnp.less(w, x), DTYPE), jnp.asarray(False)


def _negate_checked(x: jnp.ndarray) -> tuple[jnp.ndarray, jnp.ndarray]:
    return jnp.negative(x), jnp.any(x == INT_MIN)


_BASE_BINARY_OPS: Final[dict[str, Callable[[jnp.ndarray, jnp.ndarray], tuple[jnp.ndarray, jnp.ndarray]]]] = {
    "+": _add_checked,
    "-": _sub_checked,
    "<": _less_than,
}

_BASE_UNARY_OPS: Final[dict[str, Callable[[jnp.ndarray], tuple[jnp.ndarray, jnp.ndarray]]]] = {
    "-": _negate_checked,
}

_JITTED_BINARY_OPS: dict[str, Callable[[jnp.ndarray, jnp.ndarray], tuple[jnp.ndarray, jnp.ndarray]]] = {}
_JITTED_UNARY_OPS: dict[str, Callable[[jnp.ndarray], tuple[jnp.ndarray, jnp.ndarray]]] = {}


def _binary_kernel(op: str) -> Callable[[jnp.ndarray, jnp.ndarray], tuple[jnp.ndarray, jnp.ndarray]]:
    if not USE_JITTED_KERNELS:
        return _BASE_BINARY_OPS[op]
    fn = _JITTED_BINARY_OPS.get(op)
    if fn is None:
        fn = jax.jit(_BASE_BINARY_OPS[op])
        _JITTED_BINARY_OPS[op] = fn
    return fn


def _unary_kernel(op: str) -> Callable[[jnp.ndarray], tuple[jnp.ndarray, jnp.ndarray]]:
    if not USE_JITTED_KERNELS:
        return _BASE_UNARY_OPS[op]
    fn = _JITTED_UNARY_OPS.get(op)
    if fn is None:
        fn = jax.jit(_BASE_UNARY_OPS[op])
        _JITTED_UNARY_OPS[op] = fn
    return fn


def _check_size(size: int, limits: EvaluationLimits) -> None:
    if size > limits.max_elements:
        raise ArrayTooLarge(size, limits.max_elements)


def _as_scalar_array(value: JArray) -> jnp.ndarray:
    return jnp.asarray(value.item(), dtype=DTYPE)


def _elementwise(op: str, left: JArray, right: JArray) -> JArray:
    if left.shape == right.shape:
        w, x = left.as_jax_array(), right.as_jax_array()
    elif left.is_scalar:
        w, x = _as_scalar_array(left), right.as_jax_array()
    elif right.is_scalar:
        w, x = left.as_jax_array(), _as_scalar_array(right)
    else:
        raise ShapeMismatch(f"{op} requires equal shapes or a scalar operand, got {left.shape} and {right.shape}")

    out, overflow = _binary_kernel(op)(w, x)
    if bool(overflow):
        raise InvalidArgument(f"{op} overflows the 32-bit integer range")
    return JArray.from_jax(out)


def _identity(value: JArray, limits: EvaluationLimits) -> JArray:
    return value


def _negate(value: JArray, limits: EvaluationLimits) -> JArray:
    out, overflow = _unary_kernel("-")(value.as_jax_array())
    if bool(overflow):
        raise InvalidArgument("- overflows the 32-bit integer range")
    return JArray.from_jax(out)


def _iota(value: JArray, limits: EvaluationLimits) -> JArray:
    if not value.is_scalar:
        raise InvalidArgument(f"~ requires a single non-negative integer, got shape {value.shape}")
    n = value.item()
    if n < 0:
        raise InvalidArgument(f"~ requires a non-negative argument, got {n}")
    _check_size(n, limits)
    return JArray.from_jax(jnp.arange(n, dtype=DTYPE))


def _tally(value: JArray, limits: EvaluationLimits) -> JArray:
    return JArray.scalar(value.tally)


def _ravel(value: JArray, limits: EvaluationLimits) -> JArray:
    return JArray.from_jax(jnp.ravel(value.as_jax_array()))


def _box(value: JArray, limits: EvaluationLimits) -> JArray:
    # Boxes are not part of the value model; monadic < passes its operand through.
    return value


def _add(left: JArray, right: JArray, limits: EvaluationLimits) -> JArray:
    return _elementwise("+", left, right)


def _subtract(left: JArray, right: JArray, limits: EvaluationLimits) -> JArray:
    return _elementwise("-", left, right)


def _less(left: JArray, right: JArray, limits: EvaluationLimits) -> JArray:
    return _elementwise("<", left, right)


def _as_shape(value: JArray) -> tuple[int, ...]:
    if value.rank > 1:
        raise InvalidShape(f"# left argument must be a scalar or flat shape vector, got rank {value.rank}")
    if any(dim < 0 for dim in value.data):
        raise InvalidShape(f"# shape entries must be non-negative, got {' '.join(map(str, value.data))}")
    return tuple(value.data)


def _reshape(left: JArray, right: JArray, limits: EvaluationLimits) -> JArray:
    shape = _as_shape(left)
    size = shape_size(shape)
    _check_size(size, limits)
    if size == 0:
        return JArray(shape=shape, data=())
    if right.size == 0:
        raise InvalidArgument("# cannot fill a non-empty shape from an empty array")

    source = jnp.ravel(right.as_jax_array())
    cyclic = jnp.arange(size) % right.size
    return JArray.from_jax(jnp.reshape(jnp.take(source, cyclic), shape))


def _from(left: JArray, right: JArray, limits: EvaluationLimits) -> JArray:
    major_shape = right.shape if right.shape else (1,)
    axis_length = major_shape[0]
    for index in left.data:
        if not 0 <= index < axis_length:
            raise IndexOutOfRange(f"{{ index {index} is outside [0, {axis_length})")

    result_shape = (*left.shape, *major_shape[1:])
    _check_size(shape_size(result_shape), limits)
    arr = jnp.reshape(right.as_jax_array(), major_shape)
    indices = jnp.reshape(jnp.asarray(left.data, dtype=DTYPE), left.shape)
    return JArray.from_jax(jnp.take(arr, indices, axis=0))


def _concatenate(left: JArray, right: JArray, limits: EvaluationLimits) -> JArray:
    left_shape = left.shape if left.shape else (1,)
    right_shape = right.shape if right.shape else (1,)
    if len(left_shape) != len(right_shape):
        raise ShapeMismatch(f", requires matching ranks after scalar promotion, got {left.shape} and {right.shape}")
    if left_shape[1:] != right_shape[1:]:
        raise ShapeMismatch(f", requires matching trailing axes, got {left.shape} and {right.shape}")

    _check_size(left.size + right.size, limits)
    left_arr = jnp.reshape(left.as_jax_array(), left_shape)
    right_arr = jnp.reshape(right.as_jax_array(), right_shape)
    return JArray.from_jax(jnp.concatenate((left_arr, right_arr), axis=0))


def _first_occurrence(haystack: jnp.ndarray, queries: jnp.ndarray) -> jnp.ndarray:
    # Stable sort keeps the smallest original index first within each run of equal values.
    positions = jnp.arange(haystack.shape[0], dtype=DTYPE)
    sorted_values, sorted_positions = lax.sort((haystack, positions), num_keys=1, is_stable=True)
    slot = jnp.searchsorted(sorted_values, queries, side="left")
    slot = jnp.minimum(slot, haystack.shape[0] - 1)
    hit = sorted_values[slot] == queries
    return jnp.where(hit, sorted_positions[slot], jnp.asarray(_NOT_FOUND, dtype=DTYPE))


def _find(left: JArray, right: JArray, limits: EvaluationLimits) -> JArray:
    if right.rank > 1:
        raise ShapeMismatch(f"~ requires a scalar or vector right argument, got rank {right.rank}")
    if right.size == 0 or left.size == 0:
        return JArray(shape=left.shape, data=(_NOT_FOUND,) * left.size)

    found = _first_occurrence(jnp.asarray(right.data, dtype=DTYPE), jnp.asarray(left.data, dtype=DTYPE))
    return JArray.from_jax(jnp.reshape(found, left.shape))


_MONADIC: Final[dict[str, Callable[[JArray, EvaluationLimits], JArray]]] = {
    "identity": _identity,
    "negate": _negate,
    "iota": _iota,
    "tally": _tally,
    "ravel": _ravel,
    "box": _box,
}

_DYADIC: Final[dict[str, Callable[[JArray, JArray, EvaluationLimits], JArray]]] = {
    "add": _add,
    "subtract": _subtract,
    "find": _find,
    "reshape": _reshape,
    "from": _from,
    "concatenate": _concatenate,
    "less than": _less,
}


def _eval_node(node: ResolvedNode, limits: EvaluationLimits, depth: int) -> JArray:
    if depth > limits.max_depth:
        raise RecursionLimitExceeded(limits.max_depth)

    if isinstance(node, Literal):
        _check_size(node.value.size, limits)
        return node.value

    if isinstance(node, MonadicVerb):
        operand = _eval_node(node.operand, limits, depth + 1)
        name = verb_info(node.verb).monadic
        if name is None:
            raise TypeError(f"Unresolved monadic use of {node.verb!r}")
        return _MONADIC[name](operand, limits)

    if isinstance(node, DyadicVerb):
        right = _eval_node(node.right, limits, depth + 1)
        left = _eval_node(node.left, limits, depth + 1)
        name = verb_info(node.verb).dyadic
        if name is None:
            raise TypeError(f"Unresolved dyadic use of {node.verb!r}")
        return _DYADIC[name](left, right, limits)

    raise TypeError(f"Unsupported expression node: {type(node)!r}")


def evaluate_node(node: ResolvedNode, *, limits: EvaluationLimits | None = None) -> JArray:
    """Evaluate a resolved tree to a single array value."""
    return _eval_node(node, limits if limits is not None else EvaluationLimits.from_env(), 1)
