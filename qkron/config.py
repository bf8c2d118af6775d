"""Runtime configuration for qkron.

Three settings are exposed, each with an environment override read once at
import time:

- ``QKRON_DTYPE``: complex dtype for new matrices and states
  (``complex128`` by default, ``complex64`` also accepted).
- ``QKRON_NORM_ATOL``: absolute tolerance used by every normalization
  check (default ``1e-9``).
- ``QKRON_DEBUG``: debug mode. When on, the gate engine re-checks
  normalization after every application and raises ``UnnormalizedState``
  as soon as a non-unitary matrix (or accumulated drift) pushes the state
  outside tolerance.

An environment value that cannot be parsed is logged and ignored.

The tolerance actually applied to a vector never drops below the rounding
floor of its dtype (see :func:`tolerance_for`), so a ``complex64`` state is
not rejected over float32 rounding.
"""

from __future__ import annotations

import os
from contextlib import contextmanager
from typing import Iterator, Optional

import torch

from .logging import get_logger

logger = get_logger(__name__)

_DTYPE_ENV_VAR = "QKRON_DTYPE"
_ATOL_ENV_VAR = "QKRON_NORM_ATOL"
_DEBUG_ENV_VAR = "QKRON_DEBUG"

_DTYPES = {
    "complex64": torch.complex64,
    "complex128": torch.complex128,
}
_TRUTHY = ("1", "true", "yes", "on")
_REAL_PARTS = {
    torch.complex64: torch.float32,
    torch.complex128: torch.float64,
}

DEFAULT_DTYPE = torch.complex128
DEFAULT_NORMALIZATION_ATOL = 1e-9

# Rounding slack per amplitude, in units of the real dtype's epsilon.
_EPS_FACTOR = 16


def _parse_dtype(value: str | torch.dtype) -> torch.dtype:
    if isinstance(value, torch.dtype):
        if value not in _DTYPES.values():
            raise ValueError(
                f"dtype must be one of {sorted(_DTYPES)}, got {value}"
            )
        return value
    if not isinstance(value, str):
        raise ValueError(f"dtype must be a torch.dtype or a string, got {value!r}")
    key = value.strip().lower()
    if key.startswith("torch."):
        key = key[len("torch."):]
    if key not in _DTYPES:
        raise ValueError(
            f"Unsupported dtype {value!r}. Supported dtypes: {sorted(_DTYPES)}"
        )
    return _DTYPES[key]


def _parse_atol(value: str | float) -> float:
    atol = float(value)
    if not atol > 0.0:
        raise ValueError(f"normalization tolerance must be > 0, got {atol}")
    return atol


def _from_env(name: str, parse, default):
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return parse(raw)
    except ValueError as exc:
        logger.warning("Ignoring %s=%r: %s", name, raw, exc)
        return default


_default_dtype: torch.dtype = _from_env(_DTYPE_ENV_VAR, _parse_dtype, DEFAULT_DTYPE)
_normalization_atol: float = _from_env(
    _ATOL_ENV_VAR, _parse_atol, DEFAULT_NORMALIZATION_ATOL
)
_debug_enabled: bool = os.getenv(_DEBUG_ENV_VAR, "0").lower() in _TRUTHY


def default_dtype() -> torch.dtype:
    """Return the complex dtype used for new matrices and states."""
    return _default_dtype


def set_default_dtype(dtype: str | torch.dtype) -> None:
    """
    Set the complex dtype used for new matrices and states.

    Parameters
    ----------
    dtype:
        ``torch.complex64``, ``torch.complex128`` or their string names.

    Raises
    ------
    ValueError
        If the dtype is not a supported complex dtype.
    """
    global _default_dtype
    _default_dtype = _parse_dtype(dtype)


def resolve_dtype(dtype: str | torch.dtype | None = None) -> torch.dtype:
    """
    Validate an explicit ``dtype=`` argument.

    ``None`` means :func:`default_dtype`. Anything else must name a
    supported complex dtype; real dtypes raise ``ValueError``.
    """
    if dtype is None:
        return _default_dtype
    return _parse_dtype(dtype)


def normalization_atol() -> float:
    """Return the configured absolute tolerance for ``|sum |a|^2 - 1|``."""
    return _normalization_atol


def set_normalization_atol(atol: float) -> None:
    """Set the absolute tolerance used by normalization checks."""
    global _normalization_atol
    _normalization_atol = _parse_atol(atol)


def tolerance_for(
    dtype: torch.dtype,
    dimension: int,
    atol: Optional[float] = None,
) -> float:
    """
    Effective normalization tolerance for a vector of ``dimension``
    amplitudes stored as ``dtype``.

    This is ``atol`` (default :func:`normalization_atol`) raised to at
    least ``16 * eps * dimension``, where ``eps`` is the machine epsilon of
    the dtype's real part. For ``complex128`` the floor is far below
    ``1e-9`` and changes nothing; for ``complex64`` it is about
    ``2e-6 * dimension``.
    """
    if atol is None:
        atol = _normalization_atol
    real = _REAL_PARTS.get(dtype, dtype)
    floor = _EPS_FACTOR * torch.finfo(real).eps * max(dimension, 1)
    return max(atol, floor)


def is_debug_enabled() -> bool:
    """
    Return whether debug mode is currently enabled.

    Debug mode can be toggled via set_debug_enabled(...), debug_context(...),
    precision(debug=...) or the QKRON_DEBUG environment variable.
    """
    return _debug_enabled


def set_debug_enabled(enabled: bool) -> None:
    """Globally enable or disable debug mode."""
    global _debug_enabled
    _debug_enabled = bool(enabled)


@contextmanager
def precision(
    dtype: str | torch.dtype | None = None,
    atol: float | None = None,
    debug: bool | None = None,
) -> Iterator[None]:
    """
    Temporarily override the dtype, the normalization tolerance and/or
    debug mode. Settings left as ``None`` keep their current value.

    Example
    -------
    >>> with precision(dtype="complex64", atol=1e-5, debug=True):
    ...     state = QuantumState.zero(3)
    """
    global _default_dtype, _normalization_atol, _debug_enabled
    prev = (_default_dtype, _normalization_atol, _debug_enabled)
    try:
        if dtype is not None:
            _default_dtype = _parse_dtype(dtype)
        if atol is not None:
            _normalization_atol = _parse_atol(atol)
        if debug is not None:
            _debug_enabled = bool(debug)
        yield
    finally:
        _default_dtype, _normalization_atol, _debug_enabled = prev


@contextmanager
def debug_context(enabled: bool = True) -> Iterator[None]:
    """
    Context manager to temporarily enable or disable debug mode.

    Example
    -------
    >>> with debug_context(True):
    ...     apply(HADAMARD, state, 0)
    """
    with precision(debug=enabled):
        yield


__all__ = [
    "DEFAULT_DTYPE",
    "DEFAULT_NORMALIZATION_ATOL",
    "default_dtype",
    "set_default_dtype",
    "resolve_dtype",
    "normalization_atol",
    "set_normalization_atol",
    "tolerance_for",
    "is_debug_enabled",
    "set_debug_enabled",
    "precision",
    "debug_context",
]
