"""
Base64 encoding of NumPy arrays for JSON checkpoints.

Checkpoints store parameter values as a single flat float64 vector. The
vector is written as raw little-endian bytes wrapped in base64, together with
enough metadata (dtype string, shape) to rebuild it bit for bit.
"""

from __future__ import annotations

import base64
from typing import Any, Dict

import numpy as np


def bytes_to_b64_str(b: bytes) -> str:
    """
    Encode raw bytes into a base64 ASCII string (JSON-safe).
    """
    return base64.b64encode(b).decode("ascii")


def b64_str_to_bytes(s: str) -> bytes:
    """
    Decode a base64 ASCII string back into raw bytes.
    """
    return base64.b64decode(s.encode("ascii"), validate=True)


def ndarray_to_payload(arr: np.ndarray) -> Dict[str, Any]:
    """
    Serialize a NumPy ndarray into a JSON-safe payload.

    Parameters
    ----------
    arr : np.ndarray
        Array to encode. Converted to little-endian float64 first.

    Returns
    -------
    dict
        {
          "b64": "<base64>",
          "dtype": "<f8",
          "shape": [...],
          "order": "C"
        }
    """
    a = np.ascontiguousarray(arr, dtype="<f8")
    return {
        "b64": bytes_to_b64_str(a.tobytes(order="C")),
        "dtype": a.dtype.str,
        "shape": list(a.shape),
        "order": "C",
    }


def payload_to_ndarray(payload: Dict[str, Any]) -> np.ndarray:
    """
    Deserialize a JSON payload back into a NumPy ndarray.

    Raises
    ------
    ValueError
        If the byte count does not match the declared shape and dtype.

    Notes
    -----
    The buffer view produced by `np.frombuffer` is copied so the returned
    array owns its memory and is writable.
    """
    b = b64_str_to_bytes(str(payload["b64"]))
    dtype = np.dtype(str(payload["dtype"]))
    shape = tuple(int(x) for x in payload["shape"])

    expected = int(np.prod(shape, dtype=np.int64)) * dtype.itemsize
    if len(b) != expected:
        raise ValueError(
            f"Payload holds {len(b)} bytes, expected {expected} for "
            f"shape={shape} dtype={dtype.str}"
        )

    arr = np.frombuffer(b, dtype=dtype).reshape(shape)
    return np.array(arr, dtype=np.float64, copy=True, order="C")
