#!/usr/bin/env python3
"""
Visualize a scalarnet JSON model checkpoint.

This script inspects a JSON checkpoint created by `Model.save_json()` and
prints a human-readable summary of:

- Model format/version
- Module architecture tree
- The flat parameter vector (count, dtype, a few leading values)

It only needs the standard library and NumPy, not scalarnet itself.
"""

from __future__ import annotations

import argparse
import base64
import json
from pathlib import Path
from typing import Any

import numpy as np


# ----------------------------
# Architecture visualization
# ----------------------------
def _print_arch(node: dict[str, Any], indent: int = 0) -> None:
    pad = "  " * indent
    type_name = node.get("type", "<unknown>")
    print(f"{pad}- {type_name}")

    cfg = node.get("config", {})
    if cfg:
        for k, v in cfg.items():
            print(f"{pad}    {k}: {v}")

    children = node.get("children", {})
    for name, child in children.items():
        print(f"{pad}  [{name}]")
        _print_arch(child, indent + 2)


# ----------------------------
# State visualization
# ----------------------------
def _print_state(state: dict[str, Any], *, head: int) -> None:
    raw = base64.b64decode(state.get("b64", ""))
    values = np.frombuffer(raw, dtype=np.dtype(state.get("dtype", "<f8")))

    print("\nParameters:")
    print(f"  shape : {state.get('shape')}")
    print(f"  dtype : {state.get('dtype')}")
    print(f"  order : {state.get('order')}")
    print(f"  bytes : {len(raw)}")
    if head > 0 and values.size:
        shown = ", ".join(f"{v:.6g}" for v in values[:head])
        more = " ..." if values.size > head else ""
        print(f"  first : [{shown}{more}]")
        print(f"  range : [{values.min():.6g}, {values.max():.6g}]")


# ----------------------------
# Main
# ----------------------------
def main() -> None:
    parser = argparse.ArgumentParser(
        description="Visualize a scalarnet JSON model checkpoint."
    )
    parser.add_argument(
        "path",
        type=Path,
        help="Path to JSON checkpoint file",
    )
    parser.add_argument(
        "--head",
        type=int,
        default=8,
        help="Number of leading parameter values to display (0 = hide)",
    )

    args = parser.parse_args()
    path: Path = args.path

    payload = json.loads(path.read_text(encoding="utf-8"))

    print("=" * 80)
    print("scalarnet JSON Checkpoint")
    print("=" * 80)

    print(f"File   : {path}")
    print(f"Format : {payload.get('format')}")

    print("\nArchitecture:")
    _print_arch(payload["arch"], indent=0)

    _print_state(payload["state"], head=args.head)

    print("\nDone.")


if __name__ == "__main__":
    main()
