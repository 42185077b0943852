#!/usr/bin/env python3
"""
Create a small scalarnet model and export it to a JSON checkpoint.

This script is intended to generate a reference JSON file that can be
visualized with `_visualize_model_json.py`, diffed, or used for regression
testing.
"""

import os
import sys

# Ensure repo_root/src is importable when running this file directly:
# repo_root/
#   src/scalarnet/...
#   scripts/_export_sequential_model_json.py
THIS_DIR = os.path.dirname(os.path.abspath(__file__))
ROOT_DIR = os.path.abspath(os.path.join(THIS_DIR, ".."))
SRC_DIR = os.path.join(ROOT_DIR, "src")

if SRC_DIR not in sys.path:
    sys.path.insert(0, SRC_DIR)

from pathlib import Path
import numpy as np

from scalarnet import Linear, Sequential, Tanh, to_values


def main() -> None:
    np.random.seed(0)

    # ----------------------------
    # Build model
    # ----------------------------
    model = Sequential(
        Linear(3, 2, bias=True),
        Tanh(),
    )

    # Deterministic weights (row-major) followed by biases
    W = np.array([[1.0, 2.0, 3.0], [4.0, 5.0, 6.0]])
    b = np.array([0.5, -1.5])
    model[0].load_values(np.concatenate([W.ravel(), b]) * 0.1)

    # ----------------------------
    # Optional: sanity forward pass
    # ----------------------------
    for x in ([1.0, 0.0, -1.0], [2.0, 1.0, 0.5]):
        print(f"Forward {x} -> {to_values(model(x))}")

    print()
    print(model.summary())

    # ----------------------------
    # Save JSON checkpoint
    # ----------------------------
    out_path = Path("sequential_model.json")
    model.save_json(out_path)

    print(f"\nSaved JSON checkpoint to: {out_path.resolve()}")


if __name__ == "__main__":
    main()
