"""
scripts/bench_xor_training_steps.py

Step-level microbenchmark for XOR training with scalarnet.

What this measures (per training iteration)
------------------------------------------
- forward:     preds = [model(x) for x in X]
- loss:        mse(preds, Y)
- backward:    loss.backward()
- step:        opt.step()
- zero_grad:   opt.zero_grad()

Timing policy
-------------
- Uses warmup iterations (not recorded).
- Then repeats iterations and records per-step durations.

Every scalar is a graph node, so the numbers mostly reflect Python dispatch
and graph traversal; widening the hidden layer shows how cost grows with the
node count.

Usage
-----
python scripts/bench_xor_training_steps.py
python scripts/bench_xor_training_steps.py --hidden 16 --optimizer sgd --lr 0.5
python scripts/bench_xor_training_steps.py --warmup 20 --repeats 200
"""

from __future__ import annotations

import argparse
import logging
import os
import statistics
import sys
import time
from dataclasses import dataclass, field
from typing import Dict, List

import numpy as np

# -------------------------
# Make repo_root/src importable
# -------------------------
THIS_DIR = os.path.dirname(os.path.abspath(__file__))
ROOT_DIR = os.path.abspath(os.path.join(THIS_DIR, ".."))
SRC_DIR = os.path.join(ROOT_DIR, "src")
if SRC_DIR not in sys.path:
    sys.path.insert(0, SRC_DIR)

from scalarnet import SGD, Adam, Linear, Sequential, Sigmoid, Tanh, mse

X = [[0.0, 0.0], [0.0, 1.0], [1.0, 0.0], [1.0, 1.0]]
Y = [0.0, 1.0, 1.0, 0.0]

STEPS = ("forward", "loss", "backward", "step", "zero_grad")


@dataclass
class StepTimes:
    samples: Dict[str, List[float]] = field(
        default_factory=lambda: {k: [] for k in STEPS}
    )

    def add(self, name: str, seconds: float) -> None:
        self.samples[name].append(seconds)

    def report(self) -> None:
        print(f"{'step':<10} {'mean ms':>10} {'median ms':>10} {'stdev ms':>10}")
        total = 0.0
        for name in STEPS:
            xs = self.samples[name]
            mean = statistics.fmean(xs) * 1e3
            med = statistics.median(xs) * 1e3
            sd = statistics.stdev(xs) * 1e3 if len(xs) > 1 else 0.0
            total += mean
            print(f"{name:<10} {mean:>10.3f} {med:>10.3f} {sd:>10.3f}")
        print(f"{'total':<10} {total:>10.3f}")


def build(hidden: int, optimizer: str, lr: float):
    model = Sequential(Linear(2, hidden), Tanh(), Linear(hidden, 1), Sigmoid())
    if optimizer == "sgd":
        opt = SGD(model.parameters(), lr=lr)
    else:
        opt = Adam(model.parameters(), lr=lr)
    return model, opt


def iteration(model, opt, times: StepTimes | None) -> float:
    t0 = time.perf_counter()
    preds = [model(x)[0] for x in X]
    t1 = time.perf_counter()
    loss = mse(preds, Y)
    t2 = time.perf_counter()
    loss.backward()
    t3 = time.perf_counter()
    opt.step()
    t4 = time.perf_counter()
    opt.zero_grad()
    t5 = time.perf_counter()

    if times is not None:
        for name, a, b in zip(STEPS, (t0, t1, t2, t3, t4), (t1, t2, t3, t4, t5)):
            times.add(name, b - a)
    return loss.value


def main() -> None:
    parser = argparse.ArgumentParser(description="XOR training step benchmark.")
    parser.add_argument("--hidden", type=int, default=4)
    parser.add_argument("--optimizer", choices=("adam", "sgd"), default="adam")
    parser.add_argument("--lr", type=float, default=0.1)
    parser.add_argument("--warmup", type=int, default=10)
    parser.add_argument("--repeats", type=int, default=100)
    parser.add_argument("--seed", type=int, default=0)
    parser.add_argument("--verbose", action="store_true", help="Enable debug logs")
    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG)

    np.random.seed(args.seed)
    model, opt = build(args.hidden, args.optimizer, args.lr)
    print(f"params={model.num_parameters()} hidden={args.hidden} opt={args.optimizer}")

    for _ in range(args.warmup):
        iteration(model, opt, None)

    times = StepTimes()
    loss = float("nan")
    for _ in range(args.repeats):
        loss = iteration(model, opt, times)

    times.report()
    print(f"final loss={loss:.6f}")
    print("predictions:", [round(model.predict(x)[0].value, 4) for x in X])


if __name__ == "__main__":
    main()
