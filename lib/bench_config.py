from __future__ import annotations

import argparse
import math
from dataclasses import dataclass, field

import numpy as np

from lib.config_base import ConfigBase, parse_override

PRIORITY_DTYPES = ("int32", "int64", "float32", "float64")


@dataclass
class HeapConfig(ConfigBase):
    initial_capacity: int = 8

    def validate(self) -> None:
        if self.initial_capacity < 1:
            raise ValueError(f"heap.initial_capacity must be >= 1, got {self.initial_capacity}")


@dataclass
class WorkloadConfig(ConfigBase):
    # Relative operation frequencies
    insert_weight: float = 4.0
    alter_weight: float = 3.0
    delete_max_weight: float = 1.0
    remove_by_key_weight: float = 1.0
    get_weight: float = 1.0
    # Identifiers are drawn from range(key_space)
    key_space: int = 4096
    priority_dtype: str = "float64"
    priority_low: float = 0.0
    priority_high: float = 1_000_000.0

    def weights(self) -> dict[str, float]:
        return {
            "insert": self.insert_weight,
            "alter": self.alter_weight,
            "delete_max": self.delete_max_weight,
            "remove_by_key": self.remove_by_key_weight,
            "get": self.get_weight,
        }

    def validate(self) -> None:
        weights = self.weights()
        negative = [name for name, w in weights.items() if w < 0]
        if negative:
            raise ValueError(f"Operation weights must be non-negative: {', '.join(negative)}")
        if sum(weights.values()) <= 0:
            raise ValueError("At least one operation weight must be positive.")
        if self.key_space < 1:
            raise ValueError(f"workload.key_space must be >= 1, got {self.key_space}")
        if self.priority_dtype not in PRIORITY_DTYPES:
            raise ValueError(
                f"Unsupported priority_dtype `{self.priority_dtype}`. Choices: {list(PRIORITY_DTYPES)}"
            )
        if not self.priority_low < self.priority_high:
            raise ValueError("workload.priority_low must be below workload.priority_high")
        self.priority_bounds()

    def priority_bounds(self) -> tuple[int | float, int | float]:
        """Inclusive (lo, hi) of `priority_dtype` values inside [priority_low, priority_high)."""
        dtype = np.dtype(self.priority_dtype)
        low, high = self.priority_low, self.priority_high
        if np.issubdtype(dtype, np.integer):
            info = np.iinfo(dtype)
            lo, hi = math.ceil(low), math.ceil(high) - 1
            if lo > hi:
                raise ValueError(
                    f"No {dtype} priorities lie in [{low}, {high}); widen the range."
                )
            if lo < info.min or hi > info.max:
                raise ValueError(
                    f"Priority range [{low}, {high}) does not fit {dtype} "
                    f"([{info.min}, {info.max}])"
                )
            return lo, hi
        # Casting can round across either bound; step to the nearest value inside.
        lo_val = dtype.type(low)
        if float(lo_val) < low:
            lo_val = np.nextafter(lo_val, dtype.type(np.inf))
        hi_val = dtype.type(high)
        while float(hi_val) >= high:
            hi_val = np.nextafter(hi_val, dtype.type(-np.inf))
        if not np.isfinite(lo_val) or not np.isfinite(hi_val) or lo_val > hi_val:
            raise ValueError(
                f"No finite {dtype} priorities lie in [{low}, {high}); widen the range."
            )
        return float(lo_val), float(hi_val)


@dataclass
class LoggingConfig(ConfigBase):
    log_interval: int = 10_000
    check_interval: int = 1_000
    show_progress: bool = True

    def validate(self) -> None:
        if self.log_interval < 1 or self.check_interval < 1:
            raise ValueError("logging intervals must be >= 1")


@dataclass
class OutputConfig(ConfigBase):
    out_dir: str = "runs"
    run_name: str = "heap-bench"
    run_id: str | None = None
    save_summary: bool = True


@dataclass
class BenchConfig(ConfigBase):
    seed: int = 42
    num_ops: int = 100_000
    heap: HeapConfig = field(default_factory=HeapConfig)
    workload: WorkloadConfig = field(default_factory=WorkloadConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    output: OutputConfig = field(default_factory=OutputConfig)

    def validate(self) -> None:
        if self.num_ops < 0:
            raise ValueError(f"num_ops must be >= 0, got {self.num_ops}")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Replay a random workload against IndexedMaxHeap.")
    parser.add_argument(
        "--config", type=str, default=None, help="Path to .toml or .json config."
    )
    parser.add_argument(
        "--set",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Override config key(s), e.g. --set num_ops=5000 --set workload.key_space=64",
    )
    parser.add_argument(
        "--print-config", action="store_true", help="Print final config and exit."
    )
    return parser.parse_args(argv)


def load_bench_config(args: argparse.Namespace) -> BenchConfig:
    cfg = BenchConfig.from_file(args.config) if args.config is not None else BenchConfig()
    overrides = dict(parse_override(expr) for expr in args.set)
    if overrides:
        cfg = cfg.with_flat_updates(overrides)
    return cfg
