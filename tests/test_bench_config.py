from __future__ import annotations

import json
from pathlib import Path

import pytest

from lib.bench_config import BenchConfig, WorkloadConfig, load_bench_config, parse_args
from lib.config_base import nested_from_dotted, parse_override


def test_from_toml_file(tmp_path: Path) -> None:
    path = tmp_path / "bench.toml"
    path.write_text(
        "seed = 3\nnum_ops = 50\n\n[workload]\nkey_space = 16\npriority_dtype = \"int32\"\n"
    )
    cfg = BenchConfig.from_file(path)
    assert cfg.seed == 3
    assert cfg.num_ops == 50
    assert cfg.workload.key_space == 16
    assert cfg.workload.priority_dtype == "int32"
    assert cfg.heap.initial_capacity == 8


def test_from_json_file(tmp_path: Path) -> None:
    path = tmp_path / "bench.json"
    path.write_text(json.dumps({"heap": {"initial_capacity": 2}}))
    assert BenchConfig.from_file(path).heap.initial_capacity == 2


def test_file_errors(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        BenchConfig.from_file(tmp_path / "missing.toml")
    bad = tmp_path / "bench.yaml"
    bad.write_text("seed: 1\n")
    with pytest.raises(ValueError):
        BenchConfig.from_file(bad)
    not_mapping = tmp_path / "list.json"
    not_mapping.write_text("[1, 2]")
    with pytest.raises(ValueError):
        BenchConfig.from_file(not_mapping)


def test_unknown_and_invalid_fields_rejected() -> None:
    with pytest.raises(ValueError, match="Unknown config field"):
        BenchConfig.from_dict({"nope": 1})
    with pytest.raises(ValueError, match="Unknown config field"):
        BenchConfig.from_dict({"workload": {"nope": 1}})
    with pytest.raises(ValueError):
        BenchConfig.from_dict({"workload": {"priority_dtype": "float16"}})
    with pytest.raises(ValueError):
        BenchConfig.from_dict({"heap": {"initial_capacity": 0}})
    with pytest.raises(ValueError):
        BenchConfig.from_dict(
            {
                "workload": {
                    "insert_weight": 0,
                    "alter_weight": 0,
                    "delete_max_weight": 0,
                    "remove_by_key_weight": 0,
                    "get_weight": 0,
                }
            }
        )


def test_flat_updates() -> None:
    cfg = BenchConfig().with_flat_updates({"num_ops": 10, "workload.key_space": 8})
    assert cfg.num_ops == 10
    assert cfg.workload.key_space == 8
    with pytest.raises(ValueError):
        BenchConfig().with_flat_updates({"workload.missing": 1})
    with pytest.raises(ValueError):
        BenchConfig().with_flat_updates({"workload": 1})


def test_parse_override_values() -> None:
    assert parse_override("num_ops=5") == ("num_ops", 5)
    assert parse_override("logging.show_progress=false") == ("logging.show_progress", False)
    assert parse_override("output.run_id=abc") == ("output.run_id", "abc")
    assert parse_override("x=(1, 2)") == ("x", (1, 2))
    with pytest.raises(ValueError):
        parse_override("num_ops")


def test_nested_from_dotted_rejects_empty_parts() -> None:
    assert nested_from_dotted({"a.b": 1, "a.c": 2}) == {"a": {"b": 1, "c": 2}}
    with pytest.raises(ValueError):
        nested_from_dotted({"a..b": 1})


def test_load_bench_config_from_cli(tmp_path: Path) -> None:
    path = tmp_path / "bench.toml"
    path.write_text("num_ops = 100\n")
    args = parse_args(["--config", str(path), "--set", "workload.key_space=32"])
    cfg = load_bench_config(args)
    assert cfg.num_ops == 100
    assert cfg.workload.key_space == 32
    assert not args.print_config


def test_integer_range_without_integers_rejected() -> None:
    with pytest.raises(ValueError, match="widen the range"):
        BenchConfig().with_flat_updates(
            {
                "workload.priority_dtype": "int64",
                "workload.priority_low": 0.2,
                "workload.priority_high": 0.8,
            }
        )


def test_integer_range_outside_dtype_rejected() -> None:
    with pytest.raises(ValueError, match="does not fit int32"):
        BenchConfig().with_flat_updates(
            {"workload.priority_dtype": "int32", "workload.priority_high": 3e9}
        )
    cfg = BenchConfig().with_flat_updates(
        {"workload.priority_dtype": "int64", "workload.priority_high": 3e9}
    )
    assert cfg.workload.priority_bounds() == (0, 2_999_999_999)


def test_fractional_integer_bounds_round_inward() -> None:
    cfg = BenchConfig().with_flat_updates(
        {
            "workload.priority_dtype": "int32",
            "workload.priority_low": -1.5,
            "workload.priority_high": 2.5,
        }
    )
    assert cfg.workload.priority_bounds() == (-1, 2)


def test_float32_bounds_stay_inside_half_open_range() -> None:
    cfg = BenchConfig().with_flat_updates(
        {
            "workload.priority_dtype": "float32",
            "workload.priority_low": 999_999.9,
            "workload.priority_high": 1_000_000.0,
        }
    )
    lo, hi = cfg.workload.priority_bounds()
    assert lo == hi == 999_999.9375


def test_sections_validated_once(monkeypatch) -> None:
    calls: list[str] = []
    original = WorkloadConfig.validate

    def counting_validate(self: WorkloadConfig) -> None:
        calls.append("workload")
        original(self)

    monkeypatch.setattr(WorkloadConfig, "validate", counting_validate)
    BenchConfig.from_dict({"workload": {"key_space": 16}})
    assert calls == ["workload"]
