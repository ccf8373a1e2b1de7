from __future__ import annotations

import pytest

from cubesolver.config import ENV_MAX_DEPTH, ENV_SCRAMBLE_LENGTH, SolverConfig


def test_defaults_without_environment() -> None:
    config = SolverConfig.from_env({})
    assert config == SolverConfig(max_depth=22, scramble_length=25)


def test_environment_overrides() -> None:
    config = SolverConfig.from_env({ENV_MAX_DEPTH: " 18 ", ENV_SCRAMBLE_LENGTH: "40"})
    assert config.max_depth == 18
    assert config.scramble_length == 40


def test_blank_values_keep_defaults() -> None:
    assert SolverConfig.from_env({ENV_MAX_DEPTH: "  "}).max_depth == 22


def test_non_integer_value_fails() -> None:
    with pytest.raises(ValueError, match="must be an integer"):
        SolverConfig.from_env({ENV_MAX_DEPTH: "deep"})


def test_non_positive_value_fails() -> None:
    with pytest.raises(ValueError, match=">= 1"):
        SolverConfig.from_env({ENV_SCRAMBLE_LENGTH: "0"})


def test_zero_depth_is_allowed() -> None:
    assert SolverConfig.from_env({ENV_MAX_DEPTH: "0"}).max_depth == 0


def test_negative_depth_fails() -> None:
    with pytest.raises(ValueError, match=">= 0"):
        SolverConfig.from_env({ENV_MAX_DEPTH: "-1"})
