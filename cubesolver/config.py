from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Mapping

ENV_MAX_DEPTH = "CUBESOLVER_MAX_DEPTH"
ENV_SCRAMBLE_LENGTH = "CUBESOLVER_SCRAMBLE_LENGTH"


@dataclass(frozen=True)
class SolverConfig:
    # 0 only accepts cubes that are already solved.
    max_depth: int = 22
    # Moves per random-move scramble; any positive length is acceptable.
    scramble_length: int = 25

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> SolverConfig:
        env = os.environ if environ is None else environ
        config = cls()

        max_depth = _env_int(env, ENV_MAX_DEPTH, minimum=0)
        if max_depth is not None:
            config = replace(config, max_depth=max_depth)

        scramble_length = _env_int(env, ENV_SCRAMBLE_LENGTH, minimum=1)
        if scramble_length is not None:
            config = replace(config, scramble_length=scramble_length)

        return config


def _env_int(env: Mapping[str, str], name: str, minimum: int) -> int | None:
    raw_value = env.get(name, "").strip()
    if not raw_value:
        return None

    try:
        value = int(raw_value)
    except ValueError as exc:
        raise ValueError(f"Environment variable {name} must be an integer") from exc

    if value < minimum:
        raise ValueError(f"Environment variable {name} must be >= {minimum}")

    return value
