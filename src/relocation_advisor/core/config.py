"""Configuration helpers for filesystem layout and scoring defaults."""

from __future__ import annotations

import math
import os
from dataclasses import dataclass
from pathlib import Path

from relocation_advisor.core.errors import ValidationError

IMPORTANCE_MAX = 10
RATING_MAX = 10
COST_TIER_MIN = 1
COST_TIER_MAX = 5


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = float(raw)
    except ValueError as exc:
        raise ValidationError(f"{name} must be a number, got {raw!r}") from exc
    if not math.isfinite(value):
        raise ValidationError(f"{name} must be finite, got {raw!r}")
    return value


DEFAULT_BUDGET_WEIGHT = _env_float("RELOCATION_ADVISOR_BUDGET_WEIGHT", 10.0)
DEFAULT_CLIMATE_WEIGHT = _env_float("RELOCATION_ADVISOR_CLIMATE_WEIGHT", 10.0)
DEFAULT_LGBTQ_WEIGHT = _env_float("RELOCATION_ADVISOR_LGBTQ_WEIGHT", 10.0)
DEFAULT_CLIMATE_MISMATCH_CREDIT = _env_float("RELOCATION_ADVISOR_CLIMATE_MISMATCH_CREDIT", 0.25)


@dataclass(frozen=True)
class PathsConfig:
    root: Path
    reports_dir: Path

    @staticmethod
    def from_root(root: Path) -> "PathsConfig":
        root = root.resolve()
        return PathsConfig(root=root, reports_dir=root / "outputs" / "reports")


def resolve_repo_root() -> Path:
    env_root = Path.cwd()
    for parent in [env_root] + list(env_root.parents):
        if (parent / "pyproject.toml").exists():
            return parent
    return env_root


def load_paths() -> PathsConfig:
    return PathsConfig.from_root(resolve_repo_root())
