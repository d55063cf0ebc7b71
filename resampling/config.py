"""
Configuration management using pydantic.

Every strategy validates its arguments through one of these models, and a
complete resampling run (strategy + map settings + seed) can be loaded from
YAML. Config files are stored in configs/ directory.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal, Optional, Type, TypeVar, Union

import yaml
from pydantic import BaseModel, Field, ValidationError

from resampling.exceptions import ConfigurationError


# Base path for config files
CONFIGS_DIR = Path(__file__).parent.parent / "configs"

ConfigT = TypeVar("ConfigT", bound=BaseModel)


def load_yaml(path: Path | str) -> dict[str, Any]:
    """Load a YAML file and return as dict."""
    with open(path) as f:
        return yaml.safe_load(f) or {}


def build_config(cls: Type[ConfigT], **kwargs: Any) -> ConfigT:
    """Instantiate a config model, reporting bad values as ConfigurationError.

    Args:
        cls: Config model class.
        **kwargs: Field values.

    Returns:
        Validated config instance.
    """
    try:
        return cls(**kwargs)
    except ValidationError as err:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in e['loc'])}: {e['msg']}" for e in err.errors()
        )
        raise ConfigurationError(f"Invalid {cls.__name__}: {problems}") from err


class BootstrapConfig(BaseModel):
    """Configuration for bootstrap resampling."""

    kind: Literal["bootstrap"] = "bootstrap"
    times: int = Field(default=25, ge=1)
    stratify: Optional[bool] = None  # None: use universe strata if present
    apparent: bool = False  # Append a split with analysis == assessment == all rows


class VFoldConfig(BaseModel):
    """Configuration for (repeated) V-fold cross-validation."""

    kind: Literal["vfold"] = "vfold"
    v: int = Field(default=10, ge=2)
    repeats: int = Field(default=1, ge=1)
    stratify: Optional[bool] = None


class MonteCarloConfig(BaseModel):
    """Configuration for Monte-Carlo cross-validation."""

    kind: Literal["mc"] = "mc"
    prop: float = Field(default=0.75, gt=0.0, lt=1.0)  # Analysis fraction
    times: int = Field(default=25, ge=1)
    stratify: Optional[bool] = None


class RollingOriginConfig(BaseModel):
    """Configuration for rolling-origin (time series) resampling.

    step defaults to assess, so consecutive assessment windows tile the
    series without overlap.
    """

    kind: Literal["rolling_origin"] = "rolling_origin"
    initial: int = Field(ge=1)
    assess: int = Field(ge=1)
    step: Optional[int] = Field(default=None, ge=1)
    cumulative: bool = True

    @property
    def effective_step(self) -> int:
        """Window advance per split."""
        return self.step if self.step is not None else self.assess


class HoldoutConfig(BaseModel):
    """Configuration for a single training/testing split."""

    kind: Literal["holdout"] = "holdout"
    prop: float = Field(default=0.75, gt=0.0, lt=1.0)
    stratify: Optional[bool] = None
    time_ordered: bool = False  # Take the first rows instead of sampling


StrategyConfig = Union[
    BootstrapConfig,
    VFoldConfig,
    MonteCarloConfig,
    RollingOriginConfig,
    HoldoutConfig,
]


class MapConfig(BaseModel):
    """Configuration for applying a function across all splits."""

    n_jobs: int = 1  # -1 uses every CPU
    on_error: Literal["fail_fast", "collect"] = "fail_fast"
    show_progress: bool = False


class LogisticRegressionConfig(BaseModel):
    """Configuration for the logistic regression fitted on each split."""

    C: float = Field(default=1.0, gt=0.0)  # Inverse regularization strength
    class_weight: Optional[Literal["balanced"]] = None
    max_iter: int = Field(default=1000, ge=1)


class ResamplingConfig(BaseModel):
    """Configuration for a complete resampling run."""

    seed: Optional[int] = 42
    strategy: StrategyConfig = Field(
        default_factory=VFoldConfig, discriminator="kind"
    )
    map: MapConfig = Field(default_factory=MapConfig)
    model: LogisticRegressionConfig = Field(default_factory=LogisticRegressionConfig)

    @classmethod
    def from_yaml(cls, path: Path | str | None = None) -> ResamplingConfig:
        """Load config from YAML file.

        Args:
            path: Path to YAML file. If None, uses configs/resampling.yaml.
        """
        if path is None:
            path = CONFIGS_DIR / "resampling.yaml"
        return build_config(cls, **load_yaml(path))
