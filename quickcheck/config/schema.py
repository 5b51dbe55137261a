from pydantic import BaseModel, Field, field_validator, model_validator
from typing import List, Dict, Literal
from types import MappingProxyType
import yaml

# Parameter order used by every optimizer: grid iteration, candidate
# generation and array conversion all follow it.
PARAM_ORDER = ("alpha_plus", "alpha_minus", "beta", "kappa")

PARAM_ALIASES = MappingProxyType({
    "alpha_plus": "alphaPlus",
    "alpha_minus": "alphaMinus",
    "beta": "beta",
    "kappa": "kappa",
})

PARAM_BOUNDS = MappingProxyType({
    "alpha_plus": (0.001, 0.999),
    "alpha_minus": (0.001, 0.999),
    "beta": (0.01, 20.0),
    "kappa": (0.0, 5.0),
})

DEFAULT_PARAM_VALUES = MappingProxyType({
    "alpha_plus": 0.2,
    "alpha_minus": 0.1,
    "beta": 2.0,
    "kappa": 0.1,
})

EPS = 1e-12


def clamp(x: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, x))


def clamp_param(name: str, value: float) -> float:
    lo, hi = PARAM_BOUNDS[name]
    return clamp(value, lo, hi)


class SearchGridConfig(BaseModel):
    alpha_plus: List[float] = [0.05, 0.1, 0.2, 0.4, 0.6]
    alpha_minus: List[float] = [0.05, 0.1, 0.2, 0.4, 0.6]
    beta: List[float] = [0.5, 1.0, 2.0, 4.0, 8.0, 12.0]
    kappa: List[float] = [0.0, 0.1, 0.5, 1.0, 2.0]

    @model_validator(mode="after")
    def _check_within_bounds(self):
        for name in PARAM_ORDER:
            values = getattr(self, name)
            if not values:
                raise ValueError(f"Search grid for {name} is empty.")
            lo, hi = PARAM_BOUNDS[name]
            outside = [v for v in values if not lo <= v <= hi]
            if outside:
                raise ValueError(f"Grid values {outside} for {name} lie outside [{lo}, {hi}].")
        return self

    def n_points(self) -> int:
        n = 1
        for name in PARAM_ORDER:
            n *= len(getattr(self, name))
        return n


class PolishConfig(BaseModel):
    method: Literal["pattern", "L-BFGS-B"] = "pattern"
    max_iterations: int = Field(40, ge=0)
    initial_steps: Dict[str, float] = {
        "alpha_plus": 0.1,
        "alpha_minus": 0.1,
        "beta": 1.0,
        "kappa": 0.5,
    }
    # search stops once every listed step has shrunk below its threshold
    stop_steps: Dict[str, float] = {
        "alpha_plus": 1e-3,
        "beta": 1e-2,
        "kappa": 1e-3,
    }
    shrink_factor: float = Field(0.5, gt=0.0, lt=1.0)
    improvement_tol: float = Field(1e-9, ge=0.0)

    @field_validator("initial_steps")
    @classmethod
    def _check_initial_steps(cls, v):
        missing = [p for p in PARAM_ORDER if p not in v]
        if missing:
            raise ValueError(f"Missing initial steps for: {missing}")
        if any(v[p] <= 0 for p in PARAM_ORDER):
            raise ValueError("Initial steps must be positive.")
        return v

    @field_validator("stop_steps")
    @classmethod
    def _check_stop_steps(cls, v):
        unknown = [p for p in v if p not in PARAM_ORDER]
        if unknown:
            raise ValueError(f"Unknown parameters in stop_steps: {unknown}")
        return v


class EstimatorConfig(BaseModel):
    min_trials: int = Field(10, ge=1)
    grid: SearchGridConfig = Field(default_factory=SearchGridConfig)
    polish: PolishConfig = Field(default_factory=PolishConfig)
    verbose: bool = False


def load_config(path: str) -> EstimatorConfig:
    """Load a YAML estimator config; missing sections keep their defaults."""
    with open(path, "r") as f:
        cfg_dict = yaml.safe_load(f)
    return EstimatorConfig(**(cfg_dict or {}))
