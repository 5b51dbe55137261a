from pydantic import BaseModel, ConfigDict, Field
from typing import Dict, NamedTuple, Optional
import numpy as np

from ..config.schema import PARAM_ORDER, DEFAULT_PARAM_VALUES, clamp_param


class ActionRewardPair(NamedTuple):
    action: int
    reward: int


class ParameterVector(BaseModel):
    """
    One hypothesis about the latent learning process.

    Attributes use snake_case; the camelCase names the task screens use
    (alphaPlus, alphaMinus) are accepted on input and produced by
    ``model_dump(by_alias=True)``.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    alpha_plus: float = Field(alias="alphaPlus")
    alpha_minus: float = Field(alias="alphaMinus")
    beta: float
    kappa: float

    def as_array(self) -> np.ndarray:
        return np.array([getattr(self, p) for p in PARAM_ORDER], float)

    @classmethod
    def from_array(cls, x) -> "ParameterVector":
        return cls(**{name: float(val) for name, val in zip(PARAM_ORDER, x)})

    def clamped(self) -> "ParameterVector":
        return ParameterVector(**{p: clamp_param(p, getattr(self, p)) for p in PARAM_ORDER})

    def is_finite(self) -> bool:
        return bool(np.all(np.isfinite(self.as_array())))


DEFAULT_PARAMS = ParameterVector(**DEFAULT_PARAM_VALUES)


class FitResult(BaseModel):
    params: ParameterVector
    nll: Optional[float] = None
    bic: Optional[float] = None
    aic: Optional[float] = None
    n_trials: int = 0
    used_default: bool = False
    reason: str = "fit"
    info: Dict = Field(default_factory=dict)
