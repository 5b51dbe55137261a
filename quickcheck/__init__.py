"""
QuickCheck: reinforcement-learning fits for short cognitive task sessions

This package provides modular tools for:
- Normalizing heterogeneous task session records into (action, reward) sequences
- Scoring sequences under a softmax Q-learning model with asymmetric
  learning rates and choice stickiness
- Estimating the model parameters (grid search + local pattern search)
- Simulating bandit sessions and fitting whole trial tables
"""

__version__ = "0.1.0"

from .config.schema import EstimatorConfig, load_config
from .core.data_structures import DEFAULT_PARAMS, ActionRewardPair, FitResult, ParameterVector
from .core.fitting import initial_guess, refine
from .core.likelihood import neg_log_lik
from .data.session import parse_session
from .engine.estimator import estimate, fit_session

__all__ = [
    "estimate",
    "fit_session",
    "parse_session",
    "neg_log_lik",
    "initial_guess",
    "refine",
    "ParameterVector",
    "ActionRewardPair",
    "FitResult",
    "DEFAULT_PARAMS",
    "EstimatorConfig",
    "load_config",
]
