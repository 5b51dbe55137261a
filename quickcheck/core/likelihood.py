"""Softmax Q-learning with asymmetric learning rates and choice stickiness.

Model (2 actions: 0/1):
    P(a)  = softmax(beta * Q[a] + kappa * I[a == prev_action])
    Q[a] <- Q[a] + alpha * (r - Q[a]),  alpha = alpha_plus if r >= Q[a] else alpha_minus
"""

import math
from typing import Iterable, List, Optional, Tuple

from ..config.schema import EPS, clamp_param
from .data_structures import ActionRewardPair, ParameterVector


def choice_probs(q: List[float], prev_action: Optional[int], beta: float, kappa: float) -> Tuple[float, float]:
    """Stabilized softmax over the two action preferences."""
    pref0 = beta * q[0] + (kappa if prev_action == 0 else 0.0)
    pref1 = beta * q[1] + (kappa if prev_action == 1 else 0.0)
    m = max(pref0, pref1)
    e0 = math.exp(pref0 - m)
    e1 = math.exp(pref1 - m)
    z = e0 + e1
    return e0 / (z + EPS), e1 / (z + EPS)


def td_update(q: List[float], action: int, reward: float, alpha_plus: float, alpha_minus: float) -> None:
    delta = reward - q[action]
    alpha = clamp_param("alpha_plus", alpha_plus) if delta >= 0 else clamp_param("alpha_minus", alpha_minus)
    q[action] += alpha * delta


def choice_probabilities(sequence: Iterable[ActionRewardPair], params: ParameterVector) -> List[float]:
    """Probability the model assigned to each observed action, trial by trial."""
    q = [0.0, 0.0]
    prev_a = None
    out = []

    for a, r in sequence:
        beta = clamp_param("beta", params.beta)
        kappa = clamp_param("kappa", params.kappa)

        p = choice_probs(q, prev_a, beta, kappa)
        out.append(p[a])

        td_update(q, a, r, params.alpha_plus, params.alpha_minus)
        prev_a = a
    return out


def neg_log_lik(sequence: Iterable[ActionRewardPair], params: ParameterVector) -> float:
    return float(sum(-math.log(p + EPS) for p in choice_probabilities(sequence, params)))
