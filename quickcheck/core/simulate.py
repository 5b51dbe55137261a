import numpy as np
from typing import Optional, Tuple

from .data_structures import ParameterVector
from .likelihood import choice_probs, td_update
from ..config.schema import clamp_param

ARMS = ("A", "B")


def simulate_bandit_session(
    params: ParameterVector,
    n_trials: int = 200,
    reward_probs: Tuple[float, float] = (0.7, 0.3),
    seed: Optional[int] = None,
) -> dict:
    """
    Run the softmax Q-learning agent on a two-armed Bernoulli bandit.

    Arm A pays out with probability ``reward_probs[0]``, arm B with
    ``reward_probs[1]``. Returns a session record shaped like the ones the
    bandit task produces, so it can be fed straight to ``estimate``.
    """
    p_a, p_b = reward_probs
    if not (0.0 <= p_a <= 1.0 and 0.0 <= p_b <= 1.0):
        raise ValueError(f"Reward probabilities must lie in [0, 1], got {reward_probs}")

    rng = np.random.default_rng(seed)
    beta = clamp_param("beta", params.beta)
    kappa = clamp_param("kappa", params.kappa)

    q = [0.0, 0.0]
    prev_a = None
    trials = []
    total = 0

    for t in range(n_trials):
        _, p1 = choice_probs(q, prev_a, beta, kappa)
        a = int(rng.random() < p1)
        r = int(rng.random() < reward_probs[a])

        trials.append({"t": t, "choice": ARMS[a], "reward": r, "pA": p_a, "pB": p_b})
        total += r

        td_update(q, a, r, params.alpha_plus, params.alpha_minus)
        prev_a = a

    return {
        "task": "bandit",
        "trials": trials,
        "totalReward": total,
        "meta": {"nTrials": n_trials, "pA": p_a, "pB": p_b, "seed": seed},
    }
