"""
Central pytest configuration for this project.

Fixtures here build session records shaped like the ones the task screens
produce (bandit, go/no-go) and a simulated bandit session with known
parameters.

Notes
-----
- Install the package in editable mode (`pip install -e .[test]`) so that
  imports resolve the same way locally and in CI.
- Keep this file focused on test setup. Do not add application logic here.
"""

import pytest

from quickcheck import ParameterVector, parse_session
from quickcheck.core.simulate import simulate_bandit_session


@pytest.fixture
def alternating_session():
    """10 bandit trials alternating A (rewarded) and B (unrewarded)."""
    trials = []
    for t in range(10):
        if t % 2 == 0:
            trials.append({"t": t, "choice": "A", "reward": 1})
        else:
            trials.append({"t": t, "choice": "B", "reward": 0})
    return {"task": "bandit", "trials": trials}


@pytest.fixture
def true_params():
    return ParameterVector(alphaPlus=0.3, alphaMinus=0.1, beta=5.0, kappa=0.3)


@pytest.fixture
def simulated_session(true_params):
    return simulate_bandit_session(true_params, n_trials=200, reward_probs=(0.8, 0.2), seed=3)


@pytest.fixture
def simulated_sequence(simulated_session):
    return parse_session(simulated_session)
