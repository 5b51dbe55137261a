"""
test_simulate_and_metrics.py
----------------------------

Tests for the bandit simulator and fit metrics.

Coverage:
- simulated sessions look like bandit task output and parse fully
- seeding makes simulations reproducible
- AIC / BIC / mean choice probability
"""

import math

import pytest

from quickcheck import ParameterVector, parse_session
from quickcheck.core.evaluation import aic, bic, mean_choice_probability
from quickcheck.core.simulate import simulate_bandit_session


def test_session_shape(simulated_session):
    assert simulated_session["task"] == "bandit"
    trials = simulated_session["trials"]
    assert len(trials) == 200
    assert [tr["t"] for tr in trials] == list(range(200))
    assert {tr["choice"] for tr in trials} <= {"A", "B"}
    assert simulated_session["totalReward"] == sum(tr["reward"] for tr in trials)
    assert all(tr["pA"] == 0.8 and tr["pB"] == 0.2 for tr in trials)


def test_every_simulated_trial_parses(simulated_session):
    seq = parse_session(simulated_session)
    assert len(seq) == 200
    assert {p.action for p in seq} == {0, 1}


def test_seeded_simulation_is_reproducible(true_params):
    a = simulate_bandit_session(true_params, n_trials=50, seed=11)
    b = simulate_bandit_session(true_params, n_trials=50, seed=11)
    assert a == b


def test_deterministic_arms():
    params = ParameterVector(alphaPlus=0.5, alphaMinus=0.5, beta=1.0, kappa=0.0)
    session = simulate_bandit_session(params, n_trials=40, reward_probs=(1.0, 0.0), seed=0)
    for tr in session["trials"]:
        assert tr["reward"] == (1 if tr["choice"] == "A" else 0)


def test_learner_prefers_better_arm():
    params = ParameterVector(alphaPlus=0.4, alphaMinus=0.2, beta=8.0, kappa=0.0)
    session = simulate_bandit_session(params, n_trials=300, reward_probs=(0.9, 0.1), seed=5)
    late = session["trials"][100:]
    assert sum(tr["choice"] == "A" for tr in late) > 0.7 * len(late)


def test_invalid_reward_probs():
    params = ParameterVector(alphaPlus=0.2, alphaMinus=0.1, beta=2.0, kappa=0.1)
    with pytest.raises(ValueError):
        simulate_bandit_session(params, reward_probs=(1.2, 0.3))


def test_information_criteria():
    assert aic(10.0) == pytest.approx(28.0)
    assert aic(10.0, k=2) == pytest.approx(24.0)
    assert bic(10.0, n=100) == pytest.approx(4 * math.log(100) + 20.0)


def test_mean_choice_probability():
    assert mean_choice_probability(100 * math.log(2), 100) == pytest.approx(0.5)
    assert math.isnan(mean_choice_probability(0.0, 0))
