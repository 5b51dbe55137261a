"""
Normalization of task session records into (action, reward) sequences.

Sessions come from several task screens (bandit, go/no-go, delay, gating,
effort) and share no schema. A session is any mapping or object with an
optional ``trials`` list; each trial is a mapping or an attribute object.

Resolution rules
----------------
Reward: ``reward`` if it coerces to 0/1, else ``correct`` under the same
rule.

Action, first step that yields a value wins:
  1. ``choice``    'A' -> 0, 'B' -> 1, or raw 0/1
  2. ``resp``      'NONE' -> 0, 'PRESS' -> 1, or raw 0/1
  3. ``probeResp`` any value coercing to 0/1

Trials missing either an action or a reward are dropped.
"""

import math
import numbers
from collections.abc import Mapping
from typing import Any, Callable, List, NamedTuple, Optional, Sequence

from ..core.data_structures import ActionRewardPair

_MISSING = object()


def _field(trial: Any, name: str) -> Any:
    if isinstance(trial, Mapping):
        return trial.get(name, _MISSING)
    return getattr(trial, name, _MISSING)


def _coerce_binary(value: Any) -> Optional[int]:
    """Numeric coercion: 1, 1.0, True and '1' all count as 1."""
    # None and "" stay unresolved: an absent answer is not a 0 response
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, numbers.Real):
        x = float(value)
    elif isinstance(value, str):
        if not value.strip():
            return None
        try:
            x = float(value)
        except ValueError:
            return None
    else:
        return None
    if math.isnan(x):
        return None
    if x == 0.0 or x == 1.0:
        return int(x)
    return None


def _raw_binary(value: Any) -> Optional[int]:
    """Only genuine numbers equal to 0 or 1; no string or bool coercion."""
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        return None
    if value == 0 or value == 1:
        return int(value)
    return None


def _labelled(labels: dict) -> Callable[[Any], Optional[int]]:
    def extract(value):
        if isinstance(value, str):
            return labels.get(value)
        return _raw_binary(value)
    return extract


class ResolutionStep(NamedTuple):
    field: str
    extract: Callable[[Any], Optional[int]]

    def applies(self, trial: Any) -> bool:
        return _field(trial, self.field) is not _MISSING

    def resolve(self, trial: Any) -> Optional[int]:
        return self.extract(_field(trial, self.field))


REWARD_STEPS = (
    ResolutionStep("reward", _coerce_binary),
    ResolutionStep("correct", _coerce_binary),
)

ACTION_STEPS = (
    ResolutionStep("choice", _labelled({"A": 0, "B": 1})),
    ResolutionStep("resp", _labelled({"NONE": 0, "PRESS": 1})),
    ResolutionStep("probeResp", _coerce_binary),
)


def resolve(trial: Any, steps: Sequence[ResolutionStep]) -> Optional[int]:
    """Return the first value produced by ``steps``, or None."""
    for step in steps:
        if not step.applies(trial):
            continue
        value = step.resolve(trial)
        if value is not None:
            return value
    return None


def get_trials(session: Any) -> list:
    if session is None:
        return []
    trials = _field(session, "trials")
    if not isinstance(trials, (list, tuple)):
        return []
    return list(trials)


def parse_session(session: Any) -> List[ActionRewardPair]:
    out: List[ActionRewardPair] = []
    for trial in get_trials(session):
        reward = resolve(trial, REWARD_STEPS)
        action = resolve(trial, ACTION_STEPS)
        if action is not None and reward is not None:
            out.append(ActionRewardPair(action, reward))
    return out
