import itertools
import numpy as np
from typing import Dict, Sequence, Tuple, Optional
from dataclasses import dataclass, replace

from scipy.optimize import minimize

from ..config.schema import PARAM_BOUNDS, PARAM_ORDER, PolishConfig, SearchGridConfig
from .data_structures import ActionRewardPair, ParameterVector
from .likelihood import neg_log_lik

@dataclass
class BoundsBox:
    names: list[str]
    lows: np.ndarray
    highs: np.ndarray

def _build_bounds_box(bounds: Dict[str, Tuple[float, float]], order: Sequence[str]) -> BoundsBox:
    lows, highs = [], []
    for p in order:
        lo, hi = bounds[p]
        lows.append(lo)
        highs.append(hi)
    return BoundsBox(list(order), np.array(lows, float), np.array(highs, float))

BOUNDS_BOX = _build_bounds_box(PARAM_BOUNDS, PARAM_ORDER)

def _objective(sequence: Sequence[ActionRewardPair]):
    def obj(x: np.ndarray) -> float:
        return neg_log_lik(sequence, ParameterVector.from_array(x))
    return obj


# ============================================================
# Coarse grid search
# ============================================================

def initial_guess(
    sequence: Sequence[ActionRewardPair],
    grid: Optional[SearchGridConfig] = None,
) -> ParameterVector:
    """
    Exhaustive search over the parameter grid. Iterates alpha_plus
    outermost and kappa innermost; the first minimum found wins ties.
    """
    grid = grid or SearchGridConfig()
    axes = [getattr(grid, name) for name in PARAM_ORDER]

    best = None
    best_nll = np.inf
    for values in itertools.product(*axes):
        p = ParameterVector(**dict(zip(PARAM_ORDER, values)))
        nll = neg_log_lik(sequence, p)
        if nll < best_nll:
            best_nll = nll
            best = p

    if best is None:
        raise RuntimeError("Grid search produced no finite objective.")
    return best


# ============================================================
# Local pattern search
# ============================================================

@dataclass(frozen=True)
class PatternState:
    point: np.ndarray
    objective: float
    steps: np.ndarray
    iteration: int = 0
    improved: bool = False


def _candidates(state: PatternState, bb: BoundsBox):
    """Each coordinate moved by +/- its step, clipped to its bound."""
    for i in range(len(bb.names)):
        for sign in (1.0, -1.0):
            x = state.point.copy()
            x[i] = np.clip(x[i] + sign * state.steps[i], bb.lows[i], bb.highs[i])
            yield x


def pattern_step(state: PatternState, obj, bb: BoundsBox, cfg: PolishConfig) -> PatternState:
    """
    One sweep. Adopts the best candidate if it beats the current objective
    by more than ``improvement_tol``; otherwise shrinks every step.
    """
    best_x, best_f = None, np.inf
    for x in _candidates(state, bb):
        f = obj(x)
        if f < best_f:
            best_x, best_f = x, f

    if best_x is not None and best_f + cfg.improvement_tol < state.objective:
        return replace(state, point=best_x, objective=best_f,
                       iteration=state.iteration + 1, improved=True)
    return replace(state, steps=state.steps * cfg.shrink_factor,
                   iteration=state.iteration + 1, improved=False)


def is_terminal(state: PatternState, cfg: PolishConfig) -> bool:
    if state.iteration >= cfg.max_iterations:
        return True
    if not cfg.stop_steps:
        return False
    return all(
        state.steps[PARAM_ORDER.index(name)] < threshold
        for name, threshold in cfg.stop_steps.items()
    )


def _refine_pattern(sequence, start: ParameterVector, cfg: PolishConfig) -> PatternState:
    obj = _objective(sequence)
    x0 = np.clip(start.as_array(), BOUNDS_BOX.lows, BOUNDS_BOX.highs)
    state = PatternState(
        point=x0,
        objective=obj(x0),
        steps=np.array([cfg.initial_steps[p] for p in PARAM_ORDER], float),
    )
    while not is_terminal(state, cfg):
        state = pattern_step(state, obj, BOUNDS_BOX, cfg)
    return state


def _refine_lbfgsb(sequence, start: ParameterVector, cfg: PolishConfig) -> np.ndarray:
    obj = _objective(sequence)
    x0 = np.clip(start.as_array(), BOUNDS_BOX.lows, BOUNDS_BOX.highs)
    f0 = obj(x0)
    res = minimize(
        obj,
        x0=x0,
        method="L-BFGS-B",
        bounds=list(zip(BOUNDS_BOX.lows, BOUNDS_BOX.highs)),
        options={"maxiter": max(1, cfg.max_iterations)},
    )
    x = np.clip(np.asarray(res.x, float), BOUNDS_BOX.lows, BOUNDS_BOX.highs)
    # keep the start unless the optimizer actually improved on it
    if np.all(np.isfinite(x)) and obj(x) <= f0:
        return x
    return x0


def refine(
    sequence: Sequence[ActionRewardPair],
    start: ParameterVector,
    config: Optional[PolishConfig] = None,
) -> ParameterVector:
    """
    Local refinement of a grid-search starting point. Never returns a
    point with a higher objective than ``start`` (after clipping to bounds).
    """
    cfg = config or PolishConfig()
    if cfg.method == "L-BFGS-B":
        return ParameterVector.from_array(_refine_lbfgsb(sequence, start, cfg))
    return ParameterVector.from_array(_refine_pattern(sequence, start, cfg).point)
