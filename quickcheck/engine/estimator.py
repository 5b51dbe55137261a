# engine/estimator.py

from typing import Any, Optional

from ..config.schema import EstimatorConfig
from ..core.data_structures import DEFAULT_PARAMS, FitResult, ParameterVector
from ..core.evaluation import aic as _aic, bic as _bic, mean_choice_probability
from ..core.fitting import initial_guess, refine
from ..core.likelihood import neg_log_lik
from ..data.session import parse_session


def _default_result(reason: str, n_trials: int = 0, **info) -> FitResult:
    return FitResult(
        params=DEFAULT_PARAMS,
        n_trials=n_trials,
        used_default=True,
        reason=reason,
        info=info,
    )


def _fit(session: Any, cfg: EstimatorConfig) -> FitResult:
    data = parse_session(session)
    n = len(data)

    # Only fit sessions with enough informative trials and both actions taken
    if n < cfg.min_trials:
        return _default_result("insufficient_trials", n)
    actions = {d.action for d in data}
    if not {0, 1} <= actions:
        return _default_result("no_action_variation", n)

    init = initial_guess(data, cfg.grid)
    fit = refine(data, init, cfg.polish)
    if not fit.is_finite():
        raise ValueError(f"Non-finite parameter estimate: {fit}")
    fit = fit.clamped()

    nll = neg_log_lik(data, fit)
    if cfg.verbose:
        print(f"[QuickCheck] Fitted {n} trials: NLL = {nll:.2f} "
              f"(grid start NLL = {neg_log_lik(data, init):.2f})")

    return FitResult(
        params=fit,
        nll=nll,
        aic=_aic(nll),
        bic=_bic(nll, n),
        n_trials=n,
        info={
            "init": init.model_dump(by_alias=True),
            "mean_choice_prob": mean_choice_probability(nll, n),
            "method": cfg.polish.method,
        },
    )


def fit_session(session: Any, config: Optional[EstimatorConfig] = None) -> FitResult:
    """
    Fit the RL model to one finished session.

    Never raises: sessions with too little data get the default parameters,
    and any failure during fitting is reported and mapped to the default.
    """
    cfg = config or EstimatorConfig()
    try:
        return _fit(session, cfg)
    except Exception as e:
        print(f"[⚠️ QuickCheck] Error fitting session: {e}")
        return _default_result("error", error=str(e))


def estimate(session: Any, config: Optional[EstimatorConfig] = None) -> ParameterVector:
    return fit_session(session, config).params
