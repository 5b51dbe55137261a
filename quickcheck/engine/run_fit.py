# engine/run_fit.py

import numpy as np
import pandas as pd
from typing import Any, Iterable, Mapping, Optional, Union

from ..config.schema import EstimatorConfig
from ..core.data_structures import FitResult
from .estimator import fit_session


def _result_row(session_id, res: FitResult, id_col: str = "session") -> dict:
    row = {id_col: session_id}
    row.update(res.params.model_dump(by_alias=True))
    row.update({
        "nll": np.nan if res.nll is None else res.nll,
        "aic": np.nan if res.aic is None else res.aic,
        "bic": np.nan if res.bic is None else res.bic,
        "n_trials": res.n_trials,
        "used_default": res.used_default,
        "reason": res.reason,
    })
    return row


def _restore_number(v):
    # mixed text/number CSV columns load as strings: "1" -> 1, "PRESS" stays
    if not isinstance(v, str):
        return v
    x = pd.to_numeric(v, errors="coerce")
    return v if pd.isna(x) else x.item()


def _frame_to_trials(df: pd.DataFrame) -> list:
    df = df.copy()
    for col in df.columns:
        if not pd.api.types.is_numeric_dtype(df[col]):
            df[col] = df[col].map(_restore_number).astype(object)
    # NaN cells mean the field is absent for that trial
    return [
        {k: v for k, v in rec.items() if not (isinstance(v, float) and np.isnan(v))}
        for rec in df.to_dict("records")
    ]


def fit_trials_frame(
    df: pd.DataFrame,
    id_col: str = "session",
    config: Optional[EstimatorConfig] = None,
) -> pd.DataFrame:
    """
    Fit the RL model separately to every session in a long-format trial
    table (one row per trial) and return one row of estimates per session.
    """
    if id_col not in df.columns:
        raise ValueError(f"Missing id column in data: {id_col}")
    cfg = config or EstimatorConfig()

    rows = []
    for sid, group in df.groupby(id_col, sort=False):
        res = fit_session({"trials": _frame_to_trials(group.drop(columns=[id_col]))}, cfg)
        rows.append(_result_row(sid, res, id_col))

    out = pd.DataFrame(rows)
    if cfg.verbose and len(out):
        n_fit = int((~out["used_default"]).sum())
        print(f"[QuickCheck] Fitted {n_fit}/{len(out)} sessions; "
              f"mean BIC = {out['bic'].mean():.2f}")
    return out


def fit_sessions(
    sessions: Union[Mapping[Any, Any], Iterable[Any]],
    config: Optional[EstimatorConfig] = None,
) -> pd.DataFrame:
    """Fit a mapping of id -> session, or a list of sessions (ids are positions)."""
    items = sessions.items() if isinstance(sessions, Mapping) else enumerate(sessions)
    cfg = config or EstimatorConfig()
    return pd.DataFrame([_result_row(sid, fit_session(s, cfg)) for sid, s in items])
