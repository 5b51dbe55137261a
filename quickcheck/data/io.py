import pandas as pd
from typing import List, Optional
import json
import os


def _resolve_path(path):
    # If path is relative, make it relative to project root
    if not os.path.isabs(path) and not os.path.exists(path):
        project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", ".."))
        path = os.path.join(project_root, path)
    if not os.path.exists(path):
        raise FileNotFoundError(f"No such data file: {path}")
    return path


def load_trials(path, columns: Optional[List[str]] = None, id_col: str = "session"):
    """
    Load a long-format trial table (one row per trial) from CSV.

    Args:
        path: CSV file; relative paths are tried against the project root
            when they do not exist from the working directory.
        columns: optional subset of trial fields to keep. The id column is
            always kept when present.
        id_col: session identifier column.
    Returns:
        pd.DataFrame
    """
    path = _resolve_path(path)
    if not str(path).lower().endswith(".csv"):
        raise ValueError(f"Unsupported trial table format: {path}")

    df = pd.read_csv(path)

    if columns is not None:
        missing = [c for c in columns if c not in df.columns]
        if missing:
            raise ValueError(f"Missing columns in data: {missing}")
        keep = ([id_col] if id_col in df.columns and id_col not in columns else []) + list(columns)
        df = df[keep]
    return df


def load_session(path) -> dict:
    """Load one session record saved as a JSON object."""
    path = _resolve_path(path)
    with open(path, "r") as f:
        session = json.load(f)
    if not isinstance(session, dict):
        raise ValueError(f"Expected a JSON object for a session, got {type(session).__name__}")
    return session
