import math

N_PARAMS = 4

def aic(nll: float, k: int = N_PARAMS) -> float:
    return 2 * k + 2 * nll

def bic(nll: float, n: int, k: int = N_PARAMS) -> float:
    return math.log(n) * k + 2 * nll

def mean_choice_probability(nll: float, n: int) -> float:
    """Geometric mean probability of the observed choices."""
    if n <= 0:
        return float("nan")
    return math.exp(-nll / n)
