# examples/bandit_demo.py

import os

from quickcheck import ParameterVector, estimate, load_config, neg_log_lik, parse_session
from quickcheck.core.simulate import simulate_bandit_session


# -------------------------------------------------------------------------
# Configuration
# -------------------------------------------------------------------------
CONFIG_PATH = os.path.join(os.path.dirname(__file__), "quickcheck.yaml")

TRUE_PARAMS = ParameterVector(alphaPlus=0.35, alphaMinus=0.1, beta=5.0, kappa=0.4)


# -------------------------------------------------------------------------
# Main entrypoint
# -------------------------------------------------------------------------
def main():
    cfg = load_config(CONFIG_PATH)

    # --- Simulate a finished bandit session ---
    session = simulate_bandit_session(TRUE_PARAMS, n_trials=200, reward_probs=(0.75, 0.25), seed=1)
    data = parse_session(session)
    print(f"[QuickCheck] Simulated {len(data)} trials, total reward {session['totalReward']}")

    # --- Fit ---
    fit = estimate(session, cfg)

    print("\n[🏁 QuickCheck] Fit complete.")
    for name, value in fit.model_dump(by_alias=True).items():
        true_value = TRUE_PARAMS.model_dump(by_alias=True)[name]
        print(f"  {name:<11} fit = {value:6.3f}   true = {true_value:6.3f}")
    print(f"NLL at fit:  {neg_log_lik(data, fit):.2f}")
    print(f"NLL at true: {neg_log_lik(data, TRUE_PARAMS):.2f}")


# -------------------------------------------------------------------------
# Entrypoint
# -------------------------------------------------------------------------
if __name__ == "__main__":
    main()
