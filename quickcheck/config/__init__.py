from .schema import (
    DEFAULT_PARAM_VALUES,
    PARAM_BOUNDS,
    PARAM_ORDER,
    EstimatorConfig,
    PolishConfig,
    SearchGridConfig,
    load_config,
)
