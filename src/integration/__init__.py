"""
Configuration and scenario-replay layer for the curve engine
"""

from .curve_config import (
    load_parameters,
    parameters_from_env,
    parameters_from_mapping,
    parameters_to_dict,
)
from .curve_scenario import (
    load_scenario,
    parse_scenario,
    run_scenario,
)

__all__ = [
    "load_parameters",
    "parameters_from_env",
    "parameters_from_mapping",
    "parameters_to_dict",
    "load_scenario",
    "parse_scenario",
    "run_scenario",
]
