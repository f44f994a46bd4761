"""
Curve parameter loading (YAML files and environment overrides).

YAML layout (a top-level ``curve:`` mapping is also accepted)::

    buy_slope: 1000000000000000
    investment_ratio: 3000
    distribution_ratio: 5000
    operator: "0x..."

Every loaded value still flows through ``CurveParameters`` validation, so a
bad file fails with the same errors as a bad constructor call.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from ..core.bonding_curve.types import CurveParameters

ENV_VARS: Dict[str, str] = {
    "buy_slope": "CURVE_BUY_SLOPE",
    "investment_ratio": "CURVE_INVESTMENT_RATIO",
    "distribution_ratio": "CURVE_DISTRIBUTION_RATIO",
    "operator": "CURVE_OPERATOR",
}

_INT_FIELDS = ("buy_slope", "investment_ratio", "distribution_ratio")


def _require_int(value: Any, *, name: str) -> int:
    if not isinstance(value, int) or isinstance(value, bool):
        raise ValueError(f"{name} must be an int")
    return int(value)


def _require_str(value: Any, *, name: str, max_len: int = 256) -> str:
    if not isinstance(value, str):
        raise ValueError(f"{name} must be a string")
    if len(value) > max_len:
        raise ValueError(f"{name} too large")
    return value


def _env_int(name: str, default: Optional[int]) -> Optional[int]:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw.strip(), 0)
    except ValueError:
        return default


def _env_str(name: str, default: Optional[str]) -> Optional[str]:
    raw = os.environ.get(name)
    if raw is None:
        return default
    v = raw.strip()
    return v if v else default


def parameters_from_mapping(obj: Mapping[str, Any]) -> CurveParameters:
    """Build parameters from a plain mapping. Raises KeyError on missing fields."""
    if "curve" in obj and isinstance(obj["curve"], Mapping):
        obj = obj["curve"]
    return CurveParameters(
        buy_slope=_require_int(obj["buy_slope"], name="buy_slope"),
        investment_ratio=_require_int(obj["investment_ratio"], name="investment_ratio"),
        distribution_ratio=_require_int(obj["distribution_ratio"], name="distribution_ratio"),
        operator=_require_str(obj["operator"], name="operator"),
    )


def parameters_to_dict(params: CurveParameters) -> Dict[str, Union[int, str]]:
    return {
        "buy_slope": params.buy_slope,
        "investment_ratio": params.investment_ratio,
        "distribution_ratio": params.distribution_ratio,
        "operator": params.operator,
    }


def load_parameters(path: Union[str, Path]) -> CurveParameters:
    """Load parameters from a YAML file."""
    obj = yaml.safe_load(Path(path).read_text(encoding="utf-8"))
    if not isinstance(obj, Mapping):
        raise TypeError("curve config YAML must be a mapping")
    return parameters_from_mapping(obj)


def parameters_from_env(defaults: Optional[CurveParameters] = None) -> CurveParameters:
    """
    Overlay ``CURVE_*`` environment variables on ``defaults``.

    Unparseable integers fall back to the default. A field with neither an
    environment value nor a default raises KeyError.
    """
    base: Dict[str, Any] = parameters_to_dict(defaults) if defaults is not None else {}
    merged: Dict[str, Any] = {}
    for field, env_name in ENV_VARS.items():
        if field in _INT_FIELDS:
            value = _env_int(env_name, base.get(field))
        else:
            value = _env_str(env_name, base.get(field))
        if value is None:
            raise KeyError(env_name)
        merged[field] = value
    return parameters_from_mapping(merged)
