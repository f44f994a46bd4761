"""
Scenario replay for the curve engine.

A scenario is a YAML mapping::

    balances:            # native genesis credits
      "0xaa...": 5000000000000000000
    steps:
      - {caller: "0xaa...", action: buy, value: 1000000000000000000}
      - {caller: "0xaa...", action: burn, amount: 5}
      - {caller: "0xbb...", action: rebuy, value: 1, expect: OnlyOrganization}

``expect`` defaults to ``ok``; any other value is the rejection code the step
must produce.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml

from ..core.bonding_curve.engine import CurveToken
from ..core.bonding_curve.types import Action, ActionParams

EXPECT_OK = "ok"


@dataclass(frozen=True)
class ScenarioStep:
    caller: str
    params: ActionParams
    expect: str = EXPECT_OK


@dataclass(frozen=True)
class Scenario:
    balances: Dict[str, int]
    steps: List[ScenarioStep]


@dataclass(frozen=True)
class StepRecord:
    index: int
    action: str
    caller: str
    accepted: bool
    matched: bool
    rejection: Optional[str]
    token_amount: int
    value_amount: int
    reserve: int
    burned_amount: int
    total_supply: int

    def to_dict(self) -> Dict[str, Any]:
        return dict(self.__dict__)


def _require_int(value: Any, *, name: str, non_negative: bool = True) -> int:
    if not isinstance(value, int) or isinstance(value, bool):
        raise ValueError(f"{name} must be an int")
    if non_negative and value < 0:
        raise ValueError(f"{name} must be non-negative")
    return int(value)


def _require_str(value: Any, *, name: str) -> str:
    if not isinstance(value, str) or not value:
        raise ValueError(f"{name} must be a non-empty string")
    return value


def parse_step(obj: Any, *, index: int) -> ScenarioStep:
    if not isinstance(obj, Mapping):
        raise ValueError(f"steps[{index}] must be a mapping")
    try:
        action = Action(obj.get("action"))
    except ValueError:
        raise ValueError(f"steps[{index}].action unknown: {obj.get('action')!r}") from None
    recipient = obj.get("recipient")
    if recipient is not None:
        recipient = _require_str(recipient, name=f"steps[{index}].recipient")
    params = ActionParams(
        action=action,
        value=_require_int(obj.get("value", 0), name=f"steps[{index}].value"),
        amount=_require_int(obj.get("amount", 0), name=f"steps[{index}].amount"),
        recipient=recipient,
    )
    return ScenarioStep(
        caller=_require_str(obj.get("caller"), name=f"steps[{index}].caller"),
        params=params,
        expect=_require_str(obj.get("expect", EXPECT_OK), name=f"steps[{index}].expect"),
    )


def parse_scenario(obj: Any) -> Scenario:
    if not isinstance(obj, Mapping):
        raise TypeError("scenario must be a mapping")
    raw_balances = obj.get("balances") or {}
    if not isinstance(raw_balances, Mapping):
        raise ValueError("balances must be a mapping")
    balances = {
        _require_str(k, name="balances key"): _require_int(v, name=f"balances[{k}]")
        for k, v in raw_balances.items()
    }
    raw_steps = obj.get("steps") or []
    if not isinstance(raw_steps, list):
        raise ValueError("steps must be a list")
    return Scenario(balances=balances, steps=[parse_step(s, index=i) for i, s in enumerate(raw_steps)])


def load_scenario(path: Union[str, Path]) -> Scenario:
    return parse_scenario(yaml.safe_load(Path(path).read_text(encoding="utf-8")))


def run_scenario(token: CurveToken, scenario: Scenario) -> List[StepRecord]:
    """Credit genesis balances, then replay every step through ``token.step``."""
    for identity, amount in sorted(scenario.balances.items()):
        token.native.credit(identity, amount)

    records: List[StepRecord] = []
    for index, s in enumerate(scenario.steps):
        result = token.step(s.caller, s.params)
        outcome = EXPECT_OK if result.accepted else result.rejection
        n = result.notification
        records.append(StepRecord(
            index=index,
            action=s.params.action.value,
            caller=s.caller,
            accepted=result.accepted,
            matched=outcome == s.expect,
            rejection=result.rejection,
            token_amount=n.token_amount if n is not None else 0,
            value_amount=n.value_amount if n is not None else 0,
            reserve=token.reserve(),
            burned_amount=token.burned_amount(),
            total_supply=token.total_supply(),
        ))
    return records
