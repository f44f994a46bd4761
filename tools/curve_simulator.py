#!/usr/bin/env python3
"""Replay a bonding-curve scenario and print one JSON line per step.

Parameters come from ``--config`` (YAML) and are then overlaid with ``CURVE_*``
environment variables. Exit status is 1 if any step's outcome differs from its
``expect`` field.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from src.core.bonding_curve import CurveToken
from src.integration.curve_config import load_parameters, parameters_from_env
from src.integration.curve_scenario import load_scenario, run_scenario


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Bonding-curve scenario simulator")
    parser.add_argument("scenario", help="Path to scenario YAML")
    parser.add_argument("--config", help="Path to curve parameter YAML (default: environment only)")
    parser.add_argument("--log-level", default="WARNING", help="Python logging level")
    args = parser.parse_args(argv)

    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.WARNING))

    defaults = load_parameters(args.config) if args.config else None
    params = parameters_from_env(defaults)
    token = CurveToken(params)

    records = run_scenario(token, load_scenario(args.scenario))
    for rec in records:
        print(json.dumps(rec.to_dict(), sort_keys=True))

    mismatched = [r.index for r in records if not r.matched]
    if mismatched:
        print(f"[curve-sim] FAIL: steps {mismatched} did not match expectations", file=sys.stderr)
        return 1
    print(f"[curve-sim] OK: {len(records)} steps, reserve={token.reserve()} supply={token.total_supply()}", file=sys.stderr)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
