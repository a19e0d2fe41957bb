#!/usr/bin/env python3
"""
Parameter sweep harness for the rotation planner.

Usage:
    python scripts/sweep_parameters.py cases
    python scripts/sweep_parameters.py cases --case 14,7,5,90 --case 21,7,3,90
    python scripts/sweep_parameters.py find-fail --horizons 60,90,120
"""

import sys
import argparse
import logging
from pathlib import Path
from typing import List, Tuple

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from rotaplan.engine.errors import SchedulingError
from rotaplan.engine.roster_types import DayState, RotationParameters
from rotaplan.engine.schedule_generator import coverage_start_day, generate, validate

# ANSI color codes
RED = '\033[91m'
GREEN = '\033[92m'
YELLOW = '\033[93m'
RESET = '\033[0m'
BOLD = '\033[1m'

DEFAULT_CASES = [
    (14, 7, 5, 90),
    (21, 7, 3, 90),
    (10, 5, 2, 90),
    (14, 6, 4, 950),
]
DEFAULT_HORIZONS = [60, 90, 120, 180, 240]


def parse_case(raw: str) -> Tuple[int, int, int, int]:
    try:
        n, m, induction, horizon = (int(part) for part in raw.split(","))
    except ValueError:
        raise argparse.ArgumentTypeError(f"Expected N,M,induction,horizon - got '{raw}'")
    return n, m, induction, horizon


def run_cases(cases: List[Tuple[int, int, int, int]]) -> int:
    """Generate and validate each case, print a one-line summary. Returns failure count."""
    failures = 0
    for n, m, induction, horizon in cases:
        label = f"{n}x{m} I{induction} T{horizon}"
        params = RotationParameters(n, m, induction, horizon_days=horizon)
        try:
            schedule = generate(params)
        except SchedulingError as e:
            failures += 1
            print(f"{RED}{label}: FAIL: {e}{RESET}")
            continue

        findings = validate(schedule, horizon, coverage_start_day(params))
        rest_a = schedule.flexible_a.count(DayState.REST)
        rest_b = schedule.flexible_b.count(DayState.REST)
        color = GREEN if not findings else YELLOW
        print(f"{color}{label}: findings={len(findings)} | ceiling={schedule.duty_ceiling} "
              f"| flexible_a Rest={rest_a} | flexible_b Rest={rest_b}{RESET}")
    return failures


def find_fail(horizons: List[int]) -> bool:
    """Scan the parameter space and stop at the first input that makes generation raise."""
    for horizon in horizons:
        for n in range(3, 26):
            for m in range(3, 11):
                for induction in range(1, 6):
                    # Structurally invalid inputs are rejected before generation
                    if n <= induction + 1:
                        continue
                    params = RotationParameters(n, m, induction, horizon_days=horizon)
                    try:
                        generate(params)
                    except SchedulingError as e:
                        print(f"{RED}FAIL found: N={n} M={m} induction={induction} "
                              f"horizon={horizon} ({type(e).__name__}){RESET}")
                        return True
    print(f"{GREEN}No FAIL found in searched range.{RESET}")
    return False


def main():
    parser = argparse.ArgumentParser(description='Rotation planner parameter sweep')
    parser.add_argument('--verbose', action='store_true', help='Show engine log output')
    sub = parser.add_subparsers(dest='command', help='Command')

    p_cases = sub.add_parser('cases', help='Run a list of parameter sets')
    p_cases.add_argument('--case', action='append', type=parse_case,
                         help='N,M,induction,horizon (repeatable)')

    p_fail = sub.add_parser('find-fail', help='Search for inputs that make generation raise')
    p_fail.add_argument('--horizons', default=",".join(str(h) for h in DEFAULT_HORIZONS),
                        help='Comma-separated horizons to scan')

    args = parser.parse_args()
    logging.basicConfig(level=logging.INFO if args.verbose else logging.WARNING,
                        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')

    if args.command == 'cases':
        failures = run_cases(args.case or DEFAULT_CASES)
        sys.exit(1 if failures else 0)
    elif args.command == 'find-fail':
        horizons = [int(h) for h in args.horizons.split(",") if h.strip()]
        sys.exit(1 if find_fail(horizons) else 0)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == '__main__':
    main()
