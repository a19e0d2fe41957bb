"""
Search configuration for the coverage solver and horizon extender.

Defaults can be overridden through environment variables:
    ROTAPLAN_CEILING_SPAN          iterative deepening span past the starting ceiling (0 = single-shot)
    ROTAPLAN_MEMO_CAPACITY         max entries in the failure memo (LRU)
    ROTAPLAN_TIME_BUDGET_SECONDS   optional wall-clock budget per solve
    ROTAPLAN_HORIZON_ATTEMPTS      horizon extension attempts
    ROTAPLAN_HORIZON_GROWTH        horizon growth factor between attempts
"""

import os
import math
import logging
from dataclasses import dataclass
from typing import Optional

logger = logging.getLogger(__name__)


DEFAULT_CEILING_SPAN = 120
DEFAULT_MEMO_CAPACITY = 1_000_000
DEFAULT_HORIZON_ATTEMPTS = 3
DEFAULT_HORIZON_GROWTH = 1.5


@dataclass(frozen=True)
class SearchConfig:
    ceiling_span: int = DEFAULT_CEILING_SPAN
    memo_capacity: int = DEFAULT_MEMO_CAPACITY
    time_budget_seconds: Optional[float] = None
    horizon_attempts: int = DEFAULT_HORIZON_ATTEMPTS
    horizon_growth: float = DEFAULT_HORIZON_GROWTH
    horizon_buffer_cycles: int = 6
    horizon_buffer_days: int = 30

    @property
    def single_shot(self) -> bool:
        return self.ceiling_span <= 0

    @classmethod
    def from_env(cls) -> "SearchConfig":
        budget = _float_env("ROTAPLAN_TIME_BUDGET_SECONDS", None)
        if budget is not None and budget <= 0:
            logger.warning(f"ROTAPLAN_TIME_BUDGET_SECONDS must be > 0 (got {budget}), ignoring it")
            budget = None

        memo_capacity = _int_env("ROTAPLAN_MEMO_CAPACITY", DEFAULT_MEMO_CAPACITY)
        if memo_capacity < 1:
            logger.warning(f"ROTAPLAN_MEMO_CAPACITY must be >= 1 (got {memo_capacity}), "
                           f"defaulting to {DEFAULT_MEMO_CAPACITY}")
            memo_capacity = DEFAULT_MEMO_CAPACITY

        horizon_attempts = _int_env("ROTAPLAN_HORIZON_ATTEMPTS", DEFAULT_HORIZON_ATTEMPTS)
        if horizon_attempts < 1:
            logger.warning(f"ROTAPLAN_HORIZON_ATTEMPTS must be >= 1 (got {horizon_attempts}), "
                           f"defaulting to {DEFAULT_HORIZON_ATTEMPTS}")
            horizon_attempts = DEFAULT_HORIZON_ATTEMPTS

        horizon_growth = _float_env("ROTAPLAN_HORIZON_GROWTH", DEFAULT_HORIZON_GROWTH)
        if horizon_growth <= 1.0:
            logger.warning(f"ROTAPLAN_HORIZON_GROWTH must be > 1.0 (got {horizon_growth}), "
                           f"defaulting to {DEFAULT_HORIZON_GROWTH}")
            horizon_growth = DEFAULT_HORIZON_GROWTH

        return cls(
            ceiling_span=_int_env("ROTAPLAN_CEILING_SPAN", DEFAULT_CEILING_SPAN),
            memo_capacity=memo_capacity,
            time_budget_seconds=budget,
            horizon_attempts=horizon_attempts,
            horizon_growth=horizon_growth,
        )


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning(f"Invalid {name} value '{raw}', defaulting to {default}")
        return default


def _float_env(name: str, default: Optional[float]) -> Optional[float]:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        value = float(raw)
    except ValueError:
        value = math.nan
    if not math.isfinite(value):
        logger.warning(f"Invalid {name} value '{raw}', defaulting to {default}")
        return default
    return value
