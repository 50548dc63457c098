"""Central constants for the calculation engine and the HTTP adapter.

Numbers that drive solver convergence, statutory cut-offs and API settings
live here so the engines do not hardcode them. Values that depend on the
deployment are read from the environment once at import time.
"""

import os
from typing import List, Tuple

# =============================================================================
# RATE SOLVER
# =============================================================================

# Hard cap on Newton-Raphson steps for every rate solve
MAX_ITERATIONS = 100

# Absolute tolerance on payment units for the APR solve
APR_TOLERANCE = 1e-6

# Absolute tolerance on payment units for the reverse interest-rate solve
RATE_TOLERANCE = 1e-7

# Forward finite-difference probe used when no analytic derivative is given
FINITE_DIFFERENCE_STEP = 1e-7

# Below this derivative magnitude the iteration is considered stalled
MIN_DERIVATIVE = 1e-7

# Annual rate the APR solve resets to when a step goes negative
APR_RATE_FLOOR = 0.001

# Monthly rate the interest-rate solve resets to when a step goes negative
MONTHLY_RATE_FLOOR = 0.00001

# Clamp for the heuristic starting guess (annualized)
INITIAL_GUESS_BOUNDS: Tuple[float, float] = (0.001, 0.5)

# =============================================================================
# RETIREMENT RULES
# =============================================================================

RMD_MAX_AGE = 120

# Spouse must be more than this many years younger to use the joint table
JOINT_TABLE_AGE_GAP = 10

CLAIM_AGE_RANGE: Tuple[int, int] = (62, 70)

# Age at which delayed retirement credits stop accruing
MAX_CREDIT_AGE = 70

BREAK_EVEN_HORIZON = 100

# Life expectancies used when comparing two claiming strategies
PLANNING_HORIZONS: Tuple[int, ...] = (85, 90, 95)

# Baseline monthly benefit at FRA used by the ideal-age scan
DEFAULT_FULL_BENEFIT = 2500.0

# =============================================================================
# HTTP ADAPTER
# =============================================================================

_DEFAULT_CORS_ORIGINS = "http://localhost:3000,http://localhost:5173,http://127.0.0.1:5173"


def _split_origins(raw: str) -> List[str]:
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


CORS_ORIGINS: List[str] = _split_origins(os.environ.get("FINCALC_CORS_ORIGINS", _DEFAULT_CORS_ORIGINS))

LOG_LEVEL = os.environ.get("FINCALC_LOG_LEVEL", "INFO").upper()
