"""Static lookup tables shared by the retirement and inflation calculators.

All tables are read-only mappings created once at import. Sources:

* IRS Publication 590-B (2022 tables, effective for distributions after
  January 1 2022) for the Uniform Lifetime, Single Life and Joint Life values.
* SSA full retirement age schedule by year of birth.
* U.S. CPI decade averages for the historical inflation figures.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping, Tuple

# Age -> distribution period. Ages above 120 reuse the 120 value.
UNIFORM_LIFETIME_TABLE: Mapping[int, float] = MappingProxyType(
    {
        72: 27.4,
        73: 26.5,
        74: 25.5,
        75: 24.6,
        76: 23.7,
        77: 22.9,
        78: 22.0,
        79: 21.1,
        80: 20.2,
        81: 19.4,
        82: 18.5,
        83: 17.7,
        84: 16.8,
        85: 16.0,
        86: 15.2,
        87: 14.4,
        88: 13.7,
        89: 12.9,
        90: 12.2,
        91: 11.5,
        92: 10.8,
        93: 10.1,
        94: 9.5,
        95: 8.9,
        96: 8.4,
        97: 7.8,
        98: 7.3,
        99: 6.8,
        100: 6.4,
        101: 6.0,
        102: 5.6,
        103: 5.2,
        104: 4.9,
        105: 4.6,
        106: 4.3,
        107: 4.1,
        108: 3.9,
        109: 3.7,
        110: 3.5,
        111: 3.4,
        112: 3.3,
        113: 3.1,
        114: 3.0,
        115: 2.9,
        116: 2.8,
        117: 2.7,
        118: 2.5,
        119: 2.3,
        120: 2.0,
    }
)

# Beneficiary life expectancy. Sparse below 70 and above 100; lookups take
# the nearest listed age at or below the requested one.
SINGLE_LIFE_TABLE: Mapping[int, float] = MappingProxyType(
    {
        0: 84.6,
        1: 83.7,
        5: 79.7,
        10: 74.8,
        15: 69.9,
        20: 65.0,
        25: 60.2,
        30: 55.3,
        35: 50.5,
        40: 45.7,
        45: 41.0,
        50: 36.2,
        55: 31.6,
        60: 27.1,
        65: 22.9,
        70: 19.0,
        71: 18.0,
        72: 17.1,
        73: 16.2,
        74: 15.3,
        75: 14.5,
        76: 13.6,
        77: 12.8,
        78: 12.0,
        79: 11.2,
        80: 10.5,
        81: 9.8,
        82: 9.1,
        83: 8.5,
        84: 7.9,
        85: 7.3,
        86: 6.8,
        87: 6.3,
        88: 5.8,
        89: 5.4,
        90: 5.0,
        91: 4.6,
        92: 4.3,
        93: 4.0,
        94: 3.7,
        95: 3.5,
        96: 3.3,
        97: 3.0,
        98: 2.8,
        99: 2.6,
        100: 2.5,
        105: 1.8,
        110: 1.3,
        111: 1.1,
    }
)

# (owner age, spouse age) -> joint and last survivor distribution period
JOINT_LIFE_TABLE: Mapping[Tuple[int, int], float] = MappingProxyType(
    {
        (73, 60): 28.6,
        (73, 61): 27.7,
        (73, 62): 26.8,
        (73, 63): 25.9,
        (74, 60): 27.7,
        (74, 61): 26.8,
        (74, 62): 25.9,
        (74, 63): 25.0,
        (75, 60): 26.8,
        (75, 61): 25.9,
        (75, 62): 25.0,
        (75, 63): 24.1,
        (75, 64): 23.3,
        (75, 65): 22.4,
        (76, 60): 25.9,
        (76, 61): 25.0,
        (76, 62): 24.1,
        (76, 63): 23.3,
        (76, 64): 22.4,
        (76, 65): 21.6,
        (77, 60): 25.0,
        (77, 61): 24.2,
        (77, 62): 23.3,
        (77, 63): 22.5,
        (77, 64): 21.6,
        (77, 65): 20.8,
        (80, 60): 22.5,
        (80, 65): 18.4,
        (80, 70): 15.0,
    }
)

# Birth year -> full retirement age in years (fractional for the phase-in)
FULL_RETIREMENT_AGE_BY_BIRTH_YEAR: Mapping[int, float] = MappingProxyType(
    {
        1938: 65.167,
        1939: 65.333,
        1940: 65.5,
        1941: 65.667,
        1942: 65.833,
        1955: 66.167,
        1956: 66.333,
        1957: 66.5,
        1958: 66.667,
        1959: 66.833,
    }
)

# Average annual U.S. inflation (percent) by decade
HISTORICAL_INFLATION_RATES: Mapping[str, float] = MappingProxyType(
    {
        "1920s": -1.15,
        "1930s": -1.8,
        "1940s": 5.36,
        "1950s": 2.22,
        "1960s": 2.52,
        "1970s": 7.36,
        "1980s": 5.1,
        "1990s": 2.89,
        "2000s": 2.54,
        "2010s": 1.77,
        "2020s": 3.8,  # estimate from recent data
    }
)


def single_life_expectancy(age: int) -> float:
    """Return the single life factor for ``age`` using the nearest lower key."""
    eligible = [key for key in SINGLE_LIFE_TABLE if key <= age]
    if not eligible:
        return SINGLE_LIFE_TABLE[0]
    return SINGLE_LIFE_TABLE[max(eligible)]
