"""
Random code generators — pure functions over an injectable random source.

The default source is ``random.SystemRandom`` (OS entropy); tests pass a
seeded ``random.Random`` to make codes reproducible.
"""

from __future__ import annotations

import random

OTP_MIN = 100_000
OTP_MAX = 999_999

_system_random = random.SystemRandom()


def generate_otp_code(rng: random.Random | None = None) -> str:
    """Generate a 6-digit numeric OTP.

    Draws uniformly over the 900,000 integers in [100000, 999999], so the
    result is always exactly six digits and never starts with ``0``.

    Args:
        rng: Random source exposing ``randint``. Defaults to the system
            CSPRNG.

    Returns:
        The code as a decimal string.
    """
    source = rng if rng is not None else _system_random
    return str(source.randint(OTP_MIN, OTP_MAX))
