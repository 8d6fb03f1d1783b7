"""
Level link generation.

The link is a random 32-bit identifier the game uses to match replays and
best times to a level.
"""

from typing import Optional

import numpy as np

MAX_LINK = 0xFFFFFFFF


def generate_link(rng: Optional[np.random.Generator] = None) -> int:
    """
    Generate a random level link.

    Args:
        rng: Random generator. A fresh default_rng() is used when omitted.

    Returns:
        Integer in [0, 2**32 - 1)
    """
    if rng is None:
        rng = np.random.default_rng()
    return int(rng.integers(0, MAX_LINK))
