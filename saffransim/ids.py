"""Stable deterministic seeds for independent protocol runs."""

from __future__ import annotations

import hashlib


def stable_seed(base_seed: int, *coordinates: int) -> int:
    """Derive a 32-bit seed from a base seed and run coordinates.

    Example:
        >>> stable_seed(0, 1, 2) == stable_seed(0, 1, 2)
        True
    """
    label = ":".join(str(part) for part in (base_seed, *coordinates))
    digest = hashlib.sha256(label.encode("utf-8")).hexdigest()[:8]
    return int(digest, 16)
