"""
Level Integrity Sums

Computes the four header doubles the game uses as a level fingerprint.
The first is a weighted sum of all coordinates; the other three are random
values offset against it. Only the layout matters to this codec, the sums
are never checked on load.
"""

from typing import List, Optional

import numpy as np

from .constants import INTEGRITY_MULTIPLIER
from .data_types import Level, ObjectKind, coerce_enum
from .errors import InvalidObjectType

# (exclusive upper bound, offset) for integrity[1..3]
COMPLEMENT_RANGES = (
    (5871, 11877),
    (5871, 11877),
    (6102, 12112),
)


def coordinate_sum(level: Level) -> float:
    """
    Sum of polygon vertices, objects (plus kind weight) and pictures.

    Accumulates left to right in file order.
    """
    polygon_sum = 0.0
    for polygon in level.polygons:
        vertex_sum = 0.0
        for vertex in polygon.vertices:
            vertex_sum = vertex_sum + vertex.x + vertex.y
        polygon_sum += vertex_sum

    object_sum = 0.0
    for obj in level.objects:
        weight = int(coerce_enum(ObjectKind, obj.kind, InvalidObjectType))
        object_sum = object_sum + obj.position.x + obj.position.y + weight

    picture_sum = 0.0
    for picture in level.pictures:
        picture_sum = picture_sum + picture.position.x + picture.position.y

    return polygon_sum + object_sum + picture_sum


def calculate_integrity(level: Level, rng: Optional[np.random.Generator] = None) -> List[float]:
    """
    Calculate integrity sums for a level.

    Args:
        level: Level to fingerprint (not modified)
        rng: Random generator. A fresh default_rng() is used when omitted,
             so concurrent calls never share state.

    Returns:
        List of 4 floats
    """
    if rng is None:
        rng = np.random.default_rng()

    base = coordinate_sum(level) * INTEGRITY_MULTIPLIER
    integrity = [base]
    for upper, offset in COMPLEMENT_RANGES:
        integrity.append(int(rng.integers(0, upper)) + offset - base)
    return integrity
