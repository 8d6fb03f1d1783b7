import numpy as np
import pytest

from elmalev import (
    Level, Polygon, Point, LevelObject, ObjectKind, Gravity,
    Picture, Clip, Top10, Top10Entry,
)


@pytest.fixture
def rng():
    return np.random.default_rng(1234)


@pytest.fixture
def sample_level():
    """Level using every record type, with a sorted Top10 that fits."""
    level = Level(name="Sample level", lgr="custom", ground="ground", sky="sky2", link=0xDEADBEEF)
    level.polygons = [
        Polygon(grass=False, vertices=[Point(0.0, 0.0), Point(20.5, 0.0), Point(20.5, 10.25), Point(0.0, 10.25)]),
        Polygon(grass=True, vertices=[Point(1.0, 1.0), Point(5.0, 1.5), Point(9.125, 0.75)]),
        Polygon(grass=False, vertices=[Point(-3.5, 4.0), Point(-1.0, 6.0), Point(-2.0, 2.0)]),
    ]
    level.objects = [
        LevelObject(Point(2.0, 9.85), ObjectKind.START),
        LevelObject(Point(18.0, 9.85), ObjectKind.EXIT),
        LevelObject(Point(5.0, 3.0), ObjectKind.APPLE),
        LevelObject(Point(6.0, 3.0), ObjectKind.APPLE, Gravity.UP, 3),
        LevelObject(Point(7.0, 3.0), ObjectKind.APPLE, Gravity.RIGHT, 9),
        LevelObject(Point(12.0, 1.0), ObjectKind.KILLER),
    ]
    level.pictures = [
        Picture("barrel", "", "", Point(3.0, 4.0), 600, Clip.SKY),
        Picture("", "stone1", "maskbig", Point(-1.5, 2.5), 750, Clip.GROUND),
        Picture("bush1", "", "", Point(10.0, 10.0), 400, Clip.UNCLIPPED),
    ]
    level.top10 = Top10(
        single=[Top10Entry(1523, "Player"), Top10Entry(2011, "Someone"), Top10Entry(9999, "Slow")],
        multi=[Top10Entry(3050, "Alpha", "Beta")],
    )
    return level


def object_section_offset(level) -> int:
    """Offset of the object count field in the encoded level."""
    return 138 + sum(8 + 16 * len(p.vertices) for p in level.polygons)


def picture_section_offset(level) -> int:
    """Offset of the picture count field in the encoded level."""
    return object_section_offset(level) + 8 + 28 * len(level.objects)
