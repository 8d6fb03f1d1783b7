"""
Data types for Elma levels.

Contains the enums and dataclasses shared by the parser, the serializer and
the integrity calculation.
"""

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import List, Optional

from .constants import OBJECT_RADIUS
from .errors import InvalidAnimationValue, InvalidClipValue, InvalidGravityValue, InvalidObjectType
from .utils.link import generate_link


class FormatVersion(Enum):
    """Level format, keyed by the 5-byte file tag."""
    ELMA = "POT14"
    ACROSS = "POT06"  # detected only, never parsed


class ObjectKind(IntEnum):
    """Object type code. The value is also the integrity weight."""
    EXIT = 1
    APPLE = 2
    KILLER = 3
    START = 4


class Gravity(IntEnum):
    NORMAL = 0
    UP = 1
    DOWN = 2
    LEFT = 3
    RIGHT = 4


class Clip(IntEnum):
    UNCLIPPED = 0
    GROUND = 1
    SKY = 2


def coerce_enum(enum_cls, value, error_cls, offset: Optional[int] = None):
    """
    Convert an int (or member) to `enum_cls`, raising `error_cls` when
    the value has no member.
    """
    try:
        return enum_cls(value)
    except ValueError:
        raise error_cls(value, offset) from None


def check_animation(value) -> int:
    """Return an apple animation frame, raising if it is not an int >= 1."""
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise InvalidAnimationValue(value)
    return value


@dataclass
class Point:
    x: float
    y: float


@dataclass
class Polygon:
    """Closed vertex chain. Grass polygons are decoration only."""
    grass: bool = False
    vertices: List[Point] = field(default_factory=list)


@dataclass
class LevelObject:
    """
    Placed object.

    Only apples carry gravity and animation (1-based frame); for other
    kinds both are None.
    """
    position: Point
    kind: ObjectKind
    gravity: Optional[Gravity] = None
    animation: Optional[int] = None

    def __post_init__(self):
        self.kind = coerce_enum(ObjectKind, self.kind, InvalidObjectType)
        if self.kind is ObjectKind.APPLE:
            if self.gravity is None:
                self.gravity = Gravity.NORMAL
            if self.animation is None:
                self.animation = 1
            self.gravity = coerce_enum(Gravity, self.gravity, InvalidGravityValue)
            self.animation = check_animation(self.animation)
        else:
            self.gravity = None
            self.animation = None


@dataclass
class Picture:
    """Picture or texture placed in the level."""
    name: str
    texture: str
    mask: str
    position: Point
    distance: int = 500
    clip: Clip = Clip.UNCLIPPED

    def __post_init__(self):
        self.clip = coerce_enum(Clip, self.clip, InvalidClipValue)


@dataclass
class Top10Entry:
    """Best time record. Single player entries leave name2 empty."""
    time: int
    name1: str
    name2: str = ""


@dataclass
class Top10:
    single: List[Top10Entry] = field(default_factory=list)
    multi: List[Top10Entry] = field(default_factory=list)


def _default_polygons() -> List[Polygon]:
    return [Polygon(grass=False, vertices=[
        Point(10.0, 0.0),
        Point(10.0, 7.0),
        Point(0.0, 7.0),
        Point(0.0, 0.0),
    ])]


def _default_objects() -> List[LevelObject]:
    return [
        LevelObject(Point(2.0, 7.0 - OBJECT_RADIUS), ObjectKind.START),
        LevelObject(Point(8.0, 7.0 - OBJECT_RADIUS), ObjectKind.EXIT),
    ]


@dataclass
class Level:
    """
    A complete level.

    Level() is a minimal playable level: one 10x7 rectangle with a start
    and an exit. Level.empty() has no geometry and is what the parser
    fills in.

    Usage:
        level = Level()
        level.name = "My level"
        level.objects.append(LevelObject(Point(5.0, 6.6), ObjectKind.APPLE))
        data = encode(level)
    """
    version: FormatVersion = FormatVersion.ELMA
    link: int = 0
    integrity: List[float] = field(default_factory=lambda: [0.0, 0.0, 0.0, 0.0])
    name: str = "New level"
    lgr: str = "default"
    ground: str = "ground"
    sky: str = "sky"
    polygons: List[Polygon] = field(default_factory=_default_polygons)
    objects: List[LevelObject] = field(default_factory=_default_objects)
    pictures: List[Picture] = field(default_factory=list)
    top10: Top10 = field(default_factory=Top10)

    @classmethod
    def empty(cls) -> 'Level':
        return cls(polygons=[], objects=[])

    def generate_link(self, rng=None) -> int:
        """Assign and return a new random link."""
        self.link = generate_link(rng)
        return self.link
