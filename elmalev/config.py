"""
New Level Configuration

Parser for the INI file holding defaults for `elmalev new`.

INI Format:
    [level]
    name = My level
    lgr = default
    ground = ground
    sky = sky
    link = 12345      ; optional, random when omitted
"""

import configparser
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from .constants import NAME_SIZE, LGR_SIZE, GROUND_SIZE, SKY_SIZE
from .data_types import Level
from .utils import logWarning
from .utils.link import MAX_LINK

SECTION = "level"


@dataclass
class NewLevelConfig:
    """Defaults applied to a freshly created level"""
    name: str = "New level"
    lgr: str = "default"
    ground: str = "ground"
    sky: str = "sky"
    link: Optional[int] = None  # None = generate

    def __post_init__(self):
        """Validate field widths and link range"""
        for field_name, width in (("name", NAME_SIZE), ("lgr", LGR_SIZE),
                                  ("ground", GROUND_SIZE), ("sky", SKY_SIZE)):
            value = getattr(self, field_name)
            if len(value.encode('ascii', errors='replace')) > width:
                raise ValueError(f"{field_name} {value!r} longer than {width} bytes")

        if self.link is not None and not 0 <= self.link <= MAX_LINK:
            raise ValueError(f"Link {self.link} out of range (0-{MAX_LINK})")

    @classmethod
    def from_file(cls, config_path: Union[str, Path]) -> 'NewLevelConfig':
        """
        Load defaults from an INI file. Missing file or section gives
        the built-in defaults.
        """
        config_path = Path(config_path)
        if not config_path.exists():
            logWarning(f"Level config not found: {config_path}")
            return cls()

        parser = configparser.ConfigParser(inline_comment_prefixes=(';', '#'))
        parser.read(config_path, encoding='utf-8')
        if not parser.has_section(SECTION):
            logWarning(f"No [{SECTION}] section in {config_path}")
            return cls()

        section = parser[SECTION]
        defaults = cls()
        return cls(
            name=section.get('name', defaults.name),
            lgr=section.get('lgr', defaults.lgr),
            ground=section.get('ground', defaults.ground),
            sky=section.get('sky', defaults.sky),
            link=section.getint('link', fallback=None),
        )

    def create_level(self, rng=None) -> Level:
        """Build a default level with these settings applied."""
        level = Level(name=self.name, lgr=self.lgr, ground=self.ground, sky=self.sky)
        if self.link is None:
            level.generate_link(rng)
        else:
            level.link = self.link
        return level
