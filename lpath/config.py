"""Profile parsing for lpath.

A profile is a TOML document describing the stages of a game:

    [lpath]
    version = 1
    skills = ["pan", "glide"]

    [[stages]]
    id = "1-1"
    begin = true
    next-stage = { "1-2" = [""] }

This module only turns the document into raw tables and checks the
top-level format. Stage records are validated by LevelGraph.build().
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from lpath.errors import (
    BadFieldType,
    InvalidSkillType,
    MissingRequiredSection,
    UnsupportedFormatVersion,
)

# Use tomllib (Python 3.11+) with fallback to tomli
if sys.version_info >= (3, 11):
    import tomllib
else:
    try:
        import tomli as tomllib
    except ImportError as e:
        raise ImportError(
            "tomli is required for Python < 3.11. Install with: pip install tomli"
        ) from e

TOMLDecodeError = tomllib.TOMLDecodeError

SUPPORTED_VERSION = 1
SECTION = "lpath"


def check_format_version(version: object) -> int:
    """Ensure a profile version is an integer this tool supports.

    Args:
        version: Raw version value from the profile.

    Returns:
        The version as an int.

    Raises:
        BadFieldType: If the version is not an integer.
        UnsupportedFormatVersion: If the version is not SUPPORTED_VERSION.
    """
    # bool is a subclass of int, TOML `version = true` is still wrong
    if isinstance(version, bool) or not isinstance(version, int):
        raise BadFieldType("version", "an integer", version)
    if version != SUPPORTED_VERSION:
        raise UnsupportedFormatVersion(version, SUPPORTED_VERSION)
    return version


@dataclass
class ProfileConfig:
    """Raw profile content, ready for LevelGraph construction.

    Attributes:
        version: Profile format version.
        skills: Skill names in declaration order (may contain "" placeholders).
        stages: Raw stage records, one per [[stages]] table.
    """

    version: int = SUPPORTED_VERSION
    skills: list[str] = field(default_factory=list)
    stages: list[Any] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ProfileConfig:
        """Create a ProfileConfig from a dictionary (e.g., parsed TOML)."""
        section = data.get(SECTION)
        if section is None:
            raise MissingRequiredSection(SECTION)
        if not isinstance(section, dict):
            raise BadFieldType(SECTION, "a table", section)

        version = check_format_version(section.get("version", SUPPORTED_VERSION))

        skills = section.get("skills", [])
        if not isinstance(skills, list):
            raise BadFieldType("skills", "a list of strings", skills)
        for skill in skills:
            if not isinstance(skill, str):
                raise InvalidSkillType(skill)

        stages = data.get("stages", [])
        if not isinstance(stages, list):
            raise BadFieldType("stages", "an array of tables", stages)

        return cls(version=version, skills=list(skills), stages=list(stages))

    @classmethod
    def from_toml(cls, path: str | Path) -> ProfileConfig:
        """Load a profile from a TOML file."""
        path = Path(path)
        with path.open("rb") as f:
            data = tomllib.load(f)
        return cls.from_dict(data)

    @classmethod
    def from_string(cls, content: str) -> ProfileConfig:
        """Load a profile from TOML text."""
        return cls.from_dict(tomllib.loads(content))


def load_config(path: str | Path) -> ProfileConfig:
    """Load a profile from a TOML file.

    This is a convenience function that wraps ProfileConfig.from_toml().

    Args:
        path: Path to the TOML profile.

    Returns:
        Parsed ProfileConfig object.
    """
    return ProfileConfig.from_toml(path)
