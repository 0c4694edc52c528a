"""Exceptions raised while loading a level profile.

Format errors are detected while reading the raw profile tables. Structural
errors are detected while building the LevelGraph. Exploration itself never
raises.
"""

from __future__ import annotations


class ProfileError(Exception):
    """Base class for every profile loading or graph construction failure."""

    pass


class FormatError(ProfileError):
    """The profile document does not follow the expected format."""

    pass


class UnsupportedFormatVersion(FormatError):
    """The profile declares a format version this tool cannot read."""

    def __init__(self, version: object, supported: int) -> None:
        self.version = version
        self.supported = supported
        super().__init__(
            f"Unsupported profile version {version!r} (supported: {supported})"
        )


class MissingRequiredSection(FormatError):
    """A mandatory top-level section is absent."""

    def __init__(self, section: str) -> None:
        self.section = section
        super().__init__(f"Missing required section [{section}]")


class BadFieldType(FormatError):
    """A field holds a value of the wrong type."""

    def __init__(self, field_name: str, expected: str, value: object) -> None:
        self.field_name = field_name
        self.expected = expected
        self.value = value
        super().__init__(
            f"Field '{field_name}' must be {expected}, got {type(value).__name__}"
        )


class InvalidSkillType(BadFieldType):
    """A skill entry is not a string."""

    def __init__(self, value: object, field_name: str = "skills") -> None:
        super().__init__(field_name, "a list of strings", value)


class StructuralError(ProfileError):
    """The stage list cannot form a valid LevelGraph."""

    pass


class NoStagesDefined(StructuralError):
    def __init__(self) -> None:
        super().__init__("No stages defined")


class NoEndStageDefined(StructuralError):
    def __init__(self) -> None:
        super().__init__("No stage is flagged end = true")


class MissingStageID(StructuralError):
    def __init__(self, index: int) -> None:
        self.index = index
        super().__init__(f"Stage #{index} has no id")


class DuplicateStageID(StructuralError):
    def __init__(self, stage_id: str, index: int) -> None:
        self.stage_id = stage_id
        self.index = index
        super().__init__(f"Duplicate stage id '{stage_id}' (stage #{index})")


class BadStageDefinition(StructuralError):
    """A stage record, or one of its nested tables, is malformed."""

    def __init__(self, index: int, reason: str) -> None:
        self.index = index
        self.reason = reason
        super().__init__(f"Bad definition for stage #{index}: {reason}")
