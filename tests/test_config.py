"""Tests for profile parsing."""

import pytest

from lpath.config import (
    SUPPORTED_VERSION,
    ProfileConfig,
    TOMLDecodeError,
    check_format_version,
    load_config,
)
from lpath.errors import (
    BadFieldType,
    FormatError,
    InvalidSkillType,
    MissingRequiredSection,
    ProfileError,
    UnsupportedFormatVersion,
)


def test_from_toml(tmp_path):
    """ProfileConfig.from_toml parses the section and every stage table."""
    profile_file = tmp_path / "profile.toml"
    profile_file.write_text("""
[lpath]
version = 1
skills = ["pan", "glide"]

[[stages]]
id = "1-1"
begin = true
next-stage = { "1-2" = [""] }

[[stages]]
id = "1-2"
end = true
""")
    profile = ProfileConfig.from_toml(profile_file)
    assert profile.version == 1
    assert profile.skills == ["pan", "glide"]
    assert len(profile.stages) == 2
    assert profile.stages[0]["id"] == "1-1"
    assert profile.stages[0]["next-stage"] == {"1-2": [""]}
    assert profile.stages[1]["end"] is True


def test_load_config_accepts_str_path(tmp_path):
    """load_config wraps from_toml and accepts plain strings."""
    profile_file = tmp_path / "profile.toml"
    profile_file.write_text('[lpath]\nskills = []\n')
    profile = load_config(str(profile_file))
    assert profile.skills == []
    assert profile.stages == []


def test_from_string_defaults():
    """A bare [lpath] section uses default version and empty lists."""
    profile = ProfileConfig.from_string("[lpath]\n")
    assert profile.version == SUPPORTED_VERSION
    assert profile.skills == []
    assert profile.stages == []


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "nope.toml")


def test_invalid_toml():
    with pytest.raises(TOMLDecodeError):
        ProfileConfig.from_string("[lpath\nskills = ")


class TestFormatErrors:
    """Tests for top-level format checks."""

    def test_missing_section(self):
        """A profile without [lpath] is rejected."""
        with pytest.raises(MissingRequiredSection) as exc_info:
            ProfileConfig.from_dict({"stages": []})
        assert exc_info.value.section == "lpath"
        assert "[lpath]" in str(exc_info.value)

    def test_section_not_a_table(self):
        with pytest.raises(BadFieldType) as exc_info:
            ProfileConfig.from_dict({"lpath": 3})
        assert exc_info.value.field_name == "lpath"

    def test_unsupported_version(self):
        with pytest.raises(UnsupportedFormatVersion) as exc_info:
            ProfileConfig.from_string("[lpath]\nversion = 2\n")
        assert exc_info.value.version == 2
        assert exc_info.value.supported == SUPPORTED_VERSION

    def test_version_wrong_type(self):
        with pytest.raises(BadFieldType) as exc_info:
            ProfileConfig.from_string('[lpath]\nversion = "1"\n')
        assert exc_info.value.field_name == "version"

    def test_version_bool_rejected(self):
        """TOML booleans are not accepted as a version number."""
        with pytest.raises(BadFieldType):
            check_format_version(True)

    def test_skills_not_a_list(self):
        with pytest.raises(BadFieldType) as exc_info:
            ProfileConfig.from_string('[lpath]\nskills = "pan"\n')
        assert exc_info.value.field_name == "skills"

    def test_non_string_skill(self):
        with pytest.raises(InvalidSkillType):
            ProfileConfig.from_dict({"lpath": {"skills": ["pan", 1]}})

    def test_stages_not_an_array(self):
        with pytest.raises(BadFieldType) as exc_info:
            ProfileConfig.from_dict({"lpath": {}, "stages": {"id": "1-1"}})
        assert exc_info.value.field_name == "stages"

    def test_all_format_errors_share_a_base(self):
        """Format errors can be caught as FormatError or ProfileError."""
        for data in ({}, {"lpath": {"version": 9}}, {"lpath": {"skills": 1}}):
            with pytest.raises(FormatError):
                ProfileConfig.from_dict(data)
            with pytest.raises(ProfileError):
                ProfileConfig.from_dict(data)
