"""Tests for the lpath command line."""

import json
from pathlib import Path

from lpath.main import EXIT_ERROR, EXIT_ISSUES, EXIT_OK, main

EXAMPLE_PROFILE = Path(__file__).parent.parent / "profiles" / "example.toml"

CLEAN_PROFILE = """
[lpath]
skills = ["key"]

[[stages]]
id = "start"
begin = true
unlock-skills = ["key"]
next-stage = { "goal" = ["key"] }

[[stages]]
id = "goal"
end = true
"""


def write_profile(tmp_path: Path, content: str) -> Path:
    profile = tmp_path / "profile.toml"
    profile.write_text(content)
    return profile


class TestExitCodes:
    """Tests for main() return values."""

    def test_example_profile(self, capsys):
        assert main([str(EXAMPLE_PROFILE)]) == EXIT_OK
        out = capsys.readouterr().out
        assert "[deadend] entry = 1-1" in out
        assert "Status: ISSUES FOUND" in out

    def test_fail_on_issues(self, capsys):
        assert main([str(EXAMPLE_PROFILE), "--fail-on-issues"]) == EXIT_ISSUES

    def test_fail_on_issues_clean(self, tmp_path, capsys):
        profile = write_profile(tmp_path, CLEAN_PROFILE)
        assert main([str(profile), "--fail-on-issues"]) == EXIT_OK
        assert "Status: OK" in capsys.readouterr().out

    def test_missing_file(self, tmp_path, capsys):
        assert main([str(tmp_path / "missing.toml")]) == EXIT_ERROR
        assert "Profile not found" in capsys.readouterr().err

    def test_invalid_toml(self, tmp_path, capsys):
        profile = write_profile(tmp_path, "[lpath\n")
        assert main([str(profile)]) == EXIT_ERROR
        assert "Invalid TOML" in capsys.readouterr().err

    def test_not_utf8(self, tmp_path, capsys):
        """Undecodable bytes are reported, not raised."""
        profile = tmp_path / "profile.toml"
        profile.write_bytes(b'[lpath]\nskills = ["\xff"]\n')
        assert main([str(profile)]) == EXIT_ERROR
        assert "Error: Invalid TOML" in capsys.readouterr().err

    def test_profile_is_a_directory(self, tmp_path, capsys):
        assert main([str(tmp_path)]) == EXIT_ERROR
        assert "Error: Cannot read profile" in capsys.readouterr().err

    def test_unwritable_output(self, tmp_path, capsys):
        """Output into a missing directory fails cleanly."""
        output = tmp_path / "missing" / "out.json"
        assert main([str(EXAMPLE_PROFILE), "--json", str(output)]) == EXIT_ERROR
        assert "Error: Cannot write output" in capsys.readouterr().err

    def test_format_error(self, tmp_path, capsys):
        profile = write_profile(tmp_path, "[other]\n")
        assert main([str(profile)]) == EXIT_ERROR
        assert "Missing required section [lpath]" in capsys.readouterr().err

    def test_structural_error(self, tmp_path, capsys):
        profile = write_profile(
            tmp_path, '[lpath]\n\n[[stages]]\nid = "a"\nbegin = true\n'
        )
        assert main([str(profile)]) == EXIT_ERROR
        assert "No stage is flagged end = true" in capsys.readouterr().err

    def test_no_begin_stage(self, tmp_path, capsys):
        profile = write_profile(tmp_path, '[lpath]\n\n[[stages]]\nid = "a"\nend = true\n')
        assert main([str(profile)]) == EXIT_ERROR
        err = capsys.readouterr().err
        assert "Validation failed" in err
        assert "No begin stage defined" in err

    def test_strict_rejects_unknown_names(self, tmp_path, capsys):
        profile = write_profile(
            tmp_path, CLEAN_PROFILE.replace('["key"] }', '["key", "jetpack"] }')
        )
        assert main([str(profile)]) == EXIT_OK
        assert main([str(profile), "--strict"]) == EXIT_ERROR
        assert "unknown required-skill 'jetpack'" in capsys.readouterr().err


class TestOutput:
    """Tests for optional outputs."""

    def test_warning_count_without_verbose(self, capsys):
        main([str(EXAMPLE_PROFILE)])
        assert "2 validation warning(s)" in capsys.readouterr().err

    def test_verbose(self, capsys):
        main([str(EXAMPLE_PROFILE), "-v"])
        captured = capsys.readouterr()
        assert "Loaded profile" in captured.out
        assert "      skills: pan" in captured.out
        assert "requires skills no stage unlocks: glide" in captured.err

    def test_show_graph(self, capsys):
        main([str(EXAMPLE_PROFILE), "--show-graph"])
        out = capsys.readouterr().out
        assert "2 = bossfight1" in out
        assert "1 0 0 1 0 0 0 0" in out

    def test_json_and_report(self, tmp_path, capsys):
        json_path = tmp_path / "out.json"
        report_path = tmp_path / "report.txt"
        code = main(
            [
                str(EXAMPLE_PROFILE),
                "--json",
                str(json_path),
                "--report",
                str(report_path),
            ]
        )
        assert code == EXIT_OK
        with open(json_path, encoding="utf-8") as f:
            data = json.load(f)
        assert data["summary"]["total"] == 3
        assert "Status: ISSUES FOUND" in report_path.read_text(encoding="utf-8")
        out = capsys.readouterr().out
        assert f"Written: {json_path}" in out
        assert f"Written: {report_path}" in out
