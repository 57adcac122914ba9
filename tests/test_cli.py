"""Tests for CLI entry point."""

import json
import logging

import pytest
from pydantic import ValidationError

from staticassets_mcp.__main__ import load_definitions, main, parse_args


def write_definitions(path, items):
    path.write_text(json.dumps(items), encoding="utf-8")
    return path


class TestParseArgs:
    """Tests for argument parsing."""

    def test_generate_arguments(self):
        """Test generate subcommand arguments."""
        args = parse_args(["generate", "--target", "m.xml", "--definitions", "d.json"])
        assert args.command == "generate"
        assert args.target == "m.xml"
        assert args.definitions == "d.json"
        assert args.kind is None

    def test_generate_target_optional(self):
        """Test the target path may be omitted."""
        args = parse_args(["generate", "--definitions", "d.json"])
        assert args.target is None

    def test_generate_rejects_unknown_kind(self):
        """Test kind choices."""
        with pytest.raises(SystemExit):
            parse_args(["generate", "--target", "m", "--definitions", "d", "--kind", "Other"])

    def test_serve_arguments(self):
        """Test serve subcommand arguments."""
        args = parse_args(["serve", "--project-from-cwd"])
        assert args.command == "serve"
        assert args.project_from_cwd is True
        assert args.project is None

    def test_no_subcommand(self):
        """Test no subcommand means serve."""
        assert parse_args([]).command is None


class TestLoadDefinitions:
    """Tests for the definitions file."""

    def test_load(self, tmp_path):
        """Test loading items in order."""
        path = write_definitions(
            tmp_path / "definitions.json",
            [
                {"ItemSpec": "a.js", "BasePath": "A", "ContentRoot": "./A"},
                {"ItemSpec": "b.js", "BasePath": "B"},
            ],
        )

        items = load_definitions(path)

        assert [item.item_spec for item in items] == ["a.js", "b.js"]
        assert items[1].content_root is None

    def test_not_an_array(self, tmp_path):
        """Test a non-array document is rejected."""
        path = tmp_path / "definitions.json"
        path.write_text('{"ItemSpec": "a.js"}', encoding="utf-8")

        with pytest.raises(ValidationError):
            load_definitions(path)


class TestGenerateCommand:
    """Tests for the generate subcommand."""

    def test_success(self, tmp_path, library_manifest_text):
        """Test a valid run writes the manifest and exits 0."""
        definitions = write_definitions(
            tmp_path / "definitions.json",
            [
                {
                    "ItemSpec": "wwwroot\\sample.js",
                    "BasePath": "MyLibrary",
                    "ContentRoot": "c:/nuget/MyLibrary/razorContent",
                }
            ],
        )
        target = tmp_path / "manifest.xml"

        code = main(["generate", "--target", str(target), "--definitions", str(definitions)])

        assert code == 0
        assert target.read_text(encoding="utf-8") == library_manifest_text

    def test_kind_option(self, tmp_path):
        """Test --kind selects the root element."""
        definitions = write_definitions(tmp_path / "definitions.json", [])
        target = tmp_path / "manifest.xml"

        code = main(
            [
                "generate",
                "--target",
                str(target),
                "--definitions",
                str(definitions),
                "--kind",
                "StaticWebAssets",
            ]
        )

        assert code == 0
        assert target.read_bytes() == b'<StaticWebAssets Version="1.0" />'

    def test_kind_from_env(self, tmp_path, monkeypatch):
        """Test the default kind comes from the environment."""
        monkeypatch.setenv("STATICASSETS_MANIFEST_KIND", "StaticWebAssets")
        definitions = write_definitions(tmp_path / "definitions.json", [])
        target = tmp_path / "manifest.xml"

        assert main(["generate", "--target", str(target), "--definitions", str(definitions)]) == 0
        assert target.read_bytes() == b'<StaticWebAssets Version="1.0" />'

    def test_validation_failure(self, tmp_path, caplog):
        """Test invalid definitions exit 1, log the diagnostic and write nothing."""
        definitions = write_definitions(
            tmp_path / "definitions.json",
            [{"ItemSpec": "wwwroot\\sample.js", "ContentRoot": "/"}],
        )
        target = tmp_path / "manifest.xml"

        with caplog.at_level(logging.ERROR):
            code = main(["generate", "--target", str(target), "--definitions", str(definitions)])

        assert code == 1
        assert not target.exists()
        assert "Missing required metadata 'BasePath' for 'wwwroot\\sample.js'." in caplog.text

    def test_default_target(self, tmp_path, monkeypatch):
        """Test the well-known file name in the current directory is the default target."""
        monkeypatch.chdir(tmp_path)
        definitions = write_definitions(tmp_path / "definitions.json", [])

        assert main(["generate", "--definitions", str(definitions)]) == 0
        assert (tmp_path / "Microsoft.AspNetCore.StaticAssets.xml").read_bytes() == (
            b'<AspNetCoreStaticAssets Version="1.0" />'
        )

    def test_default_target_follows_kind(self, tmp_path, monkeypatch):
        """Test the default file name matches the manifest kind."""
        monkeypatch.chdir(tmp_path)
        definitions = write_definitions(tmp_path / "definitions.json", [])

        code = main(["generate", "--definitions", str(definitions), "--kind", "StaticWebAssets"])

        assert code == 0
        assert (tmp_path / "Microsoft.AspNetCore.StaticWebAssets.xml").exists()

    def test_summary_logged(self, tmp_path, caplog):
        """Test the result summary is logged."""
        definitions = write_definitions(
            tmp_path / "definitions.json",
            [{"ItemSpec": "a.js", "BasePath": "Lib", "ContentRoot": "./Lib"}] * 2,
        )
        target = tmp_path / "manifest.xml"

        with caplog.at_level(logging.INFO):
            main(["generate", "--target", str(target), "--definitions", str(definitions)])

        assert "[OK] Manifest generated" in caplog.text
        assert "Content roots: 1" in caplog.text
        assert "Skipped re-declarations: 1" in caplog.text

    def test_invalid_value(self, tmp_path, caplog):
        """Test a control character in a value exits 1 and writes nothing."""
        definitions = write_definitions(
            tmp_path / "definitions.json",
            [{"ItemSpec": "a.js", "BasePath": "Lib\u0001", "ContentRoot": "./Lib"}],
        )
        target = tmp_path / "manifest.xml"

        with caplog.at_level(logging.ERROR):
            code = main(["generate", "--target", str(target), "--definitions", str(definitions)])

        assert code == 1
        assert not target.exists()
        assert "Invalid value for metadata 'BasePath' for 'a.js'" in caplog.text

    def test_lone_surrogate(self, tmp_path):
        """Test an unpaired surrogate escape exits 1 and writes nothing."""
        definitions = tmp_path / "definitions.json"
        definitions.write_text(
            '[{"ItemSpec": "a.js", "BasePath": "Lib\\ud800", "ContentRoot": "./Lib"}]',
            encoding="utf-8",
        )
        target = tmp_path / "manifest.xml"

        code = main(["generate", "--target", str(target), "--definitions", str(definitions)])

        assert code == 1
        assert not target.exists()

    def test_missing_definitions_file(self, tmp_path, caplog):
        """Test an unreadable definitions file exits 1."""
        with caplog.at_level(logging.ERROR):
            code = main(
                [
                    "generate",
                    "--target",
                    str(tmp_path / "manifest.xml"),
                    "--definitions",
                    str(tmp_path / "missing.json"),
                ]
            )

        assert code == 1
        assert "Cannot load content root definitions" in caplog.text
