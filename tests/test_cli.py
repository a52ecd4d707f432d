"""
Tests for the schemer CLI -- import, check, colors and config commands

These tests validate:
- Exit codes (0 ok, 1 refused/aborted, 2 unreadable file)
- Import writes the target preference file, partial writes included
- Check never touches a preference file
- Flags override configuration
"""

import pytest

from schemer.cli import SchemerCLI, main
from schemer.commands.import_cmd import ImportCommand
from schemer.core.colors import Color
from tests.factories import RED


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def project(tmp_path):
    path = tmp_path / "project"
    path.mkdir()
    return path


@pytest.fixture
def run(project):
    """Run the CLI against the test project and return the exit code."""
    def _run(*argv):
        return main(["--project", str(project), *argv])
    return _run


@pytest.fixture
def target(tmp_path):
    return tmp_path / "matlab.prf"


# =============================================================================
# Import
# =============================================================================

class TestImport:

    def test_writes_target(self, run, schemer_factory, target, capsys):
        """Successful import saves every colour to the target file."""
        scheme = schemer_factory.write_scheme()

        assert run("import", str(scheme), "--target", str(target)) == 0

        lines = target.read_text().splitlines()
        assert "ColorsText=C-1" in lines
        assert f"Colors_M_Comments=C{Color(128, 128, 128).packed}" in lines

        out = capsys.readouterr().out
        assert "SCHEMER IMPORT" in out
        assert "Imported color scheme WITHOUT boolean options" in out
        assert "[OK] 2 set | 62 derived" in out

    def test_keeps_existing_lines(self, run, schemer_factory, target):
        target.write_text("#MATLAB Preferences\nDesktopFont=SMonospaced\nColorsText=C-65536\n")
        scheme = schemer_factory.write_scheme()

        assert run("import", str(scheme), "--target", str(target)) == 0

        lines = target.read_text().splitlines()
        assert lines[:3] == ["#MATLAB Preferences", "DesktopFont=SMonospaced", "ColorsText=C-1"]

    def test_json_target(self, run, schemer_factory, tmp_path):
        scheme = schemer_factory.write_scheme()
        json_target = tmp_path / "prefs.json"

        assert run("import", str(scheme), "--target", str(json_target)) == 0
        assert '"ColorsText"' in json_target.read_text()

    def test_include_booleans_flag(self, run, schemer_factory, target):
        scheme = schemer_factory.write_scheme(extra={"ColorsUseSystem": "Bfalse"})

        assert run("import", str(scheme), "-t", str(target), "--include-booleans") == 0
        assert "ColorsUseSystem=Bfalse" in target.read_text().splitlines()

    def test_booleans_skipped_without_flag(self, run, schemer_factory, target):
        scheme = schemer_factory.write_scheme(extra={"ColorsUseSystem": "Bfalse"})

        assert run("import", str(scheme), "-t", str(target)) == 0
        assert "ColorsUseSystem" not in target.read_text()

    def test_full_lists_colours(self, run, schemer_factory, target, capsys):
        scheme = schemer_factory.write_scheme()
        run("import", str(scheme), "-t", str(target), "--full")
        out = capsys.readouterr().out
        assert "[*] ColorsText" in out
        assert "[~] Colors_M_Comments" in out

    def test_warnings_shown(self, run, schemer_factory, target, capsys):
        scheme = schemer_factory.write_scheme(extra={"Colors_M_Strings": "Cred"})
        assert run("import", str(scheme), "-t", str(target)) == 0
        out = capsys.readouterr().out
        assert "WARNINGS" in out
        assert "Bad color for Colors_M_Strings: Cred" in out

    def test_no_target(self, run, schemer_factory, capsys):
        scheme = schemer_factory.write_scheme()
        assert run("import", str(scheme)) == 1
        assert "No preference file to import into" in capsys.readouterr().out

    def test_target_from_config(self, run, schemer_factory, target):
        scheme = schemer_factory.write_scheme()
        assert run("config", "--set", f"import.target={target}") == 0
        assert run("import", str(scheme)) == 0
        assert target.exists()

    def test_missing_scheme(self, run, tmp_path, target, capsys):
        assert run("import", str(tmp_path / "nope.prf"), "-t", str(target)) == 2
        assert "SchemeFileError" in capsys.readouterr().out
        assert not target.exists()

    def test_unreadable_json_target(self, run, schemer_factory, tmp_path):
        json_target = tmp_path / "broken.json"
        json_target.write_text("{not json")
        scheme = schemer_factory.write_scheme()
        assert run("import", str(scheme), "-t", str(json_target)) == 2

    def test_json_target_skips_oversized_integer(self, run, schemer_factory, tmp_path, capsys):
        """An integer beyond 32 bits is a warning, and the JSON save still succeeds."""
        scheme = schemer_factory.write_scheme(
            extra={"EditorRightTextLimitLineWidth": "I99999999999999999999"}
        )
        json_target = tmp_path / "prefs.json"

        assert run("import", str(scheme), "--target", str(json_target)) == 0

        saved = json_target.read_text()
        assert '"ColorsText"' in saved
        assert "EditorRightTextLimitLineWidth" not in saved
        assert "Bad integer pref for EditorRightTextLimitLineWidth" in capsys.readouterr().out

    @pytest.mark.parametrize("content", ["[1, 2]", '{"ColorsText": 5}'])
    def test_misshapen_json_target(self, run, schemer_factory, tmp_path, content):
        json_target = tmp_path / "prefs.json"
        json_target.write_text(content)
        scheme = schemer_factory.write_scheme()

        assert run("import", str(scheme), "-t", str(json_target)) == 2
        assert json_target.read_text() == content

    def test_precondition_failure_writes_nothing(self, run, schemer_factory, target, capsys):
        scheme = schemer_factory.write_scheme(background=None)

        assert run("import", str(scheme), "-t", str(target)) == 1

        out = capsys.readouterr().out
        assert "Background colour not present in colorscheme file" in out
        assert "Nothing was written." in out
        assert not target.exists()

    def test_partial_writes_saved(self, run, schemer_factory, target, capsys):
        """Phase 1 writes survive NoColorsFound and reach the file."""
        scheme = schemer_factory.write_scheme(
            text="Cbad", background="Cworse",
            extra={"EditorRightTextLimitLineWidth": "I90"}
        )

        assert run("import", str(scheme), "-t", str(target)) == 1

        assert target.read_text().splitlines() == ["EditorRightTextLimitLineWidth=I90"]
        assert "NoColorsFound" in capsys.readouterr().out


class TestImportCommand:
    """ImportCommand used directly, without argparse."""

    def test_flag_overrides_config(self, project, schemer_factory, target):
        cli = SchemerCLI(project)
        cli.config.imports.include_booleans = True
        scheme = schemer_factory.write_scheme(extra={"ColorsUseSystem": "Btrue"})

        code = ImportCommand(cli).import_scheme(str(scheme), target=str(target),
                                                include_booleans=False)

        assert code == 0
        assert "ColorsUseSystem" not in target.read_text()

    def test_config_applies_when_no_flag(self, project, schemer_factory, target):
        cli = SchemerCLI(project)
        cli.config.imports.include_booleans = True
        scheme = schemer_factory.write_scheme(extra={"ColorsUseSystem": "Btrue"})

        ImportCommand(cli).import_scheme(str(scheme), target=str(target))
        assert "ColorsUseSystem=Btrue" in target.read_text().splitlines()


# =============================================================================
# Check
# =============================================================================

class TestCheck:

    def test_dry_run(self, run, schemer_factory, tmp_path, capsys):
        scheme = schemer_factory.write_scheme()
        before = sorted(p.name for p in tmp_path.iterdir())

        assert run("check", str(scheme)) == 0

        out = capsys.readouterr().out
        assert "SCHEMER CHECK" in out
        assert "Dry run" in out
        assert sorted(p.name for p in tmp_path.iterdir()) == before

    def test_refused(self, run, schemer_factory, capsys):
        scheme = schemer_factory.write_scheme(text="C-1", background="C-1")
        assert run("check", str(scheme)) == 1
        assert "IdenticalTextBackground" in capsys.readouterr().out

    def test_missing_scheme(self, run, tmp_path):
        assert run("check", str(tmp_path / "nope.prf")) == 2

    def test_seed_feeds_fallbacks(self, run, schemer_factory, target, capsys):
        """Seeded values are visible to fallbacks but the seed file is untouched."""
        target.write_text(f"Colors_M_Keywords={RED}\n")
        scheme = schemer_factory.write_scheme()

        assert run("check", str(scheme), "--seed", str(target)) == 0
        assert target.read_text() == f"Colors_M_Keywords={RED}\n"

    def test_misshapen_json_seed(self, run, schemer_factory, tmp_path):
        seed = tmp_path / "seed.json"
        seed.write_text("[1, 2]")
        scheme = schemer_factory.write_scheme()
        assert run("check", str(scheme), "--seed", str(seed)) == 2


# =============================================================================
# Colors
# =============================================================================

class TestColors:

    def test_lists_registry(self, run, capsys):
        assert run("colors") == 0
        out = capsys.readouterr().out
        assert "64 colours in resolution order" in out
        assert "avg(ColorsText, ColorsBackground)" in out
        assert "EditorRightTextLimitLineWidth" in out
        assert "ColorsUseSystem" in out

    def test_current_values(self, run, target, capsys):
        target.write_text("ColorsText=C-1\n")
        assert run("colors", "--target", str(target)) == 0
        out = capsys.readouterr().out
        assert "Current" in out
        assert "# #ffffff" in out

    def test_misshapen_json_target(self, run, tmp_path):
        json_target = tmp_path / "prefs.json"
        json_target.write_text('{"ColorsText": "C-1"}')
        assert run("colors", "--target", str(json_target)) == 2


# =============================================================================
# Config and top level
# =============================================================================

class TestConfig:

    def test_show(self, run, capsys):
        assert run("config") == 0
        out = capsys.readouterr().out
        assert "SCHEMER CONFIG" in out
        assert "Include booleans: no" in out

    def test_set(self, run, project):
        assert run("config", "--set", "import.include_booleans=true") == 0
        assert (project / ".schemer" / "config.yaml").exists()

    def test_set_invalid(self, run, capsys):
        assert run("config", "--set", "display.symbols=emoji") == 1
        assert "Configuration unchanged" in capsys.readouterr().out

    def test_set_without_equals(self, run):
        assert run("config", "--set", "display.symbols") == 1


class TestMain:

    def test_no_command(self, run):
        assert run() == 1

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc:
            main(["--version"])
        assert exc.value.code == 0
        assert "schemer" in capsys.readouterr().out
