"""
Tests for the line parser and precondition scan

These tests validate:
- Blank, comment and malformed lines are skipped silently
- Values are trimmed and stop at '#'
- The parser is lazy
- Text/background declarations: missing, duplicated, identical
"""

import types

import pytest

from schemer.core.errors import (
    MissingColorKey,
    DuplicateColorKey,
    IdenticalTextBackground,
    SchemeFileError,
)
from schemer.core.lines import (
    RawEntry,
    check_preconditions,
    find_declarations,
    iter_entries,
    parse_line,
    read_scheme,
)


class TestParseLine:

    @pytest.mark.parametrize("line", [
        "",
        "# ColorsText=C-1",
        "#",
        "no equals sign here",
        "=C-1",
        "Name=",
        "Name=# only a comment",
        "Name#x=C-1",
    ])
    def test_skipped(self, line):
        assert parse_line(line) is None

    def test_simple_entry(self):
        entry = parse_line("ColorsText=C-1", 4)
        assert entry == RawEntry("ColorsText", "C-1", 4)

    def test_value_trimmed_and_comment_cut(self):
        entry = parse_line("ColorsText=  C-1   # white")
        assert entry.value == "C-1"

    def test_name_taken_verbatim(self):
        """Whitespace around the name is kept, so it won't match a registry name."""
        entry = parse_line("  ColorsText=C-1")
        assert entry.name == "  ColorsText"

    def test_newline_stripped(self):
        assert parse_line("ColorsText=C-1\r\n").value == "C-1"

    def test_value_keeps_later_equals(self):
        assert parse_line("Key=a=b").value == "a=b"


class TestIterEntries:

    def test_filters_and_numbers_lines(self):
        lines = [
            "# header",
            "",
            "ColorsText=C-1",
            "garbage",
            "ColorsBackground=C-16777216 # black",
        ]
        entries = list(iter_entries(lines))
        assert entries == [
            RawEntry("ColorsText", "C-1", 3),
            RawEntry("ColorsBackground", "C-16777216", 5),
        ]

    def test_is_lazy(self):
        """Nothing is consumed until iteration starts."""
        consumed = []

        def lines():
            for line in ["A=1", "B=2"]:
                consumed.append(line)
                yield line

        entries = iter_entries(lines())
        assert isinstance(entries, types.GeneratorType)
        assert consumed == []
        next(entries)
        assert consumed == ["A=1"]


class TestPreconditions:

    def test_returns_tokens(self):
        text = "ColorsText=C-1\nColorsBackground=C-16777216\n"
        assert check_preconditions(text) == ("C-1", "C-16777216")

    def test_declaration_at_end_of_text(self):
        text = "ColorsBackground=C-16777216\nColorsText=C-1"
        assert check_preconditions(text) == ("C-1", "C-16777216")

    def test_missing_text(self):
        with pytest.raises(MissingColorKey) as exc:
            check_preconditions("ColorsBackground=C-16777216\n", source="x.prf")
        assert exc.value.key == "ColorsText"
        assert "x.prf" in str(exc.value)

    def test_missing_background(self):
        with pytest.raises(MissingColorKey) as exc:
            check_preconditions("ColorsText=C-1\n")
        assert exc.value.key == "ColorsBackground"

    def test_duplicate_text(self):
        text = "ColorsText=C-1\nColorsText=C-2\nColorsBackground=C-16777216\n"
        with pytest.raises(DuplicateColorKey) as exc:
            check_preconditions(text)
        assert exc.value.key == "ColorsText"
        assert exc.value.count == 2

    def test_identical_values(self):
        text = "ColorsText=C-1\nColorsBackground=C-1\n"
        with pytest.raises(IdenticalTextBackground):
            check_preconditions(text)

    def test_compared_as_strings(self):
        """C-1 and c-1 decode alike but are different strings."""
        text = "ColorsText=C-1\nColorsBackground=c-1\n"
        assert check_preconditions(text) == ("C-1", "c-1")

    def test_longer_names_do_not_count(self):
        text = "XColorsText=C-5\nColorsText=C-1\nColorsBackground=C-16777216\n"
        assert find_declarations(text, "ColorsText") == ["C-1"]

    def test_token_running_into_comment_does_not_count(self):
        text = "ColorsText=C-1#white\nColorsBackground=C-16777216\n"
        with pytest.raises(MissingColorKey):
            check_preconditions(text)

    def test_commented_declaration_counts(self):
        """The scan runs on raw text, so '# ColorsText=..' is a declaration."""
        text = "# ColorsText=C-1\n# ColorsBackground=C-16777216\n"
        assert check_preconditions(text) == ("C-1", "C-16777216")


class TestReadScheme:

    def test_missing_file(self, tmp_path):
        with pytest.raises(SchemeFileError):
            read_scheme(tmp_path / "nope.prf")

    def test_reads_text(self, tmp_path):
        path = tmp_path / "s.prf"
        path.write_text("ColorsText=C-1\n")
        assert read_scheme(path) == "ColorsText=C-1\n"
