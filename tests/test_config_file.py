"""Tests for the configuration file reader."""

import pytest

from sitepkg.core.config.config_file import ConfigFileReader, read_config_file
from sitepkg.core.exceptions import (
    ConfigFileError,
    ConfigIOError,
    MalformedConfigError,
    OptionNotFileAllowedError,
    OptionParseError,
    UnknownOptionError,
)
from sitepkg.core.types import SOURCE_DEFAULT

from . import create_test_file

PATHS = ["prog", "prog:sub"]


def read(registry, temp_dir, content, paths=PATHS, name="prog.conf"):
    path = create_test_file(temp_dir, name, content)
    read_config_file(registry, path, paths)
    return path


class TestAssignments:
    """Test plain key = value lines."""

    def test_basic_assignment(self, registry, temp_dir):
        path = read(registry, temp_dir, "retries = 9\nname=bob\n")

        assert registry.get_int("retries") == 9
        assert registry.get_string("name") == "bob"
        assert registry.get_option("retries").source == f"file:{path}"

    def test_comments_and_blank_lines(self, registry, temp_dir):
        read(registry, temp_dir, "# a comment\n\n   \n\t# indented comment\nretries = 2\n")
        assert registry.get_int("retries") == 2

    def test_trailing_comment_removed(self, registry, temp_dir):
        read(registry, temp_dir, "name = value  # comment\n")
        assert registry.get_string("name") == "value"

    def test_hash_without_whitespace_is_kept(self, registry, temp_dir):
        read(registry, temp_dir, "name = color#ff0000\n")
        assert registry.get_string("name") == "color#ff0000"

    def test_tab_before_comment(self, registry, temp_dir):
        read(registry, temp_dir, "name = value\t# comment\n")
        assert registry.get_string("name") == "value"

    def test_name_case_and_whitespace(self, registry, temp_dir):
        read(registry, temp_dir, "  RETRIES\t =   5\n")
        assert registry.get_int("retries") == 5

    def test_first_equals_splits(self, registry, temp_dir):
        read(registry, temp_dir, "name = a=b=c\n")
        assert registry.get_string("name") == "a=b=c"

    def test_trailing_whitespace_in_value_preserved(self, registry, temp_dir):
        read(registry, temp_dir, "name = padded   \n")
        assert registry.get_string("name") == "padded   "

    def test_bool_values(self, registry, temp_dir):
        read(registry, temp_dir, "verbose = Yes\n")
        assert registry.get_bool("verbose") is True
        read(registry, temp_dir, "verbose = no\n")
        assert registry.get_bool("verbose") is False

    def test_crlf_line_endings(self, registry, temp_dir):
        path = temp_dir / "crlf.conf"
        path.write_bytes(b"retries = 4\r\nname = x\r\n")
        read_config_file(registry, path, PATHS)
        assert registry.get_int("retries") == 4
        assert registry.get_string("name") == "x"


class TestSections:
    """Test command-path scoped sections."""

    def test_matching_sections_apply(self, registry, temp_dir):
        read(registry, temp_dir, "[prog]\nretries = 9\n[prog:sub]\nname = sub\n")
        assert registry.get_int("retries") == 9
        assert registry.get_string("name") == "sub"

    def test_other_sections_ignored(self, registry, temp_dir):
        read(registry, temp_dir, "[prog]\nretries = 9\n[other]\nretries = 100\nname = other\n")

        assert registry.get_int("retries") == 9
        assert registry.get_string("name") == "anon"

    def test_ignored_sections_are_not_validated(self, registry, temp_dir):
        read(registry, temp_dir, "[other]\nno equals sign here\nunknown = 1\nforce = yes\n")
        assert registry.get_int("retries") == 3

    def test_section_reactivates(self, registry, temp_dir):
        read(registry, temp_dir, "[other]\nretries = 100\n[prog:sub]\nretries = 7\n")
        assert registry.get_int("retries") == 7

    def test_deeper_section_not_in_path(self, registry, temp_dir):
        read(registry, temp_dir, "[prog:sub:deeper]\nretries = 100\n")
        assert registry.get_int("retries") == 3

    def test_section_header_with_comment(self, registry, temp_dir):
        read(registry, temp_dir, "[prog]   # program defaults\nretries = 6\n")
        assert registry.get_int("retries") == 6

    def test_empty_section_name(self, registry, temp_dir):
        with pytest.raises(MalformedConfigError) as exc_info:
            read(registry, temp_dir, "retries = 1\n\n[]\nretries = 2\n")
        assert exc_info.value.line_no == 3
        assert "line 3" in str(exc_info.value)


class TestErrors:
    """Test that broken files abort the read."""

    def test_missing_equals(self, registry, temp_dir):
        with pytest.raises(MalformedConfigError) as exc_info:
            read(registry, temp_dir, "retries = 5\njust words\nname = later\n")

        error = exc_info.value
        assert error.line_no == 2
        assert str(error.path).endswith("prog.conf")
        # Lines before the error stay applied; nothing after it is.
        assert registry.get_int("retries") == 5
        assert registry.get_string("name") == "anon"

    def test_unknown_option(self, registry, temp_dir):
        with pytest.raises(UnknownOptionError, match='Unknown option "colour"'):
            read(registry, temp_dir, "colour = blue\nretries = 5\n")
        assert registry.get_int("retries") == 3

    def test_option_not_allowed_in_file(self, registry, temp_dir):
        with pytest.raises(OptionNotFileAllowedError, match='Illegal option "force"'):
            read(registry, temp_dir, "force = yes\n")
        assert registry.get_option("force").source == SOURCE_DEFAULT

    def test_file_errors_share_a_base(self, registry, temp_dir):
        with pytest.raises(ConfigFileError):
            read(registry, temp_dir, "colour = blue\n")

    def test_bad_value(self, registry, temp_dir):
        with pytest.raises(OptionParseError) as exc_info:
            read(registry, temp_dir, "retries = lots\n")
        assert "prog.conf" in str(exc_info.value)

    def test_trailing_space_breaks_int(self, registry, temp_dir):
        with pytest.raises(OptionParseError):
            read(registry, temp_dir, "retries = 5 \n")

    def test_cannot_open(self, registry, temp_dir):
        with pytest.raises(ConfigIOError, match="opening"):
            read_config_file(registry, temp_dir / "missing.conf", PATHS)

    def test_directory_is_io_error(self, registry, temp_dir):
        (temp_dir / "dir.conf").mkdir()
        with pytest.raises(ConfigIOError):
            read_config_file(registry, temp_dir / "dir.conf", PATHS)

    def test_undecodable_file(self, registry, temp_dir):
        path = temp_dir / "binary.conf"
        path.write_bytes(b"name = \xff\xfe\n")
        with pytest.raises(ConfigIOError, match="reading"):
            read_config_file(registry, path, PATHS)


def test_apply_lines_without_a_file(registry):
    """Lines can be applied from any iterable, e.g. an embedded default config."""
    reader = ConfigFileReader(registry, ["prog"])
    reader.apply_lines(["[prog]\n", "retries = 11\n"], "<builtin>")

    assert registry.get_int("retries") == 11
    assert registry.get_option("retries").source == "file:<builtin>"
