"""Tests for the option registry and option kinds."""

import pytest

from sitepkg.core.config.registry import OptionRegistry
from sitepkg.core.exceptions import (
    NoSuchOptionError,
    OptionParseError,
    TypeMismatchError,
)
from sitepkg.core.types import (
    SOURCE_COMMAND_LINE,
    SOURCE_DEFAULT,
    UINT_MAX,
    OptionKind,
    file_source,
    parse_bool,
)


class TestDeclaration:
    """Test declaring options."""

    def test_default_value_and_source(self, registry):
        """Freshly declared options hold their default with "default" provenance."""
        assert registry.get("name", "string") == "anon"
        assert registry.get("retries", "int") == 3
        assert registry.get("timeout", "uint") == 30
        assert registry.get("verbose", "bool") is False
        for option in registry.list_options():
            assert option.source == SOURCE_DEFAULT

    def test_names_are_case_insensitive(self):
        """Names are stored lowercase and looked up in any case."""
        registry = OptionRegistry()
        registry.declare_bool("ShowConfig", None, False, False, "Show config")

        assert registry.names() == ["showconfig"]
        assert registry.get_bool("SHOWCONFIG") is False
        assert "showConfig" in registry

    def test_redeclare_overwrites(self, registry):
        """Declaring an existing name replaces the earlier option, kind included."""
        registry.declare_string("retries", None, False, "many", "now a string")

        assert registry.get_string("retries") == "many"
        with pytest.raises(TypeMismatchError):
            registry.get_int("retries")
        assert len(registry) == 5

    def test_declare_with_kind_names(self):
        """Kinds may be given by their long names."""
        registry = OptionRegistry()
        registry.declare_option("retries", "integer", "r", True, 3, "retry count")
        registry.declare_option("size", "unsigned-integer", None, True, 0, "size")
        registry.declare_option("dry", "boolean", None, True, True, "dry run")

        assert registry.get_option("retries").kind is OptionKind.INT
        assert registry.get_option("size").kind is OptionKind.UINT
        assert registry.get_option("dry").kind is OptionKind.BOOL

    def test_default_of_wrong_type(self):
        """A default that does not match the kind is refused."""
        registry = OptionRegistry()
        with pytest.raises(TypeMismatchError):
            registry.declare_int("retries", None, True, "3", "retry count")
        with pytest.raises(TypeMismatchError):
            registry.declare_int("retries", None, True, True, "bool is not an int")

    def test_kind_is_immutable(self, registry):
        """An option's kind cannot be reassigned."""
        option = registry.get_option("retries")
        with pytest.raises(AttributeError):
            option.kind = OptionKind.STRING


class TestAccess:
    """Test typed getters and setters."""

    def test_no_such_option(self, registry):
        with pytest.raises(NoSuchOptionError, match='No such option "missing"'):
            registry.get("missing", OptionKind.STRING)
        with pytest.raises(NoSuchOptionError):
            registry.set_option_from_text("missing", "1", SOURCE_DEFAULT)

    def test_type_mismatch(self, registry):
        with pytest.raises(TypeMismatchError) as exc_info:
            registry.get_bool("retries")
        assert exc_info.value.declared == "int"
        assert exc_info.value.requested == "bool"

    def test_set_from_text_records_source(self, registry):
        registry.set_option_from_text("retries", "9", file_source("/etc/opt/x/x.conf"))

        option = registry.get_option("retries")
        assert option.value == 9
        assert option.source == "file:/etc/opt/x/x.conf"

    def test_set_from_text_string_kept_verbatim(self, registry):
        registry.set_option_from_text("name", "  spaced #1  ", SOURCE_COMMAND_LINE)
        assert registry.get_string("name") == "  spaced #1  "

    def test_parse_error_mentions_value_and_option(self, registry):
        with pytest.raises(OptionParseError) as exc_info:
            registry.set_option_from_text("retries", "lots", file_source("/tmp/a.conf"))

        message = str(exc_info.value)
        assert '"lots"' in message
        assert '"retries"' in message
        assert "/tmp/a.conf" in message
        # The failed parse leaves the option untouched.
        assert registry.get_option("retries").source == SOURCE_DEFAULT

    @pytest.mark.parametrize("text", ["-1", "1.5", "", "0x10", str(UINT_MAX + 1)])
    def test_uint_rejects(self, registry, text):
        with pytest.raises(OptionParseError):
            registry.set_option_from_text("timeout", text, SOURCE_DEFAULT)

    def test_int_accepts_sign(self, registry):
        registry.set_option_from_text("retries", "-4", SOURCE_DEFAULT)
        assert registry.get_int("retries") == -4

    def test_set_option_checks_kind(self, registry):
        registry.set_option("verbose", True, SOURCE_COMMAND_LINE)
        assert registry.get_bool("verbose") is True
        with pytest.raises(TypeMismatchError):
            registry.set_option("verbose", "yes", SOURCE_COMMAND_LINE)

    def test_list_options_sorted(self, registry):
        names = [o.name for o in registry.list_options()]
        assert names == sorted(names)
        assert [o.name for o in registry] == names


class TestBooleanParsing:
    """Test boolean text parsing."""

    @pytest.mark.parametrize("text", ["Yes", "TRUE", "1", "t", "true", "yes"])
    def test_true_values(self, text):
        assert parse_bool(text) is True

    @pytest.mark.parametrize("text", ["no", "0", "False", "f", "F", "NO"])
    def test_false_values(self, text):
        assert parse_bool(text) is False

    @pytest.mark.parametrize("text", ["maybe", "", "on", "yes please"])
    def test_invalid_values(self, text):
        with pytest.raises(ValueError):
            parse_bool(text)

    def test_registry_bool_parse_error(self, registry):
        with pytest.raises(OptionParseError):
            registry.set_option_from_text("verbose", "maybe", SOURCE_DEFAULT)

    def test_registry_false_string_is_false(self, registry):
        registry.set_option("verbose", True, SOURCE_DEFAULT)
        registry.set_option_from_text("verbose", "False", file_source("/tmp/a.conf"))
        assert registry.get_bool("verbose") is False
