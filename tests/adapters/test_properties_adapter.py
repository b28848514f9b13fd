"""Tests for the .properties adapter."""

import pytest as _pytest

import postfix_bundle.adapters as adapters
import postfix_bundle.adapters.properties_adapter as properties_adapter
import postfix_bundle.convert as convert
import postfix_bundle.engine as engine
import postfix_bundle.errors as errors

parse = properties_adapter.parse_properties


class TestParseProperties:
    """Tests for parse_properties()."""

    def test_separators(self) -> None:
        result = parse("a=1\nb: 2\nc 3\nd = 4\n")

        assert result == {"a": "1", "b": "2", "c": "3", "d": "4"}

    def test_comments_and_blank_lines_skipped(self) -> None:
        result = parse("# comment\n! also comment\n\n   \nkey=value\n")

        assert result == {"key": "value"}

    def test_dotted_keys_stay_flat(self) -> None:
        result = parse("robot.greeting=Pip piip\n")

        assert result == {"robot.greeting": "Pip piip"}

    def test_line_continuation(self) -> None:
        result = parse("message=Hello \\\n    world\n")

        assert result == {"message": "Hello world"}

    def test_escaped_backslash_is_not_continuation(self) -> None:
        result = parse("path=C:\\\\\nnext=1\n")

        assert result == {"path": "C:\\", "next": "1"}

    def test_escapes(self) -> None:
        result = parse("tab=a\\tb\nnewline=a\\nb\nunicode=\\u0041hoj\n")

        assert result == {"tab": "a\tb", "newline": "a\nb", "unicode": "Ahoj"}

    def test_escaped_separator_in_key(self) -> None:
        result = parse("key\\=with\\:sep=value\n")

        assert result == {"key=with:sep": "value"}

    def test_value_keeps_inner_whitespace_and_separators(self) -> None:
        result = parse("url = http://host:8080/a=b\n")

        assert result == {"url": "http://host:8080/a=b"}

    def test_key_without_value(self) -> None:
        assert parse("empty\n") == {"empty": ""}

    def test_later_duplicate_wins(self) -> None:
        assert parse("a=1\na=2\n") == {"a": "2"}

    def test_malformed_unicode_escape(self) -> None:
        with _pytest.raises(ValueError, match="line 2"):
            parse("ok=1\nbad=\\u12G4\n")


class TestPropertiesAdapter:
    """Tests for PropertiesAdapter capability and conversion."""

    def test_capability_is_first_match(self) -> None:
        adapter = adapters.PropertiesAdapter()

        assert adapter.capability is adapters.MergeCapability.FIRST_MATCH
        assert adapter.supports_merge is False

    def test_supports_extension(self) -> None:
        adapter = adapters.PropertiesAdapter()

        assert adapter.supports_extension("properties")
        assert adapter.supports_extension(".PROPERTIES")
        assert not adapter.supports_extension("json")

    def test_ingest_wraps_parse_errors(self) -> None:
        adapter = adapters.PropertiesAdapter()

        with _pytest.raises(errors.SourceParseError) as exc_info:
            adapter.ingest("cs", "bad=\\uZZZZ", "lang_cs.properties")

        assert exc_info.value.origin == "lang_cs.properties"
        assert "lang_cs.properties" in str(exc_info.value)

    def test_merge_is_rejected(self) -> None:
        adapter = adapters.PropertiesAdapter()
        registry = engine.SourceRegistry.from_sources([adapter.ingest("", "a=1")])

        with _pytest.raises(errors.UnsupportedOperationError):
            adapter.merge(registry, ("",), "a")


class TestPropertiesBundle:
    """Properties documents loaded from disk through a Bundle."""

    def _bundle(self, template: str) -> engine.Bundle:
        return engine.Bundle.from_filesystem(template, adapters.PropertiesAdapter())

    def test_overlay_and_fallback(self, properties_template: str) -> None:
        bundle = self._bundle(properties_template)

        assert bundle.read("greeting", postfix="cs") == "Ahoj"
        assert bundle.read("goodbye", postfix="cs") == "Goodbye"
        assert bundle.read("missing", postfix="cs") is None

    def test_flat_dotted_key(self, properties_template: str) -> None:
        bundle = self._bundle(properties_template)

        assert bundle.read("robot.greeting") == "Pip piip"

    def test_scalar_shapes_parse_text(self, properties_template: str) -> None:
        bundle = self._bundle(properties_template)

        assert bundle.read("answer", int) == 42
        assert bundle.read("answer", float) == 42.0
        assert bundle.read("enabled", bool) is True
        assert bundle.read("answer", str) == "42"

    def test_char_shape(self, properties_template: str) -> None:
        bundle = self._bundle(properties_template)

        with _pytest.raises(errors.TypeMismatchError):
            bundle.read("greeting", convert.Char)

    def test_unparsable_number(self, properties_template: str) -> None:
        bundle = self._bundle(properties_template)

        with _pytest.raises(errors.TypeMismatchError):
            bundle.read("greeting", int)

    def test_structured_shape_is_type_mismatch(self, properties_template: str) -> None:
        bundle = self._bundle(properties_template)

        with _pytest.raises(errors.TypeMismatchError):
            bundle.read("greeting", dict)
        with _pytest.raises(errors.TypeMismatchError):
            bundle.read("greeting", list[str])

    def test_read_list_is_none(self, properties_template: str) -> None:
        bundle = self._bundle(properties_template)

        assert bundle.read_list("greeting") is None

    def test_first_match_does_not_blend(self, properties_template: str) -> None:
        bundle = self._bundle(properties_template)
        bundle.set_postfix_priorities(["cs"])

        assert bundle.read("greeting") == "Ahoj"
        assert bundle.read("greeting", postfix="") == "Ahoj"
