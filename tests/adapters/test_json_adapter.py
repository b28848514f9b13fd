"""Tests for the JSON adapter, including the three-layer config scenario."""

import pytest as _pytest

import postfix_bundle.adapters as adapters
import postfix_bundle.engine as engine
import postfix_bundle.errors as errors


class TestJsonAdapter:
    """Tests for JsonAdapter parsing and capability."""

    def test_capability_is_full_merge(self) -> None:
        adapter = adapters.JsonAdapter()

        assert adapter.capability is adapters.MergeCapability.FULL_MERGE
        assert adapter.supports_merge is True

    def test_parse(self) -> None:
        assert adapters.JsonAdapter().parse('{"a": [1, null, true]}') == {"a": [1, None, True]}

    def test_ingest_reports_postfix_and_origin(self) -> None:
        with _pytest.raises(errors.SourceParseError) as exc_info:
            adapters.JsonAdapter().ingest("dev", "{broken", "config-dev.json")

        assert exc_info.value.postfix == "dev"
        assert "config-dev.json" in str(exc_info.value)
        assert "invalid JSON" in str(exc_info.value)

    def test_extensions(self) -> None:
        adapter = adapters.JsonAdapter()

        assert adapter.supports_extension("json")
        assert adapter.supports_extension(".JSON")
        assert not adapter.supports_extension("yaml")


class TestConfigScenario:
    """config.json + config-test.json + config-dev.json with priorities [test, dev]."""

    def _bundle(self, template: str) -> engine.Bundle:
        bundle = engine.Bundle.from_filesystem(template, adapters.JsonAdapter(), separator="-")
        bundle.set_postfix_priorities(["test", "dev"])
        return bundle

    def test_discovers_all_layers(self, config_template: str) -> None:
        bundle = self._bundle(config_template)

        assert bundle.postfixes == ("", "dev", "test")

    def test_scalar_from_highest_priority(self, config_template: str) -> None:
        bundle = self._bundle(config_template)

        assert bundle.read("name") == "test"

    def test_scalar_falls_through_to_next_layer(self, config_template: str) -> None:
        bundle = self._bundle(config_template)

        assert bundle.read("description") == "Development overrides"

    def test_string_lists_merge_all_layers(self, config_template: str) -> None:
        bundle = self._bundle(config_template)

        strings = bundle.read_list("strings", str)

        assert strings == ["a", "b", "c", "dev", "test"]

    def test_nested_object_merges_all_layers(self, config_template: str) -> None:
        bundle = self._bundle(config_template)

        assert bundle.read("database") == {"host": "localhost", "port": 15432, "debug": True}

    def test_explicit_postfix_outside_chain(self, config_template: str) -> None:
        bundle = engine.Bundle.from_filesystem(
            config_template, adapters.JsonAdapter(), separator="-"
        )

        assert bundle.read("name", postfix="dev") == "dev"
        assert bundle.read_list("strings", str, postfix="dev") == ["a", "b", "c", "dev"]
