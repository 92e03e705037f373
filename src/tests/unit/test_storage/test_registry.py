"""Tests for the in-memory specification registry."""

from swagger_explorer.parser.models import ApiSummary
from swagger_explorer.storage.registry import LoadedAPI, SpecificationRegistry


class TestSpecificationRegistry:
    """Test cases for SpecificationRegistry."""

    def test_empty_registry(self, registry):
        assert registry.get("petstore") is None
        assert list(registry.list()) == []
        assert len(registry) == 0
        assert "petstore" not in registry

    def test_put_then_get(self, registry, minimal_petstore_spec):
        entry = registry.put("petstore", minimal_petstore_spec, source="spec.json")

        assert registry.get("petstore") is entry
        assert entry.document is minimal_petstore_spec
        assert entry.source == "spec.json"
        assert "petstore" in registry

    def test_put_overwrites_existing_entry(
        self, registry, petstore_spec, minimal_petstore_spec
    ):
        """Test that a second put under the same id replaces the first."""
        registry.put("petstore", petstore_spec)
        registry.put("petstore", minimal_petstore_spec)

        assert len(registry) == 1
        assert registry.get("petstore").document is minimal_petstore_spec

    def test_list_keeps_registration_order(
        self, registry, petstore_spec, minimal_petstore_spec
    ):
        registry.put("full", petstore_spec)
        registry.put("minimal", minimal_petstore_spec)

        summaries = list(registry.list())

        assert [s.id for s in summaries] == ["full", "minimal"]
        assert registry.ids() == ["full", "minimal"]
        assert summaries[0] == ApiSummary(
            id="full",
            title="Swagger Petstore",
            version="1.0.17",
            description="A sample pet store server",
            path_count=4,
        )

    def test_list_is_lazy(self, registry, minimal_petstore_spec):
        summaries = registry.list()
        registry.put("late", minimal_petstore_spec)

        assert [s.id for s in summaries] == ["late"]


class TestLoadedAPI:
    """Test derived properties of a registry entry."""

    def test_counts(self, petstore_spec):
        api = LoadedAPI(id="petstore", document=petstore_spec)

        assert api.path_count == 4
        assert api.endpoint_count == 6

    def test_title_falls_back_to_id(self):
        api = LoadedAPI(id="untitled", document={"openapi": "3.0.0"})

        assert api.title == "untitled"
        assert api.version is None
        assert api.description is None
        assert api.path_count == 0

    def test_numeric_version_from_yaml(self):
        api = LoadedAPI(
            id="v", document={"openapi": "3.0.0", "info": {"version": 1.0}}
        )

        assert api.version == "1.0"

    def test_summary_dict_uses_path_count_key(self, minimal_petstore_spec):
        api = LoadedAPI(id="petstore", document=minimal_petstore_spec)

        assert api.to_summary().to_dict() == {
            "id": "petstore",
            "title": "Petstore",
            "version": "1.0.0",
            "pathCount": 1,
        }
