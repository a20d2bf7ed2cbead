"""Tests for IdentityMap (temporary id resolution)."""

from app.components.sync import IdentityMap


class TestIdentityMap:
    def test_durable_ids_pass_through(self):
        identities = IdentityMap()
        assert identities.resolve("item_abc") == "item_abc"
        assert identities.resolve_target("item_abc") == "item_abc"

    def test_mapped_temp_id_resolves(self):
        identities = IdentityMap()
        identities.register("temp-1", "item_1")

        assert identities.resolve("temp-1") == "item_1"
        assert identities.resolve_target("temp-1") == "item_1"
        assert identities.as_dict() == {"temp-1": "item_1"}

    def test_unmapped_temp_parent_resolves_to_root(self):
        assert IdentityMap().resolve("temp-missing") is None

    def test_unmapped_temp_target_is_unresolved(self):
        assert IdentityMap().resolve_target("temp-missing") is None

    def test_empty_reference(self):
        identities = IdentityMap()
        assert identities.resolve(None) is None
        assert identities.resolve("") is None

    def test_custom_prefix(self):
        identities = IdentityMap(temp_prefix="local:")
        assert identities.is_temporary("local:1")
        assert not identities.is_temporary("temp-1")
        assert identities.resolve("temp-1") == "temp-1"

    def test_as_dict_is_a_copy(self):
        identities = IdentityMap()
        identities.register("temp-1", "item_1")

        snapshot = identities.as_dict()
        snapshot["temp-2"] = "item_2"

        assert identities.as_dict() == {"temp-1": "item_1"}
