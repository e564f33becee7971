"""
Tests for the in-memory catalog store.
"""

import json

import pytest
from pydantic import ValidationError

from storefront.catalog import Catalog
from storefront.schemas.catalog import MenuItem


class TestReadAccessors:

    def test_demo_catalog_loaded(self, catalog):
        status = catalog.get_status()
        assert status["items"] == 7
        assert status["option_groups"] == 6
        assert status["outlets"] == 1

    def test_visible_items_skip_hidden(self, catalog):
        item = catalog.get_item("mineral-water")
        catalog.upsert_item(item.model_copy(update={"is_hidden": True}))
        assert "mineral-water" not in [i.id for i in catalog.visible_items()]

    def test_visible_items_by_outlet(self, catalog):
        item = catalog.get_item("loaded-fries")
        catalog.upsert_item(item.model_copy(update={"availability_outlets": ["outlet-2"]}))
        assert "loaded-fries" in [i.id for i in catalog.visible_items()]
        assert "loaded-fries" not in [i.id for i in catalog.visible_items("outlet-1")]
        assert "loaded-fries" in [i.id for i in catalog.visible_items("outlet-2")]

    def test_linked_groups_skip_missing(self, catalog):
        item = catalog.get_item("classic-burger").model_copy(
            update={"linked_option_group_ids": ["og-size", "og-gone"]},
        )
        assert [g.id for g in catalog.linked_groups(item)] == ["og-size"]

    def test_customization_groups(self, catalog):
        item = catalog.get_item("classic-burger")
        assert [g.id for g in catalog.customization_groups(item)] == ["og-ingredients"]

    def test_find_flow_group(self, catalog):
        assert catalog.find_flow_group("Signature Burgers").id == "fg-signature"
        assert catalog.find_flow_group("Burgers") is None

    def test_variations_for(self, catalog):
        item = catalog.get_item("sig-double-beef")
        assert [i.id for i in catalog.variations_for(item)] == ["sig-smoky-beef", "sig-pork-belly"]
        assert [i.id for i in catalog.variations_for(item, "Pork")] == ["sig-pork-belly"]


class TestMutations:
    """Tests for back office edits."""

    def test_new_item_listed_first(self, catalog):
        catalog.upsert_item(MenuItem(id="new", name="New", price=1.0))
        assert catalog.items()[0].id == "new"

    def test_upsert_replaces_in_place(self, catalog):
        ids = [i.id for i in catalog.items()]
        item = catalog.get_item("chicken-burger")
        catalog.upsert_item(item.model_copy(update={"price": 14.0}))
        assert [i.id for i in catalog.items()] == ids
        assert catalog.get_item("chicken-burger").price == 14.0

    def test_duplicate_item_placed_after_source(self, catalog):
        copy = catalog.duplicate_item("classic-burger")
        ids = [i.id for i in catalog.items()]
        assert ids[ids.index("classic-burger") + 1] == copy.id
        assert copy.name == "Classic Burger (Copy)"
        assert copy.linked_option_group_ids == catalog.get_item("classic-burger").linked_option_group_ids

    def test_duplicate_unknown_item(self, catalog):
        assert catalog.duplicate_item("nope") is None

    def test_move_within_category(self, catalog):
        assert catalog.move_item("sig-smoky-beef", "up")
        signature = [i.id for i in catalog.items() if i.category == "Signature Burgers"]
        assert signature == ["sig-smoky-beef", "sig-double-beef", "sig-pork-belly"]

    def test_move_past_edge(self, catalog):
        assert not catalog.move_item("sig-double-beef", "up")
        assert not catalog.move_item("mineral-water", "down")

    def test_delete_item(self, catalog):
        assert catalog.delete_item("mineral-water")
        assert catalog.get_item("mineral-water") is None
        assert not catalog.delete_item("mineral-water")

    def test_delete_option_group_unlinks_it(self, catalog):
        assert catalog.delete_option_group("og-side")
        assert catalog.get_option_group("og-side") is None
        for item in catalog.items():
            assert "og-side" not in item.linked_option_group_ids

    def test_duplicate_option_group(self, catalog):
        copy = catalog.duplicate_option_group("og-extras")
        assert copy.id != "og-extras"
        assert copy.name == "Extras (Copy)"
        assert catalog.get_option_group(copy.id).options == catalog.get_option_group("og-extras").options


class TestBackup:
    """Tests for JSON backup export and import."""

    def test_export_uses_camel_case(self, catalog):
        data = catalog.export_backup().model_dump(by_alias=True)
        assert set(data) == {"menuItems", "config", "outlets"}
        assert "linkedOptionGroupIds" in data["menuItems"][0]
        assert "isComboTrigger" in data["config"]["optionGroups"][1]["options"][1]

    def test_round_trip_through_json(self, catalog):
        payload = json.loads(catalog.export_backup().model_dump_json(by_alias=True))
        restored = Catalog()
        restored.import_backup(payload)
        assert restored.export_backup() == catalog.export_backup()

    def test_invalid_backup_leaves_catalog_untouched(self, catalog):
        with pytest.raises(ValidationError):
            catalog.import_backup({"menuItems": [{"id": "x"}]})
        assert catalog.get_status()["items"] == 7

    def test_load_from_file(self, catalog, tmp_path):
        path = tmp_path / "backup.json"
        path.write_text(catalog.export_backup().model_dump_json(by_alias=True), encoding="utf-8")
        loaded = Catalog()
        loaded.load_from_file(path)
        assert loaded.get_item("classic-burger").combo_price == 20.0
