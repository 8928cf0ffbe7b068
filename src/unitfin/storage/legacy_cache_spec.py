import json
from pathlib import Path
from tempfile import TemporaryDirectory

from unitfin.model.finance import CategoryEntry, FinanceType
from unitfin.services.category_registry import CategoryRegistry
from unitfin.storage.category_store import InMemoryCategorySource
from unitfin.storage.legacy_cache import JsonLegacyCache


class DescribeJsonLegacyCache:
    def it_should_return_none_when_file_is_missing(self):
        with TemporaryDirectory() as tmpdir:
            cache = JsonLegacyCache(Path(tmpdir) / "legacy_cache.json")
            assert cache.get("financeCategories:u1") is None
            cache.remove("financeCategories:u1")

    def it_should_read_string_values_only(self):
        with TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "legacy_cache.json"
            path.write_text(
                json.dumps({"financeCategories:u1:income": '["Tithe"]', "count": 3}),
                encoding="utf-8",
            )
            cache = JsonLegacyCache(path)
            assert cache.get("financeCategories:u1:income") == '["Tithe"]'
            assert cache.get("count") is None

    def it_should_remove_key_and_keep_others(self):
        with TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "legacy_cache.json"
            path.write_text(json.dumps({"a": "1", "b": "2"}), encoding="utf-8")
            JsonLegacyCache(path).remove("a")
            assert json.loads(path.read_text(encoding="utf-8")) == {"b": "2"}

    def it_should_treat_unreadable_file_as_empty(self):
        with TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "legacy_cache.json"
            path.write_text("{not json", encoding="utf-8")
            cache = JsonLegacyCache(path)

            assert cache.get("financeCategories:u1:income") is None
            cache.remove("financeCategories:u1:income")
            assert path.read_text(encoding="utf-8") == "{not json"

    def it_should_let_registry_list_categories_over_unreadable_file(self):
        with TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "legacy_cache.json"
            path.write_text("{not json", encoding="utf-8")
            registry = CategoryRegistry(
                InMemoryCategorySource([CategoryEntry(unit_id="u1", type="income", name="Tithe")]),
                legacy_cache=JsonLegacyCache(path),
            )

            assert registry.list_categories("u1", FinanceType.income) == ["Tithe"]
