"""Tests for perch.data.collection: in-memory record container."""

from dataclasses import dataclass

from perch.data.collection import Collection, DataSource, record_value


@dataclass(frozen=True, slots=True)
class Tag:
    id: int
    name: str


class TestRecordValue:
    def test_mapping(self) -> None:
        assert record_value({"name": "x"}, "name") == "x"

    def test_mapping_missing(self) -> None:
        assert record_value({}, "name") is None

    def test_object(self) -> None:
        assert record_value(Tag(id=1, name="py"), "name") == "py"

    def test_object_missing(self) -> None:
        assert record_value(Tag(id=1, name="py"), "color") is None


class TestCollection:
    def test_is_data_source(self) -> None:
        assert isinstance(Collection(), DataSource)

    def test_get_by_int_id_with_string(self) -> None:
        tags = Collection([Tag(id=1, name="py"), Tag(id=2, name="rs")])
        assert tags.get("2") == Tag(id=2, name="rs")

    def test_get_missing(self) -> None:
        assert Collection([Tag(id=1, name="py")]).get("5") is None

    def test_get_none(self) -> None:
        assert Collection([Tag(id=1, name="py")]).get(None) is None

    def test_find_in_insertion_order(self) -> None:
        tags = Collection([Tag(id=1, name="a"), Tag(id=2, name="a")])
        assert tags.find(lambda t: t.name == "a") == Tag(id=1, name="a")

    def test_find_missing(self) -> None:
        assert Collection([Tag(id=1, name="a")]).find(lambda t: t.name == "z") is None

    def test_custom_id_attribute(self) -> None:
        tags = Collection([{"slug": "py"}], id_attribute="slug")
        assert tags.get("py") == {"slug": "py"}

    def test_records_without_id_are_scannable(self) -> None:
        tags = Collection([{"name": "py"}])
        assert tags.get("py") is None
        assert tags.find(lambda t: t["name"] == "py") == {"name": "py"}

    def test_add_iter_len(self) -> None:
        tags: Collection[Tag] = Collection()
        tags.add(Tag(id=1, name="a"))
        tags.add(Tag(id=2, name="b"))
        assert len(tags) == 2
        assert [t.name for t in tags] == ["a", "b"]

    def test_repr(self) -> None:
        assert repr(Collection([{"id": 1}])) == "Collection(1 records)"
