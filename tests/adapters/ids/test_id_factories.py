from __future__ import annotations

from adapters.ids.factories import SequentialIdFactory, UuidIdFactory


def test_sequential_ids_count_per_prefix() -> None:
    factory = SequentialIdFactory()

    assert [factory.new_id("v"), factory.new_id("v"), factory.new_id("l")] == ["v_1", "v_2", "l_1"]


def test_sequential_ids_pad_for_lexicographic_order() -> None:
    factory = SequentialIdFactory(width=3)
    ids = [factory.new_id("l") for _ in range(12)]

    assert ids[0] == "l_001"
    assert sorted(ids) == ids


def test_uuid_ids_are_unique_and_prefixed() -> None:
    factory = UuidIdFactory()
    ids = {factory.new_id("v") for _ in range(50)}

    assert len(ids) == 50
    assert all(item.startswith("v_") for item in ids)
