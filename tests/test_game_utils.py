from gamevault.utils.game_utils import clean_ids, reorder_by_ids


def test_clean_ids_dedupes_and_keeps_order():
    assert clean_ids([3, 1, 3, 2, 1]) == [3, 1, 2]


def test_clean_ids_drops_non_positive_and_non_finite():
    assert clean_ids([0, -5, float("nan"), float("inf"), 2.5, True, None, "abc", 7]) == [7]


def test_clean_ids_accepts_integral_floats_and_numeric_strings():
    assert clean_ids([4.0, "9", " 11 "]) == [4, 9, 11]


def test_clean_ids_handles_empty_input():
    assert clean_ids([]) == []
    assert clean_ids(None) == []


def test_reorder_by_ids_restores_requested_order():
    records = [{"id": 10, "name": "a"}, {"id": 20, "name": "b"}, {"id": 30, "name": "c"}]
    assert [r["id"] for r in reorder_by_ids(records, [30, 10, 20])] == [30, 10, 20]


def test_reorder_by_ids_skips_missing_records():
    records = [{"id": 10}, {"id": 30}]
    assert [r["id"] for r in reorder_by_ids(records, [30, 20, 10])] == [30, 10]
