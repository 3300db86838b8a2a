import json

import pytest

from flappy_cat.storage import JsonScoreStore, MemoryScoreStore


def test_missing_file_reads_zero(tmp_path) -> None:
    store = JsonScoreStore(tmp_path / "best.json")
    assert store.load_best() == 0


def test_save_then_load(tmp_path) -> None:
    path = tmp_path / "nested" / "dir" / "best.json"
    store = JsonScoreStore(path)
    store.save_best(12)
    assert json.loads(path.read_text()) == {"best": 12}
    assert JsonScoreStore(path).load_best() == 12


def test_custom_key(tmp_path) -> None:
    path = tmp_path / "best.json"
    JsonScoreStore(path, key="cat").save_best(4)
    assert JsonScoreStore(path, key="cat").load_best() == 4
    assert JsonScoreStore(path).load_best() == 0


@pytest.mark.parametrize(
    "content",
    [
        "not json",
        "[1, 2]",
        '{"other": 3}',
        '{"best": "abc"}',
        '{"best": null}',
        '{"best": -4}',
        '{"best": true}',
        '{"best": Infinity}',
        '{"best": -Infinity}',
        '{"best": 1e400}',
        '{"best": NaN}',
        '{"best": 2.9}',
    ],
)
def test_malformed_values_read_zero(tmp_path, content: str) -> None:
    path = tmp_path / "best.json"
    path.write_text(content)
    assert JsonScoreStore(path).load_best() == 0


def test_numeric_string_is_accepted(tmp_path) -> None:
    path = tmp_path / "best.json"
    path.write_text('{"best": "7"}')
    assert JsonScoreStore(path).load_best() == 7


def test_write_failure_is_swallowed(tmp_path) -> None:
    # A directory where the file should be makes open() fail
    path = tmp_path / "best.json"
    path.mkdir()
    store = JsonScoreStore(path)
    store.save_best(3)
    assert store.load_best() == 0


def test_memory_store_records_saves() -> None:
    store = MemoryScoreStore(2)
    assert store.load_best() == 2
    store.save_best(5)
    store.save_best(6)
    assert store.load_best() == 6
    assert store.saves == [5, 6]


def test_whole_float_is_accepted(tmp_path) -> None:
    path = tmp_path / "best.json"
    path.write_text('{"best": 8.0}')
    assert JsonScoreStore(path).load_best() == 8
