import json
import logging

from falling_block_rl.game import InMemoryHighScoreStore, JsonHighScoreStore
from falling_block_rl.game.storage import parse_high_score


def test_parse_high_score():
    assert parse_high_score(42) == 42
    assert parse_high_score("1300") == 1300
    assert parse_high_score(" 7 ") == 7
    assert parse_high_score("abc") is None
    assert parse_high_score("12.5") is None
    assert parse_high_score(-1) is None
    assert parse_high_score(True) is None
    assert parse_high_score(None) is None
    assert parse_high_score([1]) is None


def test_parse_whole_number_floats():
    assert parse_high_score(1300.0) == 1300
    assert parse_high_score("1300.0") == 1300
    assert parse_high_score(0.0) == 0
    assert parse_high_score(2.5) is None
    assert parse_high_score(float("nan")) is None
    assert parse_high_score(float("inf")) is None
    assert parse_high_score(-100.0) is None


def test_json_store_reads_float_score(tmp_path):
    path = tmp_path / "highscore.json"
    path.write_text('{"highScore": 1300.0}')
    assert JsonHighScoreStore(str(path)).get_high_score() == 1300


def test_in_memory_store():
    store = InMemoryHighScoreStore()
    assert store.get_high_score() is None
    store.set_high_score(250)
    assert store.get_high_score() == 250


def test_json_store_round_trip(tmp_path):
    path = tmp_path / "scores" / "highscore.json"
    store = JsonHighScoreStore(str(path))
    assert store.get_high_score() is None
    store.set_high_score(900)
    assert json.loads(path.read_text()) == {"highScore": 900}
    assert JsonHighScoreStore(str(path)).get_high_score() == 900


def test_json_store_malformed_value_is_absent(tmp_path, caplog):
    path = tmp_path / "highscore.json"
    path.write_text(json.dumps({"highScore": "lots"}))
    with caplog.at_level(logging.WARNING):
        assert JsonHighScoreStore(str(path)).get_high_score() is None
    assert "malformed" in caplog.text


def test_json_store_invalid_json_is_absent(tmp_path):
    path = tmp_path / "highscore.json"
    path.write_text("{not json")
    assert JsonHighScoreStore(str(path)).get_high_score() is None
    path.write_text("[1, 2]")
    assert JsonHighScoreStore(str(path)).get_high_score() is None
