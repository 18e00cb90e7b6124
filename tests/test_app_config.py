import os

from utils.app_config import default_db_path, get_db_folder, load_config, save_config, set_db_folder


def test_missing_or_corrupt_config_is_empty(tmp_path):
    path = tmp_path / "config.json"
    assert load_config(path) == {}
    path.write_text("{not json", encoding="utf-8")
    assert load_config(path) == {}


def test_db_folder_round_trip(tmp_path):
    path = tmp_path / "nested" / "config.json"
    set_db_folder(str(tmp_path), path)
    assert get_db_folder(path) == str(tmp_path)
    assert default_db_path(path) == os.path.join(str(tmp_path), "finance.db")
    assert not path.with_suffix(".tmp").exists()

    set_db_folder(None, path)
    assert get_db_folder(path) is None
    assert default_db_path(path) == "finance.db"


def test_save_config_overwrites(tmp_path):
    path = tmp_path / "config.json"
    save_config({"db_folder": "a"}, path)
    save_config({"db_folder": "b", "extra": 1}, path)
    assert load_config(path) == {"db_folder": "b", "extra": 1}
