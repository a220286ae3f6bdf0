import pytest

from realmgen.config import DEFAULT_PATH, Tuning, load_tuning, tuning_from_dict
from realmgen.errors import ConfigError


def write(tmp_path, text):
    path = tmp_path / "tuning.toml"
    path.write_text(text, encoding="utf-8")
    return path


def test_packaged_defaults():
    assert DEFAULT_PATH.exists()
    assert load_tuning() == Tuning()


def test_missing_file_gives_defaults(tmp_path):
    assert load_tuning(tmp_path / "nope.toml") == Tuning()


def test_overrides(tmp_path):
    path = write(tmp_path, '[world]\nwidth = 16\n\n[town]\nentry_direction = "west"\n\n[logging]\nlevel = "debug"\n')
    t = load_tuning(path)
    assert t.world_width == 16
    assert t.world_height == 10
    assert t.entry_direction == "west"
    assert t.log_level == "debug"


@pytest.mark.parametrize("data", [
    {"world": {"width": "wide"}},
    {"world": {"width": True}},
    {"world": {"height": 3}},
    {"town": {"entry_direction": "up"}},
    {"population": {"no_evil": "yes"}},
    {"logging": {"level": "LOUD"}},
    {"world": 5},
])
def test_bad_values(data):
    with pytest.raises(ConfigError):
        tuning_from_dict(data)


def test_bad_toml(tmp_path):
    with pytest.raises(ConfigError):
        load_tuning(write(tmp_path, "[world\nwidth = 1\n"))
