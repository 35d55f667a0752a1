import pytest

from puyo.components.session_config import SessionConfig
from puyo.constants import DIFFICULTIES, DIFFICULTY_ORDER, get_difficulty


def test_default_config_is_easy_on_a_10x20_well():
    config = SessionConfig()
    assert (config.cols, config.rows) == (10, 20)
    assert config.min_group_size == 4
    assert config.max_colors == 4
    assert config.base_fall_interval == 1.0
    assert (config.spawn_x, config.spawn_y) == (4, 0)


@pytest.mark.parametrize("name,colors,interval", [
    ("easy", 4, 1.0),
    ("medium", 5, 0.8),
    ("hard", 6, 0.6),
    ("very_hard", 7, 0.45),
])
def test_difficulty_table(name, colors, interval):
    preset = get_difficulty(name)
    assert preset.max_colors == colors
    assert preset.base_fall_interval == interval


def test_menu_order_covers_every_difficulty():
    assert sorted(DIFFICULTY_ORDER) == sorted(DIFFICULTIES)


def test_unknown_difficulty_raises():
    with pytest.raises(ValueError):
        get_difficulty("nightmare")


@pytest.mark.parametrize("kwargs", [
    {"cols": 2},
    {"rows": 2},
    {"min_group_size": 0},
    {"max_colors": 0},
    {"max_colors": 8},
    {"base_fall_interval": 0.0},
])
def test_invalid_config_raises(kwargs):
    with pytest.raises(ValueError):
        SessionConfig(**kwargs)


def test_spawn_column_follows_width():
    assert SessionConfig(cols=7).spawn_x == 2
    assert SessionConfig(cols=3).spawn_x == 0
