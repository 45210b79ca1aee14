from __future__ import annotations

import pytest
from pydantic import ValidationError

from game.config import GameConfig, load_config
from game.state import Direction, Point


def test_defaults() -> None:
    config = GameConfig()
    assert config.grid_size == 20
    assert config.snake_points() == [Point(10, 10), Point(10, 11), Point(10, 12)]
    assert config.initial_direction == Direction.UP
    assert (config.initial_speed, config.min_speed, config.speed_decrement) == (150, 60, 2)
    assert config.initial_length == 3


def test_load_from_yaml(tmp_path) -> None:
    path = tmp_path / "snake.yaml"
    path.write_text(
        "game:\n"
        "  grid_size: 12\n"
        "  initial_snake: [[3, 3], [2, 3], [1, 3]]\n"
        "  initial_direction: right\n"
        "  initial_speed: 100\n"
    )

    config = load_config(path)
    assert config.grid_size == 12
    assert config.snake_points()[0] == Point(3, 3)
    assert config.initial_direction == Direction.RIGHT
    assert config.initial_speed == 100
    assert config.min_speed == 60


def test_env_var_selects_config(tmp_path, monkeypatch) -> None:
    path = tmp_path / "env.yaml"
    path.write_text("grid_size: 30\n")
    monkeypatch.setenv("SNAKE_CONFIG", str(path))

    assert load_config().grid_size == 30


def test_bundled_default_config_matches_defaults(monkeypatch) -> None:
    monkeypatch.delenv("SNAKE_CONFIG", raising=False)
    assert load_config() == GameConfig()


@pytest.mark.parametrize(
    "overrides",
    [
        {"min_speed": 200},
        {"grid_size": 10},
        {"initial_snake": []},
        {"initial_snake": [(1, 1), (1, 1)]},
        {"initial_snake": [(1, 1), (3, 1)]},
        {"speed_decrement": -1},
        {"initial_direction": "down"},
        {"initial_snake": [(3, 3), (2, 3), (1, 3)], "initial_direction": "left"},
    ],
)
def test_invalid_configs_are_rejected(overrides) -> None:
    with pytest.raises(ValidationError):
        GameConfig(**overrides)


def test_direction_away_from_body_is_accepted() -> None:
    config = GameConfig(initial_snake=[(3, 3), (2, 3), (1, 3)], initial_direction="right")
    assert config.initial_direction == Direction.RIGHT
