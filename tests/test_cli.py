import curses

import pytest

from tty2048 import cli
from tty2048.game import Command


@pytest.fixture
def fake_wrapper(monkeypatch):
    games = []

    def wrapper(func, game):
        games.append(game)
        return game.handle(Command.QUIT)

    monkeypatch.setattr(curses, "wrapper", wrapper)
    return games


def test_help_exits_cleanly(capsys, fake_wrapper):
    with pytest.raises(SystemExit) as exc:
        cli.main(["--help"])
    assert exc.value.code == 0
    assert "rows columns initial_tiles" in capsys.readouterr().out
    assert fake_wrapper == []


def test_defaults_and_clean_quit(capsys, fake_wrapper):
    assert cli.main([]) == 0
    (game,) = fake_wrapper
    assert (game.config.rows, game.config.columns, game.config.initial_tiles) == (4, 4, 2)
    assert "Final score: 0" in capsys.readouterr().out


def test_positional_config(fake_wrapper):
    assert cli.main(["3", "5", "4", "--seed", "9", "--set", "game.target=64"]) == 0
    config = fake_wrapper[0].config
    assert (config.rows, config.columns, config.initial_tiles) == (3, 5, 4)
    assert config.seed == 9
    assert config.target == 64


@pytest.mark.parametrize("argv", [["4", "4"], ["4", "x", "2"], ["1", "2", "3", "4"]])
def test_malformed_arguments_are_usage_errors(argv, fake_wrapper):
    with pytest.raises(SystemExit) as exc:
        cli.main(argv)
    assert exc.value.code == cli.USAGE_ERROR
    assert fake_wrapper == []


@pytest.mark.parametrize("argv", [["0", "4", "2"], ["2", "2", "5"], ["--set", "game.target=3"]])
def test_invalid_configuration_exits_nonzero(argv, capsys, fake_wrapper):
    assert cli.main(argv) == cli.USAGE_ERROR
    assert "error:" in capsys.readouterr().err
    assert fake_wrapper == []


def test_config_overrides():
    args = cli.build_parser().parse_args(["5", "6", "3", "--seed", "1"])
    assert cli.config_overrides(args) == ["game.rows=5", "game.columns=6", "game.initial_tiles=3", "seed=1"]
