from unittest import mock

import pygame
import pytest

from smartroad import main as main_module
from smartroad.main import FONT_PATHS, load_font, main

_REAL_FONT = pygame.font.Font


@pytest.fixture
def headless(monkeypatch):
    monkeypatch.setenv("SDL_VIDEODRIVER", "dummy")
    monkeypatch.setenv("SDL_AUDIODRIVER", "dummy")
    yield
    pygame.quit()


def _default_font(_path, size):
    return _REAL_FONT(None, size)


def _write_assets(directory):
    pygame.image.save(pygame.Surface((8, 8)), str(directory / "map.png"))
    pygame.image.save(pygame.Surface((4, 6)), str(directory / "car.png"))


def test_load_font_tries_paths_in_order(headless):
    sentinel = object()
    side_effects = [OSError("missing"), FileNotFoundError("missing"), sentinel]
    with mock.patch("pygame.font.Font", side_effect=side_effects) as font_cls:
        result = load_font(24)
    assert result is sentinel
    assert [c.args for c in font_cls.call_args_list] == [(path, 24) for path in FONT_PATHS]


def test_load_font_returns_first_success(headless):
    sentinel = object()
    with mock.patch("pygame.font.Font", return_value=sentinel) as font_cls:
        result = load_font(18)
    assert result is sentinel
    assert font_cls.call_count == 1
    assert font_cls.call_args.args == (FONT_PATHS[0], 18)


def test_load_font_raises_when_nothing_loads(headless):
    with mock.patch("pygame.font.Font", side_effect=OSError("nope")) as font_cls:
        with pytest.raises(RuntimeError, match="Could not load font"):
            load_font(24)
    assert font_cls.call_count == len(FONT_PATHS)


def test_main_reports_missing_textures(headless, tmp_path, capsys):
    with mock.patch("pygame.font.Font", side_effect=_default_font):
        status = main(["--assets", str(tmp_path)])
    assert status == 1
    assert "missing texture" in capsys.readouterr().err


def test_main_reports_missing_font(headless, tmp_path, capsys):
    _write_assets(tmp_path)
    with mock.patch("pygame.font.Font", side_effect=OSError("nope")):
        status = main(["--assets", str(tmp_path)])
    assert status == 1
    assert "Could not load font" in capsys.readouterr().err


def test_main_stops_on_quit_event(headless, tmp_path):
    _write_assets(tmp_path)
    quit_event = pygame.event.Event(pygame.QUIT)
    with mock.patch("pygame.font.Font", side_effect=_default_font), mock.patch(
        "pygame.event.get", return_value=[quit_event]
    ) as get_events:
        status = main(["--assets", str(tmp_path)])
    assert status == 0
    assert get_events.call_count == 1


def test_main_escape_twice_shows_stats_then_exits(headless, tmp_path):
    _write_assets(tmp_path)
    escape = pygame.event.Event(pygame.KEYDOWN, key=pygame.K_ESCAPE)
    frames = [[], [escape], [escape]]
    with mock.patch("pygame.font.Font", side_effect=_default_font), mock.patch(
        "pygame.event.get", side_effect=frames
    ) as get_events, mock.patch.object(main_module.time, "sleep") as sleep:
        status = main(["--assets", str(tmp_path)])
    assert status == 0
    assert get_events.call_count == 3
    assert sleep.call_count == 2


def test_main_rejects_unknown_option():
    with pytest.raises(SystemExit) as excinfo:
        main(["--no-such-option"])
    assert excinfo.value.code == 2