import pytest

from src.game.gravity import Clock, GravitySettings


def test_clock_measures_elapsed_time_and_restarts(fake_time):
    clock = Clock(fake_time)
    fake_time.advance(250)
    assert clock.elapsed_ms() == 250

    clock.restart()
    assert clock.elapsed_ms() == 0
    fake_time.advance(40)
    assert clock.elapsed_ms() == 40


def test_default_clock_reads_wall_time():
    clock = Clock()
    assert clock.elapsed_ms() >= 0


@pytest.mark.parametrize(
    "lines,expected",
    [(0, 1000), (1, 995), (100, 500), (180, 100), (199, 5), (200, 5), (1000, 5)],
)
def test_interval_ramps_down_to_floor(lines, expected):
    assert GravitySettings().interval_ms(lines) == expected


def test_custom_settings_change_the_ramp():
    settings = GravitySettings(base_ms=800, step_ms=10, floor_ms=50)
    assert settings.interval_ms(0) == 800
    assert settings.interval_ms(30) == 500
    assert settings.interval_ms(500) == 50


def test_from_config_fills_defaults():
    assert GravitySettings.from_config(None) == GravitySettings()
    assert GravitySettings.from_config({"floor_ms": 25}) == GravitySettings(floor_ms=25)


@pytest.mark.parametrize("floor", [0, -10])
def test_non_positive_floor_is_rejected(floor):
    with pytest.raises(ValueError):
        GravitySettings(floor_ms=floor)


def test_negative_step_is_rejected():
    with pytest.raises(ValueError):
        GravitySettings.from_config({"step_ms": -1})
