import pytest

from dugout.config import DEFAULT_INNINGS, get_game_config, iter_game_configs, max_attempts, multi_attempt_factor


def test_get_game_config_for_supported_lengths():
    assert get_game_config(5).pitchers_per_game == 2
    six = get_game_config("6")
    assert six.catchers_per_game == 3
    assert list(six.inning_numbers()) == [1, 2, 3, 4, 5, 6]
    assert get_game_config().innings == DEFAULT_INNINGS


def test_iter_game_configs_lists_both_lengths():
    assert sorted(config.innings for config in iter_game_configs()) == [5, 6]


def test_get_game_config_missing_raises():
    with pytest.raises(KeyError):
        get_game_config(9)


def test_get_game_config_rejects_non_numeric():
    with pytest.raises(ValueError):
        get_game_config("six")


def test_attempt_limits_default(monkeypatch):
    monkeypatch.delenv("DUGOUT_MAX_ATTEMPTS", raising=False)
    monkeypatch.delenv("DUGOUT_MULTI_ATTEMPT_FACTOR", raising=False)

    assert max_attempts() == 200
    assert multi_attempt_factor() == 300


def test_attempt_limits_env_override_and_clamp(monkeypatch):
    monkeypatch.setenv("DUGOUT_MAX_ATTEMPTS", "50")
    monkeypatch.setenv("DUGOUT_MULTI_ATTEMPT_FACTOR", "0")

    assert max_attempts() == 50
    assert multi_attempt_factor() == 1


def test_invalid_attempt_limit_falls_back(monkeypatch, caplog):
    monkeypatch.setenv("DUGOUT_MAX_ATTEMPTS", "lots")

    with caplog.at_level("WARNING"):
        assert max_attempts() == 200
    assert "DUGOUT_MAX_ATTEMPTS" in caplog.text
