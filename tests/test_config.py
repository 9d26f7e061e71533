import pawpal.deck.config as config


def test_deck_settings_defaults(monkeypatch):
    for name in (
        "PAWPAL_DISTANCE_THRESHOLD_PX",
        "PAWPAL_VELOCITY_THRESHOLD",
        "PAWPAL_EXIT_ANIMATION_MS",
        "PAWPAL_SWIPE_TIMEOUT_SECONDS",
    ):
        monkeypatch.delenv(name, raising=False)
    settings = config.get_deck_settings()
    assert settings.thresholds.distance == 100
    assert settings.thresholds.half == 50
    assert settings.thresholds.velocity == 0.5
    assert settings.exit_animation_ms == 350
    assert settings.swipe_timeout_seconds == 10


def test_deck_settings_env_override(monkeypatch):
    monkeypatch.setenv("PAWPAL_DISTANCE_THRESHOLD_PX", "80")
    monkeypatch.setenv("PAWPAL_VELOCITY_THRESHOLD", "0.3")
    monkeypatch.setenv("PAWPAL_SWIPE_TIMEOUT_SECONDS", "2.5")
    settings = config.get_deck_settings()
    assert settings.thresholds.distance == 80
    assert settings.thresholds.half == 40
    assert settings.thresholds.velocity == 0.3
    assert settings.swipe_timeout_seconds == 2.5


def test_invalid_env_values_fall_back(monkeypatch):
    monkeypatch.setenv("PAWPAL_EXIT_ANIMATION_MS", "soon")
    monkeypatch.setenv("PAWPAL_SWIPE_TIMEOUT_SECONDS", "-4")
    settings = config.get_deck_settings()
    assert settings.exit_animation_ms == 350
    assert settings.swipe_timeout_seconds == 10


def test_api_base_url(monkeypatch):
    monkeypatch.delenv("PAWPAL_API_BASE_URL", raising=False)
    assert config.get_api_base_url() == "http://localhost:5000"
    monkeypatch.setenv("PAWPAL_API_BASE_URL", "https://pawpal.example.com/ ")
    assert config.get_api_base_url() == "https://pawpal.example.com"
