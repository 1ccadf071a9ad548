"""Tests for the terminal entry point."""
import pytest
from unittest.mock import Mock, patch
from json_weather_provider import WEATHER_URL
from localization import SupportedLanguage
from navigation import NavigationDestination, NavigationManager
from weather_data import WeatherReading
from weather_provider import ApiError, WeatherProviderBase
import weathernow


class MockProvider(WeatherProviderBase):
    def __init__(self, outcome):
        self.outcome = outcome
        self.call_count = 0

    def get_current(self):
        self.call_count += 1
        if isinstance(self.outcome, Exception):
            raise self.outcome
        return self.outcome


@pytest.fixture
def sample_weather():
    return WeatherReading(
        city="Dubai",
        date_time="March 5",
        weather_icon="",
        temp=-3.5,
        unit="°C",
        weather="light snow",
        feels_like="-6°C",
        high=1.0,
        low=-4.9,
        humidity="80%",
        wind_direction="S",
        wind_speed=3.0,
        wind_speed_unit="m/s"
    )


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("WEATHER_URL", "WEATHER_LANG", "WEATHER_TIMEOUT"):
        monkeypatch.delenv(name, raising=False)
    with patch("weathernow.load_dotenv"):
        yield


def test_load_config_defaults():
    config = weathernow.load_config(weathernow.parse_args([]))
    assert config.url == WEATHER_URL
    assert config.language is SupportedLanguage.ENGLISH
    assert config.timeout == weathernow.DEFAULT_TIMEOUT


def test_load_config_from_environment(monkeypatch):
    monkeypatch.setenv("WEATHER_URL", "https://example.com/weather.json")
    monkeypatch.setenv("WEATHER_LANG", "ar")
    monkeypatch.setenv("WEATHER_TIMEOUT", "3.5")

    config = weathernow.load_config(weathernow.parse_args([]))

    assert config.url == "https://example.com/weather.json"
    assert config.language is SupportedLanguage.ARABIC
    assert config.timeout == 3.5


def test_flags_override_environment(monkeypatch):
    monkeypatch.setenv("WEATHER_LANG", "ar")
    monkeypatch.setenv("WEATHER_TIMEOUT", "3.5")

    config = weathernow.load_config(weathernow.parse_args(["--lang", "en", "--timeout", "7"]))

    assert config.language is SupportedLanguage.ENGLISH
    assert config.timeout == 7


@pytest.mark.parametrize("value", ["soon", "0", "-1"])
def test_bad_timeout_exits(monkeypatch, value):
    monkeypatch.setenv("WEATHER_TIMEOUT", value)
    with pytest.raises(SystemExit):
        weathernow.load_config(weathernow.parse_args([]))


def test_wire_navigation_refresh():
    navigation = NavigationManager()
    view_model = Mock(has_data=True, is_loading=False)
    weathernow.wire_navigation(navigation, view_model)

    navigation.request_refresh()

    view_model.refresh.assert_called_once()


def test_wire_navigation_loads_news_without_data():
    navigation = NavigationManager()
    view_model = Mock(has_data=False, is_loading=False)
    weathernow.wire_navigation(navigation, view_model)

    navigation.navigate_to(NavigationDestination.WEATHER_NEWS)

    view_model.load_data.assert_called_once()


def test_wire_navigation_skips_news_with_data():
    navigation = NavigationManager()
    view_model = Mock(has_data=True, is_loading=False)
    weathernow.wire_navigation(navigation, view_model)

    navigation.navigate_to(NavigationDestination.WEATHER_NEWS)

    view_model.load_data.assert_not_called()


def test_main_renders_once(sample_weather, capsys):
    provider = MockProvider(sample_weather)
    with patch("weathernow.setup_logging"), \
            patch("weathernow.JsonWeatherProvider", return_value=provider):
        exit_code = weathernow.main(["--refresh", "0", "--width", "40"])

    out = capsys.readouterr().out
    assert exit_code == 0
    assert provider.call_count == 1
    assert "Loading weather data..." in out
    assert "March 5" in out
    assert "-3°C" in out
    assert "Light Snow" in out
    assert "Wind Direction: S (ic_N)" in out


def test_main_news_screen(sample_weather, capsys):
    with patch("weathernow.setup_logging"), \
            patch("weathernow.JsonWeatherProvider", return_value=MockProvider(sample_weather)):
        exit_code = weathernow.main(["--screen", "news", "--width", "40"])

    out = capsys.readouterr().out
    assert exit_code == 0
    assert "Current Conditions in Dubai" in out
    assert "H:1° L:-4°" in out


def test_main_reports_error(capsys):
    with patch("weathernow.setup_logging"), \
            patch("weathernow.JsonWeatherProvider", return_value=MockProvider(ApiError("No data"))):
        exit_code = weathernow.main(["--lang", "ar", "--width", "40"])

    out = capsys.readouterr().out
    assert exit_code == 1
    assert "No data" in out
    assert "إعادة المحاولة" in out


def test_main_passes_config_to_provider(sample_weather):
    with patch("weathernow.setup_logging"), \
            patch("weathernow.JsonWeatherProvider", return_value=MockProvider(sample_weather)) as provider_cls:
        weathernow.main(["--url", "https://example.com/w.json", "--timeout", "4"])

    provider_cls.assert_called_once_with(url="https://example.com/w.json", timeout=4.0)
