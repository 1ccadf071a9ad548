"""Weather domain model - the decoded payload plus presentation-ready derived values."""
import math
import string
from dataclasses import dataclass
from typing import Any, Mapping


WIND_DIRECTION_ICONS = {
    "N": "ic_N",
    "NE": "ic_NE",
    "E": "ic_E",
    "SE": "ic_SE",
    "S": "ic_N",  # the icon set has no plain south arrow; the app shows north
    "SW": "ic_SW",
    "W": "ic_W",
    "NW": "ic_NW",
    "NNE": "ic_NNE",
    "ENE": "ic_ENE",
    "ESE": "ic_ESE",
    "SSE": "ic_SSE",
    "SSW": "ic_SSW",
    "WSW": "ic_WSW",
    "WNW": "ic_WNW",
    "NNW": "ic_NNW",
}
DEFAULT_WIND_ICON = "ic_N"


class PayloadDecodeError(ValueError):
    """Raised when a payload does not have the expected shape or types."""
    pass


def _field(obj: Mapping[str, Any], key: str) -> Any:
    if not isinstance(obj, Mapping):
        raise PayloadDecodeError(f"Expected an object containing '{key}', got {type(obj).__name__}")
    if key not in obj:
        raise PayloadDecodeError(f"Missing key '{key}'")
    return obj[key]


def _text(obj: Mapping[str, Any], key: str) -> str:
    value = _field(obj, key)
    if not isinstance(value, str):
        raise PayloadDecodeError(f"Key '{key}' must be a string, got {type(value).__name__}")
    return value


def _number(obj: Mapping[str, Any], key: str) -> float:
    value = _field(obj, key)
    # bool is an int subclass but JSON true/false is not a number
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise PayloadDecodeError(f"Key '{key}' must be a number, got {type(value).__name__}")
    try:
        number = float(value)
    except OverflowError:
        raise PayloadDecodeError(f"Key '{key}' is out of range")
    if not math.isfinite(number):
        raise PayloadDecodeError(f"Key '{key}' must be a finite number, got {value!r}")
    return number


def _flag(obj: Mapping[str, Any], key: str) -> bool:
    value = _field(obj, key)
    if not isinstance(value, bool):
        raise PayloadDecodeError(f"Key '{key}' must be a boolean, got {type(value).__name__}")
    return value


@dataclass(frozen=True)
class WeatherReading:
    """One decoded snapshot of current conditions."""
    city: str
    date_time: str  # unix epoch as digits, or an already formatted date
    weather_icon: str  # URL, empty when the server has no icon
    temp: float
    unit: str  # e.g. "°C"
    weather: str  # free-form description, e.g. "light rain"
    feels_like: str  # pre-formatted by the server
    high: float
    low: float
    humidity: str  # pre-formatted, e.g. "64%"
    wind_direction: str  # compass point, e.g. "NNE"
    wind_speed: float
    wind_speed_unit: str

    @classmethod
    def from_dict(cls, result: Mapping[str, Any]) -> "WeatherReading":
        """
        Build a reading from the wire ``result`` object.

        Raises:
            PayloadDecodeError: If a key is missing or has the wrong type
        """
        return cls(
            city=_text(result, "city"),
            date_time=_text(result, "dateTime"),
            weather_icon=_text(result, "weather_icon"),
            temp=_number(result, "temp"),
            unit=_text(result, "unit"),
            weather=_text(result, "weather"),
            feels_like=_text(result, "feels_like"),
            high=_number(result, "high"),
            low=_number(result, "low"),
            humidity=_text(result, "humi"),
            wind_direction=_text(result, "wind_direction"),
            wind_speed=_number(result, "wind_speed"),
            wind_speed_unit=_text(result, "wind_speed_unit"),
        )

    @property
    def has_icon(self) -> bool:
        return bool(self.weather_icon)

    @property
    def wind_direction_icon(self) -> str:
        """Icon identifier for the wind direction (unknown values fall back to north)."""
        return WIND_DIRECTION_ICONS.get(self.wind_direction.upper(), DEFAULT_WIND_ICON)

    @property
    def formatted_temp(self) -> str:
        return f"{int(self.temp)}{self.unit}"

    @property
    def formatted_high_low(self) -> str:
        return f"H:{int(self.high)}° L:{int(self.low)}°"

    @property
    def formatted_wind_speed(self) -> str:
        return f"{self.wind_speed} {self.wind_speed_unit}"

    @property
    def capitalized_weather(self) -> str:
        return string.capwords(self.weather, " ")


@dataclass(frozen=True)
class WeatherEnvelope:
    """The ``Response`` wrapper the weather endpoint puts around every result."""
    status: bool
    message: str
    result: WeatherReading

    @classmethod
    def from_payload(cls, payload: Any) -> "WeatherEnvelope":
        """
        Decode the full JSON document returned by the endpoint.

        Args:
            payload: Parsed JSON (``{"Response": {...}}``)

        Returns:
            WeatherEnvelope: The decoded wrapper with its reading

        Raises:
            PayloadDecodeError: If the document does not match the expected shape
        """
        response = _field(payload, "Response")
        return cls(
            status=_flag(response, "status"),
            message=_text(response, "message"),
            result=WeatherReading.from_dict(_field(response, "result")),
        )
