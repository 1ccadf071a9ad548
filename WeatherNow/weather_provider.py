"""Weather provider abstraction - error taxonomy and the tagged fetch outcome."""
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from weather_data import WeatherReading


class ErrorKind(Enum):
    INVALID_URL = "invalid_url"
    INVALID_RESPONSE = "invalid_response"
    DECODING_ERROR = "decoding_error"
    API_ERROR = "api_error"
    UNKNOWN = "unknown"


class WeatherProviderError(Exception):
    """Exception raised when a weather provider fails."""

    kind = ErrorKind.UNKNOWN
    default_message = "Unknown error"

    def __init__(self, message: Optional[str] = None):
        self.message = message if message is not None else self.default_message
        super().__init__(self.message)


class InvalidURLError(WeatherProviderError):
    kind = ErrorKind.INVALID_URL
    default_message = "Invalid URL"


class InvalidResponseError(WeatherProviderError):
    kind = ErrorKind.INVALID_RESPONSE
    default_message = "Invalid response from server"

    def __init__(self, status_code: Optional[int] = None):
        super().__init__()
        self.status_code = status_code


class DecodingError(WeatherProviderError):
    kind = ErrorKind.DECODING_ERROR
    default_message = "Failed to decode data"


class ApiError(WeatherProviderError):
    """The payload decoded but reported ``status: false``; message is the server's."""
    kind = ErrorKind.API_ERROR

    def __init__(self, message: str):
        super().__init__(message)


class UnknownError(WeatherProviderError):
    """Transport-level fault raised before any response arrived."""
    kind = ErrorKind.UNKNOWN

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


@dataclass(frozen=True)
class Success:
    reading: WeatherReading
    ok = True


@dataclass(frozen=True)
class Failure:
    error: WeatherProviderError
    ok = False

    @property
    def kind(self) -> ErrorKind:
        return self.error.kind

    @property
    def message(self) -> str:
        return self.error.message


FetchOutcome = Union[Success, Failure]


class WeatherProviderBase(ABC):
    """Abstract base class for weather data providers."""

    @abstractmethod
    def get_current(self) -> WeatherReading:
        """
        Fetch current weather data.

        Returns:
            WeatherReading: Current weather information

        Raises:
            WeatherProviderError: If the provider fails to fetch data
        """
        pass

    def fetch(self) -> FetchOutcome:
        """
        Fetch current weather data without raising.

        Returns:
            Success with the reading, or Failure carrying the classified error
        """
        try:
            return Success(self.get_current())
        except WeatherProviderError as e:
            logging.warning(f"Weather fetch failed ({e.kind.value}): {e.message}")
            return Failure(e)
