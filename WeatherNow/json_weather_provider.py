"""JSON weather endpoint provider - one GET against a fixed URL, classified failures."""
import logging
from typing import Optional
from urllib.parse import urlparse

import requests

from weather_data import PayloadDecodeError, WeatherEnvelope, WeatherReading
from weather_provider import (
    ApiError,
    DecodingError,
    InvalidResponseError,
    InvalidURLError,
    UnknownError,
    WeatherProviderBase,
)


WEATHER_URL = "https://raw.githubusercontent.com/Krishnarajsalim/JSON/refs/heads/main/weather.json"


class JsonWeatherProvider(WeatherProviderBase):
    """
    Weather provider for the static JSON weather feed.

    The endpoint takes no parameters and no credentials and answers with
    ``{"Response": {"status": ..., "message": ..., "result": {...}}}``.
    Nothing is retried or cached here; every call is one round trip.
    """

    def __init__(
        self,
        url: str = WEATHER_URL,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None
    ):
        """
        Initialize the provider.

        Args:
            url: Endpoint to fetch (defaults to the public weather feed)
            timeout: HTTP request timeout in seconds (None, the default, waits as long as requests does)
            session: requests session to send through (a new one if omitted)
        """
        self.url = url
        self.timeout = timeout
        self.session = session or requests.Session()

    def _prepare(self) -> requests.PreparedRequest:
        try:
            prepared = requests.Request("GET", self.url).prepare()
        except (requests.exceptions.MissingSchema,
                requests.exceptions.InvalidSchema,
                requests.exceptions.InvalidURL) as e:
            logging.error(f"Cannot build request for {self.url!r}: {e}")
            raise InvalidURLError()

        if urlparse(prepared.url).scheme not in ("http", "https"):
            logging.error(f"Unsupported URL scheme: {self.url!r}")
            raise InvalidURLError()
        return prepared

    def get_current(self) -> WeatherReading:
        """
        Fetch the current reading from the weather feed.

        Returns:
            WeatherReading: Current weather information

        Raises:
            InvalidURLError: The endpoint URL cannot be used (nothing was sent)
            InvalidResponseError: The server answered with a status other than 200
            DecodingError: The body is not the expected JSON document
            ApiError: The document reports ``status: false``
            UnknownError: The request failed before a response arrived
        """
        prepared = self._prepare()

        try:
            logging.info(f"Making weather API request: {self.url}")
            response = self.session.send(prepared, timeout=self.timeout)
        except (requests.exceptions.RequestException, OSError) as e:
            logging.error(f"Network error during API request: {e}")
            raise UnknownError(str(e))

        logging.info(f"API response status: {response.status_code}")
        if response.status_code != 200:
            logging.error(f"API request failed with status {response.status_code}")
            raise InvalidResponseError(response.status_code)

        try:
            envelope = WeatherEnvelope.from_payload(response.json())
        except (PayloadDecodeError, ValueError) as e:
            logging.error(f"Failed to parse API response: {e}", exc_info=True)
            raise DecodingError()

        if not envelope.status:
            logging.error(f"Weather API reported failure: {envelope.message}")
            raise ApiError(envelope.message)

        reading = envelope.result
        logging.info(f"Successfully parsed weather data: {reading.city} {reading.formatted_temp}, {reading.weather}")
        return reading
