"""Terminal weather display: current conditions, weather news and the side menu."""
import argparse
import asyncio
import logging
import os
import shutil
import signal
import sys
from dataclasses import dataclass
from typing import List, Optional

from dotenv import load_dotenv

from json_weather_provider import WEATHER_URL, JsonWeatherProvider
from layout import display_width, render_screen
from localization import Localizer, SupportedLanguage
from navigation import NavigationDestination, NavigationEvent, NavigationManager
from weather_view_model import ViewState, WeatherViewModel

DEFAULT_TIMEOUT = 10.0
SCREENS = {
    "home": NavigationDestination.HOME,
    "news": NavigationDestination.WEATHER_NEWS,
}


@dataclass
class Config:
    url: str
    language: SupportedLanguage
    timeout: float


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser("weathernow", description="Current weather conditions in the terminal")
    parser.add_argument("--url", default=None, help="Weather feed URL (env WEATHER_URL)")
    parser.add_argument("--lang", default=None, help="Language code, en or ar (env WEATHER_LANG)")
    parser.add_argument("--timeout", type=float, default=None, help="HTTP timeout in seconds (env WEATHER_TIMEOUT)")
    parser.add_argument("--refresh", type=float, default=0.0, help="Seconds between refreshes; 0 renders once and exits")
    parser.add_argument("--screen", choices=["home", "news", "menu"], default="home")
    parser.add_argument("--width", type=int, default=None, help="Text width (defaults to the terminal width)")
    parser.add_argument("--log-file", default=None)
    parser.add_argument("--verbose", action="store_true")
    return parser.parse_args(argv)


def setup_logging(log_file: Optional[str], verbose: bool) -> None:
    log_level = logging.DEBUG if verbose else logging.WARNING
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        handlers.append(logging.FileHandler(log_file))
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(levelname)s - %(message)s",
        handlers=handlers
    )


def load_config(args: argparse.Namespace) -> Config:
    """Merge .env/environment settings with command-line flags (flags win)."""
    load_dotenv()
    url = args.url or os.getenv("WEATHER_URL") or WEATHER_URL
    lang = args.lang or os.getenv("WEATHER_LANG", "en")

    if args.timeout is not None:
        timeout = args.timeout
    else:
        raw_timeout = os.getenv("WEATHER_TIMEOUT")
        try:
            timeout = float(raw_timeout) if raw_timeout else DEFAULT_TIMEOUT
        except ValueError as exc:
            raise SystemExit(f"Invalid WEATHER_TIMEOUT: {exc}") from exc
    if timeout <= 0:
        raise SystemExit("Timeout must be positive")

    config = Config(url=url, language=SupportedLanguage.from_code(lang), timeout=timeout)
    logging.info("Configuration loaded: url=%s lang=%s timeout=%s", config.url, config.language.value, config.timeout)
    return config


def draw(lines: List[str]) -> None:
    if sys.stdout.isatty():
        sys.stdout.write("\033[2J\033[H")
    sys.stdout.write("\n".join(lines) + "\n")
    sys.stdout.flush()


def wire_navigation(navigation: NavigationManager, view_model: WeatherViewModel) -> None:
    """Refresh on request; load when the news screen shows up with nothing to show."""
    def on_event(event: NavigationEvent, destination: NavigationDestination) -> None:
        if event is NavigationEvent.REFRESH_REQUESTED:
            view_model.refresh()
        elif destination is NavigationDestination.WEATHER_NEWS and not view_model.has_data and not view_model.is_loading:
            view_model.load_data()

    navigation.subscribe(on_event)


async def run(args: argparse.Namespace, config: Config) -> int:
    localizer = Localizer(config.language)
    navigation = NavigationManager()
    if args.screen in SCREENS and SCREENS[args.screen] is not NavigationDestination.HOME:
        navigation.navigate_to(SCREENS[args.screen])
    elif args.screen == "menu":
        navigation.open_menu()

    width = args.width or display_width(shutil.get_terminal_size().columns)
    provider = JsonWeatherProvider(url=config.url, timeout=config.timeout)
    view_model = WeatherViewModel(provider, localizer, auto_load=False)

    def on_state(state: ViewState) -> None:
        draw(render_screen(view_model, navigation, localizer, width))

    view_model.subscribe(on_state)
    localizer.subscribe(lambda _language: on_state(view_model.state))
    wire_navigation(navigation, view_model)
    view_model.load_data()

    stop = asyncio.Event()
    loop = asyncio.get_running_loop()
    for signum in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(signum, stop.set)
        except (NotImplementedError, RuntimeError):
            # not available on this platform; Ctrl+C still raises KeyboardInterrupt
            pass

    try:
        state = await view_model.settle()
        if args.refresh <= 0:
            return 1 if state.has_error else 0

        while not stop.is_set():
            try:
                await asyncio.wait_for(stop.wait(), timeout=max(args.refresh, 1.0))
            except asyncio.TimeoutError:
                navigation.request_refresh()
                await view_model.settle()
        logging.info("Stopping display")
        return 0
    finally:
        view_model.close()


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    setup_logging(args.log_file, args.verbose)
    config = load_config(args)
    try:
        return asyncio.run(run(args, config))
    except KeyboardInterrupt:
        logging.info("Interrupted")
        return 130


if __name__ == "__main__":
    sys.exit(main())
