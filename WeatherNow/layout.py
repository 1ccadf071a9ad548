"""Layout and rendering logic for the weather screens - pure functions for testability."""
from typing import List

from localization import LayoutDirection, Localizer
from navigation import MenuItem, NavigationDestination, NavigationManager
from weather_view_model import ViewPhase, ViewState, WeatherViewModel


MIN_WIDTH = 24
MAX_WIDTH = 72
WIDE_THRESHOLD = 60


def display_width(columns: int) -> int:
    """
    Usable text width for a terminal of ``columns`` columns.

    Narrow terminals use everything they have (down to MIN_WIDTH);
    wide ones are capped so lines stay readable.
    """
    return max(MIN_WIDTH, min(columns, MAX_WIDTH))


def is_wide(width: int) -> bool:
    return width >= WIDE_THRESHOLD


def align(lines: List[str], localizer: Localizer, width: int) -> List[str]:
    """Right-align lines for right-to-left languages."""
    if localizer.layout_direction is LayoutDirection.RIGHT_TO_LEFT:
        return [line.rjust(width) for line in lines]
    return list(lines)


def rule(width: int) -> str:
    return "─" * width


def render_loading(localizer: Localizer) -> List[str]:
    return [localizer.string("loading")]


def render_error(state: ViewState, localizer: Localizer) -> List[str]:
    """Error message plus the retry hint."""
    message = state.error_message or localizer.string("error")
    return [message, f"[ {localizer.string('retry')} ]"]


def _detail_rows(view_model: WeatherViewModel, localizer: Localizer, width: int) -> List[str]:
    weather = view_model.weather_data
    details = [
        (localizer.string("humidity"), weather.humidity),
        (localizer.string("wind_direction"), f"{weather.wind_direction} ({weather.wind_direction_icon})"),
        (localizer.string("wind_speed"), weather.formatted_wind_speed),
    ]
    if is_wide(width):
        # one row, like the tablet layout
        return ["   ".join(f"{title}: {value}" for title, value in details)]
    return [f"{title}: {value}" for title, value in details]


def render_home(view_model: WeatherViewModel, localizer: Localizer, width: int = MAX_WIDTH) -> List[str]:
    """Current conditions card for the home screen."""
    weather = view_model.weather_data
    if weather is None:
        return [localizer.string("no_data")]

    lines = [
        weather.city,
        view_model.formatted_date,
        rule(width),
        weather.formatted_temp,
        weather.capitalized_weather,
        f"{localizer.string('feels_like')} {weather.feels_like}",
        f"{localizer.string('high')}:{int(weather.high)}°  {localizer.string('low')}:{int(weather.low)}°",
        rule(width),
    ]
    lines.extend(_detail_rows(view_model, localizer, width))
    return lines


def render_weather_news(view_model: WeatherViewModel, localizer: Localizer, width: int = MAX_WIDTH) -> List[str]:
    """Weather news screen: headline plus a summary of current conditions."""
    lines = [
        localizer.string("weather_news_title"),
        localizer.string("latest_weather_updates"),
        rule(width),
        localizer.string("weather_forecast"),
    ]
    weather = view_model.weather_data
    if weather is None:
        lines.append(localizer.string("no_data"))
        return lines

    lines.append(f"{localizer.string('current_conditions_in')} {weather.city}")
    if weather.has_icon:
        lines.append(weather.weather_icon)
    lines.extend([
        weather.formatted_temp,
        weather.weather,
        f"{localizer.string('feels_like')} {weather.feels_like}",
        weather.formatted_high_low,
    ])
    return lines


def render_menu(navigation: NavigationManager, localizer: Localizer, width: int = MAX_WIDTH) -> List[str]:
    """Side menu with the selected entry marked."""
    lines = [
        localizer.string("menu_welcome"),
        localizer.string("menu_subtitle"),
        rule(width),
    ]
    for item in MenuItem:
        marker = ">" if item is navigation.selected_menu_item else " "
        lines.append(f"{marker} {localizer.string(item.localized_key)}")
    lines.extend([
        rule(width),
        f"{localizer.string('language')}: {localizer.language.display_name}",
        localizer.string("version"),
    ])
    return lines


def render_screen(
    view_model: WeatherViewModel,
    navigation: NavigationManager,
    localizer: Localizer,
    width: int = MAX_WIDTH
) -> List[str]:
    """
    Render whatever is visible: the menu when open, otherwise the current screen.

    Weather screens show loading, then an error (checked before data,
    since data from an earlier fetch may still be held), then content.
    """
    if navigation.is_menu_open:
        lines = render_menu(navigation, localizer, width)
    elif navigation.current is NavigationDestination.SETTINGS:
        lines = [localizer.string("menu_settings")]
    else:
        phase = view_model.state.phase
        if phase is ViewPhase.LOADING:
            lines = render_loading(localizer)
        elif phase is ViewPhase.ERRORED:
            lines = render_error(view_model.state, localizer)
        elif navigation.current is NavigationDestination.WEATHER_NEWS:
            lines = render_weather_news(view_model, localizer, width)
        else:
            lines = render_home(view_model, localizer, width)
    return align(lines, localizer, width)
