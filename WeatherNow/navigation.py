"""Navigation and side-menu state."""
import logging
from enum import Enum
from typing import Callable, List, Optional


class NavigationDestination(Enum):
    HOME = "home"
    WEATHER_NEWS = "weather_news"
    SETTINGS = "settings"


class MenuItem(Enum):
    DASHBOARD = "Dashboard"
    WEATHER_NEWS = "Weather News"
    RAIN_RADAR = "Rain Radar"
    WEATHER_STATIONS = "Weather Stations"
    NOTIFICATION_CENTER = "Notification Center"
    MONTHLY_REPORTS = "Monthly Reports"
    WORLDWIDE_CITIES = "Worldwide Cities"
    ABOUT_US = "About Us"
    SETTINGS = "Settings"
    DISCLAIMER = "Disclaimer"

    @property
    def localized_key(self) -> str:
        return "menu_" + self.name.lower()

    @property
    def destination(self) -> Optional[NavigationDestination]:
        return _MENU_DESTINATIONS.get(self)

    @property
    def is_navigable(self) -> bool:
        return self.destination is not None


_MENU_DESTINATIONS = {
    MenuItem.DASHBOARD: NavigationDestination.HOME,
    MenuItem.WEATHER_NEWS: NavigationDestination.WEATHER_NEWS,
    MenuItem.SETTINGS: NavigationDestination.SETTINGS,
}

_DESTINATION_MENU_ITEMS = {destination: item for item, destination in _MENU_DESTINATIONS.items()}


class NavigationEvent(Enum):
    REFRESH_REQUESTED = "refresh_requested"
    VIEW_APPEARED = "view_appeared"


NavigationListener = Callable[[NavigationEvent, NavigationDestination], None]


class NavigationManager:
    """
    Holds the navigation stack, the selected menu item and the menu-open flag.

    Home is the root and is never on the stack. Listeners hear when a
    screen becomes visible and when the user asks for a refresh.
    """

    def __init__(self):
        self.selected_menu_item = MenuItem.DASHBOARD
        self.path: List[NavigationDestination] = []
        self.is_menu_open = False
        self._listeners: List[NavigationListener] = []

    @property
    def current(self) -> NavigationDestination:
        return self.path[-1] if self.path else NavigationDestination.HOME

    def subscribe(self, listener: NavigationListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _emit(self, event: NavigationEvent, destination: NavigationDestination) -> None:
        logging.debug(f"Navigation event {event.value} on {destination.value}")
        for listener in list(self._listeners):
            listener(event, destination)

    def navigate_to(self, destination: NavigationDestination) -> None:
        if destination is NavigationDestination.HOME:
            self.path = []
        else:
            self.path.append(destination)
        self.selected_menu_item = _DESTINATION_MENU_ITEMS[destination]
        self.close_menu()
        self._emit(NavigationEvent.VIEW_APPEARED, destination)

    def select_menu_item(self, item: MenuItem) -> None:
        """Select a menu entry; entries without a screen only update the selection."""
        if item.destination is not None:
            self.navigate_to(item.destination)
        self.selected_menu_item = item
        self.close_menu()

    def open_menu(self) -> None:
        self.is_menu_open = True

    def close_menu(self) -> None:
        self.is_menu_open = False

    def toggle_menu(self) -> None:
        if self.is_menu_open:
            self.close_menu()
        else:
            self.open_menu()

    def pop_to_root(self) -> None:
        self.path = []
        self.selected_menu_item = MenuItem.DASHBOARD
        self._emit(NavigationEvent.VIEW_APPEARED, NavigationDestination.HOME)

    def go_back(self) -> None:
        if not self.path:
            return
        self.path.pop()
        if self.current is NavigationDestination.HOME:
            self.selected_menu_item = MenuItem.DASHBOARD
        self._emit(NavigationEvent.VIEW_APPEARED, self.current)

    def request_refresh(self) -> None:
        """Pull-to-refresh on the visible screen."""
        self._emit(NavigationEvent.REFRESH_REQUESTED, self.current)
