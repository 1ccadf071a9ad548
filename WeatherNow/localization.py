"""Localization lookup - English/Arabic string tables and layout direction."""
import logging
from datetime import datetime
from enum import Enum
from typing import Callable, Dict, List


class SupportedLanguage(Enum):
    ENGLISH = "en"
    ARABIC = "ar"

    @property
    def display_name(self) -> str:
        return "English" if self is SupportedLanguage.ENGLISH else "العربية"

    @property
    def font_name(self) -> str:
        return "Effra" if self is SupportedLanguage.ENGLISH else "Cairo"

    @property
    def is_rtl(self) -> bool:
        return self is SupportedLanguage.ARABIC

    @property
    def logo_image_name(self) -> str:
        return f"logo_{self.value}"

    @classmethod
    def from_code(cls, code: str) -> "SupportedLanguage":
        """Resolve a language code such as "ar" or "en-US"; unknown codes give English."""
        prefix = (code or "").strip().lower().split("-")[0].split("_")[0]
        for language in cls:
            if language.value == prefix:
                return language
        logging.warning(f"Unsupported language code {code!r}, using English")
        return cls.ENGLISH


class LayoutDirection(Enum):
    LEFT_TO_RIGHT = "ltr"
    RIGHT_TO_LEFT = "rtl"


STRINGS: Dict[SupportedLanguage, Dict[str, str]] = {
    SupportedLanguage.ENGLISH: {
        "loading": "Loading weather data...",
        "error": "Error",
        "data_error": "Unable to load weather data",
        "retry": "Retry",
        "feels_like": "Feels like",
        "high": "H",
        "low": "L",
        "humidity": "Humidity",
        "wind_direction": "Wind Direction",
        "wind_speed": "Wind Speed",
        "weather_news_title": "Weather News",
        "latest_weather_updates": "Latest weather updates",
        "weather_forecast": "Weather Forecast",
        "current_conditions_in": "Current Conditions in",
        "no_data": "No weather data available",
        "menu_welcome": "Welcome",
        "menu_subtitle": "Select an option below",
        "menu_dashboard": "Dashboard",
        "menu_weather_news": "Weather News",
        "menu_rain_radar": "Rain Radar",
        "menu_weather_stations": "Weather Stations",
        "menu_notification_center": "Notification Center",
        "menu_monthly_reports": "Monthly Reports",
        "menu_worldwide_cities": "Worldwide Cities",
        "menu_about_us": "About Us",
        "menu_settings": "Settings",
        "menu_disclaimer": "Disclaimer",
        "language": "Language",
        "version": "Version 1.0.0",
    },
    SupportedLanguage.ARABIC: {
        "loading": "جارٍ تحميل بيانات الطقس...",
        "error": "خطأ",
        "data_error": "تعذر تحميل بيانات الطقس",
        "retry": "إعادة المحاولة",
        "feels_like": "الإحساس الفعلي",
        "high": "العظمى",
        "low": "الصغرى",
        "humidity": "الرطوبة",
        "wind_direction": "اتجاه الرياح",
        "wind_speed": "سرعة الرياح",
        "weather_news_title": "أخبار الطقس",
        "latest_weather_updates": "آخر تحديثات الطقس",
        "weather_forecast": "توقعات الطقس",
        "current_conditions_in": "الأحوال الحالية في",
        "no_data": "لا توجد بيانات طقس",
        "menu_welcome": "مرحباً",
        "menu_subtitle": "اختر أحد الخيارات أدناه",
        "menu_dashboard": "لوحة التحكم",
        "menu_weather_news": "أخبار الطقس",
        "menu_rain_radar": "رادار الأمطار",
        "menu_weather_stations": "محطات الطقس",
        "menu_notification_center": "مركز الإشعارات",
        "menu_monthly_reports": "التقارير الشهرية",
        "menu_worldwide_cities": "مدن العالم",
        "menu_about_us": "من نحن",
        "menu_settings": "الإعدادات",
        "menu_disclaimer": "إخلاء المسؤولية",
        "language": "اللغة",
        "version": "الإصدار 1.0.0",
    },
}

MONTHS = {
    SupportedLanguage.ENGLISH: [
        "January", "February", "March", "April", "May", "June",
        "July", "August", "September", "October", "November", "December",
    ],
    SupportedLanguage.ARABIC: [
        "يناير", "فبراير", "مارس", "أبريل", "مايو", "يونيو",
        "يوليو", "أغسطس", "سبتمبر", "أكتوبر", "نوفمبر", "ديسمبر",
    ],
}

# Monday first, matching datetime.weekday()
WEEKDAYS = {
    SupportedLanguage.ENGLISH: [
        "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday",
    ],
    SupportedLanguage.ARABIC: [
        "الاثنين", "الثلاثاء", "الأربعاء", "الخميس", "الجمعة", "السبت", "الأحد",
    ],
}


class Localizer:
    """
    String lookup for the current language.

    Instances are passed explicitly to whatever needs them; listeners
    registered with ``subscribe`` are told when the language changes.
    """

    def __init__(self, language: SupportedLanguage = SupportedLanguage.ENGLISH):
        self.language = language
        self._listeners: List[Callable[[SupportedLanguage], None]] = []

    def string(self, key: str) -> str:
        """Localized string for ``key``; falls back to English, then to the key itself."""
        table = STRINGS[self.language]
        if key in table:
            return table[key]
        fallback = STRINGS[SupportedLanguage.ENGLISH].get(key)
        if fallback is None:
            logging.debug(f"No localized string for key {key!r}")
            return key
        return fallback

    @property
    def layout_direction(self) -> LayoutDirection:
        return LayoutDirection.RIGHT_TO_LEFT if self.language.is_rtl else LayoutDirection.LEFT_TO_RIGHT

    def switch_language(self, language: SupportedLanguage) -> None:
        if language is self.language:
            return
        logging.info(f"Switching language: {self.language.value} -> {language.value}")
        self.language = language
        for listener in list(self._listeners):
            listener(language)

    def toggle_language(self) -> None:
        if self.language is SupportedLanguage.ENGLISH:
            self.switch_language(SupportedLanguage.ARABIC)
        else:
            self.switch_language(SupportedLanguage.ENGLISH)

    def subscribe(self, listener: Callable[[SupportedLanguage], None]) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def month_name(self, month: int) -> str:
        return MONTHS[self.language][month - 1]

    def weekday_name(self, weekday: int) -> str:
        return WEEKDAYS[self.language][weekday]

    def format_long_date(self, moment: datetime) -> str:
        """
        Long calendar date without time, e.g. "Tuesday, November 14, 2023".

        Arabic puts the day before the month: "الثلاثاء، 14 نوفمبر 2023".
        """
        weekday = self.weekday_name(moment.weekday())
        month = self.month_name(moment.month)
        if self.language is SupportedLanguage.ARABIC:
            return f"{weekday}، {moment.day} {month} {moment.year}"
        return f"{weekday}, {month} {moment.day}, {moment.year}"
