"""Continent, country and zone name lookup for IANA timezone identifiers."""

from __future__ import annotations

import logging
from collections.abc import Mapping

from heartbeat_notifier.models import TimezoneInfo

logger = logging.getLogger(__name__)

UNKNOWN_TIMEZONE = TimezoneInfo(
    continent="Unknown",
    country="Unknown",
    local_zone_name="Unknown",
)

# zone id -> (continent, country, zone name)
TIMEZONE_TABLE: Mapping[str, tuple[str, str, str]] = {
    "Europe/Amsterdam": ("Europe", "Netherlands", "Central European Time"),
    "Europe/Andorra": ("Europe", "Andorra", "Central European Time"),
    "Europe/Belgrade": ("Europe", "Serbia", "Central European Time"),
    "Europe/Berlin": ("Europe", "Germany", "Central European Time"),
    "Europe/Brussels": ("Europe", "Belgium", "Central European Time"),
    "Europe/Bucharest": ("Europe", "Romania", "Eastern European Time"),
    "Europe/Budapest": ("Europe", "Hungary", "Central European Time"),
    "Europe/Chisinau": ("Europe", "Moldova", "Eastern European Time"),
    "Europe/Copenhagen": ("Europe", "Denmark", "Central European Time"),
    "Europe/Dublin": ("Europe", "Ireland", "Greenwich Mean Time"),
    "Europe/Helsinki": ("Europe", "Finland", "Eastern European Time"),
    "Europe/Istanbul": ("Europe", "Turkey", "Turkey Time"),
    "Europe/Kiev": ("Europe", "Ukraine", "Eastern European Time"),
    "Europe/Kyiv": ("Europe", "Ukraine", "Eastern European Time"),
    "Europe/Lisbon": ("Europe", "Portugal", "Western European Time"),
    "Europe/London": ("Europe", "United Kingdom", "Greenwich Mean Time"),
    "Europe/Luxembourg": ("Europe", "Luxembourg", "Central European Time"),
    "Europe/Madrid": ("Europe", "Spain", "Central European Time"),
    "Europe/Minsk": ("Europe", "Belarus", "Minsk Time"),
    "Europe/Monaco": ("Europe", "Monaco", "Central European Time"),
    "Europe/Moscow": ("Europe", "Russia", "Moscow Time"),
    "Europe/Oslo": ("Europe", "Norway", "Central European Time"),
    "Europe/Paris": ("Europe", "France", "Central European Time"),
    "Europe/Prague": ("Europe", "Czech Republic", "Central European Time"),
    "Europe/Riga": ("Europe", "Latvia", "Eastern European Time"),
    "Europe/Rome": ("Europe", "Italy", "Central European Time"),
    "Europe/Samara": ("Europe", "Russia", "Samara Time"),
    "Europe/Sofia": ("Europe", "Bulgaria", "Eastern European Time"),
    "Europe/Stockholm": ("Europe", "Sweden", "Central European Time"),
    "Europe/Tallinn": ("Europe", "Estonia", "Eastern European Time"),
    "Europe/Tirane": ("Europe", "Albania", "Central European Time"),
    "Europe/Vaduz": ("Europe", "Liechtenstein", "Central European Time"),
    "Europe/Vienna": ("Europe", "Austria", "Central European Time"),
    "Europe/Vilnius": ("Europe", "Lithuania", "Eastern European Time"),
    "Europe/Warsaw": ("Europe", "Poland", "Central European Time"),
    "Europe/Zurich": ("Europe", "Switzerland", "Central European Time"),
    "America/Anchorage": ("North America", "United States", "Alaska Standard Time"),
    "America/Chicago": ("North America", "United States", "Central Standard Time"),
    "America/Denver": ("North America", "United States", "Mountain Standard Time"),
    "America/Detroit": ("North America", "United States", "Eastern Standard Time"),
    "America/Indiana/Indianapolis": (
        "North America",
        "United States",
        "Eastern Standard Time",
    ),
    "America/Indianapolis": ("North America", "United States", "Eastern Standard Time"),
    "America/Los_Angeles": ("North America", "United States", "Pacific Standard Time"),
    "America/Mexico_City": ("North America", "Mexico", "Central Standard Time"),
    "America/New_York": ("North America", "United States", "Eastern Standard Time"),
    "America/Phoenix": ("North America", "United States", "Mountain Standard Time"),
    "America/Regina": ("North America", "Canada", "Central Standard Time"),
    "America/Toronto": ("North America", "Canada", "Eastern Standard Time"),
    "America/Vancouver": ("North America", "Canada", "Pacific Standard Time"),
    "America/Winnipeg": ("North America", "Canada", "Central Standard Time"),
    "America/Argentina/Buenos_Aires": ("South America", "Argentina", "Argentina Time"),
    "America/Asuncion": ("South America", "Paraguay", "Paraguay Time"),
    "America/Bahia": ("South America", "Brazil", "Brasilia Time"),
    "America/Barbados": ("South America", "Barbados", "Atlantic Standard Time"),
    "America/Belize": ("South America", "Belize", "Central Standard Time"),
    "America/Bogota": ("South America", "Colombia", "Colombia Time"),
    "America/Caracas": ("South America", "Venezuela", "Venezuela Time"),
    "America/Curacao": ("South America", "Curacao", "Atlantic Standard Time"),
    "America/Guatemala": ("South America", "Guatemala", "Central Standard Time"),
    "America/Guayaquil": ("South America", "Ecuador", "Ecuador Time"),
    "America/Lima": ("South America", "Peru", "Peru Time"),
    "America/Montevideo": ("South America", "Uruguay", "Uruguay Time"),
    "America/Panama": ("South America", "Panama", "Eastern Standard Time"),
    "America/Port_of_Spain": (
        "South America",
        "Trinidad and Tobago",
        "Atlantic Standard Time",
    ),
    "America/Santiago": ("South America", "Chile", "Chile Standard Time"),
    "America/Sao_Paulo": ("South America", "Brazil", "Brasilia Time"),
    "Asia/Amman": ("Asia", "Jordan", "Jordan Time"),
    "Asia/Baghdad": ("Asia", "Iraq", "Arabian Standard Time"),
    "Asia/Bahrain": ("Asia", "Bahrain", "Arabian Standard Time"),
    "Asia/Bangkok": ("Asia", "Thailand", "Indochina Time"),
    "Asia/Beirut": ("Asia", "Lebanon", "Eastern European Time"),
    "Asia/Dhaka": ("Asia", "Bangladesh", "Bangladesh Standard Time"),
    "Asia/Dubai": ("Asia", "UAE", "Gulf Standard Time"),
    "Asia/Ho_Chi_Minh": ("Asia", "Vietnam", "Indochina Time"),
    "Asia/Hong_Kong": ("Asia", "Hong Kong", "Hong Kong Time"),
    "Asia/Irkutsk": ("Asia", "Russia", "Irkutsk Time"),
    "Asia/Jakarta": ("Asia", "Indonesia", "Western Indonesia Time"),
    "Asia/Jerusalem": ("Asia", "Israel", "Israel Standard Time"),
    "Asia/Karachi": ("Asia", "Pakistan", "Pakistan Standard Time"),
    "Asia/Kathmandu": ("Asia", "Nepal", "Nepal Time"),
    "Asia/Kolkata": ("Asia", "India", "Indian Standard Time"),
    "Asia/Kuala_Lumpur": ("Asia", "Malaysia", "Malaysia Time"),
    "Asia/Kuwait": ("Asia", "Kuwait", "Arabian Standard Time"),
    "Asia/Makassar": ("Asia", "Indonesia", "Central Indonesia Time"),
    "Asia/Manila": ("Asia", "Philippines", "Philippine Time"),
    "Asia/Muscat": ("Asia", "Oman", "Gulf Standard Time"),
    "Asia/Novosibirsk": ("Asia", "Russia", "Novosibirsk Time"),
    "Asia/Qatar": ("Asia", "Qatar", "Arabian Standard Time"),
    "Asia/Riyadh": ("Asia", "Saudi Arabia", "Arabian Standard Time"),
    "Asia/Seoul": ("Asia", "South Korea", "Korea Standard Time"),
    "Asia/Shanghai": ("Asia", "China", "China Standard Time"),
    "Asia/Singapore": ("Asia", "Singapore", "Singapore Time"),
    "Asia/Taipei": ("Asia", "Taiwan", "Taipei Standard Time"),
    "Asia/Tashkent": ("Asia", "Uzbekistan", "Uzbekistan Time"),
    "Asia/Tehran": ("Asia", "Iran", "Iran Standard Time"),
    "Asia/Tokyo": ("Asia", "Japan", "Japan Standard Time"),
    "Asia/Ulaanbaatar": ("Asia", "Mongolia", "Ulaanbaatar Time"),
    "Asia/Yangon": ("Asia", "Myanmar", "Myanmar Time"),
    "Australia/Adelaide": ("Australia", "Australia", "Australian Central Standard Time"),
    "Australia/Brisbane": ("Australia", "Australia", "Australian Eastern Standard Time"),
    "Australia/Darwin": ("Australia", "Australia", "Australian Central Standard Time"),
    "Australia/Hobart": ("Australia", "Australia", "Australian Eastern Daylight Time"),
    "Australia/Melbourne": ("Australia", "Australia", "Australian Eastern Daylight Time"),
    "Australia/Perth": ("Australia", "Australia", "Australian Western Standard Time"),
    "Australia/Sydney": ("Australia", "Australia", "Australian Eastern Daylight Time"),
    "Africa/Addis_Ababa": ("Africa", "Ethiopia", "East Africa Time"),
    "Africa/Cairo": ("Africa", "Egypt", "Eastern European Time"),
    "Africa/Casablanca": ("Africa", "Morocco", "Western European Time"),
    "Africa/Harare": ("Africa", "Zimbabwe", "Central Africa Time"),
    "Africa/Johannesburg": ("Africa", "South Africa", "South Africa Standard Time"),
    "Africa/Khartoum": ("Africa", "Sudan", "Central Africa Time"),
    "Africa/Lagos": ("Africa", "Nigeria", "West Africa Time"),
    "Africa/Nairobi": ("Africa", "Kenya", "East Africa Time"),
    "Africa/Tripoli": ("Africa", "Libya", "Eastern European Time"),
    "Pacific/Auckland": ("Pacific", "New Zealand", "New Zealand Standard Time"),
    "Pacific/Fiji": ("Pacific", "Fiji", "Fiji Time"),
    "Pacific/Guam": ("Pacific", "Guam", "Chamorro Standard Time"),
    "Pacific/Honolulu": ("Pacific", "Hawaii", "Hawaii-Aleutian Standard Time"),
    "Pacific/Pago_Pago": ("Pacific", "American Samoa", "Samoa Standard Time"),
    "Pacific/Port_Moresby": ("Pacific", "Papua New Guinea", "Papua New Guinea Time"),
    "Pacific/Suva": ("Pacific", "Fiji", "Fiji Time"),
    "Pacific/Tarawa": ("Pacific", "Kiribati", "Gilbert Island Time"),
    "Pacific/Wellington": ("Pacific", "New Zealand", "New Zealand Standard Time"),
    "Antarctica/Palmer": ("Other", "Antarctica", "Chile Summer Time"),
    "Antarctica/Vostok": ("Other", "Antarctica", "Vostok Time"),
    "Indian/Chagos": ("Other", "British Indian Ocean Territory", "Indian Ocean Time"),
    "Indian/Christmas": ("Other", "Australia", "Christmas Island Time"),
    "Indian/Kerguelen": ("Other", "France", "French Southern and Antarctic Time"),
    "Indian/Maldives": ("Other", "Maldives", "Maldives Time"),
    "Indian/Mauritius": ("Other", "Mauritius", "Mauritius Time"),
    "Indian/Reunion": ("Other", "Réunion", "Réunion Time"),
    "Indian/Seychelles": ("Other", "Seychelles", "Seychelles Time"),
    "UTC": ("Other", "Universal", "Coordinated Universal Time"),
}


class TimezoneDirectory:
    """Read-only lookup of geographic context for zone identifiers."""

    def __init__(self, table: Mapping[str, tuple[str, str, str]] | None = None) -> None:
        self._table = TIMEZONE_TABLE if table is None else table

    def lookup(self, zone_id: str | None) -> TimezoneInfo:
        """Return continent, country and zone name for a zone identifier.

        Unmapped identifiers yield ``UNKNOWN_TIMEZONE``.
        """
        entry = self._table.get(zone_id) if zone_id else None
        if entry is None:
            logger.warning(f"Timezone not found in mappings: {zone_id!r}")
            return UNKNOWN_TIMEZONE

        continent, country, zone_name = entry
        logger.debug(
            f"Timezone {zone_id}: continent={continent}, country={country}, zone={zone_name}"
        )
        return TimezoneInfo(continent=continent, country=country, local_zone_name=zone_name)

    def __contains__(self, zone_id: object) -> bool:
        return zone_id in self._table
