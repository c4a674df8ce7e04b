"""Action links to the monitoring dashboard and the monitored resource."""

from __future__ import annotations

import logging
from collections.abc import Callable
from urllib.parse import urlsplit

import httpx

from heartbeat_notifier.errors import LinkBuildError
from heartbeat_notifier.models import ActionLink, MonitorDescriptor

DASHBOARD_LINK_TEXT = "Visit Uptime Monitor"
DASHBOARD_LINK_VALUE = "Uptime-Monitor"
RESOURCE_LINK_VALUE = "Site"

# Ports of non-browsable services (DNS, SSH, mail, databases, management)
RESERVED_PORTS = frozenset(
    {
        0, 1, 5, 7, 9, 11, 13, 17, 19, 20, 21, 22, 23, 25, 53, 67, 68, 69, 70,
        79, 88, 110, 119, 123, 137, 138, 139, 143, 161, 162, 194, 445, 465,
        514, 540, 543, 544, 546, 547, 563, 587, 593, 631, 636, 853, 993, 995,
        1080, 1433, 1434, 1521, 1522, 1723, 3306, 3389, 5432, 5900, 11211,
    }
)  # fmt: skip

HOST_PORT_MONITOR_TYPES = frozenset({"port", "dns", "gamedig", "steam"})
_BARE_SCHEMES = frozenset({"", "http://", "https://"})

AddressExtractor = Callable[[MonitorDescriptor], str | None]


def monitor_relative_url(monitor_id: int | str | None) -> str:
    """Path of a monitor's dashboard page, relative to the base URL."""
    if monitor_id is None or monitor_id == "":
        raise LinkBuildError("Monitor has no id")
    return f"/dashboard/{monitor_id}"


def extract_address(monitor: MonitorDescriptor) -> str | None:
    """Get the network address a monitor checks, if it has one."""
    monitor_type = (monitor.type or "").strip()

    if monitor_type == "push":
        return None
    if monitor_type == "ping":
        return monitor.hostname or None
    if monitor_type in HOST_PORT_MONITOR_TYPES:
        if not monitor.hostname:
            return None
        if monitor.port:
            return f"{monitor.hostname}:{monitor.port}"
        return monitor.hostname

    address = (monitor.address or "").strip()
    if address in _BARE_SCHEMES:
        return None
    return address


def parse_resource_url(address: str) -> httpx.URL:
    """Parse an absolute URL with a scheme and host.

    Raises:
        LinkBuildError: If the address is not an absolute URL.
    """
    try:
        url = httpx.URL(address)
    except (httpx.InvalidURL, TypeError, ValueError) as e:
        raise LinkBuildError(f"Invalid URL: {address!r}") from e

    if not url.scheme or not url.host:
        raise LinkBuildError(f"Not an absolute URL: {address!r}")
    return url


def explicit_port(address: str) -> int | None:
    """Port written in the address, including scheme defaults such as :443."""
    try:
        return urlsplit(address.strip()).port
    except ValueError:
        return None


def resolve_port(url: httpx.URL, monitor: MonitorDescriptor, address: str | None = None) -> int:
    """Port a resource URL points at: explicit, monitor-configured, or scheme default.

    ``httpx.URL`` drops default ports, so the raw address is checked as well.
    """
    if url.port is not None:
        return url.port
    if address:
        port = explicit_port(address)
        if port is not None:
            return port
    if monitor.port:
        return monitor.port
    return 443 if url.scheme == "https" else 80


class ActionLinkBuilder:
    """Builds the dashboard and "visit resource" links for a monitor."""

    def __init__(
        self,
        *,
        address_extractor: AddressExtractor = extract_address,
        reserved_ports: frozenset[int] = RESERVED_PORTS,
        logger: logging.Logger | None = None,
    ) -> None:
        """Initialize the builder.

        Args:
            address_extractor: Resolves a monitor's network address.
            reserved_ports: Ports that never get a resource link.
            logger: Logger for skipped links. Defaults to the module logger.
        """
        self.address_extractor = address_extractor
        self.reserved_ports = reserved_ports
        self._log = logger or logging.getLogger(__name__)

    def build(self, base_url: str | None, monitor: MonitorDescriptor) -> list[ActionLink]:
        """Build action links. Dashboard link first, resource link second."""
        links: list[ActionLink] = []

        if base_url:
            try:
                links.append(self._dashboard_link(base_url, monitor))
            except LinkBuildError as e:
                self._log.error(
                    f"Failed to build dashboard link for {monitor.name!r} ({base_url}): {e}"
                )

        address = self.address_extractor(monitor)
        if not address:
            self._log.debug(f"No address for monitor {monitor.name!r} ({monitor.type})")
            return links

        try:
            url = parse_resource_url(address)
        except LinkBuildError as e:
            self._log.debug(f"Skipping resource link for {monitor.name!r}: {e}")
            return links

        port = resolve_port(url, monitor, address)
        if port in self.reserved_ports:
            self._log.info(f"Address {url} excluded due to reserved port {port}")
            return links

        links.append(
            ActionLink(
                text=f"Visit {monitor.name}",
                value=RESOURCE_LINK_VALUE,
                url=str(url),
            )
        )
        return links

    def _dashboard_link(self, base_url: str, monitor: MonitorDescriptor) -> ActionLink:
        return ActionLink(
            text=DASHBOARD_LINK_TEXT,
            value=DASHBOARD_LINK_VALUE,
            url=f"{base_url.rstrip('/')}{monitor_relative_url(monitor.id)}",
        )
