"""Infrastructure: wireless interface discovery via sysfs.

A network interface is wireless when its sysfs directory has a
``wireless`` subdirectory, e.g. ``/sys/class/net/wlan0/wireless``.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from moodlebox.exceptions import (
    AmbiguousWirelessInterfaceError,
    WirelessInterfaceNotFoundError,
)

logger = logging.getLogger(__name__)

NET_CLASS_PATH = Path("/sys/class/net")


def list_wireless_interfaces(
    net_path: str | os.PathLike[str] = NET_CLASS_PATH,
) -> tuple[str, ...]:
    """Return the sorted names of all wireless interfaces under *net_path*.

    Entries in ``/sys/class/net`` are symlinks; they are followed.  A
    missing or unreadable *net_path* yields an empty tuple.
    """
    root = Path(net_path)
    try:
        entries = list(root.iterdir())
    except OSError as exc:
        logger.debug("Cannot list %s: %s", root, exc)
        return ()
    return tuple(sorted(entry.name for entry in entries if (entry / "wireless").is_dir()))


def get_wireless_interface_name(
    net_path: str | os.PathLike[str] = NET_CLASS_PATH,
) -> str:
    """Return the single wireless interface name, usually ``wlan0``.

    Raises
    ------
    WirelessInterfaceNotFoundError
        When no interface is wireless.
    AmbiguousWirelessInterfaceError
        When more than one interface is wireless.
    """
    interfaces = list_wireless_interfaces(net_path)
    if not interfaces:
        raise WirelessInterfaceNotFoundError(
            f"No wireless interface found under {net_path}.",
            hint="Check that the Wi-Fi adapter is enabled (rfkill list).",
        )
    if len(interfaces) > 1:
        raise AmbiguousWirelessInterfaceError(interfaces)
    return interfaces[0]
