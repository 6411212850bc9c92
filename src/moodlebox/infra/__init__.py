"""Infrastructure layer — operating-system integration.

This layer wraps subprocess execution, file reading and sysfs scanning.
Every OS-level failure is either collapsed to ``None`` or re-raised as a
:class:`~moodlebox.exceptions.MoodleboxError` subclass.

Rules
-----
* No imports from ``cli``.
* No user-facing output (no ``print()``, no Rich rendering).
"""

from moodlebox.infra.commands import SubprocessRunner
from moodlebox.infra.files import FileReader, parse_config_file
from moodlebox.infra.network import get_wireless_interface_name, list_wireless_interfaces

__all__: list[str] = [
    "FileReader",
    "SubprocessRunner",
    "get_wireless_interface_name",
    "list_wireless_interfaces",
    "parse_config_file",
]
