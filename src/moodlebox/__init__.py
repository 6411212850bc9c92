"""moodlebox — Raspberry Pi host introspection for the MoodleBox appliance.

Decodes hardware revision codes and throttled state, parses ``key=value``
configuration files, and locates the wireless interface.
"""

from moodlebox.version import __version__

__all__: list[str] = ["__version__"]
