"""Allow ``python -m moodlebox`` invocation.

Delegates to the CLI error-boundary entry point so that
``python -m moodlebox`` behaves identically to the ``moodlebox``
console script.
"""

from __future__ import annotations

from moodlebox.cli.app import cli

if __name__ == "__main__":
    cli()
