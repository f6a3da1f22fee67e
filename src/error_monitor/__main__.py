"""Module entrypoint.

Allows:
    python -m error_monitor
"""

from __future__ import annotations

from error_monitor.cli import main

if __name__ == "__main__":
    main()
