"""Module entrypoint.

Allows:
    python -m log_summarizer analyze --log /var/log/remote.log
"""

from __future__ import annotations

from log_summarizer.cli import main

if __name__ == "__main__":
    main()
