"""Allow ``python -m locale_sync``."""

from locale_sync.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
