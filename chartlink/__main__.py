"""Allow running as `python -m chartlink`."""

from chartlink.cli import main

main()
