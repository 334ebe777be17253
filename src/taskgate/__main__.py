"""Allow ``python -m taskgate``."""

from taskgate.cli import main

main()
