"""Allow ``python -m commentwall``."""

from commentwall.cli import main

main()
