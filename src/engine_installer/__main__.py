"""Allow running as ``python -m engine_installer``."""

from .cli.main import main

main()
