"""Allow ``python -m ragdocs.cli`` execution."""

from ragdocs.cli.commands import main

main()
