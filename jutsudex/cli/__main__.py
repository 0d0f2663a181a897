"""Allow ``python -m jutsudex.cli`` execution."""

from jutsudex.cli.catalog import main

main()
