"""Command-line interface for the jutsudex catalog.

- ``python -m jutsudex.cli update`` refreshes the local store.
- ``python -m jutsudex.cli info NAME`` / ``release NAME`` resolve a name.
- ``python -m jutsudex.cli search KEYWORD`` lists matching techniques.
- ``python -m jutsudex.cli backfill`` / ``clear`` maintain the store.

See :mod:`jutsudex.cli.catalog` for the full command reference.
"""
