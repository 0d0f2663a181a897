"""jutsudex: a searchable catalog of ninja techniques with tiered name matching."""

__version__ = "0.1.0"
