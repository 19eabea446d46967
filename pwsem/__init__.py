"""pwsem — semantyka stanów maszyn sterujących nad assembly maszyn składowych."""

__version__ = "0.1.0"
