"""diskwatch - mounted filesystem usage monitor with cooldown-suppressed alerts."""

__version__ = "0.1.0"
