"""BFD instance configuration parser for multi-role failover daemons."""

__version__ = "0.1.0"
