"""diskscan — bounded, parallel scanning of cache, trash, log and large files."""

__version__ = "0.1.0"
