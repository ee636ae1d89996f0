"""Chat bot configuration, command line, message engine and plugin logic."""

__version__ = "1.4.0"