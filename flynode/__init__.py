"""flynode - a single distributed-systems node speaking JSON over stdin/stdout."""

__version__ = "0.1.0"
