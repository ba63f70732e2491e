"""zsnap: persistent, lockable settings namespaces for the zsnap application."""

__version__ = "0.1.0"
