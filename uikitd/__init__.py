"""uikit daemon: serves registered component bundles over HTTP."""

__version__ = "0.1.0"
