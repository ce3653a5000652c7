"""Settings, search shortcuts, normal-mode key parsing and text and file helpers for a vim-like web browser."""

__version__ = "3.7.0"