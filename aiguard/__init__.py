"""aiguard - security audit for locally installed AI coding tools."""

__version__ = "0.1.0"
