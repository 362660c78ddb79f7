"""A small interactive command shell with a pipe, redirections and cd, setenv and exit."""

__version__ = "0.1.0"