"""Hotel catalog screen: fetch, decode, sort and render a list of hotels."""

__version__ = "0.1.0"
