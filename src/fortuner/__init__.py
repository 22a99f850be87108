"""fortuner: print random or matching fortunes from fortune files."""

__version__ = '0.1.0'
