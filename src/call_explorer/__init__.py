"""Call-center disposition explorer: CSV -> category breakdown -> notes & keywords."""

__version__ = "0.1.0"
