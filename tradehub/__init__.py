"""FX Trade Hub - STP inbound message pipeline."""

__version__ = "1.0.0"
