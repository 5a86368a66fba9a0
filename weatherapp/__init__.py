"""Weather display app: current conditions and 5-day forecast."""

__version__ = "0.1.0"
