"""Console departure boards from the RealTimeTrains API."""

__version__ = "0.1.0"
