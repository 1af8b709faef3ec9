# contract harness for a coordinate-based current-weather HTTP API

__version__ = "0.1.0"
