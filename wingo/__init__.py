"""WinGo BIG/SMALL ensemble predictor."""

__version__ = "2.0.0"
