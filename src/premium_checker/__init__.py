"""Options premium checker: puts and call credit spreads ranked by annualized ROI."""

__version__ = "0.3.0"
