"""propdash - trading journal and prop-firm performance dashboard."""

__version__ = "0.1.0"
