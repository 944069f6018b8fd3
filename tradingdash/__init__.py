"""Area filters, trade tape, price chart, scenarios and forecast noise for a trading dashboard."""

__version__ = "0.1.0"