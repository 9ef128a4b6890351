"""Monte Carlo project schedule simulator."""

__version__ = "0.3.0"
