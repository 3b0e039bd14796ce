"""Tax Calc - forward and inverse tax calculations for billing."""

__version__ = "0.1.0"
