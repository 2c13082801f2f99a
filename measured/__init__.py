"""
Measured - rounded display of measured values with uncertainties.
"""

__version__ = "0.1.0"
