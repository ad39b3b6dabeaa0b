"""Version information for the Restobaza Python SDK"""

__version__ = "0.1.0"
