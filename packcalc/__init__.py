"""Order pack calculator: choose the packs that fill an order with the least overfill, served over HTTP."""

__version__ = "0.1.0"
__all__ = ["__version__"]