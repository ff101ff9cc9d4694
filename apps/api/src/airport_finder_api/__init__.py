"""Airport Finder API: cached Aviationstack airport directory over HTTP."""

__version__ = "0.1.0"
