"""Device inventory CSV analyzer.

Reconstructs devices and their components from a sparse spreadsheet export,
validates the upload and derives statistics, listings and exports from it.
"""

__version__ = "0.1.0"
