"""Records management: query, aggregation and export of person records."""

__version__ = "1.0.0"
