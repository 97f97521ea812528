"""eppo_reports - CSV reports over experiments from the Eppo API.

The package fetches the experiment collection once, filters it client-side
(by team or by ready/wrap-up status), normalizes owner information and
writes a CSV that can be imported into a spreadsheet.
"""

__all__ = ["__version__"]

__version__ = "0.2.0"
