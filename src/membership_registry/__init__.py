"""Church membership registration: duplicate-aware form submission to a spreadsheet."""

__version__ = "0.1.0"
