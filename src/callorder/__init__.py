"""callorder: flags functions declared out of call order."""

__version__ = "0.1.0"
