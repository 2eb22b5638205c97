"""Load and resolve versioned package specifications, file sizes, content types and linked files."""

__version__ = "0.1.0"