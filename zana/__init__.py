"""Book metadata lookup across Google Books and Open Library."""
__version__ = "0.1.0"
