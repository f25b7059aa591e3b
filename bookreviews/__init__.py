"""
Book Reviews API

A FastAPI service for a book catalog with user reviews and a
denormalized rating summary on every book.
"""

__version__ = "1.0.0"
