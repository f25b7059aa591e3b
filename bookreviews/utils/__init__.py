"""
Utilities Package

Helper functions used across the application:
- identifiers.py: opaque id generation and validation
"""
