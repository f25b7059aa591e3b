"""
Services Package

Business logic kept separate from HTTP handling so it can be reused by
routers, scripts and tests.

Current services:
- accounts.py: Signup and login against the user store
- catalog.py: Book store access, listing and search
- rate_limiter.py: Rate limiting with slowapi
- ratings.py: Review aggregation engine (rating summary, ownership)
- security.py: Password hashing and access tokens
"""
