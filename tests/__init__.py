"""
Test Suite for the Book Reviews API

Test Organization:
- conftest.py: Shared fixtures (per-test database, client, users, books)
- test_ratings.py: Review aggregation engine
- test_auth.py: /signup, /login and bearer authentication
- test_books.py: /books endpoints
- test_reviews.py: Review endpoints and the rating summary
- test_search.py: /search
- test_config.py: Settings, pagination parsing, / and /health
"""
