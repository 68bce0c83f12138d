"""
Test suite for the Task Manager application.

This package contains:
- unit/: Model and repository tests
- integration/: REST API tests using the Flask test client
- mocks/: Email relay tests with the provider mocked out
"""
