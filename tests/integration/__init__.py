"""
API test package for the Task Manager.

This package contains tests for the REST API endpoints.
Tests use the Flask test client and cover:
- CRUD operations on the daily, completed and regular lists
- Presence and category validation
- Error handling
"""
