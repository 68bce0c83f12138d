"""
Routes package for the Task Manager application.

This package contains route blueprints:
- api: REST endpoints for per-user task lists
- email: relay to the transactional email provider
- status: liveness and health-check routes
"""
