"""
Mocked tests for the Task Manager's external dependencies.

The transactional email provider is replaced with fakes so that
tests never send real email.
"""
