"""
Tests for notifications app.

This package contains test modules for:
- test_models.py: Notification counter and read tests

Usage:
    pytest notifications/tests/
"""
