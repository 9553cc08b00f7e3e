"""
Tests for donations app.

Usage:
    pytest donations/
    pytest donations/webhooks/tests/
"""
