"""
Tests for authentication app.

This package contains test modules for:
- test_models.py: User, Profile, username validation
- test_services.py: ProfileService tests
- test_serializers.py: Profile serializers, secret masking
- test_views.py: Profile and token API endpoint tests

Usage:
    pytest authentication/tests/
    pytest authentication/tests/test_models.py
"""
