"""
Authentication application.

Users, and the recipient profile attached to each user.

Key components:
    - User model: Custom email-based user authentication
    - Profile model: Public username and Coinbase Commerce settings
    - ProfileService: Username claims and payment settings

Usage:
    from authentication.models import User, Profile
    from authentication.services import ProfileService
"""
