"""
Core Application - Infrastructure & Base Classes

Generic, reusable base classes shared by the domain apps. Nothing here
knows about recipients or donations.

Models (import from core.models):
    - BaseModel: Abstract model with timestamps (created_at, updated_at)

Model Mixins (import from core.model_mixins):
    - UUIDPrimaryKeyMixin: UUID as primary key

Services (import from core.services):
    - BaseService: Base class for service layer
    - ServiceResult: Explicit success/failure result

Exceptions (import from core.exceptions):
    - BaseApplicationError: Base exception with error codes
    - ValidationError, NotFoundError, ExternalServiceError

Helpers (import from core.helpers):
    - mask_secret, get_client_ip

Views (import from core.views):
    - health_check
"""
