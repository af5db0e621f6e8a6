"""
Core Application - Infrastructure & Base Classes

This app contains infrastructure code shared by the domain apps
(accounts, participation, notifications). It holds no domain logic.

Models (import from core.models):
    - BaseModel: Abstract model with timestamps (created_at, updated_at)
    - Setting: Runtime key/value configuration

Model Mixins (import from core.model_mixins):
    - SoftDeleteMixin: Hide/restore support (hidden_at, confirmed_hide_at)

Managers (import from core.managers):
    - SoftDeleteQuerySet: hide_all/restore_all and hidden-state filters
    - SoftDeleteManager: Excludes hidden records by default
    - WithHiddenManager: Includes hidden records (default manager)

Services (import from core.services):
    - BaseService: Base class for service layer
    - ServiceResult: Standard result wrapper for success/failure handling

Exceptions (import from core.exceptions):
    - BaseApplicationError: Base exception with error codes
    - NotFoundError: Resource not found
    - PermissionDeniedError: Authorization failures
    - ConflictError: State conflicts

Helpers (import from core.helpers):
    - friendly_token: Random URL-safe token
    - get_client_ip: Client IP extraction from request

Note:
    Django models, model mixins and managers are NOT imported here to
    avoid AppRegistryNotReady errors. Import them from their modules.
"""

# Services (no Django model dependencies)
from .services import BaseService, ServiceResult

# Exceptions (no Django dependencies)
from .exceptions import (
    BaseApplicationError,
    ConflictError,
    NotFoundError,
    PermissionDeniedError,
)

# Helpers (no Django model dependencies)
from .helpers import friendly_token, get_client_ip

__all__ = [
    # Services
    "BaseService",
    "ServiceResult",
    # Exceptions
    "BaseApplicationError",
    "NotFoundError",
    "PermissionDeniedError",
    "ConflictError",
    # Helpers
    "friendly_token",
    "get_client_ip",
]
