"""
Service layer primitives shared by the domain apps.

- ServiceResult: explicit success/failure value returned by services
- BaseService: logger and transaction helpers for service classes

Expected failures (unknown recipient, missing donation, rejected charge)
travel as ServiceResult values so every caller sees the failure modes in
the return type. Exceptions are left for the unexpected (bugs, lost
database connections).

Usage:
    from core.services import BaseService, ServiceResult

    class DonationService(BaseService):
        @classmethod
        def get_for_charge(cls, charge_id: str) -> ServiceResult[Donation]:
            donation = Donation.objects.filter(charge_id=charge_id).first()
            if donation is None:
                return ServiceResult.failure(
                    "Donation not found", error_code="DONATION_NOT_FOUND"
                )
            return ServiceResult.success(donation)
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Generic, TypeVar

from django.db import transaction

if TYPE_CHECKING:
    from collections.abc import Generator
    from typing import Any

T = TypeVar("T")


@dataclass
class ServiceResult(Generic[T]):
    """
    Standard result wrapper for service operations.

    Attributes:
        success: Whether the operation succeeded
        data: Result data if successful (None if failed)
        error: Error message if failed (None if successful)
        error_code: Machine-readable error code for callers to branch on
        errors: Field-level errors for validation failures

    Example:
        result = reconciler.reconcile("ch_1", user.id, DonationStatus.COMPLETED)
        if not result and result.error_code == "DONATION_NOT_FOUND":
            ...
    """

    success: bool
    data: T | None = None
    error: str | None = None
    error_code: str | None = None
    errors: dict[str, list[str]] | None = field(default=None)

    @classmethod
    def success(cls, data: T) -> ServiceResult[T]:
        """Create a successful result carrying ``data``."""
        return cls(success=True, data=data)

    @classmethod
    def failure(
        cls,
        error: str,
        error_code: str | None = None,
        errors: dict[str, list[str]] | None = None,
    ) -> ServiceResult[T]:
        """
        Create a failed result.

        Args:
            error: Human-readable error message
            error_code: Machine-readable error code
            errors: Field-level errors (for validation failures)
        """
        return cls(
            success=False,
            error=error,
            error_code=error_code,
            errors=errors,
        )

    @classmethod
    def from_exception(cls, exc: Exception, error_code: str | None = None) -> ServiceResult[T]:
        """
        Create a failed result from a caught exception.

        Application errors keep their own error code; anything else falls
        back to the exception class name.
        """
        code = error_code or getattr(exc, "error_code", None)
        message = getattr(exc, "message", None) or str(exc)
        return cls(
            success=False,
            error=message,
            error_code=code or exc.__class__.__name__.upper(),
        )

    def to_response(self) -> dict[str, Any]:
        """Convert a failed result to an API error body."""
        if self.success:
            return {"success": True, "data": self.data}

        response: dict[str, Any] = {
            "success": False,
            "error": self.error,
        }
        if self.error_code:
            response["error_code"] = self.error_code
        if self.errors:
            response["errors"] = self.errors
        return response

    def __bool__(self) -> bool:
        return self.success


class BaseService:
    """
    Base class for stateless service classes.

    Subclasses expose classmethods; instance state is only used where a
    collaborator (such as a store handle) is injected at construction.
    """

    @classmethod
    def get_logger(cls) -> logging.Logger:
        """Logger named after the concrete service class."""
        return logging.getLogger(f"{cls.__module__}.{cls.__name__}")

    @classmethod
    @contextmanager
    def atomic(cls) -> Generator[None, None, None]:
        """
        Run the enclosed block in a database transaction.

        Thin wrapper around ``django.db.transaction.atomic`` that makes
        transaction boundaries visible in service code.
        """
        with transaction.atomic():
            yield
