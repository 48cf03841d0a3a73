"""Service catalog domain service."""

import logging
from decimal import Decimal
from typing import Optional

from shiftledger.database.base import Database
from shiftledger.domain import errors
from shiftledger.domain.entities import Service as ServiceEntity
from shiftledger.utils.amount_parser import to_money

logger = logging.getLogger(__name__)


class ServiceCatalogService:
    """Service for managing the priced services a salon sells."""

    def __init__(self, db: Database):
        """Initialize catalog service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_service(
        self,
        name: str,
        price: Decimal,
        duration_minutes: int = 30,
        description: str = "",
    ) -> int:
        """Create a catalog service.

        Args:
            name: Service name (unique)
            price: Price charged per unit
            duration_minutes: Expected duration
            description: Optional description

        Returns:
            Service ID

        Raises:
            ValidationError: If name is empty, price negative or duration not positive
            ConflictError: If a service with the same name exists
        """
        name = (name or "").strip()
        if not name:
            raise errors.ValidationError("Service name cannot be empty")
        price = self._validate_price(price)
        if duration_minutes <= 0:
            raise errors.ValidationError(
                f"Duration must be greater than zero (got {duration_minutes})"
            )

        if self.db.get_service_by_name(name) is not None:
            raise errors.ConflictError(errors.duplicate_service_name(name))

        service_id = self.db.create_service(
            name=name,
            price=price,
            duration_minutes=duration_minutes,
            description=description or "",
        )
        logger.info("Created service %s '%s' at %s", service_id, name, price)
        return service_id

    def get_service(self, service_id: int) -> Optional[ServiceEntity]:
        """Get service by ID."""
        return self.db.get_service(service_id)

    def list_services(self, include_inactive: bool = False) -> list[ServiceEntity]:
        """List services, active only unless include_inactive is set."""
        return self.db.list_services(include_inactive=include_inactive)

    def resolve_service(self, service: str | int) -> ServiceEntity:
        """Resolve a service name or ID to the service entity.

        Args:
            service: Service name (str) or ID (int or string representation of int)

        Returns:
            Service entity

        Raises:
            NotFoundError: If no service matches
        """
        if isinstance(service, int):
            found = self.db.get_service(service)
            if found is None:
                raise errors.NotFoundError(errors.service_not_found(service))
            return found

        # Names take precedence, so a service may be called "1"
        found = self.db.get_service_by_name(service)
        if found is not None:
            return found

        try:
            service_id = int(service)
        except (TypeError, ValueError):
            raise errors.NotFoundError(errors.service_not_found(service))
        found = self.db.get_service(service_id)
        if found is None:
            raise errors.NotFoundError(errors.service_not_found(service_id))
        return found

    def update_price(self, service_id: int, price: Decimal) -> None:
        """Change a service's price. Past sales keep the price they were charged."""
        price = self._validate_price(price)
        self._require(service_id)
        self.db.update_service(service_id, price=price)

    def deactivate_service(self, service_id: int) -> None:
        """Hide a service from sale."""
        self._require(service_id)
        self.db.update_service(service_id, active=False)

    def activate_service(self, service_id: int) -> None:
        """Make a service available for sale again."""
        self._require(service_id)
        self.db.update_service(service_id, active=True)

    def _require(self, service_id: int) -> ServiceEntity:
        service = self.db.get_service(service_id)
        if service is None:
            raise errors.NotFoundError(errors.service_not_found(service_id))
        return service

    @staticmethod
    def _validate_price(price: Decimal) -> Decimal:
        try:
            price = to_money(price)
        except ValueError as e:
            raise errors.ValidationError(str(e))
        if price < 0:
            raise errors.ValidationError(errors.amount_must_not_be_negative("Price", price))
        return price
