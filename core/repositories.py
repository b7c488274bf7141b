"""
Repository pattern implementation.
Abstracts data access and provides a clean interface for domain services.
"""
from typing import Generic, TypeVar, Optional, Sequence
from django.db.models import QuerySet, Model
from django.db import IntegrityError, transaction
import logging

from core.exceptions import DuplicateKeyError, NotFoundError

logger = logging.getLogger(__name__)

T = TypeVar('T', bound=Model)


class BaseRepository(Generic[T]):
    """
    Base repository providing common CRUD operations.
    Follows Repository pattern for data access abstraction.
    """

    def __init__(self, model: type[T]):
        self.model = model

    def get_by_id(self, id: int, **filters) -> Optional[T]:
        """Get a single instance by ID"""
        try:
            return self.model.objects.filter(id=id, **filters).first()
        except Exception as e:
            logger.error(f"Error getting {self.model.__name__} by id {id}: {str(e)}")
            return None

    def get_by_id_or_raise(self, id: int, **filters) -> T:
        """Get a single instance by ID or raise NotFoundError"""
        instance = self.model.objects.filter(id=id, **filters).first()
        if instance is None:
            raise NotFoundError(resource_type=self.model.__name__, resource_id=id)
        return instance

    def get_all(self, **filters) -> QuerySet[T]:
        """Get all instances matching filters"""
        return self.model.objects.filter(**filters)

    def find(self, ordering: Sequence[str] = (), **filters) -> QuerySet[T]:
        """Get instances matching filters, optionally sorted"""
        queryset = self.get_all(**filters)
        if ordering:
            queryset = queryset.order_by(*ordering)
        return queryset

    def find_one(self, ordering: Sequence[str] = (), **filters) -> Optional[T]:
        """Get the first instance matching filters"""
        return self.find(ordering, **filters).first()

    def create(self, **kwargs) -> T:
        """
        Create a new instance.

        Runs in a savepoint so a rejected insert does not break the caller's
        transaction. Constraint violations surface as DuplicateKeyError.
        """
        try:
            with transaction.atomic():
                return self.model.objects.create(**kwargs)
        except IntegrityError as e:
            raise DuplicateKeyError(
                message=f"{self.model.__name__} already exists",
                code="DUPLICATE_KEY",
                details={key: str(value) for key, value in kwargs.items()},
            ) from e

    def update(self, instance: T, **kwargs) -> T:
        """Update an existing instance"""
        for key, value in kwargs.items():
            setattr(instance, key, value)
        instance.save()
        return instance

    def update_by_id(self, id: int, **kwargs) -> T:
        """Load an instance by ID and update it"""
        return self.update(self.get_by_id_or_raise(id), **kwargs)

    def delete(self, instance: T) -> bool:
        """Delete an instance"""
        try:
            instance.delete()
            return True
        except Exception as e:
            logger.error(f"Error deleting {self.model.__name__}: {str(e)}")
            return False

    def delete_by_id(self, id: int) -> bool:
        """Delete an instance by ID"""
        return self.delete(self.get_by_id_or_raise(id))

    def exists(self, **filters) -> bool:
        """Check if instance exists"""
        return self.model.objects.filter(**filters).exists()

    def count(self, **filters) -> int:
        """Count instances matching filters"""
        return self.model.objects.filter(**filters).count()

    def get_queryset(self) -> QuerySet[T]:
        """Get base queryset for custom queries"""
        return self.model.objects.all()
