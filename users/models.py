from django.contrib.auth.models import AbstractUser
from django.db import models
from core.constants import UserRole


class User(AbstractUser):
    """Custom User model - property Owner or platform Admin"""
    role = models.CharField(max_length=20, choices=UserRole.CHOICES, default=UserRole.OWNER)
    full_name = models.CharField(max_length=255, blank=True)
    mobile = models.CharField(max_length=15, blank=True)

    class Meta:
        verbose_name = "User"
        verbose_name_plural = "Users"

    def __str__(self):
        return f"{self.username} ({self.get_role_display()})"

    @property
    def is_admin(self):
        """Admins operate across every owner's data"""
        return self.role == UserRole.ADMIN or self.is_superuser
