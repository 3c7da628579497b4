from django.contrib.auth.models import AbstractBaseUser, PermissionsMixin
from django.db import models
from .managers import UserManager
from config.constants import ROLE_CHOICES, DEFAULT_ROLE, DASHBOARD_ROLES, as_choices

class User(AbstractBaseUser, PermissionsMixin):
    """Custom User model using email as the unique identifier."""

    email = models.EmailField(unique=True, db_index=True) # Login identifier
    name = models.CharField(max_length=255)
    role = models.CharField(
        max_length=20,
        choices=as_choices(ROLE_CHOICES),
        default=DEFAULT_ROLE
    )
    is_active = models.BooleanField(default=True) # Determines if the user can log in
    is_staff = models.BooleanField(default=False) # Needed for Django Admin panel access
    date_joined = models.DateTimeField(auto_now_add=True)

    objects = UserManager()

    USERNAME_FIELD = "email"
    REQUIRED_FIELDS = ["name"]

    def __str__(self):
        return self.email
    
    def save(self, *args, **kwargs):
        """Ensure email is always saved in lowercase."""
        self.email = self.email.lower().strip()
        super().save(*args, **kwargs)

    def is_admin(self):
        """Returns True if the user is an admin."""
        return self.role == "admin"

    def can_access_dashboard(self):
        return self.is_active and self.role in DASHBOARD_ROLES

    def get_short_name(self):
        return self.name
