import uuid

from django.db import models


BLOOD_GROUP_CHOICES = [
    ('A+', 'A+'), ('A-', 'A-'), ('B+', 'B+'), ('B-', 'B-'),
    ('AB+', 'AB+'), ('AB-', 'AB-'), ('O+', 'O+'), ('O-', 'O-'),
]


class Role(models.TextChoices):
    USER = 'user', 'User'
    DONOR = 'donor', 'Donor'
    VOLUNTEER = 'volunteer', 'Volunteer'
    ADMIN = 'admin', 'Admin'


class UserStatus(models.TextChoices):
    ACTIVE = 'active', 'Active'
    BLOCKED = 'blocked', 'Blocked'


class User(models.Model):
    """Registered profile keyed by the email the identity provider verifies."""
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    email = models.EmailField(unique=True)
    name = models.CharField(max_length=150, blank=True)
    photo = models.URLField(max_length=500, blank=True)
    role = models.CharField(max_length=10, choices=Role.choices, default=Role.DONOR)
    status = models.CharField(max_length=10, choices=UserStatus.choices, default=UserStatus.ACTIVE)
    blood_group = models.CharField(max_length=3, choices=BLOOD_GROUP_CHOICES, null=True, blank=True)
    division = models.CharField(max_length=100, blank=True)
    district = models.CharField(max_length=100, blank=True)
    upazila = models.CharField(max_length=100, blank=True)
    donation_request = models.PositiveIntegerField(default=0)
    donations = models.PositiveIntegerField(default=0)
    last_donation = models.DateField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['role', 'status']),
        ]

    def __str__(self):
        return f"{self.email} ({self.role})"

    @property
    def effective_role(self):
        return self.role or Role.USER

    def has_role(self, *roles):
        return self.effective_role in roles
