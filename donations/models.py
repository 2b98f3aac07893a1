import uuid

from django.db import models
from accounts.models import BLOOD_GROUP_CHOICES


class RequestStatus(models.TextChoices):
    PENDING = 'pending', 'Pending'
    IN_PROGRESS = 'in-progress', 'In progress'
    DONE = 'done', 'Done'
    CANCELED = 'canceled', 'Canceled'


# Entering in-progress additionally requires a donor; see DonationRequest.check_transition
TRANSITIONS = {
    RequestStatus.PENDING: {RequestStatus.IN_PROGRESS, RequestStatus.CANCELED},
    RequestStatus.IN_PROGRESS: {RequestStatus.DONE, RequestStatus.CANCELED},
    RequestStatus.DONE: set(),
    RequestStatus.CANCELED: set(),
}


class InvalidTransition(ValueError):
    pass


class DonationRequestQuerySet(models.QuerySet):
    def with_id(self, value):
        try:
            pk = uuid.UUID(str(value))
        except ValueError:
            return self.none()
        return self.filter(pk=pk)


class DonationRequest(models.Model):
    """A requester's call for blood, optionally taken on by one donor"""
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    requester_email = models.EmailField(db_index=True)
    requester_name = models.CharField(max_length=150, blank=True)
    recipient_name = models.CharField(max_length=150)
    blood_group = models.CharField(max_length=3, choices=BLOOD_GROUP_CHOICES)
    division = models.CharField(max_length=100, blank=True)
    district = models.CharField(max_length=100, blank=True)
    upazila = models.CharField(max_length=100, blank=True)
    hospital_name = models.CharField(max_length=200, blank=True)
    full_address = models.CharField(max_length=300, blank=True)
    donation_date = models.DateField(null=True, blank=True)
    donation_time = models.TimeField(null=True, blank=True)
    request_message = models.TextField(blank=True)
    status = models.CharField(max_length=12, choices=RequestStatus.choices, default=RequestStatus.PENDING)
    donor_name = models.CharField(max_length=150, blank=True)
    donor_email = models.EmailField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = DonationRequestQuerySet.as_manager()

    class Meta:
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['requester_email', 'status']),
        ]

    def __str__(self):
        return f"Request for {self.recipient_name} ({self.blood_group}) by {self.requester_email}"

    @property
    def is_accepted(self):
        return bool(self.donor_email)

    def check_transition(self, target, donor_email=None):
        """Raise InvalidTransition unless moving to ``target`` is legal."""
        try:
            current, target = RequestStatus(self.status), RequestStatus(target)
        except ValueError as exc:
            raise InvalidTransition(str(exc)) from exc
        if target not in TRANSITIONS[current]:
            raise InvalidTransition(f"Cannot move a {current.value} request to {target.value}")
        if target == RequestStatus.IN_PROGRESS and not (donor_email or self.donor_email):
            raise InvalidTransition("A request goes in-progress only when a donor accepts it")
