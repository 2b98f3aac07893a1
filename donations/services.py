import logging
from dataclasses import dataclass

from django.db import transaction
from django.db.models import F
from django.utils import timezone

from accounts.models import User
from services.query_builder import QueryBuilder
from .models import DonationRequest, InvalidTransition, RequestStatus

logger = logging.getLogger(__name__)

# Set by the lifecycle itself, never taken from a create payload
LIFECYCLE_FIELDS = frozenset({'requester_email', 'status', 'donor_email', 'donor_name'})


@dataclass(frozen=True)
class UpdateResult:
    matched: int
    modified: int


class DonationRequestCoordinator:
    """State transitions on donation requests and their user-side effects.

    The only place that writes a request and a user record in one
    operation. Both writes share a transaction; the user counter is
    written first, then the request.
    """
    default_limit = 10

    @classmethod
    def create(cls, requester_email, data):
        data = {k: v for k, v in data.items() if k not in LIFECYCLE_FIELDS}
        with transaction.atomic():
            bumped = User.objects.filter(email=requester_email).update(
                donation_request=F('donation_request') + 1
            )
            if not bumped:
                logger.warning('No user record for requester %s; counter not incremented', requester_email)
            donation_request = DonationRequest.objects.create(
                requester_email=requester_email,
                status=RequestStatus.PENDING,
                **data
            )
        logger.info('Donation request %s created by %s', donation_request.pk, requester_email)
        return donation_request

    @classmethod
    def partial_update(cls, pk, changes):
        """Merge ``changes`` into the request.

        A ``donor_email`` in ``changes`` is an acceptance: the request must
        still be pending, moves to in-progress, and the donor's donation
        counter and last donation date are recorded.
        """
        changes = dict(changes)
        changes.pop('requester_email', None)

        with transaction.atomic():
            instance = DonationRequest.objects.select_for_update().with_id(pk).first()
            if instance is None:
                return UpdateResult(0, 0)

            donor_email = changes.get('donor_email')
            if donor_email:
                cls._check_acceptance(instance, changes)
                changes['status'] = RequestStatus.IN_PROGRESS
                cls._record_donation(donor_email)
            elif changes.get('status', instance.status) != instance.status:
                instance.check_transition(changes['status'])

            modified = cls._apply(instance, changes)
        return UpdateResult(1, int(modified))

    @classmethod
    def set_status(cls, pk, status):
        with transaction.atomic():
            instance = DonationRequest.objects.select_for_update().with_id(pk).first()
            if instance is None:
                return UpdateResult(0, 0)
            if instance.status == status:
                return UpdateResult(1, 0)
            instance.check_transition(status)
            cls._apply(instance, {'status': status})
        logger.info('Donation request %s moved to %s', instance.pk, status)
        return UpdateResult(1, 1)

    @classmethod
    def delete(cls, pk):
        deleted, _ = DonationRequest.objects.with_id(pk).delete()
        return deleted

    @classmethod
    def list(cls, requester_email=None, status=None, page=None, limit=None):
        query = QueryBuilder(DonationRequest.objects.all(), default_limit=cls.default_limit)
        query.filter(requester_email=requester_email, status=status)
        return query.paginate(page, limit)

    @staticmethod
    def _check_acceptance(instance, changes):
        if instance.is_accepted or instance.status != RequestStatus.PENDING:
            raise InvalidTransition("Can only accept pending requests without a donor")
        requested = changes.get('status', RequestStatus.IN_PROGRESS)
        if requested != RequestStatus.IN_PROGRESS:
            raise InvalidTransition(f"Accepting a request moves it to in-progress, not {requested}")

    @staticmethod
    def _record_donation(donor_email):
        recorded = User.objects.filter(email=donor_email).update(
            donations=F('donations') + 1,
            last_donation=timezone.now().date(),
        )
        if not recorded:
            logger.warning('No user record for donor %s; donation not counted', donor_email)
        else:
            logger.info('Recorded donation by %s', donor_email)

    @staticmethod
    def _apply(instance, changes):
        changed = [name for name, value in changes.items() if getattr(instance, name) != value]
        if not changed:
            return False
        for name in changed:
            setattr(instance, name, changes[name])
        instance.save(update_fields=changed + ['updated_at'])
        return True
