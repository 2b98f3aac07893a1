from unittest import mock

import pytest
from django.db import DatabaseError

from accounts.models import User
from donations.models import DonationRequest, InvalidTransition, RequestStatus
from donations.services import DonationRequestCoordinator, UpdateResult

pytestmark = pytest.mark.django_db


@pytest.fixture
def requester(make_user):
    return make_user('u1@x.com')


def test_failed_insert_rolls_back_requester_counter(requester):
    with mock.patch.object(DonationRequest.objects, 'create', side_effect=DatabaseError('store down')):
        with pytest.raises(DatabaseError):
            DonationRequestCoordinator.create('u1@x.com', {'recipient_name': 'P', 'blood_group': 'O+'})

    requester.refresh_from_db()
    assert requester.donation_request == 0


def test_create_ignores_lifecycle_fields_in_payload(requester):
    created = DonationRequestCoordinator.create('u1@x.com', {
        'recipient_name': 'P', 'blood_group': 'O+',
        'requester_email': 'spoof@x.com', 'status': RequestStatus.DONE,
        'donor_email': 'd@x.com', 'donor_name': 'D',
    })
    assert created.requester_email == 'u1@x.com'
    assert created.status == RequestStatus.PENDING
    assert created.donor_email is None
    assert created.donor_name == ''


def test_failed_request_write_rolls_back_donor_counter(requester, make_user):
    donor = make_user('d1@x.com')
    pending = DonationRequest.objects.create(requester_email='u1@x.com', recipient_name='P', blood_group='O+')

    with mock.patch.object(DonationRequest, 'save', side_effect=DatabaseError('store down')):
        with pytest.raises(DatabaseError):
            DonationRequestCoordinator.partial_update(pending.pk, {'donor_email': 'd1@x.com'})

    donor.refresh_from_db()
    assert donor.donations == 0
    assert donor.last_donation is None


def test_acceptance_by_unregistered_donor_still_moves_request(requester):
    pending = DonationRequest.objects.create(requester_email='u1@x.com', recipient_name='P', blood_group='O+')

    result = DonationRequestCoordinator.partial_update(pending.pk, {'donor_email': 'ghost@x.com'})

    assert result == UpdateResult(1, 1)
    pending.refresh_from_db()
    assert pending.status == RequestStatus.IN_PROGRESS
    assert not User.objects.filter(email='ghost@x.com').exists()


def test_set_status_rejects_illegal_transition(requester):
    pending = DonationRequest.objects.create(requester_email='u1@x.com', recipient_name='P', blood_group='O+')
    with pytest.raises(InvalidTransition):
        DonationRequestCoordinator.set_status(pending.pk, RequestStatus.DONE)


def test_delete_malformed_id_is_zero():
    assert DonationRequestCoordinator.delete('not-a-uuid') == 0


def test_store_failure_surfaces_as_internal_error(requester, client_for):
    with mock.patch('donations.views.DonationRequestCoordinator.create', side_effect=DatabaseError('down')):
        response = client_for('u1@x.com').post('/donation-requests', {'recipientName': 'P', 'bloodGroup': 'O+'})

    assert response.status_code == 500
    assert response.data == {'status': 'error', 'message': 'Internal server error'}
