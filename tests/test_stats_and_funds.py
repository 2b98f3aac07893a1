from decimal import Decimal
from types import SimpleNamespace
from unittest import mock

import pytest
import stripe

from accounts.models import Role
from donations.models import DonationRequest
from funds.models import Fund

pytestmark = pytest.mark.django_db


def test_stats_for_admin(make_user, client_for):
    make_user('admin@x.com', role=Role.ADMIN)
    make_user('u1@x.com')
    DonationRequest.objects.create(requester_email='u1@x.com', recipient_name='P', blood_group='O+')
    Fund.objects.create(email='u1@x.com', amount=Decimal('10.50'))
    Fund.objects.create(email='u1@x.com', amount=Decimal('4.25'))

    response = client_for('admin@x.com').get('/stats')

    assert response.status_code == 200
    assert response.data == {'totalUsers': 2, 'totalRequests': 1, 'totalFundAmount': 14.75}


def test_stats_without_funds_total_zero(make_user, client_for):
    make_user('vol@x.com', role=Role.VOLUNTEER)
    assert client_for('vol@x.com').get('/stats').data['totalFundAmount'] == 0.0


def test_stats_forbidden_for_donors(make_user, client_for):
    make_user('u1@x.com')
    assert client_for('u1@x.com').get('/stats').status_code == 403


@pytest.mark.parametrize('amount', [0, -5, None])
def test_fund_requires_positive_amount(client_for, amount):
    body = {'name': 'Giver'} if amount is None else {'name': 'Giver', 'amount': amount}
    response = client_for('u1@x.com').post('/funds', body)

    assert response.status_code == 400
    assert response.data['message'] == 'Invalid amount'
    assert Fund.objects.count() == 0


def test_fund_is_recorded_for_the_subject(client_for):
    response = client_for('u1@x.com').post(
        '/funds', {'name': 'Giver', 'amount': '25.00', 'email': 'other@x.com', 'transactionId': 'pi_123'}
    )

    assert response.status_code == 201
    fund = Fund.objects.get()
    assert response.data['insertedId'] == str(fund.pk)
    assert fund.email == 'u1@x.com'
    assert fund.transaction_id == 'pi_123'


def test_fund_listing_is_paginated(client_for):
    for i in range(3):
        Fund.objects.create(email='u1@x.com', amount=Decimal(i + 1))

    response = client_for('u1@x.com').get('/funds', {'limit': 2})

    assert response.data['total'] == 3
    assert response.data['pages'] == 2
    assert len(response.data['funds']) == 2


@pytest.fixture
def gateway():
    intent = SimpleNamespace(id='pi_123', client_secret='pi_123_secret_abc')
    with mock.patch('services.payment_service.stripe.PaymentIntent.create', return_value=intent) as create:
        yield create


def test_payment_intent_charges_cents(client_for, gateway):
    response = client_for('u1@x.com').post('/create-payment-intent', {'amount': '12.50'})

    assert response.status_code == 200
    assert response.data == {'clientSecret': 'pi_123_secret_abc'}
    kwargs = gateway.call_args.kwargs
    assert kwargs['amount'] == 1250
    assert kwargs['currency'] == 'usd'
    assert kwargs['payment_method_types'] == ['card']


@pytest.mark.parametrize('body', [{}, {'amount': 0}, {'amount': -3}, {'amount': 'ten'}])
def test_payment_intent_rejects_invalid_amount(client_for, gateway, body):
    response = client_for('u1@x.com').post('/create-payment-intent', body)

    assert response.status_code == 400
    assert response.data['message'] == 'Invalid amount'
    gateway.assert_not_called()


def test_payment_intent_gateway_failure_is_500(client_for, gateway):
    gateway.side_effect = stripe.StripeError('card network down')

    response = client_for('u1@x.com').post('/create-payment-intent', {'amount': 5})

    assert response.status_code == 500
    assert response.data['message'] == 'Failed to create payment intent'


def test_payment_intent_requires_credential(api_client, gateway):
    assert api_client.post('/create-payment-intent', {'amount': 5}).status_code == 401
    gateway.assert_not_called()
