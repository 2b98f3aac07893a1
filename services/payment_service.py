import logging

import stripe
from django.conf import settings

logger = logging.getLogger(__name__)

CURRENCY = 'usd'


class PaymentGatewayError(Exception):
    """The payment gateway refused or failed to create the intent."""


def to_minor_units(amount):
    """Dollars to cents, truncating anything below a cent."""
    return int(amount * 100)


def create_payment_intent(amount):
    """Open a card payment intent for ``amount`` and return its client secret."""
    try:
        intent = stripe.PaymentIntent.create(
            api_key=settings.STRIPE_SECRET_KEY,
            amount=to_minor_units(amount),
            currency=CURRENCY,
            payment_method_types=['card'],
        )
    except stripe.StripeError as exc:
        raise PaymentGatewayError(str(exc)) from exc
    logger.info('Payment intent %s created for %s %s', intent.id, amount, CURRENCY)
    return intent.client_secret
