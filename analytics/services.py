from django.db.models import FloatField, Sum
from django.db.models.functions import Cast

from accounts.models import User
from donations.models import DonationRequest
from funds.models import Fund


class AnalyticsService:
    @classmethod
    def get_totals(cls):
        """Document counts plus the fund total, amounts summed as floats."""
        return {
            'total_users': User.objects.count(),
            'total_requests': DonationRequest.objects.count(),
            'total_fund_amount': cls._get_total_fund_amount(),
        }

    @classmethod
    def _get_total_fund_amount(cls):
        total = Fund.objects.aggregate(
            total=Sum(Cast('amount', output_field=FloatField()))
        )['total']
        return total or 0.0
