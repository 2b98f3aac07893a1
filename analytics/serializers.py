from rest_framework import serializers


class StatsSerializer(serializers.Serializer):
    totalUsers = serializers.IntegerField(source='total_users')
    totalRequests = serializers.IntegerField(source='total_requests')
    totalFundAmount = serializers.FloatField(source='total_fund_amount')
