from rest_framework import serializers

from .models import Fund


class FundSerializer(serializers.ModelSerializer):
    transactionId = serializers.CharField(source='transaction_id', max_length=100, required=False, allow_blank=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)

    class Meta:
        model = Fund
        fields = ['id', 'name', 'email', 'amount', 'transactionId', 'createdAt']
        read_only_fields = ['id', 'email']

    def validate_amount(self, value):
        if value <= 0:
            raise serializers.ValidationError("Invalid amount")
        return value


class PaymentIntentSerializer(serializers.Serializer):
    amount = serializers.DecimalField(max_digits=12, decimal_places=2)

    def validate_amount(self, value):
        if value <= 0:
            raise serializers.ValidationError("Invalid amount")
        return value
