from rest_framework import serializers

from accounts.models import BLOOD_GROUP_CHOICES
from .models import DonationRequest, RequestStatus


class DonationRequestSerializer(serializers.ModelSerializer):
    """camelCase wire shape of a donation request.

    Unknown keys are dropped. requesterEmail always comes from the verified
    subject, status and donor fields only change through the lifecycle.
    """
    requesterEmail = serializers.EmailField(source='requester_email', read_only=True)
    requesterName = serializers.CharField(source='requester_name', max_length=150, required=False, allow_blank=True)
    recipientName = serializers.CharField(source='recipient_name', max_length=150)
    bloodGroup = serializers.ChoiceField(source='blood_group', choices=BLOOD_GROUP_CHOICES)
    hospitalName = serializers.CharField(source='hospital_name', max_length=200, required=False, allow_blank=True)
    fullAddress = serializers.CharField(source='full_address', max_length=300, required=False, allow_blank=True)
    donationDate = serializers.DateField(source='donation_date', required=False, allow_null=True)
    donationTime = serializers.TimeField(source='donation_time', required=False, allow_null=True)
    requestMessage = serializers.CharField(source='request_message', required=False, allow_blank=True)
    status = serializers.CharField(read_only=True)
    donorName = serializers.CharField(source='donor_name', read_only=True)
    donorEmail = serializers.EmailField(source='donor_email', read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    updatedAt = serializers.DateTimeField(source='updated_at', read_only=True)

    class Meta:
        model = DonationRequest
        fields = ['id', 'requesterEmail', 'requesterName', 'recipientName', 'bloodGroup',
                  'division', 'district', 'upazila', 'hospitalName', 'fullAddress',
                  'donationDate', 'donationTime', 'requestMessage', 'status',
                  'donorName', 'donorEmail', 'createdAt', 'updatedAt']
        read_only_fields = ['id']


class DonationRequestPatchSerializer(DonationRequestSerializer):
    """Partial merge by the requester, a volunteer or an admin."""
    status = serializers.ChoiceField(choices=RequestStatus.choices, required=False)


class DonationAcceptanceSerializer(serializers.Serializer):
    """A donor taking on a request; carries nothing but the donor and status."""
    donorEmail = serializers.EmailField(source='donor_email')
    donorName = serializers.CharField(source='donor_name', max_length=150, required=False, allow_blank=True)
    status = serializers.ChoiceField(choices=RequestStatus.choices, required=False)

    def validate(self, attrs):
        extra = sorted(set(self.initial_data) - set(self.fields))
        if extra:
            raise serializers.ValidationError(
                {name: "Not accepted together with donorEmail" for name in extra}
            )
        return attrs


class DonationStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=RequestStatus.choices)
