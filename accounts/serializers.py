from rest_framework import serializers

from .models import BLOOD_GROUP_CHOICES, Role, User, UserStatus


class UserSerializer(serializers.ModelSerializer):
    bloodGroup = serializers.CharField(source='blood_group', read_only=True)
    donationRequest = serializers.IntegerField(source='donation_request', read_only=True)
    lastDonation = serializers.DateField(source='last_donation', read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)

    class Meta:
        model = User
        fields = ('id', 'email', 'name', 'photo', 'role', 'status', 'bloodGroup', 'division',
                  'district', 'upazila', 'donationRequest', 'donations', 'lastDonation', 'createdAt')
        read_only_fields = fields


class ProfileSerializer(serializers.ModelSerializer):
    """Self-service profile fields. Role, status and counters are never writable here."""
    bloodGroup = serializers.ChoiceField(source='blood_group', choices=BLOOD_GROUP_CHOICES,
                                         required=False, allow_null=True)

    class Meta:
        model = User
        fields = ('name', 'photo', 'bloodGroup', 'division', 'district', 'upazila')


class RegisterSerializer(ProfileSerializer):
    # Declared explicitly so an existing email reaches the view instead of failing uniqueness
    email = serializers.EmailField()

    class Meta(ProfileSerializer.Meta):
        fields = ('email',) + ProfileSerializer.Meta.fields


class UserAdminUpdateSerializer(serializers.ModelSerializer):
    role = serializers.ChoiceField(choices=Role.choices, required=False)
    status = serializers.ChoiceField(choices=UserStatus.choices, required=False)

    class Meta:
        model = User
        fields = ('role', 'status')
