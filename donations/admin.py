from django.contrib import admin
from .models import DonationRequest


@admin.register(DonationRequest)
class DonationRequestAdmin(admin.ModelAdmin):
    list_display = ('recipient_name', 'blood_group', 'requester_email', 'donor_email',
                    'status', 'donation_date', 'created_at')
    list_filter = ('status', 'blood_group', 'district')
    search_fields = ('recipient_name', 'requester_email', 'donor_email', 'hospital_name')
    readonly_fields = ('requester_email', 'donor_email', 'created_at', 'updated_at')
