from django.contrib import admin

from .models import User


@admin.register(User)
class UserAdmin(admin.ModelAdmin):
    list_display = ('email', 'name', 'role', 'status', 'blood_group', 'donations', 'last_donation', 'created_at')
    list_filter = ('role', 'status', 'blood_group')
    search_fields = ('email', 'name', 'district', 'upazila')
    readonly_fields = ('donation_request', 'donations', 'last_donation', 'created_at')
