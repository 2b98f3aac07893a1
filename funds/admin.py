from django.contrib import admin
from .models import Fund


@admin.register(Fund)
class FundAdmin(admin.ModelAdmin):
    list_display = ('email', 'name', 'amount', 'transaction_id', 'created_at')
    search_fields = ('email', 'name', 'transaction_id')
    readonly_fields = ('created_at',)
