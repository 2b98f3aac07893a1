from django.contrib import admin
from .models import Blog


@admin.register(Blog)
class BlogAdmin(admin.ModelAdmin):
    list_display = ('title', 'category', 'author_email', 'status', 'created_at')
    list_filter = ('status', 'category')
    search_fields = ('title', 'author_email')
    readonly_fields = ('author_email', 'created_at')
