import uuid

from django.db import models


class BlogStatus(models.TextChoices):
    DRAFT = 'draft', 'Draft'
    PUBLISHED = 'published', 'Published'


class Blog(models.Model):
    """An awareness post written from the dashboard"""
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    title = models.CharField(max_length=200)
    thumbnail = models.URLField(blank=True)
    content = models.TextField()
    category = models.CharField(max_length=50, blank=True, db_index=True)
    author_email = models.EmailField(db_index=True)
    status = models.CharField(max_length=10, choices=BlogStatus.choices, default=BlogStatus.DRAFT)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-created_at']

    def __str__(self):
        return self.title
