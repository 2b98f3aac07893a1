from rest_framework import serializers

from .models import Blog, BlogStatus


class BlogSerializer(serializers.ModelSerializer):
    """New posts start as drafts; publishing goes through the status route."""
    authorEmail = serializers.EmailField(source='author_email', read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)

    class Meta:
        model = Blog
        fields = ['id', 'title', 'thumbnail', 'content', 'category', 'status', 'authorEmail', 'createdAt']
        read_only_fields = ['id', 'status']


class BlogStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=BlogStatus.choices)
