import logging

from rest_framework import permissions, status
from rest_framework.response import Response
from rest_framework.views import APIView

from accounts.models import Role
from accounts.permissions import role_required
from accounts.utils import delete_result, error_response, insert_result, parse_id, update_result
from services.query_builder import QueryBuilder
from .models import Blog
from .serializers import BlogSerializer, BlogStatusSerializer

logger = logging.getLogger(__name__)

BLOG_PAGE_SIZE = 6


class BlogListCreateView(APIView):
    """GET searches posts (public); POST writes a draft (admins and volunteers)."""

    def get_authenticators(self):
        if self.request.method == 'GET':
            return []
        return super().get_authenticators()

    def get_permissions(self):
        if self.request.method == 'GET':
            return [permissions.AllowAny()]
        return [permissions.IsAuthenticated(), role_required(Role.ADMIN, Role.VOLUNTEER)()]

    def get(self, request):
        params = request.query_params
        query = QueryBuilder(Blog.objects.all(), default_limit=BLOG_PAGE_SIZE)
        query.search(title=params.get('search'))
        query.filter(status=params.get('status'), category=params.get('category'))
        page = query.paginate(params.get('page'), params.get('limit'))
        return Response({
            "blogs": BlogSerializer(page.items, many=True).data,
            "total": page.total,
            "pages": page.pages,
        })

    def post(self, request):
        serializer = BlogSerializer(data=request.data)
        if not serializer.is_valid():
            return error_response(
                "Unable to create blog",
                errors=serializer.errors,
                status_code=status.HTTP_400_BAD_REQUEST
            )
        blog = serializer.save(author_email=request.user.email)
        logger.info('Blog %s drafted by %s', blog.pk, blog.author_email)
        return Response(insert_result(blog), status=status.HTTP_201_CREATED)


class BlogDetailView(APIView):
    def get_permissions(self):
        if self.request.method == 'DELETE':
            return [permissions.IsAuthenticated(), role_required(Role.ADMIN)()]
        return [permissions.IsAuthenticated()]

    def get(self, request, pk):
        blog = Blog.objects.filter(pk=parse_id(pk)).first()
        if blog is None:
            return error_response("Blog not found", status_code=status.HTTP_404_NOT_FOUND)
        return Response(BlogSerializer(blog).data)

    def delete(self, request, pk):
        deleted, _ = Blog.objects.filter(pk=parse_id(pk)).delete()
        return Response(delete_result(deleted))


class BlogStatusView(APIView):
    """Publish or unpublish a post"""
    permission_classes = [permissions.IsAuthenticated, role_required(Role.ADMIN)]

    def patch(self, request, pk, blog_status):
        serializer = BlogStatusSerializer(data={'status': blog_status})
        if not serializer.is_valid():
            return error_response(
                "Invalid status",
                errors=serializer.errors,
                status_code=status.HTTP_400_BAD_REQUEST
            )
        new_status = serializer.validated_data['status']
        matched = Blog.objects.filter(pk=parse_id(pk))
        modified = matched.exclude(status=new_status).update(status=new_status)
        return Response(update_result(int(matched.exists()), modified))
