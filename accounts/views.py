import logging

from django.db import transaction
from rest_framework import generics, permissions, status
from rest_framework.response import Response
from rest_framework.views import APIView

from services.query_builder import QueryBuilder
from .models import Role, User, UserStatus
from .permissions import SelfMatch, role_required
from .serializers import ProfileSerializer, RegisterSerializer, UserAdminUpdateSerializer, UserSerializer
from .utils import error_response, insert_result, parse_id, update_result

logger = logging.getLogger(__name__)


def _changed_fields(instance, validated_data):
    return [name for name, value in validated_data.items() if getattr(instance, name) != value]


class HomeView(APIView):
    authentication_classes = ()
    permission_classes = (permissions.AllowAny,)

    def get(self, request):
        return Response("Hello from RedAid!")


class DonorListView(generics.ListAPIView):
    """Public search over active donors"""
    serializer_class = UserSerializer
    authentication_classes = ()
    permission_classes = (permissions.AllowAny,)

    def get_queryset(self):
        params = self.request.query_params
        query = QueryBuilder(User.objects.filter(role=Role.DONOR, status=UserStatus.ACTIVE))
        query.filter(
            blood_group=params.get('bloodGroup'),
            division=params.get('division'),
            district=params.get('district'),
            upazila=params.get('upazila'),
        )
        return query.ordered()


class UserListCreateView(APIView):
    """GET lists users for admins; POST registers a profile (public)."""

    def get_authenticators(self):
        # Registration is public; a stale Authorization header must not block it
        if self.request.method == 'POST':
            return []
        return super().get_authenticators()

    def get_permissions(self):
        if self.request.method == 'POST':
            return [permissions.AllowAny()]
        return [permissions.IsAuthenticated(), role_required(Role.ADMIN)()]

    def get(self, request):
        params = request.query_params
        query = QueryBuilder(User.objects.exclude(email=request.user.email))
        query.filter(status=params.get('status'))
        page = query.paginate(params.get('page'), params.get('limit'))
        return Response({
            "users": UserSerializer(page.items, many=True).data,
            "total": page.total,
            "pages": page.pages,
        })

    def post(self, request):
        serializer = RegisterSerializer(data=request.data)
        if not serializer.is_valid():
            return error_response(
                'Unable to register',
                errors=serializer.errors,
                status_code=status.HTTP_400_BAD_REQUEST
            )

        data = serializer.validated_data
        user, created = User.objects.get_or_create(
            email=data['email'],
            defaults={**data, 'role': Role.DONOR, 'status': UserStatus.ACTIVE},
        )
        if not created:
            # Registration never overwrites an existing profile
            return Response({**update_result(1, 0), "upsertedId": None})

        logger.info('Registered user %s', user.email)
        return Response(insert_result(user), status=status.HTTP_201_CREATED)


class UserRoleView(APIView):
    permission_classes = (permissions.IsAuthenticated, SelfMatch)
    self_match_source = 'path'
    self_match_field = 'email'

    def get(self, request, email):
        user = User.objects.filter(email=email).only('role').first()
        if user is None:
            return Response(
                {"role": Role.USER.value, "message": "User not found"},
                status=status.HTTP_404_NOT_FOUND
            )
        return Response({"role": user.effective_role})


class UserDetailView(APIView):
    """One route, three meanings.

    GET and PUT address a user by email; PATCH addresses a user by id and is
    reserved for admins changing role or status.
    """
    self_match_source = 'path'
    self_match_field = 'lookup'

    def get_permissions(self):
        if self.request.method == 'PUT':
            return [permissions.IsAuthenticated(), SelfMatch()]
        if self.request.method == 'PATCH':
            return [permissions.IsAuthenticated(), role_required(Role.ADMIN)()]
        return [permissions.IsAuthenticated()]

    def get(self, request, lookup):
        user = User.objects.filter(email=lookup).first()
        if user is None:
            return error_response("User not found", status_code=status.HTTP_404_NOT_FOUND)
        return Response(UserSerializer(user).data)

    def put(self, request, lookup):
        serializer = ProfileSerializer(data=request.data, partial=True)
        if not serializer.is_valid():
            return error_response('Unable to update profile', serializer.errors)
        return Response(self._merge(User.objects.filter(email=lookup), serializer.validated_data))

    def patch(self, request, lookup):
        serializer = UserAdminUpdateSerializer(data=request.data, partial=True)
        if not serializer.is_valid():
            return error_response('Unable to update user', serializer.errors)
        return Response(self._merge(User.objects.filter(pk=parse_id(lookup)), serializer.validated_data))

    @staticmethod
    def _merge(queryset, validated_data):
        with transaction.atomic():
            user = queryset.select_for_update().first()
            if user is None:
                return update_result(0, 0)
            changed = _changed_fields(user, validated_data)
            if not changed:
                return update_result(1, 0)
            for name in changed:
                setattr(user, name, validated_data[name])
            user.save(update_fields=changed)
        return update_result(1, 1)
