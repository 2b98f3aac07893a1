from rest_framework import permissions, status
from rest_framework.response import Response
from rest_framework.views import APIView

from accounts.models import Role
from accounts.permissions import SelfMatch, owner_or_role
from accounts.utils import delete_result, error_response, insert_result, update_result
from .models import DonationRequest, InvalidTransition
from .serializers import (
    DonationAcceptanceSerializer,
    DonationRequestPatchSerializer,
    DonationRequestSerializer,
    DonationStatusSerializer,
)
from .services import DonationRequestCoordinator


class DonationRequestListCreateView(APIView):
    """List donation requests or file a new one"""

    def get(self, request):
        params = request.query_params
        page = DonationRequestCoordinator.list(
            requester_email=params.get('email'),
            status=params.get('status'),
            page=params.get('page'),
            limit=params.get('limit'),
        )
        return Response({
            "donations": DonationRequestSerializer(page.items, many=True).data,
            "total": page.total,
            "pages": page.pages,
        })

    def post(self, request):
        serializer = DonationRequestSerializer(data=request.data)
        if not serializer.is_valid():
            return error_response(
                "Unable to create donation request",
                errors=serializer.errors,
                status_code=status.HTTP_400_BAD_REQUEST
            )
        instance = DonationRequestCoordinator.create(request.user.email, serializer.validated_data)
        return Response(insert_result(instance), status=status.HTTP_201_CREATED)


class DonationRequestDetailView(APIView):
    """Retrieve, merge into, or delete one donation request.

    A PATCH carrying donorEmail is a donor accepting the request: the donor
    must be the caller and the body may carry nothing but the donor and a
    status. Any other PATCH is an edit by the requester, a volunteer or an
    admin.
    """
    self_match_source = 'body'
    self_match_field = 'donorEmail'

    def get_permissions(self):
        if self.request.method == 'PATCH':
            if self.is_acceptance():
                return [permissions.IsAuthenticated(), SelfMatch()]
            return [permissions.IsAuthenticated(), owner_or_role(Role.ADMIN, Role.VOLUNTEER)()]
        if self.request.method == 'DELETE':
            return [permissions.IsAuthenticated(), owner_or_role(Role.ADMIN)()]
        return [permissions.IsAuthenticated()]

    def is_acceptance(self):
        return hasattr(self.request.data, 'get') and 'donorEmail' in self.request.data

    def get_object(self, pk):
        instance = DonationRequest.objects.with_id(pk).first()
        if instance is not None:
            self.check_object_permissions(self.request, instance)
        return instance

    def get(self, request, pk):
        instance = self.get_object(pk)
        if instance is None:
            return error_response("Donation request not found", status_code=status.HTTP_404_NOT_FOUND)
        return Response(DonationRequestSerializer(instance).data)

    def patch(self, request, pk):
        if self.is_acceptance():
            serializer = DonationAcceptanceSerializer(data=request.data)
        else:
            serializer = DonationRequestPatchSerializer(data=request.data, partial=True)
        if not serializer.is_valid():
            return error_response(
                "Invalid data provided",
                errors=serializer.errors,
                status_code=status.HTTP_400_BAD_REQUEST
            )
        self.get_object(pk)
        try:
            result = DonationRequestCoordinator.partial_update(pk, serializer.validated_data)
        except InvalidTransition as e:
            return error_response(str(e), status_code=status.HTTP_400_BAD_REQUEST)
        return Response(update_result(result.matched, result.modified))

    def delete(self, request, pk):
        self.get_object(pk)
        return Response(delete_result(DonationRequestCoordinator.delete(pk)))


class DonationStatusView(APIView):
    """Overwrite the status of a donation request"""
    permission_classes = [
        permissions.IsAuthenticated,
        owner_or_role(Role.ADMIN, Role.VOLUNTEER, owner_fields=('requester_email', 'donor_email')),
    ]

    def patch(self, request, pk):
        serializer = DonationStatusSerializer(data=request.data)
        if not serializer.is_valid():
            return error_response(
                "Invalid status",
                errors=serializer.errors,
                status_code=status.HTTP_400_BAD_REQUEST
            )
        instance = DonationRequest.objects.with_id(pk).first()
        if instance is not None:
            self.check_object_permissions(request, instance)
        try:
            result = DonationRequestCoordinator.set_status(pk, serializer.validated_data['status'])
        except InvalidTransition as e:
            return error_response(str(e), status_code=status.HTTP_400_BAD_REQUEST)
        return Response(update_result(result.matched, result.modified))
