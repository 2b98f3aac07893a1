from rest_framework import permissions, views
from rest_framework.response import Response

from accounts.models import Role
from accounts.permissions import role_required
from .serializers import StatsSerializer
from .services import AnalyticsService


class StatsView(views.APIView):
    """Headline counts for the admin and volunteer dashboards."""
    permission_classes = [permissions.IsAuthenticated, role_required(Role.ADMIN, Role.VOLUNTEER)]

    def get(self, request):
        return Response(StatsSerializer(AnalyticsService.get_totals()).data)
