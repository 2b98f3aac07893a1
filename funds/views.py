import logging

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from accounts.utils import error_response, insert_result
from services.payment_service import PaymentGatewayError, create_payment_intent
from services.query_builder import QueryBuilder
from .models import Fund
from .serializers import FundSerializer, PaymentIntentSerializer

logger = logging.getLogger(__name__)


class FundListCreateView(APIView):
    """List recorded funds or record a new one for the caller"""

    def get(self, request):
        params = request.query_params
        page = QueryBuilder(Fund.objects.all()).paginate(params.get('page'), params.get('limit'))
        return Response({
            "funds": FundSerializer(page.items, many=True).data,
            "total": page.total,
            "pages": page.pages,
        })

    def post(self, request):
        serializer = FundSerializer(data=request.data)
        if not serializer.is_valid():
            message = "Invalid amount" if 'amount' in serializer.errors else "Unable to record fund"
            return error_response(message, errors=serializer.errors, status_code=status.HTTP_400_BAD_REQUEST)
        fund = serializer.save(email=request.user.email)
        return Response(insert_result(fund), status=status.HTTP_201_CREATED)


class PaymentIntentView(APIView):
    """Open a card payment with the gateway; the client confirms it with the secret."""

    def post(self, request):
        serializer = PaymentIntentSerializer(data=request.data)
        if not serializer.is_valid():
            return error_response("Invalid amount", errors=serializer.errors, status_code=status.HTTP_400_BAD_REQUEST)
        try:
            client_secret = create_payment_intent(serializer.validated_data['amount'])
        except PaymentGatewayError:
            logger.exception('Payment intent creation failed for %s', request.user.email)
            return error_response(
                "Failed to create payment intent",
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR
            )
        return Response({"clientSecret": client_secret})
