from django.urls import path
from .views import FundListCreateView, PaymentIntentView

urlpatterns = [
    path('funds', FundListCreateView.as_view(), name='fund-list'),
    path('create-payment-intent', PaymentIntentView.as_view(), name='payment-intent'),
]
