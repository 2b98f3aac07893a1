from django.urls import path
from . import views

urlpatterns = [
    path('donation-requests', views.DonationRequestListCreateView.as_view(), name='donation-request-list'),
    path('donation-requests/<str:pk>', views.DonationRequestDetailView.as_view(), name='donation-request-detail'),
    path('donation/<str:pk>', views.DonationStatusView.as_view(), name='donation-status'),
]
