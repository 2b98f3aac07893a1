from django.urls import path
from .views import DonorListView, UserDetailView, UserListCreateView, UserRoleView

urlpatterns = [
    path('donors', DonorListView.as_view(), name='donor-list'),
    path('users', UserListCreateView.as_view(), name='user-list'),
    path('users/<str:email>/role', UserRoleView.as_view(), name='user-role'),
    path('users/<str:lookup>', UserDetailView.as_view(), name='user-detail'),
]
