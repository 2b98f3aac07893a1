from django.urls import path
from . import views

urlpatterns = [
    path('blogs', views.BlogListCreateView.as_view(), name='blog-list'),
    path('blogs/<str:pk>', views.BlogDetailView.as_view(), name='blog-detail'),
    path('blogs/<str:pk>/<str:blog_status>', views.BlogStatusView.as_view(), name='blog-status'),
]
