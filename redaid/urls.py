from django.contrib import admin
from django.urls import include, path

from accounts.views import HomeView

urlpatterns = [
    path('', HomeView.as_view(), name='home'),
    path('admin/', admin.site.urls),
    path('', include('accounts.urls')),
    path('', include('donations.urls')),
    path('', include('funds.urls')),
    path('', include('blogs.urls')),
    path('', include('analytics.urls')),
]
