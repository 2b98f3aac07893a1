from django.urls import path
from .views import StatsView

app_name = 'analytics'

urlpatterns = [
    path('stats', StatsView.as_view(), name='stats'),
]
