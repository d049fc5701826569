# smarttask/urls.py
from django.urls import include, path

from smarttask_app.views import HealthView

urlpatterns = [
    path('health', HealthView.as_view(), name='health'),
    path('auth/', include('smarttask_user.urls')),
    path('', include('smarttask_app.urls')),
]
