from django.urls import include, path

from scanner.views import HealthAPIView

urlpatterns = [
    path('api/', include('scanner.urls')),
    path('health', HealthAPIView.as_view(), name='health'),
]
