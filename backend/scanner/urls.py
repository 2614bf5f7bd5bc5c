from django.urls import path

from scanner import views

urlpatterns = [
    path('analyze', views.AnalyzeAPIView.as_view(), name='analyze-api'),
]
