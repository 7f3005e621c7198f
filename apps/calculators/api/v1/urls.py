from django.urls import path, include
from rest_framework.routers import DefaultRouter

from apps.calculators.api.v1.views import (
    CalculatorToolViewSet,
    SavedCalculationViewSet,
)

router = DefaultRouter()
router.register(r'tools', CalculatorToolViewSet, basename='tool')
router.register(r'calculations', SavedCalculationViewSet, basename='calculation')

urlpatterns = [
    path('', include(router.urls)),
]
