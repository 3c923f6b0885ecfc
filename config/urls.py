"""URL configuration for the Bridal World API.

The `urlpatterns` list routes URLs to views. It includes both Django admin
and application‑level routers provided by Django Rest Framework and each app.
"""
from django.contrib import admin  # type: ignore
from django.http import JsonResponse  # type: ignore
from django.urls import path, include  # type: ignore
from django.utils import timezone  # type: ignore
from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView  # type: ignore
from rest_framework_simplejwt.views import TokenObtainPairView, TokenRefreshView  # type: ignore


def health(request):
    return JsonResponse({"ok": True, "timestamp": timezone.now().isoformat()})


# API versioning. v1 is our initial version; future versions can be added here.

urlpatterns = [
    path('admin/', admin.site.urls),
    path('api/health/', health, name='health'),
    path('api/schema/', SpectacularAPIView.as_view(), name='schema'),
    path('api/docs/', SpectacularSwaggerView.as_view(url_name='schema'), name='docs'),
    # Back-office authentication
    path('api/v1/auth/token/', TokenObtainPairView.as_view(), name='token_obtain_pair'),
    path('api/v1/auth/token/refresh/', TokenRefreshView.as_view(), name='token_refresh'),
    # Application URLs
    path('api/v1/schedules/', include('apps.bookings.urls')),
    path('api/v1/cart/', include('apps.cart.urls')),
    path('api/v1/revenues/', include('apps.finances.urls')),
    path('api/v1/', include('apps.catalog.urls')),
    path('api/v1/', include('apps.content.urls')),
]
