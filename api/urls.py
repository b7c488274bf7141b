"""
API URLs for the hostel manager
"""
from django.urls import path, include
from rest_framework.routers import DefaultRouter
from rest_framework_simplejwt.views import TokenObtainPairView, TokenRefreshView

from properties.views import PropertyViewSet
from rooms.views import RoomViewSet
from tenants.views import TenantViewSet
from occupancy.views import OccupancyViewSet
from payments.views import PaymentViewSet
from users.views import UserViewSet, current_user

# Create router
router = DefaultRouter()
router.register(r'properties', PropertyViewSet, basename='property')
router.register(r'rooms', RoomViewSet, basename='room')
router.register(r'tenants', TenantViewSet, basename='tenant')
router.register(r'occupancies', OccupancyViewSet, basename='occupancy')
router.register(r'payments', PaymentViewSet, basename='payment')
router.register(r'users', UserViewSet, basename='user')

urlpatterns = [
    # JWT Authentication
    path('auth/login/', TokenObtainPairView.as_view(), name='token_obtain_pair'),
    path('auth/refresh/', TokenRefreshView.as_view(), name='token_refresh'),
    path('auth/me/', current_user, name='current_user'),

    path('dashboard/', include('dashboard.urls')),

    # API routes
    path('', include(router.urls)),
]
