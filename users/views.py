from django.contrib.auth import get_user_model
from rest_framework import viewsets, filters
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from core.exceptions import BusinessLogicError
from api.permissions import IsAdmin
from .serializers import UserSerializer

User = get_user_model()


class UserViewSet(viewsets.ModelViewSet):
    """
    ViewSet for User management
    Admin only: public registration is disabled, so this is how owners get accounts
    """
    serializer_class = UserSerializer
    permission_classes = [IsAuthenticated, IsAdmin]
    filter_backends = [filters.SearchFilter, filters.OrderingFilter]
    search_fields = ['username', 'email', 'full_name', 'mobile']
    ordering_fields = ['username', 'date_joined']
    ordering = ['username']

    def get_queryset(self):
        queryset = User.objects.all()
        role = self.request.query_params.get('role')
        if role:
            queryset = queryset.filter(role=role)
        return queryset

    def perform_destroy(self, instance):
        if instance.pk == self.request.user.pk:
            raise BusinessLogicError(
                message="You cannot delete your own account",
                code="CANNOT_DELETE_SELF",
                details={'user_id': instance.pk}
            )
        instance.delete()


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def current_user(request):
    """Get the authenticated user"""
    return Response(UserSerializer(request.user).data)
