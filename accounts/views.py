from django.utils import timezone
from rest_framework import permissions, serializers, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from scheduler.data import repos
from scheduler.data.models import ReviewSchedule


class ProfileSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    username = serializers.CharField()
    scheduled_reviews = serializers.IntegerField()
    due_reviews = serializers.IntegerField()


class UserViewSet(viewsets.ViewSet):
    permission_classes = [permissions.IsAuthenticated]

    @action(detail=False, methods=["get"])
    def me(self, request):
        """The acting user with a summary of their review workload."""
        user = request.user
        profile = {
            "id": user.pk,
            "username": user.username,
            "scheduled_reviews": ReviewSchedule.objects.filter(user=user).count(),
            "due_reviews": repos.due_schedules(user.pk, timezone.now()).count(),
        }
        return Response(ProfileSerializer(profile).data)
