# services/learning-service/src/apps/core/api/views/result_views.py
"""
Result Views

Progress of a learner built from their quiz attempts.
"""

from rest_framework import viewsets
from rest_framework.response import Response

from common.permissions import IsSelfOrAdmin

from ...services import ProgressService
from .base import PrincipalMixin


class ResultViewSet(PrincipalMixin, viewsets.ViewSet):
    """
    GET /results/            progress of the caller
    GET /results/{user_id}/  progress of a learner (self or admin)
    """

    permission_classes = [IsSelfOrAdmin]
    lookup_field = 'user_id'
    user_id_kwarg = 'user_id'

    def list(self, request):
        principal = self.get_principal()
        return Response(ProgressService.get_progress(principal.user_id, principal=principal))

    def retrieve(self, request, user_id=None):
        return Response(ProgressService.get_progress(user_id, principal=self.get_principal()))
