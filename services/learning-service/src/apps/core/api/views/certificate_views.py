# services/learning-service/src/apps/core/api/views/certificate_views.py
"""
Certificate Views
"""

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from common.permissions import IsSelfOrAdmin

from ...services import CertificateService, CertificateEligibility
from ..serializers import CertificateSerializer, CertificateNotEligibleSerializer
from .base import PrincipalMixin


class CertificateView(PrincipalMixin, APIView):
    """
    GET /certificates/{user_id}/{course_id}/

    Returns the certificate when the learner passed the course, otherwise
    HTTP 400 with the current score and what is missing.
    """

    permission_classes = [IsSelfOrAdmin]
    user_id_kwarg = 'user_id'

    def get(self, request, user_id, course_id):
        result = CertificateService.evaluate(
            user_id,
            course_id,
            principal=self.get_principal()
        )

        if isinstance(result, CertificateEligibility):
            return Response({
                'message': 'Certificate data retrieved successfully',
                'eligible': True,
                'certificate': CertificateSerializer(result).data,
            })

        return Response(
            {
                'message': result.reason,
                'eligible': False,
                **CertificateNotEligibleSerializer(result).data,
            },
            status=status.HTTP_400_BAD_REQUEST
        )
