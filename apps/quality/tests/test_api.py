import pytest
from django.urls import reverse
from rest_framework import status

from apps.finance.models import PaymentRecord


@pytest.mark.django_db
class TestAssessmentApi:

    def test_submit_assessment(self, client_for, assessor, pending_record):
        response = client_for(assessor.user).post(reverse('quality:assessment-list'), {
            'coffee_record': str(pending_record.id),
            'moisture': '12.80',
            'group2_defects': '4.50',
            'suggested_price': '6900.00',
        }, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['batch_number'] == pending_record.batch_number
        assert response.data['status'] == 'pending'

    def test_submit_for_assessed_batch_conflicts(self, client_for, assessor, assessment, pending_record):
        response = client_for(assessor.user).post(reverse('quality:assessment-list'), {
            'coffee_record': str(pending_record.id),
            'moisture': '12.00',
            'suggested_price': '6900.00',
        }, format='json')

        assert response.status_code == status.HTTP_409_CONFLICT

    def test_assessor_cannot_approve(self, client_for, assessor, assessment):
        url = reverse('quality:assessment-approve', kwargs={'pk': assessment.id})

        response = client_for(assessor.user).post(url)

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_manager_approves(self, client_for, quality_manager, assessment, pending_record):
        url = reverse('quality:assessment-approve', kwargs={'pk': assessment.id})

        response = client_for(quality_manager.user).post(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['status'] == 'approved'
        assert PaymentRecord.objects.filter(coffee_record=pending_record).exists()

    def test_manager_rejects(self, client_for, quality_manager, assessment):
        url = reverse('quality:assessment-reject', kwargs={'pk': assessment.id})

        response = client_for(quality_manager.user).post(url, {'reason': 'High moisture'}, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['rejection_reason'] == 'High moisture'

    def test_requires_quality_module(self, plain_client):
        response = plain_client.get(reverse('quality:assessment-list'))

        assert response.status_code == status.HTTP_403_FORBIDDEN
