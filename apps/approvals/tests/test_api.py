import pytest
from django.urls import reverse
from rest_framework import status


@pytest.mark.django_db
class TestApprovalRequestApi:

    def test_submit_and_duplicate_conflict(self, client_for, requester):
        client = client_for(requester.user)
        payload = {
            'request_type': 'expense',
            'title': 'Tarpaulins for drying',
            'description': 'Ten tarpaulins',
            'amount': '250000.00',
        }

        first = client.post(reverse('approvals:request-list'), payload, format='json')
        second = client.post(reverse('approvals:request-list'), payload, format='json')
        forced = client.post(reverse('approvals:request-list'), {**payload, 'force': True}, format='json')

        assert first.status_code == status.HTTP_201_CREATED
        assert second.status_code == status.HTTP_409_CONFLICT
        assert second.data['duplicate']['matched_request']['id'] == first.data['id']
        assert forced.status_code == status.HTTP_201_CREATED

    def test_check_duplicate_creates_nothing(self, client_for, requester, make_request):
        make_request()

        response = client_for(requester.user).post(reverse('approvals:request-check-duplicate'), {
            'request_type': 'expense',
            'title': 'Fuel for delivery truck',
            'description': 'Diesel for Kasese trip',
            'amount': '150000.00',
        }, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['is_duplicate'] is True

    def test_requester_sees_only_own(self, client_for, make_employee, make_request, reviewer):
        make_request()
        outsider = make_employee()

        assert client_for(outsider.user).get(reverse('approvals:request-list')).data['count'] == 0
        assert client_for(reviewer.user).get(reverse('approvals:request-list')).data['count'] == 1

    def test_requester_cannot_approve(self, client_for, requester, make_request):
        approval = make_request()
        url = reverse('approvals:request-approve', kwargs={'pk': approval.id})

        assert client_for(requester.user).post(url).status_code == status.HTTP_403_FORBIDDEN

    def test_reviewer_decides_once(self, client_for, reviewer, make_request):
        approval = make_request()
        client = client_for(reviewer.user)

        approved = client.post(reverse('approvals:request-approve', kwargs={'pk': approval.id}))
        rejected = client.post(
            reverse('approvals:request-reject', kwargs={'pk': approval.id}),
            {'reason': 'Changed my mind'},
            format='json',
        )

        assert approved.status_code == status.HTTP_200_OK
        assert rejected.status_code == status.HTTP_409_CONFLICT
