from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from apps.common.tests.mixins import WorkflowDataMixin
from apps.reviews.models import EditorialDecision
from apps.reviews.services import assign_reviewer, submit_review
from apps.submissions.models import Submission


class ReviewEndpointsTest(WorkflowDataMixin, APITestCase):

    def setUp(self):
        self.create_workflow_data()
        self.submission = self.create_submission()

    def test_editor_assigns_reviewer(self):
        self.authenticate(self.editor)
        response = self.client.post(reverse('reviews:review-list'), {
            'submission': str(self.submission.id),
            'reviewer': str(self.reviewer.id),
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertFalse(response.data['is_submitted'])
        self.submission.refresh_from_db()
        self.assertEqual(self.submission.status, Submission.STATUS_UNDER_REVIEW)

    def test_duplicate_assignment_returns_conflict(self):
        assign_reviewer(self.submission.id, self.reviewer.id, self.actor(self.editor))
        self.authenticate(self.editor)

        response = self.client.post(reverse('reviews:review-list'), {
            'submission': str(self.submission.id),
            'reviewer': str(self.reviewer.id),
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)

    def test_reviewer_submits_review(self):
        review = assign_reviewer(self.submission.id, self.reviewer.id, self.actor(self.editor))
        self.authenticate(self.reviewer)

        response = self.client.post(reverse('reviews:review-submit', args=[review.id]), {
            'recommendation': 'ACCEPT',
            'score': 9,
            'comments_to_author': 'Clear and convincing.',
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data['score'], 5)
        self.assertTrue(response.data['is_submitted'])

    def test_wrong_reviewer_gets_forbidden(self):
        review = assign_reviewer(self.submission.id, self.reviewer.id, self.actor(self.editor))
        self.authenticate(self.second_reviewer)

        response = self.client.post(reverse('reviews:review-submit', args=[review.id]), {
            'recommendation': 'ACCEPT',
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_author_does_not_see_comments_to_editor(self):
        review = assign_reviewer(self.submission.id, self.reviewer.id, self.actor(self.editor))
        submit_review(review.id, 'ACCEPT', 4, 'For the author', 'Editor only', self.actor(self.reviewer))
        self.authenticate(self.author)

        response = self.client.get(reverse('reviews:review-detail', args=[review.id]))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['comments_to_author'], 'For the author')
        self.assertNotIn('comments_to_editor', response.data)

    def test_my_reviews_lists_pending_assignments(self):
        assign_reviewer(self.submission.id, self.reviewer.id, self.actor(self.editor))
        self.authenticate(self.reviewer)

        response = self.client.get(reverse('reviews:review-my-reviews'), {'pending': 'true'})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data), 1)


class DecisionEndpointsTest(WorkflowDataMixin, APITestCase):

    def setUp(self):
        self.create_workflow_data()
        self.submission = self.create_submission()
        self.url = reverse('reviews:decision-list')

    def test_editor_records_decision(self):
        self.authenticate(self.editor)
        response = self.client.post(self.url, {
            'submission': str(self.submission.id),
            'status': 'REVISION_REQUIRED',
            'notes': 'Please expand section 3.',
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertEqual(response.data['status'], 'REVISION_REQUIRED')
        self.submission.refresh_from_db()
        self.assertEqual(self.submission.status, 'REVISION_REQUIRED')

    def test_reviewer_cannot_record_decision(self):
        self.authenticate(self.reviewer)
        response = self.client.post(self.url, {
            'submission': str(self.submission.id),
            'status': 'ACCEPTED',
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertFalse(EditorialDecision.objects.exists())

    def test_invalid_decision_status(self):
        self.authenticate(self.editor)
        response = self.client.post(self.url, {
            'submission': str(self.submission.id),
            'status': 'PUBLISHED',
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_decisions_have_no_update_endpoint(self):
        self.authenticate(self.editor)
        response = self.client.post(self.url, {
            'submission': str(self.submission.id),
            'status': 'ACCEPTED',
        }, format='json')
        detail_url = reverse('reviews:decision-detail', args=[response.data['id']])

        self.assertEqual(
            self.client.patch(detail_url, {'status': 'REJECTED'}, format='json').status_code,
            status.HTTP_405_METHOD_NOT_ALLOWED
        )
        self.assertEqual(self.client.delete(detail_url).status_code, status.HTTP_405_METHOD_NOT_ALLOWED)
        self.assertEqual(EditorialDecision.objects.count(), 1)
