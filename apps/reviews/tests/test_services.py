from unittest.mock import patch

from django.conf import settings
from django.core import mail
from django.db import DatabaseError, connection
from django.test import TestCase, override_settings

from apps.common.exceptions import (
    Conflict,
    Forbidden,
    InvalidRecommendation,
    InvalidRole,
    InvalidState,
    InvalidStatus,
    NotFound,
)
from apps.common.models import ActivityLog
from apps.common.tests.mixins import WorkflowDataMixin
from apps.notifications.models import EmailLog, Notification
from apps.reviews.models import EditorialDecision, Review
from apps.reviews.services import assign_reviewer, parse_score, record_decision, submit_review
from apps.submissions.models import Submission


def workflow_settings(**overrides):
    return override_settings(WORKFLOW={**settings.WORKFLOW, **overrides})


class ParseScoreTest(TestCase):

    def test_values_inside_range(self):
        self.assertEqual(parse_score(3), 3)
        self.assertEqual(parse_score('4'), 4)

    def test_values_are_clamped(self):
        self.assertEqual(parse_score(7), 5)
        self.assertEqual(parse_score('0'), 1)
        self.assertEqual(parse_score(-3), 1)

    def test_leading_integer_is_used(self):
        self.assertEqual(parse_score('4 stars'), 4)
        self.assertEqual(parse_score(' 2.9'), 2)

    def test_non_numeric_gives_none(self):
        self.assertIsNone(parse_score('abc'))
        self.assertIsNone(parse_score(''))
        self.assertIsNone(parse_score(None))


class AssignReviewerTest(WorkflowDataMixin, TestCase):

    def setUp(self):
        self.create_workflow_data()
        self.submission = self.create_submission()

    def test_assignment_creates_pending_review(self):
        with self.captureOnCommitCallbacks(execute=True):
            review = assign_reviewer(self.submission.id, self.reviewer.id, self.actor(self.editor))

        self.assertIsNone(review.submitted_at)
        self.assertIsNone(review.recommendation)
        self.assertEqual(review.assigned_by, self.editor)
        self.submission.refresh_from_db()
        self.assertEqual(self.submission.status, Submission.STATUS_UNDER_REVIEW)

        notification = Notification.objects.get(user=self.reviewer)
        self.assertEqual(notification.type, 'REVIEW_ASSIGNED')
        self.assertTrue(ActivityLog.objects.filter(action_type='ASSIGN', resource_type='REVIEW').exists())

    def test_assignment_forces_under_review_from_any_status(self):
        self.submission.status = Submission.STATUS_ACCEPTED
        self.submission.save()

        assign_reviewer(self.submission.id, self.reviewer.id, self.actor(self.admin))

        self.submission.refresh_from_db()
        self.assertEqual(self.submission.status, Submission.STATUS_UNDER_REVIEW)

    def test_duplicate_assignment_conflicts(self):
        assign_reviewer(self.submission.id, self.reviewer.id, self.actor(self.editor))

        with self.assertRaises(Conflict):
            assign_reviewer(self.submission.id, self.reviewer.id, self.actor(self.editor))
        self.assertEqual(Review.objects.filter(submission=self.submission).count(), 1)

    def test_reviewer_cannot_assign(self):
        with self.assertRaises(Forbidden):
            assign_reviewer(self.submission.id, self.second_reviewer.id, self.actor(self.reviewer))

    def test_missing_submission_or_reviewer(self):
        with self.assertRaises(NotFound):
            assign_reviewer('00000000-0000-0000-0000-000000000000', self.reviewer.id, self.actor(self.editor))
        with self.assertRaises(NotFound):
            assign_reviewer(self.submission.id, '00000000-0000-0000-0000-000000000000', self.actor(self.editor))

    def test_any_role_may_be_assigned_by_default(self):
        review = assign_reviewer(self.submission.id, self.other_editor.id, self.actor(self.editor))
        self.assertEqual(review.reviewer, self.other_editor)

    def test_reviewer_role_required_when_enabled(self):
        with workflow_settings(REQUIRE_REVIEWER_ROLE=True):
            with self.assertRaises(InvalidRole):
                assign_reviewer(self.submission.id, self.author.id, self.actor(self.editor))
        self.assertFalse(Review.objects.exists())


class SubmitReviewTest(WorkflowDataMixin, TestCase):

    def setUp(self):
        self.create_workflow_data()
        self.submission = self.create_submission()
        self.review = assign_reviewer(self.submission.id, self.reviewer.id, self.actor(self.editor))

    def test_assigned_reviewer_submits(self):
        with self.captureOnCommitCallbacks(execute=True):
            review = submit_review(
                self.review.id, 'MINOR_REVISION', '7', '  Nice work  ', '   ', self.actor(self.reviewer)
            )

        self.assertEqual(review.recommendation, 'MINOR_REVISION')
        self.assertEqual(review.score, 5)
        self.assertEqual(review.comments_to_author, 'Nice work')
        self.assertIsNone(review.comments_to_editor)
        self.assertIsNotNone(review.submitted_at)

        self.submission.refresh_from_db()
        self.assertEqual(self.submission.status, Submission.STATUS_UNDER_REVIEW)
        notification = Notification.objects.get(user=self.editor, type='REVIEW_SUBMITTED')
        self.assertIn('Minor Revision', notification.message)

    def test_resubmission_overwrites(self):
        submit_review(self.review.id, 'ACCEPT', 4, None, None, self.actor(self.reviewer))
        review = submit_review(self.review.id, 'REJECT', 'abc', None, None, self.actor(self.reviewer))

        self.assertEqual(review.recommendation, 'REJECT')
        self.assertIsNone(review.score)

    def test_other_reviewer_is_forbidden(self):
        with self.assertRaises(Forbidden):
            submit_review(self.review.id, 'ACCEPT', 3, None, None, self.actor(self.second_reviewer))
        self.review.refresh_from_db()
        self.assertIsNone(self.review.submitted_at)

    def test_assigned_user_without_reviewer_role_is_forbidden(self):
        review = assign_reviewer(self.submission.id, self.other_editor.id, self.actor(self.editor))
        with self.assertRaises(Forbidden):
            submit_review(review.id, 'ACCEPT', 3, None, None, self.actor(self.other_editor))

    def test_ownership_is_checked_before_recommendation(self):
        with self.assertRaises(Forbidden):
            submit_review(self.review.id, 'MAYBE', 3, None, None, self.actor(self.second_reviewer))

    def test_invalid_recommendation(self):
        with self.assertRaises(InvalidRecommendation):
            submit_review(self.review.id, 'MAYBE', 3, None, None, self.actor(self.reviewer))

    def test_missing_review(self):
        with self.assertRaises(NotFound):
            submit_review('00000000-0000-0000-0000-000000000000', 'ACCEPT', 3, None, None, self.actor(self.reviewer))


class RecordDecisionTest(WorkflowDataMixin, TestCase):

    def setUp(self):
        self.create_workflow_data()
        self.submission = self.create_submission(title='Graph Methods')

    def test_decision_sets_status_and_notifies_author(self):
        with self.captureOnCommitCallbacks(execute=True):
            decision = record_decision(self.submission.id, 'ACCEPTED', '  Well done ', self.actor(self.editor))

        self.submission.refresh_from_db()
        self.assertEqual(self.submission.status, 'ACCEPTED')
        self.assertEqual(decision.notes, 'Well done')
        self.assertEqual(decision.decided_by, self.editor)
        self.assertEqual(self.submission.current_decision, decision)

        notification = Notification.objects.get(user=self.author, type='DECISION_MADE')
        self.assertEqual(notification.title, 'Manuscript Accepted')

        self.assertEqual(len(mail.outbox), 1)
        self.assertEqual(mail.outbox[0].to, ['author@example.com'])
        self.assertIn('Graph Methods', mail.outbox[0].subject)
        self.assertEqual(EmailLog.objects.get().status, 'SENT')

    def test_decision_titles(self):
        expected = {
            'REJECTED': 'Manuscript Rejected',
            'REVISION_REQUIRED': 'Revision Required',
        }
        for status, title in expected.items():
            with self.captureOnCommitCallbacks(execute=True):
                record_decision(self.submission.id, status, None, self.actor(self.admin))
            self.assertTrue(Notification.objects.filter(user=self.author, title=title).exists())

    def test_reviewer_is_forbidden(self):
        with self.assertRaises(Forbidden):
            record_decision(self.submission.id, 'ACCEPTED', None, self.actor(self.reviewer))
        self.assertFalse(EditorialDecision.objects.exists())
        self.submission.refresh_from_db()
        self.assertEqual(self.submission.status, Submission.STATUS_SUBMITTED)

    def test_invalid_status(self):
        for status in ('PUBLISHED', 'SUBMITTED', 'bogus'):
            with self.assertRaises(InvalidStatus):
                record_decision(self.submission.id, status, None, self.actor(self.editor))

    def test_missing_submission(self):
        with self.assertRaises(NotFound):
            record_decision('00000000-0000-0000-0000-000000000000', 'ACCEPTED', None, self.actor(self.editor))

    def test_failed_decision_insert_rolls_back_status(self):
        with patch('apps.reviews.services.EditorialDecision.objects.create', side_effect=DatabaseError('disk full')):
            with self.assertRaises(DatabaseError):
                record_decision(self.submission.id, 'ACCEPTED', None, self.actor(self.editor))

        self.submission.refresh_from_db()
        self.assertEqual(self.submission.status, Submission.STATUS_SUBMITTED)
        self.assertFalse(EditorialDecision.objects.exists())

    def test_notification_failure_does_not_undo_decision(self):
        with patch('apps.notifications.dispatcher.notify', side_effect=RuntimeError('boom')):
            with self.captureOnCommitCallbacks(execute=True):
                decision = record_decision(self.submission.id, 'REJECTED', None, self.actor(self.editor))

        self.assertTrue(EditorialDecision.objects.filter(id=decision.id).exists())
        self.submission.refresh_from_db()
        self.assertEqual(self.submission.status, 'REJECTED')
        self.assertFalse(Notification.objects.exists())

    def test_failed_audit_write_keeps_decision(self):
        def broken_audit_write(**kwargs):
            with connection.cursor() as cursor:
                cursor.execute('SELECT * FROM missing_activity_log_table')

        with patch('apps.common.utils.activity_logger.ActivityLog.objects.create', side_effect=broken_audit_write):
            decision = record_decision(self.submission.id, 'ACCEPTED', None, self.actor(self.editor))

        self.assertTrue(EditorialDecision.objects.filter(id=decision.id).exists())
        self.submission.refresh_from_db()
        self.assertEqual(self.submission.status, Submission.STATUS_ACCEPTED)
        self.assertFalse(ActivityLog.objects.filter(resource_id=str(decision.id)).exists())

    def test_email_queue_failure_does_not_undo_decision(self):
        with patch('apps.notifications.dispatcher.send_decision_email') as task:
            task.delay.side_effect = RuntimeError('broker down')
            with self.captureOnCommitCallbacks(execute=True):
                record_decision(self.submission.id, 'ACCEPTED', None, self.actor(self.editor))

        self.submission.refresh_from_db()
        self.assertEqual(self.submission.status, 'ACCEPTED')
        self.assertTrue(Notification.objects.filter(user=self.author, type='DECISION_MADE').exists())
        self.assertEqual(len(mail.outbox), 0)

    def test_review_required_before_final_decision_when_enabled(self):
        with workflow_settings(REQUIRE_REVIEW_BEFORE_DECISION=True):
            with self.assertRaises(InvalidState):
                record_decision(self.submission.id, 'ACCEPTED', None, self.actor(self.editor))
            record_decision(self.submission.id, 'REVISION_REQUIRED', None, self.actor(self.editor))

        self.submission.refresh_from_db()
        self.assertEqual(self.submission.status, 'REVISION_REQUIRED')


class EditorialDecisionImmutabilityTest(WorkflowDataMixin, TestCase):

    def setUp(self):
        self.create_workflow_data()
        submission = self.create_submission()
        self.decision = record_decision(submission.id, 'ACCEPTED', 'ok', self.actor(self.editor))

    def test_decision_cannot_be_changed(self):
        self.decision.status = 'REJECTED'
        with self.assertRaises(ValueError):
            self.decision.save()
        self.assertEqual(EditorialDecision.objects.get(id=self.decision.id).status, 'ACCEPTED')

    def test_decision_cannot_be_deleted(self):
        with self.assertRaises(ValueError):
            self.decision.delete()
        self.assertTrue(EditorialDecision.objects.filter(id=self.decision.id).exists())
