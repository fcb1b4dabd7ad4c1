from datetime import timedelta

from django.db import IntegrityError, transaction
from django.test import TestCase
from django.utils import timezone

from apps.common.exceptions import Forbidden, InvalidStatus, InvalidSubmission, NotFound
from apps.common.tests.mixins import WorkflowDataMixin
from apps.notifications.models import Notification
from apps.reviews.models import EditorialDecision
from apps.submissions.models import Submission
from apps.submissions.services import create_submission, normalize_keywords, set_status


class NormalizeKeywordsTest(TestCase):

    def test_comma_separated_string(self):
        self.assertEqual(normalize_keywords(' peer review, ,ethics,peer review '), ['peer review', 'ethics'])

    def test_list_keeps_first_seen_order(self):
        self.assertEqual(normalize_keywords(['b', 'a', 'b', '']), ['b', 'a'])

    def test_empty(self):
        self.assertEqual(normalize_keywords(None), [])
        self.assertEqual(normalize_keywords(''), [])


class CreateSubmissionTest(WorkflowDataMixin, TestCase):

    def setUp(self):
        self.create_workflow_data()

    def test_creates_submitted_manuscript_with_contributors(self):
        with self.captureOnCommitCallbacks(execute=True):
            submission = create_submission(
                self.journal.id,
                '  Graph Methods  ',
                'Abstract',
                self.actor(self.author),
                keywords='graphs, methods',
                contributors=[
                    {'given_name': 'Ada', 'family_name': 'Author', 'is_primary': True},
                    {'given_name': 'Tom', 'family_name': 'Second'},
                ],
            )

        self.assertEqual(submission.status, Submission.STATUS_SUBMITTED)
        self.assertEqual(submission.title, 'Graph Methods')
        self.assertEqual(submission.author, self.author)
        self.assertIsNotNone(submission.submitted_at)
        self.assertEqual(submission.keywords, ['graphs', 'methods'])
        self.assertEqual(
            list(submission.contributors.values_list('given_name', 'sequence')),
            [('Ada', 0), ('Tom', 1)]
        )
        notification = Notification.objects.get(user=self.editor)
        self.assertEqual(notification.type, 'SUBMISSION_RECEIVED')
        self.assertEqual(notification.link, f'/submissions/{submission.id}')

    def test_title_and_abstract_required(self):
        with self.assertRaises(InvalidSubmission):
            create_submission(self.journal.id, ' ', 'Abstract', self.actor(self.author))
        self.assertFalse(Submission.objects.exists())

    def test_reviewer_cannot_submit(self):
        with self.assertRaises(Forbidden):
            create_submission(self.journal.id, 'Title', 'Abstract', self.actor(self.reviewer))

    def test_unknown_journal(self):
        with self.assertRaises(NotFound):
            create_submission('00000000-0000-0000-0000-000000000000', 'Title', 'Abstract', self.actor(self.author))


class SetStatusTest(WorkflowDataMixin, TestCase):

    def setUp(self):
        self.create_workflow_data()
        self.submission = self.create_submission(status=Submission.STATUS_PUBLISHED)

    def test_editor_can_jump_to_any_editable_status(self):
        with self.captureOnCommitCallbacks(execute=True):
            submission = set_status(self.submission.id, 'SUBMITTED', self.actor(self.editor))

        self.assertEqual(submission.status, 'SUBMITTED')
        self.submission.refresh_from_db()
        self.assertEqual(self.submission.status, 'SUBMITTED')
        self.assertFalse(Notification.objects.exists())

    def test_admin_can_set_status(self):
        set_status(self.submission.id, 'REJECTED', self.actor(self.admin))
        self.submission.refresh_from_db()
        self.assertEqual(self.submission.status, 'REJECTED')

    def test_reviewer_is_forbidden(self):
        with self.assertRaises(Forbidden):
            set_status(self.submission.id, 'ACCEPTED', self.actor(self.reviewer))
        self.submission.refresh_from_db()
        self.assertEqual(self.submission.status, Submission.STATUS_PUBLISHED)

    def test_draft_is_not_settable(self):
        with self.assertRaises(InvalidStatus):
            set_status(self.submission.id, 'DRAFT', self.actor(self.editor))

    def test_unknown_status(self):
        with self.assertRaises(InvalidStatus):
            set_status(self.submission.id, 'ARCHIVED', self.actor(self.editor))

    def test_missing_submission(self):
        with self.assertRaises(NotFound):
            set_status('00000000-0000-0000-0000-000000000000', 'ACCEPTED', self.actor(self.editor))


class SubmissionModelTest(WorkflowDataMixin, TestCase):

    def setUp(self):
        self.create_workflow_data()

    def test_status_outside_domain_is_rejected_by_database(self):
        submission = self.create_submission()
        submission.status = 'ARCHIVED'
        with self.assertRaises(IntegrityError), transaction.atomic():
            submission.save()

    def test_current_decision_is_latest_by_decided_at(self):
        submission = self.create_submission()
        self.assertIsNone(submission.current_decision)

        now = timezone.now()
        EditorialDecision.objects.create(
            submission=submission, decided_by=self.editor, status='REVISION_REQUIRED',
            decided_at=now - timedelta(days=2),
        )
        latest = EditorialDecision.objects.create(
            submission=submission, decided_by=self.editor, status='ACCEPTED',
            decided_at=now,
        )

        self.assertEqual(submission.current_decision, latest)
