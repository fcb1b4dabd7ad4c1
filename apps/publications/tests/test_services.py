from django.core.cache import cache
from django.test import TestCase

from apps.common.exceptions import (
    Conflict,
    Forbidden,
    InvalidImage,
    InvalidIssue,
    InvalidState,
    JournalMismatch,
    NotFound,
)
from apps.common.models import ActivityLog
from apps.common.tests.mixins import WorkflowDataMixin
from apps.notifications.models import Notification
from apps.publications.cache import cache_key
from apps.publications.models import Issue
from apps.publications.services import (
    assign_submission_to_issue,
    create_issue,
    normalize_featured_image,
    publish_issue,
    update_issue_featured_image,
)
from apps.submissions.models import Submission


class NormalizeFeaturedImageTest(TestCase):

    def test_blank_clears(self):
        self.assertIsNone(normalize_featured_image(''))
        self.assertIsNone(normalize_featured_image('   '))
        self.assertIsNone(normalize_featured_image(None))

    def test_root_relative_path(self):
        self.assertEqual(normalize_featured_image(' /covers/vol1.jpg '), '/covers/vol1.jpg')

    def test_http_urls(self):
        self.assertEqual(normalize_featured_image('https://cdn.example.org/c.png'), 'https://cdn.example.org/c.png')
        self.assertEqual(normalize_featured_image('http://example.org/c.png'), 'http://example.org/c.png')

    def test_other_values_rejected(self):
        for value in ('covers/vol1.jpg', 'ftp://example.org/c.png', 'javascript:alert(1)', '//evil.example/c.png'):
            with self.assertRaises(InvalidImage):
                normalize_featured_image(value)


class CreateIssueTest(WorkflowDataMixin, TestCase):

    def setUp(self):
        self.create_workflow_data()

    def test_managing_editor_creates_draft(self):
        issue = create_issue(self.journal.id, '3', 1, 2024, self.actor(self.editor), title='  Spring  ')

        self.assertEqual((issue.volume, issue.issue_number, issue.year), (3, 1, 2024))
        self.assertEqual(issue.title, 'Spring')
        self.assertIsNone(issue.published_at)
        self.assertIsNone(issue.featured_image_url)

    def test_duplicate_issue_conflicts(self):
        create_issue(self.journal.id, 1, 1, 2024, self.actor(self.editor))
        with self.assertRaises(Conflict):
            create_issue(self.journal.id, 1, 1, 2024, self.actor(self.admin))
        self.assertEqual(Issue.objects.count(), 1)

    def test_same_numbers_in_another_journal_are_allowed(self):
        create_issue(self.journal.id, 1, 1, 2024, self.actor(self.editor))
        create_issue(self.other_journal.id, 1, 1, 2024, self.actor(self.other_editor))
        self.assertEqual(Issue.objects.count(), 2)

    def test_numbers_must_be_positive_integers(self):
        with self.assertRaises(InvalidIssue):
            create_issue(self.journal.id, 'one', 1, 2024, self.actor(self.editor))
        with self.assertRaises(InvalidIssue):
            create_issue(self.journal.id, 1, 0, 2024, self.actor(self.editor))

    def test_invalid_image_rejected(self):
        with self.assertRaises(InvalidImage):
            create_issue(self.journal.id, 1, 1, 2024, self.actor(self.editor), featured_image_url='cover.jpg')

    def test_editor_of_other_journal_forbidden(self):
        with self.assertRaises(Forbidden):
            create_issue(self.journal.id, 1, 1, 2024, self.actor(self.other_editor))

    def test_unknown_journal(self):
        with self.assertRaises(NotFound):
            create_issue('00000000-0000-0000-0000-000000000000', 1, 1, 2024, self.actor(self.admin))


class AssignSubmissionTest(WorkflowDataMixin, TestCase):

    def setUp(self):
        self.create_workflow_data()
        self.issue = create_issue(self.journal.id, 1, 1, 2024, self.actor(self.editor))

    def test_accepted_submission_is_scheduled(self):
        submission = self.create_submission(status=Submission.STATUS_ACCEPTED)

        result = assign_submission_to_issue(self.issue.id, submission.id, self.actor(self.editor))

        self.assertEqual(result.issue, self.issue)
        self.assertEqual(result.status, Submission.STATUS_ACCEPTED)

    def test_assignment_to_published_issue_publishes(self):
        publish_issue(self.issue.id, self.actor(self.editor))
        submission = self.create_submission(status=Submission.STATUS_ACCEPTED)

        result = assign_submission_to_issue(self.issue.id, submission.id, self.actor(self.editor))

        self.assertEqual(result.status, Submission.STATUS_PUBLISHED)

    def test_submission_must_be_accepted(self):
        submission = self.create_submission(status=Submission.STATUS_UNDER_REVIEW)

        with self.assertRaises(InvalidState):
            assign_submission_to_issue(self.issue.id, submission.id, self.actor(self.editor))
        submission.refresh_from_db()
        self.assertIsNone(submission.issue)

    def test_journal_mismatch(self):
        submission = self.create_submission(status=Submission.STATUS_ACCEPTED, journal=self.other_journal)

        with self.assertRaises(JournalMismatch):
            assign_submission_to_issue(self.issue.id, submission.id, self.actor(self.admin))
        submission.refresh_from_db()
        self.assertIsNone(submission.issue)

    def test_missing_records(self):
        with self.assertRaises(NotFound):
            assign_submission_to_issue(self.issue.id, '00000000-0000-0000-0000-000000000000', self.actor(self.editor))
        with self.assertRaises(NotFound):
            assign_submission_to_issue('00000000-0000-0000-0000-000000000000', '00000000-0000-0000-0000-000000000000',
                                       self.actor(self.editor))


class PublishIssueTest(WorkflowDataMixin, TestCase):

    def setUp(self):
        cache.clear()
        self.create_workflow_data()
        self.issue = create_issue(self.journal.id, 1, 1, 2024, self.actor(self.editor))
        self.first = self.create_submission(status=Submission.STATUS_ACCEPTED, title='First')
        self.second = self.create_submission(status=Submission.STATUS_ACCEPTED, title='Second')
        for submission in (self.first, self.second):
            assign_submission_to_issue(self.issue.id, submission.id, self.actor(self.editor))

    def test_publish_stamps_issue_and_publishes_submissions(self):
        with self.captureOnCommitCallbacks(execute=True):
            issue = publish_issue(self.issue.id, self.actor(self.editor))

        self.assertIsNotNone(issue.published_at)
        self.assertEqual(
            set(Submission.objects.filter(issue=self.issue).values_list('status', flat=True)),
            {Submission.STATUS_PUBLISHED}
        )
        self.assertEqual(Notification.objects.filter(user=self.author, type='ISSUE_PUBLISHED').count(), 2)

        log = ActivityLog.objects.get(action_type='PUBLISH', resource_type='ISSUE')
        self.assertEqual(log.user, self.editor)
        self.assertEqual(len(log.metadata['submission_ids']), 2)
        self.assertIsNotNone(log.metadata['published_at'])

    def test_publish_is_idempotent(self):
        first = publish_issue(self.issue.id, self.actor(self.editor))

        with self.captureOnCommitCallbacks(execute=True) as callbacks:
            second = publish_issue(self.issue.id, self.actor(self.admin))

        self.assertEqual(first.published_at, second.published_at)
        self.assertEqual(callbacks, [])
        self.assertFalse(Notification.objects.filter(type='ISSUE_PUBLISHED').exists())

    def test_publish_invalidates_public_pages(self):
        key = cache_key(f'/journals/{self.journal.slug}/current')
        cache.set(key, {'stale': True})

        with self.captureOnCommitCallbacks(execute=True):
            publish_issue(self.issue.id, self.actor(self.editor))

        self.assertIsNone(cache.get(key))

    def test_editor_of_other_journal_forbidden(self):
        with self.assertRaises(Forbidden):
            publish_issue(self.issue.id, self.actor(self.other_editor))
        self.issue.refresh_from_db()
        self.assertIsNone(self.issue.published_at)


class FeaturedImageTest(WorkflowDataMixin, TestCase):

    def setUp(self):
        cache.clear()
        self.create_workflow_data()
        self.issue = create_issue(self.journal.id, 1, 1, 2024, self.actor(self.editor))

    def test_set_and_clear(self):
        issue = update_issue_featured_image(self.issue.id, '/covers/1.jpg', self.actor(self.editor))
        self.assertEqual(issue.featured_image_url, '/covers/1.jpg')

        issue = update_issue_featured_image(self.issue.id, '  ', self.actor(self.editor))
        self.assertIsNone(issue.featured_image_url)

    def test_invalid_image_keeps_previous_value(self):
        update_issue_featured_image(self.issue.id, 'https://cdn.example.org/1.jpg', self.actor(self.editor))

        with self.assertRaises(InvalidImage):
            update_issue_featured_image(self.issue.id, 'not a url', self.actor(self.editor))
        self.issue.refresh_from_db()
        self.assertEqual(self.issue.featured_image_url, 'https://cdn.example.org/1.jpg')

    def test_published_issue_change_invalidates_cache(self):
        publish_issue(self.issue.id, self.actor(self.editor))
        key = cache_key(f'/issues/{self.issue.id}')
        cache.set(key, {'stale': True})

        with self.captureOnCommitCallbacks(execute=True):
            update_issue_featured_image(self.issue.id, '/covers/2.jpg', self.actor(self.editor))

        self.assertIsNone(cache.get(key))

    def test_reviewer_forbidden(self):
        with self.assertRaises(Forbidden):
            update_issue_featured_image(self.issue.id, '/covers/1.jpg', self.actor(self.reviewer))
