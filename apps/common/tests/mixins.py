from django.contrib.auth import get_user_model
from rest_framework_simplejwt.tokens import RefreshToken

from apps.common.permissions import Actor
from apps.journals.models import Journal
from apps.submissions.models import Submission

User = get_user_model()


class WorkflowDataMixin:
    """
    Users in every role, two journals with different managing editors and a
    helper for submissions in a given status.
    """
    password = 'testpass123'

    def create_user(self, email, role, **extra):
        return User.objects.create_user(email=email, password=self.password, role=role, **extra)

    def create_workflow_data(self):
        self.admin = self.create_user('admin@example.com', 'ADMIN')
        self.editor = self.create_user('editor@example.com', 'EDITOR', first_name='Erin', last_name='Editor')
        self.other_editor = self.create_user('other.editor@example.com', 'EDITOR')
        self.reviewer = self.create_user('reviewer@example.com', 'REVIEWER', first_name='Rae', last_name='Viewer')
        self.second_reviewer = self.create_user('reviewer2@example.com', 'REVIEWER')
        self.author = self.create_user('author@example.com', 'AUTHOR', first_name='Ada', last_name='Author')

        self.journal = Journal.objects.create(
            title='Journal of Testing',
            slug='testing',
            editor=self.editor,
        )
        self.other_journal = Journal.objects.create(
            title='Other Journal',
            slug='other',
            editor=self.other_editor,
        )

    def create_submission(self, status='SUBMITTED', journal=None, author=None, title='A Study of Tests'):
        return Submission.objects.create(
            journal=journal or self.journal,
            author=author or self.author,
            title=title,
            abstract='Abstract text',
            status=status,
        )

    def actor(self, user):
        return Actor.from_user(user)

    def authenticate(self, user):
        refresh = RefreshToken.for_user(user)
        self.client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
