"""
Management command to create the built-in email templates.
Run with: python manage.py create_email_templates
"""
from django.core.management.base import BaseCommand
from apps.notifications.email_templates import DEFAULT_TEMPLATES
from apps.notifications.models import EmailTemplate


class Command(BaseCommand):
    help = 'Create or refresh the built-in email templates'

    def add_arguments(self, parser):
        parser.add_argument(
            '--overwrite',
            action='store_true',
            help='Replace the content of templates that already exist'
        )

    def handle(self, *args, **options):
        created_count = 0
        for template_type, data in DEFAULT_TEMPLATES.items():
            if options['overwrite']:
                _, created = EmailTemplate.objects.update_or_create(template_type=template_type, defaults=data)
            else:
                _, created = EmailTemplate.objects.get_or_create(template_type=template_type, defaults=data)
            if created:
                created_count += 1
                self.stdout.write(self.style.SUCCESS(f'Created template: {template_type}'))
            else:
                self.stdout.write(f'Template exists: {template_type}')

        self.stdout.write(self.style.SUCCESS(f'\n{created_count} template(s) created'))
