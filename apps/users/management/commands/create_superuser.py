"""
Django management command to create the initial administrator.

Usage: python manage.py create_superuser
"""

from django.core.management.base import BaseCommand, CommandError
from django.contrib.auth import get_user_model
from decouple import config

User = get_user_model()


class Command(BaseCommand):
    help = 'Create the initial ADMIN account for the Editorial Portal'

    def add_arguments(self, parser):
        parser.add_argument(
            '--email',
            type=str,
            default=config('SUPERUSER_EMAIL', default='admin@editorial-portal.local'),
            help='Administrator email address'
        )
        parser.add_argument(
            '--password',
            type=str,
            default=config('SUPERUSER_PASSWORD', default=''),
            help='Administrator password'
        )
        parser.add_argument(
            '--force',
            action='store_true',
            help='Update the password and role if the user already exists'
        )

    def handle(self, *args, **options):
        email = options['email']
        password = options['password']

        if not password:
            raise CommandError('A password is required (--password or SUPERUSER_PASSWORD).')

        existing = User.objects.filter(email=email).first()
        if existing and not options['force']:
            raise CommandError(
                f'User with email {email} already exists. '
                'Use --force to update the existing user.'
            )

        if existing:
            existing.set_password(password)
            existing.role = User.ROLE_ADMIN
            existing.is_staff = True
            existing.is_superuser = True
            existing.is_active = True
            existing.save()
            user = existing
            self.stdout.write(self.style.WARNING(f'Updated existing administrator: {email}'))
        else:
            user = User.objects.create_superuser(email=email, password=password)
            self.stdout.write(self.style.SUCCESS(f'Successfully created administrator: {email}'))

        self.stdout.write(f'  ID: {user.id}')
        self.stdout.write(f'  Role: {user.role}')
