"""
Management command to create the built-in roles.
"""
from django.conf import settings
from django.core.management.base import BaseCommand

from apps.accounts.models import Role


class Command(BaseCommand):
    """Create built-in roles that permission checks rely on."""

    help = 'Create the built-in roles (系统管理员, 公司管理者, 员工) if they are missing'

    def add_arguments(self, parser):
        parser.add_argument(
            '--extra',
            type=str,
            nargs='+',
            help='Additional role names to create'
        )

    def handle(self, *args, **options):
        names = list(settings.BUILTIN_ROLE_NAMES) + list(options.get('extra') or [])

        self.stdout.write("Creating roles...")

        created_count = 0
        for name in names:
            role, created = Role.objects.get_or_create(name=name)
            if created:
                created_count += 1
                self.stdout.write(self.style.SUCCESS(f"Created role: {name}"))
            elif role.is_deleted:
                role.is_deleted = False
                role.save(update_fields=['is_deleted', 'updated_at'])
                self.stdout.write(self.style.WARNING(f"Restored role: {name}"))
            else:
                self.stdout.write(f"Role already exists: {name}")

        self.stdout.write(self.style.SUCCESS(f"Done. {created_count} role(s) created."))
