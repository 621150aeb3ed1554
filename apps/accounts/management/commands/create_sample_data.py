"""
Management command to create sample data for trying out the API.

Usage:
    python manage.py create_sample_data [--clear]

This creates:
- 2 users (admin, viewer)
- Project details with the contract figures from settings
- An advance payment and a run of interim payment applications
- Variation orders in every status
"""

from datetime import date
from decimal import Decimal

from dateutil.relativedelta import relativedelta
from django.conf import settings
from django.core.management.base import BaseCommand
from django.db import transaction

from apps.accounts.models import User, UserRole
from apps.payments.models import PaymentApplication, PaymentStatus, ApprovalStatus
from apps.payments.services import create_payment
from apps.projects.models import ProjectDetails
from apps.projects.services import upsert_project_details
from apps.variations.models import VariationOrder, VOStatus, SubmissionType
from apps.variations.services import create_variation_order


INTERIM_GROSS_AMOUNTS = [
    Decimal('4250000.00'),
    Decimal('6120500.50'),
    Decimal('7380200.00'),
    Decimal('5940000.75'),
    Decimal('8015300.00'),
    Decimal('6672400.25'),
]


class Command(BaseCommand):
    help = 'Create sample data for trying out the API'

    def add_arguments(self, parser):
        parser.add_argument(
            '--clear',
            action='store_true',
            help='Clear existing data before creating new sample data',
        )

    @transaction.atomic
    def handle(self, *args, **options):
        if options['clear']:
            self.stdout.write('Clearing existing data...')
            self.clear_data()

        self.stdout.write('Creating sample data...')

        self.create_users()
        self.create_project()
        self.create_payments()
        self.create_variation_orders()

        self.stdout.write(self.style.SUCCESS('Sample data created successfully!'))
        self.stdout.write('')
        self.stdout.write('Test accounts:')
        self.stdout.write('  admin@example.com / admin123 (admin)')
        self.stdout.write('  viewer@example.com / password123 (viewer)')

    def clear_data(self):
        """Clear all register data from the database."""
        PaymentApplication.objects.all().delete()
        VariationOrder.objects.all().delete()
        ProjectDetails.objects.all().delete()
        User.objects.filter(email__in=['admin@example.com', 'viewer@example.com']).delete()

    def create_users(self):
        """Create test users."""
        self.stdout.write('  Creating users...')

        admin, _ = User.objects.get_or_create(
            email='admin@example.com',
            defaults={
                'display_name': 'Admin User',
                'role': UserRole.ADMIN,
                'is_staff': True,
                'is_superuser': True,
            }
        )
        admin.set_password('admin123')
        admin.save()

        viewer, _ = User.objects.get_or_create(
            email='viewer@example.com',
            defaults={
                'display_name': 'Viewer User',
                'role': UserRole.VIEWER,
            }
        )
        viewer.set_password('password123')
        viewer.save()

    def create_project(self):
        self.stdout.write('  Creating project details...')
        upsert_project_details(
            project_code=settings.PROJECT_CODE,
            project_name='Sample Contract',
            contractor='Sample Contractor',
            contract_date=date(2023, 1, 15),
            original_contract_value=settings.PROJECT_ORIGINAL_CONTRACT_VALUE,
            revised_contract_value=settings.PROJECT_REVISED_CONTRACT_VALUE,
            advance_payment_total=settings.PROJECT_ADVANCE_PAYMENT_TOTAL,
            retention_percent=settings.PROJECT_RETENTION_PERCENT,
        )

    def create_payments(self):
        """Advance payment drawdown followed by monthly interim applications."""
        self.stdout.write('  Creating payment applications...')

        create_payment(
            payment_no='AP 1',
            description='Advance Payment',
            gross_amount=settings.PROJECT_ADVANCE_PAYMENT_TOTAL,
            auto_calculate=False,
            payment_status=PaymentStatus.PAID,
            approval_status=ApprovalStatus.APPROVED,
            invoice_date=date(2023, 2, 1),
        )

        invoice_date = date(2023, 3, 31)
        for number, gross in enumerate(INTERIM_GROSS_AMOUNTS, 1):
            # The first applications were certified under the initial rates
            create_payment(
                payment_no=f'IPA {number}',
                description=f"Payment Application for {invoice_date.strftime('%B %Y')}",
                gross_amount=gross,
                rate_scheme='initial' if number <= 2 else 'revised',
                payment_status=PaymentStatus.PAID if number < len(INTERIM_GROSS_AMOUNTS) else PaymentStatus.SUBMITTED,
                approval_status=ApprovalStatus.APPROVED if number < len(INTERIM_GROSS_AMOUNTS) else ApprovalStatus.PENDING,
                submitted_date=invoice_date,
                invoice_date=invoice_date,
            )
            invoice_date = invoice_date + relativedelta(months=1)

    def create_variation_orders(self):
        self.stdout.write('  Creating variation orders...')

        samples = [
            ('Additional fire-fighting pumps', VOStatus.PENDING_WITH_FFC, Decimal('1250000.00'), None),
            ('Revised facade cladding', VOStatus.PENDING_WITH_RSG, Decimal('3480000.00'), None),
            ('Landscape irrigation changes', VOStatus.PENDING_WITH_RSG_FFC, Decimal('640000.00'), None),
            ('Substation relocation', VOStatus.APPROVED_AWAITING_DVO, Decimal('2100000.00'), Decimal('1875000.00')),
            ('Car park lighting upgrade', VOStatus.DVO_RR_ISSUED, Decimal('410000.00'), Decimal('395500.00')),
        ]
        for index, (subject, vo_status, proposal, approved) in enumerate(samples, 1):
            create_variation_order(
                subject=subject,
                submission_type=SubmissionType.VO,
                submission_reference=f'VO-{index:03d}',
                submission_date=date(2023, 4, 1) + relativedelta(months=index),
                proposal_value=proposal,
                approved_amount=approved,
                status=vo_status,
                dvo_reference=f'DVO-{index:03d}' if vo_status == VOStatus.DVO_RR_ISSUED else '',
            )
