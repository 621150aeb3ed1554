"""
Tests for variation order services.

Tests cover:
- Create / update / delete
- Approval-stage document uploads
- Register search, filter and sort
- Status statistics
"""

import pytest
from datetime import date
from decimal import Decimal

from django.core.files.uploadedfile import SimpleUploadedFile
from django.utils import timezone

from apps.variations.models import VariationOrder, VOStatus, SubmissionType
from apps.variations.services import (
    create_variation_order,
    update_variation_order,
    delete_variation_order,
    attach_variation_order_file,
    get_variation_order_by_id,
    list_variation_orders,
    get_variation_order_statistics,
    VariationOrderNotFoundError,
    InvalidVariationOrderError,
)


# =============================================================================
# CRUD Tests
# =============================================================================

@pytest.mark.django_db
class TestCreateVariationOrder:

    def test_defaults(self):
        vo = create_variation_order()

        assert vo.subject == 'New Variation Order'
        assert vo.submission_type == SubmissionType.VO
        assert vo.status == VOStatus.PENDING_WITH_FFC
        assert vo.submission_date == timezone.localdate()
        assert vo.proposal_value is None

    def test_blank_subject_gets_default(self):
        vo = create_variation_order(subject='   ')

        assert vo.subject == 'New Variation Order'

    def test_null_text_becomes_blank(self):
        vo = create_variation_order(remarks=None, dvo_reference=None)

        assert vo.remarks == ''
        assert vo.dvo_reference == ''

    def test_negative_value_rejected(self):
        with pytest.raises(InvalidVariationOrderError):
            create_variation_order(proposal_value=Decimal('-1.00'))

        assert VariationOrder.objects.count() == 0

    def test_invalid_status_rejected(self):
        with pytest.raises(InvalidVariationOrderError):
            create_variation_order(status='Withdrawn')

    def test_unknown_field_rejected(self):
        with pytest.raises(InvalidVariationOrderError):
            create_variation_order(contract_sum=Decimal('1'))


@pytest.mark.django_db
class TestUpdateVariationOrder:

    def test_approve(self, pending_vo):
        vo = update_variation_order(
            vo_id=pending_vo.id,
            status=VOStatus.APPROVED_AWAITING_DVO,
            approved_amount=Decimal('1100000.00'),
            vor_reference='VOR-31',
        )

        assert vo.status == VOStatus.APPROVED_AWAITING_DVO
        assert vo.approved_amount == Decimal('1100000.00')
        assert vo.value_for_status == Decimal('1100000.00')
        assert vo.subject == 'Additional fire-fighting pumps'

    def test_not_found(self):
        with pytest.raises(VariationOrderNotFoundError):
            update_variation_order(vo_id=999999, remarks='x')

    def test_invalid_submission_type(self, pending_vo):
        with pytest.raises(InvalidVariationOrderError):
            update_variation_order(vo_id=pending_vo.id, submission_type='Fax')

    def test_delete(self, pending_vo):
        delete_variation_order(vo_id=pending_vo.id)

        with pytest.raises(VariationOrderNotFoundError):
            get_variation_order_by_id(pending_vo.id)

    def test_delete_not_found(self):
        with pytest.raises(VariationOrderNotFoundError):
            delete_variation_order(vo_id=999999)


@pytest.mark.django_db
class TestAttachVariationOrderFile:

    def test_stores_document_for_stage(self, media_root, pending_vo, pdf_upload):
        vo = attach_variation_order_file(
            vo_id=pending_vo.id, file_type='rsg_assessed', uploaded_file=pdf_upload
        )

        vo.refresh_from_db()
        assert vo.rsg_assessed_file.name.startswith(f'vo_documents/{pending_vo.id}/rsg_assessed_')
        assert vo.rsg_assessed_file.name.endswith('.pdf')
        assert (media_root / vo.rsg_assessed_file.name).read_bytes() == b'%PDF-1.4 assessment'
        assert not vo.ffc_rsg_proposed_file
        assert not vo.dvo_rr_approved_file

    def test_replaces_previous_document(self, media_root, pending_vo, pdf_upload):
        first = attach_variation_order_file(
            vo_id=pending_vo.id, file_type='dvo_rr_approved', uploaded_file=pdf_upload
        ).dvo_rr_approved_file.name

        replacement = SimpleUploadedFile('dvo.docx', b'revised')
        vo = attach_variation_order_file(
            vo_id=pending_vo.id, file_type='dvo_rr_approved', uploaded_file=replacement
        )

        assert vo.dvo_rr_approved_file.name != first
        assert vo.dvo_rr_approved_file.name.endswith('.docx')
        assert not (media_root / first).exists()

    def test_invalid_file_type(self, media_root, pending_vo, pdf_upload):
        with pytest.raises(InvalidVariationOrderError):
            attach_variation_order_file(vo_id=pending_vo.id, file_type='contract', uploaded_file=pdf_upload)

    def test_missing_file(self, media_root, pending_vo):
        with pytest.raises(InvalidVariationOrderError):
            attach_variation_order_file(vo_id=pending_vo.id, file_type='rsg_assessed', uploaded_file=None)

    def test_not_found(self, media_root, pdf_upload):
        with pytest.raises(VariationOrderNotFoundError):
            attach_variation_order_file(vo_id=999999, file_type='rsg_assessed', uploaded_file=pdf_upload)


# =============================================================================
# Register Tests
# =============================================================================

@pytest.mark.django_db
class TestListVariationOrders:

    def test_newest_first_by_default(self, pending_vo, rsg_vo, approved_vo):
        assert list(list_variation_orders()) == [approved_vo, rsg_vo, pending_vo]

    def test_search_subject_and_references(self, pending_vo, rsg_vo, approved_vo):
        assert list(list_variation_orders(search='facade')) == [rsg_vo]
        assert list(list_variation_orders(search='dvo-007')) == [approved_vo]
        assert list(list_variation_orders(search='VO-00', sort_by='submission_date', sort_order='asc')) == [
            pending_vo, approved_vo,
        ]

    def test_filters(self, pending_vo, rsg_vo, approved_vo):
        assert list(list_variation_orders(status=VOStatus.DVO_RR_ISSUED)) == [approved_vo]
        assert list(list_variation_orders(submission_type=SubmissionType.GEN_CORR)) == [rsg_vo]

    def test_sort_by_value(self, pending_vo, rsg_vo, approved_vo):
        result = list(list_variation_orders(sort_by='proposal_value', sort_order='desc'))

        assert result == [rsg_vo, approved_vo, pending_vo]

    def test_bad_sort(self):
        with pytest.raises(InvalidVariationOrderError):
            list_variation_orders(sort_by='subject')
        with pytest.raises(InvalidVariationOrderError):
            list_variation_orders(sort_order='up')


# =============================================================================
# Statistics Tests
# =============================================================================

@pytest.mark.django_db
class TestVariationOrderStatistics:

    def test_empty(self):
        stats = get_variation_order_statistics()

        assert stats['total'] == 0
        assert stats['total_submitted_value'] == Decimal('0.00')
        assert len(stats['status_breakdown']) == len(VOStatus.choices)
        assert all(item['count'] == 0 for item in stats['status_breakdown'])

    def test_values_by_status(self, pending_vo, rsg_vo, approved_vo):
        create_variation_order(subject='No value yet', status=VOStatus.PENDING_WITH_FFC)

        stats = get_variation_order_statistics()

        assert stats['total'] == 4
        assert stats['counts'][VOStatus.PENDING_WITH_FFC] == 2
        assert stats['counts'][VOStatus.APPROVED_AWAITING_DVO] == 0
        assert stats['pending_count'] == 3
        assert stats['approved_count'] == 1
        # approved VO counts at its approved amount, not the proposal
        assert stats['total_approved_value'] == Decimal('1875000.00')
        assert stats['total_submitted_value'] == Decimal('6605000.00')

        breakdown = {item['status']: item for item in stats['status_breakdown']}
        assert breakdown[VOStatus.PENDING_WITH_FFC]['amount'] == Decimal('1250000.00')
        assert breakdown[VOStatus.DVO_RR_ISSUED]['label'] == 'DVO RR Issued'
        assert breakdown[VOStatus.APPROVED_AWAITING_DVO]['label'] == 'Approved & Awaiting DVO'

    def test_statuses_listed_in_workflow_order(self):
        stats = get_variation_order_statistics()

        assert [item['status'] for item in stats['status_breakdown']] == [
            'PendingWithFFC',
            'PendingWithRSG',
            'PendingWithRSGFFC',
            'ApprovedAwaitingDVO',
            'DVORRIssued',
        ]
