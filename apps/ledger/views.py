"""
Ledger endpoints.

Each request loads the ledger and its transactions through the backend
client, then filters and totals them in memory. Deletes go through the
confirmation gate before the backend is called.
"""

import logging

from django.http import HttpResponse
from django.utils.http import content_disposition_header
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView
from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import extend_schema, OpenApiParameter

from apps.core.views import BackendMixin, envelope_error_response
from .permissions import IsLedgerOwner
from .serializers import (
    LedgerSerializer,
    LedgerInputSerializer,
    TransactionSerializer,
    TransactionInputSerializer,
    TransactionFilterSerializer,
    TransactionListResponseSerializer,
    LedgerSummarySerializer,
    DeleteConfirmationSerializer,
)
from .services import (
    REPORT_CONTENT_TYPE,
    ConfirmationMismatchError,
    EmptyReportError,
    check_delete_confirmation,
    render_transaction_report,
    report_filename,
    summarize,
)

logger = logging.getLogger(__name__)

FILTER_PARAMETERS = [
    OpenApiParameter('search', str, description='Case-insensitive text in particulars'),
    OpenApiParameter('category', str, description="Category, or 'all'"),
    OpenApiParameter('start_date', str, description='Earliest date, YYYY-MM-DD, inclusive'),
    OpenApiParameter('end_date', str, description='Latest date, YYYY-MM-DD, inclusive'),
]


def _confirmation_failed(request):
    """Return a 400 response unless the request carries the confirmation phrase."""
    serializer = DeleteConfirmationSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    try:
        check_delete_confirmation(serializer.validated_data['confirmation'])
    except ConfirmationMismatchError as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)
    return None


class LedgerAccessMixin(BackendMixin):
    permission_classes = [IsAuthenticated, IsLedgerOwner]

    def load_ledger(self, request, pk):
        loaded = self.get_backend().get_ledger(pk)
        if loaded.ok:
            self.check_object_permissions(request, loaded.result)
        return loaded

    def load_filtered(self, request, ledger):
        """
        Load the ledger's transactions and apply the query string filters.

        Returns:
            (filtered, totals, error) where error is None on success
        """
        filters = TransactionFilterSerializer(data=request.query_params)
        filters.is_valid(raise_exception=True)

        loaded = self.get_backend().get_transactions(ledger.id)
        if loaded.error:
            return [], None, loaded.error

        filtered, totals = summarize(loaded.results, filters.to_filters())
        return filtered, totals, None


class LedgerListView(LedgerAccessMixin, APIView):
    """
    GET  /api/ledgers/ - Own ledgers, newest first
    POST /api/ledgers/ - Create a ledger
    """

    @extend_schema(responses={200: LedgerSerializer(many=True)}, tags=['ledgers'])
    def get(self, request):
        loaded = self.get_backend().get_ledgers(request.user.id)
        if loaded.error:
            return envelope_error_response(loaded.error)
        return Response(LedgerSerializer(loaded.results, many=True).data)

    @extend_schema(request=LedgerInputSerializer, responses={201: LedgerSerializer}, tags=['ledgers'])
    def post(self, request):
        serializer = LedgerInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        created = self.get_backend().create_ledger(
            created_by=request.user,
            **serializer.validated_data
        )
        if created.error:
            return envelope_error_response(created.error)
        return Response(LedgerSerializer(created.result).data, status=status.HTTP_201_CREATED)


class LedgerDetailView(LedgerAccessMixin, APIView):
    """
    GET    /api/ledgers/{id}/
    PATCH  /api/ledgers/{id}/
    DELETE /api/ledgers/{id}/ - Needs {"confirmation": "confirm"}; removes its transactions too
    """

    @extend_schema(responses={200: LedgerSerializer}, tags=['ledgers'])
    def get(self, request, pk):
        loaded = self.load_ledger(request, pk)
        if loaded.error:
            return envelope_error_response(loaded.error)
        return Response(LedgerSerializer(loaded.result).data)

    @extend_schema(request=LedgerInputSerializer, responses={200: LedgerSerializer}, tags=['ledgers'])
    def patch(self, request, pk):
        loaded = self.load_ledger(request, pk)
        if loaded.error:
            return envelope_error_response(loaded.error)

        serializer = LedgerInputSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)

        updated = self.get_backend().update_ledger(pk, **serializer.validated_data)
        if updated.error:
            return envelope_error_response(updated.error)
        return Response(LedgerSerializer(updated.result).data)

    @extend_schema(request=DeleteConfirmationSerializer, responses={204: None}, tags=['ledgers'])
    def delete(self, request, pk):
        rejected = _confirmation_failed(request)
        if rejected is not None:
            return rejected

        loaded = self.load_ledger(request, pk)
        if loaded.error:
            return envelope_error_response(loaded.error)

        deleted = self.get_backend().delete_ledger(pk)
        if deleted.error:
            return envelope_error_response(deleted.error)
        return Response(status=status.HTTP_204_NO_CONTENT)


class LedgerTransactionsView(LedgerAccessMixin, APIView):
    """
    GET  /api/ledgers/{id}/transactions/ - Filtered transactions with totals
    POST /api/ledgers/{id}/transactions/ - Add a transaction
    """

    @extend_schema(
        parameters=FILTER_PARAMETERS,
        responses={200: TransactionListResponseSerializer},
        tags=['transactions'],
    )
    def get(self, request, pk):
        loaded = self.load_ledger(request, pk)
        if loaded.error:
            return envelope_error_response(loaded.error)
        ledger = loaded.result

        filtered, totals, error = self.load_filtered(request, ledger)
        if error:
            return envelope_error_response(error)

        return Response({
            'ledger': LedgerSerializer(ledger).data,
            'transactions': TransactionSerializer(filtered, many=True).data,
            'count': len(filtered),
            'summary': LedgerSummarySerializer(totals.as_dict()).data,
        })

    @extend_schema(
        request=TransactionInputSerializer,
        responses={201: TransactionSerializer},
        tags=['transactions'],
    )
    def post(self, request, pk):
        loaded = self.load_ledger(request, pk)
        if loaded.error:
            return envelope_error_response(loaded.error)

        serializer = TransactionInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        created = self.get_backend().add_transaction(
            ledger=loaded.result,
            created_by=request.user,
            **serializer.validated_data
        )
        if created.error:
            return envelope_error_response(created.error)
        return Response(TransactionSerializer(created.result).data, status=status.HTTP_201_CREATED)


class LedgerExportView(LedgerAccessMixin, APIView):
    """GET /api/ledgers/{id}/export/ - HTML report of the filtered transactions."""

    @extend_schema(
        parameters=FILTER_PARAMETERS,
        responses={(200, 'text/html'): OpenApiTypes.STR},
        tags=['transactions'],
    )
    def get(self, request, pk):
        loaded = self.load_ledger(request, pk)
        if loaded.error:
            return envelope_error_response(loaded.error)
        ledger = loaded.result

        filtered, totals, error = self.load_filtered(request, ledger)
        if error:
            return envelope_error_response(error)

        try:
            document = render_transaction_report(ledger, filtered, totals)
        except EmptyReportError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        logger.info("Exported %d transactions from ledger %s", len(filtered), ledger.id)
        response = HttpResponse(document, content_type=REPORT_CONTENT_TYPE)
        response['Content-Disposition'] = content_disposition_header(
            as_attachment=True,
            filename=report_filename(ledger.name),
        )
        return response


class TransactionDetailView(LedgerAccessMixin, APIView):
    """
    GET    /api/ledgers/transactions/{id}/
    PATCH  /api/ledgers/transactions/{id}/
    DELETE /api/ledgers/transactions/{id}/ - Needs {"confirmation": "confirm"}
    """

    def load_transaction(self, request, pk):
        loaded = self.get_backend().get_transaction(pk)
        if loaded.ok:
            self.check_object_permissions(request, loaded.result)
        return loaded

    @extend_schema(responses={200: TransactionSerializer}, tags=['transactions'])
    def get(self, request, pk):
        loaded = self.load_transaction(request, pk)
        if loaded.error:
            return envelope_error_response(loaded.error)
        return Response(TransactionSerializer(loaded.result).data)

    @extend_schema(
        request=TransactionInputSerializer,
        responses={200: TransactionSerializer},
        tags=['transactions'],
    )
    def patch(self, request, pk):
        loaded = self.load_transaction(request, pk)
        if loaded.error:
            return envelope_error_response(loaded.error)

        serializer = TransactionInputSerializer(loaded.result, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)

        updated = self.get_backend().update_transaction(pk, **serializer.validated_data)
        if updated.error:
            return envelope_error_response(updated.error)
        return Response(TransactionSerializer(updated.result).data)

    @extend_schema(request=DeleteConfirmationSerializer, responses={204: None}, tags=['transactions'])
    def delete(self, request, pk):
        rejected = _confirmation_failed(request)
        if rejected is not None:
            return rejected

        loaded = self.load_transaction(request, pk)
        if loaded.error:
            return envelope_error_response(loaded.error)

        deleted = self.get_backend().delete_transaction(pk)
        if deleted.error:
            return envelope_error_response(deleted.error)
        return Response(status=status.HTTP_204_NO_CONTENT)
