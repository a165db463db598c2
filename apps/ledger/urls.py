from django.urls import path
from . import views

app_name = 'ledger'

urlpatterns = [
    path('', views.LedgerListView.as_view(), name='ledger-list'),
    path('transactions/<uuid:pk>/', views.TransactionDetailView.as_view(), name='transaction-detail'),
    path('<uuid:pk>/', views.LedgerDetailView.as_view(), name='ledger-detail'),
    path('<uuid:pk>/transactions/', views.LedgerTransactionsView.as_view(), name='ledger-transactions'),
    path('<uuid:pk>/export/', views.LedgerExportView.as_view(), name='ledger-export'),
]
