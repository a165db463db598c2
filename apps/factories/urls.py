from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'factories'

router = DefaultRouter()
router.register(r'factories', views.FactoryViewSet, basename='factory')
router.register(r'production', views.ProductionRecordViewSet, basename='production')

urlpatterns = [
    # Dashboard
    # GET  /api/dashboard/                     - Profile, factories, records, stats
    # POST /api/dashboard/sample-factory/      - Add a sample factory
    # POST /api/dashboard/sample-production/   - Add a sample sales record
    path('dashboard/', views.DashboardView.as_view(), name='dashboard'),
    path('dashboard/sample-factory/', views.SampleFactoryView.as_view(), name='sample-factory'),
    path('dashboard/sample-production/', views.SampleProductionRecordView.as_view(), name='sample-production'),

    # GET/POST         /api/factories/
    # GET/PATCH/DELETE /api/factories/{id}/
    # GET/POST         /api/production/?factory={id}
    # GET/PATCH/DELETE /api/production/{id}/
    path('', include(router.urls)),
]
