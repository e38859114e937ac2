# admission_portal/urls.py
from django.contrib import admin
from django.urls import path, include
from rest_framework_simplejwt.views import TokenObtainPairView, TokenRefreshView

urlpatterns = [
    path('admin/', admin.site.urls),

    # API endpoints
    path('api/v1/auth/token', TokenObtainPairView.as_view(), name='token-obtain'),
    path('api/v1/auth/token/refresh', TokenRefreshView.as_view(), name='token-refresh'),
    path('api/v1/', include('apps.admissions.urls')),
]

admin.site.site_header = "Admissions Management"
admin.site.site_title = "Admissions Admin"
admin.site.index_title = "Admission Workflow"
