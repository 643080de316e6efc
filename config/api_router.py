from django.conf import settings
from django.urls import include
from django.urls import path
from rest_framework.routers import DefaultRouter
from rest_framework.routers import SimpleRouter

from workdesk.approvals.api.views import ApprovalRequestViewSet
from workdesk.collection.api.views import CollectionStatusView
from workdesk.collection.api.views import DataRequestViewSet
from workdesk.collection.api.views import DataResponseViewSet
from workdesk.documents.api.views import DocumentViewSet
from workdesk.roster.api.urls import auth_urlpatterns
from workdesk.worktemplates.api.views import WorkTemplateViewSet

router = DefaultRouter() if settings.DEBUG else SimpleRouter()

router.register("templates", WorkTemplateViewSet, basename="work-template")
router.register("collection/requests", DataRequestViewSet, basename="data-request")
router.register("collection/responses", DataResponseViewSet, basename="data-response")
router.register("approvals", ApprovalRequestViewSet, basename="approval")
router.register("documents", DocumentViewSet, basename="document")


app_name = "api"
urlpatterns = [
    path("auth/", include(auth_urlpatterns)),
    path("roster/", include("workdesk.roster.api.urls")),
    path(
        "collection/status/",
        CollectionStatusView.as_view(),
        name="collection-status",
    ),
    path("calendar/", include("workdesk.calendars.api.urls")),
    *router.urls,
]
