import django_filters

from workdesk.approvals.models import ApprovalRequest


class ApprovalRequestFilter(django_filters.FilterSet):
    status = django_filters.ChoiceFilter(choices=ApprovalRequest.Status.choices)
    template_id = django_filters.UUIDFilter()

    class Meta:
        model = ApprovalRequest
        fields = ["status", "template_id"]
