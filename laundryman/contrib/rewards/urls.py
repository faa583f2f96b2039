from django.urls import path

from .views import RewardEligibilityView, RewardHistoryView, RewardStatusView

app_name = "laundryman_rewards"

urlpatterns = [
    path("<str:customer_code>/status/", RewardStatusView.as_view(), name="reward-status"),
    path("<str:customer_code>/history/", RewardHistoryView.as_view(), name="reward-history"),
    path("<str:customer_code>/eligibility/", RewardEligibilityView.as_view(), name="reward-eligibility"),
]
