"""
Reward status endpoints.

Read-only JSON projections of a customer's reward ledger, consumed by the
mobile app banner and the receptionist dashboard. Customers without any
tracked order get zero-valued payloads, never an error.
"""

from __future__ import annotations

from django.http import JsonResponse
from django.views import View

from .service import RewardService


class RewardStatusView(View):
    """GET rewards/<customer_code>/status/"""

    def get(self, request, customer_code: str):
        status = RewardService.get_customer_reward_status(customer_code)
        return JsonResponse({"success": True, "rewardStatus": status.to_dict()})


class RewardHistoryView(View):
    """GET rewards/<customer_code>/history/"""

    def get(self, request, customer_code: str):
        history = RewardService.get_customer_reward_history(customer_code)
        return JsonResponse({"success": True, "rewardHistory": history.to_dict()})


class RewardEligibilityView(View):
    """GET rewards/<customer_code>/eligibility/"""

    def get(self, request, customer_code: str):
        result = RewardService.check_discount_eligibility(customer_code)
        return JsonResponse(result.to_dict())
