"""Rewards admin."""

from django.contrib import admin
from django.utils.html import format_html

from laundryman.conf import laundryman_settings
from laundryman.contrib.rewards.models import (
    CompletedRewardCycle,
    RewardCycleEntry,
    RewardLedger,
)


class RewardCycleEntryInline(admin.TabularInline):
    model = RewardCycleEntry
    extra = 0
    readonly_fields = ["order", "amount", "recorded_at"]
    ordering = ["recorded_at", "pk"]

    def has_add_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


class CompletedRewardCycleInline(admin.TabularInline):
    model = CompletedRewardCycle
    extra = 0
    readonly_fields = [
        "order_ids",
        "total_amount",
        "average_amount",
        "discount_applied",
        "discount_order",
        "completed_at",
    ]

    def has_add_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


@admin.register(RewardLedger)
class RewardLedgerAdmin(admin.ModelAdmin):
    list_display = [
        "customer_link",
        "cycle_progress",
        "discount_badge",
        "total_orders_count",
        "total_rewards_earned",
        "updated_at",
    ]
    list_filter = ["is_eligible_for_discount"]
    search_fields = ["customer__code", "customer__name"]
    readonly_fields = [
        "customer",
        "total_orders_count",
        "is_eligible_for_discount",
        "next_discount_amount",
        "total_rewards_earned",
        "created_at",
        "updated_at",
    ]
    inlines = [RewardCycleEntryInline, CompletedRewardCycleInline]

    # Ledgers change only through RewardService
    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def cycle_progress(self, obj):
        return format_html(
            "{}/{}",
            obj.entries.count(),
            laundryman_settings.REWARD_CYCLE_SIZE,
        )

    cycle_progress.short_description = "Cycle"

    def discount_badge(self, obj):
        if not obj.is_eligible_for_discount:
            return "-"
        return format_html(
            '<span style="background:#28a745; color:#fff; padding:2px 8px; '
            'border-radius:3px; font-size:11px;">{} {}</span>',
            obj.next_discount_amount,
            laundryman_settings.CURRENCY,
        )

    discount_badge.short_description = "Pending discount"

    def customer_link(self, obj):
        from django.urls import reverse

        url = reverse("admin:laundryman_customer_change", args=[obj.customer.pk])
        return format_html('<a href="{}">{}</a>', url, obj.customer.code)

    customer_link.short_description = "Customer"
