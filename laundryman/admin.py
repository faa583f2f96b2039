"""Laundryman admin (CORE only).

The reward ledger has its own admin in laundryman.contrib.rewards.admin.
"""

from django.contrib import admin
from django.urls import reverse
from django.utils.html import format_html

from laundryman.models import Customer, Order, OrderItem, PaymentTransaction


def _customer_link(customer):
    url = reverse("admin:laundryman_customer_change", args=[customer.pk])
    return format_html('<a href="{}">{}</a>', url, customer.code)


# ===========================================
# Customer Admin
# ===========================================


@admin.register(Customer)
class CustomerAdmin(admin.ModelAdmin):
    list_display = ["code", "name", "phone", "email", "order_count", "is_active"]
    list_filter = ["is_active"]
    search_fields = ["code", "name", "phone", "email"]
    list_editable = ["is_active"]
    readonly_fields = ["code", "uuid", "created_at", "updated_at"]

    fieldsets = [
        ("Identification", {"fields": ["code", "uuid", "name"]}),
        ("Contact", {"fields": ["phone", "email"]}),
        (
            "System",
            {
                "fields": ["is_active", "notes", "created_at", "updated_at"],
                "classes": ["collapse"],
            },
        ),
    ]

    def order_count(self, obj):
        return obj.orders.count()

    order_count.short_description = "Orders"


# ===========================================
# Order Admin
# ===========================================


class OrderItemInline(admin.TabularInline):
    model = OrderItem
    extra = 0
    fields = ["item_ref", "name", "price", "quantity"]


class PaymentTransactionInline(admin.TabularInline):
    model = PaymentTransaction
    extra = 0
    fields = ["reference", "amount", "phone_number", "status", "operator"]
    readonly_fields = fields

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    list_display = [
        "id",
        "customer_link",
        "status",
        "total",
        "reward_badge",
        "payment_status",
        "pickup_date",
        "created_at",
    ]
    list_filter = ["status", "payment_status", "is_reward_order"]
    search_fields = ["customer__code", "customer__name", "payment_reference"]
    raw_id_fields = ["customer"]
    date_hierarchy = "created_at"
    inlines = [OrderItemInline, PaymentTransactionInline]
    # Reward fields are written by RewardService only
    readonly_fields = [
        "original_total",
        "reward_discount",
        "is_reward_order",
        "picked_up_at",
        "delivered_at",
        "created_at",
        "updated_at",
    ]

    fieldsets = [
        (None, {"fields": ["customer", "status", "pickup_date", "notes"]}),
        ("Locations", {"fields": ["pickup_location", "dropoff_location"]}),
        ("Amounts", {"fields": ["total", "original_total", "reward_discount", "is_reward_order"]}),
        ("Payment", {"fields": ["payment_status", "payment_reference"]}),
        (
            "Timestamps",
            {
                "fields": ["picked_up_at", "delivered_at", "created_at", "updated_at"],
                "classes": ["collapse"],
            },
        ),
    ]

    def get_queryset(self, request):
        return super().get_queryset(request).select_related("customer")

    def customer_link(self, obj):
        return _customer_link(obj.customer)

    customer_link.short_description = "Customer"

    def reward_badge(self, obj):
        if obj.is_reward_order:
            return format_html(
                '<span style="color: green;">-{}</span>',
                obj.reward_discount,
            )
        return "-"

    reward_badge.short_description = "Reward"


# ===========================================
# PaymentTransaction Admin
# ===========================================


@admin.register(PaymentTransaction)
class PaymentTransactionAdmin(admin.ModelAdmin):
    list_display = [
        "reference",
        "customer_link",
        "order",
        "amount",
        "status",
        "operator",
        "created_at",
    ]
    list_filter = ["status", "operator"]
    search_fields = ["reference", "phone_number", "customer__code"]
    raw_id_fields = ["customer", "order"]
    readonly_fields = ["reference", "ussd_code", "created_at", "updated_at"]
    actions = ["sync_selected"]

    def customer_link(self, obj):
        return _customer_link(obj.customer)

    customer_link.short_description = "Customer"

    @admin.action(description="Sync status with the payment provider")
    def sync_selected(self, request, queryset):
        from laundryman.exceptions import LaundrymanError
        from laundryman.services import payment

        synced = 0
        for txn in queryset:
            try:
                payment.sync_status(txn.reference)
                synced += 1
            except LaundrymanError as exc:
                self.message_user(request, f"{txn.reference}: {exc.message}", level="error")
        self.message_user(request, f"{synced} transactions synced.")
