"""Admin registration for memberships."""

from __future__ import annotations

from django.contrib import admin

from .models import CustomerMembership, MembershipTier


@admin.register(MembershipTier)
class MembershipTierAdmin(admin.ModelAdmin):
    list_display = ("name", "discount_percent", "min_spend", "is_active")
    list_filter = ("is_active",)


@admin.register(CustomerMembership)
class CustomerMembershipAdmin(admin.ModelAdmin):
    list_display = ("user", "tier", "joined_at")
    list_filter = ("tier",)
    search_fields = ("user__email", "user__username")
    raw_id_fields = ("user",)
