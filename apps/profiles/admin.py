"""Admin configuration for the profiles app."""

from django import forms
from django.contrib import admin, messages

from . import storage
from .models import ActivityLog, Profile
from .moderation import InvalidTransition, log_activity, transition


class ProfileAdminForm(forms.ModelForm):
    """Applies the store's case-insensitive email rule to admin edits."""

    class Meta:
        model = Profile
        fields = "__all__"

    def clean_email(self):
        email = self.cleaned_data["email"].strip().lower()
        clash = Profile.objects.filter(email__iexact=email).exclude(pk=self.instance.pk)
        if clash.exists():
            raise forms.ValidationError(storage.DuplicateEmailError.message)
        return email


def _bulk_transition(modeladmin, request, queryset, new_status):
    moved = 0
    for profile in queryset:
        try:
            if transition(profile, new_status, actor=request.user):
                moved += 1
        except InvalidTransition as exc:
            modeladmin.message_user(request, f"{profile}: {exc}", level=messages.WARNING)
    modeladmin.message_user(request, f"{moved} profile(s) marked {new_status}.")


@admin.action(description="Verify selected profiles")
def verify_profiles(modeladmin, request, queryset):
    _bulk_transition(modeladmin, request, queryset, Profile.Status.VERIFIED)


@admin.action(description="Reject selected profiles")
def reject_profiles(modeladmin, request, queryset):
    _bulk_transition(modeladmin, request, queryset, Profile.Status.REJECTED)


@admin.register(Profile)
class ProfileAdmin(admin.ModelAdmin):
    list_display = ("name", "email", "profession", "status", "created_at")
    list_filter = ("status",)
    search_fields = ("name", "email", "profession")
    readonly_fields = ("slug", "status", "created_at", "updated_at")
    actions = [verify_profiles, reject_profiles]
    form = ProfileAdminForm

    def save_model(self, request, obj, form, change):
        if not change:
            obj.slug = storage.assign_slug(obj.name)
        elif "name" in form.changed_data:
            obj.slug = storage.assign_slug(obj.name, exclude_pk=obj.pk)
        super().save_model(request, obj, form, change)
        if not change:
            log_activity(obj, ActivityLog.Action.CREATED, actor=request.user)
        elif form.changed_data:
            log_activity(obj, ActivityLog.Action.UPDATED, actor=request.user)

    def delete_model(self, request, obj):
        storage.delete_profile(obj.pk, actor=request.user)

    def delete_queryset(self, request, queryset):
        """Bulk "delete selected" goes through the store one profile at a time."""
        for profile in queryset:
            storage.delete_profile(profile.pk, actor=request.user)


@admin.register(ActivityLog)
class ActivityLogAdmin(admin.ModelAdmin):
    list_display = ("action", "profile_name", "actor", "timestamp")
    list_filter = ("action",)
    search_fields = ("profile_name",)
    readonly_fields = ("profile", "profile_name", "action", "actor", "timestamp")

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False
