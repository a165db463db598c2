from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from django.utils.html import format_html
from .models import User, UserProfile


class UserProfileInline(admin.StackedInline):
    model = UserProfile
    can_delete = False
    fields = ['first_name', 'last_name', 'role', 'department', 'phone']


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    """
    Admin for sign-in identities.

    The profile is edited inline; role badges come from the profile.
    """

    inlines = [UserProfileInline]

    list_display = [
        'email',
        'full_name',
        'role_badge',
        'is_active_badge',
        'created_at',
        'last_login',
    ]

    list_filter = [
        'is_active',
        'is_staff',
        'profile__role',
        'created_at',
    ]

    search_fields = [
        'email',
        'profile__first_name',
        'profile__last_name',
    ]

    ordering = ['-created_at']
    date_hierarchy = 'created_at'

    # No username field on this model
    fieldsets = (
        ('Basic Information', {
            'fields': ('email', 'password')
        }),
        ('Permissions', {
            'fields': ('is_active', 'is_staff', 'is_superuser', 'groups', 'user_permissions'),
        }),
        ('Password reset', {
            'fields': ('password_reset_token', 'password_reset_requested_at'),
            'classes': ('collapse',),
        }),
        ('Timestamps', {
            'fields': ('created_at', 'last_login'),
            'classes': ('collapse',),
        }),
    )

    add_fieldsets = (
        ('Create User', {
            'classes': ('wide',),
            'fields': ('email', 'password1', 'password2'),
        }),
    )

    readonly_fields = ['created_at', 'last_login', 'password_reset_requested_at']

    filter_horizontal = ['groups', 'user_permissions']

    ROLE_COLORS = {
        'admin': '#B85C5C',
        'manager': '#A47449',
        'worker': '#6B8E5E',
    }

    @admin.display(description='Name')
    def full_name(self, obj):
        return obj.get_display_name()

    @staticmethod
    def _badge(color, label):
        return format_html(
            '<span style="background: {}; color: white; padding: 2px 8px; '
            'border-radius: 8px; font-size: 11px;">{}</span>',
            color,
            label,
        )

    @admin.display(description='Role', ordering='profile__role')
    def role_badge(self, obj):
        profile = getattr(obj, 'profile', None)
        if profile is None:
            return '-'
        return self._badge(self.ROLE_COLORS.get(profile.role, '#999'), profile.get_role_display())

    @admin.display(description='Status', ordering='is_active')
    def is_active_badge(self, obj):
        if obj.is_active:
            return self._badge(self.ROLE_COLORS['worker'], 'Active')
        return self._badge(self.ROLE_COLORS['admin'], 'Inactive')

    actions = ['activate_users', 'deactivate_users']

    @admin.action(description='Re-enable sign-in for selected users')
    def activate_users(self, request, queryset):
        enabled = queryset.update(is_active=True)
        self.message_user(request, f'{enabled} user(s) can sign in again.')

    @admin.action(description='Block sign-in for selected users')
    def deactivate_users(self, request, queryset):
        """Superusers are never blocked from here."""
        blocked = queryset.filter(is_superuser=False).update(is_active=False)
        skipped = queryset.filter(is_superuser=True).count()
        message = f'{blocked} user(s) can no longer sign in.'
        if skipped:
            message += f' {skipped} superuser(s) left unchanged.'
        self.message_user(request, message)

    def get_queryset(self, request):
        return super().get_queryset(request).select_related('profile')


@admin.register(UserProfile)
class UserProfileAdmin(admin.ModelAdmin):
    list_display = ['email', 'first_name', 'last_name', 'role', 'department', 'updated_at']
    list_filter = ['role', 'department']
    search_fields = ['email', 'first_name', 'last_name']
    readonly_fields = ['created_at', 'updated_at']
