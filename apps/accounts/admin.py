from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from .models import User, UserRole


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    """Admin for register users and their roles."""

    list_display = [
        'email',
        'display_name',
        'role',
        'is_active',
        'is_staff',
        'created_at',
        'last_login',
    ]

    list_filter = [
        'role',
        'is_active',
        'is_staff',
        'is_superuser',
    ]

    search_fields = [
        'email',
        'display_name',
    ]

    ordering = ['-created_at']

    # Remove username field references from BaseUserAdmin
    fieldsets = (
        ('Basic Information', {
            'fields': ('email', 'display_name', 'password')
        }),
        ('Permissions', {
            'fields': ('role', 'is_active', 'is_staff', 'is_superuser', 'groups', 'user_permissions'),
        }),
        ('Timestamps', {
            'fields': ('created_at', 'last_login'),
            'classes': ('collapse',),
        }),
    )

    add_fieldsets = (
        ('Create User', {
            'classes': ('wide',),
            'fields': ('email', 'display_name', 'role', 'password1', 'password2'),
        }),
    )

    readonly_fields = [
        'created_at',
        'last_login',
    ]

    filter_horizontal = ['groups', 'user_permissions']

    actions = ['make_admin', 'make_viewer']

    @admin.action(description='Give selected users the admin role')
    def make_admin(self, request, queryset):
        count = queryset.update(role=UserRole.ADMIN)
        self.message_user(request, f'{count} user(s) are now admins.')

    @admin.action(description='Give selected users the viewer role')
    def make_viewer(self, request, queryset):
        count = queryset.filter(is_superuser=False).update(role=UserRole.VIEWER)
        self.message_user(request, f'{count} user(s) are now viewers.')
