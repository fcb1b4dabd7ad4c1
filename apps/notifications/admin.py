from django.contrib import admin
from .models import Notification, EmailTemplate, EmailLog


@admin.register(Notification)
class NotificationAdmin(admin.ModelAdmin):
    list_display = ('title', 'user', 'type', 'read', 'created_at')
    list_filter = ('type', 'read')
    search_fields = ('title', 'user__email')


@admin.register(EmailTemplate)
class EmailTemplateAdmin(admin.ModelAdmin):
    list_display = ('name', 'template_type', 'is_active', 'updated_at')
    list_filter = ('is_active',)


@admin.register(EmailLog)
class EmailLogAdmin(admin.ModelAdmin):
    list_display = ('recipient', 'template_type', 'status', 'retry_count', 'sent_at', 'created_at')
    list_filter = ('status', 'template_type')
    search_fields = ('recipient', 'subject')
    readonly_fields = ('context_data', 'error_message')
