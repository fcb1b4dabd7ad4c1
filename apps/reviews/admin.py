from django.contrib import admin
from .models import Review, EditorialDecision


@admin.register(Review)
class ReviewAdmin(admin.ModelAdmin):
    list_display = ('submission', 'reviewer', 'recommendation', 'score', 'submitted_at', 'created_at')
    list_filter = ('recommendation', 'submitted_at')
    search_fields = ('submission__title', 'reviewer__email')


@admin.register(EditorialDecision)
class EditorialDecisionAdmin(admin.ModelAdmin):
    """Decisions are append-only; the admin shows them read-only."""
    list_display = ('submission', 'status', 'decided_by', 'decided_at')
    list_filter = ('status', 'decided_at')
    search_fields = ('submission__title', 'decided_by__email')
    readonly_fields = ('id', 'submission', 'decided_by', 'status', 'notes', 'decided_at')

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
