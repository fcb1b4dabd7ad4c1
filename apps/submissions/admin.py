from django.contrib import admin
from .models import Submission, Contributor


class ContributorInline(admin.TabularInline):
    model = Contributor
    extra = 0
    ordering = ('sequence',)


@admin.register(Submission)
class SubmissionAdmin(admin.ModelAdmin):
    list_display = ('title', 'journal', 'status', 'author', 'issue', 'submitted_at', 'created_at')
    list_filter = ('status', 'journal', 'created_at')
    search_fields = ('title', 'abstract', 'doi', 'author__email')
    date_hierarchy = 'created_at'
    inlines = [ContributorInline]
