from django.contrib import admin
from .models import Issue


@admin.register(Issue)
class IssueAdmin(admin.ModelAdmin):
    list_display = ('journal', 'volume', 'issue_number', 'year', 'title', 'published_at')
    list_filter = ('journal', 'year')
    search_fields = ('title', 'journal__title')
    readonly_fields = ('published_at',)
