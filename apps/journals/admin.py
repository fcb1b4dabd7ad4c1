from django.contrib import admin
from django.core.exceptions import ValidationError
from django import forms
from .models import Journal


class JournalAdminForm(forms.ModelForm):
    class Meta:
        model = Journal
        fields = '__all__'

    def clean_editor(self):
        editor = self.cleaned_data['editor']
        if editor.role not in ('EDITOR', 'ADMIN'):
            raise ValidationError("The managing editor must hold the EDITOR or ADMIN role.")
        return editor


@admin.register(Journal)
class JournalAdmin(admin.ModelAdmin):
    form = JournalAdminForm
    list_display = ('title', 'slug', 'editor', 'is_active', 'is_accepting_submissions')
    list_filter = ('is_active', 'is_accepting_submissions', 'created_at')
    search_fields = ('title', 'slug', 'publisher')
    prepopulated_fields = {'slug': ('title',)}
