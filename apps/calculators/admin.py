"""
Django Admin configuration for the calculators app.
"""

from django.contrib import admin

from apps.calculators.infrastructure.persistence.models import SavedCalculation


@admin.register(SavedCalculation)
class SavedCalculationAdmin(admin.ModelAdmin):
    """Admin interface for SavedCalculation model."""

    list_display = ('get_title', 'tool_slug', 'created_at')
    list_filter = ('tool_slug', 'created_at')
    search_fields = ('title',)
    readonly_fields = ('id', 'created_at', 'updated_at')
    date_hierarchy = 'created_at'
    ordering = ('-created_at',)

    fieldsets = (
        ('Calculation', {
            'fields': ('tool_slug', 'title', 'inputs', 'outputs')
        }),
        ('Metadata', {
            'fields': ('id', 'created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )

    def get_title(self, obj):
        """Display the title, or the tool name for untitled entries."""
        return obj.title or obj.get_tool_slug_display()
    get_title.short_description = 'Title'
    get_title.admin_order_field = 'title'
