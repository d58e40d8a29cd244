from django.contrib import admin

from .models import QualityAssessment


@admin.register(QualityAssessment)
class QualityAssessmentAdmin(admin.ModelAdmin):
    list_display = ['batch_number', 'moisture', 'group1_defects', 'group2_defects', 'suggested_price', 'status', 'created_at']
    list_filter = ['status']
    search_fields = ['batch_number']
    raw_id_fields = ['coffee_record', 'assessed_by', 'reviewed_by']
