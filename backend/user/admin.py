from django.contrib import admin
from .models import UserProfile


@admin.register(UserProfile)
class UserProfileAdmin(admin.ModelAdmin):
    list_display = ['user', 'display_name', 'experience', 'supabase_id', 'created_at']
    list_filter = ['experience']
    search_fields = ['user__username', 'user__email', 'display_name']
    readonly_fields = ['id', 'supabase_id', 'created_at', 'updated_at']
