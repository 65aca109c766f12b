from django.contrib import admin

from catalog.models import Event, Favorite


@admin.register(Event)
class EventAdmin(admin.ModelAdmin):
    list_display = ["name", "city", "category", "cost_per_person", "duration_hours"]
    list_filter = ["city", "category"]
    search_fields = ["name", "description", "category"]
    ordering = ["city", "name"]


@admin.register(Favorite)
class FavoriteAdmin(admin.ModelAdmin):
    list_display = ["user_id", "event_id", "created_at"]
    search_fields = ["user_id", "event_id"]
