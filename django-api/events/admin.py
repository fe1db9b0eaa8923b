from django.contrib import admin

from events.models import Booking, Event


class BookingInline(admin.TabularInline):
    model = Booking
    extra = 0
    readonly_fields = ["email", "created_at"]


@admin.register(Event)
class EventAdmin(admin.ModelAdmin):
    list_display = ["title", "slug", "date", "time", "venue", "created_at"]
    search_fields = ["title", "slug", "venue", "location"]
    readonly_fields = ["slug", "image_asset", "created_at", "updated_at"]
    inlines = [BookingInline]


@admin.register(Booking)
class BookingAdmin(admin.ModelAdmin):
    list_display = ["email", "event", "created_at"]
    list_filter = ["event"]
    search_fields = ["email"]
