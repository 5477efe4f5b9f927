from django.contrib import admin

from availability.models import Reservation, RestDay, SystemConfiguration, TimeBlock


class TimeBlockInline(admin.TabularInline):
    model = TimeBlock
    extra = 1


class RestDayInline(admin.TabularInline):
    model = RestDay
    extra = 0


@admin.register(SystemConfiguration)
class SystemConfigurationAdmin(admin.ModelAdmin):
    list_display = ["id", "is_active", "one_event_per_day", "updated_at"]
    list_filter = ["is_active"]
    inlines = [TimeBlockInline, RestDayInline]


@admin.register(Reservation)
class ReservationAdmin(admin.ModelAdmin):
    list_display = ["customer_name", "event_date", "event_time", "status", "total_amount"]
    list_filter = ["status"]
    search_fields = ["customer_name", "child_name"]
