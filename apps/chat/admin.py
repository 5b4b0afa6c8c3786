"""Admin registration for chat."""

from __future__ import annotations

from django.contrib import admin

from .models import Conversation, Message


class MessageInline(admin.TabularInline):
    model = Message
    extra = 0
    fields = ("sender", "recipient", "body", "read_at", "created_at")
    readonly_fields = fields


@admin.register(Conversation)
class ConversationAdmin(admin.ModelAdmin):
    list_display = ("id", "participant_one", "participant_two", "property", "last_message_at")
    search_fields = ("participant_one__email", "participant_two__email", "last_message_preview")
    raw_id_fields = ("participant_one", "participant_two", "property", "booking")
    inlines = [MessageInline]
