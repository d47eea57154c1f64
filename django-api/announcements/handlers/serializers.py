"""Serializers for banner and pop-up forms and responses."""

from rest_framework import serializers

from announcements.domain import BannerAudience, PopupAudience, PopupFrequency


class BannerInputSerializer(serializers.Serializer):
    headline = serializers.CharField(allow_blank=True)
    message = serializers.CharField(allow_blank=True)
    cta_label = serializers.CharField(required=False, allow_blank=True, allow_null=True, default="")
    cta_url = serializers.CharField(required=False, allow_blank=True, allow_null=True, default="")
    audience = serializers.ChoiceField(
        choices=[a.value for a in BannerAudience], default=BannerAudience.ALL.value
    )
    active = serializers.BooleanField(default=False)


class PopupInputSerializer(serializers.Serializer):
    title = serializers.CharField(allow_blank=True)
    message = serializers.CharField(allow_blank=True)
    cta_label = serializers.CharField(required=False, allow_blank=True, allow_null=True, default="")
    cta_url = serializers.CharField(required=False, allow_blank=True, allow_null=True, default="")
    audience = serializers.ChoiceField(
        choices=[a.value for a in PopupAudience], default=PopupAudience.ALL.value
    )
    frequency = serializers.ChoiceField(
        choices=[f.value for f in PopupFrequency], default=PopupFrequency.ONCE.value
    )
    active = serializers.BooleanField(default=False)


class AnnouncementSerializer(serializers.Serializer):
    """Serializer for Announcement domain model."""

    id = serializers.CharField(source="id.value")
    message = serializers.CharField()
    cta_label = serializers.CharField(source="cta.label", allow_null=True)
    cta_url = serializers.CharField(source="cta.url", allow_null=True)
    audience = serializers.CharField()
    active = serializers.BooleanField()
    created_by = serializers.IntegerField(allow_null=True)
    created_at = serializers.DateTimeField()
    updated_at = serializers.DateTimeField()


class BannerSerializer(AnnouncementSerializer):
    headline = serializers.CharField(source="title")


class PopupSerializer(AnnouncementSerializer):
    title = serializers.CharField()
    frequency = serializers.CharField(source="frequency.value", allow_null=True)
