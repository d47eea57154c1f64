"""Serializers for pack form payloads and domain model responses."""

from rest_framework import serializers

from catalog.domain.models import PackStatus, SampleStatus, SampleType


class SampleDraftSerializer(serializers.Serializer):
    """A new sample in a pack form. `file` and `stem_files` name multipart parts."""

    file = serializers.CharField()
    name = serializers.CharField(required=False, allow_blank=True, default="")
    type = serializers.ChoiceField(choices=[t.value for t in SampleType], default=SampleType.LOOP.value)
    bpm = serializers.IntegerField(required=False, allow_null=True, default=None)
    key = serializers.CharField(required=False, allow_null=True, allow_blank=True, default=None)
    length = serializers.CharField(required=False, allow_null=True, allow_blank=True, default=None)
    credit_cost = serializers.IntegerField(required=False, allow_null=True, default=None)
    has_stems = serializers.BooleanField(default=False)
    stem_files = serializers.ListField(child=serializers.CharField(), default=list)
    genre_id = serializers.UUIDField(required=False, allow_null=True, default=None)
    mood_ids = serializers.ListField(child=serializers.UUIDField(), default=list)


class SampleEditSerializer(serializers.Serializer):
    id = serializers.UUIDField()
    name = serializers.CharField()
    type = serializers.ChoiceField(choices=[t.value for t in SampleType])
    bpm = serializers.IntegerField(required=False, allow_null=True, default=None)
    key = serializers.CharField(required=False, allow_null=True, allow_blank=True, default=None)
    length = serializers.CharField(required=False, allow_null=True, allow_blank=True, default=None)
    credit_cost = serializers.IntegerField(required=False, allow_null=True, default=None)


class PackFieldsSerializer(serializers.Serializer):
    name = serializers.CharField(allow_blank=True)
    description = serializers.CharField(required=False, allow_blank=True, default="")
    creator_id = serializers.UUIDField()
    category_id = serializers.UUIDField()
    genre_ids = serializers.ListField(child=serializers.UUIDField(), default=list)
    tags = serializers.ListField(child=serializers.CharField(allow_blank=True), default=list)
    is_premium = serializers.BooleanField(default=False)
    cover = serializers.CharField(required=False, allow_null=True, default=None)


class PackCreateSerializer(PackFieldsSerializer):
    status = serializers.ChoiceField(
        choices=[PackStatus.DRAFT.value, PackStatus.PUBLISHED.value],
        default=PackStatus.DRAFT.value,
    )
    samples = SampleDraftSerializer(many=True, default=list)


class PackEditSerializer(PackFieldsSerializer):
    status = serializers.ChoiceField(
        choices=[s.value for s in PackStatus], required=False, allow_null=True, default=None
    )
    removed_sample_ids = serializers.ListField(child=serializers.UUIDField(), default=list)
    sample_edits = SampleEditSerializer(many=True, default=list)
    new_samples = SampleDraftSerializer(many=True, default=list)


class PackStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=[s.value for s in PackStatus])


class SampleStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=[s.value for s in SampleStatus])


class ActiveToggleSerializer(serializers.Serializer):
    active = serializers.BooleanField()


class StemSerializer(serializers.Serializer):
    """Serializer for Stem domain model."""

    id = serializers.CharField(source="id.value")
    name = serializers.CharField()
    audio_url = serializers.CharField()
    file_size_bytes = serializers.IntegerField(allow_null=True)


class SampleSerializer(serializers.Serializer):
    """Serializer for Sample domain model."""

    id = serializers.CharField(source="id.value")
    pack_id = serializers.CharField(source="pack_id.value")
    name = serializers.CharField()
    audio_url = serializers.CharField()
    type = serializers.CharField(source="sample_type.value")
    status = serializers.CharField(source="status.value")
    bpm = serializers.IntegerField(allow_null=True)
    key = serializers.CharField(allow_null=True)
    length = serializers.CharField(allow_null=True)
    credit_cost = serializers.IntegerField(allow_null=True)
    has_stems = serializers.BooleanField()
    download_count = serializers.IntegerField()
    stems = StemSerializer(many=True)
    updated_at = serializers.DateTimeField()


class PublicSampleSerializer(serializers.Serializer):
    """What end users see of a visible sample."""

    id = serializers.CharField(source="id.value")
    name = serializers.CharField()
    audio_url = serializers.CharField()
    type = serializers.CharField(source="sample_type.value")
    bpm = serializers.IntegerField(allow_null=True)
    key = serializers.CharField(allow_null=True)
    has_stems = serializers.BooleanField()


class PackSerializer(serializers.Serializer):
    """Serializer for Pack domain model."""

    id = serializers.CharField(source="id.value")
    name = serializers.CharField()
    description = serializers.CharField()
    creator_id = serializers.CharField(source="creator_id.value")
    category_id = serializers.CharField(source="category_id.value")
    genre_ids = serializers.SerializerMethodField()
    cover_url = serializers.CharField(allow_null=True)
    tags = serializers.ListField(child=serializers.CharField())
    is_premium = serializers.BooleanField()
    status = serializers.CharField(source="status.value")
    download_count = serializers.IntegerField()
    created_at = serializers.DateTimeField()
    updated_at = serializers.DateTimeField()

    def get_genre_ids(self, pack) -> list[str]:
        return [str(g) for g in pack.genre_ids]
