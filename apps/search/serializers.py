from rest_framework import serializers


class SearchRequestSerializer(serializers.Serializer):
    query = serializers.CharField(allow_blank=True, trim_whitespace=False)


class SearchResultSerializer(serializers.Serializer):
    id = serializers.CharField()
    type = serializers.CharField()
    title = serializers.CharField()
    subtitle = serializers.CharField(required=False)
    navigate_to = serializers.CharField(required=False)
    department = serializers.CharField(required=False)
    module = serializers.CharField(required=False)
    relevance = serializers.IntegerField()


class SearchSuggestionSerializer(serializers.Serializer):
    text = serializers.CharField()
    action = serializers.CharField()


class SearchResponseSerializer(serializers.Serializer):
    """Documents the response shape for the schema."""

    results = SearchResultSerializer(many=True)
    suggestions = SearchSuggestionSerializer(many=True)
    fallback = serializers.BooleanField(required=False)
