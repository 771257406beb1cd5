import json

import pytest

from landly.exceptions import GenerationError, SchemaMismatchError, SchemaNotJSONError
from landly.services.ai_client import MockAIClient, extract_title
from landly.services.generate_service import GenerateService


class _StaticClient:
    provider = "static"

    def __init__(self, payload):
        self.payload = payload

    def generate_landing_schema(self, prompt, payment_url):
        return self.payload


class _FailingClient:
    provider = "broken"

    def generate_landing_schema(self, prompt, payment_url):
        raise TimeoutError("provider timed out")


@pytest.mark.unit
def test_mock_client_output_is_valid_and_stable(validator):
    service = GenerateService(MockAIClient(), validator)
    result = service.generate("онлайн-школа английского для детей", "https://pay.example")
    doc = json.loads(result.schema_json)

    assert doc["pages"][0]["title"] == "Онлайн-школа английского для детей"
    assert [b["type"] for b in doc["pages"][0]["blocks"]] == [
        "hero", "features", "pricing", "testimonials", "faq", "cta",
    ]
    hero = doc["pages"][0]["blocks"][0]["props"]
    assert hero["ctaUrl"] == "https://pay.example"
    assert "hero_cta_url_defaulted" in result.auto_fixes

    again = validator.validate(result.schema_json)
    assert again.auto_fixes == []


@pytest.mark.unit
def test_generate_surfaces_schema_errors(validator):
    with pytest.raises(SchemaNotJSONError):
        GenerateService(_StaticClient("Sure! Here is your landing page"), validator).generate("x")
    with pytest.raises(SchemaMismatchError):
        GenerateService(_StaticClient('{"pages": "one"}'), validator).generate("x")


@pytest.mark.unit
def test_generate_wraps_provider_failures(validator):
    with pytest.raises(GenerationError) as exc_info:
        GenerateService(_FailingClient(), validator).generate("x")
    assert exc_info.value.details == {"provider": "broken"}
    assert isinstance(exc_info.value.__cause__, TimeoutError)


@pytest.mark.unit
def test_extract_title():
    assert extract_title("") == "Ваш новый лендинг"
    assert extract_title("   ") == "Ваш новый лендинг"
    assert extract_title("кофейня у дома!") == "Кофейня у дома"
    assert extract_title("one two three four five six seven eight nine ten") == "One two three four five six seven eight"
