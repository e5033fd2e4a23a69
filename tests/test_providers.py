import asyncio

import pytest

from config.settings import Settings
from core.providers import GeminiProvider, OpenAIProvider, ProviderFactory
from model.api import ExtractionRequest
from model.extraction import ExampleData, Extraction
from util.enums import ModelProvider
from util.errors import ProviderError


def make_settings(**kw):
    base = {"GEMINI_API_KEY": None, "OPENAI_API_KEY": None}
    base.update(kw)
    return Settings(**base)


def make_request(**kw):
    data = dict(
        text="Apple CEO Tim Cook",
        prompt_description="Extract people and companies",
        examples=[
            ExampleData(
                text="Google CEO Sundar Pichai",
                extractions=[Extraction(extraction_class="人物", extraction_text="Sundar Pichai")],
            )
        ],
    )
    data.update(kw)
    return ExtractionRequest(**data)


def test_request_key_wins():
    factory = ProviderFactory(make_settings(GEMINI_API_KEY="server"))
    provider = factory.create(ModelProvider.GEMINI, api_key="user")
    assert isinstance(provider, GeminiProvider)
    assert provider.model_id == "gemini-2.5-flash"


def test_falls_back_to_configured_key():
    factory = ProviderFactory(make_settings(OPENAI_API_KEY="server"))
    provider = factory.create("openai", model_id="gpt-4o")
    assert isinstance(provider, OpenAIProvider)
    assert provider.model_id == "gpt-4o"


def test_missing_key_raises():
    factory = ProviderFactory(make_settings())
    with pytest.raises(ProviderError) as exc:
        factory.create(ModelProvider.OPENAI)
    assert exc.value.status_code == 400
    assert "OPENAI_API_KEY" in exc.value.message


def test_unknown_provider_raises():
    with pytest.raises(ProviderError):
        ProviderFactory(make_settings(GEMINI_API_KEY="k")).create("claude", api_key="k")


def test_available_providers():
    factory = ProviderFactory(make_settings(GEMINI_API_KEY="k", OPENAI_API_KEY="  "))
    assert factory.available_providers() == [ModelProvider.GEMINI]


def test_extract_returns_document_over_request_text():
    provider = GeminiProvider("k")
    request = make_request()
    document = asyncio.run(provider.extract(request))
    assert document.text == request.text
    assert document.document_id.startswith("gemini_doc_")
    assert len(document.extractions) == 2


def test_openai_document_prefix():
    document = asyncio.run(OpenAIProvider("k").extract(make_request()))
    assert document.document_id.startswith("openai_doc_")


def test_build_prompt_contains_instructions_examples_and_text():
    prompt = GeminiProvider("k").build_prompt(
        make_request(additional_context="Press release")
    )
    assert prompt.startswith("Extract people and companies")
    assert "Additional context: Press release" in prompt
    assert "Example 1:" in prompt
    assert "Sundar Pichai" in prompt
    assert prompt.rstrip().endswith("Return the extractions as JSON.")
    assert "Apple CEO Tim Cook" in prompt
