import json

import pytest

from llmstxt_gen.models import PageItem
from llmstxt_gen.services.llm_enricher import (
    EnrichmentResult,
    LLMEnricher,
    merge_by_key,
    merge_questions,
    parse_llm_json,
    trim_to,
)


def pages():
    return [
        PageItem(title="Pricing", url="https://acme.com/pricing", description="Plans"),
        PageItem(title="About", url="https://acme.com/about", description=""),
    ]


def enricher_returning(settings, monkeypatch, reply):
    enricher = LLMEnricher(settings)

    def fake_call(system_prompt, user_content):
        if isinstance(reply, Exception):
            raise reply
        return reply

    monkeypatch.setattr(enricher, "_call_llm", fake_call)
    return enricher


class TestParseLlmJson:
    def test_plain_object(self):
        assert parse_llm_json('{"summary": "x"}') == {"summary": "x"}

    def test_recovers_object_from_surrounding_text(self):
        reply = 'Here you go:\n```json\n{"summary": "x"}\n```'
        assert parse_llm_json(reply) == {"summary": "x"}

    def test_garbage(self):
        assert parse_llm_json("not json at all") is None
        assert parse_llm_json("") is None
        assert parse_llm_json("[1, 2]") is None


def test_trim_to():
    assert trim_to("  short   text ", 20) == "short text"
    trimmed = trim_to("a" * 200, 140)
    assert trimmed.endswith("...")
    assert len(trimmed) == 142


class TestMergeQuestions:
    def test_keeps_enough_model_questions(self):
        generated = ["Q1?", "Q2?", "Q3?", "Q4?", "Q5?", "Q6?", "Q7?"]
        assert merge_questions(generated, ["Mine?"]) == generated[:6]

    def test_tops_up_with_user_questions(self):
        merged = merge_questions(["What is Acme?"], ["what is acme", "How much is it?"])
        assert merged == ["What is Acme?", "How much is it?"]

    def test_non_list_reply(self):
        assert merge_questions(None, ["Mine?"]) == ["Mine?"]


class TestMergeByKey:
    def test_updates_matching_pages_only(self):
        updates = [
            {"url": "https://acme.com/about/", "title": "About Acme", "description": "Who builds Acme and why."},
            {"url": "https://acme.com/new-page", "title": "Invented"},
            "junk",
        ]
        merged = merge_by_key(pages(), updates)
        assert [p.url for p in merged] == ["https://acme.com/pricing", "https://acme.com/about"]
        assert merged[1].title == "About Acme"
        assert merged[1].description == "Who builds Acme and why."

    def test_respects_allowed_keys(self):
        updates = [{"url": "https://acme.com/pricing", "description": "Compare plans for every team."}]
        merged = merge_by_key(pages(), updates, allowed_keys={"https://acme.com/about"})
        assert merged[0].description == "Plans"

    def test_does_not_mutate_input(self):
        original = pages()
        merge_by_key(original, [{"url": "https://acme.com/pricing", "title": "New"}])
        assert original[0].title == "Pricing"

    def test_dedupes_by_canonical_url(self):
        dupes = pages() + [PageItem(title="Dup", url="https://ACME.com/pricing/")]
        assert len(merge_by_key(dupes, None)) == 2


class TestLLMEnricher:
    def test_requires_credential(self, settings):
        with pytest.raises(ValueError):
            LLMEnricher(settings.model_copy(update={"openai_api_key": None}))

    def test_applies_model_output(self, settings, acme_survey, monkeypatch):
        reply = json.dumps({
            "summary": "Acme syncs inventory across marketplaces for independent sellers.",
            "questions": ["What does Acme sync?", "How much does it cost?"],
            "pages": [{"url": "https://acme.com/pricing", "description": "Compare Acme plans and monthly prices."}],
        })
        enricher = enricher_returning(settings, monkeypatch, reply)

        result = enricher.enrich(acme_survey, pages())

        assert result.used is True
        assert result.summary.startswith("Acme syncs inventory")
        assert result.questions == ["What does Acme sync?", "How much does it cost?"]
        assert result.pages[0].description == "Compare Acme plans and monthly prices."
        assert len(result.pages) == 2

    def test_short_summary_is_ignored(self, settings, acme_survey, monkeypatch):
        enricher = enricher_returning(settings, monkeypatch, '{"summary": "Too short"}')
        result = enricher.enrich(acme_survey, pages())
        assert result.used is True
        assert result.summary == acme_survey.summary

    def test_invalid_json_falls_back(self, settings, acme_survey, monkeypatch):
        enricher = enricher_returning(settings, monkeypatch, "Sorry, I can't help with that.")
        result = enricher.enrich(acme_survey, pages())
        assert result.used is False
        assert result.pages == pages()
        assert result.summary == acme_survey.summary

    def test_provider_error_falls_back(self, settings, acme_survey, monkeypatch):
        enricher = enricher_returning(settings, monkeypatch, TimeoutError("timed out"))
        result = enricher.enrich(acme_survey, pages())
        assert result.used is False

    def test_model_cannot_add_pages(self, settings, acme_survey, monkeypatch):
        reply = json.dumps({"pages": [{"url": "https://acme.com/made-up", "title": "Made up"}]})
        enricher = enricher_returning(settings, monkeypatch, reply)
        result = enricher.enrich(acme_survey, pages())
        assert [p.url for p in result.pages] == [p.url for p in pages()]

    def test_only_candidates_are_updated(self, settings, acme_survey, monkeypatch):
        reply = json.dumps({"pages": [{"url": "https://acme.com/about", "title": "About Acme"}]})
        enricher = enricher_returning(settings, monkeypatch, reply)
        result = enricher.enrich(acme_survey, pages(), candidates=pages()[:1])
        assert result.pages[1].title == "About"

    def test_empty_candidates_skip_call(self, settings, acme_survey, monkeypatch):
        calls = []
        enricher = LLMEnricher(settings)

        def fake_call(system_prompt, user_content):
            calls.append(user_content)
            return '{"summary": "A much longer model summary that would replace the user one."}'

        monkeypatch.setattr(enricher, "_call_llm", fake_call)

        result = enricher.enrich(acme_survey, pages(), candidates=[])

        assert calls == []
        assert result.used is False
        assert result.summary == acme_survey.summary
        assert result.pages == pages()

    def test_no_pages_skips_call(self, settings, acme_survey, monkeypatch):
        enricher = enricher_returning(settings, monkeypatch, AssertionError("should not be called"))
        assert enricher.enrich(acme_survey, []) == EnrichmentResult.fallback(acme_survey, [])

    def test_prompt_payload_is_bounded(self, settings, acme_survey):
        enricher = LLMEnricher(settings)
        long_page = PageItem(title="T" * 100, url="https://acme.com/x", description="d" * 1000, content="c" * 1000)
        payload = enricher.build_prompt_payload(acme_survey, [long_page])
        entry = payload["pages"][0]
        assert len(entry["title"]) <= 63
        assert len(entry["currentDescription"]) <= 403
        assert len(entry["contentPreview"]) <= 603
        assert payload["site"]["siteType"] == "saas"
