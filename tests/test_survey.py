from llmstxt_gen.models import SiteType
from llmstxt_gen.services.survey import (
    build_survey_input,
    infer_site_type,
    normalize_params,
    validate_params,
)


def valid_params(**overrides):
    params = {
        "site_name": "Acme",
        "site_url": "acme.com",
        "summary": "Acme provides inventory sync for sellers.",
        "important_pages": "/pricing\n/docs\n/about",
    }
    params.update(overrides)
    return params


class TestValidateParams:
    def test_valid(self):
        assert validate_params(valid_params()) == {}

    def test_missing_name(self):
        errors = validate_params(valid_params(site_name="  "))
        assert errors == {"site_name": "Enter a project or brand name."}

    def test_missing_url(self):
        assert validate_params(valid_params(site_url=""))["site_url"] == "Enter your homepage URL."

    def test_non_http_scheme(self):
        assert validate_params(valid_params(site_url="ftp://acme.com"))["site_url"] == "Use an http or https URL."

    def test_short_summary(self):
        errors = validate_params(valid_params(summary="Too short"))
        assert errors["summary"] == "Describe what your business does (20+ characters)."

    def test_important_page_count(self):
        assert "important_pages" in validate_params(valid_params(important_pages="/a, /b"))
        nine = ", ".join(f"/p{i}" for i in range(9))
        assert "important_pages" in validate_params(valid_params(important_pages=nine))

    def test_legacy_priority_pages_field(self):
        params = valid_params(important_pages=None, priority_pages="/a, /b, /c")
        assert validate_params(params) == {}

    def test_reports_every_field(self):
        errors = validate_params({})
        assert set(errors) == {"site_name", "site_url", "summary", "important_pages"}


class TestInferSiteType:
    def test_explicit_value_wins(self):
        assert infer_site_type({"site_type": "media", "site_url": "https://shop.acme.com"}) == SiteType.MEDIA

    def test_invalid_explicit_value_is_ignored(self):
        assert infer_site_type({"site_type": "unknown", "site_url": "https://docs.acme.com"}) == SiteType.DOCS

    def test_ecommerce(self):
        assert infer_site_type({"site_url": "https://acme.store"}) == SiteType.ECOMMERCE

    def test_saas_from_summary(self):
        assert infer_site_type({"summary": "A dashboard for finance teams"}) == SiteType.SAAS

    def test_default_marketing(self):
        assert infer_site_type({"site_url": "https://acme.com", "summary": "We make widgets"}) == SiteType.MARKETING


def test_normalize_params_prefers_important_pages():
    normalized = normalize_params(valid_params(priority_pages="/legacy"))
    assert normalized["priority_pages"] == "/pricing\n/docs\n/about"
    assert normalized["site_url"] == "https://acme.com"


def test_build_survey_input_splits_lists():
    survey = build_survey_input(valid_params(questions="What does it cost?\nNone", excludes="/legal, /careers"))
    assert survey.site_url == "https://acme.com"
    assert survey.priority_pages == ("/pricing", "/docs", "/about")
    assert survey.questions == ("What does it cost?",)
    assert survey.excludes == ("/legal", "/careers")
    assert survey.categories == ()
