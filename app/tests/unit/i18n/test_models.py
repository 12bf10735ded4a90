"""Tests for localization.i18n.models module."""

import pytest

from localization.i18n.errors import MalformedLocaleCode
from localization.i18n.models import Bundle, Locale, normalize_tag, parse_locale
from tests.factories.i18n import make_locale


class TestLocale:
    """Tests for Locale value object."""

    def test_canonical_language_only(self):
        """canonical is the bare language code when no region is set."""
        assert make_locale("en").canonical == "en"

    def test_canonical_with_region(self):
        """canonical joins language and region with an underscore."""
        assert make_locale("pt", "BR").canonical == "pt_BR"

    def test_case_is_normalized(self):
        """Language is lower-cased and region upper-cased."""
        locale = Locale("PT", "br")
        assert locale.language == "pt"
        assert locale.region == "BR"
        assert str(locale) == "pt_BR"

    def test_equality_by_canonical_form(self):
        """Locales with the same canonical form are equal and hash alike."""
        assert Locale("en", "us") == Locale("EN", "US")
        assert len({Locale("en", "US"), Locale("en", "us")}) == 1

    def test_locale_is_immutable(self):
        """Locale is frozen."""
        locale = make_locale()
        with pytest.raises(AttributeError):
            locale.language = "fr"


class TestParseLocale:
    """Tests for parse_locale()."""

    def test_language_only(self):
        """A bare language code parses without region."""
        assert parse_locale("fr") == Locale("fr")

    def test_language_and_region(self):
        """A single separator splits language and region."""
        locale = parse_locale("uk_UA")
        assert locale.language == "uk"
        assert locale.region == "UA"

    def test_numeric_region(self):
        """Three digit area codes are valid regions."""
        assert parse_locale("es_419").canonical == "es_419"

    def test_diagnostic_code_parses(self):
        """The diagnostic code is a valid language-only code."""
        assert parse_locale("router").canonical == "router"

    @pytest.mark.parametrize(
        "code",
        ["", "en_US_POSIX", "sr_Latn_RS", "_US", "en_", "e", "en_U", "12", "en-US"],
    )
    def test_malformed_codes_rejected(self, code):
        """Codes that break the naming convention raise MalformedLocaleCode."""
        with pytest.raises(MalformedLocaleCode):
            parse_locale(code)

    def test_error_carries_code(self):
        """MalformedLocaleCode exposes the offending code."""
        with pytest.raises(MalformedLocaleCode) as exc_info:
            parse_locale("en_US_x")
        assert exc_info.value.code == "en_US_x"
        assert "more than one separator" in str(exc_info.value)


class TestNormalizeTag:
    """Tests for normalize_tag()."""

    def test_hyphen_becomes_underscore(self):
        """BCP-47 style tags are converted to the catalog form."""
        assert normalize_tag("en-US") == "en_US"

    def test_case_follows_locale(self):
        """Language is lower-cased and the remainder upper-cased."""
        assert normalize_tag("EN-us") == "en_US"
        assert normalize_tag("Fr") == "fr"

    def test_empty_and_none(self):
        """None and empty strings normalize to an empty string."""
        assert normalize_tag(None) == ""
        assert normalize_tag("") == ""

    def test_whitespace_stripped(self):
        """Surrounding whitespace is removed."""
        assert normalize_tag("  fr ") == "fr"


class TestBundle:
    """Tests for Bundle mapping."""

    def test_mapping_access(self):
        """Bundle behaves like a read-only mapping."""
        bundle = Bundle(make_locale(), {"logs.msg": "Level: {0}"})
        assert bundle["logs.msg"] == "Level: {0}"
        assert "logs.msg" in bundle
        assert bundle.get("missing") is None
        assert len(bundle) == 1

    def test_bundle_is_immutable(self):
        """Bundle rejects item assignment."""
        bundle = Bundle(make_locale(), {"a": "b"})
        with pytest.raises(TypeError):
            bundle["a"] = "c"

    def test_source_mapping_is_copied(self):
        """Mutating the source dict does not change the bundle."""
        source = {"a": "b"}
        bundle = Bundle(make_locale(), source)
        source["a"] = "changed"
        assert bundle["a"] == "b"

    def test_with_values_keeps_keys(self):
        """with_values() keeps keys and replaces every value."""
        bundle = Bundle(make_locale(), {"a": "1", "b": "2"})
        router = bundle.with_values(make_locale("router"), "router")
        assert router.locale == make_locale("router")
        assert set(router) == {"a", "b"}
        assert set(router.values()) == {"router"}
