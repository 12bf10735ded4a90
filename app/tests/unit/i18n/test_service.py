"""Tests for localization.i18n.service module."""

import datetime
import threading

import pytest

from localization.i18n import (
    BundleLoadError,
    InMemoryBundleLoader,
    LocaleCatalog,
    LocalizationService,
    missing_text,
)
from tests.factories.i18n import make_locale, make_service


class TestGet:
    """Tests for LocalizationService.get()."""

    def test_existing_key(self, service):
        """get() returns the stored pattern."""
        assert service.get("logs.msg", make_locale("fr")) == "Niveau : {0}"

    def test_missing_key_marker(self, service):
        """A missing key yields ???key???."""
        assert service.get("nope", make_locale("en")) == "???nope???"
        assert missing_text("nope") == "???nope???"

    def test_missing_in_locale_filled_from_default(self, service):
        """A key absent from a supported bundle comes from the default bundle."""
        assert service.get("server.welcome", make_locale("fr")) == "Welcome to {0}!"

    def test_unsupported_locale_uses_default(self, service):
        """Unsupported locales read the default bundle."""
        assert service.get("logs.msg", make_locale("de")) == "Level: {0}"

    def test_get_consistent_with_has(self, service):
        """get() returns the stored value exactly when has() is true."""
        keys = ["logs.msg", "server.welcome", "server.local", "nope"]
        for locale in service.catalog:
            for key in keys:
                value = service.get(key, locale)
                if service.has(key, locale):
                    assert value == service.bundles.get_or_load(locale)[key]
                else:
                    assert value == missing_text(key)


class TestHas:
    """Tests for LocalizationService.has()."""

    def test_present_and_absent(self, service):
        """has() reflects the resolved bundle."""
        assert service.has("logs.msg", make_locale("en"))
        assert service.has("server.local", make_locale("fr"))
        assert not service.has("server.local", make_locale("en"))
        assert not service.has("nope", make_locale("en"))

    def test_unsupported_locale_checks_default(self, service):
        """has() on an unsupported locale checks the default bundle."""
        assert service.has("server.welcome", make_locale("de"))


class TestDiagnosticLocale:
    """Tests for the router locale."""

    def test_every_default_key_is_router(self, service):
        """Each default key is present in the router bundle with value "router"."""
        router = service.diagnostic_locale()
        default_keys = list(service.bundles.get_or_load(service.default_locale()))
        assert default_keys
        for key in default_keys:
            assert service.has(key, router)
            assert service.get(key, router) == "router"

    def test_format_ignores_values(self, service):
        """Formatting in the router locale always gives "router"."""
        router = service.find_locale("router")
        assert service.format("player.kicked", router, "Bob", "Alice") == "router"

    def test_unknown_key_still_missing(self, service):
        """Keys unknown to the default bundle are missing in router too."""
        assert service.get("nope", service.diagnostic_locale()) == "???nope???"


class TestFormat:
    """Tests for LocalizationService.format()."""

    def test_substitutes_values(self, service):
        """{0} and {1} are replaced in order."""
        text = service.format("player.kicked", make_locale("en"), "Bob", "Alice")
        assert text == "Bob was kicked by Alice"

    def test_no_values_returns_pattern_verbatim(self, service):
        """Without values the pattern is returned untouched."""
        for key in ["server.literal", "logs.msg", "nope"]:
            for locale in service.catalog:
                assert service.format(key, locale) == service.get(key, locale)

    def test_no_values_keeps_quotes(self):
        """Quoting rules are not applied when there is nothing to substitute."""
        service = make_service({"en": {"q": "It''s '{0}'"}})
        assert service.format("q", make_locale("en")) == "It''s '{0}'"
        assert service.format("q", make_locale("en"), "x") == "It's {0}"

    def test_fallback_scenario(self):
        """catalog {en, fr}: a key only in en is formatted from en for fr."""
        service = make_service({"en": {"logs.msg": "Level: {0}"}, "fr": {}})
        fr = service.find_locale("fr")
        assert fr == make_locale("fr")
        assert service.format("logs.msg", fr, "error") == "Level: error"

    def test_unsupported_locale_scenario(self):
        """An unsupported tag formats from the default bundle."""
        service = make_service({"en": {"logs.msg": "Level: {0}"}, "fr": {}})
        assert service.format("logs.msg", make_locale("de"), "error") == "Level: error"

    def test_missing_key_with_values(self, service):
        """A missing key formats to its marker."""
        assert service.format("nope", make_locale("en"), 1) == "???nope???"

    def test_locale_number_formatting(self, service):
        """Numbers follow the target locale's grouping."""
        assert service.format("server.restart", make_locale("en"), 1500) == (
            "Restart in 1,500 seconds"
        )

    def test_unsupported_locale_uses_default_formatter(self, service):
        """Unsupported locales never get a private formatter."""
        service.format("logs.msg", make_locale("de"), "x")
        service.format("logs.msg", make_locale("ja"), "x")
        assert len(service.formats) == 1
        assert service.formats.get(make_locale("en")).locale == make_locale("en")

    def test_malformed_pattern_returns_raw(self):
        """A malformed pattern is returned unformatted."""
        service = make_service({"en": {"bad": "Level: {0"}})
        assert service.format("bad", make_locale("en"), "x") == "Level: {0"

    def test_non_ascii_digit_index_returns_raw(self):
        """A placeholder index written with non-ASCII digits is not formatted."""
        service = make_service({"en": {"k": "{²}"}})
        assert service.format("k", make_locale("en"), 1.5) == "{²}"

    def test_invalid_date_style_returns_raw(self):
        """A date pattern Babel rejects leaves the message unformatted."""
        service = make_service({"en": {"k": "On {0,date,bqqqqqqq}"}})
        value = datetime.date(2024, 3, 5)
        assert service.format("k", make_locale("en"), value) == "On {0,date,bqqqqqqq}"

    def test_find_then_format(self, service):
        """A regional tag resolves by prefix before formatting."""
        locale = service.find_locale("fr_CA")
        assert service.format("player.joined", locale, "Bob") == (
            "Bob a rejoint le serveur"
        )


class TestLocaleOperations:
    """Tests for find_locale() and default_locale() on the service."""

    def test_default_locale(self, service):
        """default_locale() is en."""
        assert service.default_locale().canonical == "en"

    def test_prefix_scenario(self):
        """catalog {en}: en_US resolves to en."""
        service = make_service({"en": {"a": "b"}})
        assert service.find_locale("en_US") == make_locale("en")


class TestLoadFailures:
    """Tests for broken bundles surfacing through the service."""

    def test_broken_bundle_raises(self):
        """A corrupt cataloged bundle raises on access."""
        loader = InMemoryBundleLoader({"en": {"a": "b"}, "fr": ["broken"]})
        service = LocalizationService(LocaleCatalog.load(loader), loader)
        with pytest.raises(BundleLoadError):
            service.get("a", make_locale("fr"))
        assert service.get("a", make_locale("en")) == "b"


class TestConcurrentFormatting:
    """Regression tests for sharing a locale's formatter across threads."""

    def test_outputs_never_mix_keys(self):
        """Concurrent format() calls on one locale keep each key's pattern."""
        bundles = {
            "en": {
                f"key{i}": f"pattern-{i} [{{0}}] end-{i}" for i in range(20)
            }
        }
        service = make_service(bundles)
        locale = make_locale("en")
        barrier = threading.Barrier(8)
        errors = []

        def worker(offset):
            barrier.wait()
            for n in range(500):
                i = (n + offset) % 20
                text = service.format(f"key{i}", locale, f"v{offset}")
                if text != f"pattern-{i} [v{offset}] end-{i}":
                    errors.append(text)

        threads = [threading.Thread(target=worker, args=(t,)) for t in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert errors == []
