"""Custom exceptions for the localization system.

Catalog construction errors (ResourceUnavailable, MissingDefaultLocale,
MalformedLocaleCode in strict mode) are fatal at startup. BundleLoadError
surfaces on first access to the broken locale. Missing keys and unsupported
locales are never raised; they are absorbed into placeholder text and the
default locale respectively.
"""


class LocalizationError(Exception):
    """Base exception for all localization errors.

    Example:
        try:
            service = create_localization_service()
        except LocalizationError as e:
            logger.error("localization_unavailable", error=str(e))
    """

    pass


class ResourceUnavailable(LocalizationError):
    """Raised when the bundle source cannot be enumerated.

    Example:
        >>> YAMLBundleLoader(Path("/missing")).list_codes()
        Traceback (most recent call last):
        ...
        ResourceUnavailable: Bundles directory not found: /missing
    """

    pass


class MissingDefaultLocale(LocalizationError):
    """Raised when the catalog has no entry for the default locale."""

    pass


class MalformedLocaleCode(LocalizationError):
    """Raised when a locale code does not follow the naming convention.

    Example:
        >>> parse_locale("en_US_x")
        Traceback (most recent call last):
        ...
        MalformedLocaleCode: Malformed locale code: 'en_US_x'
    """

    def __init__(self, code: str, reason: str = ""):
        self.code = code
        message = f"Malformed locale code: {code!r}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class BundleLoadError(LocalizationError):
    """Raised when a cataloged bundle cannot be read or parsed.

    The failure is remembered, so later lookups on the same locale raise
    the same error without hitting the backing store again.
    """

    def __init__(self, locale_code: str, reason: str):
        self.locale_code = locale_code
        self.reason = reason
        super().__init__(f"Failed to load bundle for locale {locale_code}: {reason}")


class PatternSyntaxError(LocalizationError):
    """Raised by the pattern parser for unbalanced braces or bad arguments.

    The formatter catches it and falls back to the raw pattern.
    """

    def __init__(self, pattern: str, reason: str):
        self.pattern = pattern
        self.reason = reason
        super().__init__(f"Invalid pattern {pattern!r}: {reason}")
