"""Bundle loading interface and implementations.

Defines the contract for enumerating and reading bundle resources and
provides the YAML-based loader used in production plus an in-memory
loader for embedding and tests.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

import yaml

from localization.i18n.errors import BundleLoadError, ResourceUnavailable
from localization.i18n.models import LOCALE_SEPARATOR, Locale
from localization.logging import get_module_logger

logger = get_module_logger()

YAML_SUFFIXES = (".yml", ".yaml")


class BundleLoader(ABC):
    """Abstract base for bundle loaders.

    Implementations define where bundles live and how a single bundle is
    turned into a flat key -> pattern mapping.
    """

    @abstractmethod
    def list_codes(self) -> List[str]:
        """Enumerate the locale codes available in the backing store.

        Returns:
            Raw locale codes in a stable order (not yet validated).

        Raises:
            ResourceUnavailable: If the store cannot be enumerated.
        """
        pass

    @abstractmethod
    def load(self, locale: Locale) -> Dict[str, str]:
        """Load the key -> pattern mapping for a locale.

        Args:
            locale: Cataloged locale to load.

        Returns:
            Flat mapping of dotted keys to pattern strings.

        Raises:
            BundleLoadError: If the bundle is missing, unreadable or corrupt.
        """
        pass


def flatten_messages(data: Mapping[Any, Any], locale_code: str) -> Dict[str, str]:
    """Flatten nested mappings into dotted keys.

    {"logs": {"msg": "Level: {0}"}} becomes {"logs.msg": "Level: {0}"}.
    Scalar leaves are converted to strings, empty leaves become "".
    Non-string keys are converted too, with a warning naming the result.

    Raises:
        BundleLoadError: If a leaf is a list or other non-scalar value.
    """
    messages: Dict[str, str] = {}

    def _walk(prefix: str, node: Mapping[Any, Any]) -> None:
        for raw_key, value in node.items():
            key = f"{prefix}.{raw_key}" if prefix else str(raw_key)
            if not isinstance(raw_key, str):
                # YAML 1.1 reads unquoted yes/no/on/off keys as booleans
                logger.warning(
                    "non_string_bundle_key",
                    locale=locale_code,
                    key=key,
                    key_type=type(raw_key).__name__,
                )
            if isinstance(value, Mapping):
                _walk(key, value)
            elif value is None:
                messages[key] = ""
            elif isinstance(value, (str, int, float, bool)):
                messages[key] = value if isinstance(value, str) else str(value)
            else:
                raise BundleLoadError(
                    locale_code,
                    f"value for key {key!r} must be a string, got {type(value).__name__}",
                )

    _walk("", data)
    return messages


class YAMLBundleLoader(BundleLoader):
    """Loader for YAML bundle files.

    Expects files named <family>_<locale code>.yml (or .yaml) in the
    bundles directory, e.g. bundle_en.yml, bundle_pt_BR.yml.

    Attributes:
        bundles_dir: Directory containing the bundle files.
        family: Filename prefix shared by all bundles of this family.
    """

    def __init__(self, bundles_dir: Path, family: str = "bundle"):
        """Initialize YAML bundle loader.

        Args:
            bundles_dir: Directory with YAML bundle files.
            family: Filename prefix before the locale code.
        """
        self.bundles_dir = Path(bundles_dir)
        self.family = family

    @property
    def _prefix(self) -> str:
        return f"{self.family}{LOCALE_SEPARATOR}"

    def _bundle_files(self) -> List[Path]:
        if not self.bundles_dir.is_dir():
            raise ResourceUnavailable(
                f"Bundles directory not found: {self.bundles_dir}"
            )
        try:
            entries = sorted(self.bundles_dir.iterdir())
        except OSError as e:
            raise ResourceUnavailable(
                f"Cannot list bundles directory {self.bundles_dir}: {e}"
            ) from e

        files = []
        for path in entries:
            if not path.is_file() or path.suffix not in YAML_SUFFIXES:
                continue
            if path.stem == self.family:
                # Base bundle without a locale code; not addressable by locale
                logger.debug("skipped_base_bundle", file=path.name)
                continue
            if not path.stem.startswith(self._prefix):
                logger.warning(
                    "unrecognized_bundle_file",
                    file=path.name,
                    expected_prefix=self._prefix,
                )
                continue
            files.append(path)
        return files

    def list_codes(self) -> List[str]:
        """Return locale codes embedded in bundle filenames, sorted by filename."""
        codes = [path.stem[len(self._prefix) :] for path in self._bundle_files()]
        logger.debug(
            "listed_bundle_codes",
            bundles_dir=str(self.bundles_dir),
            codes=codes,
        )
        return codes

    def _find_file(self, locale: Locale) -> Optional[Path]:
        wanted = locale.canonical.lower()
        for path in self._bundle_files():
            if path.stem[len(self._prefix) :].lower() == wanted:
                return path
        return None

    def load(self, locale: Locale) -> Dict[str, str]:
        """Read and flatten the YAML bundle for a locale."""
        try:
            path = self._find_file(locale)
        except ResourceUnavailable as e:
            raise BundleLoadError(locale.canonical, str(e)) from e
        if path is None:
            raise BundleLoadError(
                locale.canonical, f"no bundle file in {self.bundles_dir}"
            )

        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except OSError as e:
            logger.error("bundle_read_error", file=str(path), error=str(e))
            raise BundleLoadError(locale.canonical, str(e)) from e
        except yaml.YAMLError as e:
            logger.error("yaml_parse_error", file=str(path), error=str(e))
            raise BundleLoadError(
                locale.canonical, f"failed to parse {path.name}: {e}"
            ) from e

        if data is None:
            logger.warning("empty_bundle_file", file=str(path))
            return {}
        if not isinstance(data, dict):
            raise BundleLoadError(
                locale.canonical,
                f"{path.name} must contain a mapping, got {type(data).__name__}",
            )

        messages = flatten_messages(data, locale.canonical)
        logger.info(
            "loaded_bundle_file",
            locale=locale.canonical,
            file=path.name,
            key_count=len(messages),
        )
        return messages


class InMemoryBundleLoader(BundleLoader):
    """Loader backed by a dict of locale code -> (possibly nested) messages.

    Example:
        loader = InMemoryBundleLoader({
            "en": {"logs": {"msg": "Level: {0}"}},
            "fr": {"logs.msg": "Niveau : {0}"},
        })
    """

    def __init__(self, bundles: Mapping[str, Mapping[str, Any]]):
        self.bundles = dict(bundles)

    def list_codes(self) -> List[str]:
        return list(self.bundles)

    def load(self, locale: Locale) -> Dict[str, str]:
        wanted = locale.canonical.lower()
        for code, data in self.bundles.items():
            if code.lower() == wanted:
                if not isinstance(data, Mapping):
                    raise BundleLoadError(
                        locale.canonical,
                        f"bundle must be a mapping, got {type(data).__name__}",
                    )
                return flatten_messages(data, locale.canonical)
        raise BundleLoadError(locale.canonical, "no bundle registered")
