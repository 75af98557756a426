"""Tests for the localization package: loaders, load summaries and
StringsLocalization.

Table files are written to tmp_path for each test.

Python 3.13+.
"""

from __future__ import annotations

import json
import random
from pathlib import Path
from typing import Any

import pytest

from simplestrings import StringsLocalization
from simplestrings.enums import LoadStatus
from simplestrings.localization import (
    LoadSummary,
    LocaleFallbackInfo,
    PathTableLoader,
    TableLoadResult,
)


def _write(root: Path, relative: str, content: Any) -> Path:
    path = root / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    text = content if isinstance(content, str) else json.dumps(content, ensure_ascii=False)
    path.write_text(text, encoding="utf-8")
    return path


@pytest.fixture
def locale_dir(tmp_path: Path, en_table: dict[str, Any], es_table: dict[str, Any]) -> Path:
    """Locale/<locale>/strings.json for en_us (full table) and es (partial)."""
    root = tmp_path / "Locale"
    _write(root, "en_us/strings.json", en_table)
    _write(root, "es/strings.json", es_table)
    return root


class DictLoader:
    """In-memory TableLoader keyed by (locale, resource_id)."""

    def __init__(self, documents: dict[tuple[str, str], object]) -> None:
        self.documents = documents
        self.calls: list[tuple[str, str]] = []

    def load(self, locale: str, resource_id: str) -> object:
        self.calls.append((locale, resource_id))
        try:
            return self.documents[(locale, resource_id)]
        except KeyError:
            raise FileNotFoundError(f"{locale}/{resource_id}") from None

    def describe_path(self, locale: str, resource_id: str) -> str:
        return f"memory:{locale}/{resource_id}"


# ============================================================================
# PathTableLoader
# ============================================================================


class TestPathTableLoader:
    """Disk loader path building and validation."""

    def test_requires_locale_placeholder(self) -> None:
        """base_path without {locale} is rejected."""
        with pytest.raises(ValueError, match="locale"):
            PathTableLoader("Locale/en")

    def test_describe_path_appends_resource(self) -> None:
        """Resource ids are appended with the .json suffix."""
        loader = PathTableLoader("Locale/{locale}")
        assert loader.describe_path("en_us", "strings") == "Locale/en_us/strings.json"

    def test_describe_path_resource_placeholder(self) -> None:
        """A {resource_id} placeholder is substituted in place."""
        loader = PathTableLoader("Locale/{resource_id}/{locale}/strings")
        assert loader.describe_path("en", "game") == "Locale/game/en/strings.json"

    def test_existing_suffix_kept(self) -> None:
        """A resource id ending in .json is not suffixed twice."""
        loader = PathTableLoader("Locale/{locale}")
        assert loader.describe_path("en", "strings.json") == "Locale/en/strings.json"

    def test_load(self, locale_dir: Path) -> None:
        """Files are parsed as UTF-8 JSON."""
        loader = PathTableLoader(f"{locale_dir}/{{locale}}")
        assert loader.load("es", "strings") == {"monkey": "melón", "extra": "Extra"}

    def test_missing_file(self, locale_dir: Path) -> None:
        """Missing files raise FileNotFoundError."""
        loader = PathTableLoader(f"{locale_dir}/{{locale}}")
        with pytest.raises(FileNotFoundError):
            loader.load("fr", "strings")

    @pytest.mark.parametrize("locale", ["", "../etc", "en/us", "en\\us"])
    def test_rejects_unsafe_locales(self, locale_dir: Path, locale: str) -> None:
        """Empty locales, traversal and separators are rejected."""
        loader = PathTableLoader(f"{locale_dir}/{{locale}}")
        with pytest.raises(ValueError):
            loader.load(locale, "strings")

    @pytest.mark.parametrize("resource_id", ["", " strings", "/etc/passwd", "../secrets"])
    def test_rejects_unsafe_resource_ids(self, locale_dir: Path, resource_id: str) -> None:
        """Empty, padded, absolute and traversing resource ids are rejected."""
        loader = PathTableLoader(f"{locale_dir}/{{locale}}")
        with pytest.raises(ValueError):
            loader.load("en_us", resource_id)

    def test_nested_resource_id(self, locale_dir: Path) -> None:
        """Resource ids may name a subdirectory."""
        _write(locale_dir, "en_us/shared/strings.json", {"shared": "yes"})
        loader = PathTableLoader(f"{locale_dir}/{{locale}}")

        assert loader.load("en_us", "shared/strings") == {"shared": "yes"}

    def test_root_dir_confines_paths(self, locale_dir: Path, tmp_path: Path) -> None:
        """Resolved paths outside root_dir are rejected."""
        other = tmp_path / "other"
        _write(other, "en_us/strings.json", {"a": "b"})
        loader = PathTableLoader(f"{other}/{{locale}}", root_dir=str(locale_dir))

        with pytest.raises(ValueError, match="traversal"):
            loader.load("en_us", "strings")


# ============================================================================
# Load results
# ============================================================================


class TestLoadSummary:
    """LoadSummary aggregates results."""

    def test_counts_and_filters(self) -> None:
        """Counts and filter helpers agree with the results."""
        ok = TableLoadResult(locale="en", resource_id="strings", status=LoadStatus.SUCCESS)
        missing = TableLoadResult(locale="fr", resource_id="strings", status=LoadStatus.NOT_FOUND)
        failed = TableLoadResult(
            locale="de",
            resource_id="strings",
            status=LoadStatus.ERROR,
            error=ValueError("bad json"),
        )
        summary = LoadSummary(results=(ok, missing, failed))

        assert summary.total_attempted == 3
        assert (summary.successful, summary.not_found, summary.errors) == (1, 1, 1)
        assert summary.get_successful() == (ok,)
        assert summary.get_not_found() == (missing,)
        assert summary.get_errors() == (failed,)
        assert summary.get_by_locale("fr") == (missing,)
        assert summary.has_errors
        assert not summary.all_successful

    def test_result_flags(self) -> None:
        """Exactly one status flag is set."""
        result = TableLoadResult(locale="en", resource_id="s", status=LoadStatus.NOT_FOUND)
        assert (result.is_success, result.is_not_found, result.is_error) == (False, True, False)


# ============================================================================
# StringsLocalization
# ============================================================================


class TestStringsLocalization:
    """End-to-end lookups over table files."""

    def test_locale_chain(self, locale_dir: Path) -> None:
        """Requested locale, its partial form, then the default locale."""
        l10n = StringsLocalization(["es-MX"], base_path=f"{locale_dir}/{{locale}}")
        assert l10n.locales == ("es_mx", "es", "en_us", "en")

    def test_override_and_fallback(self, locale_dir: Path) -> None:
        """Spanish overrides, English fills the gaps."""
        l10n = StringsLocalization(["es-MX"], base_path=f"{locale_dir}/{{locale}}")

        assert l10n.get_string("monkey") == "melón"
        assert l10n.get_string("intro/hello") == "Hello, World!"
        assert l10n.get_string("intro/bye", "Bob", "Susan") == (
            "Goodbye, Bob! I hope you enjoyed seeing Susan!"
        )
        assert l10n.get_string("nope") == 'ERROR-MISSING-STRING: "nope"'

    def test_used_locale(self, locale_dir: Path) -> None:
        """used_locale is the first locale whose table loaded."""
        l10n = StringsLocalization(["es-MX"], base_path=f"{locale_dir}/{{locale}}")
        assert l10n.used_locale == "es"

    def test_load_order_and_summary(self, locale_dir: Path) -> None:
        """Every (locale, resource) pair is attempted once, in order."""
        l10n = StringsLocalization(["es-MX"], base_path=f"{locale_dir}/{{locale}}")
        summary = l10n.get_load_summary()

        assert [r.locale for r in summary.results] == ["es_mx", "es", "en_us", "en"]
        assert [r.status for r in summary.results] == [
            LoadStatus.NOT_FOUND,
            LoadStatus.SUCCESS,
            LoadStatus.SUCCESS,
            LoadStatus.NOT_FOUND,
        ]
        assert not summary.has_errors

    def test_resource_order(self) -> None:
        """Resource ids are interleaved per requested locale."""
        loader = DictLoader({})
        StringsLocalization(["es_mx"], ["game", "shared"], loader, default_locale="en")

        assert loader.calls == [
            ("es_mx", "game"),
            ("es", "game"),
            ("es_mx", "shared"),
            ("es", "shared"),
            ("en", "game"),
            ("en", "shared"),
        ]

    def test_resource_precedence(self) -> None:
        """Earlier resource ids shadow later ones for the same locale."""
        loader = DictLoader(
            {
                ("en", "game"): {"title": "Game title"},
                ("en", "shared"): {"title": "Shared title", "ok": "OK"},
            }
        )
        l10n = StringsLocalization(["en"], ["game", "shared"], loader, default_locale=None)

        assert l10n.get_string("title") == "Game title"
        assert l10n.get_string("ok") == "OK"
        assert l10n.strings.table_count == 2

    def test_invalid_files_recorded(self, locale_dir: Path) -> None:
        """Malformed JSON and scalar roots are errors, not exceptions."""
        _write(locale_dir, "fr/strings.json", "{not json")
        _write(locale_dir, "de/strings.json", '"just a string"')
        l10n = StringsLocalization(["fr", "de"], base_path=f"{locale_dir}/{{locale}}")
        summary = l10n.get_load_summary()

        assert [r.locale for r in summary.get_errors()] == ["fr", "de"]
        assert l10n.get_string("monkey") == "melon"

    def test_error_logged(
        self, locale_dir: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Load errors are logged at ERROR."""
        _write(locale_dir, "fr/strings.json", "[1, 2")
        StringsLocalization(["fr"], base_path=f"{locale_dir}/{{locale}}")

        assert any(record.levelname == "ERROR" for record in caplog.records)

    def test_deeply_nested_file_recorded(self, locale_dir: Path) -> None:
        """JSON too deep for the parser is an error, not an exception."""
        _write(locale_dir, "fr/strings.json", "[" * 100_000 + "]" * 100_000)
        l10n = StringsLocalization(["fr"], base_path=f"{locale_dir}/{{locale}}")
        errors = l10n.get_load_summary().get_errors()

        assert [r.locale for r in errors] == ["fr"]
        assert isinstance(errors[0].error, ValueError)
        assert l10n.get_string("monkey") == "melon"

    def test_deep_document_from_custom_loader(self) -> None:
        """RecursionError raised by any loader is recorded."""

        class DeepLoader(DictLoader):
            def load(self, locale: str, resource_id: str) -> object:
                raise RecursionError("maximum recursion depth exceeded")

        l10n = StringsLocalization(["en"], default_locale=None, loader=DeepLoader({}))

        assert l10n.get_load_summary().errors == 1
        assert l10n.used_locale is None


    def test_no_tables_loaded(self, tmp_path: Path) -> None:
        """With nothing on disk every lookup misses."""
        l10n = StringsLocalization(["fr"], base_path=f"{tmp_path}/{{locale}}")

        assert l10n.used_locale is None
        assert l10n.get_string("x") == 'ERROR-MISSING-STRING: "x"'
        assert l10n.get_string_count("x") == -1

    def test_requires_a_locale(self) -> None:
        """No locales and no default is an error."""
        with pytest.raises(ValueError, match="locale"):
            StringsLocalization([], default_locale=None, loader=DictLoader({}))

    def test_requires_a_resource(self) -> None:
        """An empty resource list is an error."""
        with pytest.raises(ValueError, match="resource_id"):
            StringsLocalization(["en"], [], DictLoader({}))

    def test_system_locale_default(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """locales=None uses the system locale."""
        monkeypatch.setattr(
            "simplestrings.localization.orchestrator.get_system_locale", lambda: "lv_lv"
        )
        l10n = StringsLocalization(loader=DictLoader({}))

        assert l10n.locales == ("lv_lv", "lv", "en_us", "en")

    def test_on_fallback_reports_locales(self, locale_dir: Path) -> None:
        """Fallback events name the requested and resolved locales."""
        events: list[LocaleFallbackInfo] = []
        l10n = StringsLocalization(
            ["es"], base_path=f"{locale_dir}/{{locale}}", on_fallback=events.append
        )

        l10n.get_string("monkey")
        l10n.get_string("intro/hello")

        assert events == [
            LocaleFallbackInfo(requested_locale="es", resolved_locale="en_us", key="intro/hello")
        ]

    def test_on_fallback_when_primary_locale_has_no_table(self, locale_dir: Path) -> None:
        """Answers from the first loaded table count when its locale is not the primary."""
        events: list[LocaleFallbackInfo] = []
        l10n = StringsLocalization(
            ["es-MX"], base_path=f"{locale_dir}/{{locale}}", on_fallback=events.append
        )

        assert l10n.used_locale == "es"
        assert l10n.get_string("monkey") == "melón"
        assert l10n.get_string("intro/hello") == "Hello, World!"
        assert events == [
            LocaleFallbackInfo(requested_locale="es_mx", resolved_locale="es", key="monkey"),
            LocaleFallbackInfo(
                requested_locale="es_mx", resolved_locale="en_us", key="intro/hello"
            ),
        ]

    def test_on_fallback_ignores_bad_type(self, locale_dir: Path) -> None:
        """Lookups rendered as BAD-TYPE are not reported."""
        events: list[LocaleFallbackInfo] = []
        l10n = StringsLocalization(
            ["es"], base_path=f"{locale_dir}/{{locale}}", on_fallback=events.append
        )

        assert l10n.get_string("intro") == 'BAD-TYPE: "intro"'
        assert events == []


    def test_facade_delegation(self, locale_dir: Path) -> None:
        """Counting, presence, enumeration and casing are delegated."""
        l10n = StringsLocalization(
            ["es"], base_path=f"{locale_dir}/{{locale}}", rng=random.Random(0)
        )

        assert l10n.get_string_count("choices") == 2
        assert l10n.has_string("extra")
        assert not l10n.has_string("missing")
        assert l10n.find_all_string_keys() == [
            "monkey",
            "extra",
            "intro",
            "choices",
            "thing",
            "substitution",
        ]
        assert "intro/options/paste" in l10n.find_all_string_paths()
        assert l10n.capitalize("hola") == "Hola"
        assert l10n.capitalize_first_only("HOLA") == "Hola"
        assert l10n.get_string("choices/!") in ("Choice A", "Choice B")

    def test_repr(self, locale_dir: Path) -> None:
        """repr shows the chain and table count."""
        l10n = StringsLocalization(["es"], base_path=f"{locale_dir}/{{locale}}")
        assert repr(l10n) == "StringsLocalization(locales=('es', 'en_us', 'en'), tables=2)"
