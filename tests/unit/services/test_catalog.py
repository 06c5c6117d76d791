"""Unit tests for the language catalog and the fallback snapshot."""

from __future__ import annotations

import pytest

from tests.factories import create_language
from tiobe_service.services.catalog import GENERIC_ENTRY, describe, lookup
from tiobe_service.services.fallback import get_fallback_languages


@pytest.mark.unit
class TestFallback:
    """Tests for the built-in top 20."""

    def test_has_twenty_ranked_entries(self) -> None:
        languages = get_fallback_languages()

        assert len(languages) == 20
        assert [lang.rank for lang in languages] == list(range(1, 21))

    def test_first_and_last_entries(self) -> None:
        languages = get_fallback_languages()

        assert languages[0].name == "Python"
        assert languages[0].rating == "23.64%"
        assert languages[-1].name == "Kotlin"
        assert languages[-1].prev_rank == 23

    def test_returns_fresh_copies(self) -> None:
        first = get_fallback_languages()
        first[0].name = "Changed"

        assert get_fallback_languages()[0].name == "Python"

    def test_every_fallback_language_has_catalog_entry(self) -> None:
        for language in get_fallback_languages():
            assert lookup(language.name) is not GENERIC_ENTRY, language.name


@pytest.mark.unit
class TestCatalog:
    """Tests for catalog lookup and detail building."""

    @pytest.mark.parametrize("name", ["python", "Python", "PYTHON", " python "])
    def test_lookup_case_insensitive(self, name: str) -> None:
        assert "FastAPI" in lookup(name).frameworks

    def test_alias_delphi(self) -> None:
        assert lookup("Delphi") is lookup("Delphi/Object Pascal")

    def test_alias_assembly(self) -> None:
        assert lookup("assembly") is lookup("Assembly language")

    def test_unknown_language_gets_generic_entry(self) -> None:
        entry = lookup("Brainfuck")

        assert entry is GENERIC_ENTRY
        assert entry.use_cases == ("General-purpose programming",)
        assert entry.frameworks == ("None listed",)

    def test_describe_combines_entry_and_ranking(self) -> None:
        language = create_language(rank=17, name="Rust", rating="1.30%")

        detail = describe("rust", language)

        assert detail.name == "Rust"
        assert detail.rank == 17
        assert detail.rating == "1.30%"
        assert "Tokio" in detail.frameworks
        assert "WebAssembly" in detail.use_cases
        assert "safety" in detail.description
