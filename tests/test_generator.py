"""Unit tests for keyword combination generation."""

import re

import pytest
from pydantic import ValidationError

from content_engine.core.enums import SUPPORTED_LANGUAGES
from content_engine.schemas.keyword import (
    CountryRecord,
    KeywordServiceRead,
    KeywordTemplateRead,
    PlatformRead,
)
from content_engine.services.keywords.generator import (
    generate_keyword_combinations,
    iter_keyword_combinations,
)


@pytest.fixture()
def platform():
    return PlatformRead(id=1, name="SOS-Expat", slug="sos-expat")


@pytest.fixture()
def services():
    return [
        KeywordServiceRead(
            id=10, platform_id=1, service_key="plumber",
            translations={"fr": "plombier", "en": "plumber", "de": "Klempner"},
        ),
        KeywordServiceRead(
            id=11, platform_id=1, service_key="lawyer",
            translations={"fr": "avocat", "en": "lawyer"},
        ),
    ]


@pytest.fixture()
def templates():
    return [
        KeywordTemplateRead(
            id=100, platform_id=1, template_key="1_a", pattern="{service} {country}",
            intent_type="informational", priority=70,
        ),
        KeywordTemplateRead(
            id=101, platform_id=1, template_key="1_b", pattern="{service} {country_lower}",
            intent_type="transactional", priority=40,
        ),
        KeywordTemplateRead(
            id=102, platform_id=1, template_key="1_c", pattern="{service} urgent {missing_key}",
            intent_type="transactional",
        ),
    ]


@pytest.fixture()
def countries():
    return [
        CountryRecord(id=74, name="France", translations={"fr": "France", "en": "France", "de": "Frankreich"}),
        CountryRecord(id=164, name="Thaïlande", translations={"fr": "Thaïlande", "en": "Thailand"}),
    ]


class Collector:
    """Sink recording every batch it receives."""

    def __init__(self):
        self.batches = []

    def __call__(self, batch):
        self.batches.append(list(batch))

    @property
    def rows(self):
        return [row for batch in self.batches for row in batch]


class TestIterKeywordCombinations:
    """Test cases for the cartesian product of inputs."""

    def test_one_record_per_quadruple(self, platform, services, templates, countries):
        combos = list(iter_keyword_combinations(platform, services, templates, countries))
        assert len(combos) == len(services) * len(templates) * len(countries) * len(SUPPORTED_LANGUAGES)

        keys = {(c.service_id, c.template_id, c.country_id, c.language_code) for c in combos}
        assert len(keys) == len(combos)

    def test_no_braces_and_clean_normalized_form(self, platform, services, templates, countries):
        for combo in iter_keyword_combinations(platform, services, templates, countries):
            assert "{" not in combo.keyword_text and "}" not in combo.keyword_text
            assert re.fullmatch(r"(?:[a-z0-9]+(?: [a-z0-9]+)*)?", combo.keyword_normalized)

    def test_french_example(self, platform, services, templates, countries):
        combos = list(iter_keyword_combinations(platform, services[:1], templates[:1], countries[:1], ["fr"]))

        assert len(combos) == 1
        assert combos[0].keyword_text == "plombier France"
        assert combos[0].keyword_normalized == "plombier france"

    def test_lower_variant_example(self, platform, services, templates, countries):
        combo = next(iter_keyword_combinations(platform, services[:1], templates[1:2], countries[:1], ["fr"]))

        assert combo.keyword_text == "plombier france"
        assert combo.keyword_normalized == "plombier france"

    def test_unresolved_token_example(self, platform, services, templates, countries):
        combo = next(iter_keyword_combinations(platform, services[:1], templates[2:], countries[:1], ["fr"]))
        assert combo.keyword_text == "plombier urgent"

    def test_missing_service_language_falls_back_to_default(self, platform, services, templates, countries):
        combo = next(iter_keyword_combinations(platform, services[1:], templates[:1], countries[:1], ["ru"]))
        assert combo.keyword_text == "avocat France"

    def test_missing_country_language_falls_back_to_canonical_name(
            self, platform, services, templates, countries
    ):
        combo = next(iter_keyword_combinations(platform, services[:1], templates[:1], countries[1:], ["es"]))
        assert combo.keyword_text == "plombier Thaïlande"
        assert combo.keyword_normalized == "plombier thailande"

    def test_inherited_and_initial_fields(self, platform, services, templates, countries):
        combo = next(iter_keyword_combinations(platform, services[:1], templates[1:2], countries[:1], ["de"]))

        assert combo.platform_id == 1
        assert combo.service_id == 10
        assert combo.template_id == 101
        assert combo.country_id == 74
        assert combo.language_code == "de"
        assert combo.keyword_text == "Klempner frankreich"
        assert combo.intent_type == "transactional"
        assert combo.priority_score == 40
        assert combo.search_volume == 0
        assert combo.competition == 0.50
        assert combo.usage_count == 0

    def test_rendering_is_deterministic(self, platform, services, templates, countries):
        first = [c.model_dump() for c in iter_keyword_combinations(platform, services, templates, countries)]
        second = [c.model_dump() for c in iter_keyword_combinations(platform, services, templates, countries)]
        assert first == second

    def test_degenerate_phrase_is_kept(self, platform, countries):
        service = KeywordServiceRead(id=1, platform_id=1, service_key="x", translations={"fr": "x"})
        template = KeywordTemplateRead(id=1, platform_id=1, template_key="1_empty", pattern="{nothing}")

        combos = list(iter_keyword_combinations(platform, [service], [template], countries[:1], ["fr"]))

        assert len(combos) == 1
        assert combos[0].keyword_text == ""
        assert combos[0].keyword_normalized == ""

    def test_unsupported_language_is_rejected(self, platform, services, templates, countries):
        with pytest.raises(ValidationError):
            list(iter_keyword_combinations(platform, services, templates, countries, ["it"]))


class TestGenerateKeywordCombinations:
    """Test cases for batched writing."""

    def test_batches_are_bounded(self, platform, services, templates, countries):
        sink = Collector()

        count = generate_keyword_combinations(
            platform, services, templates, countries, sink, batch_size=25
        )

        assert count == 2 * 3 * 2 * 9
        assert sum(len(b) for b in sink.batches) == count
        assert all(len(b) == 25 for b in sink.batches[:-1])
        assert 0 < len(sink.batches[-1]) <= 25

    def test_final_partial_batch_is_flushed(self, platform, services, templates, countries):
        sink = Collector()

        generate_keyword_combinations(
            platform, services[:1], templates[:1], countries[:1], sink,
            languages=["fr", "en", "de", "es", "pt", "ru", "zh"], batch_size=3,
        )

        assert [len(b) for b in sink.batches] == [3, 3, 1]

    def test_batch_size_does_not_change_output(self, platform, services, templates, countries):
        large, single = Collector(), Collector()

        generate_keyword_combinations(platform, services, templates, countries, large, batch_size=500)
        generate_keyword_combinations(platform, services, templates, countries, single, batch_size=1)

        assert len(large.batches) == 1
        assert len(single.batches) == len(single.rows)
        assert [r.model_dump() for r in large.rows] == [r.model_dump() for r in single.rows]

    def test_empty_inputs_write_nothing(self, platform, templates, countries):
        sink = Collector()
        assert generate_keyword_combinations(platform, [], templates, countries, sink) == 0
        assert sink.batches == []

    def test_invalid_batch_size(self, platform, services, templates, countries):
        with pytest.raises(ValueError, match="batch_size must be a positive integer"):
            generate_keyword_combinations(platform, services, templates, countries, Collector(), batch_size=0)

    def test_failing_sink_leaves_earlier_batches_written(self, platform, services, templates, countries):
        written = []

        def sink(batch):
            if written:
                raise RuntimeError("disk full")
            written.append(batch)

        with pytest.raises(RuntimeError, match="disk full"):
            generate_keyword_combinations(platform, services, templates, countries, sink, batch_size=10)

        assert len(written) == 1
        assert len(written[0]) == 10
