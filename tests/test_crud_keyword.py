"""Unit tests for keyword CRUD operations."""

import pytest
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from content_engine.crud import keyword as crud_keyword
from content_engine.models.keyword import KeywordCombination, KeywordService
from content_engine.schemas.keyword import (
    KeywordCombinationCreate,
    KeywordNaturalPhraseCreate,
    KeywordServiceCreate,
    KeywordTemplateCreate,
    PlatformCreate,
)


@pytest.fixture()
def platforms(db: Session):
    return crud_keyword.upsert_platforms(db, [
        PlatformCreate(id=1, name="SOS-Expat", slug="sos-expat"),
        PlatformCreate(id=2, name="Ulixai", slug="ulixai"),
    ])


def _combination(**overrides) -> KeywordCombinationCreate:
    data = dict(
        platform_id=1, service_id=1, template_id=1, country_id=74, language_code="fr",
        keyword_text="avocat France", keyword_normalized="avocat france",
        intent_type="informational",
    )
    data.update(overrides)
    return KeywordCombinationCreate(**data)


class TestPlatformCRUD:
    """Test cases for platform upserts."""

    def test_upsert_platforms(self, db: Session, platforms):
        assert [p.name for p in platforms] == ["SOS-Expat", "Ulixai"]

    def test_upsert_renames_existing_platform(self, db: Session, platforms):
        result = crud_keyword.upsert_platforms(db, [PlatformCreate(id=2, name="Ulixai.com", slug="ulixai")])
        assert [p.name for p in result] == ["SOS-Expat", "Ulixai.com"]


class TestServiceCRUD:
    """Test cases for keyword service upserts."""

    def test_upsert_is_idempotent(self, db: Session, platforms):
        service = KeywordServiceCreate(
            platform_id=1, service_key="lawyer", translations={"fr": "avocat", "en": "lawyer"}
        )

        crud_keyword.upsert_services(db, [service])
        crud_keyword.upsert_services(db, [service])

        assert db.scalar(select(func.count()).select_from(KeywordService)) == 1

    def test_upsert_refreshes_translations(self, db: Session, platforms):
        crud_keyword.upsert_services(db, [KeywordServiceCreate(
            platform_id=1, service_key="lawyer", translations={"fr": "avocat"}
        )])
        crud_keyword.upsert_services(db, [KeywordServiceCreate(
            platform_id=1, service_key="lawyer", translations={"fr": "avocat", "de": "Anwalt"}, priority=90
        )])

        services = crud_keyword.get_services_by_platform(db, 1)

        assert len(services) == 1
        assert services[0].translations == {"fr": "avocat", "de": "Anwalt"}
        assert services[0].priority == 90

    def test_same_key_on_two_platforms(self, db: Session, platforms):
        written = crud_keyword.upsert_services(db, [
            KeywordServiceCreate(platform_id=1, service_key="lawyer", translations={"fr": "avocat"}),
            KeywordServiceCreate(platform_id=2, service_key="lawyer", translations={"fr": "avocat"}),
            KeywordServiceCreate(platform_id=2, service_key="lawyer", translations={"fr": "juriste"}),
        ])

        assert written == 2
        assert len(crud_keyword.get_services_by_platform(db, 1)) == 1
        assert crud_keyword.get_services_by_platform(db, 2)[0].translations == {"fr": "juriste"}

    def test_unsupported_language_rejected(self):
        with pytest.raises(ValueError, match="Unsupported language codes: it"):
            KeywordServiceCreate(platform_id=1, service_key="x", translations={"it": "avvocato"})


class TestTemplateCRUD:
    """Test cases for keyword template upserts."""

    def test_only_active_templates_of_platform(self, db: Session, platforms):
        crud_keyword.upsert_keyword_templates(db, [
            KeywordTemplateCreate(platform_id=1, template_key="1_a", pattern="{service} {country}"),
            KeywordTemplateCreate(platform_id=1, template_key="1_b", pattern="{service}", is_active=False),
            KeywordTemplateCreate(platform_id=2, template_key="2_a", pattern="{service} {country}"),
        ])

        templates = crud_keyword.get_active_templates_by_platform(db, 1)

        assert [t.template_key for t in templates] == ["1_a"]

    def test_upsert_updates_pattern(self, db: Session, platforms):
        crud_keyword.upsert_keyword_templates(db, [
            KeywordTemplateCreate(platform_id=1, template_key="1_a", pattern="{service}"),
        ])
        crud_keyword.upsert_keyword_templates(db, [
            KeywordTemplateCreate(
                platform_id=1, template_key="1_a", pattern="{service} {country}", intent_type="transactional"
            ),
        ])

        [template] = crud_keyword.get_active_templates_by_platform(db, 1)
        assert template.pattern == "{service} {country}"
        assert template.intent_type == "transactional"

    def test_natural_phrases_upsert_is_idempotent(self, db: Session):
        phrase = KeywordNaturalPhraseCreate(
            language_code="en", phrase_type="opening", template="Looking for {keyword}?"
        )

        assert crud_keyword.upsert_natural_phrases(db, [phrase, phrase]) == 1
        crud_keyword.upsert_natural_phrases(db, [phrase])

        assert crud_keyword.get_keyword_statistics(db).natural_phrases == 1


class TestCombinationCRUD:
    """Test cases for combination writes and statistics."""

    def test_bulk_insert_and_statistics(self, db: Session, platforms):
        crud_keyword.bulk_insert_combinations(db, [_combination(), _combination(language_code="en")])
        sink = crud_keyword.combination_sink(db)
        sink([_combination(platform_id=2)])

        stats = crud_keyword.get_keyword_statistics(db)

        assert stats.combinations == 3
        assert [(p.platform, p.count) for p in stats.per_platform] == [("SOS-Expat", 2), ("Ulixai", 1)]

    def test_inserted_defaults(self, db: Session, platforms):
        crud_keyword.bulk_insert_combinations(db, [_combination()])

        row = db.scalar(select(KeywordCombination))

        assert row.search_volume == 0
        assert row.competition == 0.50
        assert row.usage_count == 0
        assert row.created_at is not None

    def test_delete_combinations(self, db: Session, platforms):
        crud_keyword.bulk_insert_combinations(db, [_combination(), _combination(platform_id=2)])

        assert crud_keyword.delete_combinations(db, platform_id=2) == 1
        assert crud_keyword.delete_combinations(db) == 1
        assert crud_keyword.get_keyword_statistics(db).combinations == 0

    def test_empty_batch_is_noop(self, db: Session):
        crud_keyword.bulk_insert_combinations(db, [])
        assert crud_keyword.get_keyword_statistics(db).combinations == 0

    def test_braces_rejected(self):
        with pytest.raises(ValueError, match="Unresolved placeholder"):
            _combination(keyword_text="avocat {country}")
