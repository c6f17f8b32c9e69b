"""Tests for the resume JSON schemas and partition validation."""

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from errors import ConfigurationError
from resume_schema import (
    CERTIFICATION_SKILL_FIELDS,
    COMPLETE_SCHEMA,
    EXPERIENCE_SUMMARY_FIELDS,
    PARTIAL_SCHEMAS,
    SECTION,
    PartialSchema,
    ResumeParserData,
    declared_fields,
    validate_partitions,
)


def _walk_objects(node):
    if isinstance(node, dict):
        if node.get("type") == "object":
            yield node
        for value in node.values():
            yield from _walk_objects(value)
    elif isinstance(node, list):
        for value in node:
            yield from _walk_objects(value)


class TestStrictSchemas:
    @pytest.mark.parametrize(
        "schema",
        [COMPLETE_SCHEMA] + [p.json_schema for p in PARTIAL_SCHEMAS],
        ids=["complete"] + [p.name for p in PARTIAL_SCHEMAS],
    )
    def test_objects_forbid_extras_and_require_all(self, schema: dict):
        objects = list(_walk_objects(schema))
        assert objects
        for obj in objects:
            assert obj.get("additionalProperties") is False
            assert set(obj.get("required", [])) == set(obj.get("properties", {}))

    def test_complete_schema_top_level(self):
        assert declared_fields(COMPLETE_SCHEMA) == {"ResumeParserData", "ResumeQuality"}

    def test_complete_section_matches_model(self):
        assert declared_fields(COMPLETE_SCHEMA, SECTION) == set(ResumeParserData.model_fields)


class TestPartialSchemas:
    def test_three_partials(self):
        assert [p.name for p in PARTIAL_SCHEMAS] == ["part-1", "part-2", "part-3"]

    def test_fields_derived_from_schema(self):
        _, skills, experience = PARTIAL_SCHEMAS
        assert skills.fields == set(CERTIFICATION_SKILL_FIELDS)
        assert experience.fields == set(EXPERIENCE_SUMMARY_FIELDS)

    def test_partials_are_disjoint(self):
        seen: set[str] = set()
        for partial in PARTIAL_SCHEMAS:
            assert not (seen & partial.fields)
            seen |= partial.fields

    def test_union_covers_composite(self):
        union = frozenset().union(*(p.fields for p in PARTIAL_SCHEMAS))
        assert union == declared_fields(COMPLETE_SCHEMA, SECTION)

    def test_base_partial_carries_resume_quality(self):
        assert "ResumeQuality" in declared_fields(PARTIAL_SCHEMAS[0].json_schema)
        assert "ResumeQuality" not in declared_fields(PARTIAL_SCHEMAS[1].json_schema)

    def test_identity_partial_excludes_skills(self):
        base = PARTIAL_SCHEMAS[0].fields
        assert "Name" in base
        assert "SegregatedQualification" in base
        assert "SkillBlock" not in base
        assert "Experience" not in base


def _flat(name: str, *fields: str) -> PartialSchema:
    return PartialSchema(name, {"type": "object", "properties": {f: {"type": "string"} for f in fields}})


class TestValidatePartitions:
    composite = {"type": "object", "properties": {"A": {}, "B": {}, "C": {}}}

    def test_valid_partition(self):
        validate_partitions(self.composite, [_flat("p1", "A"), _flat("p2", "B", "C")], section=None)

    def test_overlap_rejected(self):
        with pytest.raises(ConfigurationError, match="claimed by both"):
            validate_partitions(
                self.composite, [_flat("p1", "A", "B"), _flat("p2", "B", "C")], section=None
            )

    def test_missing_field_rejected(self):
        with pytest.raises(ConfigurationError, match="not covered"):
            validate_partitions(self.composite, [_flat("p1", "A"), _flat("p2", "B")], section=None)

    def test_unknown_field_rejected(self):
        with pytest.raises(ConfigurationError, match="unknown fields"):
            validate_partitions(
                self.composite, [_flat("p1", "A", "B"), _flat("p2", "C", "D")], section=None
            )

    def test_empty_partitions_rejected(self):
        with pytest.raises(ConfigurationError):
            validate_partitions(self.composite, [], section=None)

    def test_base_must_carry_outer_fields(self):
        reordered = [PARTIAL_SCHEMAS[1], PARTIAL_SCHEMAS[0], PARTIAL_SCHEMAS[2]]
        with pytest.raises(ConfigurationError, match="ResumeQuality"):
            validate_partitions(COMPLETE_SCHEMA, reordered)
