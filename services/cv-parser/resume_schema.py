"""Resume record models and the JSON schemas used for structured output.

The composite record follows the RChilli resume-parser response layout.
Strict structured output requires every property to be present and no
extra properties, so models forbid extras and declare no defaults.

The composite schema is also split into three partial schemas over disjoint
subsets of ``ResumeParserData``. Smaller schemas are filled more reliably by
the model; the extraction orchestrator merges the partial results back
together using the field sets declared by each partial schema.
"""

from dataclasses import dataclass, field
from typing import Any, Sequence

from pydantic import BaseModel, ConfigDict, Field, create_model

from errors import ConfigurationError

SECTION = "ResumeParserData"

_STRICT = ConfigDict(extra="forbid")


class _Strict(BaseModel):
    model_config = _STRICT


# ============================================================================
# Shared building blocks
# ============================================================================

class CountryCode(_Strict):
    IsoAlpha2: str
    IsoAlpha3: str
    UNCode: str


class LanguageInfo(_Strict):
    Language: str
    LanguageCode: str


class ResumeCountry(_Strict):
    Country: str
    Evidence: str
    CountryCode: CountryCode


class Location(_Strict):
    City: str | None
    State: str | None
    StateIsoCode: str | None
    Country: str
    CountryCode: CountryCode


class JobLocation(_Strict):
    City: str | None
    State: str | None
    StateIsoCode: str | None
    Country: str | None
    CountryCode: CountryCode


class Salary(_Strict):
    Amount: str | None
    Symbol: str | None
    Currency: str | None
    Unit: str | None
    Text: str


# ============================================================================
# Identity and contact
# ============================================================================

class CandidateName(_Strict):
    FullName: str
    TitleName: str | None
    FirstName: str
    MiddleName: str | None
    LastName: str
    FormattedName: str
    ConfidenceScore: float


class PassportDetail(_Strict):
    PassportNumber: str | None
    DateOfExpiry: str | None
    DateOfIssue: str | None
    PlaceOfIssue: str | None


class EmailAddress(_Strict):
    EmailAddress: str
    ConfidenceScore: float


class PhoneNumber(_Strict):
    Number: str
    ISDCode: str | None
    OriginalNumber: str
    FormattedNumber: str
    Type: str
    ConfidenceScore: float


class WebSite(_Strict):
    Type: str
    Url: str


class Address(_Strict):
    Street: str | None
    City: str | None
    State: str | None
    StateIsoCode: str | None
    Country: str
    CountryCode: CountryCode
    ZipCode: str | None
    FormattedAddress: str
    Type: str
    ConfidenceScore: float


# ============================================================================
# Education
# ============================================================================

class Institution(_Strict):
    Name: str
    Type: str
    ConfidenceScore: float
    Location: Location | None


class SubInstitution(_Strict):
    Name: str
    Type: str | None
    ConfidenceScore: float
    Location: Location


class Degree(_Strict):
    DegreeName: str
    NormalizeDegree: str | None
    Specialization: list[str] | None
    ConfidenceScore: float


class Aggregate(_Strict):
    Value: str
    MeasureType: str


class QualificationEntry(_Strict):
    Institution: Institution
    SubInstitution: SubInstitution | None
    Degree: Degree | None
    FormattedDegreePeriod: str | None
    StartDate: str | None
    EndDate: str | None
    Aggregate: Aggregate


# ============================================================================
# Certifications and skills
# ============================================================================

class CertificationEntry(_Strict):
    CertificationTitle: str
    Authority: str | None
    CertificationCode: str | None
    IsExpiry: str | None
    StartDate: str | None
    EndDate: str | None
    CertificationUrl: str | None


class Skill(_Strict):
    Type: str
    Skill: str
    Ontology: str | None
    Alias: str | None
    FormattedName: str
    Evidence: str
    LastUsed: str
    ExperienceInMonths: int


# ============================================================================
# Experience
# ============================================================================

class Employer(_Strict):
    EmployerName: str
    FormattedName: str
    ConfidenceScore: float


class RelatedSkill(_Strict):
    Skill: str
    ProficiencyLevel: str


class ExperienceJobProfile(_Strict):
    Title: str
    FormattedName: str
    Alias: str | None
    RelatedSkills: list[RelatedSkill] | None
    ConfidenceScore: float


class Project(_Strict):
    UsedSkills: str | None
    ProjectName: str | None
    TeamSize: str | None


class ExperienceEntry(_Strict):
    Employer: Employer
    JobProfile: ExperienceJobProfile
    Location: JobLocation
    JobPeriod: str | None
    FormattedJobPeriod: str | None
    StartDate: str | None
    EndDate: str | None
    IsCurrentEmployer: str | None
    JobDescription: str | None
    Projects: list[Project] | None


class WorkedPeriod(_Strict):
    TotalExperienceInMonths: str
    TotalExperienceInYear: str
    TotalExperienceRange: str


# ============================================================================
# Publications, achievements and misc
# ============================================================================

class Publication(_Strict):
    PublicationTitle: str
    Publisher: str | None
    PublicationNumber: str | None
    PublicationUrl: str | None
    Authors: str | None
    Description: str


class Achievement(_Strict):
    AwardTitle: str
    Issuer: str | None
    AssociatedWith: str | None
    IssuingDate: str | None
    Description: str | None


class EmailInfo(_Strict):
    EmailTo: str | None
    EmailBody: str | None
    EmailReplyTo: str | None
    EmailSignature: str | None
    EmailFrom: str | None
    EmailSubject: str | None
    EmailCC: str | None


class Recommendation(_Strict):
    PersonName: str
    CompanyName: str
    Relation: str | None
    PositionTitle: str
    Description: str | None


class CandidateImage(_Strict):
    CandidateImageData: str
    CandidateImageFormat: str


class TemplateOutput(_Strict):
    TemplateOutputFileName: str | None
    TemplateOutputData: str | None


class ApiInfo(_Strict):
    Metered: str | None
    CreditLeft: str | None
    AccountExpiryDate: str | None
    BuildVersion: str | None


class SectionIdentifier(_Strict):
    SectionType: str
    Id: str


class QualityFinding(_Strict):
    QualityCode: str | None
    SectionIdentifiers: list[SectionIdentifier] | None
    Message: str | None


class ResumeQuality(_Strict):
    Level: str | None
    Findings: list[QualityFinding] | None


# ============================================================================
# Composite record
# ============================================================================

class ResumeParserData(_Strict):
    ResumeFileName: str | None
    ResumeLanguage: LanguageInfo
    ParsingDate: str | None
    ResumeCountry: ResumeCountry
    Name: CandidateName
    DateOfBirth: str | None
    Gender: str
    FatherName: str | None
    MotherName: str | None
    MaritalStatus: str | None
    Nationality: str
    LanguageKnown: list[LanguageInfo] | None
    UniqueID: str | None
    LicenseNo: str | None
    PassportDetail: PassportDetail | None
    PanNo: str | None
    VisaStatus: str | None
    Email: list[EmailAddress] | None
    PhoneNumber: list[PhoneNumber] | None
    WebSite: list[WebSite] | None
    Address: list[Address] | None
    Category: str
    SubCategory: str
    CurrentSalary: Salary | None
    ExpectedSalary: Salary | None
    Qualification: str | None = Field(description="Education section as written in the CV")
    SegregatedQualification: list[QualificationEntry] | None
    Certification: str | None = Field(description="Certification section as written in the CV")
    SegregatedCertification: list[CertificationEntry] | None
    SkillBlock: str = Field(description="Skills section as written in the CV")
    SkillKeywords: str = Field(description="Comma-separated list of skills")
    SegregatedSkill: list[Skill]
    Experience: str = Field(description="Work experience section as written in the CV")
    SegregatedExperience: list[ExperienceEntry]
    CurrentEmployer: str | None
    JobProfile: str | None
    WorkedPeriod: WorkedPeriod | None
    GapPeriod: str | None
    AverageStay: str | None
    LongestStay: str | None
    Summary: str
    ExecutiveSummary: str
    ManagementSummary: str
    Coverletter: str | None
    Publication: str | None
    SegregatedPublication: list[Publication] | None
    CurrentLocation: list[Location] | None
    PreferredLocation: list[Location] | None
    Availability: str | None
    Hobbies: str | None
    Objectives: str | None
    Achievements: str | None
    SegregatedAchievement: list[Achievement] | None
    References: str | None
    CustomFields: str | None
    EmailInfo: EmailInfo | None
    Recommendations: list[Recommendation] | None
    DetailResume: str | None
    HtmlResume: str | None
    CandidateImage: CandidateImage | None
    TemplateOutput: TemplateOutput | None
    ApiInfo: ApiInfo | None


class Resume(_Strict):
    """A JSON schema for the RChilli Resume Parser API response."""

    ResumeParserData: ResumeParserData
    ResumeQuality: list[ResumeQuality] | None


# ============================================================================
# Partitioning
# ============================================================================

CERTIFICATION_SKILL_FIELDS = (
    "Certification",
    "SegregatedCertification",
    "SkillBlock",
    "SkillKeywords",
    "SegregatedSkill",
)

EXPERIENCE_SUMMARY_FIELDS = (
    "Experience",
    "SegregatedExperience",
    "CurrentEmployer",
    "JobProfile",
    "WorkedPeriod",
    "GapPeriod",
    "AverageStay",
    "LongestStay",
    "Summary",
    "ExecutiveSummary",
    "ManagementSummary",
    "Coverletter",
    "Publication",
    "SegregatedPublication",
    "CurrentLocation",
    "PreferredLocation",
    "Availability",
    "Hobbies",
    "Objectives",
    "Achievements",
    "SegregatedAchievement",
)

IDENTITY_EDUCATION_FIELDS = tuple(
    name
    for name in ResumeParserData.model_fields
    if name not in CERTIFICATION_SKILL_FIELDS and name not in EXPERIENCE_SUMMARY_FIELDS
)


def _resolve(root: dict[str, Any], node: dict[str, Any]) -> dict[str, Any]:
    ref = node.get("$ref")
    if ref is None:
        return node
    return root["$defs"][ref.rsplit("/", 1)[-1]]


def declared_fields(json_schema: dict[str, Any], section: str | None = None) -> frozenset[str]:
    """Return the property names a schema declares, at top level or inside ``section``."""
    node = json_schema
    if section is not None:
        node = _resolve(json_schema, json_schema["properties"][section])
    return frozenset(node.get("properties", {}))


@dataclass(frozen=True)
class PartialSchema:
    """One schema covering a disjoint subset of the composite record's fields."""

    name: str
    json_schema: dict[str, Any]
    section: str | None = None
    fields: frozenset[str] = field(init=False)

    def __post_init__(self):
        object.__setattr__(self, "fields", declared_fields(self.json_schema, self.section))


def validate_partitions(
    composite_schema: dict[str, Any],
    partials: Sequence[PartialSchema],
    section: str | None = SECTION,
) -> None:
    """Check partial schemas are pairwise disjoint and together cover the composite.

    Fields outside ``section`` are carried by the first (base) partial only.
    Raises ConfigurationError on any violation.
    """
    if not partials:
        raise ConfigurationError("At least one partial schema is required")

    claimed: dict[str, str] = {}
    for partial in partials:
        for name in partial.fields:
            if name in claimed:
                raise ConfigurationError(
                    f"Field {name!r} is claimed by both {claimed[name]} and {partial.name}"
                )
            claimed[name] = partial.name

    expected = declared_fields(composite_schema, section)
    missing = expected - claimed.keys()
    if missing:
        raise ConfigurationError(f"Fields not covered by any partial schema: {sorted(missing)}")
    unknown = claimed.keys() - expected
    if unknown:
        raise ConfigurationError(f"Partial schemas declare unknown fields: {sorted(unknown)}")

    if section is not None:
        outer = declared_fields(composite_schema) - {section}
        base_outer = declared_fields(partials[0].json_schema)
        if not outer <= base_outer:
            raise ConfigurationError(
                f"Base partial schema {partials[0].name} is missing top-level fields: "
                f"{sorted(outer - base_outer)}"
            )


def _partial_model(name: str, fields: Sequence[str], with_quality: bool = False) -> type[BaseModel]:
    section_fields: dict[str, Any] = {}
    for field_name in fields:
        info = ResumeParserData.model_fields[field_name]
        section_fields[field_name] = (info.annotation, Field(description=info.description))
    section_model = create_model(f"{SECTION}{name}", __config__=_STRICT, **section_fields)

    outer: dict[str, Any] = {SECTION: (section_model, ...)}
    if with_quality:
        outer["ResumeQuality"] = (list[ResumeQuality] | None, ...)
    return create_model(f"Resume{name}", __config__=_STRICT, **outer)


COMPLETE_SCHEMA: dict[str, Any] = Resume.model_json_schema()

PARTIAL_SCHEMAS: tuple[PartialSchema, ...] = (
    PartialSchema(
        "part-1",
        _partial_model("Part1", IDENTITY_EDUCATION_FIELDS, with_quality=True).model_json_schema(),
        SECTION,
    ),
    PartialSchema(
        "part-2",
        _partial_model("Part2", CERTIFICATION_SKILL_FIELDS).model_json_schema(),
        SECTION,
    ),
    PartialSchema(
        "part-3",
        _partial_model("Part3", EXPERIENCE_SUMMARY_FIELDS).model_json_schema(),
        SECTION,
    ),
)

validate_partitions(COMPLETE_SCHEMA, PARTIAL_SCHEMAS)
