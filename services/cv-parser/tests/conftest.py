"""Shared test fixtures for CV parser tests."""

import sys
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest
from openai.types.chat import ChatCompletion

# Add parent directory to path so we can import the modules
sys.path.insert(0, str(Path(__file__).parent.parent))

from encoding import pdf_to_data_url  # noqa: E402
from openai_client import CompletionClient  # noqa: E402


@pytest.fixture
def pdf_bytes() -> bytes:
    """Minimal PDF-looking payload; content is never parsed locally."""
    return b"%PDF-1.4\n1 0 obj\n<< /Type /Catalog >>\nendobj\ntrailer\n<< /Root 1 0 R >>\n%%EOF\n"


@pytest.fixture
def document_data(pdf_bytes: bytes) -> str:
    return pdf_to_data_url(pdf_bytes)


@pytest.fixture
def make_chat_completion():
    """Build a real ChatCompletion object with the given content and usage."""

    def _make(content: str | None, prompt_tokens: int | None = 100, completion_tokens: int | None = 50):
        data = {
            "id": "chatcmpl-test",
            "object": "chat.completion",
            "created": 1700000000,
            "model": "gpt-4.1-mini",
            "choices": [
                {
                    "index": 0,
                    "finish_reason": "stop",
                    "message": {"role": "assistant", "content": content},
                }
            ],
        }
        if prompt_tokens is not None:
            data["usage"] = {
                "prompt_tokens": prompt_tokens,
                "completion_tokens": completion_tokens,
                "total_tokens": prompt_tokens + (completion_tokens or 0),
            }
        return ChatCompletion.model_validate(data)

    return _make


@pytest.fixture
def mock_openai() -> MagicMock:
    """AsyncOpenAI stand-in with an awaitable chat.completions.create."""
    client = MagicMock()
    client.chat.completions.create = AsyncMock()
    client.close = AsyncMock()
    return client


@pytest.fixture
def completion_client(mock_openai: MagicMock) -> CompletionClient:
    return CompletionClient(
        api_key="test-key",
        timeout=5,
        connect_timeout=2,
        retry_attempts=1,
        retry_delay=0.01,
        retry_backoff=1.0,
        client=mock_openai,
    )


@pytest.fixture
def simple_schema() -> dict:
    return {
        "type": "object",
        "properties": {"name": {"type": "string"}},
        "required": ["name"],
        "additionalProperties": False,
    }


@pytest.fixture
def identity_part() -> dict:
    """Parsed record returned for the first (identity/education) partial schema."""
    return {
        "ResumeParserData": {
            "ResumeFileName": "cv.pdf",
            "Name": {"FullName": "Max Mustermann", "FirstName": "Max", "LastName": "Mustermann"},
            "Qualification": "MSc Computer Science",
            "Certification": "base certification",
            "SkillKeywords": "base skills",
        },
        "ResumeQuality": None,
    }


@pytest.fixture
def skills_part() -> dict:
    """Parsed record returned for the certification/skill partial schema."""
    return {
        "ResumeParserData": {
            "Certification": "AWS Certified Solutions Architect",
            "SegregatedCertification": [{"CertificationTitle": "AWS Solutions Architect"}],
            "SkillBlock": "Python, Go, Kubernetes",
            "SkillKeywords": "Python, Go, Kubernetes",
            "SegregatedSkill": [{"Skill": "Python", "ExperienceInMonths": 60}],
        }
    }


@pytest.fixture
def experience_part() -> dict:
    """Parsed record returned for the experience/summary partial schema."""
    return {
        "ResumeParserData": {
            "Experience": "ACME GmbH, Backend Engineer, 2019-2024",
            "SegregatedExperience": [{"Employer": {"EmployerName": "ACME GmbH"}}],
            "CurrentEmployer": "ACME GmbH",
            "Summary": "Backend engineer with five years of experience.",
            "CurrentLocation": [{"City": "Berlin", "Country": "Germany"}],
            "Hobbies": "Climbing",
        }
    }
