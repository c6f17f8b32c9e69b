"""Extraction prompt and message construction for resume parsing."""

from typing import Any

ATTACHMENT_FILENAME = "cv.pdf"

EXTRACTION_PROMPT = (
    "You are a resume (CV) parsing assistant. Analyze the provided CV document and "
    "extract the information into a JSON object that strictly follows the provided "
    "JSON Schema. Do not include any additional fields beyond the schema. Use your "
    "best judgement to fill fields, and use empty strings or empty arrays where data "
    "is not present."
)


def build_messages(document_data: str, prompt: str = EXTRACTION_PROMPT) -> list[dict[str, Any]]:
    """Build a single user message carrying the PDF attachment and the instruction."""
    return [
        {
            "role": "user",
            "content": [
                {
                    "type": "file",
                    "file": {"filename": ATTACHMENT_FILENAME, "file_data": document_data},
                },
                {"type": "text", "text": prompt},
            ],
        }
    ]
