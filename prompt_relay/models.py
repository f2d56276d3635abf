"""Request and response models for the Gemini generateContent API."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any

JSON_HEADERS = {"content-type": "application/json"}


@dataclass
class Part:
    text: str

    def to_dict(self) -> dict[str, Any]:
        return {"text": self.text}


@dataclass
class Turn:
    parts: list[Part]
    role: str = "user"

    def to_dict(self) -> dict[str, Any]:
        return {"role": self.role, "parts": [p.to_dict() for p in self.parts]}


@dataclass
class UpstreamPayload:
    contents: list[Turn] = field(default_factory=list)

    @classmethod
    def from_prompt(cls, prompt: str) -> UpstreamPayload:
        """A single user turn carrying the prompt as its only part."""
        return cls(contents=[Turn(parts=[Part(text=prompt)])])

    def to_dict(self) -> dict[str, Any]:
        return {"contents": [t.to_dict() for t in self.contents]}


@dataclass
class CandidateContent:
    parts: list[dict[str, Any]] = field(default_factory=list)


@dataclass
class Candidate:
    content: CandidateContent | None = None
    finish_reason: str | None = None


@dataclass
class GenerateContentResponse:
    """Parsed success body. Anything not matching the expected shape is dropped."""

    candidates: list[Candidate] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> GenerateContentResponse:
        if not isinstance(data, dict):
            return cls()
        raw_candidates = data.get("candidates")
        if not isinstance(raw_candidates, list):
            return cls()

        candidates: list[Candidate] = []
        for raw in raw_candidates:
            if not isinstance(raw, dict):
                candidates.append(Candidate())
                continue
            content = None
            raw_content = raw.get("content")
            if isinstance(raw_content, dict):
                raw_parts = raw_content.get("parts")
                # non-dict parts keep their slot so indexes stay aligned
                parts = [p if isinstance(p, dict) else {} for p in raw_parts] if isinstance(raw_parts, list) else []
                content = CandidateContent(parts=parts)
            finish = raw.get("finishReason")
            candidates.append(Candidate(
                content=content,
                finish_reason=finish if isinstance(finish, str) else None,
            ))
        return cls(candidates=candidates)

    @property
    def first_text(self) -> str | None:
        if not self.candidates:
            return None
        content = self.candidates[0].content
        if content is None or not content.parts:
            return None
        text = content.parts[0].get("text")
        return text if isinstance(text, str) else None


def extract_text(data: Any) -> str:
    """First candidate's first part's text, or "" when there is none."""
    return GenerateContentResponse.from_dict(data).first_text or ""


@dataclass
class RelayResponse:
    status_code: int
    body: dict[str, Any]

    def to_event(self) -> dict[str, Any]:
        return {
            "statusCode": self.status_code,
            "headers": dict(JSON_HEADERS),
            "body": json.dumps(self.body),
        }
