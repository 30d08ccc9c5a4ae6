"""
HR assistant endpoints: free-text questions and CV parsing.
"""

from __future__ import annotations

import json
from typing import IO, Any

from hr_dashboard.infrastructure.http.transport import Transport

ASK_PATH = "/api/ai/ask"
PROCESS_CV_PATH = "/api/ai/process-cv"


def _as_text(answer: Any) -> str:
    if isinstance(answer, str):
        return answer
    if isinstance(answer, dict) and isinstance(answer.get("answer"), str):
        return answer["answer"]
    return json.dumps(answer, ensure_ascii=False)


class AiApi:
    def __init__(self, transport: Transport) -> None:
        self._transport = transport

    def ask(self, question: str) -> str:
        """The backend answers with a plain string; other shapes are coerced to text."""
        return _as_text(self._transport.post(ASK_PATH, {"question": question}))

    def process_cv(self, filename: str, content: bytes | IO[bytes], content_type: str = "application/pdf") -> dict[str, Any]:
        """
        Upload a CV and return the extracted candidate fields (firstName, lastName,
        email, position, department, skills). Non-object answers come back as
        {"answer": <text>}.
        """
        out = self._transport.upload(PROCESS_CV_PATH, files={"file": (filename, content, content_type)})
        return out if isinstance(out, dict) else {"answer": _as_text(out)}
