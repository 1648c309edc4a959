from __future__ import annotations

import re
from dataclasses import dataclass

_NUMBER_RE = re.compile(r"(\d+(?:\.\d+)?)")
_SUBMIT_WORD = "enter"


@dataclass(frozen=True)
class VoiceCommand:
    value: float | None
    submit: bool


def parse_voice_command(transcript: str) -> VoiceCommand:
    text = (transcript or "").strip().lower()
    match = _NUMBER_RE.search(text)
    value = float(match.group(1)) if match else None
    return VoiceCommand(value=value, submit=_SUBMIT_WORD in text)
