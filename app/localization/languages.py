# app/localization/languages.py
"""
Language / Speaker Registry

Static mapping of language codes to display names and synthesized voices.
Speech recognition accepts every registered language; speech synthesis only
the ones with at least one voice.
"""
from dataclasses import dataclass
from typing import Dict, Optional, Tuple


@dataclass(frozen=True)
class LanguageEntry:
    code: str
    display_name: str
    voice_ids: Tuple[str, ...] = ()

    @property
    def default_voice(self) -> Optional[str]:
        return self.voice_ids[0] if self.voice_ids else None

    @property
    def supports_tts(self) -> bool:
        return bool(self.voice_ids)


DEFAULT_LANGUAGE = "tw"

# Language the narrative is composed in
SOURCE_LANGUAGE = "en"

_REGISTRY: Dict[str, LanguageEntry] = {
    entry.code: entry
    for entry in (
        LanguageEntry(
            "tw",
            "Twi",
            (
                "twi_speaker_4",
                "twi_speaker_5",
                "twi_speaker_6",
                "twi_speaker_7",
                "twi_speaker_8",
                "twi_speaker_9",
            ),
        ),
        LanguageEntry("gaa", "Ga"),
        LanguageEntry("dag", "Dagbani"),
        LanguageEntry("yo", "Yoruba"),
        LanguageEntry("ee", "Ewe", ("ewe_speaker_3", "ewe_speaker_4")),
        LanguageEntry("ki", "Kikuyu", ("kikuyu_speaker_1", "kikuyu_speaker_5")),
        LanguageEntry("ha", "Hausa"),
    )
}


def get_language(code: Optional[str]) -> Optional[LanguageEntry]:
    if not code:
        return None
    return _REGISTRY.get(code)


def is_supported(code: Optional[str]) -> bool:
    return get_language(code) is not None


def supported_languages() -> Dict[str, str]:
    """code -> display name, for every recognised language"""
    return {code: entry.display_name for code, entry in _REGISTRY.items()}


def tts_languages() -> Dict[str, str]:
    """code -> display name, only languages with a synthesized voice"""
    return {code: entry.display_name for code, entry in _REGISTRY.items() if entry.supports_tts}


def voices_for(code: str) -> Tuple[str, ...]:
    entry = get_language(code)
    return entry.voice_ids if entry else ()


def default_speaker(code: str) -> Optional[str]:
    entry = get_language(code)
    return entry.default_voice if entry else None
