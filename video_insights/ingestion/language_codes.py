"""Language table mapping classifier codes to ISO 639-1.

Covers every language the trigram classifier profiles. Codes are accepted
as ISO 639-1, ISO 639-3 (including the macrolanguage members some
classifiers report, e.g. ``cmn`` for Mandarin) or the classifier's own
region-tagged codes such as ``zh-cn``.
"""

from __future__ import annotations

from typing import NamedTuple


class Language(NamedTuple):
    iso639_1: str
    iso639_3: str
    name: str


LANGUAGES: tuple[Language, ...] = (
    Language("af", "afr", "Afrikaans"),
    Language("ar", "ara", "Arabic"),
    Language("bg", "bul", "Bulgarian"),
    Language("bn", "ben", "Bengali"),
    Language("ca", "cat", "Catalan"),
    Language("cs", "ces", "Czech"),
    Language("cy", "cym", "Welsh"),
    Language("da", "dan", "Danish"),
    Language("de", "deu", "German"),
    Language("el", "ell", "Greek"),
    Language("en", "eng", "English"),
    Language("es", "spa", "Spanish"),
    Language("et", "est", "Estonian"),
    Language("fa", "fas", "Persian"),
    Language("fi", "fin", "Finnish"),
    Language("fr", "fra", "French"),
    Language("gu", "guj", "Gujarati"),
    Language("he", "heb", "Hebrew"),
    Language("hi", "hin", "Hindi"),
    Language("hr", "hrv", "Croatian"),
    Language("hu", "hun", "Hungarian"),
    Language("id", "ind", "Indonesian"),
    Language("it", "ita", "Italian"),
    Language("ja", "jpn", "Japanese"),
    Language("kn", "kan", "Kannada"),
    Language("ko", "kor", "Korean"),
    Language("lt", "lit", "Lithuanian"),
    Language("lv", "lav", "Latvian"),
    Language("mk", "mkd", "Macedonian"),
    Language("ml", "mal", "Malayalam"),
    Language("mr", "mar", "Marathi"),
    Language("ne", "nep", "Nepali"),
    Language("nl", "nld", "Dutch"),
    Language("no", "nor", "Norwegian"),
    Language("pa", "pan", "Punjabi"),
    Language("pl", "pol", "Polish"),
    Language("pt", "por", "Portuguese"),
    Language("ro", "ron", "Romanian"),
    Language("ru", "rus", "Russian"),
    Language("sk", "slk", "Slovak"),
    Language("sl", "slv", "Slovenian"),
    Language("so", "som", "Somali"),
    Language("sq", "sqi", "Albanian"),
    Language("sv", "swe", "Swedish"),
    Language("sw", "swa", "Swahili"),
    Language("ta", "tam", "Tamil"),
    Language("te", "tel", "Telugu"),
    Language("th", "tha", "Thai"),
    Language("tl", "tgl", "Tagalog"),
    Language("tr", "tur", "Turkish"),
    Language("uk", "ukr", "Ukrainian"),
    Language("ur", "urd", "Urdu"),
    Language("vi", "vie", "Vietnamese"),
    Language("zh", "zho", "Chinese"),
)

# Individual-language codes that roll up into a macrolanguage entry above
_ALIASES: dict[str, str] = {
    "arb": "ar",
    "pes": "fa",
    "prs": "fa",
    "npi": "ne",
    "nob": "no",
    "nno": "no",
    "swh": "sw",
    "als": "sq",
    "cmn": "zh",
    "zh-cn": "zh",
    "zh-tw": "zh",
    "fil": "tl",
}

_BY_CODE: dict[str, str] = {
    **{lang.iso639_1: lang.iso639_1 for lang in LANGUAGES},
    **{lang.iso639_3: lang.iso639_1 for lang in LANGUAGES},
    **_ALIASES,
}


def to_iso639_1(code: str) -> str | None:
    """Return the ISO 639-1 code for *code*, or None when it is unknown."""
    return _BY_CODE.get(code.strip().lower())
