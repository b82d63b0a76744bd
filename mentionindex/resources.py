"""Lexical resource ("dictionaries") consulted by the mention finders.

The resource is read-only once built and can be shared by every document.
A custom lexicon is a JSON object whose keys match the LexicalResource
fields, for example:

    {
        "language": "en",
        "pronouns": ["he", "she", "it", "they"],
        "male_words": ["he", "him", "his"],
        "plural_words": ["they", "them"],
        "non_words": ["etc", "%"],
        "excluded_ner_tags": ["O", "NUMBER"],
        "demonyms": {"France": ["French"]}
    }

Missing keys fall back to empty collections.
"""

import json
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError, field_validator

from mentionindex.config import Language
from mentionindex.errors import ResourceLoadError
from mentionindex.logging import setup_logging
from mentionindex.mention import Gender, Number


class LexicalResource(BaseModel, frozen=True):
    language: Language = Language.ENGLISH
    pronouns: frozenset[str] = Field(default_factory=frozenset)
    male_words: frozenset[str] = Field(default_factory=frozenset)
    female_words: frozenset[str] = Field(default_factory=frozenset)
    neutral_words: frozenset[str] = Field(default_factory=frozenset)
    plural_words: frozenset[str] = Field(default_factory=frozenset)
    singular_words: frozenset[str] = Field(default_factory=frozenset)
    non_words: frozenset[str] = Field(
        default_factory=frozenset,
        description="Spans that are never mentions.",
    )
    excluded_ner_tags: frozenset[str] = Field(
        default_factory=lambda: frozenset({"O"}),
        description="NER tags that do not start a named entity mention.",
    )
    demonyms: dict[str, tuple[str, ...]] = Field(default_factory=dict)

    @field_validator("language", mode="before")
    @classmethod
    def _parse_language(cls, value):
        return Language.parse(value)

    @classmethod
    def default(cls, language: Language = Language.ENGLISH) -> "LexicalResource":
        """Return the built-in lexicon for a language."""
        return _DEFAULTS[language]

    @classmethod
    def load(cls, path: Path | str) -> "LexicalResource":
        """Load a lexicon from a JSON file.

        Raises:
            ResourceLoadError: If the file is missing, unreadable, or not a valid lexicon.
        """
        logger = setup_logging()
        path = Path(path)
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except OSError as e:
            raise ResourceLoadError(f"Cannot read lexical resource {path}: {e}") from e
        except json.JSONDecodeError as e:
            raise ResourceLoadError(f"Lexical resource {path} is not valid JSON: {e}") from e
        if not isinstance(data, dict):
            raise ResourceLoadError(f"Lexical resource {path} must hold a JSON object")
        try:
            resource = cls.model_validate(data)
        except ValidationError as e:
            raise ResourceLoadError(f"Lexical resource {path} is invalid: {e}") from e
        logger.debug(
            {
                "message": f"Loaded lexical resource from {path}",
                "language": resource.language.value,
                "pronouns": len(resource.pronouns),
                "demonyms": len(resource.demonyms),
            }
        )
        return resource

    def is_pronoun(self, word: str) -> bool:
        return word.lower() in self.pronouns

    def is_non_word(self, text: str) -> bool:
        return text.lower() in self.non_words

    def is_demonym(self, word: str) -> bool:
        return any(word in forms for forms in self.demonyms.values())

    def gender_of(self, word: str) -> Gender:
        key = word.lower()
        if key in self.male_words:
            return Gender.MALE
        if key in self.female_words:
            return Gender.FEMALE
        if key in self.neutral_words:
            return Gender.NEUTRAL
        return Gender.UNKNOWN

    def number_of(self, word: str) -> Number:
        key = word.lower()
        if key in self.plural_words:
            return Number.PLURAL
        if key in self.singular_words:
            return Number.SINGULAR
        return Number.UNKNOWN


_ENGLISH = LexicalResource(
    language=Language.ENGLISH,
    pronouns=frozenset(
        {
            "i", "me", "my", "mine", "myself",
            "you", "your", "yours", "yourself", "yourselves",
            "he", "him", "his", "himself",
            "she", "her", "hers", "herself",
            "it", "its", "itself",
            "we", "us", "our", "ours", "ourselves",
            "they", "them", "their", "theirs", "themselves",
        }
    ),
    male_words=frozenset({"he", "him", "his", "himself", "man", "men", "mr.", "father", "brother", "son", "king"}),
    female_words=frozenset({"she", "her", "hers", "herself", "woman", "women", "mrs.", "ms.", "mother", "sister", "daughter", "queen"}),
    neutral_words=frozenset({"it", "its", "itself"}),
    plural_words=frozenset({"we", "us", "our", "ours", "ourselves", "they", "them", "their", "theirs", "themselves"}),
    singular_words=frozenset(
        {"i", "me", "my", "mine", "myself", "he", "him", "his", "himself", "she", "her", "hers", "herself", "it", "its", "itself"}
    ),
    non_words=frozenset({"mm", "hmm", "ahem", "um", "etc", "%"}),
    excluded_ner_tags=frozenset({"O", "NUMBER", "ORDINAL", "PERCENT", "MONEY", "QUANTITY", "DATE", "TIME", "DURATION", "SET"}),
    demonyms={
        "America": ("American", "Americans"),
        "China": ("Chinese",),
        "France": ("French",),
        "Germany": ("German", "Germans"),
    },
)

_CHINESE = LexicalResource(
    language=Language.CHINESE,
    pronouns=frozenset({"我", "你", "您", "他", "她", "它", "我们", "你们", "他们", "她们", "它们", "自己"}),
    male_words=frozenset({"他", "他们"}),
    female_words=frozenset({"她", "她们"}),
    neutral_words=frozenset({"它", "它们"}),
    plural_words=frozenset({"我们", "你们", "他们", "她们", "它们"}),
    singular_words=frozenset({"我", "你", "您", "他", "她", "它"}),
    non_words=frozenset({"等"}),
    excluded_ner_tags=frozenset({"O", "NUMBER", "ORDINAL", "PERCENT", "MONEY", "DATE", "TIME"}),
    demonyms={"中国": ("中国人",)},
)

_DEFAULTS = {
    Language.ENGLISH: _ENGLISH,
    Language.CHINESE: _CHINESE,
}
