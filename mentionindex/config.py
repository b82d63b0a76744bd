"""Configuration for the mention annotator.

Options can be given three ways:

- directly, as a `MentionConfig` instance
- as a string-keyed properties mapping (`MentionConfig.from_properties`), using
  the keys below
- from a TOML file with a `[coref]` table (`load_config`)

Property keys:

    coref.md.type               dependency | hybrid | rule (default rule)
    coref.conll                 true | false
    coref.input.type            raw | conll (default raw)
    coref.language              en | zh (default en)
    coref.specialCaseNewswire   true | false
    removeNestedMentions        true | false
    coref.dictionaries          path to a JSON lexicon

The TOML file is looked up in order:
  1. The explicit path passed to load_config()
  2. Path in MENTIONINDEX_CONFIG env var (if set)
  3. mentionindex.toml in the current working directory
"""

from __future__ import annotations

import os
import tomllib
from enum import Enum
from pathlib import Path
from typing import Any, Mapping

from pydantic import BaseModel, Field, ValidationError, field_validator

from mentionindex.errors import ConfigurationError
from mentionindex.logging import setup_logging

MD_TYPE_KEY = "coref.md.type"
CONLL_KEY = "coref.conll"
INPUT_TYPE_KEY = "coref.input.type"
LANGUAGE_KEY = "coref.language"
SPECIAL_CASE_NEWSWIRE_KEY = "coref.specialCaseNewswire"
REMOVE_NESTED_KEY = "removeNestedMentions"
DICTIONARIES_KEY = "coref.dictionaries"

CONFIG_ENV_VAR = "MENTIONINDEX_CONFIG"
CONFIG_FILENAME = "mentionindex.toml"


class MentionDetectionType(str, Enum):
    """The closed set of mention detection strategies."""

    DEPENDENCY = "dependency"
    HYBRID = "hybrid"
    RULE = "rule"

    @classmethod
    def parse(cls, value: str | None) -> "MentionDetectionType":
        """Map a configured value to a strategy; anything unrecognized means RULE."""
        if value is None:
            return cls.RULE
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            setup_logging().warning(
                {
                    "message": f"Unknown mention detection type {value!r}, using 'rule'",
                    "value": value,
                }
            )
            return cls.RULE


class Language(str, Enum):
    ENGLISH = "en"
    CHINESE = "zh"

    @classmethod
    def parse(cls, value: "str | Language") -> "Language":
        if isinstance(value, Language):
            return value
        if not isinstance(value, str):
            raise ConfigurationError(f"Language must be a string such as 'en' or 'zh', got {value!r}")
        key = value.strip().lower().replace("_", "-")
        if key in _LANGUAGE_ALIASES:
            return _LANGUAGE_ALIASES[key]
        raise ConfigurationError(f"Unsupported language {value!r}; expected one of {sorted(_LANGUAGE_ALIASES)}")


_LANGUAGE_ALIASES = {
    "en": Language.ENGLISH,
    "en-us": Language.ENGLISH,
    "en-gb": Language.ENGLISH,
    "english": Language.ENGLISH,
    "zh": Language.CHINESE,
    "zh-cn": Language.CHINESE,
    "zh-hans": Language.CHINESE,
    "chinese": Language.CHINESE,
}


def parse_bool(value: Any, *, key: str) -> bool:
    """Parse a boolean option the way properties files spell them."""
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered == "true":
            return True
        if lowered == "false":
            return False
    raise ConfigurationError(f"Option {key!r} must be 'true' or 'false', got {value!r}")


class MentionConfig(BaseModel, frozen=True):
    """Options read by the nested-mention policy and the mention finders.

    The config is immutable. The per-document nested-mention decision is
    applied to a copy (see mentionindex.policy) and handed to the finder
    explicitly, so one document's decision cannot leak into another's run.
    """

    md_type: MentionDetectionType = Field(
        default=MentionDetectionType.RULE,
        description="Which mention detection strategy to build.",
    )
    conll: bool = Field(
        default=False,
        description="Input documents come from CoNLL data.",
    )
    input_type: str = Field(
        default="raw",
        description="Declared input format; 'conll' counts as CoNLL input.",
    )
    language: Language = Field(
        default=Language.ENGLISH,
        description="Language of the processed documents.",
    )
    special_case_newswire: bool = Field(
        default=False,
        description="Keep nested mentions for Chinese CoNLL newswire documents.",
    )
    remove_nested_mentions: bool = Field(
        default=True,
        description="Whether finders drop mentions nested inside other mentions.",
    )
    dictionaries_path: Path | None = Field(
        default=None,
        description="JSON lexicon to load instead of the built-in one.",
    )

    @field_validator("md_type", mode="before")
    @classmethod
    def _parse_md_type(cls, value: Any) -> MentionDetectionType:
        if isinstance(value, MentionDetectionType):
            return value
        return MentionDetectionType.parse(value)

    @field_validator("language", mode="before")
    @classmethod
    def _parse_language(cls, value: Any) -> Language:
        return Language.parse(value)

    @property
    def conll_input(self) -> bool:
        """True if either the CoNLL flag or the input type marks CoNLL data."""
        return self.conll or self.input_type == "conll"

    @classmethod
    def from_properties(cls, props: Mapping[str, Any]) -> "MentionConfig":
        """Build a config from a string-keyed properties mapping."""
        values: dict[str, Any] = {}
        if MD_TYPE_KEY in props:
            values["md_type"] = props[MD_TYPE_KEY]
        if CONLL_KEY in props:
            values["conll"] = parse_bool(props[CONLL_KEY], key=CONLL_KEY)
        if INPUT_TYPE_KEY in props:
            values["input_type"] = str(props[INPUT_TYPE_KEY])
        if LANGUAGE_KEY in props:
            values["language"] = props[LANGUAGE_KEY]
        if SPECIAL_CASE_NEWSWIRE_KEY in props:
            values["special_case_newswire"] = parse_bool(
                props[SPECIAL_CASE_NEWSWIRE_KEY], key=SPECIAL_CASE_NEWSWIRE_KEY
            )
        if REMOVE_NESTED_KEY in props:
            values["remove_nested_mentions"] = parse_bool(props[REMOVE_NESTED_KEY], key=REMOVE_NESTED_KEY)
        if props.get(DICTIONARIES_KEY):
            values["dictionaries_path"] = props[DICTIONARIES_KEY]
        try:
            return cls(**values)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid mention configuration: {e}") from e

    def to_properties(self) -> dict[str, str]:
        """Return the string-keyed form of this config."""
        props = {
            MD_TYPE_KEY: self.md_type.value,
            CONLL_KEY: str(self.conll).lower(),
            INPUT_TYPE_KEY: self.input_type,
            LANGUAGE_KEY: self.language.value,
            SPECIAL_CASE_NEWSWIRE_KEY: str(self.special_case_newswire).lower(),
            REMOVE_NESTED_KEY: str(self.remove_nested_mentions).lower(),
        }
        if self.dictionaries_path is not None:
            props[DICTIONARIES_KEY] = str(self.dictionaries_path)
        return props


_TOML_KEYS = {
    "md_type": MD_TYPE_KEY,
    "conll": CONLL_KEY,
    "input_type": INPUT_TYPE_KEY,
    "language": LANGUAGE_KEY,
    "special_case_newswire": SPECIAL_CASE_NEWSWIRE_KEY,
    "remove_nested_mentions": REMOVE_NESTED_KEY,
    "dictionaries": DICTIONARIES_KEY,
}


def _default_config_paths() -> list[Path]:
    """Return paths to check for mentionindex.toml (first existing wins)."""
    paths: list[Path] = []
    if os.environ.get(CONFIG_ENV_VAR):
        paths.append(Path(os.environ[CONFIG_ENV_VAR]))
    paths.append(Path.cwd() / CONFIG_FILENAME)
    return paths


def load_config(path: Path | str | None = None) -> MentionConfig:
    """Load a MentionConfig from the `[coref]` table of a TOML file.

    An explicit path must exist. Otherwise the default locations are tried and,
    if none exists, the built-in defaults are returned. Relative dictionary
    paths are resolved against the config file's directory.

    Raises:
        ConfigurationError: If the file cannot be read or holds invalid values.
    """
    if path is not None:
        candidates = [Path(path)]
        if not candidates[0].is_file():
            raise ConfigurationError(f"Config file not found: {path}")
    else:
        candidates = [p for p in _default_config_paths() if p.is_file()]
    if not candidates:
        return MentionConfig()

    config_path = candidates[0]
    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise ConfigurationError(f"Cannot read config file {config_path}: {e}") from e

    section = data.get("coref", {})
    if not isinstance(section, dict):
        raise ConfigurationError(f"[coref] in {config_path} must be a table")
    unknown = set(section) - set(_TOML_KEYS)
    if unknown:
        raise ConfigurationError(f"Unknown option(s) in {config_path}: {sorted(unknown)}")

    props: dict[str, Any] = {_TOML_KEYS[k]: v for k, v in section.items()}
    if DICTIONARIES_KEY in props:
        if not isinstance(props[DICTIONARIES_KEY], str):
            raise ConfigurationError(f"dictionaries in {config_path} must be a path string")
        dictionaries = Path(props[DICTIONARIES_KEY])
        if not dictionaries.is_absolute():
            dictionaries = config_path.parent / dictionaries
        props[DICTIONARIES_KEY] = str(dictionaries)
    return MentionConfig.from_properties(props)
