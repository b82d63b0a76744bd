"""Per-document decision on whether nested mentions are removed.

Nested mentions are common in Chinese newswire and worth keeping there; for
other genres and languages they mostly add false positives. Removal is
therefore disabled only for Chinese CoNLL newswire, and only when the
`special_case_newswire` option asks for it.
"""

from mentionindex.config import Language, MentionConfig
from mentionindex.document import AnnotatedDocument
from mentionindex.logging import setup_logging

# OntoNotes document names carry the genre, e.g. 'nw/xinhua/00/chtb_0001'.
NEWSWIRE_MARKER = "nw"

logger = setup_logging()


def should_remove_nested_mentions(
    source_id: str | None,
    conll_input: bool,
    language: Language,
    special_case_newswire: bool,
) -> bool:
    """Return True if nested mentions must be removed for this document."""
    source_id = source_id or ""
    keep_nested = (
        NEWSWIRE_MARKER in source_id
        and conll_input
        and language == Language.CHINESE
        and special_case_newswire
    )
    return not keep_nested


def apply_nested_mention_policy(document: AnnotatedDocument, config: MentionConfig) -> MentionConfig:
    """Return a copy of config with remove_nested_mentions decided for this document."""
    remove = should_remove_nested_mentions(
        document.doc_id,
        config.conll_input,
        config.language,
        config.special_case_newswire,
    )
    logger.debug(
        {
            "message": "Nested mention policy decided",
            "doc_id": document.doc_id,
            "remove_nested_mentions": remove,
        }
    )
    if remove == config.remove_nested_mentions:
        return config
    return config.model_copy(update={"remove_nested_mentions": remove})
