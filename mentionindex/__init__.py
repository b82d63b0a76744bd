"""Mention detection and document-wide mention indexing.

A pipeline stage that runs a pluggable mention finder over a parsed
document, numbers the mentions it proposes in document order, and links
every covered token back to its mention:

    from mentionindex import AnnotatedDocument, MentionConfig, create_mention_annotator

    annotator = create_mention_annotator(MentionConfig(md_type="hybrid"))
    mentions = await annotator.annotate(document)
"""

from mentionindex.annotations import (
    BASE_REQUIREMENTS,
    REQUIREMENTS_SATISFIED,
    TREE_REQUIREMENTS,
    AnnotationKind,
)
from mentionindex.annotator import (
    AnnotationResult,
    DocumentMentionResult,
    MentionAnnotator,
    create_mention_annotator,
    index_mentions,
)
from mentionindex.config import Language, MentionConfig, MentionDetectionType, load_config
from mentionindex.document import AnnotatedDocument, DependencyEdge, ParseTree, Sentence, Token
from mentionindex.errors import (
    ConfigurationError,
    DetectionError,
    DocumentError,
    MentionAlignmentError,
    MentionIndexError,
    MentionSpanError,
    MissingAnnotationError,
    ResourceLoadError,
)
from mentionindex.head_finder import HeadFinder, get_head_finder
from mentionindex.mention import Gender, Mention, MentionType, Number
from mentionindex.policy import apply_nested_mention_policy, should_remove_nested_mentions
from mentionindex.resources import LexicalResource

__all__ = [
    "AnnotationKind",
    "BASE_REQUIREMENTS",
    "TREE_REQUIREMENTS",
    "REQUIREMENTS_SATISFIED",
    "AnnotationResult",
    "DocumentMentionResult",
    "MentionAnnotator",
    "create_mention_annotator",
    "index_mentions",
    "Language",
    "MentionConfig",
    "MentionDetectionType",
    "load_config",
    "AnnotatedDocument",
    "DependencyEdge",
    "ParseTree",
    "Sentence",
    "Token",
    "ConfigurationError",
    "DetectionError",
    "DocumentError",
    "MentionAlignmentError",
    "MentionIndexError",
    "MentionSpanError",
    "MissingAnnotationError",
    "ResourceLoadError",
    "HeadFinder",
    "get_head_finder",
    "Gender",
    "Mention",
    "MentionType",
    "Number",
    "apply_nested_mention_policy",
    "should_remove_nested_mentions",
    "LexicalResource",
]

__version__ = "0.1.0"
