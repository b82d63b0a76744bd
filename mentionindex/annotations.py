"""Names of the annotations this stage consumes and produces.

Pipelines schedule stages by comparing one stage's `requires()` with the
`requirements_satisfied()` of the stages before it.
"""

from enum import Enum


class AnnotationKind(str, Enum):
    TOKENS = "tokens"
    SENTENCES = "sentences"
    PART_OF_SPEECH = "part_of_speech"
    NAMED_ENTITY_TAG = "named_entity_tag"
    INDEX = "index"
    TEXT = "text"
    VALUE = "value"
    BASIC_DEPENDENCIES = "basic_dependencies"
    ENHANCED_DEPENDENCIES = "enhanced_dependencies"
    TREE = "tree"
    BEGIN_INDEX = "begin_index"
    END_INDEX = "end_index"
    COREF_MENTIONS = "coref_mentions"
    MENTION_INDEX = "mention_index"
    PARAGRAPH = "paragraph"
    SPEAKER = "speaker"
    UTTERANCE = "utterance"


BASE_REQUIREMENTS: frozenset[AnnotationKind] = frozenset(
    {
        AnnotationKind.TOKENS,
        AnnotationKind.SENTENCES,
        AnnotationKind.PART_OF_SPEECH,
        AnnotationKind.NAMED_ENTITY_TAG,
        AnnotationKind.INDEX,
        AnnotationKind.TEXT,
        AnnotationKind.VALUE,
        AnnotationKind.BASIC_DEPENDENCIES,
        AnnotationKind.ENHANCED_DEPENDENCIES,
    }
)

# Extra requirements of the constituency-based finders (rule and hybrid).
TREE_REQUIREMENTS: frozenset[AnnotationKind] = frozenset(
    {
        AnnotationKind.TREE,
        AnnotationKind.BEGIN_INDEX,
        AnnotationKind.END_INDEX,
    }
)

# PARAGRAPH, SPEAKER and UTTERANCE are declared for scheduling only; this
# stage does not populate them.
REQUIREMENTS_SATISFIED: frozenset[AnnotationKind] = frozenset(
    {
        AnnotationKind.COREF_MENTIONS,
        AnnotationKind.MENTION_INDEX,
        AnnotationKind.PARAGRAPH,
        AnnotationKind.SPEAKER,
        AnnotationKind.UTTERANCE,
    }
)
