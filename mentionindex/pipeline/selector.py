"""Choose and build the mention finder named by the configuration."""

from pydantic import BaseModel, ConfigDict

from mentionindex.annotations import BASE_REQUIREMENTS, TREE_REQUIREMENTS, AnnotationKind
from mentionindex.config import MentionConfig, MentionDetectionType
from mentionindex.head_finder import HeadFinder
from mentionindex.pipeline.dependency import DependencyMentionFinder
from mentionindex.pipeline.hybrid import HybridMentionFinder
from mentionindex.pipeline.interfaces import MentionFinderInterface
from mentionindex.pipeline.rule_based import RuleBasedMentionFinder


class MentionFinderSelection(BaseModel):
    """A constructed finder, its name, and the annotations it needs."""

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    finder: MentionFinderInterface
    name: str
    requirements: frozenset[AnnotationKind]


def select_mention_finder(config: MentionConfig, head_finder: HeadFinder) -> MentionFinderSelection:
    """Build the finder for `config.md_type`.

    The dependency finder needs only the base annotations; the hybrid and
    rule-based finders read constituency trees and token span offsets too.
    """
    finder: MentionFinderInterface
    md_type = config.md_type
    if md_type == MentionDetectionType.DEPENDENCY:
        finder = DependencyMentionFinder()
        requirements = BASE_REQUIREMENTS
    elif md_type == MentionDetectionType.HYBRID:
        finder = HybridMentionFinder(head_finder)
        requirements = BASE_REQUIREMENTS | TREE_REQUIREMENTS
    else:
        finder = RuleBasedMentionFinder(head_finder)
        requirements = BASE_REQUIREMENTS | TREE_REQUIREMENTS
    return MentionFinderSelection(finder=finder, name=finder.name, requirements=requirements)
