"""Mention finder interface, the three shipped finders, and the selector."""

from mentionindex.pipeline.dependency import DependencyMentionFinder
from mentionindex.pipeline.hybrid import HybridMentionFinder
from mentionindex.pipeline.interfaces import MentionFinderInterface
from mentionindex.pipeline.rule_based import RuleBasedMentionFinder
from mentionindex.pipeline.selector import MentionFinderSelection, select_mention_finder

__all__ = [
    "MentionFinderInterface",
    "RuleBasedMentionFinder",
    "DependencyMentionFinder",
    "HybridMentionFinder",
    "MentionFinderSelection",
    "select_mention_finder",
]
