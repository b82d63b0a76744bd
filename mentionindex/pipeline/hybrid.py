"""Hybrid mention finder: constituency spans, dependency heads."""

from mentionindex.document import DependencyEdge, ParseTree, Sentence
from mentionindex.pipeline.rule_based import RuleBasedMentionFinder


class HybridMentionFinder(RuleBasedMentionFinder):
    """Rule-based candidates whose heads come from the basic dependency graph.

    The head of a span is its first token whose governor lies outside the
    span (or is ROOT). Sentences without dependencies, or spans where no
    such token exists, fall back to the constituency head finder.
    """

    name = "hybrid"

    def _head_of(self, sentence: Sentence, node: ParseTree, start: int, end: int) -> int:
        if sentence.basic_dependencies:
            head = _dependency_head(sentence.basic_dependencies, start, end)
            if head is not None:
                return head
        return super()._head_of(sentence, node, start, end)


def _dependency_head(edges: list[DependencyEdge], start: int, end: int) -> int | None:
    governors = {edge.dependent: edge.governor for edge in edges}
    for position in range(start, end):
        governor = governors.get(position + 1)
        if governor is None:
            continue
        if governor == 0 or not start < governor <= end:
            return position
    return None
