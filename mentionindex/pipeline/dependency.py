"""Dependency-based mention finder."""

import logging
from collections import defaultdict

from mentionindex.config import MentionConfig
from mentionindex.document import AnnotatedDocument, DependencyEdge, Sentence
from mentionindex.mention import Mention
from mentionindex.pipeline.interfaces import MentionFinderInterface
from mentionindex.pipeline.spans import (
    NOUN_TAGS,
    PRONOUN_TAGS,
    build_mention,
    dedupe_and_sort,
    remove_nested,
)
from mentionindex.resources import LexicalResource

logger = logging.getLogger(__name__)

# A nominal attached with one of these relations is part of a larger name.
NON_HEAD_RELATIONS = frozenset({"compound", "compound:nn", "flat", "flat:name", "fixed", "goeswith", "nn"})

# Dependents reached through these relations stay outside the mention span.
SPAN_BREAKING_RELATIONS = frozenset({"acl:relcl", "rcmod", "conj", "cc", "appos", "punct", "parataxis", "dep"})


class DependencyMentionFinder(MentionFinderInterface):
    """Find mentions headed by nominal or pronominal tokens.

    Pronouns are single-token mentions. Any other noun or named-entity token
    not attached as part of a larger name heads a mention spanning its
    dependency subtree, minus relative clauses, conjuncts, appositions and
    punctuation. Only the basic dependency graph is consulted.
    """

    name = "dependency"

    async def find_mentions(
        self,
        document: AnnotatedDocument,
        dictionaries: LexicalResource,
        config: MentionConfig,
    ) -> list[list[Mention]]:
        return [
            self.sentence_mentions(sentence, i, dictionaries, config)
            for i, sentence in enumerate(document.sentences)
        ]

    def sentence_mentions(
        self,
        sentence: Sentence,
        sentence_index: int,
        dictionaries: LexicalResource,
        config: MentionConfig,
    ) -> list[Mention]:
        if sentence.basic_dependencies is None:
            raise ValueError(f"Sentence {sentence_index} has no basic dependencies")
        size = len(sentence.tokens)
        children: dict[int, list[DependencyEdge]] = defaultdict(list)
        incoming: dict[int, DependencyEdge] = {}
        for edge in sentence.basic_dependencies:
            if edge.dependent > size or edge.governor > size:
                raise ValueError(f"Sentence {sentence_index}: dependency {edge} refers past its {size} tokens")
            children[edge.governor].append(edge)
            incoming[edge.dependent] = edge

        candidates: list[Mention] = []
        for position, token in enumerate(sentence.tokens):
            pos = token.pos or ""
            is_pronoun = pos in PRONOUN_TAGS or dictionaries.is_pronoun(token.word)
            is_entity = token.ner is not None and token.ner not in dictionaries.excluded_ner_tags
            if not (is_pronoun or is_entity or pos in NOUN_TAGS):
                continue
            edge = incoming.get(token.index)
            if edge is not None and edge.relation in NON_HEAD_RELATIONS:
                continue
            if is_pronoun:
                start, end = position, position + 1
            else:
                covered = _subtree(token.index, children)
                start, end = min(covered) - 1, max(covered)
            candidates.append(build_mention(sentence, sentence_index, start, end, position, dictionaries))

        mentions = dedupe_and_sort(m for m in candidates if not dictionaries.is_non_word(m.text))
        if config.remove_nested_mentions:
            mentions = remove_nested(mentions)
        logger.debug("sentence %d: %d mention(s) from %d candidate(s)", sentence_index, len(mentions), len(candidates))
        return mentions


def _subtree(root: int, children: dict[int, list[DependencyEdge]]) -> set[int]:
    """Return the word indices reachable from root, skipping span-breaking edges."""
    covered = {root}
    stack = [root]
    while stack:
        for edge in children.get(stack.pop(), ()):
            if edge.relation in SPAN_BREAKING_RELATIONS or edge.dependent in covered:
                continue
            covered.add(edge.dependent)
            stack.append(edge.dependent)
    return covered
