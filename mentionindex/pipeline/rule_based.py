"""Constituency-based mention finder."""

import logging
from typing import Iterator

from mentionindex.config import MentionConfig
from mentionindex.document import AnnotatedDocument, ParseTree, Sentence
from mentionindex.head_finder import HeadFinder, base_label
from mentionindex.mention import Mention
from mentionindex.pipeline.interfaces import MentionFinderInterface
from mentionindex.pipeline.spans import (
    PRONOUN_TAGS,
    build_mention,
    check_tree_matches_tokens,
    dedupe_and_sort,
    ner_spans,
    remove_nested,
)
from mentionindex.resources import LexicalResource

logger = logging.getLogger(__name__)

NOUN_PHRASE_LABELS = frozenset({"NP"})


class RuleBasedMentionFinder(MentionFinderInterface):
    """Find mentions from noun phrases, pronouns and named entities.

    Every NP constituent becomes a mention headed by the head finder's choice;
    an NP that coordinates two or more NPs is a list mention. Pronoun
    preterminals and maximal named entity runs are added, spans listed as
    non-words in the lexicon are dropped.
    """

    name = "rule"

    def __init__(self, head_finder: HeadFinder):
        if head_finder is None:
            raise ValueError(f"{type(self).__name__} needs a head finder")
        self.head_finder = head_finder

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
        if not sentence.tokens:
            return []
        tree = check_tree_matches_tokens(sentence, sentence_index)
        candidates = list(self._tree_candidates(sentence, tree, sentence_index, dictionaries))
        for start, end in ner_spans(sentence, dictionaries):
            candidates.append(build_mention(sentence, sentence_index, start, end, end - 1, dictionaries))

        mentions = dedupe_and_sort(m for m in candidates if not dictionaries.is_non_word(m.text))
        if config.remove_nested_mentions:
            mentions = remove_nested(mentions)
        logger.debug("sentence %d: %d mention(s) from %d candidate(s)", sentence_index, len(mentions), len(candidates))
        return mentions

    def _tree_candidates(
        self,
        sentence: Sentence,
        tree: ParseTree,
        sentence_index: int,
        dictionaries: LexicalResource,
    ) -> Iterator[Mention]:
        for node, start, end in tree.constituents():
            label = base_label(node.label)
            if label in NOUN_PHRASE_LABELS:
                head = self._head_of(sentence, node, start, end)
                yield build_mention(
                    sentence,
                    sentence_index,
                    start,
                    end,
                    head,
                    dictionaries,
                    is_list=_is_coordinated(node),
                )
            elif node.is_preterminal and label in PRONOUN_TAGS:
                yield build_mention(sentence, sentence_index, start, end, start, dictionaries)

    def _head_of(self, sentence: Sentence, node: ParseTree, start: int, end: int) -> int:
        return start + self.head_finder.find_head(node)


def _is_coordinated(node: ParseTree) -> bool:
    labels = [base_label(c.label) for c in node.children]
    return "CC" in labels and labels.count("NP") >= 2
