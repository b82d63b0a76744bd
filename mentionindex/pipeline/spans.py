"""Span helpers shared by the mention finders."""

from typing import Iterable

from mentionindex.config import Language
from mentionindex.document import ParseTree, Sentence
from mentionindex.mention import Gender, Mention, MentionType, Number
from mentionindex.resources import LexicalResource

PRONOUN_TAGS = frozenset({"PRP", "PRP$", "WP", "WP$", "PN"})
PROPER_NOUN_TAGS = frozenset({"NNP", "NNPS", "NR"})
NOUN_TAGS = frozenset({"NN", "NNS", "NNP", "NNPS", "NR", "NT"})
PLURAL_NOUN_TAGS = frozenset({"NNS", "NNPS"})


def ner_spans(sentence: Sentence, dictionaries: LexicalResource) -> list[tuple[int, int]]:
    """Return maximal runs of tokens sharing a named entity tag worth a mention."""
    spans: list[tuple[int, int]] = []
    start = None
    current = None
    for position, token in enumerate(sentence.tokens + [None]):  # type: ignore[operator]
        tag = token.ner if token is not None else None
        if tag != current:
            if current is not None and current not in dictionaries.excluded_ner_tags and start is not None:
                spans.append((start, position))
            start, current = position, tag
    return spans


def remove_nested(mentions: list[Mention]) -> list[Mention]:
    """Drop every mention whose span lies strictly inside another mention's span."""
    return [m for m in mentions if not any(other.contains(m) for other in mentions)]


def dedupe_and_sort(mentions: Iterable[Mention]) -> list[Mention]:
    """Keep the first mention per span and order by (start_index, end_index)."""
    seen: dict[tuple[int, int], Mention] = {}
    for mention in mentions:
        seen.setdefault(mention.span, mention)
    return sorted(seen.values(), key=lambda m: m.span)


def build_mention(
    sentence: Sentence,
    sentence_index: int,
    start: int,
    end: int,
    head: int,
    dictionaries: LexicalResource,
    *,
    is_list: bool = False,
) -> Mention:
    """Create an unindexed mention and derive its type, number, gender and NER tag."""
    head_token = sentence.tokens[head]
    head_word = head_token.word
    pos = head_token.pos or ""
    ner = head_token.ner or "O"

    if is_list:
        mention_type = MentionType.LIST
    elif end - start == 1 and (pos in PRONOUN_TAGS or dictionaries.is_pronoun(head_word)):
        mention_type = MentionType.PRONOMINAL
    elif pos in PROPER_NOUN_TAGS or ner not in dictionaries.excluded_ner_tags or dictionaries.is_demonym(head_word):
        mention_type = MentionType.PROPER
    else:
        mention_type = MentionType.NOMINAL

    if is_list:
        number = Number.PLURAL
    else:
        number = dictionaries.number_of(head_word)
        if number == Number.UNKNOWN and pos:
            number = Number.PLURAL if pos in PLURAL_NOUN_TAGS else Number.SINGULAR

    gender = dictionaries.gender_of(head_word)
    if gender == Gender.UNKNOWN and mention_type == MentionType.NOMINAL:
        gender = Gender.NEUTRAL if dictionaries.language == Language.ENGLISH and pos in NOUN_TAGS else Gender.UNKNOWN

    return Mention(
        sentence_index=sentence_index,
        start_index=start,
        end_index=end,
        head_index=head,
        text=sentence.span_text(start, end),
        mention_type=mention_type,
        number=number,
        gender=gender,
        ner=ner,
    )


def check_tree_matches_tokens(sentence: Sentence, sentence_index: int) -> ParseTree:
    """Return the sentence's tree, raising ValueError if it is missing or its leaves do not match the tokens."""
    if sentence.tree is None:
        raise ValueError(f"Sentence {sentence_index} has no constituency tree")
    leaves = sentence.tree.leaves()
    if len(leaves) != len(sentence.tokens):
        raise ValueError(
            f"Sentence {sentence_index}: tree has {len(leaves)} leaves but sentence has {len(sentence.tokens)} tokens"
        )
    return sentence.tree
