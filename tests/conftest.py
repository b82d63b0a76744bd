"""Test fixtures and document builders.

This module provides:
- Builders for annotated sentences and documents (tokens, tags, trees and
  dependencies given as plain Python values)
- Stub mention finders that return preset spans or fail on purpose, so the
  indexing logic can be tested without a real finder
- Pytest fixtures for a few small, fully annotated documents

Dependencies are written as (governor, dependent, relation) tuples with
1-based word indices, 0 meaning ROOT.
"""

from typing import Sequence

import pytest

from mentionindex.annotations import BASE_REQUIREMENTS
from mentionindex.annotator import MentionAnnotator
from mentionindex.config import MentionConfig
from mentionindex.document import AnnotatedDocument, DependencyEdge, ParseTree, Sentence, Token
from mentionindex.head_finder import get_head_finder
from mentionindex.mention import Mention
from mentionindex.pipeline.interfaces import MentionFinderInterface
from mentionindex.resources import LexicalResource

# --- Builders ---


def make_sentence(
    words: Sequence[str],
    pos: Sequence[str] | None = None,
    ner: Sequence[str] | None = None,
    *,
    tree: str | None = None,
    deps: Sequence[tuple[int, int, str]] | None = None,
    offset: int = 0,
) -> Sentence:
    """Build a fully annotated sentence.

    Missing POS tags default to 'NN' and missing NER tags to 'O'. When no
    dependencies are given, every word hangs off ROOT with relation 'dep'.
    """
    pos = list(pos) if pos is not None else ["NN"] * len(words)
    ner = list(ner) if ner is not None else ["O"] * len(words)
    tokens = [
        Token(
            word=word,
            value=word,
            pos=pos[i],
            ner=ner[i],
            index=i + 1,
            begin_index=offset + i,
            end_index=offset + i + 1,
        )
        for i, word in enumerate(words)
    ]
    if deps is None:
        deps = [(0, i + 1, "dep") for i in range(len(words))]
    edges = [DependencyEdge(governor=g, dependent=d, relation=r) for g, d, r in deps]
    return Sentence(
        tokens=tokens,
        basic_dependencies=edges,
        enhanced_dependencies=list(edges),
        tree=ParseTree.from_string(tree) if tree is not None else None,
    )


def make_document(sentences: Sequence[Sentence], doc_id: str | None = None) -> AnnotatedDocument:
    return AnnotatedDocument(doc_id=doc_id, sentences=list(sentences))


def john_saw_mary() -> Sentence:
    return make_sentence(
        ["John", "saw", "Mary", "."],
        ["NNP", "VBD", "NNP", "."],
        ["PERSON", "O", "PERSON", "O"],
        tree="(ROOT (S (NP (NNP John)) (VP (VBD saw) (NP (NNP Mary))) (. .)))",
        deps=[(2, 1, "nsubj"), (0, 2, "root"), (2, 3, "obj"), (2, 4, "punct")],
    )


def he_smiled(offset: int = 4) -> Sentence:
    return make_sentence(
        ["He", "smiled", "."],
        ["PRP", "VBD", "."],
        tree="(ROOT (S (NP (PRP He)) (VP (VBD smiled)) (. .)))",
        deps=[(2, 1, "nsubj"), (0, 2, "root"), (2, 3, "punct")],
        offset=offset,
    )


def cat_on_the_mat() -> Sentence:
    """'The cat on the mat slept .' -- one NP with two NPs nested inside it."""
    return make_sentence(
        ["The", "cat", "on", "the", "mat", "slept", "."],
        ["DT", "NN", "IN", "DT", "NN", "VBD", "."],
        tree=(
            "(ROOT (S (NP (NP (DT The) (NN cat)) (PP (IN on) (NP (DT the) (NN mat))))"
            " (VP (VBD slept)) (. .)))"
        ),
        deps=[
            (2, 1, "det"),
            (6, 2, "nsubj"),
            (5, 3, "case"),
            (5, 4, "det"),
            (2, 5, "nmod"),
            (0, 6, "root"),
            (6, 7, "punct"),
        ],
    )


def john_smith_arrived() -> Sentence:
    """A two-word name whose dependency head differs from its constituency head."""
    return make_sentence(
        ["John", "Smith", "arrived", "."],
        ["NNP", "NNP", "VBD", "."],
        ["PERSON", "PERSON", "O", "O"],
        tree="(ROOT (S (NP (NNP John) (NNP Smith)) (VP (VBD arrived)) (. .)))",
        deps=[(3, 1, "nsubj"), (1, 2, "flat"), (0, 3, "root"), (3, 4, "punct")],
    )


# --- Stub finders ---


class StubMentionFinder(MentionFinderInterface):
    """Mention finder returning preset (start, end) spans for each sentence.

    Fresh Mention objects are created on every call, like a real finder.
    The config of every call is recorded in `calls`.
    """

    name = "stub"

    def __init__(self, spans: Sequence[Sequence[tuple[int, int]]]):
        self.spans = spans
        self.calls: list[MentionConfig] = []

    async def find_mentions(
        self,
        document: AnnotatedDocument,
        dictionaries: LexicalResource,
        config: MentionConfig,
    ) -> list[list[Mention]]:
        self.calls.append(config)
        result = []
        for i, spans in enumerate(self.spans):
            sentence = document.sentences[i] if i < len(document.sentences) else None
            result.append(
                [
                    Mention(
                        sentence_index=i,
                        start_index=start,
                        end_index=end,
                        head_index=end - 1,
                        text=sentence.span_text(start, end) if sentence is not None else "",
                    )
                    for start, end in spans
                ]
            )
        return result


class FailingMentionFinder(MentionFinderInterface):
    """Mention finder that always raises."""

    name = "failing"

    async def find_mentions(
        self,
        document: AnnotatedDocument,
        dictionaries: LexicalResource,
        config: MentionConfig,
    ) -> list[list[Mention]]:
        raise RuntimeError("lexicon lookup exploded")


def make_annotator(finder: MentionFinderInterface, config: MentionConfig | None = None) -> MentionAnnotator:
    """Wrap a stub finder in an annotator that only needs the base annotations."""
    config = config or MentionConfig()
    return MentionAnnotator(
        config=config,
        dictionaries=LexicalResource.default(config.language),
        head_finder=get_head_finder(config.language),
        finder=finder,
        finder_name=finder.name,
        required_annotations=BASE_REQUIREMENTS,
    )


# --- Fixtures ---


@pytest.fixture
def two_sentence_document() -> AnnotatedDocument:
    """'John saw Mary . He smiled .'"""
    return make_document([john_saw_mary(), he_smiled()], doc_id="wb/eng/00/eng_0001")


@pytest.fixture
def nested_document() -> AnnotatedDocument:
    return make_document([cat_on_the_mat()], doc_id="bn/cnn/00/cnn_0001")


@pytest.fixture
def english_lexicon() -> LexicalResource:
    return LexicalResource.default()
