"""Annotated document model consumed by the mention annotator.

Upstream stages (tokenizer, sentence splitter, taggers, parsers) populate
these records; this package only reads them, apart from three attributes
that the annotator writes:

- `AnnotatedDocument.mentions`: every mention in document order
- `Sentence.mentions`: the mentions found in that sentence
- `Token.mention_index`: id of the mention that owns the token

Tokens carry two kinds of position: `index` is the 1-based word index used
by dependency edges (0 is the artificial ROOT), while mention spans use
0-based positions into `Sentence.tokens`.
"""

import re
from typing import Iterator

from pydantic import BaseModel, Field, model_validator

from mentionindex.annotations import AnnotationKind
from mentionindex.mention import Mention

_TREE_TOKEN = re.compile(r"\(|\)|[^\s()]+")


class Token(BaseModel):
    word: str = Field(description="Raw token text.")
    value: str | None = Field(default=None, description="Normalized token text.")
    pos: str | None = Field(default=None, description="Part-of-speech tag.")
    ner: str | None = Field(default=None, description="Named entity tag, 'O' outside entities.")
    index: int = Field(ge=1, description="1-based word index within the sentence.")
    begin_index: int | None = Field(default=None, ge=0, description="Document-level token offset.")
    end_index: int | None = Field(default=None, ge=0, description="Document-level offset one past this token.")
    mention_index: int | None = Field(
        default=None,
        description="Id of the mention owning this token, written by the annotator.",
    )


class DependencyEdge(BaseModel, frozen=True):
    """A typed dependency between two words, addressed by 1-based word index."""

    governor: int = Field(ge=0, description="Word index of the governor; 0 is ROOT.")
    dependent: int = Field(ge=1, description="Word index of the dependent.")
    relation: str = Field(description="Dependency label, e.g. 'nsubj' or 'acl:relcl'.")


class ParseTree(BaseModel):
    """A constituency tree node. Leaves are nodes without children whose label is the word."""

    label: str
    children: list["ParseTree"] = Field(default_factory=list)

    @classmethod
    def from_string(cls, text: str) -> "ParseTree":
        """Read a tree in Penn Treebank bracket notation, e.g. '(NP (DT the) (NN cat))'."""
        tokens = _TREE_TOKEN.findall(text)
        if not tokens:
            raise ValueError("Empty tree string")
        tree, pos = cls._read(tokens, 0)
        if pos != len(tokens):
            raise ValueError(f"Unexpected trailing input in tree string at token {pos}: {tokens[pos]!r}")
        return tree

    @classmethod
    def _read(cls, tokens: list[str], pos: int) -> tuple["ParseTree", int]:
        if tokens[pos] != "(":
            return cls(label=tokens[pos]), pos + 1
        pos += 1
        if pos >= len(tokens):
            raise ValueError("Unbalanced parentheses in tree string")
        label = "ROOT"
        if tokens[pos] not in ("(", ")"):
            label = tokens[pos]
            pos += 1
        children: list[ParseTree] = []
        while pos < len(tokens) and tokens[pos] != ")":
            child, pos = cls._read(tokens, pos)
            children.append(child)
        if pos >= len(tokens):
            raise ValueError("Unbalanced parentheses in tree string")
        return cls(label=label, children=children), pos + 1

    @property
    def is_leaf(self) -> bool:
        return not self.children

    @property
    def is_preterminal(self) -> bool:
        return len(self.children) == 1 and self.children[0].is_leaf

    def leaves(self) -> list[str]:
        if self.is_leaf:
            return [self.label]
        return [leaf for child in self.children for leaf in child.leaves()]

    def constituents(self, offset: int = 0) -> Iterator[tuple["ParseTree", int, int]]:
        """Yield (node, start, end) for every non-leaf node, in pre-order.

        start and end are leaf positions, end exclusive.
        """
        if self.is_leaf:
            return
        width = len(self.leaves())
        yield self, offset, offset + width
        child_offset = offset
        for child in self.children:
            yield from child.constituents(child_offset)
            child_offset += len(child.leaves())

    def __str__(self) -> str:
        if self.is_leaf:
            return self.label
        return f"({self.label} {' '.join(str(c) for c in self.children)})"


class Sentence(BaseModel):
    tokens: list[Token] = Field(default_factory=list)
    basic_dependencies: list[DependencyEdge] | None = None
    enhanced_dependencies: list[DependencyEdge] | None = None
    tree: ParseTree | None = None
    mentions: list[Mention] | None = Field(
        default=None,
        description="Mentions found in this sentence, written by the annotator.",
    )

    @model_validator(mode="after")
    def _word_indices_are_consecutive(self) -> "Sentence":
        for position, token in enumerate(self.tokens):
            if token.index != position + 1:
                raise ValueError(f"Token {token.word!r} at position {position} has index {token.index}, expected {position + 1}")
        return self

    @property
    def text(self) -> str:
        return " ".join(t.word for t in self.tokens)

    def span_text(self, start: int, end: int) -> str:
        return " ".join(t.word for t in self.tokens[start:end])


class AnnotatedDocument(BaseModel):
    doc_id: str | None = Field(
        default=None,
        description="Source identifier, e.g. an OntoNotes document name such as 'nw/xinhua/00/chtb_0001'.",
    )
    sentences: list[Sentence] = Field(default_factory=list)
    mentions: list[Mention] | None = Field(
        default=None,
        description="All mentions in document order, written by the annotator.",
    )

    @property
    def tokens(self) -> list[Token]:
        return [t for s in self.sentences for t in s.tokens]

    def present_annotations(self) -> frozenset[AnnotationKind]:
        """Return the annotation kinds populated on every token and sentence."""
        tokens = self.tokens
        sentences = self.sentences
        kinds = {
            AnnotationKind.TOKENS,
            AnnotationKind.SENTENCES,
            AnnotationKind.INDEX,
            AnnotationKind.TEXT,
        }
        token_fields = {
            AnnotationKind.PART_OF_SPEECH: "pos",
            AnnotationKind.NAMED_ENTITY_TAG: "ner",
            AnnotationKind.VALUE: "value",
            AnnotationKind.BEGIN_INDEX: "begin_index",
            AnnotationKind.END_INDEX: "end_index",
        }
        for kind, field in token_fields.items():
            if all(getattr(t, field) is not None for t in tokens):
                kinds.add(kind)
        sentence_fields = {
            AnnotationKind.BASIC_DEPENDENCIES: "basic_dependencies",
            AnnotationKind.ENHANCED_DEPENDENCIES: "enhanced_dependencies",
            AnnotationKind.TREE: "tree",
        }
        for kind, field in sentence_fields.items():
            if all(getattr(s, field) is not None for s in sentences):
                kinds.add(kind)
        if self.mentions is not None:
            kinds.update({AnnotationKind.COREF_MENTIONS, AnnotationKind.MENTION_INDEX})
        return frozenset(kinds)
