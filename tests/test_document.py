"""Tests for the document records, parse trees and mentions."""

import pytest
from pydantic import ValidationError

from mentionindex.annotations import BASE_REQUIREMENTS, AnnotationKind
from mentionindex.document import ParseTree, Sentence, Token
from mentionindex.errors import DetectionError, DocumentError
from mentionindex.mention import Mention

from tests.conftest import cat_on_the_mat, he_smiled, john_saw_mary, make_document


class TestParseTree:
    def test_reads_bracketed_tree(self) -> None:
        tree = ParseTree.from_string("(ROOT (S (NP (PRP He)) (VP (VBD smiled))))")

        assert tree.label == "ROOT"
        assert tree.leaves() == ["He", "smiled"]
        assert str(tree) == "(ROOT (S (NP (PRP He)) (VP (VBD smiled))))"

    def test_unlabelled_root(self) -> None:
        """Treebank files often wrap trees in an unlabelled bracket."""
        tree = ParseTree.from_string("((S (NP (NN it)) (VP (VBZ works))))")

        assert tree.label == "ROOT"
        assert tree.children[0].label == "S"

    def test_preterminal_and_leaf(self) -> None:
        tree = ParseTree.from_string("(NP (DT the) (NN cat))")

        assert not tree.is_preterminal
        assert tree.children[0].is_preterminal
        assert tree.children[0].children[0].is_leaf

    def test_constituents_carry_leaf_spans(self) -> None:
        tree = ParseTree.from_string("(NP (NP (DT the) (NN cat)) (PP (IN on) (NP (DT the) (NN mat))))")

        spans = [(node.label, start, end) for node, start, end in tree.constituents()]

        assert spans[0] == ("NP", 0, 5)
        assert ("PP", 2, 5) in spans
        assert [s for s in spans if s[0] == "NP"] == [("NP", 0, 5), ("NP", 0, 2), ("NP", 3, 5)]

    def test_constituents_offset(self) -> None:
        tree = ParseTree.from_string("(NP (NN dog))")

        assert [(start, end) for _, start, end in tree.constituents(offset=3)] == [(3, 4), (3, 4)]

    @pytest.mark.parametrize("text", ["", "(NP (NN dog)", "(NP (NN dog)))", "(NP (NN dog)) extra"])
    def test_malformed_trees(self, text) -> None:
        with pytest.raises(ValueError):
            ParseTree.from_string(text)


class TestSentence:
    def test_word_indices_must_be_consecutive(self) -> None:
        with pytest.raises(ValidationError, match="expected 2"):
            Sentence(tokens=[Token(word="a", index=1), Token(word="b", index=3)])

    def test_span_text(self) -> None:
        sentence = cat_on_the_mat()

        assert sentence.span_text(3, 5) == "the mat"
        assert sentence.text == "The cat on the mat slept ."


class TestPresentAnnotations:
    def test_fully_annotated_document(self, two_sentence_document) -> None:
        present = two_sentence_document.present_annotations()

        assert BASE_REQUIREMENTS <= present
        assert AnnotationKind.TREE in present
        assert AnnotationKind.COREF_MENTIONS not in present

    def test_one_sentence_without_tree(self) -> None:
        document = make_document([john_saw_mary(), he_smiled().model_copy(update={"tree": None})])

        assert AnnotationKind.TREE not in document.present_annotations()

    def test_one_token_without_ner(self) -> None:
        document = make_document([john_saw_mary()])
        document.sentences[0].tokens[0].ner = None

        assert AnnotationKind.NAMED_ENTITY_TAG not in document.present_annotations()

    def test_mentions_mark_coref_annotations(self, two_sentence_document) -> None:
        two_sentence_document.mentions = []

        present = two_sentence_document.present_annotations()

        assert {AnnotationKind.COREF_MENTIONS, AnnotationKind.MENTION_INDEX} <= present

    def test_document_tokens_in_order(self, two_sentence_document) -> None:
        assert [t.word for t in two_sentence_document.tokens] == ["John", "saw", "Mary", ".", "He", "smiled", "."]


class TestMention:
    def test_span_must_be_non_empty(self) -> None:
        with pytest.raises(ValidationError, match="greater than start_index"):
            Mention(sentence_index=0, start_index=2, end_index=2, head_index=2)

    def test_head_must_lie_in_span(self) -> None:
        with pytest.raises(ValidationError, match="outside span"):
            Mention(sentence_index=0, start_index=0, end_index=2, head_index=2)

    def test_contains_is_strict_and_sentence_local(self) -> None:
        outer = Mention(sentence_index=0, start_index=0, end_index=5, head_index=1)
        inner = Mention(sentence_index=0, start_index=3, end_index=5, head_index=4)
        same_span = Mention(sentence_index=0, start_index=0, end_index=5, head_index=0)
        elsewhere = Mention(sentence_index=1, start_index=3, end_index=5, head_index=4)

        assert outer.contains(inner)
        assert not inner.contains(outer)
        assert not outer.contains(same_span)
        assert not outer.contains(elsewhere)

    def test_assign_id_is_idempotent_but_not_reassignable(self) -> None:
        mention = Mention(sentence_index=0, start_index=0, end_index=1, head_index=0)

        mention.assign_id(3)
        mention.assign_id(3)

        assert mention.mention_id == 3
        with pytest.raises(ValueError, match="refusing to reassign"):
            mention.assign_id(4)


class TestDocumentErrors:
    def test_message_carries_document_id(self) -> None:
        error = DetectionError("finder failed", doc_id="nw/xinhua/00/chtb_0001")

        assert str(error) == "[nw/xinhua/00/chtb_0001] finder failed"
        assert error.doc_id == "nw/xinhua/00/chtb_0001"
        assert isinstance(error, DocumentError)
        assert isinstance(error, RuntimeError)

    def test_without_document_id(self) -> None:
        assert str(DetectionError("finder failed")) == "finder failed"
