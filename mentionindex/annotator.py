"""Document mention annotator.

This module provides the `MentionAnnotator`, the pipeline stage that turns
per-sentence mention candidates into a document-wide mention index:

    1. Check that the upstream annotations the finder needs are present
    2. Decide the nested mention policy for this document
    3. Run the configured mention finder once over the whole document
    4. Number every mention in document order (sentence, then position in
       the finder's list), starting from 0
    5. Attach each sentence's list, the document-wide list, and write every
       covered token's `mention_index` back-link

Where spans overlap, a token keeps the id of the last mention that covers
it; one representative mention per token is all downstream consumers need.

Annotators are built with `create_mention_annotator()`, which raises instead
of handing back an annotator whose resources failed to load.

Example usage:
    ```python
    annotator = create_mention_annotator(MentionConfig(md_type="dependency"))
    mentions = await annotator.annotate(document)
    print(f"Found {len(mentions)} mentions")
    ```
"""

from typing import Any, Mapping, Sequence

from pydantic import BaseModel, ConfigDict

from mentionindex.annotations import REQUIREMENTS_SATISFIED, AnnotationKind
from mentionindex.config import MentionConfig
from mentionindex.document import AnnotatedDocument
from mentionindex.errors import (
    DetectionError,
    MentionAlignmentError,
    MentionIndexError,
    MentionSpanError,
    MissingAnnotationError,
    ResourceLoadError,
)
from mentionindex.head_finder import HeadFinder, get_head_finder
from mentionindex.logging import setup_logging
from mentionindex.mention import Mention
from mentionindex.pipeline.interfaces import MentionFinderInterface
from mentionindex.pipeline.selector import select_mention_finder
from mentionindex.policy import apply_nested_mention_policy
from mentionindex.resources import LexicalResource

logger = setup_logging()


class DocumentMentionResult(BaseModel):
    """Outcome of annotating one document in a batch.

    Attributes:
        document_id: The document's source identifier, or "" when it has none.
        mentions_found: Number of mentions indexed; 0 when annotation failed.
        errors: Error messages for this document.
    """

    model_config = {"frozen": True}

    document_id: str
    mentions_found: int
    errors: tuple[str, ...] = ()


class AnnotationResult(BaseModel):
    """Aggregate outcome of `MentionAnnotator.annotate_batch`."""

    model_config = {"frozen": True}

    documents_processed: int
    documents_failed: int
    total_mentions: int
    document_results: tuple[DocumentMentionResult, ...] = ()


def index_mentions(
    document: AnnotatedDocument,
    mentions_per_sentence: Sequence[Sequence[Mention]],
) -> list[Mention]:
    """Number mentions in document order and write all back-links.

    Everything is validated before the document is touched, so a rejected
    detection result leaves no partial index behind. Back-links from an
    earlier run are cleared first.

    Args:
        document: The document whose sentences the mentions belong to.
        mentions_per_sentence: One list per sentence, aligned with
            `document.sentences`.

    Returns:
        The document-wide mention list, also stored on `document.mentions`.

    Raises:
        MentionAlignmentError: If the list count differs from the sentence
            count, or a mention object appears twice.
        MentionSpanError: If a mention names another sentence, its span is
            empty or falls outside its sentence's tokens, or its head lies
            outside the span.
    """
    doc_id = document.doc_id
    sentences = document.sentences
    if len(mentions_per_sentence) != len(sentences):
        raise MentionAlignmentError(
            f"Mention finder returned {len(mentions_per_sentence)} sentence list(s) "
            f"for a document with {len(sentences)} sentence(s)",
            doc_id=doc_id,
        )

    seen: set[int] = set()
    next_id = 0
    for sentence_index, (sentence, mentions) in enumerate(zip(sentences, mentions_per_sentence)):
        size = len(sentence.tokens)
        for mention in mentions:
            if id(mention) in seen:
                raise MentionAlignmentError(f"Mention {mention.text!r} returned more than once", doc_id=doc_id)
            seen.add(id(mention))
            if mention.sentence_index != sentence_index:
                raise MentionSpanError(
                    f"Mention {mention.text!r} claims sentence {mention.sentence_index} "
                    f"but was returned for sentence {sentence_index}",
                    doc_id=doc_id,
                )
            if not 0 <= mention.start_index < mention.end_index <= size:
                raise MentionSpanError(
                    f"Mention span [{mention.start_index}, {mention.end_index}) does not fit the "
                    f"{size} token(s) of sentence {sentence_index}",
                    doc_id=doc_id,
                )
            if not mention.start_index <= mention.head_index < mention.end_index:
                raise MentionSpanError(
                    f"Mention head {mention.head_index} lies outside its span "
                    f"[{mention.start_index}, {mention.end_index})",
                    doc_id=doc_id,
                )
            if mention.mention_id is not None and mention.mention_id != next_id:
                raise MentionAlignmentError(
                    f"Mention {mention.text!r} already indexed as {mention.mention_id}, would become {next_id}",
                    doc_id=doc_id,
                )
            next_id += 1

    for token in document.tokens:
        token.mention_index = None

    all_mentions: list[Mention] = []
    mention_id = 0
    for sentence, mentions in zip(sentences, mentions_per_sentence):
        sentence.mentions = list(mentions)
        all_mentions.extend(mentions)
        for mention in mentions:
            mention.assign_id(mention_id)
            for position in range(mention.start_index, mention.end_index):
                sentence.tokens[position].mention_index = mention_id
            mention_id += 1

    document.mentions = all_mentions
    return all_mentions


class MentionAnnotator(BaseModel):
    """Finds, numbers and back-links the mentions of a document.

    The annotator holds only read-only state (config, lexical resource, head
    finder, finder), so one instance can serve several documents, including
    concurrently: the per-document nested mention decision is made on a copy
    of the config and passed straight to the finder.

    Attributes:
        config: Options as configured; never modified.
        dictionaries: Lexical resource handed to the finder.
        head_finder: Head finder used by the constituency-based finders.
        finder: The selected mention finder.
        finder_name: "dependency", "hybrid" or "rule".
        required_annotations: Upstream annotations the finder needs.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    config: MentionConfig
    dictionaries: LexicalResource
    head_finder: HeadFinder
    finder: MentionFinderInterface
    finder_name: str
    required_annotations: frozenset[AnnotationKind]

    def requires(self) -> frozenset[AnnotationKind]:
        """Annotations that must be present before annotate() runs."""
        return self.required_annotations

    def requirements_satisfied(self) -> frozenset[AnnotationKind]:
        """Annotations later stages may rely on once this stage has run.

        PARAGRAPH, SPEAKER and UTTERANCE are listed for scheduling only and
        must come from another stage.
        """
        return REQUIREMENTS_SATISFIED

    async def annotate(self, document: AnnotatedDocument) -> list[Mention]:
        """Detect and index the mentions of one document.

        Returns:
            The document-wide mention list, ids 0..n-1 in order.

        Raises:
            MissingAnnotationError: If a required upstream annotation is absent.
            DetectionError: If the finder fails on this document.
            MentionAlignmentError, MentionSpanError: If the finder's output
                breaks the alignment or span contract.
        """
        missing = self.required_annotations - document.present_annotations()
        if missing:
            raise MissingAnnotationError(
                f"Missing required annotation(s): {sorted(kind.value for kind in missing)}",
                doc_id=document.doc_id,
            )

        document_config = apply_nested_mention_policy(document, self.config)
        try:
            mentions_per_sentence = await self.finder.find_mentions(document, self.dictionaries, document_config)
        except MentionIndexError:
            raise
        except Exception as e:
            raise DetectionError(f"{self.finder_name} mention finder failed: {e}", doc_id=document.doc_id) from e

        mentions = index_mentions(document, mentions_per_sentence)
        logger.debug(
            {
                "message": f"Indexed {len(mentions)} mention(s)",
                "doc_id": document.doc_id,
                "sentences": len(document.sentences),
                "remove_nested_mentions": document_config.remove_nested_mentions,
            }
        )
        return mentions

    async def annotate_batch(self, documents: Sequence[AnnotatedDocument]) -> AnnotationResult:
        """Annotate documents one after another.

        A failing document is recorded in its DocumentMentionResult and the
        rest of the batch is still processed.
        """
        results: list[DocumentMentionResult] = []
        documents_failed = 0

        for document in documents:
            document_id = document.doc_id or ""
            try:
                mentions = await self.annotate(document)
            except MentionIndexError as e:
                logger.error(
                    {
                        "message": "Mention annotation failed",
                        "doc_id": document_id,
                        "error": str(e),
                    }
                )
                documents_failed += 1
                results.append(DocumentMentionResult(document_id=document_id, mentions_found=0, errors=(str(e),)))
                continue
            results.append(DocumentMentionResult(document_id=document_id, mentions_found=len(mentions)))

        return AnnotationResult(
            documents_processed=len(documents),
            documents_failed=documents_failed,
            total_mentions=sum(r.mentions_found for r in results),
            document_results=tuple(results),
        )


def create_mention_annotator(
    config: MentionConfig | Mapping[str, Any] | None = None,
    *,
    dictionaries: LexicalResource | None = None,
    head_finder: HeadFinder | None = None,
) -> MentionAnnotator:
    """Build a MentionAnnotator, failing fast if anything cannot be loaded.

    Args:
        config: A MentionConfig, a string-keyed properties mapping, or None
            for the defaults.
        dictionaries: Lexical resource to use instead of loading one from
            `config.dictionaries_path` or the built-in lexicon.
        head_finder: Head finder to use instead of the language default.

    Raises:
        ConfigurationError: If the configuration is invalid.
        ResourceLoadError: If the lexical resource, head finder or finder
            cannot be built.
    """
    try:
        if config is None:
            config = MentionConfig()
        elif not isinstance(config, MentionConfig):
            config = MentionConfig.from_properties(config)
        if dictionaries is None:
            if config.dictionaries_path is not None:
                dictionaries = LexicalResource.load(config.dictionaries_path)
            else:
                dictionaries = LexicalResource.default(config.language)
        if head_finder is None:
            head_finder = get_head_finder(config.language)
        selection = select_mention_finder(config, head_finder)
    except MentionIndexError as e:
        logger.error({"message": "Error building mention annotator", "error": str(e)})
        raise
    except Exception as e:
        logger.error({"message": "Error building mention annotator", "error": str(e)})
        raise ResourceLoadError(f"Cannot build mention annotator: {e}") from e

    logger.info(f"Using mention detector type: {selection.name}")
    return MentionAnnotator(
        config=config,
        dictionaries=dictionaries,
        head_finder=head_finder,
        finder=selection.finder,
        finder_name=selection.name,
        required_annotations=selection.requirements,
    )
