"""Pipeline interface for pluggable mention detection.

A mention finder proposes candidate mentions for every sentence of a
document. The annotator (mentionindex.annotator) runs the finder once per
document and then numbers and back-links what it returns.

Three finders ship with the package, chosen by `MentionConfig.md_type`:

- RuleBasedMentionFinder: noun phrases, pronouns and named entities read
  off the constituency tree
- DependencyMentionFinder: nominal heads and their dependency subtrees
- HybridMentionFinder: constituency spans with dependency-based heads
"""

from abc import ABC, abstractmethod

from mentionindex.config import MentionConfig
from mentionindex.document import AnnotatedDocument
from mentionindex.mention import Mention
from mentionindex.resources import LexicalResource


class MentionFinderInterface(ABC):
    """Propose mention candidates for each sentence of a document.

    Finders are built once and then shared across documents, so they must
    not keep per-document state. Everything that varies per document arrives
    through the arguments of find_mentions().
    """

    name: str = "abstract"

    @abstractmethod
    async def find_mentions(
        self,
        document: AnnotatedDocument,
        dictionaries: LexicalResource,
        config: MentionConfig,
    ) -> list[list[Mention]]:
        """Find mention candidates in a document.

        Args:
            document: The document to scan. Finders must not modify it.
            dictionaries: Lexical resource for pronoun, gender and number lookups.
            config: Options for this document; `remove_nested_mentions` has
                already been decided by the nested mention policy.

        Returns:
            One list per sentence, in sentence order, each holding that
            sentence's mentions without ids. A sentence with no mentions
            gets an empty list.

        Raises:
            ValueError: If the document's annotations are malformed, e.g. a
                tree whose leaves do not match the sentence's tokens.
        """
