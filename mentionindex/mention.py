"""Mention records produced by the mention finders."""

from enum import Enum

from pydantic import BaseModel, Field, model_validator


class MentionType(str, Enum):
    """Coarse grammatical class of a mention."""

    PRONOMINAL = "pronominal"
    NOMINAL = "nominal"
    PROPER = "proper"
    LIST = "list"


class Number(str, Enum):
    SINGULAR = "singular"
    PLURAL = "plural"
    UNKNOWN = "unknown"


class Gender(str, Enum):
    MALE = "male"
    FEMALE = "female"
    NEUTRAL = "neutral"
    UNKNOWN = "unknown"


class Mention(BaseModel):
    """A candidate referring expression covering tokens [start_index, end_index).

    Finders create mentions without an identifier. The annotator assigns
    `mention_id` in document order; after that the id does not change.
    A mention only references its sentence and tokens by position.
    """

    sentence_index: int = Field(
        ge=0,
        description="Position of the owning sentence in the document.",
    )
    start_index: int = Field(
        ge=0,
        description="Position of the first token of the span in its sentence.",
    )
    end_index: int = Field(
        ge=0,
        description="Position one past the last token of the span.",
    )
    head_index: int = Field(
        ge=0,
        description="Position of the syntactic head token in its sentence.",
    )
    text: str = Field(
        default="",
        description="Surface text of the span.",
    )
    mention_type: MentionType = Field(
        default=MentionType.NOMINAL,
        description="Pronominal, nominal, proper or list mention.",
    )
    number: Number = Field(default=Number.UNKNOWN)
    gender: Gender = Field(default=Gender.UNKNOWN)
    ner: str = Field(
        default="O",
        description="Named entity tag of the head token.",
    )
    mention_id: int | None = Field(
        default=None,
        description="Document-scoped id, assigned by the annotator.",
    )

    @model_validator(mode="after")
    def _span_is_well_formed(self) -> "Mention":
        if self.end_index <= self.start_index:
            raise ValueError(f"end_index ({self.end_index}) must be greater than start_index ({self.start_index})")
        if not self.start_index <= self.head_index < self.end_index:
            raise ValueError(f"head_index {self.head_index} outside span [{self.start_index}, {self.end_index})")
        return self

    @property
    def span(self) -> tuple[int, int]:
        return (self.start_index, self.end_index)

    def contains(self, other: "Mention") -> bool:
        """True if other's span lies inside this one and the spans differ."""
        return (
            self.sentence_index == other.sentence_index
            and self.start_index <= other.start_index
            and other.end_index <= self.end_index
            and self.span != other.span
        )

    def assign_id(self, mention_id: int) -> None:
        """Set the document-scoped id.

        Re-indexing the same mention list assigns the same ids again; any
        attempt to give an indexed mention a different id is refused.
        """
        if self.mention_id is not None and self.mention_id != mention_id:
            raise ValueError(f"Mention already has id {self.mention_id}, refusing to reassign {mention_id}")
        self.mention_id = mention_id
