"""
Justification Model
===================

Evidence for a belief is an ordered list of typed justification elements:

  - ``tool_result``  -- output of a tool execution
  - ``testimony``    -- a claim made by another entity
  - ``observation``  -- direct perception (sensor, screen, log line)
  - ``inference``    -- a conclusion drawn from premises by a named rule
  - ``external``     -- a whole justification received from another agent,
                        tagged with the frame that agent was using

Elements are immutable once created and are discriminated by ``kind``.
A Justification only grows (``extend``) or is replaced wholesale
(``merge``); it never shrinks in place. Identity is by ``id``.
"""

import copy
from datetime import datetime
from enum import Enum
from typing import Annotated, Any, Callable, ClassVar, Iterable, List, Literal, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .propositions import generate_id, negate_prop, utc_now


class ElementKind(str, Enum):
    """Kind tag of a justification element."""
    TOOL_RESULT = "tool_result"
    TESTIMONY = "testimony"
    OBSERVATION = "observation"
    INFERENCE = "inference"
    EXTERNAL = "external"


# Kinds whose influence depends on how far their source is trusted
TRUST_MODULATED_KINDS = frozenset({ElementKind.TESTIMONY, ElementKind.EXTERNAL})


# =============================================================================
# Structural cloning
# =============================================================================

def clone_content(value: Any) -> Any:
    """
    Structurally clone an element payload.

    Containers are rebuilt recursively, pydantic models are deep-copied and
    justifications keep their ids. Anything else goes through
    ``copy.deepcopy``.
    """
    if value is None or isinstance(value, (str, bytes, int, float, bool)):
        return value
    if isinstance(value, (Justification, BaseElement)):
        return value.clone()
    if isinstance(value, BaseModel):
        return value.model_copy(deep=True)
    if isinstance(value, dict):
        return {key: clone_content(item) for key, item in value.items()}
    if isinstance(value, list):
        return [clone_content(item) for item in value]
    if isinstance(value, tuple):
        return tuple(clone_content(item) for item in value)
    if isinstance(value, (set, frozenset)):
        return type(value)(clone_content(item) for item in value)
    return copy.deepcopy(value)


# =============================================================================
# Elements
# =============================================================================

class BaseElement(BaseModel):
    """Fields shared by every justification element."""
    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: generate_id("just_element"))
    kind: ElementKind
    source: str = Field(..., description="Origin of the element (tool id, agent id, sensor id)")
    content: Any = None
    timestamp: datetime = Field(default_factory=utc_now)

    def clone(self) -> "BaseElement":
        """Return a copy with the same id and a structurally cloned payload."""
        return self.model_copy(update={"content": clone_content(self.content)})

    def contradicts(self, proposition: str) -> bool:
        """
        True if this element directly asserts the negation of ``proposition``.

        Only inference conclusions, testimony and external claims can
        contradict; the check is a plain string comparison against the
        negated proposition.
        """
        negated = negate_prop(proposition)
        match self.kind:
            case ElementKind.INFERENCE | ElementKind.TESTIMONY | ElementKind.EXTERNAL:
                return isinstance(self.content, str) and self.content == negated
            case _:
                return False

    def describe(self) -> str:
        return f"{self.kind.value} from {self.source}"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BaseElement):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)


class ToolResultElement(BaseElement):
    """Evidence produced by executing a tool."""
    kind: Literal[ElementKind.TOOL_RESULT] = ElementKind.TOOL_RESULT

    def describe(self) -> str:
        return f"Tool result from {self.source}"


class TestimonyElement(BaseElement):
    """A claim made by another entity."""
    __test__: ClassVar[bool] = False

    kind: Literal[ElementKind.TESTIMONY] = ElementKind.TESTIMONY

    def describe(self) -> str:
        return f"Testimony from {self.source}"


class ObservationElement(BaseElement):
    """Direct observation from a sensor or perception channel."""
    kind: Literal[ElementKind.OBSERVATION] = ElementKind.OBSERVATION

    def describe(self) -> str:
        return f"Observation from {self.source}"


class InferenceElement(BaseElement):
    """A conclusion (``content``) derived from premises by an inference rule."""
    kind: Literal[ElementKind.INFERENCE] = ElementKind.INFERENCE
    premises: Tuple[str, ...] = Field(default_factory=tuple)
    inference_rule: str = Field(..., description="Name of the rule applied, e.g. 'modus_ponens'")

    def describe(self) -> str:
        return f"Inference ({self.inference_rule}) from premises: {', '.join(self.premises)}"


class ExternalElement(BaseElement):
    """A justification received from another agent, evaluated under its frame."""
    kind: Literal[ElementKind.EXTERNAL] = ElementKind.EXTERNAL
    source: str = "external_agent"
    external_justification: "Justification"
    source_frame_id: str

    @model_validator(mode="before")
    @classmethod
    def _content_is_embedded_justification(cls, data: Any) -> Any:
        if isinstance(data, dict) and data.get("content") is None and "external_justification" in data:
            data = {**data, "content": data["external_justification"]}
        return data

    def clone(self) -> "ExternalElement":
        embedded = self.external_justification.clone()
        return self.model_copy(update={"external_justification": embedded, "content": embedded})

    def describe(self) -> str:
        return f"External justification from {self.source} using frame {self.source_frame_id}"


JustificationElement = Annotated[
    Union[
        ToolResultElement,
        TestimonyElement,
        ObservationElement,
        InferenceElement,
        ExternalElement,
    ],
    Field(discriminator="kind"),
]


# =============================================================================
# Justification
# =============================================================================

class Justification(BaseModel):
    """Ordered evidence supporting a belief."""
    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: generate_id("justification"))
    elements: Tuple[JustificationElement, ...] = Field(default_factory=tuple)
    timestamp: datetime = Field(default_factory=utc_now, description="Last modification time")

    def elements_by_kind(self, kind: ElementKind) -> List[BaseElement]:
        return [element for element in self.elements if element.kind == kind]

    def elements_by_source(self, source: str) -> List[BaseElement]:
        return [element for element in self.elements if element.source == source]

    def elements_matching(self, predicate: Callable[[BaseElement], bool]) -> List[BaseElement]:
        return [element for element in self.elements if predicate(element)]

    def extend(self, elements: Iterable[BaseElement]) -> "Justification":
        """Append elements, keeping this justification's id."""
        return Justification(
            id=self.id,
            elements=self.elements + tuple(elements),
        )

    def merge(self, other: "Justification") -> "Justification":
        """Concatenate with another justification into a new one."""
        return Justification(elements=self.elements + other.elements)

    def clone(self) -> "Justification":
        return Justification(
            id=self.id,
            elements=tuple(element.clone() for element in self.elements),
            timestamp=self.timestamp,
        )

    def describe(self) -> str:
        if not self.elements:
            return "No justification provided"
        return "; ".join(element.describe() for element in self.elements)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Justification):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)


ExternalElement.model_rebuild()
Justification.model_rebuild()
