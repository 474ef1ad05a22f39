"""
Tests for the justification model.

Covers:
  - epistemics.belief.justification: element variants, contradiction check,
    cloning, Justification filtering / merge / extend / clone / describe
"""

import pytest
from pydantic import ValidationError as PydanticValidationError

from epistemics.belief.justification import (
    ElementKind,
    ExternalElement,
    InferenceElement,
    Justification,
    ObservationElement,
    TestimonyElement,
    ToolResultElement,
    clone_content,
)


# =============================================================================
# Elements
# =============================================================================


class TestElements:
    """Typed, immutable evidence units."""

    def test_kind_tags(self, tool_element, observation_element, testimony_element, inference_element):
        assert tool_element.kind is ElementKind.TOOL_RESULT
        assert observation_element.kind is ElementKind.OBSERVATION
        assert testimony_element.kind is ElementKind.TESTIMONY
        assert inference_element.kind is ElementKind.INFERENCE

    def test_ids_are_prefixed(self, tool_element):
        assert tool_element.id.startswith("just_element_")

    def test_elements_are_frozen(self, tool_element):
        with pytest.raises(PydanticValidationError):
            tool_element.source = "other"

    def test_external_content_is_embedded_justification(self, tool_element):
        embedded = Justification(elements=(tool_element,))
        element = ExternalElement(external_justification=embedded, source_frame_id="efficiency")
        assert element.content == embedded
        assert element.source == "external_agent"
        assert element.kind is ElementKind.EXTERNAL

    def test_union_is_discriminated_by_kind(self):
        justification = Justification(elements=[
            {"kind": "tool_result", "source": "ci-tool", "content": "green"},
            {"kind": "inference", "source": "a", "content": "P", "inference_rule": "mp", "premises": ["Q"]},
        ])
        assert isinstance(justification.elements[0], ToolResultElement)
        assert isinstance(justification.elements[1], InferenceElement)
        assert justification.elements[1].premises == ("Q",)

    def test_describe(self, tool_element, inference_element):
        assert tool_element.describe() == "Tool result from scanner-tool"
        assert inference_element.describe() == (
            "Inference (conjunction) from premises: PortsAreClosed, LoadIsLow"
        )

    def test_equality_by_id(self, tool_element):
        twin = ToolResultElement(id=tool_element.id, source="somewhere-else", content=None)
        assert twin == tool_element
        assert hash(twin) == hash(tool_element)
        assert ToolResultElement(source="scanner-tool", content=tool_element.content) != tool_element


class TestElementContradiction:
    """Only inference, testimony and external content can contradict."""

    def test_negated_inference_contradicts(self):
        element = InferenceElement(source="a", content="¬P", inference_rule="mp")
        assert element.contradicts("P")

    def test_negated_testimony_contradicts(self):
        assert TestimonyElement(source="b", content="P").contradicts("¬P")

    def test_supporting_testimony_does_not_contradict(self):
        assert not TestimonyElement(source="b", content="P").contradicts("P")

    def test_tool_results_and_observations_never_contradict(self):
        assert not ToolResultElement(source="t", content="¬P").contradicts("P")
        assert not ObservationElement(source="s", content="¬P").contradicts("P")

    def test_non_string_content_never_contradicts(self):
        assert not TestimonyElement(source="b", content={"claim": "¬P"}).contradicts("P")


# =============================================================================
# Cloning
# =============================================================================


class TestCloning:
    """Structural clones keep ids and detach payloads."""

    def test_element_clone_keeps_id_and_copies_content(self):
        content = {"ports": [22, 443], "meta": {"host": "web-1"}}
        element = ToolResultElement(source="scanner", content=content)
        clone = element.clone()

        assert clone.id == element.id
        assert clone.content == content
        assert clone.content is not element.content
        clone.content["ports"].append(8080)
        assert element.content["ports"] == [22, 443]

    def test_clone_content_handles_containers(self):
        value = {"tuple": (1, [2]), "set": frozenset({3}), "text": "x"}
        clone = clone_content(value)
        assert clone == value
        assert clone["tuple"][1] is not value["tuple"][1]

    def test_external_clone_clones_embedded_justification(self, tool_element):
        embedded = Justification(elements=(tool_element,))
        element = ExternalElement(source="agent-b", external_justification=embedded, source_frame_id="security")
        clone = element.clone()
        assert clone.id == element.id
        assert clone.external_justification == embedded
        assert clone.content is clone.external_justification

    def test_justification_clone_keeps_ids(self, tool_element, testimony_element):
        justification = Justification(elements=(tool_element, testimony_element))
        clone = justification.clone()
        assert clone.id == justification.id
        assert [e.id for e in clone.elements] == [e.id for e in justification.elements]


# =============================================================================
# Justification
# =============================================================================


class TestJustification:
    """Ordered, append-only evidence collections."""

    def test_filters_preserve_order(self, tool_element, testimony_element, observation_element):
        second_tool = ToolResultElement(source="other-tool", content=1)
        justification = Justification(elements=(tool_element, testimony_element, second_tool, observation_element))

        assert justification.elements_by_kind(ElementKind.TOOL_RESULT) == [tool_element, second_tool]
        assert justification.elements_by_source("agent-b") == [testimony_element]
        assert justification.elements_matching(lambda e: e.kind != ElementKind.TOOL_RESULT) == [
            testimony_element, observation_element,
        ]

    def test_merge_concatenates_in_order(self, tool_element, testimony_element, observation_element):
        first = Justification(elements=(tool_element, testimony_element))
        second = Justification(elements=(observation_element,))
        merged = first.merge(second)

        assert len(merged.elements) == len(first.elements) + len(second.elements)
        assert list(merged.elements) == [tool_element, testimony_element, observation_element]
        assert merged.id != first.id
        assert len(first.elements) == 2

    def test_extend_keeps_id(self, tool_element, observation_element):
        justification = Justification(elements=(tool_element,))
        extended = justification.extend([observation_element])
        assert extended.id == justification.id
        assert list(extended.elements) == [tool_element, observation_element]
        assert extended.timestamp >= justification.timestamp

    def test_equality_by_id_only(self, tool_element):
        justification = Justification(elements=(tool_element,))
        assert justification.extend([]) == justification
        assert Justification(elements=(tool_element,)) != justification

    def test_describe(self, tool_element, testimony_element):
        assert Justification().describe() == "No justification provided"
        assert Justification(elements=(tool_element, testimony_element)).describe() == (
            "Tool result from scanner-tool; Testimony from agent-b"
        )
