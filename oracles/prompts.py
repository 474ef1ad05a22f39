"""
Prompt builders for the LLM evidence oracle.

Numeric judgments ask for a bare number so replies can be validated
strictly; anything else in the reply is treated as a failed judgment.
"""

import json
from typing import Any

from epistemics.belief.justification import BaseElement
from epistemics.frames.frame import Frame

NUMBER_ONLY = "Do not include any explanation, units, or other text. Just the number."


def render_payload(payload: Any) -> str:
    """Render a payload for inclusion in a prompt."""
    if isinstance(payload, str):
        return payload
    if hasattr(payload, "model_dump"):
        payload = payload.model_dump(mode="json")
    return json.dumps(payload, default=str, ensure_ascii=False)


def _element_details(element: BaseElement) -> str:
    return (
        "Evidence Details:\n"
        f"- Type: {element.kind.value}\n"
        f"- Source: {element.source}\n"
        f"- Content: {render_payload(element.content)}\n"
    )


def _frame_header(frame: Frame) -> str:
    return (
        f'You are an agent operating under the cognitive frame "{frame.name}".\n'
        f'Frame Description: "{frame.description}".\n\n'
    )


def build_evidence_strength_prompt(element: BaseElement, proposition: str) -> str:
    return f"""Evaluate how strongly the following piece of evidence supports or contradicts the given proposition.

Proposition: "{proposition}"

{_element_details(element)}
Instructions:
Return ONLY a single numerical score between 0.0 and 1.0.
 - 1.0 means the evidence strongly supports the proposition.
 - 0.0 means the evidence strongly contradicts the proposition.
 - 0.5 means the evidence is neutral, irrelevant, or ambiguous.
{NUMBER_ONLY}"""


def build_evidence_saliency_prompt(element: BaseElement, frame: Frame) -> str:
    return f"""You are evaluating evidence for an agent whose current cognitive frame is "{frame.name}".
This frame prioritizes: "{frame.description}".

Evaluate ONLY the SALIENCY (relevance and importance) of the following piece of evidence \
from the perspective of the {frame.name} frame. How much attention should the agent pay to it?

{_element_details(element)}
Instructions:
Return ONLY a single numerical score between 0.0 and 1.0.
 - 1.0 means the evidence is highly salient and important for this frame.
 - 0.0 means the evidence is irrelevant or should be ignored by this frame.
 - 0.5 means the evidence has moderate or ambiguous saliency.
{NUMBER_ONLY}"""


def build_source_trust_prompt(source_id: str, frame: Frame) -> str:
    return f"""{_frame_header(frame)}Evaluate how trustworthy the following evidence source should be considered, given this frame:

Source ID: "{source_id}"

Instructions:
Return ONLY a single numerical score between 0.0 and 1.0.
 - 1.0 means the source is highly trustworthy for this frame.
 - 0.0 means the source is highly untrustworthy for this frame.
 - 0.5 means the source has neutral or unknown trustworthiness.
Consider the frame's priorities (a Security frame distrusts unknown sources more than an Efficiency frame).
{NUMBER_ONLY}"""


def build_interpret_perception_prompt(payload: Any, frame: Frame) -> str:
    return f"""{_frame_header(frame)}The following data was just perceived:
```
{render_payload(payload)}
```

Instructions:
Interpret this data based on your current frame. Focus on the aspects most relevant to your frame's priorities.
Provide a concise summary or reinterpretation of the data, extracting the parts most salient to your frame."""


def build_extract_propositions_prompt(payload: Any, frame: Frame) -> str:
    return f"""{_frame_header(frame)}Consider the following source data (from a perception or a goal description):
```
{render_payload(payload)}
```

Instructions:
Identify the key propositions implied by this data that are relevant to your current frame.
Focus on statements that could become beliefs for the agent.
Return ONLY a list of propositions, each on a new line.
Do not include numbering, bullet points, or any explanation."""
