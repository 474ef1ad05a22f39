"""Shared fixtures: oracle doubles, frames and sample evidence."""

import os
import sys
from typing import Any, Callable, List, Optional, Union
from unittest.mock import AsyncMock, MagicMock

import pytest

# Add the project root to the path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from epistemics.belief.justification import (  # noqa: E402
    InferenceElement,
    ObservationElement,
    TestimonyElement,
    ToolResultElement,
)
from epistemics.oracle import EvidenceOracle  # noqa: E402

Judgment = Union[float, Callable[..., Any], BaseException]


def _async(value: Judgment) -> AsyncMock:
    if callable(value) or isinstance(value, BaseException):
        return AsyncMock(side_effect=value)
    return AsyncMock(return_value=value)


def make_oracle(
    strength: Judgment = 0.5,
    saliency: Judgment = 0.5,
    trust: Judgment = 0.5,
    interpretation: Any = None,
    propositions: Optional[List[str]] = None,
) -> MagicMock:
    """
    Oracle double whose judgments are fixed values, callables or exceptions.

    Callables receive the same arguments as the oracle method.
    """
    oracle = MagicMock(spec=EvidenceOracle)
    oracle.evidence_strength = _async(strength)
    oracle.evidence_saliency = _async(saliency)
    oracle.source_trust = _async(trust)
    oracle.interpret_perception_data = _async(interpretation if interpretation is not None else "interpreted")
    oracle.extract_relevant_propositions = _async(propositions if propositions is not None else [])
    return oracle


@pytest.fixture
def oracle_factory():
    return make_oracle


@pytest.fixture
def tool_element():
    return ToolResultElement(source="scanner-tool", content={"open_ports": [22, 443]})


@pytest.fixture
def observation_element():
    return ObservationElement(source="cpu-sensor", content={"load": 0.42})


@pytest.fixture
def testimony_element():
    return TestimonyElement(source="agent-b", content="The server looks fine")


@pytest.fixture
def inference_element():
    return InferenceElement(
        source="agent-a",
        content="ServerIsHealthy",
        premises=("PortsAreClosed", "LoadIsLow"),
        inference_rule="conjunction",
    )
