"""
Tests for the evidence oracle implementations.

Covers:
  - oracles.llm_oracle: reply parsing, LLMEvidenceOracle judgments and fallbacks
  - oracles.llm_config / oracles.providers: model registry and provider adapters
  - oracles.static_oracle.StaticOracle
  - oracles.prompts
"""

import asyncio
import math
import os
import sys
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from langchain_core.messages import AIMessage, HumanMessage

from epistemics.belief.justification import ExternalElement, Justification, TestimonyElement
from epistemics.exceptions import ConfigurationError, MissingCredentialsError, OracleError, UnknownModelError
from epistemics.frames import create_frame
from oracles import LLMEvidenceOracle, StaticOracle, parse_score
from oracles.llm_config import DEFAULT_ORACLE_MODEL, ModelProvider, get_model_config
from oracles.llm_oracle import message_text, parse_propositions
from oracles.prompts import build_evidence_strength_prompt, build_source_trust_prompt, render_payload
from oracles.providers import AnthropicProvider, GroqProvider, OllamaProvider, get_provider


def make_llm(reply="0.5"):
    """Chat model double; ``reply`` is the message content or a side effect."""
    llm = MagicMock()
    if callable(reply) or isinstance(reply, BaseException):
        llm.ainvoke = AsyncMock(side_effect=reply)
    else:
        llm.ainvoke = AsyncMock(return_value=AIMessage(content=reply))
    return llm


# =============================================================================
# Reply parsing
# =============================================================================


class TestReplyParsing:

    @pytest.mark.parametrize("text, expected", [
        ("0", 0.0), ("1", 1.0), ("0.73", 0.73), ("1.0", 1.0), ("  0.25\n", 0.25),
    ])
    def test_bare_numbers(self, text, expected):
        assert math.isclose(parse_score(text), expected)

    @pytest.mark.parametrize("text", ["1.5", "-0.2", "0.7 because", "Score: 0.7", "", "seventy", ".5", "1.01"])
    def test_rejects_everything_else(self, text):
        with pytest.raises(OracleError) as exc_info:
            parse_score(text)
        assert exc_info.value.context["operation"] == "parse_score"

    def test_message_text(self):
        assert message_text(AIMessage(content="0.4")) == "0.4"
        assert message_text(AIMessage(content=[{"type": "text", "text": "0."}, {"type": "text", "text": "9"}])) == "0.9"
        assert message_text(MagicMock(content=["0.", {"type": "tool_use", "id": "x"}, "1"])) == "0.1"
        assert message_text(MagicMock(content=None)) == ""
        assert message_text("plain") == "plain"

    def test_parse_propositions(self):
        text = "- ServerIsHealthy\n2. DiskHasSpace\n\n* CacheIsWarm  \n"
        assert parse_propositions(text) == ["ServerIsHealthy", "DiskHasSpace", "CacheIsWarm"]


# =============================================================================
# LLM oracle
# =============================================================================


class TestLLMEvidenceOracle:

    @pytest.mark.asyncio
    async def test_strength_judgment(self, tool_element):
        llm = make_llm("0.82")
        oracle = LLMEvidenceOracle(llm)

        assert math.isclose(await oracle.evidence_strength(tool_element, "PortsAreClosed"), 0.82)

        messages = llm.ainvoke.await_args.args[0]
        assert len(messages) == 1
        assert isinstance(messages[0], HumanMessage)
        assert "PortsAreClosed" in messages[0].content
        assert "scanner-tool" in messages[0].content

    @pytest.mark.asyncio
    async def test_saliency_and_trust(self, tool_element):
        frame = create_frame("security")
        oracle = LLMEvidenceOracle(make_llm("1"))

        assert await oracle.evidence_saliency(tool_element, frame) == 1.0
        assert await oracle.source_trust("agent-b", frame) == 1.0

    @pytest.mark.asyncio
    @pytest.mark.parametrize("reply", ["1.4", "probably 0.8", RuntimeError("rate limited")])
    async def test_failed_judgment_is_neutral(self, tool_element, reply):
        oracle = LLMEvidenceOracle(make_llm(reply))
        assert await oracle.evidence_strength(tool_element, "P") == 0.5

    @pytest.mark.asyncio
    async def test_timeout_is_neutral(self, tool_element):
        async def slow(*args, **kwargs):
            await asyncio.sleep(1)
            return AIMessage(content="0.9")

        oracle = LLMEvidenceOracle(make_llm(slow), timeout_seconds=0.01)
        assert await oracle.evidence_strength(tool_element, "P") == 0.5

    @pytest.mark.asyncio
    async def test_list_content_reply(self, testimony_element):
        llm = make_llm([{"type": "text", "text": "0.35"}])
        oracle = LLMEvidenceOracle(llm)
        assert math.isclose(await oracle.evidence_strength(testimony_element, "P"), 0.35)

    @pytest.mark.asyncio
    async def test_interpretation(self):
        frame = create_frame("efficiency")
        oracle = LLMEvidenceOracle(make_llm("  Latency is fine, no action needed.  "))
        assert await oracle.interpret_perception_data({"p99_ms": 12}, frame) == "Latency is fine, no action needed."

    @pytest.mark.asyncio
    @pytest.mark.parametrize("reply", ["   ", ConnectionError("offline")])
    async def test_interpretation_falls_back_to_payload(self, reply):
        payload = {"p99_ms": 12}
        oracle = LLMEvidenceOracle(make_llm(reply))
        assert await oracle.interpret_perception_data(payload, create_frame("efficiency")) is payload

    @pytest.mark.asyncio
    async def test_extraction(self):
        oracle = LLMEvidenceOracle(make_llm("1. LatencyIsLow\n2. ErrorRateIsLow"))
        propositions = await oracle.extract_relevant_propositions("dashboard", create_frame("efficiency"))
        assert propositions == ["LatencyIsLow", "ErrorRateIsLow"]

    @pytest.mark.asyncio
    async def test_extraction_failure_is_empty(self):
        oracle = LLMEvidenceOracle(make_llm(RuntimeError("boom")))
        assert await oracle.extract_relevant_propositions("dashboard", create_frame("efficiency")) == []

    @pytest.mark.asyncio
    async def test_drives_frame_update(self, tool_element):
        """An LLM-backed oracle plugs straight into the confidence laws."""
        replies = iter(["0.5", "1"])

        async def answer(*args, **kwargs):
            return AIMessage(content=next(replies))

        oracle = LLMEvidenceOracle(make_llm(answer))
        result = await create_frame("efficiency").update_confidence("P", 0.5, None, [tool_element], oracle)
        assert math.isclose(result, 0.75)


class TestFromModelKey:

    def test_unknown_key(self):
        with pytest.raises(UnknownModelError) as exc_info:
            LLMEvidenceOracle.from_model_key("gpt-99")
        assert DEFAULT_ORACLE_MODEL in exc_info.value.context["available"]

    def test_missing_api_key(self):
        with patch.dict(os.environ, {}, clear=True):
            with pytest.raises(MissingCredentialsError) as exc_info:
                LLMEvidenceOracle.from_model_key("claude-haiku")
        assert "ANTHROPIC_API_KEY" in str(exc_info.value)

    def test_builds_chat_anthropic(self):
        with patch.dict(os.environ, {"ANTHROPIC_API_KEY": "test-key"}), \
             patch("oracles.providers.anthropic_provider.ChatAnthropic") as chat_cls:
            oracle = LLMEvidenceOracle.from_model_key("claude-haiku", temperature=0.2, timeout_seconds=5)

        chat_cls.assert_called_once_with(
            model="claude-3-5-haiku-latest",
            anthropic_api_key="test-key",
            temperature=0.2,
            max_tokens=256,
        )
        assert oracle.llm is chat_cls.return_value
        assert oracle.timeout_seconds == 5

    def test_groq_without_package(self):
        with patch.dict(sys.modules, {"langchain_groq": None}):
            with pytest.raises(ConfigurationError) as exc_info:
                GroqProvider().create_llm(get_model_config("groq-llama-70b"))
        assert "langchain-groq" in str(exc_info.value)

    def test_ollama_without_package(self):
        with patch.dict(sys.modules, {"langchain_ollama": None}):
            with pytest.raises(ConfigurationError):
                OllamaProvider().create_llm(get_model_config("phi-4"))


# =============================================================================
# Registry and providers
# =============================================================================


class TestModelRegistry:

    def test_default_model_is_registered(self):
        config = get_model_config(DEFAULT_ORACLE_MODEL)
        assert config.provider is ModelProvider.ANTHROPIC

    def test_get_provider(self):
        assert isinstance(get_provider(ModelProvider.ANTHROPIC), AnthropicProvider)
        assert get_provider("groq").provider_name == "Groq"

    def test_unknown_provider(self):
        with pytest.raises(ConfigurationError):
            get_provider("openai")


# =============================================================================
# Static oracle
# =============================================================================


class TestStaticOracle:

    @pytest.mark.asyncio
    async def test_strength_by_kind_and_override(self, tool_element, testimony_element):
        oracle = StaticOracle(strengths={testimony_element.id: 0.1})
        assert await oracle.evidence_strength(tool_element, "P") == 0.85
        assert await oracle.evidence_strength(testimony_element, "P") == 0.1

    @pytest.mark.asyncio
    async def test_saliency_is_frame_weight(self, tool_element, testimony_element):
        oracle = StaticOracle()
        frame = create_frame("security")
        assert await oracle.evidence_saliency(tool_element, frame) == 0.8
        assert await oracle.evidence_saliency(testimony_element, frame) == 0.4

    @pytest.mark.asyncio
    @pytest.mark.parametrize("source, expected", [
        ("scanner-tool", 0.8),
        ("agent-b", 0.7),
        ("anonymous", 0.6),
        ("vip", 0.95),
    ])
    async def test_source_trust(self, source, expected):
        oracle = StaticOracle(source_trust={"vip": 0.95})
        assert await oracle.source_trust(source, create_frame("efficiency")) == expected

    @pytest.mark.asyncio
    async def test_interpretation(self):
        oracle = StaticOracle()
        frame = create_frame("thoroughness")
        assert await oracle.interpret_perception_data({"a": 1}, frame) == {
            "a": 1, "interpretation": "Interpreted through Thoroughness frame",
        }
        assert (await oracle.interpret_perception_data("text", frame))["data"] == "text"

    @pytest.mark.asyncio
    async def test_propositions_per_frame(self):
        oracle = StaticOracle()
        assert "DataIsProtected" in await oracle.extract_relevant_propositions(None, create_frame("security"))
        assert await oracle.extract_relevant_propositions(None, create_frame("buyer")) == [
            "DefaultProposition1", "DefaultProposition2",
        ]


# =============================================================================
# Prompts
# =============================================================================


class TestPrompts:

    def test_strength_prompt_demands_bare_number(self, inference_element):
        prompt = build_evidence_strength_prompt(inference_element, "ServerIsHealthy")
        assert "ServerIsHealthy" in prompt
        assert "inference" in prompt
        assert "Just the number." in prompt

    def test_trust_prompt_names_frame(self):
        prompt = build_source_trust_prompt("agent-b", create_frame("buyer"))
        assert "Realistic Buyer" in prompt
        assert "agent-b" in prompt

    def test_render_payload(self, tool_element):
        assert render_payload("raw") == "raw"
        assert render_payload({"x": 1}) == '{"x": 1}'
        embedded = Justification(elements=(tool_element,))
        element = ExternalElement(source="agent-a", external_justification=embedded, source_frame_id="efficiency")
        assert "scanner-tool" in render_payload(element.content)

    def test_testimony_content_rendered(self):
        element = TestimonyElement(source="agent-b", content="Budget approved")
        assert "Budget approved" in build_evidence_strength_prompt(element, "DealCloses")
