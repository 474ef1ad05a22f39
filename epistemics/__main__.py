"""
Belief-revision demo.

Two agents under different frames form beliefs on a proposition and its
negation, detect the conflict and try to resolve it.

Usage::

    python -m epistemics [--scenario general|sales|debate]
                         [--strategy volume|frame-aware] [--llm] [--seed N]

Uses the deterministic oracle unless ``--llm`` is given, in which case the
oracle model comes from ``EPISTEMICS_ORACLE_MODEL``.
"""

import argparse
import asyncio
import logging
import sys
from dataclasses import dataclass
from typing import List, Optional

from .belief.justification import (
    BaseElement,
    InferenceElement,
    ObservationElement,
    TestimonyElement,
    ToolResultElement,
)
from .belief.propositions import negate_prop
from .belief.store import BeliefStore, exchange_justifications
from .config import EngineSettings, build_exchange_strategy, load_settings
from .conflict.models import ConflictStatus
from .conflict.resolution import ConflictResolutionStrategy, FrameAwareExchangeStrategy
from .exceptions import EpistemicsError
from .frames.factory import create_frame
from .oracle import EvidenceOracle
from .perception import Goal, Perception

logger = logging.getLogger("epistemics")


@dataclass
class Scenario:
    proposition: str
    first_frame: str
    second_frame: str
    goal: str
    perception: dict
    first_evidence: List[BaseElement]
    second_evidence: List[BaseElement]


def build_scenario(name: str) -> Scenario:
    if name == "sales":
        return Scenario(
            proposition="ProductFitsBuyerBudget",
            first_frame="persuasive",
            second_frame="buyer",
            goal="Close the annual licence deal this quarter",
            perception={"quote": 48000, "budget": 45000, "currency": "USD"},
            first_evidence=[
                ToolResultElement(source="pricing-tool", content={"discounted_quote": 44500}),
                TestimonyElement(source="agent-account-manager", content="Buyer signalled flexibility"),
                InferenceElement(
                    source="seller",
                    content="ProductFitsBuyerBudget",
                    premises=("DiscountAvailable", "BudgetIsFlexible"),
                    inference_rule="modus_ponens",
                ),
            ],
            second_evidence=[
                ObservationElement(source="finance-report", content={"remaining_budget": 41000}),
            ],
        )
    if name == "debate":
        return Scenario(
            proposition="PolicyReducesCosts",
            first_frame="pro_debate",
            second_frame="con_debate",
            goal="Argue the motion on the public transit subsidy",
            perception={"motion": "Subsidise public transit", "round": 1},
            first_evidence=[
                TestimonyElement(source="agent-economist", content="Subsidies cut congestion costs"),
                InferenceElement(
                    source="pro",
                    content="PolicyReducesCosts",
                    premises=("CongestionFalls", "CongestionIsCostly"),
                    inference_rule="chain",
                ),
                ToolResultElement(source="cost-model-tool", content={"net_saving_musd": 12.5}),
            ],
            second_evidence=[
                InferenceElement(
                    source="con",
                    content=negate_prop("PolicyReducesCosts"),
                    premises=("SubsidyIsRecurring",),
                    inference_rule="cost_accounting",
                ),
            ],
        )
    return Scenario(
        proposition="DeploymentIsReady",
        first_frame="efficiency",
        second_frame="security",
        goal="Ship release 2.4 today",
        perception={"tests_passed": 412, "tests_failed": 0, "open_cves": 1},
        first_evidence=[
            ToolResultElement(source="ci-tool", content={"status": "green"}),
            ObservationElement(source="latency-monitor", content={"p99_ms": 180}),
            InferenceElement(
                source="agent-a",
                content="DeploymentIsReady",
                premises=("TestsPass", "LatencyIsLow"),
                inference_rule="conjunction",
            ),
        ],
        second_evidence=[
            ToolResultElement(source="security-scan-tool", content={"open_cves": 1, "severity": "high"}),
        ],
    )


def build_strategy(
    name: str,
    settings: EngineSettings,
    stores: List[BeliefStore],
    oracle: EvidenceOracle,
    seed: Optional[int],
) -> ConflictResolutionStrategy:
    if name == "frame-aware":
        return FrameAwareExchangeStrategy(
            oracle,
            {store.agent_id: store.frame for store in stores},
            confidence_revision_threshold=settings.revision_threshold,
        )
    if seed is not None:
        settings = settings.model_copy(update={"resolution_seed": seed})
    return build_exchange_strategy(settings)


def build_oracle(use_llm: bool, settings: EngineSettings) -> EvidenceOracle:
    if use_llm:
        from oracles.llm_oracle import LLMEvidenceOracle

        return LLMEvidenceOracle.from_model_key(
            settings.oracle_model,
            temperature=settings.oracle_temperature,
            timeout_seconds=settings.oracle_timeout_seconds,
        )

    from oracles.static_oracle import StaticOracle

    return StaticOracle()


async def run(args: argparse.Namespace, settings: EngineSettings) -> int:
    scenario = build_scenario(args.scenario)
    oracle = build_oracle(args.llm, settings)

    first = BeliefStore("agent-a", create_frame(scenario.first_frame), settings.thresholds)
    second = BeliefStore("agent-b", create_frame(scenario.second_frame), settings.thresholds)

    perception = Perception(data=scenario.perception, source="environment")
    interpreted = await first.frame.interpret_perception(perception, oracle)
    salient = await first.frame.get_relevant_propositions(Goal(description=scenario.goal), oracle)
    print(f"{first.agent_id} [{first.frame.name}] sees: {interpreted.data}")
    print(f"{first.agent_id} finds salient: {', '.join(salient) or '(nothing)'}")

    await first.form_belief(scenario.proposition, scenario.first_evidence, oracle)
    await second.form_belief(negate_prop(scenario.proposition), scenario.second_evidence, oracle)
    for store in (first, second):
        for belief in store.beliefs().values():
            print(f"{store.agent_id} [{store.frame.name}] believes {belief.describe()}")

    conflicts = first.detect_conflicts(second)
    if not conflicts:
        print("No conflicts above the conflict threshold.")
        return 0

    strategy = build_strategy(args.strategy, settings, [first, second], oracle, args.seed)
    for conflict in conflicts:
        print(conflict.describe())
        conflict.mark_in_progress()
        result = await strategy.resolve_conflict(conflict)
        conflict.apply_result(result)
        first.apply_resolution(conflict)
        second.apply_resolution(conflict)
        print(
            f"  -> {conflict.status.value}: {result.type.value} "
            f"(delta {result.belief_delta:+.3f} / {result.contradictory_belief_delta:+.3f})"
        )

        if conflict.status is ConflictStatus.PERSISTENT:
            await exchange_justifications(conflict, first, second, oracle)
            print("  -> justifications exchanged")

    for store in (first, second):
        for belief in store.beliefs().values():
            print(f"{store.agent_id} now believes {belief.describe()}")
        acting = [belief.proposition for belief in store.above_threshold()]
        sharing = [belief.proposition for belief in store.shareable_beliefs()]
        print(f"{store.agent_id} acts on: {', '.join(acting) or '(nothing)'}; shares: {', '.join(sharing) or '(nothing)'}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="epistemics", description="Belief-revision demo")
    parser.add_argument("--scenario", choices=("general", "sales", "debate"), default="general")
    parser.add_argument("--strategy", choices=("volume", "frame-aware"), default="volume")
    parser.add_argument("--llm", action="store_true", help="Use the LLM-backed oracle")
    parser.add_argument("--seed", type=int, default=None, help="Seed for resolution jitter")
    args = parser.parse_args(argv)

    settings = load_settings()
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        stream=sys.stderr,
    )

    try:
        return asyncio.run(run(args, settings))
    except EpistemicsError as exc:
        logger.error("Demo failed: %s", exc, extra={"error": exc.to_dict()})
        return 1


if __name__ == "__main__":
    sys.exit(main())
