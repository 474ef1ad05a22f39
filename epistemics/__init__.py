"""
Agentic Epistemology Engine
===========================

Graded belief revision for autonomous agents: beliefs backed by typed
justifications, frames that turn evidence into confidence, and detection
and reconciliation of contradictory beliefs held by different agents.

Numeric evidence judgments are supplied by an injected oracle
(see ``epistemics.oracle``); implementations live in the ``oracles``
package.
"""
