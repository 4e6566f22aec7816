"""
Categorical encoding registry.

Centralized enum->number mappings so every module scores categories the same way.
"""

from netprophet.core.schema import InjuryStatus, Outcome, Side

# Ordinal health: Healthy > Minor > Major
INJURY_ORDINAL = {
    InjuryStatus.HEALTHY: 2,
    InjuryStatus.MINOR: 1,
    InjuryStatus.MAJOR: 0,
}

OUTCOME_SIGN = {
    Outcome.WIN: 1.0,
    Outcome.LOSS: -1.0,
}

SIDE_SIGN = {
    Side.A: 1.0,
    Side.B: -1.0,
}
