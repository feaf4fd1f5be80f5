"""What-if scenarios: rescale some positions and compare against today's value."""

from collections.abc import Sequence
from datetime import date, datetime, timezone

from walletlens.analytics.risk import total_value
from walletlens.domain.models.insights import ScenarioDefinition, WhatIfScenario
from walletlens.domain.models.market import Holding


def apply_scenario(holdings: Sequence[Holding], scenario: ScenarioDefinition, on: date) -> WhatIfScenario:
    current = total_value(holdings)
    affected = {s.upper() for s in scenario.symbols}
    alternative = current
    for h in holdings:
        if h.symbol.upper() in affected:
            alternative += h.usd_value * (scenario.multiplier - 1)

    difference = alternative - current
    return WhatIfScenario(
        scenario=scenario.name,
        description=scenario.description,
        symbols=scenario.symbols,
        current_value=current,
        alternative_value=alternative,
        difference=difference,
        percentage_change=difference / current * 100 if current > 0 else 0.0,
        date=on,
    )


def what_if(
    holdings: Sequence[Holding],
    scenarios: Sequence[ScenarioDefinition],
    on: date | None = None,
) -> list[WhatIfScenario]:
    """One result per scenario, in input order. Unknown symbols leave the value unchanged."""
    on = on or datetime.now(timezone.utc).date()
    return [apply_scenario(holdings, s, on) for s in scenarios]
