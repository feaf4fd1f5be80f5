from collections.abc import Callable

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from walletlens.container import Container
from walletlens.services.orchestrator import AnalyticsOrchestrator


@inject
def get_orchestrator_factory(
    factory: Callable[..., AnalyticsOrchestrator] = Depends(Provide[Container.orchestrator.provider]),
) -> Callable[..., AnalyticsOrchestrator]:
    """The orchestrator factory; callers pass the wallet sources per request."""
    return factory
