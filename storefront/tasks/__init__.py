"""
Customization Flow Engine.

- steps.py: Step sequencing (pure)
- history.py: Committed selections and the working buffer
- pricing.py: Running totals and cart line prices
- state_machine.py: FlowSession, the review/edit state machine
- customization.py: Ingredient customization sub-flow
- orchestrator.py: From a menu tap to a cart line
"""

from .models import FlowPhase, FlowResult
from .orchestrator import OrderingOrchestrator, OrderingOrchestratorResult
from .pricing import PricingEngine
from .state_machine import FlowSession
from .steps import compute_steps

__all__ = [
    "FlowPhase",
    "FlowResult",
    "OrderingOrchestrator",
    "OrderingOrchestratorResult",
    "PricingEngine",
    "FlowSession",
    "compute_steps",
]
