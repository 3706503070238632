"""
layout_strategies — Pluggable auto layout strategies.

Batch placement for elements that already carry approximate sizes:

- GridStrategy: Near-square grid, row-major
- StackStrategy: Top-to-bottom at the left margin
- FlowStrategy: Left-to-right with row wrapping

Any result can be passed through resolve_overlaps() to push apart elements
that still collide.
"""

from .base_strategy import (
    BaseLayoutStrategy,
    StrategyResult,
    LayoutElement,
    elements_overlap,
    resolve_overlaps,
    MAX_PLACEMENT_ATTEMPTS,
)
from .grid_strategy import GridStrategy
from .stack_strategy import StackStrategy
from .flow_strategy import FlowStrategy

__all__ = [
    'BaseLayoutStrategy',
    'StrategyResult',
    'LayoutElement',
    'elements_overlap',
    'resolve_overlaps',
    'MAX_PLACEMENT_ATTEMPTS',
    'GridStrategy',
    'StackStrategy',
    'FlowStrategy',
    'get_strategy',
    'STRATEGIES',
]


# Strategy registry for lookup by name
STRATEGIES = {
    'grid': GridStrategy,
    'stack': StackStrategy,
    'flow': FlowStrategy,
}


def get_strategy(strategy_name: str, **kwargs) -> BaseLayoutStrategy:
    """Get a strategy instance by name. kwargs (margin, gap) go to the constructor."""
    strategy_class = STRATEGIES.get(strategy_name.lower())
    if not strategy_class:
        raise ValueError(f"Unknown strategy: {strategy_name}. Available: {list(STRATEGIES.keys())}")
    return strategy_class(**kwargs)
