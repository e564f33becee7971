"""
Step Sequencer for the customization flow.

Computes the ordered list of step tokens for an item. The result depends on
runtime catalog data and on the flow mode, so it is recomputed from scratch
whenever the flow needs it instead of being cached on the session.

Step tokens are the literals ``Meat``, ``Variation``, ``Addon``, or an
option group id.
"""

import logging
from typing import List, Mapping, Optional, Sequence

from ..schemas.catalog import FlowGroup, FlowMode, MenuItem, OptionGroup
from .models import ADDON_STEP, MEAT_STEP, VARIATION_STEP

logger = logging.getLogger(__name__)


def _linked_group_tokens(item: MenuItem, groups: Mapping[str, OptionGroup]) -> List[str]:
    """Linked group ids that resolve to a main-flow group, in link order."""
    tokens = []
    for gid in item.linked_option_group_ids:
        group = groups.get(gid)
        if group is None:
            # Deleted from the catalog after being linked; never block the flow on it
            logger.debug("Skipping unresolvable option group %s on item %s", gid, item.id)
            continue
        if group.is_customization:
            continue
        tokens.append(gid)
    return tokens


def candidate_steps(
    item: MenuItem,
    groups: Mapping[str, OptionGroup],
    flow_group: Optional[FlowGroup] = None,
    mode: Optional[FlowMode] = None,
) -> List[str]:
    """
    All step tokens an item could show, before display-mode filtering.

    Flow-group flows lead with ``Variation`` (preceded by ``Meat`` when the
    flow group configures a meat step for the mode). Direct flows use the
    linked groups, or a single ``Addon`` step for items that only carry
    inline options.
    """
    if flow_group is not None:
        leading = []
        if MEAT_STEP in flow_group.steps_for(mode or FlowMode.ALA_CARTE):
            leading.append(MEAT_STEP)
        leading.append(VARIATION_STEP)
        return leading + _linked_group_tokens(item, groups)

    if item.linked_option_group_ids:
        return _linked_group_tokens(item, groups)
    if item.options:
        return [ADDON_STEP]
    return []


def _shows_in_mode(token: str, groups: Mapping[str, OptionGroup], mode: Optional[FlowMode]) -> bool:
    if mode is None:
        return True
    group = groups.get(token)
    if group is None:
        return True
    return group.shows_in(mode)


def compute_steps(
    item: MenuItem,
    groups: Mapping[str, OptionGroup],
    mode: Optional[FlowMode],
    flow_group: Optional[FlowGroup] = None,
    visited: Sequence[str] = (),
) -> List[str]:
    """
    Compute the ordered step list for an item.

    Args:
        item: The item being customized.
        groups: Option groups keyed by id.
        mode: Current flow mode. ``None`` means the mode is not known yet and
            no display-mode filtering is applied.
        flow_group: Category-level flow trigger, if the flow was started by one.
        visited: Tokens of the steps already committed, in order. They are
            kept as the prefix of the result; only the remainder after them
            is recomputed, so a mode switch can never reshuffle steps the
            customer has already passed.

    Returns:
        Ordered list of step tokens (possibly empty).
    """
    candidates = candidate_steps(item, groups, flow_group, mode)

    if not visited:
        return [t for t in candidates if _shows_in_mode(t, groups, mode)]

    prefix = list(visited)
    pos = 0
    for token in prefix:
        try:
            pos = candidates.index(token, pos) + 1
        except ValueError:
            # Visited token no longer offered (item swapped or catalog edited)
            continue

    remainder = [t for t in candidates[pos:] if _shows_in_mode(t, groups, mode)]
    return prefix + remainder
