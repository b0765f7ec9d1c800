# orrery/simulation/hierarchy.py
"""
Parent/child ordering and caller-side validation of body collections.

The Keplerian pass places a child relative to its parent's position, so parents
have to be resolved before their children within a step.
"""
import logging
from typing import Dict, List, Sequence

import numpy as np

log = logging.getLogger(__name__)


class OrbitHierarchyError(ValueError):
    """Raised when parent_id references form a cycle."""
    def __init__(self, cycle):
        self.cycle = list(cycle)
        super().__init__("parent_id cycle: " + " -> ".join(self.cycle))


def _index_by_id(bodies) -> Dict[str, int]:
    index = {}
    for i, b in enumerate(bodies):
        # first occurrence wins, matching a linear lookup
        index.setdefault(b.id, i)
    return index


_UNSEEN, _ON_PATH, _PLACED, _DEFERRED = range(4)


def _order(bodies, strict: bool) -> List[int]:
    index = _index_by_id(bodies)
    mark = [_UNSEEN] * len(bodies)
    order: List[int] = []
    deferred: List[int] = []

    for start in range(len(bodies)):
        if mark[start] != _UNSEEN:
            continue

        # walk up the parent chain until a root, a settled ancestor or a loop
        path = []
        i = start
        blocked = False
        while i is not None:
            if mark[i] == _ON_PATH:
                loop = path[path.index(i):]
                if strict:
                    err = OrbitHierarchyError([bodies[k].id for k in loop] + [bodies[i].id])
                    log.warning("%s", err)
                    raise err
                log.debug("parent_id cycle among %s; resolving in collection order",
                          ", ".join(bodies[k].id for k in loop))
                blocked = True
                break
            if mark[i] == _DEFERRED:
                blocked = True
                break
            if mark[i] == _PLACED:
                break
            mark[i] = _ON_PATH
            path.append(i)
            parent_id = bodies[i].parent_id
            i = index.get(parent_id) if parent_id is not None else None

        if blocked:
            # everything on this path depends on a cycle
            for k in path:
                mark[k] = _DEFERRED
            deferred.extend(path)
            continue

        # path runs child -> ancestor; ancestors go first
        for k in reversed(path):
            mark[k] = _PLACED
            order.append(k)

    order.extend(sorted(deferred))
    return order


def resolution_order(bodies: Sequence) -> List[int]:
    """
    Indices of `bodies` with every parent before its children.

    Never raises: members of a parent_id cycle are appended in collection order
    after everything else and the cycle is logged at DEBUG.
    """
    return _order(bodies, strict=False)


def parent_first_order(bodies: Sequence) -> List[int]:
    """Like resolution_order, but raises OrbitHierarchyError on a cycle."""
    return _order(bodies, strict=True)


def validate_bodies(bodies: Sequence) -> None:
    """
    Check a body collection before it reaches the engine.
    The engine itself never validates; it yields NaN for degenerate input.
    """
    problems = []
    seen = set()
    for b in bodies:
        if b.id in seen:
            problems.append(f"duplicate id '{b.id}'")
        seen.add(b.id)

    ids = seen
    for b in bodies:
        if not b.mass > 0:
            problems.append(f"{b.id}: mass must be > 0")
        if not (np.all(np.isfinite(b.position)) and np.all(np.isfinite(b.velocity))):
            problems.append(f"{b.id}: position and velocity must be finite")
        el = b.orbital_elements
        if b.is_locked and el is not None:
            if not el.semi_major_axis > 0:
                problems.append(f"{b.id}: semi_major_axis must be > 0")
            if not 0 <= el.eccentricity < 1:
                problems.append(f"{b.id}: eccentricity must be in [0, 1)")
        if b.parent_id is not None and b.parent_id not in ids:
            problems.append(f"{b.id}: unknown parent_id '{b.parent_id}'")

    if problems:
        raise ValueError("Invalid body collection: " + "; ".join(problems))

    parent_first_order(bodies)
