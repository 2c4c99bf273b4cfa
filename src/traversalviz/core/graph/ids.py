"""Node identifiers and their ordering.

Identifiers are integers or strings. Ordering is total across both kinds:
integers first in numeric order, then strings in lexicographic order.
"""

import re
from typing import Iterable, List, Tuple, Union

NodeId = Union[int, str]
EdgeKey = Tuple[NodeId, NodeId]


def node_sort_key(node_id: NodeId) -> Tuple[int, int, str]:
    """Sort key giving a total order over mixed int/str identifiers."""
    if isinstance(node_id, int) and not isinstance(node_id, bool):
        return (0, node_id, "")
    return (1, 0, str(node_id))


def sorted_ids(ids: Iterable[NodeId], reverse: bool = False) -> List[NodeId]:
    return sorted(ids, key=node_sort_key, reverse=reverse)


def canonical_edge(a: NodeId, b: NodeId) -> EdgeKey:
    """Return the undirected edge {a, b} as (min, max)."""
    if node_sort_key(b) < node_sort_key(a):
        return (b, a)
    return (a, b)


def coerce_node_id(token: str) -> NodeId:
    """Turn a text token into an id; ASCII decimal integers become ``int``."""
    token = token.strip()
    if re.fullmatch(r"-?[0-9]+", token):
        return int(token)
    return token