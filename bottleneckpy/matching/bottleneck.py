"""
Bottleneck distance between persistence diagrams.

The distance is the smallest r for which the threshold graph of the
persistence graph has a perfect matching. It is found by search over r:
- exact (e == 0): binary search over the sorted candidate distances
- approximate (e > 0): geometric shrinking of [0, diameter bound]
"""

import logging
from typing import Optional, Sequence

from bottleneckpy.config.dataclasses import BottleneckConfig
from bottleneckpy.diagrams.graph import PersistenceGraph
from bottleneckpy.io.persistence import read_persistence_intervals_in_one_dimension_from_file
from bottleneckpy.matching.graph_matching import GraphMatching

logger = logging.getLogger(__name__)


def _saturate(m: GraphMatching, r: float) -> None:
    m.set_r(r)
    while m.multi_augment():
        pass


def bottleneck_distance_exact(graph: PersistenceGraph) -> float:
    """
    Exact bottleneck distance of a persistence graph.

    Parameters
    ----------
    graph : PersistenceGraph
        Point cloud of the two diagrams.

    Returns
    -------
    float
        The smallest candidate distance admitting a perfect matching.
    """
    sd = graph.sorted_distances()
    idmin = 0
    idmax = len(sd) - 1
    m = GraphMatching(graph)
    biggest_unperfect = GraphMatching(graph)
    while idmin != idmax:
        step = (idmax - idmin) // 2
        r = sd[idmin + step]
        if r == 0.0:
            # no candidate lies strictly between 0 and sd[1], and the
            # planar grid needs a positive cell size
            r = sd[1] / 2
        _saturate(m, r)
        if m.perfect():
            logger.debug(f"Perfect matching at r={sd[idmin + step]:.6g}")
            idmax = idmin + step
            m = biggest_unperfect.copy()
        else:
            logger.debug(f"Imperfect matching at r={sd[idmin + step]:.6g}")
            biggest_unperfect = m.copy()
            idmin = idmin + step + 1
    return float(sd[idmin])


def bottleneck_distance_approx(graph: PersistenceGraph, e: float) -> float:
    """
    Approximate bottleneck distance, within e of the exact value.

    Parameters
    ----------
    graph : PersistenceGraph
        Point cloud of the two diagrams.
    e : float
        Positive tolerance.

    Returns
    -------
    float
        Midpoint of the final search interval.
    """
    b_lower_bound = 0.0
    b_upper_bound = graph.diameter_bound()
    alpha = max(graph.size(), 2) ** (1.0 / 5.0)
    m = GraphMatching(graph)
    biggest_unperfect = GraphMatching(graph)
    while b_upper_bound - b_lower_bound > 2 * e:
        step = b_lower_bound + (b_upper_bound - b_lower_bound) / alpha
        if step <= b_lower_bound or step >= b_upper_bound:
            # floating point precision exhausted
            break
        _saturate(m, step)
        if m.perfect():
            m = biggest_unperfect.copy()
            b_upper_bound = step
        else:
            biggest_unperfect = m.copy()
            b_lower_bound = step
        logger.debug(f"Search interval [{b_lower_bound:.6g}, {b_upper_bound:.6g}]")
    return (b_lower_bound + b_upper_bound) / 2.0


def bottleneck_distance(diagram1: Sequence, diagram2: Sequence, e: float = 0.0) -> float:
    """
    Bottleneck distance between two persistence diagrams.

    Parameters
    ----------
    diagram1, diagram2 : sequence of (birth, death)
        Finite persistence pairs.
    e : float, default=0.0
        Tolerance. 0 computes the exact distance; a positive value returns
        an approximation within e and ignores pairs of persistence <= e.

    Returns
    -------
    float
        Bottleneck distance.

    Examples
    --------
    >>> bottleneck_distance([(0.0, 2.0)], [(0.0, 2.5)])
    0.5
    >>> bottleneck_distance([(0.0, 2.0)], [])
    1.0
    """
    if e < 0:
        raise ValueError(f"Tolerance must be non-negative, got {e}")
    graph = PersistenceGraph(diagram1, diagram2, e)
    logger.debug(f"Persistence graph: {graph.u_size} + {graph.v_size} points")
    if e == 0:
        return bottleneck_distance_exact(graph)
    return bottleneck_distance_approx(graph, e)


def compare_persistence_files(
    path1: str,
    path2: str,
    config: Optional[BottleneckConfig] = None,
) -> float:
    """
    Bottleneck distance between the diagrams stored in two files.

    Parameters
    ----------
    path1, path2 : str
        Persistence interval files.
    config : BottleneckConfig, optional
        Dimension filter, infinite bar substitute and tolerance.
        Default: BottleneckConfig().

    Returns
    -------
    float
        Bottleneck distance.
    """
    if config is None:
        config = BottleneckConfig()
    diagrams = [
        read_persistence_intervals_in_one_dimension_from_file(
            path,
            dimension=config.dimension,
            what_to_substitute_for_infinite_bar=config.infinite_bar_substitute,
        )
        for path in (path1, path2)
    ]
    logger.info(f"Comparing {len(diagrams[0])} and {len(diagrams[1])} intervals (e={config.e})")
    return bottleneck_distance(diagrams[0], diagrams[1], config.e)
